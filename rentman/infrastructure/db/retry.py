"""
Reintentos ante fallas transitorias de la base de datos.

Una transacción que muere por deadlock o por lock wait timeout de MySQL se
repite completa, con backoff exponencial.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL error codes
MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"


def is_deadlock_error(error: Exception) -> bool:
    """True si el error es un deadlock o lock wait timeout que vale la pena reintentar."""
    if isinstance(error, (OperationalError, DBAPIError)):
        error_str = str(error)
        return MYSQL_DEADLOCK_ERROR in error_str or MYSQL_LOCK_WAIT_TIMEOUT in error_str
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Ejecuta `func` y la repite si falla por deadlock.

    Espera base_delay * 2**intento entre intentos. Cualquier otro error se
    propaga de inmediato; al agotar los intentos se propaga el último deadlock.

    Example:
        async def unit():
            async with session.begin():
                ...

        result = await retry_on_deadlock(unit, max_attempts=3)
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e):
                raise

            if attempt == max_attempts - 1:
                logger.error(
                    "Database deadlock persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Unexpected state in retry_on_deadlock")


def with_deadlock_retry(max_attempts: int = 3, base_delay: float = 0.1):
    """Decorador equivalente a `retry_on_deadlock` para funciones async."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            async def execute():
                return await func(*args, **kwargs)

            return await retry_on_deadlock(execute, max_attempts, base_delay)

        return wrapper

    return decorator
