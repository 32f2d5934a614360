import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import TypeVar

from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.infrastructure.in_memory.store import InMemoryStore

T = TypeVar("T")

_in_transaction: ContextVar[bool] = ContextVar("in_memory_transaction", default=False)


class InMemoryTransactionManager(TransactionManager):
    """
    Transacciones para el modo in-memory.

    Un único lock serializa las unidades de trabajo; al entrar se toma una
    copia del store y, si la unidad falla, se restaura completa.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if _in_transaction.get():
            yield
            return

        async with self._lock:
            snapshot = self._store.snapshot()
            token = _in_transaction.set(True)
            try:
                yield
            except BaseException:
                self._store.restore(snapshot)
                raise
            finally:
                _in_transaction.reset(token)

    async def run(self, work: Callable[[], Awaitable[T]]) -> T:
        async with self.start():
            return await work()
