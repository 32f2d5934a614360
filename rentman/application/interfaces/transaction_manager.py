from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Protocol, TypeVar

T = TypeVar("T")


class TransactionManager(Protocol):
    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield

    async def run(self, work: Callable[[], Awaitable[T]]) -> T:
        """Ejecuta `work` como una unidad atómica (commit completo o nada)."""
        ...
