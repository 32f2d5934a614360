from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rentman.infrastructure.db.tables import metadata

IN_MEMORY_SQLITE_URL = "sqlite+aiosqlite:///:memory:"

# Con REPEATABLE READ (default de InnoDB) el conteo de traslapes leería el
# snapshot tomado antes de obtener el FOR UPDATE del vehículo.
MYSQL_ISOLATION_LEVEL = "READ COMMITTED"


def engine_options(database_url: str, echo: bool = False) -> dict:
    """Argumentos de create_async_engine según el backend de la URL."""
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # Una sola conexión compartida, si no cada sesión ve una base vacía
        return {"echo": echo, "poolclass": StaticPool}
    if database_url.startswith("sqlite"):
        return {"echo": echo}
    options = {"echo": echo, "pool_pre_ping": True, "pool_recycle": 3600}
    if database_url.startswith("mysql"):
        options["isolation_level"] = MYSQL_ISOLATION_LEVEL
    return options


def build_engine(database_url: str | None, echo: bool = False) -> AsyncEngine:
    if not database_url:
        raise RuntimeError("DATABASE_URL is required for SQL mode")
    return create_async_engine(database_url, **engine_options(database_url, echo))


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


@asynccontextmanager
async def session_scope(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        async with session.begin():
            yield session
