from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from rentman.config import get_settings
from rentman.infrastructure.db.engine import IN_MEMORY_SQLITE_URL, build_engine, build_sessionmaker

settings = get_settings()

# Sin DATABASE_URL se usa SQLite en memoria (solo dev/test)
DB_URL = settings.database_url or IN_MEMORY_SQLITE_URL

engine = build_engine(DB_URL, echo=settings.sql_echo)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
