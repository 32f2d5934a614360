from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentman.application.interfaces.user_repo import UserRepo
from rentman.domain.entities.user import User, UserRole
from rentman.infrastructure.db.tables import users


class UserRepoSQL(UserRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> User | None:
        result = await self._session.execute(select(users).where(users.c.id == user_id))
        row = result.mappings().first()
        if not row:
            return None
        return User(
            id=row["id"],
            role=UserRole(row["role"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            company_id=row["company_id"],
        )

    async def add(self, user: User) -> User:
        stmt = insert(users).values(
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            company_id=user.company_id,
        )
        result = await self._session.execute(stmt)
        user.id = result.inserted_primary_key[0]
        return user
