import copy

from rentman.application.interfaces.user_repo import UserRepo
from rentman.domain.entities.user import User


class InMemoryUserRepo(UserRepo):
    def __init__(self, store) -> None:
        self._store = store

    async def get(self, user_id: int) -> User | None:
        user = self._store.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def add(self, user: User) -> User:
        if user.id is None:
            user.id = self._store.next_id("users")
        self._store.users[user.id] = copy.deepcopy(user)
        return user
