from rentman.domain.entities.user import User


class UserRepo:
    """Colaborador de usuarios; el núcleo solo consulta el rol."""

    async def get(self, user_id: int) -> User | None:
        raise NotImplementedError

    async def add(self, user: User) -> User:
        raise NotImplementedError
