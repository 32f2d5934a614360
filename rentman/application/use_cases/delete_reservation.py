from rentman.application.dtos.reservation_dto import Actor
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase


class DeleteReservationUseCase(ReservationUseCase):
    """Borrado físico; solo reservas PENDING."""

    async def execute(self, reservation_id: int, actor: Actor | None = None) -> Result[int]:
        async def work() -> int:
            reservation = await self._load(reservation_id)
            reservation.ensure_can_delete()
            await self._reservation_repo.delete(reservation.id)
            self._log_success("deleted", reservation, actor)
            return reservation.id

        return await self._atomic("delete", work, actor, reservation_id=reservation_id)
