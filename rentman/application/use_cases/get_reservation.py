from collections.abc import Sequence

from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.result import Err, Ok, Result
from rentman.domain.entities.reservation import Reservation, ReservationStatus
from rentman.domain.errors import ReservationNotFoundError


class GetReservationUseCase:
    """Lecturas simples por id, número y listados por cliente/vehículo/estado/compañía."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager

    async def by_id(self, reservation_id: int) -> Result[Reservation]:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
        if reservation is None:
            return Err(ReservationNotFoundError(reservation_id))
        return Ok(reservation)

    async def by_number(self, reservation_number: str) -> Result[Reservation]:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_by_number(reservation_number)
        if reservation is None:
            return Err(ReservationNotFoundError(reservation_number))
        return Ok(reservation)

    async def all(self) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.list_all())

    async def by_customer(self, customer_id: int) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.list_by_customer(customer_id))

    async def by_vehicle(self, vehicle_id: int) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.list_by_vehicle(vehicle_id))

    async def by_status(
        self, status: ReservationStatus, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.list_by_status(status, company_id))

    async def by_company(self, company_id: int) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.list_by_company(company_id))
