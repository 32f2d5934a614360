from datetime import date

from rentman.application.availability import AvailabilityChecker
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.result import Err, Ok, Result
from rentman.domain.errors import DomainError, InvalidDateRangeError, VehicleNotFoundError
from rentman.domain.value_objects.date_range import DateRange


class CheckAvailabilityUseCase:
    """Consulta pura: ¿el vehículo está libre entre start_date y end_date (inclusive)?"""

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        transaction_manager: TransactionManager,
        availability: AvailabilityChecker,
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._transaction_manager = transaction_manager
        self._availability = availability

    async def execute(
        self, vehicle_id: int, start_date: date | None, end_date: date | None
    ) -> Result[bool]:
        try:
            if start_date is None or end_date is None:
                raise InvalidDateRangeError("La fecha de inicio y la de fin son obligatorias")
            if end_date < start_date:
                raise InvalidDateRangeError("La fecha de fin debe ser posterior a la de inicio")

            async with self._transaction_manager.start():
                if await self._vehicle_repo.get(vehicle_id) is None:
                    raise VehicleNotFoundError(vehicle_id)
                available = await self._availability.is_available(
                    vehicle_id, DateRange(start=start_date, end=end_date)
                )
        except DomainError as exc:
            return Err(exc)
        return Ok(available)
