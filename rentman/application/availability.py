from collections.abc import Sequence

from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.domain.entities.reservation import ACTIVE_STATUSES, ReservationStatus
from rentman.domain.errors import VehicleUnavailableError
from rentman.domain.value_objects.date_range import DateRange


class AvailabilityChecker:
    """
    Decide si un vehículo está libre para un rango de días.

    Cuentan como bloqueo las reservas CONFIRMED e IN_PROGRESS. Con
    `pending_soft_hold` también bloquean las PENDING al crear o reprogramar;
    confirmar e iniciar siempre revisan solo las activas.
    """

    def __init__(self, reservation_repo: ReservationRepo, pending_soft_hold: bool = False) -> None:
        self._reservation_repo = reservation_repo
        self._pending_soft_hold = pending_soft_hold

    def blocking_statuses(self, include_pending: bool | None = None) -> Sequence[ReservationStatus]:
        if include_pending is None:
            include_pending = self._pending_soft_hold
        if include_pending:
            return (ReservationStatus.PENDING, *ACTIVE_STATUSES)
        return ACTIVE_STATUSES

    async def is_available(
        self,
        vehicle_id: int,
        dates: DateRange,
        exclude_id: int | None = None,
        include_pending: bool | None = None,
    ) -> bool:
        conflicts = await self._reservation_repo.count_conflicting(
            vehicle_id=vehicle_id,
            dates=dates,
            statuses=self.blocking_statuses(include_pending),
            exclude_id=exclude_id,
        )
        return conflicts == 0

    async def ensure_available(
        self,
        vehicle_id: int,
        dates: DateRange,
        exclude_id: int | None = None,
        include_pending: bool | None = None,
    ) -> None:
        if not await self.is_available(vehicle_id, dates, exclude_id, include_pending):
            raise VehicleUnavailableError(vehicle_id, dates.start, dates.end)
