from rentman.application.dtos.reservation_dto import Actor
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase
from rentman.domain.entities.reservation import Reservation, ReservationStatus
from rentman.domain.entities.vehicle import VehicleStatus


class CancelReservationUseCase(ReservationUseCase):
    """PENDING/CONFIRMED -> CANCELLED."""

    async def execute(
        self,
        reservation_id: int,
        reason: str | None = None,
        actor: Actor | None = None,
    ) -> Result[Reservation]:
        async def work() -> Reservation:
            reservation = await self._load(reservation_id)
            expected_version = reservation.lock_version

            reservation.cancel(now=self._clock.now(), reason=reason)

            vehicle = await self._vehicle_repo.get_for_update(reservation.vehicle_id)
            if vehicle is not None and vehicle.status == VehicleStatus.RENTED:
                # RENTED por esta reserva solo si ninguna otra del vehículo está en curso
                others = await self._reservation_repo.list_by_vehicle(reservation.vehicle_id)
                in_progress = [
                    r for r in others
                    if r.id != reservation.id and r.status == ReservationStatus.IN_PROGRESS
                ]
                if not in_progress:
                    await self._vehicle_repo.set_status(vehicle.id, VehicleStatus.AVAILABLE)

            await self._reservation_repo.save(reservation, expected_version)
            self._log_success("cancelled", reservation, actor)
            return reservation

        return await self._atomic("cancel", work, actor, reservation_id=reservation_id)
