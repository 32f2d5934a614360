from decimal import Decimal

from rentman.application.dtos.reservation_dto import Actor
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase
from rentman.domain.entities.reservation import Reservation
from rentman.domain.entities.vehicle import VehicleStatus


class CompleteReservationUseCase(ReservationUseCase):
    """
    Devolución: IN_PROGRESS -> COMPLETED.

    El vehículo vuelve a AVAILABLE y su kilometraje se actualiza con el de
    devolución; los cargos extra se suman al total.
    """

    async def execute(
        self,
        reservation_id: int,
        return_mileage: int,
        fuel_level: str | None,
        condition: str | None = None,
        additional_fees: Decimal | None = None,
        notes: str | None = None,
        employee_id: int | None = None,
        actor: Actor | None = None,
    ) -> Result[Reservation]:
        async def work() -> Reservation:
            reservation = await self._load(reservation_id)
            expected_version = reservation.lock_version

            reservation.complete(
                now=self._clock.now(),
                today=self._clock.today(),
                return_mileage=return_mileage,
                fuel_level=fuel_level,
                condition=condition,
                extra_fees=additional_fees,
                notes=notes,
                employee_id=employee_id,
            )
            await self._require_staff(employee_id)

            vehicle = await self._lock_vehicle(reservation.vehicle_id)
            await self._reservation_repo.save(reservation, expected_version)
            await self._vehicle_repo.set_status(vehicle.id, VehicleStatus.AVAILABLE)
            await self._vehicle_repo.set_mileage(vehicle.id, return_mileage)
            self._log_success("completed", reservation, actor)
            return reservation

        return await self._atomic("complete", work, actor, reservation_id=reservation_id)
