from rentman.application.availability import AvailabilityChecker
from rentman.application.dtos.reservation_dto import Actor
from rentman.application.interfaces.clock import Clock
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase
from rentman.domain.entities.reservation import Reservation


class ConfirmReservationUseCase(ReservationUseCase):
    """
    PENDING -> CONFIRMED.

    Las reservas PENDING no bloquean disponibilidad, así que al confirmar se
    revisa de nuevo el traslape contra las activas del mismo vehículo.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        vehicle_repo: VehicleRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        availability: AvailabilityChecker,
    ) -> None:
        super().__init__(reservation_repo, vehicle_repo, user_repo, transaction_manager, clock)
        self._availability = availability

    async def execute(
        self,
        reservation_id: int,
        employee_id: int | None = None,
        actor: Actor | None = None,
    ) -> Result[Reservation]:
        async def work() -> Reservation:
            reservation = await self._load(reservation_id)
            expected_version = reservation.lock_version

            reservation.confirm(now=self._clock.now(), employee_id=employee_id)
            await self._require_staff(employee_id)

            await self._lock_vehicle(reservation.vehicle_id)
            await self._availability.ensure_available(
                reservation.vehicle_id,
                reservation.date_range,
                exclude_id=reservation.id,
                include_pending=False,
            )

            await self._reservation_repo.save(reservation, expected_version)
            self._log_success("confirmed", reservation, actor)
            return reservation

        return await self._atomic("confirm", work, actor, reservation_id=reservation_id)
