from rentman.application.availability import AvailabilityChecker
from rentman.application.dtos.reservation_dto import Actor, ReservationChanges
from rentman.application.interfaces.clock import Clock
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase
from rentman.domain.entities.reservation import Reservation
from rentman.domain.services.pricing import PricingCalculator
from rentman.domain.value_objects.date_range import DateRange


class UpdateReservationUseCase(ReservationUseCase):
    """
    Edita una reserva PENDING o CONFIRMED.

    Si cambian las fechas se validan de nuevo y se revisa disponibilidad sin
    contar la propia reserva. El precio se recalcula siempre con la tarifa
    diaria congelada al crearla.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        vehicle_repo: VehicleRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        availability: AvailabilityChecker,
        pricing: PricingCalculator | None = None,
    ) -> None:
        super().__init__(reservation_repo, vehicle_repo, user_repo, transaction_manager, clock)
        self._availability = availability
        self._pricing = pricing or PricingCalculator()

    async def execute(
        self,
        reservation_id: int,
        changes: ReservationChanges,
        actor: Actor | None = None,
    ) -> Result[Reservation]:
        async def work() -> Reservation:
            reservation = await self._load(reservation_id)
            expected_version = reservation.lock_version
            reservation.ensure_can_update()

            new_start = changes.start_date or reservation.start_date
            new_end = changes.end_date or reservation.end_date
            dates_changed = (new_start, new_end) != (reservation.start_date, reservation.end_date)

            if dates_changed:
                dates = DateRange.for_booking(new_start, new_end, self._clock.today())
                await self._lock_vehicle(reservation.vehicle_id)
                await self._availability.ensure_available(
                    reservation.vehicle_id, dates, exclude_id=reservation.id
                )
            else:
                dates = reservation.date_range

            add_ons = changes.add_ons_over(reservation.add_ons)
            discount = (
                reservation.discount_amount
                if changes.discount_amount is None
                else changes.discount_amount
            )
            price = self._pricing.calculate(
                daily_rate=reservation.daily_rate,
                dates=dates,
                add_ons=add_ons,
                discount_amount=discount,
            )
            reservation.revise(
                now=self._clock.now(),
                dates=dates,
                add_ons=add_ons,
                price=price,
                changes=changes.fields,
            )

            await self._reservation_repo.save(reservation, expected_version)
            self._log_success("updated", reservation, actor)
            return reservation

        return await self._atomic("update", work, actor, reservation_id=reservation_id)
