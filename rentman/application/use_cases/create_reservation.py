from datetime import date

from rentman.application.availability import AvailabilityChecker
from rentman.application.dtos.reservation_dto import Actor, ReservationOptions
from rentman.application.interfaces.clock import Clock
from rentman.application.interfaces.number_generator import ReservationNumberGenerator
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.result import Result
from rentman.application.use_cases.base import ReservationUseCase
from rentman.domain.entities.reservation import Reservation
from rentman.domain.errors import (
    InvalidUserRoleError,
    UserNotFoundError,
    VehicleNotRentableError,
)
from rentman.domain.services.pricing import PricingCalculator
from rentman.domain.value_objects.date_range import DateRange


class CreateReservationUseCase(ReservationUseCase):
    """
    Crea una reservación PENDING.

    Valida cliente, vehículo, fechas y disponibilidad; congela la tarifa
    diaria del vehículo y calcula el precio. El vehículo sigue AVAILABLE hasta
    el pickup.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        vehicle_repo: VehicleRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        number_generator: ReservationNumberGenerator,
        availability: AvailabilityChecker,
        pricing: PricingCalculator | None = None,
    ) -> None:
        super().__init__(reservation_repo, vehicle_repo, user_repo, transaction_manager, clock)
        self._number_generator = number_generator
        self._availability = availability
        self._pricing = pricing or PricingCalculator()

    async def execute(
        self,
        customer_id: int,
        vehicle_id: int,
        start_date: date | None,
        end_date: date | None,
        options: ReservationOptions | None = None,
        actor: Actor | None = None,
    ) -> Result[Reservation]:
        options = options or ReservationOptions()

        async def work() -> Reservation:
            customer = await self._user_repo.get(customer_id)
            if customer is None:
                raise UserNotFoundError(customer_id, "Cliente")
            if not customer.is_customer:
                raise InvalidUserRoleError(customer_id, "CUSTOMER")

            vehicle = await self._lock_vehicle(vehicle_id)
            if not vehicle.is_available:
                raise VehicleNotRentableError(vehicle_id, vehicle.status.value)

            dates = DateRange.for_booking(start_date, end_date, self._clock.today())
            await self._availability.ensure_available(vehicle_id, dates)

            price = self._pricing.calculate(
                daily_rate=vehicle.daily_rate,
                dates=dates,
                add_ons=options.add_ons,
                discount_amount=options.discount_amount,
            )
            reservation = Reservation.new(
                reservation_number=self._number_generator.generate(),
                customer_id=customer_id,
                vehicle_id=vehicle_id,
                company_id=vehicle.company_id,
                dates=dates,
                add_ons=options.add_ons,
                price=price,
                now=self._clock.now(),
                deposit_amount=options.deposit_amount,
                pickup_location=options.pickup_location,
                return_location=options.return_location,
                pickup_time=options.pickup_time,
                return_time=options.return_time,
                special_requests=options.special_requests,
            )
            saved = await self._reservation_repo.add(reservation)
            self._log_success("created", saved, actor)
            return saved

        return await self._atomic(
            "create", work, actor, customer_id=customer_id, vehicle_id=vehicle_id
        )
