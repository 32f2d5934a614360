"""
Tests de CreateReservationUseCase.

- Tarifación al crear (con y sin seguro)
- Validación de cliente, vehículo y fechas
- Exclusión de traslapes: solo bloquean CONFIRMED/IN_PROGRESS, salvo soft hold
- Colisión de número de reservación
"""

from datetime import timedelta
from decimal import Decimal

from rentman.application.dtos.reservation_dto import ReservationOptions
from rentman.domain.entities.reservation import ReservationStatus
from rentman.domain.errors import ErrorKind


class TestCreatePricing:
    async def test_basic_reservation(self, book, store, customer, vehicle):
        """Tarifa 50, 3 días, sin extras: total 162.75 y estado PENDING."""
        reservation = await book(offset=2, days=3)

        assert reservation.id is not None
        assert reservation.reservation_number == "RES-TEST0001"
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.customer_id == customer.id
        assert reservation.vehicle_id == vehicle.id
        assert reservation.company_id == vehicle.company_id
        assert reservation.daily_rate == Decimal("50.00")
        assert reservation.total_days == 3
        assert reservation.subtotal == Decimal("150.00")
        assert reservation.tax_amount == Decimal("12.75")
        assert reservation.total_amount == Decimal("162.75")
        assert reservation.id in store.reservations

    async def test_insurance_add_on(self, book):
        reservation = await book(offset=2, days=3, insurance_included=True)

        assert reservation.insurance_amount == Decimal("45.00")
        assert reservation.tax_amount == Decimal("16.58")
        assert reservation.total_amount == Decimal("211.58")

    async def test_options_are_stored(self, book):
        reservation = await book(
            pickup_location="Aeropuerto",
            special_requests="Silla para bebé",
            deposit_amount=Decimal("100"),
        )

        assert reservation.pickup_location == "Aeropuerto"
        assert reservation.special_requests == "Silla para bebé"
        assert reservation.deposit_amount == Decimal("100.00")

    async def test_creation_does_not_touch_vehicle(self, book, store, vehicle):
        await book()

        assert store.vehicles[vehicle.id].status.value == "AVAILABLE"
        assert store.vehicles[vehicle.id].mileage == 10000


class TestCreateValidation:
    async def _create(self, use_cases, today, customer_id, vehicle_id, offset=2, days=3):
        return await use_cases["create_reservation"].execute(
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            start_date=today + timedelta(days=offset),
            end_date=today + timedelta(days=offset + days),
        )

    async def test_unknown_customer(self, use_cases, today, vehicle):
        result = await self._create(use_cases, today, 999, vehicle.id)

        assert not result.is_ok
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.code == "USER_NOT_FOUND"

    async def test_employee_cannot_be_customer(self, use_cases, today, employee, vehicle):
        result = await self._create(use_cases, today, employee.id, vehicle.id)

        assert result.kind == ErrorKind.VALIDATION
        assert result.code == "INVALID_USER_ROLE"

    async def test_unknown_vehicle(self, use_cases, today, customer):
        result = await self._create(use_cases, today, customer.id, 999)

        assert result.kind == ErrorKind.NOT_FOUND
        assert result.code == "VEHICLE_NOT_FOUND"

    async def test_vehicle_in_maintenance(self, use_cases, today, customer, maintenance_vehicle):
        result = await self._create(use_cases, today, customer.id, maintenance_vehicle.id)

        assert result.kind == ErrorKind.CONFLICT
        assert result.code == "VEHICLE_NOT_RENTABLE"

    async def test_start_in_the_past(self, use_cases, today, customer, vehicle, store):
        result = await self._create(use_cases, today, customer.id, vehicle.id, offset=-1)

        assert result.kind == ErrorKind.VALIDATION
        assert result.code == "INVALID_DATE_RANGE"
        assert store.reservations == {}

    async def test_same_day_range_is_rejected(self, use_cases, today, customer, vehicle):
        result = await self._create(use_cases, today, customer.id, vehicle.id, offset=2, days=0)

        assert result.code == "INVALID_DATE_RANGE"

    async def test_missing_dates(self, use_cases, customer, vehicle):
        result = await use_cases["create_reservation"].execute(
            customer_id=customer.id, vehicle_id=vehicle.id, start_date=None, end_date=None
        )

        assert result.code == "INVALID_DATE_RANGE"

    async def test_discount_larger_than_total(self, use_cases, today, customer, vehicle, store):
        result = await use_cases["create_reservation"].execute(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            start_date=today + timedelta(days=2),
            end_date=today + timedelta(days=5),
            options=ReservationOptions(discount_amount=Decimal("500")),
        )

        assert result.kind == ErrorKind.VALIDATION
        assert result.code == "INVALID_DISCOUNT"
        assert store.reservations == {}

    async def test_negative_discount(self, use_cases, today, customer, vehicle, store):
        result = await use_cases["create_reservation"].execute(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            start_date=today + timedelta(days=2),
            end_date=today + timedelta(days=5),
            options=ReservationOptions(discount_amount=Decimal("-40")),
        )

        assert result.code == "INVALID_DISCOUNT"
        assert store.reservations == {}


class TestCreateOverlap:
    async def test_overlap_with_confirmed_is_rejected(self, book_confirmed, use_cases, customer, vehicle, today):
        await book_confirmed(offset=2, days=3)

        result = await use_cases["create_reservation"].execute(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            start_date=today + timedelta(days=3),
            end_date=today + timedelta(days=4),
        )

        assert result.kind == ErrorKind.CONFLICT
        assert result.code == "VEHICLE_UNAVAILABLE"

    async def test_touching_last_day_is_a_conflict(self, book_confirmed, use_cases, other_customer, vehicle, today):
        """Los días son inclusivos: empezar el mismo día que termina otra reserva choca."""
        confirmed = await book_confirmed(offset=2, days=3)

        result = await use_cases["create_reservation"].execute(
            customer_id=other_customer.id,
            vehicle_id=vehicle.id,
            start_date=confirmed.end_date,
            end_date=confirmed.end_date + timedelta(days=2),
        )

        assert result.code == "VEHICLE_UNAVAILABLE"

    async def test_day_after_is_free(self, book_confirmed, book):
        confirmed = await book_confirmed(offset=2, days=3)

        reservation = await book(offset=6, days=2)

        assert reservation.start_date == confirmed.end_date + timedelta(days=1)

    async def test_pending_does_not_block_by_default(self, book):
        first = await book(offset=2, days=3)
        second = await book(offset=3, days=3)

        assert first.status == second.status == ReservationStatus.PENDING

    async def test_pending_blocks_with_soft_hold(self, book, soft_hold_use_cases, customer, vehicle, today):
        await book(offset=2, days=3)

        result = await soft_hold_use_cases["create_reservation"].execute(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            start_date=today + timedelta(days=3),
            end_date=today + timedelta(days=5),
        )

        assert result.code == "VEHICLE_UNAVAILABLE"

    async def test_cancelled_does_not_block(self, book_confirmed, use_cases, book):
        confirmed = await book_confirmed(offset=2, days=3)
        await use_cases["cancel_reservation"].execute(confirmed.id)

        reservation = await book(offset=2, days=3)

        assert reservation.status == ReservationStatus.PENDING

    async def test_other_vehicle_is_independent(self, book_confirmed, book):
        await book_confirmed(offset=2, days=3)

        reservation = await book(offset=2, days=3, vehicle_id=2)

        assert reservation.daily_rate == Decimal("80.00")
        assert reservation.total_amount == Decimal("260.40")


class TestReservationNumber:
    async def test_numbers_are_sequential_in_tests(self, book):
        first = await book(offset=2, days=1)
        second = await book(offset=5, days=1)

        assert first.reservation_number == "RES-TEST0001"
        assert second.reservation_number == "RES-TEST0002"

    async def test_duplicate_number_is_a_conflict(self, book, use_cases, number_generator, customer, vehicle, today, store):
        await book()
        number_generator.set_next_number("RES-TEST0001")

        result = await use_cases["create_reservation"].execute(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            start_date=today + timedelta(days=10),
            end_date=today + timedelta(days=12),
            options=ReservationOptions(),
        )

        assert result.kind == ErrorKind.CONFLICT
        assert result.code == "RESERVATION_ALREADY_EXISTS"
        assert len(store.reservations) == 1
