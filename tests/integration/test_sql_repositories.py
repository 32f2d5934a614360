"""
Integration tests de la capa SQL (SQLAlchemy async + aiosqlite en memoria).

Verifica que:
- Los casos de uso corren igual sobre los repositorios SQL que sobre los in-memory
- El optimistic locking detecta escrituras con versión vieja
- El número de reservación es único a nivel tabla
- Fechas, montos y timestamps sobreviven el viaje a la base sin perder precisión ni zona
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rentman.api.dependencies import build_use_cases
from rentman.application.dtos.reservation_dto import ReservationChanges
from rentman.application.interfaces.clock import FakeClock
from rentman.application.interfaces.number_generator import FakeReservationNumberGenerator
from rentman.domain.entities.reservation import ReservationStatus
from rentman.domain.entities.user import User, UserRole
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus
from rentman.domain.errors import ErrorKind, OptimisticLockError
from rentman.infrastructure.db.engine import (
    IN_MEMORY_SQLITE_URL,
    build_engine,
    build_sessionmaker,
    create_tables,
)
from rentman.infrastructure.db.repositories import ReservationRepoSQL, UserRepoSQL, VehicleRepoSQL
from rentman.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

FIXED_NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def session():
    engine = build_engine(IN_MEMORY_SQLITE_URL)
    await create_tables(engine)
    session_maker = build_sessionmaker(engine)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def sql(session):
    """Repos SQL sobre una sola sesión, sembrados con dos clientes, un empleado y dos vehículos."""
    repos = {
        "reservation_repo": ReservationRepoSQL(session),
        "vehicle_repo": VehicleRepoSQL(session),
        "user_repo": UserRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session, retry_base_delay=0),
    }
    async with session.begin():
        for user in (
            User(role=UserRole.CUSTOMER, first_name="Carla", last_name="Cliente", email="carla@example.com"),
            User(role=UserRole.CUSTOMER, first_name="Diego", last_name="Cliente", email="diego@example.com"),
            User(role=UserRole.EMPLOYEE, first_name="Ernesto", last_name="Mostrador", email="desk@rentman.test", company_id=10),
        ):
            await repos["user_repo"].add(user)
        for vehicle in (
            Vehicle(company_id=10, make="Nissan", model="Versa", license_plate="SQL-001",
                    daily_rate=Decimal("50.00"), mileage=10000),
            Vehicle(company_id=20, make="Toyota", model="Corolla", license_plate="SQL-002",
                    daily_rate=Decimal("80.00"), mileage=5000),
        ):
            await repos["vehicle_repo"].add(vehicle)
    return repos


@pytest.fixture
def numbers():
    return FakeReservationNumberGenerator(prefix="SQL")


@pytest.fixture
def sql_use_cases(sql, numbers):
    return build_use_cases(
        reservation_repo=sql["reservation_repo"],
        vehicle_repo=sql["vehicle_repo"],
        user_repo=sql["user_repo"],
        tx_manager=sql["tx_manager"],
        clock=FakeClock(FIXED_NOW),
        number_generator=numbers,
    )


async def _create(use_cases, vehicle_id=1, offset=2, days=3, customer_id=1):
    today = FIXED_NOW.date()
    return await use_cases["create_reservation"].execute(
        customer_id=customer_id,
        vehicle_id=vehicle_id,
        start_date=today + timedelta(days=offset),
        end_date=today + timedelta(days=offset + days),
    )


async def _vehicle(sql, vehicle_id=1) -> Vehicle:
    async with sql["tx_manager"].start():
        return await sql["vehicle_repo"].get(vehicle_id)


class TestSQLLifecycle:
    async def test_full_lifecycle(self, sql, sql_use_cases):
        created = await _create(sql_use_cases)
        assert created.is_ok
        reservation_id = created.value.id

        confirmed = await sql_use_cases["confirm_reservation"].execute(reservation_id, employee_id=3)
        assert confirmed.is_ok

        started = await sql_use_cases["start_reservation"].execute(
            reservation_id, pickup_mileage=10000, fuel_level="FULL", employee_id=3
        )
        assert started.is_ok
        assert (await _vehicle(sql)).status == VehicleStatus.RENTED

        completed = await sql_use_cases["complete_reservation"].execute(
            reservation_id, return_mileage=10350, fuel_level="HALF", additional_fees=Decimal("25")
        )
        assert completed.is_ok

        stored = (await sql_use_cases["get_reservation"].by_id(reservation_id)).value
        assert stored.status == ReservationStatus.COMPLETED
        assert stored.total_amount == Decimal("187.75")
        assert stored.additional_fees == Decimal("25.00")
        assert stored.completed_at == FIXED_NOW
        assert stored.confirmed_at == FIXED_NOW
        assert stored.handled_by_employee_id == 3
        assert stored.lock_version == 3

        vehicle = await _vehicle(sql)
        assert vehicle.status == VehicleStatus.AVAILABLE
        assert vehicle.mileage == 10350

    async def test_stored_values_roundtrip(self, sql_use_cases):
        created = (await _create(sql_use_cases)).value

        stored = (await sql_use_cases["get_reservation"].by_number(created.reservation_number)).value

        assert stored.reservation_number == "RES-SQL0001"
        assert stored.start_date == created.start_date
        assert stored.end_date == created.end_date
        assert stored.daily_rate == Decimal("50.00")
        assert stored.total_amount == Decimal("162.75")
        assert stored.created_at == FIXED_NOW
        assert stored.company_id == 10

    async def test_failed_transition_rolls_back(self, sql, sql_use_cases):
        reservation_id = (await _create(sql_use_cases)).value.id
        await sql_use_cases["confirm_reservation"].execute(reservation_id)

        result = await sql_use_cases["start_reservation"].execute(
            reservation_id, pickup_mileage=10000, fuel_level="FULL", employee_id=1
        )

        assert result.code == "INVALID_USER_ROLE"
        stored = (await sql_use_cases["get_reservation"].by_id(reservation_id)).value
        assert stored.status == ReservationStatus.CONFIRMED
        assert (await _vehicle(sql)).status == VehicleStatus.AVAILABLE


class TestSQLConstraints:
    async def test_overlap_with_confirmed(self, sql_use_cases):
        first = (await _create(sql_use_cases, offset=2, days=3)).value
        await sql_use_cases["confirm_reservation"].execute(first.id)

        result = await _create(sql_use_cases, offset=5, days=2, customer_id=2)

        assert result.kind == ErrorKind.CONFLICT
        assert result.code == "VEHICLE_UNAVAILABLE"

    async def test_availability_check(self, sql_use_cases):
        first = (await _create(sql_use_cases, offset=2, days=3)).value
        check = sql_use_cases["check_availability"]

        assert (await check.execute(1, first.start_date, first.end_date)).value is True
        await sql_use_cases["confirm_reservation"].execute(first.id)
        assert (await check.execute(1, first.start_date, first.end_date)).value is False
        assert (await check.execute(2, first.start_date, first.end_date)).value is True

    async def test_stale_write_is_rejected(self, sql, sql_use_cases):
        reservation_id = (await _create(sql_use_cases)).value.id
        async with sql["tx_manager"].start():
            stale = await sql["reservation_repo"].get(reservation_id)

        await sql_use_cases["confirm_reservation"].execute(reservation_id)
        stale.notes = "edición vieja"

        with pytest.raises(OptimisticLockError):
            async with sql["tx_manager"].start():
                await sql["reservation_repo"].save(stale, stale.lock_version)

        stored = (await sql_use_cases["get_reservation"].by_id(reservation_id)).value
        assert stored.notes is None
        assert stored.status == ReservationStatus.CONFIRMED

    async def test_duplicate_number(self, sql_use_cases, numbers):
        await _create(sql_use_cases)
        numbers.set_next_number("RES-SQL0001")

        result = await _create(sql_use_cases, offset=10, days=1)

        assert result.code == "RESERVATION_ALREADY_EXISTS"
        assert len((await sql_use_cases["get_reservation"].all()).value) == 1

    async def test_delete_pending(self, sql_use_cases):
        reservation_id = (await _create(sql_use_cases)).value.id

        assert (await sql_use_cases["delete_reservation"].execute(reservation_id)).is_ok
        assert (await sql_use_cases["get_reservation"].by_id(reservation_id)).kind == ErrorKind.NOT_FOUND


class TestSQLQueries:
    async def test_update_reprices(self, sql_use_cases):
        created = (await _create(sql_use_cases, offset=2, days=3)).value

        result = await sql_use_cases["update_reservation"].execute(
            created.id, ReservationChanges(end_date=created.end_date + timedelta(days=2), fields={"notes": "extensión"})
        )

        assert result.is_ok
        stored = (await sql_use_cases["get_reservation"].by_id(created.id)).value
        assert stored.total_amount == Decimal("271.25")
        assert stored.notes == "extensión"

    async def test_reports(self, sql_use_cases):
        queries = sql_use_cases["queries"]
        today = FIXED_NOW.date()

        pickup = (await _create(sql_use_cases, offset=0, days=2)).value
        await sql_use_cases["confirm_reservation"].execute(pickup.id)
        upcoming = (await _create(sql_use_cases, vehicle_id=2, offset=4, days=1)).value
        await sql_use_cases["confirm_reservation"].execute(upcoming.id)

        assert [r.id for r in (await queries.pending_pickup()).value] == [pickup.id]
        assert [r.id for r in (await queries.current_active()).value] == [pickup.id]
        assert [r.id for r in (await queries.upcoming()).value] == [pickup.id, upcoming.id]
        assert [r.id for r in (await queries.upcoming(company_id=20)).value] == [upcoming.id]

        await sql_use_cases["start_reservation"].execute(pickup.id, pickup_mileage=10000, fuel_level="FULL")
        overdue = (await queries.overdue(today=today + timedelta(days=3))).value
        assert [r.id for r in overdue] == [pickup.id]
        returns = (await queries.pending_return(today=today + timedelta(days=2))).value
        assert [r.id for r in returns] == [pickup.id]

    async def test_revenue_and_statistics(self, sql_use_cases):
        queries = sql_use_cases["queries"]
        created = (await _create(sql_use_cases)).value
        await sql_use_cases["confirm_reservation"].execute(created.id)
        await sql_use_cases["start_reservation"].execute(created.id, pickup_mileage=10000, fuel_level="FULL")
        await sql_use_cases["complete_reservation"].execute(created.id, return_mileage=10100, fuel_level="FULL")
        other = (await _create(sql_use_cases, vehicle_id=2)).value
        await sql_use_cases["cancel_reservation"].execute(other.id)

        assert (await queries.revenue(FIXED_NOW, FIXED_NOW)).value == Decimal("162.75")
        assert (await queries.monthly_revenue(2026, 3)).value == Decimal("162.75")
        assert (await queries.monthly_revenue(2026, 3, company_id=20)).value == Decimal("0.00")

        stats = (await queries.statistics()).value
        assert stats.total_reservations == 2
        assert stats.by_status == {"COMPLETED": 1, "CANCELLED": 1}
        assert stats.monthly_revenue == Decimal("162.75")
