"""
Fixtures compartidas.

- Reloj fijo (FakeClock) el 2026-03-10 09:00 UTC y números de reservación
  predecibles (RES-TEST0001, RES-TEST0002, ...)
- Store in-memory sembrado con clientes, un empleado y tres vehículos
- Casos de uso armados igual que en la app (`build_use_cases`)
- TestClient con `get_use_cases` sobreescrito para usar el mismo store
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from rentman.api.dependencies import build_use_cases, get_use_cases
from rentman.application.dtos.reservation_dto import ReservationOptions
from rentman.application.interfaces.clock import FakeClock
from rentman.application.interfaces.number_generator import FakeReservationNumberGenerator
from rentman.domain.entities.user import User, UserRole
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus
from rentman.infrastructure.in_memory import (
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
    InMemoryUserRepo,
    InMemoryVehicleRepo,
)

FIXED_NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
COMPANY_ID = 10
OTHER_COMPANY_ID = 20


def seed_store(store: InMemoryStore) -> None:
    users = [
        User(id=1, role=UserRole.CUSTOMER, first_name="Carla", last_name="Cliente", email="carla@example.com"),
        User(id=2, role=UserRole.CUSTOMER, first_name="Diego", last_name="Cliente", email="diego@example.com"),
        User(
            id=3,
            role=UserRole.EMPLOYEE,
            first_name="Ernesto",
            last_name="Mostrador",
            email="desk@rentman.test",
            company_id=COMPANY_ID,
        ),
    ]
    vehicles = [
        Vehicle(
            id=1,
            company_id=COMPANY_ID,
            make="Nissan",
            model="Versa",
            license_plate="RTM-001",
            daily_rate=Decimal("50.00"),
            mileage=10000,
        ),
        Vehicle(
            id=2,
            company_id=COMPANY_ID,
            make="Toyota",
            model="Corolla",
            license_plate="RTM-002",
            daily_rate=Decimal("80.00"),
            mileage=5000,
        ),
        Vehicle(
            id=3,
            company_id=OTHER_COMPANY_ID,
            make="VW",
            model="Jetta",
            license_plate="RTM-003",
            daily_rate=Decimal("40.00"),
            mileage=45000,
            status=VehicleStatus.MAINTENANCE,
        ),
    ]
    for user in users:
        store.users[user.id] = user
    for vehicle in vehicles:
        store.vehicles[vehicle.id] = vehicle
    store.sequences.update({"users": len(users), "vehicles": len(vehicles)})


# ============================================================================
# FIXTURES DE DOMINIO / APLICACIÓN
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def today(clock) -> date:
    return clock.today()


@pytest.fixture
def number_generator() -> FakeReservationNumberGenerator:
    return FakeReservationNumberGenerator()


@pytest.fixture
def store() -> InMemoryStore:
    store = InMemoryStore()
    seed_store(store)
    return store


@pytest.fixture
def customer(store) -> User:
    return store.users[1]


@pytest.fixture
def other_customer(store) -> User:
    return store.users[2]


@pytest.fixture
def employee(store) -> User:
    return store.users[3]


@pytest.fixture
def vehicle(store) -> Vehicle:
    """Vehículo disponible con tarifa de 50.00 por día."""
    return store.vehicles[1]


@pytest.fixture
def maintenance_vehicle(store) -> Vehicle:
    return store.vehicles[3]


@pytest.fixture
def repos(store) -> dict:
    return {
        "reservation_repo": InMemoryReservationRepo(store),
        "vehicle_repo": InMemoryVehicleRepo(store),
        "user_repo": InMemoryUserRepo(store),
        "tx_manager": InMemoryTransactionManager(store),
    }


def _use_cases(repos, clock, number_generator, pending_soft_hold=False) -> dict:
    return build_use_cases(
        reservation_repo=repos["reservation_repo"],
        vehicle_repo=repos["vehicle_repo"],
        user_repo=repos["user_repo"],
        tx_manager=repos["tx_manager"],
        clock=clock,
        number_generator=number_generator,
        pending_soft_hold=pending_soft_hold,
    )


@pytest.fixture
def use_cases(repos, clock, number_generator) -> dict:
    return _use_cases(repos, clock, number_generator)


@pytest.fixture
def soft_hold_use_cases(repos, clock, number_generator) -> dict:
    return _use_cases(repos, clock, number_generator, pending_soft_hold=True)


@pytest.fixture
def book(use_cases, customer, vehicle, today):
    """
    Crea una reserva PENDING a `offset` días de hoy por `days` días.

    Falla el test si la creación no es Ok.
    """

    async def _book(offset=2, days=3, vehicle_id=None, customer_id=None, **options):
        result = await use_cases["create_reservation"].execute(
            customer_id=customer_id or customer.id,
            vehicle_id=vehicle_id or vehicle.id,
            start_date=today + timedelta(days=offset),
            end_date=today + timedelta(days=offset + days),
            options=ReservationOptions(**options),
        )
        assert result.is_ok, f"create falló: {getattr(result, 'message', result)}"
        return result.value

    return _book


@pytest.fixture
def book_confirmed(book, use_cases, employee):
    async def _book_confirmed(**kwargs):
        reservation = await book(**kwargs)
        result = await use_cases["confirm_reservation"].execute(reservation.id, employee_id=employee.id)
        assert result.is_ok, f"confirm falló: {getattr(result, 'message', result)}"
        return result.value

    return _book_confirmed


@pytest.fixture
def book_started(book_confirmed, use_cases, employee, vehicle):
    async def _book_started(**kwargs):
        reservation = await book_confirmed(**kwargs)
        result = await use_cases["start_reservation"].execute(
            reservation.id,
            pickup_mileage=vehicle.mileage,
            fuel_level="FULL",
            employee_id=employee.id,
        )
        assert result.is_ok, f"start falló: {getattr(result, 'message', result)}"
        return result.value

    return _book_started


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================


@pytest.fixture
def client(use_cases) -> Generator[TestClient, None, None]:
    """TestClient cuyo `get_use_cases` apunta al store sembrado y al reloj fijo."""
    from rentman.main import app

    app.dependency_overrides[get_use_cases] = lambda: use_cases

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
