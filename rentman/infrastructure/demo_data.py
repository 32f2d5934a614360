"""
Usuarios y vehículos de demostración.

Los usa `scripts/seed_db.py` para la base SQL y el modo in-memory al arrancar
(`SEED_DEMO_DATA=true`), así la app responde sin preparar nada antes.
"""

from decimal import Decimal

from rentman.domain.entities.user import User, UserRole
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus
from rentman.infrastructure.in_memory.store import InMemoryStore

DEMO_COMPANY_ID = 1


def demo_users() -> list[User]:
    return [
        User(role=UserRole.ADMIN, first_name="Ana", last_name="Admin", email="admin@rentman.test", company_id=DEMO_COMPANY_ID),
        User(
            role=UserRole.EMPLOYEE,
            first_name="Ernesto",
            last_name="Mostrador",
            email="desk@rentman.test",
            company_id=DEMO_COMPANY_ID,
        ),
        User(role=UserRole.CUSTOMER, first_name="Carla", last_name="Cliente", email="carla@example.com"),
        User(role=UserRole.CUSTOMER, first_name="Diego", last_name="Cliente", email="diego@example.com"),
    ]


def demo_vehicles() -> list[Vehicle]:
    return [
        Vehicle(
            company_id=DEMO_COMPANY_ID,
            make="Nissan",
            model="Versa",
            license_plate="RTM-001",
            daily_rate=Decimal("50.00"),
            mileage=12000,
        ),
        Vehicle(
            company_id=DEMO_COMPANY_ID,
            make="Toyota",
            model="Corolla",
            license_plate="RTM-002",
            daily_rate=Decimal("65.00"),
            mileage=8000,
        ),
        Vehicle(
            company_id=DEMO_COMPANY_ID,
            make="Kia",
            model="Sportage",
            license_plate="RTM-003",
            daily_rate=Decimal("90.00"),
            mileage=3000,
        ),
        Vehicle(
            company_id=DEMO_COMPANY_ID,
            make="VW",
            model="Jetta",
            license_plate="RTM-004",
            daily_rate=Decimal("70.00"),
            mileage=45000,
            status=VehicleStatus.MAINTENANCE,
        ),
    ]


def seed_in_memory(store: InMemoryStore) -> None:
    """Carga los datos de demostración con ids consecutivos desde 1."""
    for user in demo_users():
        user.id = store.next_id("users")
        store.users[user.id] = user
    for vehicle in demo_vehicles():
        vehicle.id = store.next_id("vehicles")
        store.vehicles[vehicle.id] = vehicle
