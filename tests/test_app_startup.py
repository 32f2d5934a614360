"""
Arranque de la app.

- El lifespan solo crea tablas en modo SQL
- En modo in-memory el store arranca con usuarios y vehículos de demostración,
  así que la API responde sin sembrar nada antes
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from rentman import main
from rentman.api.dependencies import _in_memory_bundle, build_in_memory_bundle, build_use_cases
from rentman.application.interfaces.clock import FakeClock
from rentman.application.interfaces.number_generator import FakeReservationNumberGenerator
from rentman.config import Settings, get_settings
from rentman.domain.entities.user import UserRole
from rentman.domain.entities.vehicle import VehicleStatus


class TestLifespan:
    def test_in_memory_mode_skips_table_creation(self, monkeypatch):
        monkeypatch.setattr(main, "settings", Settings(use_in_memory=True))

        with patch("rentman.main.create_tables", new_callable=AsyncMock) as create_tables:
            with TestClient(main.app):
                pass

        create_tables.assert_not_awaited()

    def test_sql_mode_creates_tables(self, monkeypatch):
        monkeypatch.setattr(main, "settings", Settings(use_in_memory=False))

        with patch("rentman.main.create_tables", new_callable=AsyncMock) as create_tables:
            with TestClient(main.app):
                pass

        create_tables.assert_awaited_once()


class TestInMemoryDemoData:
    def test_bundle_without_seed_is_empty(self):
        bundle = build_in_memory_bundle()

        assert bundle["store"].users == {}
        assert bundle["store"].vehicles == {}

    def test_seeded_bundle(self):
        store = build_in_memory_bundle(seed_demo=True)["store"]

        assert sorted(store.users) == [1, 2, 3, 4]
        assert [u.role for u in store.users.values()] == [
            UserRole.ADMIN,
            UserRole.EMPLOYEE,
            UserRole.CUSTOMER,
            UserRole.CUSTOMER,
        ]
        assert store.vehicles[1].daily_rate == Decimal("50.00")
        assert store.vehicles[4].status == VehicleStatus.MAINTENANCE
        assert store.sequences == {"users": 4, "vehicles": 4}

    def test_seeded_bundles_do_not_share_entities(self):
        first = build_in_memory_bundle(seed_demo=True)["store"]
        second = build_in_memory_bundle(seed_demo=True)["store"]

        first.vehicles[1].mileage = 99999

        assert second.vehicles[1].mileage == 12000

    async def test_demo_customer_can_book_demo_vehicle(self):
        bundle = build_in_memory_bundle(seed_demo=True)
        clock = FakeClock(datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc))
        use_cases = build_use_cases(
            reservation_repo=bundle["reservation_repo"],
            vehicle_repo=bundle["vehicle_repo"],
            user_repo=bundle["user_repo"],
            tx_manager=bundle["tx_manager"],
            clock=clock,
            number_generator=FakeReservationNumberGenerator(),
        )

        result = await use_cases["create_reservation"].execute(
            customer_id=3,
            vehicle_id=1,
            start_date=date(2026, 3, 12),
            end_date=date(2026, 3, 15),
        )

        assert result.is_ok
        assert result.value.total_amount == Decimal("162.75")


class TestDefaultInMemoryApp:
    @pytest.fixture
    def default_client(self):
        _in_memory_bundle.cache_clear()
        main.app.dependency_overrides[get_settings] = lambda: Settings(use_in_memory=True, seed_demo_data=True)

        with TestClient(main.app) as test_client:
            yield test_client

        main.app.dependency_overrides.clear()
        _in_memory_bundle.cache_clear()

    def test_demo_vehicle_is_reachable(self, default_client: TestClient):
        start = date.today() + timedelta(days=30)
        response = default_client.get(
            "/api/v1/reservations/availability",
            params={
                "vehicle_id": 1,
                "start_date": start.isoformat(),
                "end_date": (start + timedelta(days=3)).isoformat(),
            },
        )

        assert response.status_code == 200
        assert response.json()["available"] is True
