"""
Tests del modo in-memory: transacciones, copias defensivas y optimistic locking.
"""

import asyncio
from decimal import Decimal

import pytest

from rentman.domain.entities.vehicle import VehicleStatus
from rentman.domain.errors import OptimisticLockError
from rentman.infrastructure.in_memory import InMemoryTransactionManager


class TestInMemoryTransactionManager:
    async def test_commit_keeps_changes(self, store, repos):
        manager = repos["tx_manager"]

        async def work():
            await repos["vehicle_repo"].set_status(1, VehicleStatus.RENTED)
            return "ok"

        assert await manager.run(work) == "ok"
        assert store.vehicles[1].status == VehicleStatus.RENTED

    async def test_failure_restores_everything(self, store, repos, book):
        reservation = await book()
        manager = repos["tx_manager"]

        async def work():
            await repos["vehicle_repo"].set_status(1, VehicleStatus.RENTED)
            await repos["vehicle_repo"].set_mileage(1, 99999)
            await repos["reservation_repo"].delete(reservation.id)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await manager.run(work)

        assert store.vehicles[1].status == VehicleStatus.AVAILABLE
        assert store.vehicles[1].mileage == 10000
        assert reservation.id in store.reservations

    async def test_nested_start_joins_outer_transaction(self, store, repos):
        manager = repos["tx_manager"]

        with pytest.raises(RuntimeError):
            async with manager.start():
                await repos["vehicle_repo"].set_mileage(1, 11000)
                async with manager.start():
                    await repos["vehicle_repo"].set_mileage(2, 6000)
                raise RuntimeError("falla después del bloque interno")

        assert store.vehicles[1].mileage == 10000
        assert store.vehicles[2].mileage == 5000

    async def test_units_are_serialized(self, store):
        manager = InMemoryTransactionManager(store)
        order = []

        async def unit(name):
            order.append(f"{name}:in")
            await asyncio.sleep(0)
            order.append(f"{name}:out")

        await asyncio.gather(manager.run(lambda: unit("a")), manager.run(lambda: unit("b")))

        assert order == ["a:in", "a:out", "b:in", "b:out"]


class TestInMemoryRepos:
    async def test_get_returns_a_copy(self, store, repos, book):
        reservation = await book()

        loaded = await repos["reservation_repo"].get(reservation.id)
        loaded.notes = "sin guardar"

        assert store.reservations[reservation.id].notes is None

    async def test_stale_save_is_rejected(self, repos, book, use_cases):
        reservation = await book()
        stale = await repos["reservation_repo"].get(reservation.id)
        await use_cases["confirm_reservation"].execute(reservation.id)

        stale.deposit_amount = Decimal("10.00")
        with pytest.raises(OptimisticLockError) as exc_info:
            await repos["reservation_repo"].save(stale, stale.lock_version)

        assert exc_info.value.code == "OPTIMISTIC_LOCK_ERROR"
