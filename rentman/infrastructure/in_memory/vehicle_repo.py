import copy

from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus


class InMemoryVehicleRepo(VehicleRepo):
    def __init__(self, store) -> None:
        self._store = store

    async def get(self, vehicle_id: int) -> Vehicle | None:
        vehicle = self._store.vehicles.get(vehicle_id)
        return copy.deepcopy(vehicle) if vehicle else None

    async def get_for_update(self, vehicle_id: int) -> Vehicle | None:
        # El lock global del transaction manager ya serializa a los escritores
        return await self.get(vehicle_id)

    async def add(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id is None:
            vehicle.id = self._store.next_id("vehicles")
        self._store.vehicles[vehicle.id] = copy.deepcopy(vehicle)
        return vehicle

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        if vehicle_id in self._store.vehicles:
            self._store.vehicles[vehicle_id].status = status

    async def set_mileage(self, vehicle_id: int, mileage: int) -> None:
        if vehicle_id in self._store.vehicles:
            self._store.vehicles[vehicle_id].mileage = mileage
