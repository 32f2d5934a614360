from rentman.domain.entities.vehicle import Vehicle, VehicleStatus


class VehicleRepo:
    """Colaborador de flota: lectura del vehículo y escritura de estado/kilometraje."""

    async def get(self, vehicle_id: int) -> Vehicle | None:
        raise NotImplementedError

    async def get_for_update(self, vehicle_id: int) -> Vehicle | None:
        """
        Lee el vehículo bloqueando su fila hasta el fin de la transacción.

        Serializa a los escritores que compiten por el mismo vehículo.
        """
        raise NotImplementedError

    async def add(self, vehicle: Vehicle) -> Vehicle:
        raise NotImplementedError

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        raise NotImplementedError

    async def set_mileage(self, vehicle_id: int, mileage: int) -> None:
        raise NotImplementedError
