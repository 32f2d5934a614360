from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus
from rentman.infrastructure.db.tables import vehicles


def _to_entity(row) -> Vehicle:
    return Vehicle(
        id=row["id"],
        company_id=row["company_id"],
        make=row["make"],
        model=row["model"],
        license_plate=row["license_plate"],
        daily_rate=Decimal(str(row["daily_rate"])),
        mileage=row["mileage"] or 0,
        status=VehicleStatus(row["status"]),
    )


class VehicleRepoSQL(VehicleRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, vehicle_id: int) -> Vehicle | None:
        result = await self._session.execute(select(vehicles).where(vehicles.c.id == vehicle_id))
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def get_for_update(self, vehicle_id: int) -> Vehicle | None:
        # SELECT ... FOR UPDATE; SQLite lo ignora y serializa por archivo
        stmt = select(vehicles).where(vehicles.c.id == vehicle_id).with_for_update()
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def add(self, vehicle: Vehicle) -> Vehicle:
        stmt = insert(vehicles).values(
            company_id=vehicle.company_id,
            make=vehicle.make,
            model=vehicle.model,
            license_plate=vehicle.license_plate,
            daily_rate=vehicle.daily_rate,
            mileage=vehicle.mileage,
            status=vehicle.status.value,
        )
        result = await self._session.execute(stmt)
        vehicle.id = result.inserted_primary_key[0]
        return vehicle

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        await self._session.execute(
            update(vehicles).where(vehicles.c.id == vehicle_id).values(status=status.value)
        )

    async def set_mileage(self, vehicle_id: int, mileage: int) -> None:
        await self._session.execute(
            update(vehicles).where(vehicles.c.id == vehicle_id).values(mileage=mileage)
        )
