"""Entidad Vehicle - vista del colaborador de flota."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class VehicleStatus(str, Enum):
    """Estados operativos de un vehículo."""

    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


@dataclass
class Vehicle:
    """
    Vehículo de una compañía.

    El núcleo de reservaciones solo lee la tarifa, el kilometraje y el estado,
    y escribe estado y kilometraje en pickup/devolución.
    """

    id: int | None = None
    company_id: int | None = None
    make: str = ""
    model: str = ""
    license_plate: str = ""
    daily_rate: Decimal = Decimal("0")
    mileage: int = 0
    status: VehicleStatus = VehicleStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE
