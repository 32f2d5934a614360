"""
Capa de Dominio - Núcleo de reservaciones de Rentman.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, servicios de dominio y excepciones.

Estructura:
- entities/: Reservation (agregado raíz), Vehicle y User (vistas de colaboradores)
- value_objects/: DateRange, ReservationNumber, round_money
- services/: PricingCalculator
- errors.py: Excepciones específicas del dominio
- constants.py: Tarifas fijas y constantes del dominio
"""

from rentman.domain.errors import (
    ConflictError,
    DomainError,
    ErrorKind,
    InvalidDateRangeError,
    InvalidReservationStatusError,
    InvalidStateError,
    InvalidUserRoleError,
    NotFoundError,
    OptimisticLockError,
    ReservationNotFoundError,
    ReservationNumberExistsError,
    UserNotFoundError,
    ValidationError,
    VehicleNotFoundError,
    VehicleNotRentableError,
    VehicleUnavailableError,
)
from rentman.domain.entities import (
    Reservation,
    ReservationStatus,
    User,
    UserRole,
    Vehicle,
    VehicleStatus,
)
from rentman.domain.services import AddOns, PriceBreakdown, PricingCalculator
from rentman.domain.value_objects import DateRange, ReservationNumber

__all__ = [
    # Entities
    "Reservation",
    "ReservationStatus",
    "Vehicle",
    "VehicleStatus",
    "User",
    "UserRole",
    # Services
    "AddOns",
    "PriceBreakdown",
    "PricingCalculator",
    # Value Objects
    "DateRange",
    "ReservationNumber",
    # Errors
    "ErrorKind",
    "DomainError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "InvalidStateError",
    "ReservationNotFoundError",
    "VehicleNotFoundError",
    "UserNotFoundError",
    "InvalidDateRangeError",
    "InvalidUserRoleError",
    "VehicleUnavailableError",
    "VehicleNotRentableError",
    "ReservationNumberExistsError",
    "OptimisticLockError",
    "InvalidReservationStatusError",
]
