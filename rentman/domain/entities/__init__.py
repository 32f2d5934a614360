"""Entidades del dominio de reservaciones."""

from rentman.domain.entities.reservation import (
    ACTIVE_STATUSES,
    MUTABLE_STATUSES,
    Reservation,
    ReservationStatus,
)
from rentman.domain.entities.user import User, UserRole
from rentman.domain.entities.vehicle import Vehicle, VehicleStatus

__all__ = [
    # Reservation
    "Reservation",
    "ReservationStatus",
    "ACTIVE_STATUSES",
    "MUTABLE_STATUSES",
    # Vehicle
    "Vehicle",
    "VehicleStatus",
    # User
    "User",
    "UserRole",
]
