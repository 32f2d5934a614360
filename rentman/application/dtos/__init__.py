"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from rentman.application.dtos.reservation_dto import (
    Actor,
    ReservationChanges,
    ReservationOptions,
    ReservationStatistics,
)

__all__ = [
    "Actor",
    "ReservationChanges",
    "ReservationOptions",
    "ReservationStatistics",
]
