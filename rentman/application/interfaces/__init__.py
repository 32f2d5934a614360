"""Interfaces (Puertos) de la capa de aplicación."""

from rentman.application.interfaces.clock import Clock, FakeClock, SystemClock
from rentman.application.interfaces.number_generator import (
    FakeReservationNumberGenerator,
    RandomReservationNumberGenerator,
    ReservationNumberGenerator,
)
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo

__all__ = [
    # Repositories
    "ReservationRepo",
    "VehicleRepo",
    "UserRepo",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "ReservationNumberGenerator",
    "RandomReservationNumberGenerator",
    "FakeReservationNumberGenerator",
]
