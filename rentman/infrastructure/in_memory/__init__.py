"""Implementaciones in-memory para desarrollo y testing."""

from rentman.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from rentman.infrastructure.in_memory.store import InMemoryStore
from rentman.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager
from rentman.infrastructure.in_memory.user_repo import InMemoryUserRepo
from rentman.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo

__all__ = [
    # Storage
    "InMemoryStore",
    # Repositories
    "InMemoryReservationRepo",
    "InMemoryVehicleRepo",
    "InMemoryUserRepo",
    # Infrastructure
    "InMemoryTransactionManager",
]
