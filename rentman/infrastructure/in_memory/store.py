import copy
from dataclasses import dataclass, field

from rentman.domain.entities.reservation import Reservation
from rentman.domain.entities.user import User
from rentman.domain.entities.vehicle import Vehicle


@dataclass
class InMemoryStore:
    """Tablas en memoria compartidas por los repositorios in-memory de una misma app."""

    reservations: dict[int, Reservation] = field(default_factory=dict)
    vehicles: dict[int, Vehicle] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    sequences: dict[str, int] = field(default_factory=dict)

    def next_id(self, table: str) -> int:
        self.sequences[table] = self.sequences.get(table, 0) + 1
        return self.sequences[table]

    def snapshot(self) -> "InMemoryStore":
        return copy.deepcopy(self)

    def restore(self, snapshot: "InMemoryStore") -> None:
        self.reservations = snapshot.reservations
        self.vehicles = snapshot.vehicles
        self.users = snapshot.users
        self.sequences = snapshot.sequences
