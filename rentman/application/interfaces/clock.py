"""Interface Clock - Puerto para abstracción de tiempo."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone


class Clock(ABC):
    """
    Reloj inyectable de las reservaciones.

    `today()` decide validaciones de fechas, transiciones y reportes;
    `now()` llena confirmed_at / completed_at / cancelled_at / updated_at.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Instante actual, timezone-aware en UTC."""
        raise NotImplementedError

    @abstractmethod
    def today(self) -> date:
        """Día calendario actual (UTC)."""
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.now().date()


class FakeClock(Clock):
    """Reloj congelado para tests: siempre devuelve `fixed_time`."""

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed_time

    def today(self) -> date:
        return self._fixed_time.date()
