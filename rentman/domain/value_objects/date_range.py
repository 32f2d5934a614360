"""Value Object DateRange - rango de días de una reservación."""

from dataclasses import dataclass
from datetime import date, timedelta

from rentman.domain.constants import MINIMUM_RENTAL_DAYS
from rentman.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class DateRange:
    """
    Value Object inmutable que representa un rango de días calendario.

    Ambos extremos son inclusivos para la detección de conflictos: una
    reservación que termina el día en que otra empieza se superpone con ella.

    Attributes:
        start: Día de inicio (pickup).
        end: Día de fin (devolución).
    """

    start: date
    end: date

    @property
    def days(self) -> int:
        """
        Días de renta.

        Regla de negocio: mínimo un día, aun si el rango viene invertido o vacío.
        """
        return max(MINIMUM_RENTAL_DAYS, (self.end - self.start).days)

    def overlaps_with(self, other: "DateRange") -> bool:
        """Verifica si este rango se superpone con otro (días inclusivos)."""
        return not (other.end < self.start or other.start > self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"

    @classmethod
    def for_booking(cls, start: date | None, end: date | None, today: date) -> "DateRange":
        """
        Construye un rango validado para una reserva nueva o un cambio de fechas.

        Raises:
            InvalidDateRangeError: fechas nulas, inicio en el pasado, fin anterior
                o igual al inicio.
        """
        if start is None or end is None:
            raise InvalidDateRangeError("La fecha de inicio y la de fin son obligatorias")
        if start < today:
            raise InvalidDateRangeError(f"La fecha de inicio {start} no puede estar en el pasado")
        if end < start:
            raise InvalidDateRangeError("La fecha de fin debe ser posterior a la de inicio")
        if end == start:
            raise InvalidDateRangeError(
                "La fecha de fin debe ser al menos un día posterior a la de inicio"
            )
        return cls(start=start, end=end)

    @classmethod
    def week_from(cls, day: date, days: int) -> "DateRange":
        """Rango [day, day + days], usado por la consulta de próximas reservas."""
        return cls(start=day, end=day + timedelta(days=days))
