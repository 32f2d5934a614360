"""Value Objects del dominio de reservaciones."""

from rentman.domain.value_objects.date_range import DateRange
from rentman.domain.value_objects.money import CENT, round_money
from rentman.domain.value_objects.reservation_number import ReservationNumber

__all__ = [
    "CENT",
    "DateRange",
    "ReservationNumber",
    "round_money",
]
