"""DTOs para reservaciones."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from rentman.domain.services.pricing import AddOns


@dataclass(frozen=True)
class Actor:
    """
    Quién invoca la operación.

    Lo resuelve el colaborador de autenticación antes de llegar al núcleo; aquí
    solo se usa para auditoría en logs.
    """

    actor_id: int | None = None
    role: str | None = None


@dataclass
class ReservationOptions:
    """Opciones de una reserva nueva, además de cliente, vehículo y fechas."""

    pickup_location: str | None = None
    return_location: str | None = None
    pickup_time: datetime | None = None
    return_time: datetime | None = None
    special_requests: str | None = None
    insurance_included: bool = False
    additional_driver: bool = False
    gps_included: bool = False
    child_seat_included: bool = False
    discount_amount: Decimal = Decimal("0")
    deposit_amount: Decimal = Decimal("0")

    @property
    def add_ons(self) -> AddOns:
        return AddOns(
            insurance_included=self.insurance_included,
            additional_driver=self.additional_driver,
            gps_included=self.gps_included,
            child_seat_included=self.child_seat_included,
        )


@dataclass
class ReservationChanges:
    """
    Cambios parciales de una reserva PENDING/CONFIRMED.

    Los atributos en None no se modifican; `fields` lleva los campos libres
    (ubicaciones, horarios, notas, depósito).
    """

    start_date: date | None = None
    end_date: date | None = None
    insurance_included: bool | None = None
    additional_driver: bool | None = None
    gps_included: bool | None = None
    child_seat_included: bool | None = None
    discount_amount: Decimal | None = None
    fields: dict = field(default_factory=dict)

    def add_ons_over(self, current: AddOns) -> AddOns:
        def pick(new: bool | None, old: bool) -> bool:
            return old if new is None else new

        return AddOns(
            insurance_included=pick(self.insurance_included, current.insurance_included),
            additional_driver=pick(self.additional_driver, current.additional_driver),
            gps_included=pick(self.gps_included, current.gps_included),
            child_seat_included=pick(self.child_seat_included, current.child_seat_included),
        )


@dataclass
class ReservationStatistics:
    """Resumen para dashboards."""

    total_reservations: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    current_active: int = 0
    upcoming: int = 0
    overdue: int = 0
    today_pickups: int = 0
    today_returns: int = 0
    monthly_revenue: Decimal = Decimal("0.00")
