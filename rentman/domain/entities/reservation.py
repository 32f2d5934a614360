"""Entidad Reservation - Agregado raíz del dominio."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from rentman.domain import constants
from rentman.domain.errors import InvalidReservationStatusError, ValidationError
from rentman.domain.services.pricing import AddOns, PriceBreakdown, compute_total
from rentman.domain.value_objects.date_range import DateRange
from rentman.domain.value_objects.money import round_money


class ReservationStatus(str, Enum):
    """Estados posibles de una reservación."""

    PENDING = constants.RESERVATION_STATUS_PENDING
    CONFIRMED = constants.RESERVATION_STATUS_CONFIRMED
    IN_PROGRESS = constants.RESERVATION_STATUS_IN_PROGRESS
    COMPLETED = constants.RESERVATION_STATUS_COMPLETED
    CANCELLED = constants.RESERVATION_STATUS_CANCELLED
    # Etiquetas derivadas; ninguna transición las asigna
    NO_SHOW = constants.RESERVATION_STATUS_NO_SHOW
    OVERDUE = constants.RESERVATION_STATUS_OVERDUE


ACTIVE_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.IN_PROGRESS)
MUTABLE_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

UPDATABLE_FIELDS = (
    "pickup_location",
    "return_location",
    "pickup_time",
    "return_time",
    "special_requests",
    "notes",
    "deposit_amount",
)


@dataclass
class Reservation:
    """
    Entidad principal del dominio - Agregado Raíz.

    Representa la renta de un vehículo por un cliente. Las referencias a otras
    entidades son ids explícitos; los campos derivados (días, subtotal, total)
    se recalculan con `recompute_derived()` en cada operación que muta.
    """

    # Identificadores
    id: int | None = None
    reservation_number: str | None = None

    # Referencias externas (FKs)
    customer_id: int = 0
    vehicle_id: int = 0
    company_id: int | None = None
    handled_by_employee_id: int | None = None

    # Fechas
    start_date: date | None = None
    end_date: date | None = None
    actual_start_date: date | None = None
    actual_end_date: date | None = None
    pickup_time: datetime | None = None
    return_time: datetime | None = None

    # Estado
    status: ReservationStatus = ReservationStatus.PENDING

    # Financieros
    daily_rate: Decimal = Decimal("0")
    total_days: int = 1
    subtotal: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    insurance_amount: Decimal = Decimal("0")
    additional_fees: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    deposit_amount: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")

    # Condición del vehículo
    pickup_mileage: int | None = None
    return_mileage: int | None = None
    fuel_level_pickup: str | None = None
    fuel_level_return: str | None = None
    vehicle_condition_pickup: str | None = None
    vehicle_condition_return: str | None = None

    # Servicios adicionales
    insurance_included: bool = False
    additional_driver: bool = False
    gps_included: bool = False
    child_seat_included: bool = False

    # Logística y notas
    pickup_location: str | None = None
    return_location: str | None = None
    special_requests: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None

    # === Construcción ===

    @classmethod
    def new(
        cls,
        *,
        reservation_number: str,
        customer_id: int,
        vehicle_id: int,
        company_id: int | None,
        dates: DateRange,
        add_ons: AddOns,
        price: PriceBreakdown,
        now: datetime,
        deposit_amount: Decimal = Decimal("0"),
        pickup_location: str | None = None,
        return_location: str | None = None,
        pickup_time: datetime | None = None,
        return_time: datetime | None = None,
        special_requests: str | None = None,
    ) -> "Reservation":
        """Crea una reservación PENDING con el precio ya calculado."""
        reservation = cls(
            reservation_number=reservation_number,
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            company_id=company_id,
            start_date=dates.start,
            end_date=dates.end,
            pickup_time=pickup_time,
            return_time=return_time,
            pickup_location=pickup_location,
            return_location=return_location,
            special_requests=special_requests,
            deposit_amount=round_money(deposit_amount),
            created_at=now,
            updated_at=now,
        )
        reservation.set_add_ons(add_ons)
        reservation.apply_pricing(price)
        return reservation

    # === Propiedades calculadas ===

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def add_ons(self) -> AddOns:
        return AddOns(
            insurance_included=self.insurance_included,
            additional_driver=self.additional_driver,
            gps_included=self.gps_included,
            child_seat_included=self.child_seat_included,
        )

    @property
    def remaining_amount(self) -> Decimal:
        return round_money(self.total_amount - (self.amount_paid or Decimal("0")))

    @property
    def is_fully_paid(self) -> bool:
        return self.remaining_amount <= 0

    def is_overdue(self, today: date) -> bool:
        """La fecha de fin ya pasó y el vehículo no ha sido devuelto."""
        return self.status in ACTIVE_STATUSES and self.end_date < today

    def is_no_show(self, today: date) -> bool:
        """Confirmada, la fecha de inicio ya pasó y nunca se recogió."""
        return self.status == ReservationStatus.CONFIRMED and self.start_date < today

    def reporting_status(self, today: date) -> ReservationStatus:
        """
        Estado para reportes: OVERDUE y NO_SHOW se derivan de las fechas,
        nunca se persisten.
        """
        if self.is_overdue(today):
            return ReservationStatus.OVERDUE
        if self.is_no_show(today):
            return ReservationStatus.NO_SHOW
        return self.status

    # === Precios ===

    def set_add_ons(self, add_ons: AddOns) -> None:
        self.insurance_included = add_ons.insurance_included
        self.additional_driver = add_ons.additional_driver
        self.gps_included = add_ons.gps_included
        self.child_seat_included = add_ons.child_seat_included

    def apply_pricing(self, price: PriceBreakdown) -> None:
        """Copia el desglose calculado y recalcula los campos derivados."""
        self.daily_rate = price.daily_rate
        self.tax_amount = price.tax_amount
        self.insurance_amount = price.insurance_amount
        self.additional_fees = price.additional_fees
        self.discount_amount = price.discount_amount
        self.recompute_derived()

    def recompute_derived(self) -> None:
        """
        Recalcula días, subtotal y total a partir de los componentes guardados.

        El total nunca se asigna directamente; siempre sale de esta suma.
        """
        self.total_days = self.date_range.days
        self.subtotal = round_money(self.daily_rate * self.total_days)
        self.total_amount = compute_total(
            self.subtotal,
            self.tax_amount,
            self.insurance_amount,
            self.additional_fees,
            self.discount_amount,
        )

    # === Transiciones ===

    def _require_status(self, allowed: tuple[ReservationStatus, ...], operation: str) -> None:
        if self.status not in allowed:
            raise InvalidReservationStatusError(
                current_status=self.status.value,
                expected_status=[s.value for s in allowed],
                operation=operation,
            )

    def _touch(self, now: datetime) -> None:
        self.updated_at = now
        self.lock_version += 1

    def ensure_can_update(self) -> None:
        self._require_status(MUTABLE_STATUSES, "actualizar")

    def ensure_can_delete(self) -> None:
        self._require_status((ReservationStatus.PENDING,), "eliminar")

    def confirm(self, now: datetime, employee_id: int | None = None) -> None:
        self._require_status((ReservationStatus.PENDING,), "confirmar")
        self.status = ReservationStatus.CONFIRMED
        self.confirmed_at = now
        if employee_id is not None:
            self.handled_by_employee_id = employee_id
        self._touch(now)

    def start(
        self,
        now: datetime,
        today: date,
        pickup_mileage: int,
        fuel_level: str | None,
        condition: str | None = None,
        employee_id: int | None = None,
    ) -> None:
        """Entrega del vehículo al cliente (pickup)."""
        self._require_status((ReservationStatus.CONFIRMED,), "iniciar")
        if pickup_mileage is None or pickup_mileage < 0:
            raise ValidationError("pickup_mileage", "debe ser un entero no negativo")
        self.status = ReservationStatus.IN_PROGRESS
        self.actual_start_date = today
        self.pickup_mileage = pickup_mileage
        self.fuel_level_pickup = fuel_level
        self.vehicle_condition_pickup = condition
        if employee_id is not None:
            self.handled_by_employee_id = employee_id
        self._touch(now)

    def complete(
        self,
        now: datetime,
        today: date,
        return_mileage: int,
        fuel_level: str | None,
        condition: str | None = None,
        extra_fees: Decimal | None = None,
        notes: str | None = None,
        employee_id: int | None = None,
    ) -> None:
        """Devolución del vehículo; los cargos extra se suman a los existentes."""
        self._require_status((ReservationStatus.IN_PROGRESS,), "completar")
        if return_mileage is None or return_mileage < 0:
            raise ValidationError("return_mileage", "debe ser un entero no negativo")
        if self.pickup_mileage is not None and return_mileage < self.pickup_mileage:
            raise ValidationError(
                "return_mileage",
                f"{return_mileage} es menor al kilometraje de salida {self.pickup_mileage}",
            )
        if extra_fees is not None and extra_fees < 0:
            raise ValidationError("additional_fees", "no puede ser negativo")

        self.status = ReservationStatus.COMPLETED
        self.actual_end_date = today
        self.completed_at = now
        self.return_mileage = return_mileage
        self.fuel_level_return = fuel_level
        self.vehicle_condition_return = condition
        if notes is not None:
            self.notes = notes
        if extra_fees:
            self.additional_fees = round_money(self.additional_fees + extra_fees)
        if employee_id is not None:
            self.handled_by_employee_id = employee_id
        self.recompute_derived()
        self._touch(now)

    def cancel(self, now: datetime, reason: str | None = None) -> None:
        self._require_status(MUTABLE_STATUSES, "cancelar")
        self.status = ReservationStatus.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = now
        self._touch(now)

    def revise(
        self,
        now: datetime,
        dates: DateRange,
        add_ons: AddOns,
        price: PriceBreakdown,
        changes: dict | None = None,
    ) -> None:
        """Aplica una edición del cliente/empleado y vuelve a tarifar."""
        self.ensure_can_update()
        for name, value in (changes or {}).items():
            if name not in UPDATABLE_FIELDS:
                raise ValidationError(name, "no es un campo actualizable")
            if name == "deposit_amount":
                value = round_money(value or Decimal("0"))
            setattr(self, name, value)
        self.start_date = dates.start
        self.end_date = dates.end
        self.set_add_ons(add_ons)
        self.apply_pricing(price)
        self._touch(now)
