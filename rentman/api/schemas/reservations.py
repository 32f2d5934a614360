from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, condecimal, constr, field_validator

from rentman.application.dtos.reservation_dto import ReservationChanges, ReservationOptions
from rentman.domain.entities.reservation import ReservationStatus

Money = condecimal(max_digits=12, decimal_places=2)
NonNegativeMoney = condecimal(max_digits=12, decimal_places=2, ge=0)

_MONEY_JSON = {Decimal: lambda v: format(v, ".2f")}


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    customer_id: int
    vehicle_id: int
    start_date: date
    end_date: date
    pickup_location: constr(strip_whitespace=True, max_length=255) | None = None
    return_location: constr(strip_whitespace=True, max_length=255) | None = None
    pickup_time: datetime | None = None
    return_time: datetime | None = None
    special_requests: str | None = None
    insurance_included: bool = False
    additional_driver: bool = False
    gps_included: bool = False
    child_seat_included: bool = False
    discount_amount: NonNegativeMoney = Field(default=Decimal("0"))
    deposit_amount: NonNegativeMoney = Field(default=Decimal("0"))

    def to_options(self) -> ReservationOptions:
        return ReservationOptions(
            pickup_location=self.pickup_location,
            return_location=self.return_location,
            pickup_time=self.pickup_time,
            return_time=self.return_time,
            special_requests=self.special_requests,
            insurance_included=self.insurance_included,
            additional_driver=self.additional_driver,
            gps_included=self.gps_included,
            child_seat_included=self.child_seat_included,
            discount_amount=self.discount_amount,
            deposit_amount=self.deposit_amount,
        )


class UpdateReservationRequest(BaseModel):
    """Todos los campos son opcionales; los ausentes no cambian."""

    model_config = ConfigDict(extra="forbid")

    start_date: date | None = None
    end_date: date | None = None
    pickup_location: constr(strip_whitespace=True, max_length=255) | None = None
    return_location: constr(strip_whitespace=True, max_length=255) | None = None
    pickup_time: datetime | None = None
    return_time: datetime | None = None
    special_requests: str | None = None
    notes: str | None = None
    insurance_included: bool | None = None
    additional_driver: bool | None = None
    gps_included: bool | None = None
    child_seat_included: bool | None = None
    discount_amount: NonNegativeMoney | None = None
    deposit_amount: NonNegativeMoney | None = None

    def to_changes(self) -> ReservationChanges:
        free_fields = (
            "pickup_location",
            "return_location",
            "pickup_time",
            "return_time",
            "special_requests",
            "notes",
            "deposit_amount",
        )
        sent = self.model_fields_set
        return ReservationChanges(
            start_date=self.start_date,
            end_date=self.end_date,
            insurance_included=self.insurance_included,
            additional_driver=self.additional_driver,
            gps_included=self.gps_included,
            child_seat_included=self.child_seat_included,
            discount_amount=self.discount_amount,
            fields={name: getattr(self, name) for name in free_fields if name in sent},
        )


class ConfirmReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_id: int | None = None


class StartReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pickup_mileage: int
    fuel_level: constr(strip_whitespace=True, max_length=20) | None = None
    condition: str | None = None
    employee_id: int | None = None


class CompleteReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    return_mileage: int
    fuel_level: constr(strip_whitespace=True, max_length=20) | None = None
    condition: str | None = None
    additional_fees: Money | None = None
    notes: str | None = None
    employee_id: int | None = None


class CancelReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reason: str | None = None


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=_MONEY_JSON)

    id: int
    reservation_number: str
    customer_id: int
    vehicle_id: int
    company_id: int | None = None
    handled_by_employee_id: int | None = None
    status: ReservationStatus
    start_date: date
    end_date: date
    actual_start_date: date | None = None
    actual_end_date: date | None = None
    pickup_time: datetime | None = None
    return_time: datetime | None = None
    daily_rate: Money
    total_days: int
    subtotal: Money
    tax_amount: Money
    insurance_amount: Money
    additional_fees: Money
    discount_amount: Money
    total_amount: Money
    deposit_amount: Money
    amount_paid: Money
    remaining_amount: Money
    is_fully_paid: bool
    pickup_mileage: int | None = None
    return_mileage: int | None = None
    fuel_level_pickup: str | None = None
    fuel_level_return: str | None = None
    vehicle_condition_pickup: str | None = None
    vehicle_condition_return: str | None = None
    insurance_included: bool
    additional_driver: bool
    gps_included: bool
    child_seat_included: bool
    pickup_location: str | None = None
    return_location: str | None = None
    special_requests: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None
    lock_version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None


class AvailabilityResponse(BaseModel):
    vehicle_id: int
    start_date: date
    end_date: date
    available: bool


class RevenueResponse(BaseModel):
    model_config = ConfigDict(json_encoders=_MONEY_JSON)

    start_date: date
    end_date: date
    company_id: int | None = None
    total_revenue: Money


class MonthlyRevenueResponse(BaseModel):
    model_config = ConfigDict(json_encoders=_MONEY_JSON)

    year: int
    month: int
    company_id: int | None = None
    total_revenue: Money

    @field_validator("month")
    @classmethod
    def validate_month(cls, value: int) -> int:
        if not 1 <= value <= 12:
            raise ValueError("month must be between 1 and 12")
        return value


class StatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=_MONEY_JSON)

    total_reservations: int
    by_status: dict[str, int]
    current_active: int
    upcoming: int
    overdue: int
    today_pickups: int
    today_returns: int
    monthly_revenue: Money
