"""Calculadora de precios de una reservación."""

from dataclasses import dataclass
from decimal import Decimal

from rentman.domain.constants import (
    ADDITIONAL_DRIVER_DAILY_FEE,
    CHILD_SEAT_DAILY_FEE,
    GPS_DAILY_FEE,
    INSURANCE_DAILY_FEE,
    TAX_INCLUDES_INSURANCE,
    TAX_RATE,
)
from rentman.domain.errors import ValidationError
from rentman.domain.value_objects.date_range import DateRange
from rentman.domain.value_objects.money import round_money

ZERO = Decimal("0")


@dataclass(frozen=True)
class AddOns:
    """Servicios adicionales seleccionados; cada uno cobra una tarifa fija por día."""

    insurance_included: bool = False
    additional_driver: bool = False
    gps_included: bool = False
    child_seat_included: bool = False


@dataclass(frozen=True)
class PriceBreakdown:
    total_days: int
    daily_rate: Decimal
    subtotal: Decimal
    insurance_amount: Decimal
    additional_fees: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal


def compute_total(
    subtotal: Decimal,
    tax_amount: Decimal,
    insurance_amount: Decimal,
    additional_fees: Decimal,
    discount_amount: Decimal,
) -> Decimal:
    """total = subtotal + impuestos + seguro + cargos adicionales - descuento."""
    return round_money(subtotal + tax_amount + insurance_amount + additional_fees - discount_amount)


class PricingCalculator:
    """
    Calcula el desglose de precio a partir de la tarifa diaria congelada, el
    rango de fechas y los servicios adicionales.

    Es una función pura: mismas entradas, mismo total, sin deriva por
    recálculos repetidos (todo en Decimal, redondeado a centavos).
    """

    def __init__(self, tax_rate: Decimal = TAX_RATE, tax_includes_insurance: bool = TAX_INCLUDES_INSURANCE):
        self._tax_rate = tax_rate
        self._tax_includes_insurance = tax_includes_insurance

    def calculate(
        self,
        daily_rate: Decimal,
        dates: DateRange,
        add_ons: AddOns,
        discount_amount: Decimal = ZERO,
    ) -> PriceBreakdown:
        days = dates.days
        rate = round_money(daily_rate)
        subtotal = round_money(rate * days)

        insurance = INSURANCE_DAILY_FEE * days if add_ons.insurance_included else ZERO
        additional = ZERO
        if add_ons.gps_included:
            additional += GPS_DAILY_FEE * days
        if add_ons.child_seat_included:
            additional += CHILD_SEAT_DAILY_FEE * days
        if add_ons.additional_driver:
            additional += ADDITIONAL_DRIVER_DAILY_FEE * days
        insurance = round_money(insurance)
        additional = round_money(additional)

        taxable = subtotal + additional
        if self._tax_includes_insurance:
            taxable += insurance
        tax = round_money(taxable * self._tax_rate)
        discount = round_money(discount_amount or ZERO)
        gross = subtotal + tax + insurance + additional
        if discount < ZERO:
            raise ValidationError("discount_amount", "no puede ser negativo", code="INVALID_DISCOUNT")
        if discount > gross:
            raise ValidationError(
                "discount_amount", f"excede el total de la reservación ({gross})", code="INVALID_DISCOUNT"
            )

        return PriceBreakdown(
            total_days=days,
            daily_rate=rate,
            subtotal=subtotal,
            insurance_amount=insurance,
            additional_fees=additional,
            tax_amount=tax,
            discount_amount=discount,
            total_amount=compute_total(subtotal, tax, insurance, additional, discount),
        )
