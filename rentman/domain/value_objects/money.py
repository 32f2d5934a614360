"""Redondeo de montos: todo valor monetario se guarda en centavos (half-up)."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_money(value: Decimal | int | str) -> Decimal:
    """Redondea un monto a centavos (half-up), sin pasar nunca por float."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
