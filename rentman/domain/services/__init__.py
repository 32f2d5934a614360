"""Servicios de dominio (lógica pura sin estado)."""

from rentman.domain.services.pricing import AddOns, PriceBreakdown, PricingCalculator, compute_total

__all__ = [
    "AddOns",
    "PriceBreakdown",
    "PricingCalculator",
    "compute_total",
]
