"""Constantes del dominio de reservaciones."""

from decimal import Decimal

# Estados persistidos de una reservación
RESERVATION_STATUS_PENDING = "PENDING"
RESERVATION_STATUS_CONFIRMED = "CONFIRMED"
RESERVATION_STATUS_IN_PROGRESS = "IN_PROGRESS"
RESERVATION_STATUS_COMPLETED = "COMPLETED"
RESERVATION_STATUS_CANCELLED = "CANCELLED"

# Etiquetas derivadas (solo reportes, ninguna transición las persiste)
RESERVATION_STATUS_NO_SHOW = "NO_SHOW"
RESERVATION_STATUS_OVERDUE = "OVERDUE"

# Tarifas fijas por día de los servicios adicionales
INSURANCE_DAILY_FEE = Decimal("15")
GPS_DAILY_FEE = Decimal("5")
CHILD_SEAT_DAILY_FEE = Decimal("8")
ADDITIONAL_DRIVER_DAILY_FEE = Decimal("10")

TAX_RATE = Decimal("0.085")

# El seguro forma parte de la base gravable (ver DESIGN.md, base de impuestos)
TAX_INCLUDES_INSURANCE = True

MINIMUM_RENTAL_DAYS = 1
UPCOMING_WINDOW_DAYS = 7
