"""Rentman - núcleo de reservaciones de vehículos."""

__version__ = "0.1.0"
