"""Casos de uso del núcleo de reservaciones."""

from rentman.application.use_cases.cancel_reservation import CancelReservationUseCase
from rentman.application.use_cases.check_availability import CheckAvailabilityUseCase
from rentman.application.use_cases.complete_reservation import CompleteReservationUseCase
from rentman.application.use_cases.confirm_reservation import ConfirmReservationUseCase
from rentman.application.use_cases.create_reservation import CreateReservationUseCase
from rentman.application.use_cases.delete_reservation import DeleteReservationUseCase
from rentman.application.use_cases.get_reservation import GetReservationUseCase
from rentman.application.use_cases.reservation_queries import ReservationQueries
from rentman.application.use_cases.start_reservation import StartReservationUseCase
from rentman.application.use_cases.update_reservation import UpdateReservationUseCase

__all__ = [
    "CreateReservationUseCase",
    "ConfirmReservationUseCase",
    "StartReservationUseCase",
    "CompleteReservationUseCase",
    "CancelReservationUseCase",
    "UpdateReservationUseCase",
    "DeleteReservationUseCase",
    "CheckAvailabilityUseCase",
    "GetReservationUseCase",
    "ReservationQueries",
]
