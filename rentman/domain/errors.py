"""Excepciones de dominio para el sistema de reservaciones."""

from datetime import date
from enum import Enum


class ErrorKind(str, Enum):
    """Categoría de un error de dominio; la capa HTTP la traduce a un status code."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    INVALID_STATE = "INVALID_STATE"


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, message: str, code: str | None = None):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code=code or "VALIDATION_ERROR",
        )
        self.field = field


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT


class InvalidStateError(DomainError):
    kind = ErrorKind.INVALID_STATE


# === Errores de búsqueda ===


class ReservationNotFoundError(NotFoundError):
    """La reservación no existe."""

    def __init__(self, reservation_ref: int | str):
        super().__init__(
            message=f"Reservación no encontrada: {reservation_ref}",
            code="RESERVATION_NOT_FOUND",
        )
        self.reservation_ref = reservation_ref


class VehicleNotFoundError(NotFoundError):
    """El vehículo no existe."""

    def __init__(self, vehicle_id: int):
        super().__init__(
            message=f"Vehículo no encontrado: {vehicle_id}",
            code="VEHICLE_NOT_FOUND",
        )
        self.vehicle_id = vehicle_id


class UserNotFoundError(NotFoundError):
    """El usuario (cliente o empleado) no existe."""

    def __init__(self, user_id: int, role_label: str = "Usuario"):
        super().__init__(
            message=f"{role_label} no encontrado: {user_id}",
            code="USER_NOT_FOUND",
        )
        self.user_id = user_id


# === Errores de validación ===


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido."""

    def __init__(self, message: str):
        super().__init__(field="dates", message=message, code="INVALID_DATE_RANGE")


class InvalidUserRoleError(ValidationError):
    """El usuario no tiene el rol requerido para la operación."""

    def __init__(self, user_id: int, expected_role: str):
        super().__init__(
            field="user_id",
            message=f"el usuario {user_id} no tiene rol {expected_role}",
            code="INVALID_USER_ROLE",
        )
        self.user_id = user_id
        self.expected_role = expected_role


# === Errores de conflicto ===


class VehicleUnavailableError(ConflictError):
    """El vehículo ya está reservado para (parte de) el rango solicitado."""

    def __init__(self, vehicle_id: int, start_date: date, end_date: date):
        super().__init__(
            message=f"Vehículo {vehicle_id} no disponible entre {start_date} y {end_date}",
            code="VEHICLE_UNAVAILABLE",
        )
        self.vehicle_id = vehicle_id
        self.start_date = start_date
        self.end_date = end_date


class VehicleNotRentableError(ConflictError):
    """El estado del vehículo no permite rentarlo."""

    def __init__(self, vehicle_id: int, vehicle_status: str):
        super().__init__(
            message=f"Vehículo {vehicle_id} no se puede rentar en estado '{vehicle_status}'",
            code="VEHICLE_NOT_RENTABLE",
        )
        self.vehicle_id = vehicle_id
        self.vehicle_status = vehicle_status


class ReservationNumberExistsError(ConflictError):
    """Ya existe una reservación con ese número."""

    def __init__(self, reservation_number: str):
        super().__init__(
            message=f"Ya existe una reservación con número: {reservation_number}",
            code="RESERVATION_ALREADY_EXISTS",
        )
        self.reservation_number = reservation_number


class OptimisticLockError(ConflictError):
    """Conflicto de concurrencia al actualizar la reservación."""

    def __init__(self, reservation_id: int, expected_version: int):
        super().__init__(
            message=f"Conflicto de concurrencia en reservación {reservation_id}: "
            f"versión esperada {expected_version}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.reservation_id = reservation_id
        self.expected_version = expected_version


# === Errores de estado ===


class InvalidReservationStatusError(InvalidStateError):
    """El estado de la reservación no permite la operación."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation}: estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_RESERVATION_STATUS",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation
