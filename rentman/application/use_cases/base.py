import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from rentman.application.dtos.reservation_dto import Actor
from rentman.application.interfaces.clock import Clock
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.result import Err, Ok, Result
from rentman.domain.entities.reservation import Reservation
from rentman.domain.entities.vehicle import Vehicle
from rentman.domain.errors import (
    DomainError,
    InvalidUserRoleError,
    ReservationNotFoundError,
    UserNotFoundError,
    VehicleNotFoundError,
)

T = TypeVar("T")


class ReservationUseCase:
    """
    Base de los casos de uso que mutan reservaciones.

    Cada operación corre completa dentro de `TransactionManager.run`; si algo
    falla se hace rollback y el error de dominio se devuelve como `Err`.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        vehicle_repo: VehicleRepo,
        user_repo: UserRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._vehicle_repo = vehicle_repo
        self._user_repo = user_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(type(self).__module__)

    async def _atomic(
        self,
        operation: str,
        work: Callable[[], Awaitable[T]],
        actor: Actor | None = None,
        **context,
    ) -> Result[T]:
        try:
            value = await self._transaction_manager.run(work)
        except DomainError as exc:
            self._logger.warning(
                "Reservation %s rejected",
                operation,
                extra={
                    "error_code": exc.code,
                    "error_kind": exc.kind.value,
                    "actor_id": actor.actor_id if actor else None,
                    **context,
                },
            )
            return Err(exc)
        return Ok(value)

    def _log_success(self, operation: str, reservation: Reservation, actor: Actor | None) -> None:
        self._logger.info(
            "Reservation %s",
            operation,
            extra={
                "reservation_id": reservation.id,
                "reservation_number": reservation.reservation_number,
                "vehicle_id": reservation.vehicle_id,
                "status": reservation.status.value,
                "actor_id": actor.actor_id if actor else None,
                "actor_role": actor.role if actor else None,
            },
        )

    async def _load(self, reservation_id: int) -> Reservation:
        reservation = await self._reservation_repo.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    async def _lock_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = await self._vehicle_repo.get_for_update(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    async def _require_staff(self, employee_id: int | None) -> None:
        if employee_id is None:
            return
        employee = await self._user_repo.get(employee_id)
        if employee is None:
            raise UserNotFoundError(employee_id, "Empleado")
        if not employee.is_staff:
            raise InvalidUserRoleError(employee_id, "EMPLOYEE/ADMIN")
