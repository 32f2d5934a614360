from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from rentman.api.deps import AsyncSessionLocal
from rentman.application.availability import AvailabilityChecker
from rentman.application.dtos.reservation_dto import Actor
from rentman.application.interfaces.clock import Clock, SystemClock
from rentman.application.interfaces.number_generator import (
    RandomReservationNumberGenerator,
    ReservationNumberGenerator,
)
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.interfaces.user_repo import UserRepo
from rentman.application.interfaces.vehicle_repo import VehicleRepo
from rentman.application.use_cases import (
    CancelReservationUseCase,
    CheckAvailabilityUseCase,
    CompleteReservationUseCase,
    ConfirmReservationUseCase,
    CreateReservationUseCase,
    DeleteReservationUseCase,
    GetReservationUseCase,
    ReservationQueries,
    StartReservationUseCase,
    UpdateReservationUseCase,
)
from rentman.config import Settings, get_settings
from rentman.infrastructure.db.repositories import ReservationRepoSQL, UserRepoSQL, VehicleRepoSQL
from rentman.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from rentman.infrastructure.demo_data import seed_in_memory
from rentman.infrastructure.in_memory import (
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
    InMemoryUserRepo,
    InMemoryVehicleRepo,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


def get_actor(
    actor_id: int | None = Header(default=None, alias="X-Actor-Id"),
    actor_role: str | None = Header(default=None, alias="X-Actor-Role"),
) -> Actor:
    """El colaborador de autenticación (externo) entrega la identidad en headers."""
    return Actor(actor_id=actor_id, role=actor_role)


def build_in_memory_bundle(seed_demo: bool = False) -> dict:
    store = InMemoryStore()
    if seed_demo:
        seed_in_memory(store)
    return {
        "store": store,
        "reservation_repo": InMemoryReservationRepo(store),
        "vehicle_repo": InMemoryVehicleRepo(store),
        "user_repo": InMemoryUserRepo(store),
        "tx_manager": InMemoryTransactionManager(store),
        "clock": SystemClock(),
        "number_generator": RandomReservationNumberGenerator(),
    }


@lru_cache(maxsize=1)
def _in_memory_bundle(seed_demo: bool) -> dict:
    return build_in_memory_bundle(seed_demo)


def build_use_cases(
    reservation_repo: ReservationRepo,
    vehicle_repo: VehicleRepo,
    user_repo: UserRepo,
    tx_manager: TransactionManager,
    clock: Clock,
    number_generator: ReservationNumberGenerator,
    pending_soft_hold: bool = False,
) -> dict:
    availability = AvailabilityChecker(reservation_repo, pending_soft_hold=pending_soft_hold)
    common = {
        "reservation_repo": reservation_repo,
        "vehicle_repo": vehicle_repo,
        "user_repo": user_repo,
        "transaction_manager": tx_manager,
        "clock": clock,
    }
    return {
        "create_reservation": CreateReservationUseCase(
            **common,
            number_generator=number_generator,
            availability=availability,
        ),
        "confirm_reservation": ConfirmReservationUseCase(**common, availability=availability),
        "start_reservation": StartReservationUseCase(**common, availability=availability),
        "complete_reservation": CompleteReservationUseCase(**common),
        "cancel_reservation": CancelReservationUseCase(**common),
        "update_reservation": UpdateReservationUseCase(**common, availability=availability),
        "delete_reservation": DeleteReservationUseCase(**common),
        "check_availability": CheckAvailabilityUseCase(
            vehicle_repo=vehicle_repo,
            transaction_manager=tx_manager,
            availability=availability,
        ),
        "get_reservation": GetReservationUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
        ),
        "queries": ReservationQueries(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
) -> dict:
    if settings.use_in_memory:
        bundle = _in_memory_bundle(settings.seed_demo_data)
        return build_use_cases(
            reservation_repo=bundle["reservation_repo"],
            vehicle_repo=bundle["vehicle_repo"],
            user_repo=bundle["user_repo"],
            tx_manager=bundle["tx_manager"],
            clock=bundle["clock"],
            number_generator=bundle["number_generator"],
            pending_soft_hold=settings.pending_soft_hold,
        )

    if not session:
        raise RuntimeError("DB session not available")

    return build_use_cases(
        reservation_repo=ReservationRepoSQL(session),
        vehicle_repo=VehicleRepoSQL(session),
        user_repo=UserRepoSQL(session),
        tx_manager=SQLAlchemyTransactionManager(
            session,
            retry_attempts=settings.deadlock_retry_attempts,
            retry_base_delay=settings.deadlock_retry_base_delay,
        ),
        clock=SystemClock(),
        number_generator=RandomReservationNumberGenerator(),
        pending_soft_hold=settings.pending_soft_hold,
    )
