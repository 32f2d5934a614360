import copy
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal

from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from rentman.domain.errors import OptimisticLockError, ReservationNumberExistsError
from rentman.domain.value_objects.date_range import DateRange


class InMemoryReservationRepo(ReservationRepo):
    """Devuelve copias: una entidad modificada no se ve en el store hasta `save`."""

    def __init__(self, store) -> None:
        self._store = store

    def _select(
        self,
        predicate: Callable[[Reservation], bool],
        company_id: int | None = None,
    ) -> Iterable[Reservation]:
        for reservation in self._store.reservations.values():
            if company_id is not None and reservation.company_id != company_id:
                continue
            if predicate(reservation):
                yield reservation

    @staticmethod
    def _copies(items: Iterable[Reservation], key=None, reverse: bool = False) -> list[Reservation]:
        items = list(items)
        if key is not None:
            items.sort(key=key, reverse=reverse)
        return [copy.deepcopy(r) for r in items]

    async def get(self, reservation_id: int) -> Reservation | None:
        reservation = self._store.reservations.get(reservation_id)
        return copy.deepcopy(reservation) if reservation else None

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        for reservation in self._store.reservations.values():
            if reservation.reservation_number == reservation_number:
                return copy.deepcopy(reservation)
        return None

    async def add(self, reservation: Reservation) -> Reservation:
        if await self.get_by_number(reservation.reservation_number) is not None:
            raise ReservationNumberExistsError(reservation.reservation_number)
        reservation.id = self._store.next_id("reservations")
        self._store.reservations[reservation.id] = copy.deepcopy(reservation)
        return reservation

    async def save(self, reservation: Reservation, expected_lock_version: int) -> None:
        current = self._store.reservations.get(reservation.id)
        if current is None or current.lock_version != expected_lock_version:
            raise OptimisticLockError(reservation.id, expected_lock_version)
        self._store.reservations[reservation.id] = copy.deepcopy(reservation)

    async def delete(self, reservation_id: int) -> None:
        self._store.reservations.pop(reservation_id, None)

    async def count_conflicting(
        self,
        vehicle_id: int,
        dates: DateRange,
        statuses: Sequence[ReservationStatus],
        exclude_id: int | None = None,
    ) -> int:
        return sum(
            1
            for r in self._store.reservations.values()
            if r.vehicle_id == vehicle_id
            and r.status in statuses
            and r.id != exclude_id
            and r.date_range.overlaps_with(dates)
        )

    async def list_all(self) -> Sequence[Reservation]:
        return self._copies(self._store.reservations.values(), key=lambda r: r.id)

    async def list_by_customer(self, customer_id: int) -> Sequence[Reservation]:
        return self._copies(
            self._select(lambda r: r.customer_id == customer_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )

    async def list_by_vehicle(self, vehicle_id: int) -> Sequence[Reservation]:
        return self._copies(
            self._select(lambda r: r.vehicle_id == vehicle_id),
            key=lambda r: (r.start_date, r.id),
            reverse=True,
        )

    async def list_by_status(
        self, status: ReservationStatus, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(lambda r: r.status == status, company_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )

    async def list_by_company(self, company_id: int) -> Sequence[Reservation]:
        return self._copies(
            self._select(lambda r: True, company_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )

    async def find_current_active(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(
                lambda r: r.status in ACTIVE_STATUSES and r.start_date <= today <= r.end_date,
                company_id,
            ),
            key=lambda r: (r.start_date, r.id),
        )

    async def find_upcoming(
        self, today: date, until: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(
                lambda r: r.status == ReservationStatus.CONFIRMED and today <= r.start_date <= until,
                company_id,
            ),
            key=lambda r: (r.start_date, r.id),
        )

    async def find_overdue(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(lambda r: r.is_overdue(today), company_id),
            key=lambda r: (r.end_date, r.id),
        )

    async def find_pending_pickup(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(
                lambda r: r.status == ReservationStatus.CONFIRMED and r.start_date == today,
                company_id,
            ),
            key=lambda r: r.id,
        )

    async def find_pending_return(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        return self._copies(
            self._select(
                lambda r: r.status == ReservationStatus.IN_PROGRESS and r.end_date == today,
                company_id,
            ),
            key=lambda r: r.id,
        )

    async def sum_revenue(
        self, start: datetime, end: datetime, company_id: int | None = None
    ) -> Decimal:
        completed = self._select(
            lambda r: r.status == ReservationStatus.COMPLETED
            and r.completed_at is not None
            and start <= r.completed_at <= end,
            company_id,
        )
        return sum((r.total_amount for r in completed), Decimal("0"))

    async def count_by_status(self, company_id: int | None = None) -> dict[str, int]:
        counts: dict[str, int] = {}
        for r in self._select(lambda r: True, company_id):
            counts[r.status.value] = counts.get(r.status.value, 0) + 1
        return counts
