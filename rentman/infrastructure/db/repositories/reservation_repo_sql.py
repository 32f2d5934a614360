from dataclasses import asdict, fields
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import and_, delete, func, insert, not_, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from rentman.domain.errors import OptimisticLockError, ReservationNumberExistsError
from rentman.domain.value_objects.date_range import DateRange
from rentman.infrastructure.db.tables import reservations

_DATETIME_FIELDS = (
    "pickup_time",
    "return_time",
    "created_at",
    "updated_at",
    "confirmed_at",
    "completed_at",
    "cancelled_at",
)
_ENTITY_FIELDS = tuple(f.name for f in fields(Reservation))


def to_db_datetime(value: datetime | None) -> datetime | None:
    """Las columnas DateTime guardan UTC sin zona horaria."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_datetime(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_row(reservation: Reservation) -> dict[str, Any]:
    values = asdict(reservation)
    values.pop("id", None)
    values["status"] = reservation.status.value
    for name in _DATETIME_FIELDS:
        values[name] = to_db_datetime(values[name])
    return values


def _to_entity(row) -> Reservation:
    data = {name: row[name] for name in _ENTITY_FIELDS if name in row}
    data["status"] = ReservationStatus(row["status"])
    for name in _DATETIME_FIELDS:
        data[name] = from_db_datetime(data.get(name))
    return Reservation(**data)


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, *where) -> Reservation | None:
        stmt = select(reservations).where(*where).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def _fetch_all(self, *where, order_by=None) -> list[Reservation]:
        stmt = select(reservations).where(*where)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    @staticmethod
    def _scoped(conditions: list, company_id: int | None) -> list:
        if company_id is not None:
            conditions.append(reservations.c.company_id == company_id)
        return conditions

    async def get(self, reservation_id: int) -> Reservation | None:
        return await self._fetch_one(reservations.c.id == reservation_id)

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        return await self._fetch_one(reservations.c.reservation_number == reservation_number)

    async def add(self, reservation: Reservation) -> Reservation:
        if await self.get_by_number(reservation.reservation_number) is not None:
            raise ReservationNumberExistsError(reservation.reservation_number)
        try:
            result = await self._session.execute(insert(reservations).values(_to_row(reservation)))
        except IntegrityError as exc:
            raise ReservationNumberExistsError(reservation.reservation_number) from exc
        reservation.id = result.inserted_primary_key[0]
        return reservation

    async def save(self, reservation: Reservation, expected_lock_version: int) -> None:
        stmt = (
            update(reservations)
            .where(
                reservations.c.id == reservation.id,
                reservations.c.lock_version == expected_lock_version,
            )
            .values(_to_row(reservation))
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError(reservation.id, expected_lock_version)

    async def delete(self, reservation_id: int) -> None:
        await self._session.execute(delete(reservations).where(reservations.c.id == reservation_id))

    async def count_conflicting(
        self,
        vehicle_id: int,
        dates: DateRange,
        statuses: Sequence[ReservationStatus],
        exclude_id: int | None = None,
    ) -> int:
        conditions = [
            reservations.c.vehicle_id == vehicle_id,
            reservations.c.status.in_([s.value for s in statuses]),
            not_(
                or_(
                    reservations.c.end_date < dates.start,
                    reservations.c.start_date > dates.end,
                )
            ),
        ]
        if exclude_id is not None:
            conditions.append(reservations.c.id != exclude_id)
        stmt = select(func.count()).select_from(reservations).where(and_(*conditions))
        result = await self._session.execute(stmt)
        return int(result.scalar() or 0)

    async def list_all(self) -> Sequence[Reservation]:
        return await self._fetch_all(order_by=(reservations.c.id,))

    async def list_by_customer(self, customer_id: int) -> Sequence[Reservation]:
        return await self._fetch_all(
            reservations.c.customer_id == customer_id,
            order_by=(reservations.c.created_at.desc(), reservations.c.id.desc()),
        )

    async def list_by_vehicle(self, vehicle_id: int) -> Sequence[Reservation]:
        return await self._fetch_all(
            reservations.c.vehicle_id == vehicle_id,
            order_by=(reservations.c.start_date.desc(), reservations.c.id.desc()),
        )

    async def list_by_status(
        self, status: ReservationStatus, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped([reservations.c.status == status.value], company_id)
        return await self._fetch_all(
            *conditions,
            order_by=(reservations.c.created_at.desc(), reservations.c.id.desc()),
        )

    async def list_by_company(self, company_id: int) -> Sequence[Reservation]:
        return await self._fetch_all(
            reservations.c.company_id == company_id,
            order_by=(reservations.c.created_at.desc(), reservations.c.id.desc()),
        )

    async def find_current_active(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped(
            [
                reservations.c.status.in_([s.value for s in ACTIVE_STATUSES]),
                reservations.c.start_date <= today,
                reservations.c.end_date >= today,
            ],
            company_id,
        )
        return await self._fetch_all(*conditions, order_by=(reservations.c.start_date, reservations.c.id))

    async def find_upcoming(
        self, today: date, until: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped(
            [
                reservations.c.status == ReservationStatus.CONFIRMED.value,
                reservations.c.start_date >= today,
                reservations.c.start_date <= until,
            ],
            company_id,
        )
        return await self._fetch_all(*conditions, order_by=(reservations.c.start_date, reservations.c.id))

    async def find_overdue(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped(
            [
                reservations.c.status.in_([s.value for s in ACTIVE_STATUSES]),
                reservations.c.end_date < today,
            ],
            company_id,
        )
        return await self._fetch_all(*conditions, order_by=(reservations.c.end_date, reservations.c.id))

    async def find_pending_pickup(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped(
            [
                reservations.c.status == ReservationStatus.CONFIRMED.value,
                reservations.c.start_date == today,
            ],
            company_id,
        )
        return await self._fetch_all(*conditions, order_by=(reservations.c.id,))

    async def find_pending_return(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        conditions = self._scoped(
            [
                reservations.c.status == ReservationStatus.IN_PROGRESS.value,
                reservations.c.end_date == today,
            ],
            company_id,
        )
        return await self._fetch_all(*conditions, order_by=(reservations.c.id,))

    async def sum_revenue(
        self, start: datetime, end: datetime, company_id: int | None = None
    ) -> Decimal:
        conditions = self._scoped(
            [
                reservations.c.status == ReservationStatus.COMPLETED.value,
                reservations.c.completed_at >= to_db_datetime(start),
                reservations.c.completed_at <= to_db_datetime(end),
            ],
            company_id,
        )
        stmt = select(func.coalesce(func.sum(reservations.c.total_amount), 0)).where(*conditions)
        result = await self._session.execute(stmt)
        return Decimal(str(result.scalar() or 0))

    async def count_by_status(self, company_id: int | None = None) -> dict[str, int]:
        stmt = select(reservations.c.status, func.count()).group_by(reservations.c.status)
        if company_id is not None:
            stmt = stmt.where(reservations.c.company_id == company_id)
        result = await self._session.execute(stmt)
        return {status: int(count) for status, count in result.all()}
