import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from rentman.application.dtos.reservation_dto import ReservationStatistics
from rentman.application.interfaces.clock import Clock
from rentman.application.interfaces.reservation_repo import ReservationRepo
from rentman.application.interfaces.transaction_manager import TransactionManager
from rentman.application.result import Err, Ok, Result
from rentman.domain.constants import UPCOMING_WINDOW_DAYS
from rentman.domain.entities.reservation import Reservation
from rentman.domain.errors import ValidationError
from rentman.domain.value_objects.date_range import DateRange
from rentman.domain.value_objects.money import round_money

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Primer y último instante (inclusive) de un mes calendario en UTC."""
    first = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        next_first = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        next_first = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return first, next_first - timedelta(microseconds=1)


class ReservationQueries:
    """
    Consultas de operación y reportes.

    Todas aceptan `today` explícito (por defecto la fecha del reloj inyectado)
    y un `company_id` opcional para acotar a una compañía.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager
        self._clock = clock

    def _today(self, today: date | None) -> date:
        return today or self._clock.today()

    async def current_active(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.find_current_active(self._today(today), company_id))

    async def upcoming(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        window = DateRange.week_from(self._today(today), UPCOMING_WINDOW_DAYS)
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.find_upcoming(window.start, window.end, company_id))

    async def overdue(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.find_overdue(self._today(today), company_id))

    async def pending_pickup(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.find_pending_pickup(self._today(today), company_id))

    async def pending_return(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[Sequence[Reservation]]:
        async with self._transaction_manager.start():
            return Ok(await self._reservation_repo.find_pending_return(self._today(today), company_id))

    async def revenue(
        self, start: datetime, end: datetime, company_id: int | None = None
    ) -> Result[Decimal]:
        """Suma de total_amount de reservas COMPLETED con completed_at en [start, end]."""
        start, end = _as_utc(start), _as_utc(end)
        if end < start:
            return Err(ValidationError("end", "el fin del periodo es anterior al inicio"))
        async with self._transaction_manager.start():
            total = await self._reservation_repo.sum_revenue(start, end, company_id)
        return Ok(round_money(total or Decimal("0")))

    async def monthly_revenue(
        self, year: int, month: int, company_id: int | None = None
    ) -> Result[Decimal]:
        if not 1 <= month <= 12:
            return Err(ValidationError("month", "debe estar entre 1 y 12"))
        start, end = month_bounds(year, month)
        return await self.revenue(start, end, company_id)

    async def statistics(
        self, today: date | None = None, company_id: int | None = None
    ) -> Result[ReservationStatistics]:
        day = self._today(today)
        month_start, month_end = month_bounds(day.year, day.month)
        window = DateRange.week_from(day, UPCOMING_WINDOW_DAYS)
        repo = self._reservation_repo

        async with self._transaction_manager.start():
            by_status = await repo.count_by_status(company_id)
            stats = ReservationStatistics(
                total_reservations=sum(by_status.values()),
                by_status=by_status,
                current_active=len(await repo.find_current_active(day, company_id)),
                upcoming=len(await repo.find_upcoming(window.start, window.end, company_id)),
                overdue=len(await repo.find_overdue(day, company_id)),
                today_pickups=len(await repo.find_pending_pickup(day, company_id)),
                today_returns=len(await repo.find_pending_return(day, company_id)),
                monthly_revenue=round_money(
                    await repo.sum_revenue(month_start, month_end, company_id) or Decimal("0")
                ),
            )

        logger.debug(
            "Reservation statistics computed",
            extra={"today": day.isoformat(), "company_id": company_id, "total": stats.total_reservations},
        )
        return Ok(stats)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Rango [00:00, 23:59:59.999999] UTC de un día; útil para revenue por fechas."""
    return (
        datetime.combine(day, time.min, tzinfo=timezone.utc),
        datetime.combine(day, time.max, tzinfo=timezone.utc),
    )
