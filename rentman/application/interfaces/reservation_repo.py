from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from rentman.domain.entities.reservation import Reservation, ReservationStatus
from rentman.domain.value_objects.date_range import DateRange


class ReservationRepo:
    """
    Persistencia del agregado Reservation.

    Las consultas temporales reciben `today` explícito; los rangos son
    inclusivos tal como están documentados en cada método.
    """

    async def get(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        raise NotImplementedError

    async def add(self, reservation: Reservation) -> Reservation:
        """Inserta y asigna `id`. ReservationNumberExistsError si el número ya existe."""
        raise NotImplementedError

    async def save(self, reservation: Reservation, expected_lock_version: int) -> None:
        """Persiste todos los campos. OptimisticLockError si la versión no coincide."""
        raise NotImplementedError

    async def delete(self, reservation_id: int) -> None:
        raise NotImplementedError

    async def count_conflicting(
        self,
        vehicle_id: int,
        dates: DateRange,
        statuses: Sequence[ReservationStatus],
        exclude_id: int | None = None,
    ) -> int:
        """Reservas del vehículo con NOT (end < dates.start OR start > dates.end)."""
        raise NotImplementedError

    async def list_all(self) -> Sequence[Reservation]:
        raise NotImplementedError

    async def list_by_customer(self, customer_id: int) -> Sequence[Reservation]:
        """Más recientes primero (created_at desc)."""
        raise NotImplementedError

    async def list_by_vehicle(self, vehicle_id: int) -> Sequence[Reservation]:
        """Por fecha de inicio descendente."""
        raise NotImplementedError

    async def list_by_status(
        self, status: ReservationStatus, company_id: int | None = None
    ) -> Sequence[Reservation]:
        raise NotImplementedError

    async def list_by_company(self, company_id: int) -> Sequence[Reservation]:
        raise NotImplementedError

    async def find_current_active(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        """CONFIRMED/IN_PROGRESS con start_date <= today <= end_date."""
        raise NotImplementedError

    async def find_upcoming(
        self, today: date, until: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        """CONFIRMED con today <= start_date <= until, por start_date ascendente."""
        raise NotImplementedError

    async def find_overdue(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        """CONFIRMED/IN_PROGRESS con end_date < today."""
        raise NotImplementedError

    async def find_pending_pickup(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        """CONFIRMED con start_date == today."""
        raise NotImplementedError

    async def find_pending_return(
        self, today: date, company_id: int | None = None
    ) -> Sequence[Reservation]:
        """IN_PROGRESS con end_date == today."""
        raise NotImplementedError

    async def sum_revenue(
        self, start: datetime, end: datetime, company_id: int | None = None
    ) -> Decimal:
        """Suma de total_amount de COMPLETED con start <= completed_at <= end."""
        raise NotImplementedError

    async def count_by_status(self, company_id: int | None = None) -> dict[str, int]:
        raise NotImplementedError
