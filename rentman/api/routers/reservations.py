from collections.abc import Sequence
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from rentman.api.dependencies import get_actor, get_use_cases
from rentman.api.errors import unwrap
from rentman.api.schemas.reservations import (
    AvailabilityResponse,
    CancelReservationRequest,
    CompleteReservationRequest,
    ConfirmReservationRequest,
    CreateReservationRequest,
    MonthlyRevenueResponse,
    ReservationResponse,
    RevenueResponse,
    StartReservationRequest,
    StatisticsResponse,
    UpdateReservationRequest,
)
from rentman.application.dtos.reservation_dto import Actor
from rentman.application.use_cases.reservation_queries import day_bounds
from rentman.domain.entities.reservation import Reservation, ReservationStatus

router = APIRouter()


def _one(reservation: Reservation) -> ReservationResponse:
    return ReservationResponse.model_validate(reservation)


def _many(reservations: Sequence[Reservation]) -> list[ReservationResponse]:
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    payload: CreateReservationRequest,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["create_reservation"].execute(
        customer_id=payload.customer_id,
        vehicle_id=payload.vehicle_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        options=payload.to_options(),
        actor=actor,
    )
    return _one(unwrap(result))


@router.get("/reservations", response_model=list[ReservationResponse])
async def list_reservations(
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
    customer_id: int | None = None,
    vehicle_id: int | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    lookup = use_cases["get_reservation"]
    if customer_id is not None:
        result = await lookup.by_customer(customer_id)
    elif vehicle_id is not None:
        result = await lookup.by_vehicle(vehicle_id)
    elif status_filter is not None:
        result = await lookup.by_status(status_filter, company_id)
    elif company_id is not None:
        result = await lookup.by_company(company_id)
    else:
        result = await lookup.all()
    return _many(unwrap(result))


# --- Rutas estáticas antes de /reservations/{reservation_id} ---


@router.get("/reservations/active", response_model=list[ReservationResponse])
async def current_active(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["queries"].current_active(today, company_id)))


@router.get("/reservations/upcoming", response_model=list[ReservationResponse])
async def upcoming(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["queries"].upcoming(today, company_id)))


@router.get("/reservations/overdue", response_model=list[ReservationResponse])
async def overdue(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["queries"].overdue(today, company_id)))


@router.get("/reservations/today/pickups", response_model=list[ReservationResponse])
async def today_pickups(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["queries"].pending_pickup(today, company_id)))


@router.get("/reservations/today/returns", response_model=list[ReservationResponse])
async def today_returns(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["queries"].pending_return(today, company_id)))


@router.get("/reservations/availability", response_model=AvailabilityResponse)
async def check_availability(
    vehicle_id: int,
    start_date: date,
    end_date: date,
    use_cases=Depends(get_use_cases),
) -> AvailabilityResponse:
    available = unwrap(await use_cases["check_availability"].execute(vehicle_id, start_date, end_date))
    return AvailabilityResponse(
        vehicle_id=vehicle_id,
        start_date=start_date,
        end_date=end_date,
        available=available,
    )


@router.get("/reservations/statistics", response_model=StatisticsResponse)
async def statistics(
    today: date | None = None,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> StatisticsResponse:
    stats = unwrap(await use_cases["queries"].statistics(today, company_id))
    return StatisticsResponse.model_validate(stats)


@router.get("/reservations/revenue", response_model=RevenueResponse)
async def revenue(
    start_date: date,
    end_date: date,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> RevenueResponse:
    start, _ = day_bounds(start_date)
    _, end = day_bounds(end_date)
    total = unwrap(await use_cases["queries"].revenue(start, end, company_id))
    return RevenueResponse(
        start_date=start_date,
        end_date=end_date,
        company_id=company_id,
        total_revenue=total,
    )


@router.get("/reservations/revenue/monthly", response_model=MonthlyRevenueResponse)
async def monthly_revenue(
    year: int,
    month: int = Query(ge=1, le=12),
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> MonthlyRevenueResponse:
    total = unwrap(await use_cases["queries"].monthly_revenue(year, month, company_id))
    return MonthlyRevenueResponse(year=year, month=month, company_id=company_id, total_revenue=total)


@router.get("/reservations/number/{reservation_number}", response_model=ReservationResponse)
async def get_by_number(
    reservation_number: str,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    return _one(unwrap(await use_cases["get_reservation"].by_number(reservation_number)))


@router.get("/reservations/customer/{customer_id}", response_model=list[ReservationResponse])
async def list_by_customer(customer_id: int, use_cases=Depends(get_use_cases)) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["get_reservation"].by_customer(customer_id)))


@router.get("/reservations/vehicle/{vehicle_id}", response_model=list[ReservationResponse])
async def list_by_vehicle(vehicle_id: int, use_cases=Depends(get_use_cases)) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["get_reservation"].by_vehicle(vehicle_id)))


@router.get("/reservations/status/{reservation_status}", response_model=list[ReservationResponse])
async def list_by_status(
    reservation_status: ReservationStatus,
    company_id: int | None = None,
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    return _many(unwrap(await use_cases["get_reservation"].by_status(reservation_status, company_id)))


# --- Recurso individual ---


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: int, use_cases=Depends(get_use_cases)) -> ReservationResponse:
    return _one(unwrap(await use_cases["get_reservation"].by_id(reservation_id)))


@router.put("/reservations/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: int,
    payload: UpdateReservationRequest,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["update_reservation"].execute(
        reservation_id=reservation_id,
        changes=payload.to_changes(),
        actor=actor,
    )
    return _one(unwrap(result))


@router.delete("/reservations/{reservation_id}", status_code=status.HTTP_200_OK)
async def delete_reservation(
    reservation_id: int,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> dict:
    deleted_id = unwrap(await use_cases["delete_reservation"].execute(reservation_id, actor=actor))
    return {"deleted": True, "id": deleted_id}


@router.patch("/reservations/{reservation_id}/confirm", response_model=ReservationResponse)
async def confirm_reservation(
    reservation_id: int,
    payload: ConfirmReservationRequest | None = None,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    payload = payload or ConfirmReservationRequest()
    result = await use_cases["confirm_reservation"].execute(
        reservation_id=reservation_id,
        employee_id=payload.employee_id,
        actor=actor,
    )
    return _one(unwrap(result))


@router.patch("/reservations/{reservation_id}/start", response_model=ReservationResponse)
async def start_reservation(
    reservation_id: int,
    payload: StartReservationRequest,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["start_reservation"].execute(
        reservation_id=reservation_id,
        pickup_mileage=payload.pickup_mileage,
        fuel_level=payload.fuel_level,
        condition=payload.condition,
        employee_id=payload.employee_id,
        actor=actor,
    )
    return _one(unwrap(result))


@router.patch("/reservations/{reservation_id}/complete", response_model=ReservationResponse)
async def complete_reservation(
    reservation_id: int,
    payload: CompleteReservationRequest,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["complete_reservation"].execute(
        reservation_id=reservation_id,
        return_mileage=payload.return_mileage,
        fuel_level=payload.fuel_level,
        condition=payload.condition,
        additional_fees=payload.additional_fees,
        notes=payload.notes,
        employee_id=payload.employee_id,
        actor=actor,
    )
    return _one(unwrap(result))


@router.patch("/reservations/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: int,
    payload: CancelReservationRequest | None = None,
    actor: Actor = Depends(get_actor),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    payload = payload or CancelReservationRequest()
    result = await use_cases["cancel_reservation"].execute(
        reservation_id=reservation_id,
        reason=payload.reason,
        actor=actor,
    )
    return _one(unwrap(result))
