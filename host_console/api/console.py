"""Host console read endpoints: day list, floor and today overview"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from host_console.api.auth import ConsoleUser, verify_restaurant_access
from host_console.booking.errors import NotFoundError
from host_console.booking.floor import project_floor
from host_console.booking.guests import customer_history, likely_to_show
from host_console.booking.intervals import to_utc_naive
from host_console.booking.status import ReservationStatus, classify
from host_console.booking.today import HEADLINE_PARTY_SIZES, next_available_slot, summarize_day
from host_console.config import settings
from host_console.database import get_db
from host_console.models.reservation import Reservation
from host_console.models.restaurant import DiningTable, Restaurant
from host_console.schemas.floor import (
    FloorResponse,
    FloorTableResponse,
    GuestInsight,
    NextFreeResponse,
    TodayResponse,
)
from host_console.schemas.reservation import ReservationListResponse, ReservationResponse
from host_console.schemas.table import TableResponse
from host_console.timeutil import day_bounds, local_day, utcnow

router = APIRouter()


async def _get_restaurant(db: AsyncSession, restaurant_id: UUID) -> Restaurant:
    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()
    if not restaurant:
        raise NotFoundError("Restaurant not found")
    return restaurant


async def _active_tables(db: AsyncSession, restaurant_id: UUID) -> List[DiningTable]:
    result = await db.execute(
        select(DiningTable)
        .where(
            DiningTable.restaurant_id == restaurant_id,
            DiningTable.is_active == True,
        )
        .order_by(DiningTable.label)
    )
    return list(result.scalars().all())


async def _day_reservations(db: AsyncSession, restaurant: Restaurant, day: date) -> List[Reservation]:
    day_start, day_end = day_bounds(day, restaurant.timezone)
    result = await db.execute(
        select(Reservation)
        .where(
            Reservation.restaurant_id == restaurant.id,
            Reservation.start_time >= day_start,
            Reservation.start_time < day_end,
        )
        .options(
            selectinload(Reservation.customer),
            selectinload(Reservation.table),
        )
        .order_by(Reservation.start_time)
    )
    return list(result.scalars().all())


def _instant(at: Optional[datetime]) -> datetime:
    return to_utc_naive(at) if at else utcnow()


def _row(reservation: Optional[Reservation]) -> Optional[ReservationResponse]:
    if reservation is None:
        return None
    return ReservationResponse.model_validate(reservation)


@router.get("/reservations", response_model=ReservationListResponse)
async def list_day_reservations(
    restaurant_id: UUID,
    day: Optional[date] = Query(None, description="Restaurant-local day, defaults to today"),
    current_user: ConsoleUser = Depends(verify_restaurant_access),
    db: AsyncSession = Depends(get_db),
):
    """Reservations starting on one day, ordered by start time"""
    restaurant = await _get_restaurant(db, restaurant_id)
    day = day or local_day(utcnow(), restaurant.timezone)

    reservations = await _day_reservations(db, restaurant, day)

    return ReservationListResponse(
        day=day.isoformat(),
        items=[ReservationResponse.model_validate(r) for r in reservations],
        total=len(reservations),
    )


@router.get("/floor", response_model=FloorResponse)
async def get_floor(
    restaurant_id: UUID,
    at: Optional[datetime] = None,
    current_user: ConsoleUser = Depends(verify_restaurant_access),
    db: AsyncSession = Depends(get_db),
):
    """Live state of every active table"""
    restaurant = await _get_restaurant(db, restaurant_id)
    now = _instant(at)

    tables = await _active_tables(db, restaurant_id)
    reservations = await _day_reservations(db, restaurant, local_day(now, restaurant.timezone))

    view = project_floor(now, tables, reservations)

    return FloorResponse(
        at=now,
        tables=[
            FloorTableResponse(
                table=TableResponse.model_validate(ft.table),
                state=ft.projection.state,
                current=_row(ft.projection.current),
                next=_row(ft.projection.next),
            )
            for ft in view.tables
        ],
        counts=view.counts,
    )


@router.get("/today", response_model=TodayResponse)
async def get_today(
    restaurant_id: UUID,
    at: Optional[datetime] = None,
    current_user: ConsoleUser = Depends(verify_restaurant_access),
    db: AsyncSession = Depends(get_db),
):
    """Covers, occupancy, next free slots and guest insights for the day"""
    restaurant = await _get_restaurant(db, restaurant_id)
    now = _instant(at)
    day = local_day(now, restaurant.timezone)

    tables = await _active_tables(db, restaurant_id)
    reservations = await _day_reservations(db, restaurant, day)

    summary = summarize_day(now, tables, reservations)
    next_slots = {
        str(size): next_available_slot(
            now, tables, reservations, size, turn_minutes=settings.turn_minutes
        )
        for size in HEADLINE_PARTY_SIZES
    }

    active = [r for r in reservations if classify(r.status) != ReservationStatus.CANCELLED]
    customer_ids = {r.customer_id for r in active if r.customer_id is not None}
    histories = {}
    if customer_ids:
        result = await db.execute(
            select(Reservation).where(
                Reservation.restaurant_id == restaurant_id,
                Reservation.customer_id.in_(list(customer_ids)),
            )
        )
        histories = customer_history(result.scalars().all())

    guests = []
    for r in active:
        history = histories.get(r.customer_id)
        guests.append(
            GuestInsight(
                reservation_id=r.id,
                customer_id=r.customer_id,
                repeat=history.is_repeat if history else False,
                likely_to_show=likely_to_show(history, r, now),
                visits=history.visits if history else 0,
                no_shows=history.no_shows if history else 0,
                avg_spend=history.avg_spend if history else None,
                last_visit=history.last_visit if history else None,
            )
        )

    next_free = None
    if summary.next_free:
        next_free = NextFreeResponse(
            table=TableResponse.model_validate(summary.next_free.table),
            at=summary.next_free.at,
        )

    return TodayResponse(
        at=now,
        day=day.isoformat(),
        covers=summary.covers,
        reservations=summary.reservations,
        seated_now=summary.seated_now,
        upcoming=summary.upcoming,
        completed=summary.completed,
        no_shows=summary.no_shows,
        total_tables=len(tables),
        available_tables=[TableResponse.model_validate(t) for t in summary.available_now],
        busy_tables=[TableResponse.model_validate(t) for t in summary.busy_now],
        next_free=next_free,
        next_slots=next_slots,
        guests=guests,
    )
