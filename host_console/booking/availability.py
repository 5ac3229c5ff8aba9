"""Table availability for a party and time window"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from host_console.booking.errors import StorageError, ValidationError
from host_console.booking.intervals import overlaps
from host_console.booking.status import is_active
from host_console.models.reservation import Reservation
from host_console.models.restaurant import DiningTable

logger = structlog.get_logger()


@dataclass
class BlockedTable:
    table: DiningTable
    conflicts: List[Reservation]


@dataclass
class Availability:
    available: List[DiningTable] = field(default_factory=list)
    blocked: List[BlockedTable] = field(default_factory=list)


def _fit_order(table: DiningTable):
    # Tightest fit first
    return (table.capacity, table.label or "")


def candidate_tables(tables: Iterable[DiningTable], party_size: int) -> List[DiningTable]:
    """Active tables that seat the party, smallest first"""
    fitting = [
        t for t in tables
        if t.is_active is not False and t.capacity >= party_size
    ]
    return sorted(fitting, key=_fit_order)


def partition_tables(
    tables: Iterable[DiningTable],
    reservations: Iterable[Reservation],
    start: datetime,
    end: datetime,
) -> Availability:
    """Split tables into free ones and ones blocked by an overlapping booking"""
    by_table: Dict[UUID, List[Reservation]] = {}
    for r in reservations:
        if r.table_id is None or not is_active(r.status):
            continue
        if not overlaps(start, end, r.start_time, r.end_time):
            continue
        by_table.setdefault(r.table_id, []).append(r)

    result = Availability()
    for table in sorted(tables, key=_fit_order):
        conflicts = by_table.get(table.id)
        if conflicts:
            conflicts.sort(key=lambda r: r.start_time)
            result.blocked.append(BlockedTable(table=table, conflicts=conflicts))
        else:
            result.available.append(table)
    return result


def validate_query(
    restaurant_id: Optional[UUID],
    start: Optional[datetime],
    end: Optional[datetime],
    party_size: Optional[int],
) -> None:
    if not restaurant_id:
        raise ValidationError("restaurantId is required")
    if start is None:
        raise ValidationError("start is required")
    if party_size is None:
        raise ValidationError("partySize is required")
    if party_size < 1:
        raise ValidationError("partySize must be at least 1")
    if end is None or end <= start:
        raise ValidationError("end must be after start")


async def resolve_availability(
    db: AsyncSession,
    restaurant_id: UUID,
    start: datetime,
    end: datetime,
    party_size: int,
) -> Availability:
    """Available and blocked tables for ``party_size`` over ``[start, end)``"""
    validate_query(restaurant_id, start, end, party_size)

    try:
        result = await db.execute(
            select(DiningTable)
            .where(
                DiningTable.restaurant_id == restaurant_id,
                DiningTable.is_active == True,
                DiningTable.capacity >= party_size,
            )
            .order_by(DiningTable.capacity, DiningTable.label)
        )
        tables = result.scalars().all()

        if not tables:
            logger.info(
                "No tables fit party",
                restaurant_id=str(restaurant_id),
                party_size=party_size,
            )
            return Availability()

        result = await db.execute(
            select(Reservation).where(
                Reservation.restaurant_id == restaurant_id,
                Reservation.table_id.in_([t.id for t in tables]),
                Reservation.start_time < end,
                Reservation.end_time > start,
            )
            .options(
                selectinload(Reservation.customer),
                selectinload(Reservation.table),
            )
        )
        reservations = result.scalars().all()
    except SQLAlchemyError as e:
        logger.error("Availability lookup failed", restaurant_id=str(restaurant_id), error=str(e))
        raise StorageError(f"Availability check failed: {e}") from e

    availability = partition_tables(tables, reservations, start, end)

    logger.info(
        "Availability resolved",
        restaurant_id=str(restaurant_id),
        party_size=party_size,
        available=len(availability.available),
        blocked=len(availability.blocked),
    )
    return availability
