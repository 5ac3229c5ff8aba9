"""Live table state for the floor view"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from host_console.booking.status import ReservationStatus, classify, is_active
from host_console.models.reservation import Reservation
from host_console.models.restaurant import DiningTable

_OCCUPYING = (
    ReservationStatus.SEATED,
    ReservationStatus.CONFIRMED,
    ReservationStatus.COMPLETED,
)


class TableState(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SEATED = "seated"
    DIRTY = "dirty"


@dataclass
class TableProjection:
    state: TableState
    current: Optional[Reservation] = None
    next: Optional[Reservation] = None


@dataclass
class FloorTable:
    table: DiningTable
    projection: TableProjection


@dataclass
class FloorView:
    tables: List[FloorTable] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)


def project_table(now: datetime, table_id: UUID, reservations: Iterable[Reservation]) -> TableProjection:
    """State of one table at ``now`` given the day's reservations.

    ``current`` is the first booking spanning ``now``; a seated one makes the
    table seated, a completed one leaves it dirty, and a confirmed one means
    the arrival window is open. Otherwise an upcoming confirmed booking keeps
    the table reserved.
    """
    mine = sorted(
        (r for r in reservations if r.table_id == table_id and is_active(r.status)),
        key=lambda r: r.start_time,
    )

    current = next(
        (
            r for r in mine
            if classify(r.status) in _OCCUPYING and r.start_time <= now < r.end_time
        ),
        None,
    )
    upcoming = next(
        (
            r for r in mine
            if r.start_time > now and classify(r.status) == ReservationStatus.CONFIRMED
        ),
        None,
    )

    if current is not None:
        bucket = classify(current.status)
        if bucket == ReservationStatus.SEATED:
            return TableProjection(TableState.SEATED, current, upcoming)
        if bucket == ReservationStatus.COMPLETED:
            return TableProjection(TableState.DIRTY, current, upcoming)
        return TableProjection(TableState.RESERVED, current, upcoming)

    if upcoming is not None:
        return TableProjection(TableState.RESERVED, None, upcoming)
    return TableProjection(TableState.AVAILABLE)


def project_floor(
    now: datetime,
    tables: Iterable[DiningTable],
    reservations: Iterable[Reservation],
) -> FloorView:
    reservations = list(reservations)
    view = FloorView(
        tables=[
            FloorTable(table=t, projection=project_table(now, t.id, reservations))
            for t in tables
        ]
    )

    buckets = [classify(r.status) for r in reservations]
    view.counts = {
        "upcoming": sum(
            1 for r, b in zip(reservations, buckets)
            if b == ReservationStatus.CONFIRMED and r.start_time > now
        ),
        "seated": buckets.count(ReservationStatus.SEATED),
        "completed": buckets.count(ReservationStatus.COMPLETED),
        "no_shows": buckets.count(ReservationStatus.NO_SHOW),
    }
    return view
