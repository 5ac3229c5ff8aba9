"""Day overview figures for the host console"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from host_console.booking.intervals import TURN_MINUTES, add_minutes, overlaps
from host_console.booking.status import ReservationStatus, classify, is_active
from host_console.models.reservation import Reservation
from host_console.models.restaurant import DiningTable

SLOT_STEP_MINUTES = 30
SLOT_HORIZON_MINUTES = 6 * 60
HEADLINE_PARTY_SIZES = (2, 4, 6)

_BUSY = (
    ReservationStatus.CONFIRMED,
    ReservationStatus.SEATED,
    ReservationStatus.COMPLETED,
)


@dataclass
class NextFree:
    table: DiningTable
    at: datetime


@dataclass
class DaySummary:
    covers: int = 0
    reservations: int = 0
    seated_now: int = 0
    upcoming: int = 0
    completed: int = 0
    no_shows: int = 0
    available_now: List[DiningTable] = field(default_factory=list)
    busy_now: List[DiningTable] = field(default_factory=list)
    next_free: Optional[NextFree] = None


def summarize_day(
    now: datetime,
    tables: Iterable[DiningTable],
    reservations: Iterable[Reservation],
) -> DaySummary:
    """Counts and table occupancy at ``now``; cancelled bookings are ignored"""
    tables = list(tables)
    active = [
        r for r in reservations
        if classify(r.status) != ReservationStatus.CANCELLED
    ]

    summary = DaySummary(
        covers=sum(r.party_size or 0 for r in active),
        reservations=len(active),
    )

    free_at: Dict[UUID, datetime] = {}
    for r in active:
        bucket = classify(r.status)
        spans_now = r.start_time <= now < r.end_time

        if bucket == ReservationStatus.SEATED and spans_now:
            summary.seated_now += 1
        elif bucket == ReservationStatus.CONFIRMED and r.start_time > now:
            summary.upcoming += 1
        elif bucket == ReservationStatus.COMPLETED:
            summary.completed += 1
        elif bucket == ReservationStatus.NO_SHOW:
            summary.no_shows += 1

        if r.table_id is not None and spans_now and bucket in _BUSY:
            prev = free_at.get(r.table_id)
            if prev is None or r.end_time < prev:
                free_at[r.table_id] = r.end_time

    for t in tables:
        (summary.busy_now if t.id in free_at else summary.available_now).append(t)

    for t in summary.busy_now:
        at = free_at[t.id]
        if summary.next_free is None or at < summary.next_free.at:
            summary.next_free = NextFree(table=t, at=at)

    return summary


def next_available_slot(
    now: datetime,
    tables: Iterable[DiningTable],
    reservations: Iterable[Reservation],
    party_size: int,
    turn_minutes: int = TURN_MINUTES,
) -> Optional[datetime]:
    """Earliest half-hour slot within six hours where a fitting table is free"""
    candidates = [t for t in tables if t.capacity >= party_size]
    if not candidates:
        return None

    booked: Dict[UUID, List[Reservation]] = {}
    for r in reservations:
        if r.table_id is not None and is_active(r.status):
            booked.setdefault(r.table_id, []).append(r)

    slot = now.replace(second=0, microsecond=0)
    horizon = add_minutes(slot, SLOT_HORIZON_MINUTES)
    while slot <= horizon:
        slot_end = add_minutes(slot, turn_minutes)
        for table in candidates:
            if not any(
                overlaps(slot, slot_end, r.start_time, r.end_time)
                for r in booked.get(table.id, [])
            ):
                return slot
        slot = add_minutes(slot, SLOT_STEP_MINUTES)
    return None
