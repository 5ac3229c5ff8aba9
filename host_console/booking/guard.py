"""Reservation creation guarded against double booking

Creation checks the target table for an active overlapping reservation and
inserts only when there is none. The check and the insert for one table are
serialized twice over: an in-process ``asyncio.Lock`` per table, and a row
lock on the table (``SELECT ... FOR UPDATE``) held until commit, which covers
concurrent workers on PostgreSQL. The commit is the linearization point; an
integrity violation raised there is reported as a conflict so a storage-level
exclusion constraint surfaces the same way as the pre-check.
"""

import asyncio
import uuid
import weakref
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from host_console.booking.errors import (
    BookingError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from host_console.booking.intervals import overlaps
from host_console.booking.status import ReservationStatus, is_active
from host_console.models.customer import Customer, GUEST_CUSTOMER_NAME
from host_console.models.reservation import Reservation
from host_console.models.restaurant import DiningTable

logger = structlog.get_logger()

SOURCES = ("phone", "walkin", "app", "whatsapp")


@dataclass
class ReservationDraft:
    """Reservation as requested, before any lookup"""
    restaurant_id: UUID
    table_id: UUID
    party_size: int
    start_time: datetime
    end_time: datetime
    source: str = "phone"
    notes: Optional[str] = None
    created_by: Optional[str] = None
    customer_id: Optional[UUID] = None
    meal: Optional[str] = None


class TableLockRegistry:
    """One asyncio lock per table id, dropped once nobody holds or awaits it"""

    def __init__(self):
        self._locks = weakref.WeakValueDictionary()

    def get(self, table_id) -> asyncio.Lock:
        lock = self._locks.get(table_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[table_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, table_id):
        lock = self.get(table_id)
        async with lock:
            yield


table_locks = TableLockRegistry()


def validate_draft(draft: ReservationDraft) -> None:
    """Reject malformed drafts without touching storage"""
    if not draft.restaurant_id:
        raise ValidationError("restaurant_id is required")
    if not draft.table_id:
        raise ValidationError("table_id is required")
    if isinstance(draft.party_size, bool) or not isinstance(draft.party_size, int):
        raise ValidationError("party_size must be an integer")
    if draft.party_size < 1:
        raise ValidationError("party_size must be at least 1")
    if draft.start_time is None or draft.end_time is None:
        raise ValidationError("start_time and end_time are required")
    if draft.end_time <= draft.start_time:
        raise ValidationError("end_time must be after start_time")
    if draft.source not in SOURCES:
        raise ValidationError(f"source must be one of: {', '.join(SOURCES)}")


def find_conflicts(
    reservations: Iterable[Reservation],
    table_id: UUID,
    start: datetime,
    end: datetime,
) -> List[Reservation]:
    """Active reservations on ``table_id`` overlapping ``[start, end)``"""
    conflicts = [
        r for r in reservations
        if r.table_id == table_id
        and is_active(r.status)
        and overlaps(start, end, r.start_time, r.end_time)
    ]
    return sorted(conflicts, key=lambda r: r.start_time)


async def _find_guest_customer(db: AsyncSession, restaurant_id: UUID) -> Optional[Customer]:
    result = await db.execute(
        select(Customer)
        .where(
            Customer.restaurant_id == restaurant_id,
            Customer.name == GUEST_CUSTOMER_NAME,
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def insert_guest_customer(db: AsyncSession, restaurant_id: UUID) -> Customer:
    """Insert the placeholder customer, or return the one another worker just made.

    The insert runs in a savepoint; the unique index on the guest row turns a
    concurrent duplicate into an IntegrityError, after which the committed row
    is read back instead.
    """
    guest = Customer(
        id=uuid.uuid4(),
        restaurant_id=restaurant_id,
        name=GUEST_CUSTOMER_NAME,
        phone="",
    )
    try:
        async with db.begin_nested():
            db.add(guest)
    except IntegrityError:
        existing = await _find_guest_customer(db, restaurant_id)
        if existing is None:
            raise
        logger.info("Guest customer created concurrently", restaurant_id=str(restaurant_id))
        return existing

    logger.info("Guest customer created", restaurant_id=str(restaurant_id))
    return guest


async def get_or_create_guest_customer(db: AsyncSession, restaurant_id: UUID) -> Customer:
    """The restaurant's placeholder customer, created on first use"""
    guest = await _find_guest_customer(db, restaurant_id)
    if guest:
        return guest
    return await insert_guest_customer(db, restaurant_id)


async def _load_table(db: AsyncSession, draft: ReservationDraft) -> DiningTable:
    result = await db.execute(
        select(DiningTable)
        .where(
            DiningTable.id == draft.table_id,
            DiningTable.restaurant_id == draft.restaurant_id,
        )
        .with_for_update()
    )
    table = result.scalar_one_or_none()

    if not table or table.is_active is False:
        raise NotFoundError("Table not found")
    if draft.party_size > table.capacity:
        raise ValidationError("Party size exceeds table capacity")
    return table


async def _resolve_customer(db: AsyncSession, draft: ReservationDraft) -> Customer:
    if draft.customer_id is None:
        return await get_or_create_guest_customer(db, draft.restaurant_id)

    result = await db.execute(
        select(Customer).where(
            Customer.id == draft.customer_id,
            Customer.restaurant_id == draft.restaurant_id,
        )
    )
    customer = result.scalar_one_or_none()
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


async def create_reservation(
    db: AsyncSession,
    draft: ReservationDraft,
    locks: Optional[TableLockRegistry] = None,
) -> Reservation:
    """Insert a confirmed reservation unless the table is already booked.

    Raises ValidationError, NotFoundError, ConflictError or StorageError.
    """
    validate_draft(draft)
    locks = locks or table_locks

    async with locks.hold(draft.table_id):
        try:
            table = await _load_table(db, draft)
            customer = await _resolve_customer(db, draft)

            result = await db.execute(
                select(Reservation).where(
                    Reservation.table_id == draft.table_id,
                    Reservation.start_time < draft.end_time,
                    Reservation.end_time > draft.start_time,
                )
            )
            conflicts = find_conflicts(
                result.scalars().all(), draft.table_id, draft.start_time, draft.end_time
            )
            if conflicts:
                logger.info(
                    "Reservation conflict",
                    restaurant_id=str(draft.restaurant_id),
                    table_id=str(draft.table_id),
                    conflicting=[str(r.id) for r in conflicts],
                )
                raise ConflictError(
                    "Table is already booked for that time",
                    conflict_ids=[r.id for r in conflicts],
                )

            reservation = Reservation(
                id=uuid.uuid4(),
                restaurant_id=draft.restaurant_id,
                table_id=draft.table_id,
                customer_id=customer.id,
                table=table,
                customer=customer,
                party_size=draft.party_size,
                start_time=draft.start_time,
                end_time=draft.end_time,
                status=ReservationStatus.CONFIRMED.value,
                source=draft.source,
                notes=draft.notes,
                meal=draft.meal,
                created_by=draft.created_by,
            )
            db.add(reservation)
            await db.commit()

        except BookingError:
            await db.rollback()
            raise
        except IntegrityError as e:
            await db.rollback()
            logger.warning("Reservation rejected at insert", table_id=str(draft.table_id), error=str(e))
            raise ConflictError("Table is already booked for that time") from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Reservation insert failed", table_id=str(draft.table_id), error=str(e))
            raise StorageError(str(e)) from e

    logger.info(
        "Reservation created",
        reservation_id=str(reservation.id),
        restaurant_id=str(draft.restaurant_id),
        table_id=str(draft.table_id),
        party_size=draft.party_size,
    )
    return reservation
