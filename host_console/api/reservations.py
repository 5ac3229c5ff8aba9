"""Reservation creation endpoint"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from host_console.booking.guard import ReservationDraft, create_reservation
from host_console.booking.intervals import to_utc_naive
from host_console.config import settings
from host_console.database import get_db
from host_console.schemas.reservation import ReservationCreate, ReservationCreated

router = APIRouter()
logger = structlog.get_logger()


@router.post("/create", response_model=ReservationCreated)
async def create(
    reservation_data: ReservationCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a confirmed reservation unless the table is taken"""
    draft = ReservationDraft(
        restaurant_id=reservation_data.restaurant_id,
        table_id=reservation_data.table_id,
        party_size=reservation_data.party_size,
        start_time=to_utc_naive(reservation_data.start_time),
        end_time=to_utc_naive(reservation_data.end_time),
        source=reservation_data.source,
        notes=reservation_data.notes or None,
        created_by=reservation_data.created_by,
        customer_id=reservation_data.customer_id,
        meal=reservation_data.meal,
    )

    reservation = await create_reservation(db, draft)

    if settings.whatsapp_confirmations_enabled and reservation.customer.phone:
        _enqueue_confirmation(str(reservation.id))

    return ReservationCreated(id=reservation.id)


def _enqueue_confirmation(reservation_id: str):
    """Queue the guest's WhatsApp confirmation; the booking stands regardless"""
    from host_console.jobs.celery_app import celery_app

    try:
        celery_app.send_task("send_reservation_confirmation", args=[reservation_id])
    except Exception as e:
        logger.error(
            "Failed to queue reservation confirmation",
            reservation_id=reservation_id,
            error=str(e),
        )
