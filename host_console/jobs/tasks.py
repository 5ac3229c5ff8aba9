"""Background job tasks"""

from uuid import UUID
import asyncio
import structlog

from host_console.jobs.celery_app import celery_app
from host_console.notifications.whatsapp import (
    MessagingError,
    reservation_confirmation_text,
    send_whatsapp,
)
from host_console.timeutil import to_local

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


async def _confirmation_details(reservation_id: str):
    from sqlalchemy import select
    from sqlalchemy.orm import selectinload

    from host_console.database import SessionLocal
    from host_console.models.reservation import Reservation

    async with SessionLocal() as db:
        result = await db.execute(
            select(Reservation)
            .where(Reservation.id == UUID(reservation_id))
            .options(
                selectinload(Reservation.customer),
                selectinload(Reservation.restaurant),
            )
        )
        return result.scalar_one_or_none()


@celery_app.task(name="send_reservation_confirmation")
def send_reservation_confirmation(reservation_id: str):
    """WhatsApp the guest a confirmation of their booking"""
    logger.info("Sending reservation confirmation", reservation_id=reservation_id)

    reservation = run_async(_confirmation_details(reservation_id))
    if not reservation or not reservation.customer or not reservation.customer.phone:
        logger.warning("No phone for reservation confirmation", reservation_id=reservation_id)
        return None

    restaurant = reservation.restaurant
    body = reservation_confirmation_text(
        restaurant.name,
        reservation.party_size,
        to_local(reservation.start_time, restaurant.timezone),
    )

    try:
        return send_whatsapp(reservation.customer.phone, body)
    except MessagingError as e:
        logger.error(
            "Failed to send reservation confirmation",
            reservation_id=reservation_id,
            error=str(e),
        )
        return None
