"""Availability check endpoint"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from host_console.booking.availability import resolve_availability
from host_console.booking.errors import ValidationError
from host_console.booking.intervals import to_utc_naive, turn_window
from host_console.config import settings
from host_console.database import get_db
from host_console.schemas.availability import (
    AvailabilityRequest,
    AvailabilityResponse,
    BlockedTableResponse,
)
from host_console.schemas.reservation import ReservationResponse
from host_console.schemas.table import TableResponse

router = APIRouter()


@router.post("", response_model=AvailabilityResponse)
async def check_availability(
    request: AvailabilityRequest,
    db: AsyncSession = Depends(get_db),
):
    """Tables that seat the party, free or blocked over the requested window"""
    duration = request.duration_minutes
    if duration is None:
        duration = settings.turn_minutes
    if duration < 1:
        raise ValidationError("durationMinutes must be positive")
    if request.start is None:
        raise ValidationError("start is required")

    start, end = turn_window(to_utc_naive(request.start), duration)

    availability = await resolve_availability(
        db,
        request.restaurant_id,
        start,
        end,
        request.party_size,
    )

    return AvailabilityResponse(
        start=start,
        end=end,
        party_size=request.party_size,
        duration_minutes=duration,
        available=[TableResponse.model_validate(t) for t in availability.available],
        blocked=[
            BlockedTableResponse(
                table=TableResponse.model_validate(b.table),
                conflicts=[ReservationResponse.model_validate(r) for r in b.conflicts],
            )
            for b in availability.blocked
        ],
    )
