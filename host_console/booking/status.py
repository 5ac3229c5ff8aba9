"""Reservation status buckets"""

import enum
from typing import Optional


class ReservationStatus(str, enum.Enum):
    """Normalized reservation lifecycle bucket"""
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


INACTIVE_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW})

_EXPLICIT = {
    ReservationStatus.CANCELLED.value: ReservationStatus.CANCELLED,
    ReservationStatus.NO_SHOW.value: ReservationStatus.NO_SHOW,
    ReservationStatus.COMPLETED.value: ReservationStatus.COMPLETED,
    ReservationStatus.SEATED.value: ReservationStatus.SEATED,
}


def classify(raw: Optional[str]) -> ReservationStatus:
    """Map a stored status string to its bucket.

    Anything unrecognized, empty included, is an active booking.
    """
    return _EXPLICIT.get((raw or "").strip().lower(), ReservationStatus.CONFIRMED)


def is_active(raw: Optional[str]) -> bool:
    """True unless the reservation was cancelled or marked a no-show"""
    return classify(raw) not in INACTIVE_STATUSES
