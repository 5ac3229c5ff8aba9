"""Guest history and show-up likelihood"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional
from uuid import UUID

from host_console.booking.status import ReservationStatus, classify
from host_console.models.reservation import Reservation

REPEAT_VISITS = 2


@dataclass
class CustomerHistory:
    customer_id: UUID
    visits: int = 0
    no_shows: int = 0
    avg_spend: Optional[int] = None
    last_visit: Optional[datetime] = None

    @property
    def is_repeat(self) -> bool:
        return self.visits >= REPEAT_VISITS


def customer_history(rows: Iterable[Reservation]) -> Dict[UUID, CustomerHistory]:
    """Aggregate past reservations per customer"""
    histories: Dict[UUID, CustomerHistory] = {}
    spend: Dict[UUID, list] = {}

    for r in rows:
        if r.customer_id is None:
            continue
        h = histories.setdefault(r.customer_id, CustomerHistory(customer_id=r.customer_id))
        bucket = classify(r.status)
        if bucket == ReservationStatus.COMPLETED:
            h.visits += 1
        elif bucket == ReservationStatus.NO_SHOW:
            h.no_shows += 1
        if r.spend_pkr is not None:
            spend.setdefault(r.customer_id, []).append(float(r.spend_pkr))
        if h.last_visit is None or r.start_time > h.last_visit:
            h.last_visit = r.start_time

    for customer_id, amounts in spend.items():
        histories[customer_id].avg_spend = round(sum(amounts) / len(amounts))

    return histories


def likely_to_show(
    history: Optional[CustomerHistory],
    reservation: Reservation,
    now: datetime,
) -> str:
    """High / Medium / Low label from past behaviour and booking shape"""
    p = 0.9
    minutes_to_start = (reservation.start_time - now).total_seconds() / 60

    if history is not None and history.no_shows >= 1:
        p -= 0.25
    if minutes_to_start < 60:
        p -= 0.1
    if (reservation.party_size or 0) >= 6:
        p -= 0.1
    if history is not None and history.visits >= REPEAT_VISITS:
        p += 0.1

    # Round away float noise so 0.9 - 0.1 - 0.1 + 0.1 lands on its threshold
    p = round(p, 4)
    if p >= 0.85:
        return "High"
    if p >= 0.7:
        return "Medium"
    return "Low"
