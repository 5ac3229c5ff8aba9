"""Floor view and day overview schemas"""

from datetime import datetime
from typing import Dict, Optional, List
from uuid import UUID
from pydantic import BaseModel

from host_console.booking.floor import TableState
from host_console.schemas.reservation import ReservationResponse
from host_console.schemas.table import TableResponse


class FloorTableResponse(BaseModel):
    table: TableResponse
    state: TableState
    current: Optional[ReservationResponse] = None
    next: Optional[ReservationResponse] = None


class FloorResponse(BaseModel):
    """Every table with its live state"""
    at: datetime
    tables: List[FloorTableResponse]
    counts: Dict[str, int]


class NextFreeResponse(BaseModel):
    table: TableResponse
    at: datetime


class GuestInsight(BaseModel):
    reservation_id: UUID
    customer_id: Optional[UUID] = None
    repeat: bool = False
    likely_to_show: str
    visits: int = 0
    no_shows: int = 0
    avg_spend: Optional[int] = None
    last_visit: Optional[datetime] = None


class TodayResponse(BaseModel):
    """Day overview"""
    at: datetime
    day: str
    covers: int
    reservations: int
    seated_now: int
    upcoming: int
    completed: int
    no_shows: int
    total_tables: int
    available_tables: List[TableResponse]
    busy_tables: List[TableResponse]
    next_free: Optional[NextFreeResponse] = None
    next_slots: Dict[str, Optional[datetime]]
    guests: List[GuestInsight] = []
