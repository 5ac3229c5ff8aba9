"""Availability schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from host_console.schemas.reservation import ReservationResponse
from host_console.schemas.table import TableResponse


class AvailabilityRequest(BaseModel):
    """Availability query"""
    restaurant_id: Optional[UUID] = Field(default=None, alias="restaurantId")
    start: Optional[datetime] = None
    party_size: Optional[int] = Field(default=None, alias="partySize")
    duration_minutes: Optional[int] = Field(default=None, alias="durationMinutes")

    class Config:
        populate_by_name = True


class BlockedTableResponse(BaseModel):
    table: TableResponse
    conflicts: List[ReservationResponse]


class AvailabilityResponse(BaseModel):
    """Tables that fit the party, split by whether the window is free"""
    start: datetime
    end: datetime
    party_size: int = Field(alias="partySize")
    duration_minutes: int = Field(alias="durationMinutes")
    available: List[TableResponse] = []
    blocked: List[BlockedTableResponse] = []

    class Config:
        populate_by_name = True
