"""Reservation schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, field_validator

from host_console.booking.status import ReservationStatus, classify
from host_console.schemas.table import TableBrief


class ReservationCreate(BaseModel):
    """Create reservation request"""
    restaurant_id: UUID
    table_id: UUID
    party_size: int
    start_time: datetime
    end_time: datetime
    source: str = "phone"
    created_by: Optional[str] = None
    notes: Optional[str] = None
    meal: Optional[str] = None
    customer_id: Optional[UUID] = None

    @field_validator("source", mode="before")
    @classmethod
    def default_source(cls, v):
        if v is None or v == "":
            return "phone"
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ReservationCreated(BaseModel):
    """Create reservation response"""
    ok: bool = True
    id: UUID


class CustomerBrief(BaseModel):
    id: UUID
    name: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class ReservationResponse(BaseModel):
    """Reservation row with its table and customer flattened"""
    id: UUID
    start_time: datetime
    end_time: datetime
    party_size: int
    status: ReservationStatus
    source: Optional[str] = None
    notes: Optional[str] = None
    meal: Optional[str] = None
    spend_pkr: Optional[float] = None
    customer: Optional[CustomerBrief] = None
    table: Optional[TableBrief] = None

    @field_validator("status", mode="before")
    @classmethod
    def bucket_status(cls, v):
        return classify(v)

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Reservations for one restaurant-local day"""
    day: str
    items: List[ReservationResponse]
    total: int
