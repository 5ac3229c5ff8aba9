"""Pydantic schemas for request/response validation"""

from host_console.schemas.table import TableResponse, TableBrief
from host_console.schemas.reservation import (
    ReservationCreate,
    ReservationCreated,
    ReservationResponse,
    ReservationListResponse,
    CustomerBrief,
)
from host_console.schemas.availability import (
    AvailabilityRequest,
    AvailabilityResponse,
    BlockedTableResponse,
)
from host_console.schemas.floor import (
    FloorResponse,
    FloorTableResponse,
    TodayResponse,
    GuestInsight,
)
from host_console.schemas.whatsapp import WhatsAppSendRequest, WhatsAppSendResponse

__all__ = [
    "TableResponse",
    "TableBrief",
    "ReservationCreate",
    "ReservationCreated",
    "ReservationResponse",
    "ReservationListResponse",
    "CustomerBrief",
    "AvailabilityRequest",
    "AvailabilityResponse",
    "BlockedTableResponse",
    "FloorResponse",
    "FloorTableResponse",
    "TodayResponse",
    "GuestInsight",
    "WhatsAppSendRequest",
    "WhatsAppSendResponse",
]
