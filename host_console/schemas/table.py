"""Table schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class TableResponse(BaseModel):
    """Floor-plan table"""
    id: UUID
    label: str
    capacity: int
    pos_x: Optional[float] = None
    pos_y: Optional[float] = None

    class Config:
        from_attributes = True


class TableBrief(BaseModel):
    """Table as embedded in a reservation row"""
    id: UUID
    label: str
    capacity: int

    class Config:
        from_attributes = True
