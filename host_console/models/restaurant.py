"""Restaurant and floor-plan table models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from host_console.database import Base


class Restaurant(Base):
    """Restaurant owning tables, customers and reservations"""
    __tablename__ = "restaurants"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    timezone = Column(String(50), default="Asia/Karachi")
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    tables = relationship("DiningTable", back_populates="restaurant")
    customers = relationship("Customer", back_populates="restaurant")
    reservations = relationship("Reservation", back_populates="restaurant")


class DiningTable(Base):
    """Physical seating unit on the floor plan"""
    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_tables_capacity_positive"),
    )
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False, index=True)
    label = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)
    
    # Floor-plan position in pixels, unset until placed
    pos_x = Column(Float)
    pos_y = Column(Float)
    
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="tables")
    reservations = relationship("Reservation", back_populates="table")
