"""Reservation model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Text, CheckConstraint, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from host_console.database import Base


class Reservation(Base):
    """Booked time window on a table"""
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_reservations_window"),
        CheckConstraint("party_size >= 1", name="ck_reservations_party_size"),
        Index("ix_reservations_table_window", "table_id", "start_time", "end_time"),
    )
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False, index=True)
    table_id = Column(UUID(as_uuid=True), ForeignKey("tables.id"))
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"))
    
    party_size = Column(Integer, nullable=False)
    
    # Half-open [start_time, end_time), naive UTC
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    
    # Free text, read through booking.status.classify
    status = Column(String(50), default="confirmed")  # confirmed, seated, completed, cancelled, no_show
    source = Column(String(20), default="phone")  # phone, walkin, app, whatsapp
    
    notes = Column(Text)
    meal = Column(String(50))
    spend_pkr = Column(Numeric(12, 2))
    
    # Metadata
    created_by = Column(String(64))
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="reservations")
    table = relationship("DiningTable", back_populates="reservations")
    customer = relationship("Customer", back_populates="reservations")
