"""Customer model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from host_console.database import Base

# Placeholder customer used when a booking names nobody
GUEST_CUSTOMER_NAME = "Guest"


class Customer(Base):
    """Restaurant guest"""
    __tablename__ = "customers"
    __table_args__ = (
        # At most one placeholder guest per restaurant
        Index(
            "uq_customers_guest_per_restaurant",
            "restaurant_id",
            unique=True,
            postgresql_where=text(f"name = '{GUEST_CUSTOMER_NAME}'"),
            sqlite_where=text(f"name = '{GUEST_CUSTOMER_NAME}'"),
        ),
    )
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(255))
    phone = Column(String(20), default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="customers")
    reservations = relationship("Reservation", back_populates="customer")
