"""Database models"""

from host_console.models.restaurant import Restaurant, DiningTable
from host_console.models.customer import Customer, GUEST_CUSTOMER_NAME
from host_console.models.reservation import Reservation

__all__ = [
    "Restaurant",
    "DiningTable",
    "Customer",
    "GUEST_CUSTOMER_NAME",
    "Reservation",
]
