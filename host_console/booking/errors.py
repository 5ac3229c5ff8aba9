"""Booking error taxonomy

Every error carries the HTTP status it maps to so the API layer can render
it without knowing the concrete type. ``retryable`` tells callers whether
repeating the same request may succeed.
"""

from typing import List, Optional


class BookingError(Exception):
    """Base class for booking failures"""
    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Missing or malformed input, raised before any I/O"""
    status_code = 400


class NotFoundError(BookingError):
    """Referenced table, customer or restaurant does not exist"""
    status_code = 404


class ConflictError(BookingError):
    """An active reservation already overlaps the requested window"""
    status_code = 409

    def __init__(self, message: str, conflict_ids: Optional[List] = None):
        super().__init__(message)
        self.conflict_ids = conflict_ids or []


class StorageError(BookingError):
    """The database was unreachable or rejected the operation"""
    status_code = 500
    retryable = True
