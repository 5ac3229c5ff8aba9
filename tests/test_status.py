"""Tests for status bucketing and the overlap rule"""

from datetime import datetime

import pytest

from host_console.booking.intervals import overlaps, to_utc_naive, turn_window
from host_console.booking.status import ReservationStatus, classify, is_active


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("cancelled", ReservationStatus.CANCELLED),
        ("no_show", ReservationStatus.NO_SHOW),
        ("completed", ReservationStatus.COMPLETED),
        ("seated", ReservationStatus.SEATED),
        ("confirmed", ReservationStatus.CONFIRMED),
        ("  Seated ", ReservationStatus.SEATED),
        ("CANCELLED", ReservationStatus.CANCELLED),
        ("", ReservationStatus.CONFIRMED),
        (None, ReservationStatus.CONFIRMED),
        ("foo", ReservationStatus.CONFIRMED),
        ("pending", ReservationStatus.CONFIRMED),
        ("no-show", ReservationStatus.CONFIRMED),
    ],
)
def test_classify(raw, expected):
    assert classify(raw) == expected
    # Same input, same bucket
    assert classify(raw) == classify(raw)


def test_inactive_buckets():
    assert not is_active("cancelled")
    assert not is_active("no_show")
    assert is_active("seated")
    assert is_active("completed")
    assert is_active("whatever")


def test_overlap_is_half_open():
    a_start, a_end = datetime(2025, 6, 14, 19), datetime(2025, 6, 14, 21)

    assert overlaps(a_start, a_end, datetime(2025, 6, 14, 20), datetime(2025, 6, 14, 22))
    assert overlaps(a_start, a_end, datetime(2025, 6, 14, 19, 30), datetime(2025, 6, 14, 20, 30))
    assert overlaps(a_start, a_end, datetime(2025, 6, 14, 18), datetime(2025, 6, 14, 23))

    # Touching endpoints never conflict
    assert not overlaps(a_start, a_end, datetime(2025, 6, 14, 21), datetime(2025, 6, 14, 23))
    assert not overlaps(a_start, a_end, datetime(2025, 6, 14, 17), datetime(2025, 6, 14, 19))


def test_turn_window_defaults_to_two_hours():
    start = datetime(2025, 6, 14, 19)
    assert turn_window(start) == (start, datetime(2025, 6, 14, 21))
    assert turn_window(start, 90) == (start, datetime(2025, 6, 14, 20, 30))


def test_to_utc_naive():
    aware = datetime.fromisoformat("2025-06-14T19:00:00+05:00")
    assert to_utc_naive(aware) == datetime(2025, 6, 14, 14, 0)
    naive = datetime(2025, 6, 14, 19)
    assert to_utc_naive(naive) is naive
