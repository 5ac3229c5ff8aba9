"""Tests for live table state"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from host_console.booking.floor import TableState, project_floor, project_table
from host_console.models import DiningTable, Reservation

DAY = datetime(2025, 6, 14)
NOW = DAY + timedelta(hours=20)


def at(hour, minute=0):
    return DAY + timedelta(hours=hour, minutes=minute)


def booking(table_id, start, end, status="confirmed"):
    return Reservation(
        id=uuid4(), table_id=table_id, party_size=2, start_time=start, end_time=end, status=status
    )


@pytest.mark.parametrize(
    "status,expected",
    [
        ("seated", TableState.SEATED),
        ("completed", TableState.DIRTY),
        ("confirmed", TableState.RESERVED),
        ("", TableState.RESERVED),
    ],
)
def test_reservation_spanning_now(status, expected):
    table_id = uuid4()
    current = booking(table_id, at(19), at(21), status=status)

    projection = project_table(NOW, table_id, [current])

    assert projection.state == expected
    assert projection.current is current


def test_only_future_confirmed_reservation():
    table_id = uuid4()
    upcoming = booking(table_id, at(21, 30), at(23, 30))

    projection = project_table(NOW, table_id, [upcoming])

    assert projection.state == TableState.RESERVED
    assert projection.current is None
    assert projection.next is upcoming


def test_no_reservations():
    projection = project_table(NOW, uuid4(), [])

    assert projection.state == TableState.AVAILABLE
    assert projection.current is None
    assert projection.next is None


def test_inactive_and_other_tables_ignored():
    table_id = uuid4()
    reservations = [
        booking(table_id, at(19), at(21), status="cancelled"),
        booking(table_id, at(19), at(21), status="no_show"),
        booking(uuid4(), at(19), at(21), status="seated"),
        booking(table_id, at(21), at(23), status="seated"),
        booking(table_id, at(17), at(19)),
    ]

    projection = project_table(NOW, table_id, reservations)

    assert projection.state == TableState.AVAILABLE


def test_reservation_ending_now_is_not_current():
    table_id = uuid4()

    projection = project_table(NOW, table_id, [booking(table_id, at(18), at(20), status="seated")])

    assert projection.state == TableState.AVAILABLE


def test_reservation_starting_now_is_current():
    table_id = uuid4()

    projection = project_table(NOW, table_id, [booking(table_id, at(20), at(22))])

    assert projection.state == TableState.RESERVED
    assert projection.current is not None


def test_current_and_next_picked_by_start_order():
    table_id = uuid4()
    later = booking(table_id, at(23), at(23, 59))
    soon = booking(table_id, at(21), at(23))
    seated = booking(table_id, at(19, 30), at(20, 30), status="seated")

    projection = project_table(NOW, table_id, [later, soon, seated])

    assert projection.state == TableState.SEATED
    assert projection.current is seated
    assert projection.next is soon


def test_projection_is_deterministic():
    table_id = uuid4()
    reservations = [
        booking(table_id, at(19), at(21), status="completed"),
        booking(table_id, at(19, 30), at(21), status="seated"),
        booking(table_id, at(22), at(23)),
    ]

    first = project_table(NOW, table_id, reservations)
    for _ in range(5):
        again = project_table(NOW, table_id, list(reversed(reservations)))
        assert again == first
    # Earliest start wins among reservations spanning now
    assert first.state == TableState.DIRTY


def test_project_floor_counts():
    t1 = DiningTable(id=uuid4(), label="T1", capacity=2)
    t2 = DiningTable(id=uuid4(), label="T2", capacity=4)
    reservations = [
        booking(t1.id, at(19), at(21), status="seated"),
        booking(t2.id, at(21), at(23)),
        booking(t2.id, at(12), at(14), status="completed"),
        booking(t2.id, at(13), at(15), status="no_show"),
    ]

    view = project_floor(NOW, [t1, t2], reservations)

    assert [ft.projection.state for ft in view.tables] == [TableState.SEATED, TableState.RESERVED]
    assert view.counts == {"upcoming": 1, "seated": 1, "completed": 1, "no_shows": 1}


@pytest.mark.asyncio
async def test_floor_endpoint(authenticated_client: AsyncClient, floor, add_reservation):
    seated = await add_reservation(floor.t1, at(19), at(21), status="seated", party_size=2)
    upcoming = await add_reservation(floor.t2, at(21), at(23), party_size=5, spend_pkr=12500)

    response = await authenticated_client.get(
        f"/restaurants/{floor.restaurant_id}/floor", params={"at": "2025-06-14T20:00:00"}
    )

    assert response.status_code == 200
    data = response.json()
    by_label = {t["table"]["label"]: t for t in data["tables"]}
    # Inactive tables are not on the floor
    assert set(by_label) == {"T1", "T2"}

    assert by_label["T1"]["state"] == "seated"
    assert by_label["T1"]["current"]["id"] == str(seated)
    assert by_label["T1"]["current"]["table"]["label"] == "T1"

    assert by_label["T2"]["state"] == "reserved"
    assert by_label["T2"]["current"] is None
    assert by_label["T2"]["next"]["id"] == str(upcoming)
    assert by_label["T2"]["next"]["spend_pkr"] == 12500

    assert data["counts"]["seated"] == 1
    assert data["counts"]["upcoming"] == 1


@pytest.mark.asyncio
async def test_day_reservations_endpoint(authenticated_client: AsyncClient, floor, add_reservation):
    late = await add_reservation(floor.t2, at(21), at(23), status="Cancelled")
    early = await add_reservation(floor.t1, at(12), at(14))
    await add_reservation(floor.t1, DAY + timedelta(days=1, hours=12), DAY + timedelta(days=1, hours=14))

    response = await authenticated_client.get(
        f"/restaurants/{floor.restaurant_id}/reservations", params={"day": "2025-06-14"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["day"] == "2025-06-14"
    assert data["total"] == 2
    assert [r["id"] for r in data["items"]] == [str(early), str(late)]
    # Status leaves as its bucket; relations are single objects
    assert data["items"][1]["status"] == "cancelled"
    assert data["items"][0]["table"] == {"id": str(floor.t1), "label": "T1", "capacity": 2}
    assert data["items"][0]["customer"] is None


@pytest.mark.asyncio
async def test_console_requires_token(client: AsyncClient, floor):
    response = await client.get(f"/restaurants/{floor.restaurant_id}/floor")

    assert response.status_code == 401
    assert response.json()["error"] == "Could not validate credentials"


@pytest.mark.asyncio
async def test_console_rejects_bad_token(client: AsyncClient, floor):
    client.headers["Authorization"] = "Bearer not-a-jwt"

    response = await client.get(f"/restaurants/{floor.restaurant_id}/floor")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_console_rejects_expired_token(client: AsyncClient, floor, token_factory):
    client.headers["Authorization"] = f"Bearer {token_factory(expires_in=-60)}"

    response = await client.get(f"/restaurants/{floor.restaurant_id}/floor")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_console_restaurant_scoping(client: AsyncClient, floor, token_factory):
    client.headers["Authorization"] = f"Bearer {token_factory(restaurant_id=str(uuid4()))}"
    response = await client.get(f"/restaurants/{floor.restaurant_id}/floor")
    assert response.status_code == 403

    client.headers["Authorization"] = f"Bearer {token_factory(restaurant_id=str(floor.restaurant_id))}"
    response = await client.get(f"/restaurants/{floor.restaurant_id}/floor")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_restaurant(authenticated_client: AsyncClient):
    response = await authenticated_client.get(f"/restaurants/{uuid4()}/floor")

    assert response.status_code == 404
    assert response.json() == {"error": "Restaurant not found"}
