"""Test configuration and fixtures"""

from datetime import datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from host_console.main import app
from host_console.config import settings
from host_console.database import Base, get_db
from host_console.models import Customer, DiningTable, Reservation, Restaurant


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DAY = datetime(2025, 6, 14)


def at(hour: int, minute: int = 0) -> datetime:
    """Naive UTC instant on the test day"""
    return DAY + timedelta(hours=hour, minutes=minute)


def make_token(sub: str = None, restaurant_id: str = None, expires_in: int = 900) -> str:
    """Token shaped like the identity provider's"""
    payload = {
        "sub": sub or str(uuid4()),
        "email": "host@example.com",
        "aud": settings.auth_jwt_audience,
        "exp": datetime.utcnow() + timedelta(seconds=expires_in),
        "role": "authenticated",
    }
    if restaurant_id:
        payload["app_metadata"] = {"restaurant_id": restaurant_id}
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    
    async with session_factory() as session:
        yield session
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest.fixture
async def floor(test_db):
    """Restaurant with T1 (cap 2), T2 (cap 6) and an inactive T9 (cap 8).

    Yields plain ids so tests stay valid after the session rolls back.
    """
    restaurant = Restaurant(id=uuid4(), name="Test Restaurant", timezone="UTC")
    test_db.add(restaurant)
    await test_db.flush()
    
    t1 = DiningTable(id=uuid4(), restaurant_id=restaurant.id, label="T1", capacity=2, pos_x=40, pos_y=40, is_active=True)
    t2 = DiningTable(id=uuid4(), restaurant_id=restaurant.id, label="T2", capacity=6, pos_x=220, pos_y=40, is_active=True)
    t9 = DiningTable(id=uuid4(), restaurant_id=restaurant.id, label="T9", capacity=8, is_active=False)
    test_db.add_all([t1, t2, t9])
    await test_db.commit()
    
    return SimpleNamespace(restaurant_id=restaurant.id, t1=t1.id, t2=t2.id, t9=t9.id)


@pytest.fixture
async def customer(test_db, floor):
    """Identified guest with a phone number"""
    c = Customer(id=uuid4(), restaurant_id=floor.restaurant_id, name="Ayesha Khan", phone="+923001234567")
    test_db.add(c)
    await test_db.commit()
    return c.id


@pytest.fixture
def add_reservation(test_db, floor):
    """Insert a reservation directly, bypassing the conflict guard"""
    async def _add(table_id, start, end, status="confirmed", party_size=2, **kwargs):
        r = Reservation(
            id=uuid4(),
            restaurant_id=floor.restaurant_id,
            table_id=table_id,
            party_size=party_size,
            start_time=start,
            end_time=end,
            status=status,
            source=kwargs.pop("source", "phone"),
            **kwargs,
        )
        test_db.add(r)
        await test_db.commit()
        return r.id
    return _add


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    
    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(client):
    """Create authenticated test client"""
    client.headers["Authorization"] = f"Bearer {make_token()}"
    return client


@pytest.fixture
def token_factory():
    return make_token
