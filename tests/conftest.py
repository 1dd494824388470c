"""Test configuration and fixtures"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from food_delivery.main import app
from food_delivery.database import Base, get_db
from food_delivery.api.payments import get_payment_gateway
from food_delivery.models.restaurant import MenuCategory, MenuItem
from food_delivery.payments import SimulatedPaymentGateway
from food_delivery.security import create_access_token
from food_delivery.services import addresses

from tests.helpers import address_data, create_restaurant, create_user

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

@pytest.fixture
async def session_factory():
    """Create test database and return its session factory"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()

@pytest.fixture
async def file_session_factory(tmp_path):
    """
    Session factory on a file database, one connection per session.

    Stands in for several app processes sharing one store.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shared.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()

@pytest.fixture
async def test_db(session_factory):
    """Session on the test database"""
    async with session_factory() as session:
        yield session

@pytest.fixture
async def test_user(test_db):
    """Create a test user"""
    return await create_user(test_db)

@pytest.fixture
async def other_user(test_db):
    """A second customer"""
    return await create_user(test_db, email="other@example.com", name="Other User")

@pytest.fixture
async def test_restaurant(test_db):
    """Create a test restaurant"""
    return await create_restaurant(test_db)

@pytest.fixture
async def test_menu_items(test_db, test_restaurant):
    """Create test menu items: two available, one unavailable"""
    category = MenuCategory(restaurant_id=test_restaurant.id, name="Mains", display_order=1)
    test_db.add(category)
    await test_db.flush()

    items = [
        MenuItem(
            restaurant_id=test_restaurant.id,
            category_id=category.id,
            name="Paneer Tikka",
            description="Char-grilled cottage cheese",
            price_cents=20000,
            is_veg=True,
        ),
        MenuItem(
            restaurant_id=test_restaurant.id,
            category_id=category.id,
            name="Butter Chicken",
            description="Creamy tomato gravy",
            price_cents=30000,
            is_veg=False,
        ),
        MenuItem(
            restaurant_id=test_restaurant.id,
            category_id=category.id,
            name="Seasonal Special",
            price_cents=25000,
            is_available=False,
        ),
    ]

    for item in items:
        test_db.add(item)

    await test_db.commit()
    return items

@pytest.fixture
async def test_address(test_db, test_user):
    """Default address 2.78 km from the test restaurant"""
    return await addresses.add_address(test_db, test_user.id, address_data())

@pytest.fixture
def always_approve():
    return SimulatedPaymentGateway(success_rate=1.0, refund_success_rate=1.0)

@pytest.fixture
def always_decline():
    return SimulatedPaymentGateway(success_rate=0.0, refund_success_rate=0.0)

@pytest.fixture
async def client(test_db, always_approve):
    """Create test client with overridden database and payment gateway"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: always_approve

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

@pytest.fixture
async def authenticated_client(client, test_user):
    """Create authenticated test client"""
    token = create_access_token(test_user)
    client.headers["Authorization"] = f"Bearer {token}"

    return client
