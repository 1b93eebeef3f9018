"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; configure the test environment first.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import StaticPool  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.security import create_access_token, hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.appointment import Appointment, AppointmentStatus  # noqa: E402
from app.models.service import Service  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client with overridden dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def _create_user(
    session: AsyncSession,
    email: str,
    name: str,
    role: UserRole,
    password: str = "testpassword123",
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        role=role.value,
        is_active=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def customer_user(async_session: AsyncSession) -> User:
    """Create a test customer."""
    return await _create_user(
        async_session, "customer@booking.local", "Test Customer", UserRole.CUSTOMER
    )


@pytest.fixture
async def other_customer(async_session: AsyncSession) -> User:
    """Create a second customer who owns nothing of the first."""
    return await _create_user(
        async_session, "other@booking.local", "Other Customer", UserRole.CUSTOMER
    )


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """Create a test admin user."""
    return await _create_user(
        async_session,
        "admin@booking.local",
        "Admin User",
        UserRole.ADMIN,
        password="adminpassword123",
    )


@pytest.fixture
async def test_service(async_session: AsyncSession) -> Service:
    """Create an active bookable service."""
    service = Service(
        name="General Consultation",
        description="Professional consultation with experienced staff",
        duration_minutes=30,
        price=Decimal("30"),
        is_active=True,
    )
    async_session.add(service)
    await async_session.commit()
    await async_session.refresh(service)
    return service


@pytest.fixture
async def customer_appointment(
    async_session: AsyncSession, customer_user: User, test_service: Service
) -> Appointment:
    """Create a pending appointment owned by the test customer."""
    appointment = Appointment(
        customer_id=customer_user.id,
        service_id=test_service.id,
        appointment_date=date(2030, 5, 20),
        start_time="10:00 AM",
        end_time="10:30 AM",
        status=AppointmentStatus.PENDING.value,
        notes="First visit",
    )
    async_session.add(appointment)
    await async_session.commit()
    await async_session.refresh(appointment)
    return appointment


def create_test_token(user: User) -> str:
    """Create a test JWT token for a user."""
    return create_access_token(
        subject=user.id,
        additional_claims={
            "role": user.role_value,
            "email": user.email,
        },
    )


@pytest.fixture
def customer_headers(customer_user: User) -> dict[str, str]:
    """Authorization headers for the test customer."""
    return {"Authorization": f"Bearer {create_test_token(customer_user)}"}


@pytest.fixture
def other_customer_headers(other_customer: User) -> dict[str, str]:
    """Authorization headers for the second customer."""
    return {"Authorization": f"Bearer {create_test_token(other_customer)}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    """Authorization headers for the admin user."""
    return {"Authorization": f"Bearer {create_test_token(admin_user)}"}
