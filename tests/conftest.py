"""Pytest fixtures for CivicDesk tests."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from civicdesk.complaints.domain import Actor, Complaint
from civicdesk.complaints.infrastructure import InMemoryComplaintRepository
from civicdesk.complaints.infrastructure.models import ComplaintModel  # noqa: F401  registers the table
from civicdesk.config import ActorRole, ComplaintStatus, Priority
from civicdesk.infrastructure.database import Base, get_session
from civicdesk.main import app
from civicdesk.routing.application import StaticDepartmentProvider
from civicdesk.routing.domain import DepartmentConfig
from civicdesk.routing.infrastructure import get_department_provider


# In-memory SQLite shared across sessions through a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant for deterministic SLA tests."""
    return datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def department_config() -> DepartmentConfig:
    return DepartmentConfig()


@pytest.fixture
def department_provider(department_config) -> StaticDepartmentProvider:
    return StaticDepartmentProvider(department_config)


@pytest.fixture
def main_admin() -> Actor:
    return Actor(username="admin", role=ActorRole.MAIN_ADMIN)


@pytest.fixture
def water_admin() -> Actor:
    return Actor(username="water_lead", role=ActorRole.SUB_ADMIN, department="Water")


@pytest.fixture
def roads_admin() -> Actor:
    return Actor(username="roads_lead", role=ActorRole.SUB_ADMIN, department="Roads")


def make_complaint(
    complaint_id: str,
    department: str = "Water",
    created_at: datetime = datetime(2024, 3, 10, 0, 0, tzinfo=timezone.utc),
    updated_at: datetime = None,
    **overrides
) -> Complaint:
    """Build a complaint with sensible defaults."""
    fields = dict(
        id=complaint_id,
        citizen_name="Jane Smith",
        department=department,
        description=f"Complaint {complaint_id}",
        location="Main Street",
        priority=Priority.LOW,
        status=ComplaintStatus.NEW,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )
    fields.update(overrides)
    return Complaint(**fields)


@pytest.fixture
def sample_complaints(now) -> list[Complaint]:
    """
    A small mixed set around `now`.

    - c1 Water, High, New, 2h old, photo
    - c2 Roads, Medium, Seen, 60h old (12h left of 72: approaching)
    - c3 Water, Low, Completed, 50h old, resolved after 10h
    - c4 Garbage, Medium, In Progress, 30h old (overdue), photo
    - c5 Roads, High, Closed, 100h old
    """
    return [
        make_complaint(
            "c1", "Water", now - timedelta(hours=2),
            description="Urgent gas leak near Market Square", location="Market Square",
            priority=Priority.HIGH, photos=["leak.jpg"],
        ),
        make_complaint(
            "c2", "Roads", now - timedelta(hours=60),
            description="Pothole on Elm Road", location="Elm Road",
            citizen_name="Raj Patel", priority=Priority.MEDIUM, status=ComplaintStatus.SEEN,
        ),
        make_complaint(
            "c3", "Water", now - timedelta(hours=50), now - timedelta(hours=40),
            description="Tap dripping", location="Market Square",
            priority=Priority.LOW, status=ComplaintStatus.COMPLETED,
        ),
        make_complaint(
            "c4", "Garbage", now - timedelta(hours=30),
            description="Garbage not collected", location="Oak Avenue",
            citizen_name="Ana Lopez", priority=Priority.MEDIUM,
            status=ComplaintStatus.IN_PROGRESS, photos=["bins.jpg"],
        ),
        make_complaint(
            "c5", "Roads", now - timedelta(hours=100), now - timedelta(hours=1),
            description="Broken traffic signal", location="5th Street",
            priority=Priority.HIGH, status=ComplaintStatus.CLOSED,
        ),
    ]


@pytest.fixture
def memory_repository(sample_complaints) -> InMemoryComplaintRepository:
    return InMemoryComplaintRepository(sample_complaints)


@pytest_asyncio.fixture
async def async_engine():
    """Create async engine with the complaint schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_maker, department_provider) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with a per-request session on the test database."""

    async def override_get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_department_provider] = lambda: department_provider

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


def actor_headers(username: str, role: str, department: str = None) -> dict:
    headers = {"X-Actor-Username": username, "X-Actor-Role": role}
    if department:
        headers["X-Actor-Department"] = department
    return headers
