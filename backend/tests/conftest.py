"""
tests/conftest.py

Test fixtures for API integration and engine tests.
Includes async clients, fake users, schema mock data, dependency overrides
and a file-backed SQLite database for running the real services.
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# --- Imports ---
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from main import app
from workhive.application.schemas import ApplicationRead
from workhive.auth.schemas import Actor
from workhive.core.dependencies import get_current_user
from workhive.database.enums import ApplicationStatus, InvoiceStatus, JobStatus, UserRole
from workhive.database.models import User
from workhive.database.session import Database, get_db
from workhive.invoice.schemas import InvoiceRead
from workhive.job.models import Job
from workhive.job.schemas import JobRead


# --- Core Test Fixtures ---


@pytest.fixture(scope="session")
def transport() -> ASGITransport:
    """Fixture for ASGI transport."""
    return ASGITransport(app=app)


@pytest_asyncio.fixture(scope="function")
async def async_client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Fixture for HTTP async client."""
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Fake User Fixtures ---


def _fake_user(role: UserRole, email: str, name: str) -> User:
    now = datetime.now(timezone.utc)
    return User(
        id=uuid4(),
        email=email,
        role=role,
        name=name,
        hashed_password="fakehashedpassword",
        skills=[],
        is_active=True,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def fake_admin_user() -> User:
    """Fixture for a fake admin user."""
    return _fake_user(UserRole.ADMIN, "admin.test@example.com", "Admin Test")


@pytest.fixture
def fake_client_user() -> User:
    """Fixture for a fake client user."""
    return _fake_user(UserRole.CLIENT, "client.test@example.com", "Client Test")


@pytest.fixture
def fake_worker_user() -> User:
    """Fixture for a fake worker user."""
    return _fake_user(UserRole.WORKER, "worker.test@example.com", "Worker Test")


# --- Dependency Override Fixtures ---


@pytest_asyncio.fixture
async def override_get_db() -> AsyncGenerator[None, None]:
    """Override for the database dependency."""

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def mock_current_admin_user(fake_admin_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as an admin."""
    app.dependency_overrides[get_current_user] = lambda: fake_admin_user
    yield fake_admin_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_client_user(fake_client_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as a client."""
    app.dependency_overrides[get_current_user] = lambda: fake_client_user
    yield fake_client_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_worker_user(fake_worker_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as a worker."""
    app.dependency_overrides[get_current_user] = lambda: fake_worker_user
    yield fake_worker_user
    app.dependency_overrides.pop(get_current_user, None)


# --- Fake Data Fixtures (Schema Instances) ---


@pytest.fixture
def fake_job_read(fake_client_user: User) -> JobRead:
    """Fixture for a fake open JobRead owned by the fake client."""
    now = datetime.now(timezone.utc)
    return JobRead(
        id=uuid4(),
        client_id=fake_client_user.id,
        worker_id=None,
        title="Fix kitchen sink",
        description="Leaking pipe under the sink.",
        category="plumbing",
        budget=150.0,
        location="Lagos",
        skills=["plumbing"],
        deadline=now + timedelta(days=7),
        status=JobStatus.OPEN,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def fake_application_read(fake_job_read: JobRead, fake_worker_user: User) -> ApplicationRead:
    """Fixture for a fake pending ApplicationRead."""
    now = datetime.now(timezone.utc)
    return ApplicationRead(
        id=uuid4(),
        job_id=fake_job_read.id,
        worker_id=fake_worker_user.id,
        cover_letter="I have ten years of experience.",
        status=ApplicationStatus.PENDING,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def fake_invoice_read(
    fake_job_read: JobRead, fake_client_user: User, fake_worker_user: User
) -> InvoiceRead:
    """Fixture for a fake pending InvoiceRead."""
    now = datetime.now(timezone.utc)
    return InvoiceRead(
        id=uuid4(),
        job_id=fake_job_read.id,
        client_id=fake_client_user.id,
        worker_id=fake_worker_user.id,
        amount=150.0,
        description="Sink repair",
        status=InvoiceStatus.PENDING,
        due_date=now + timedelta(days=14),
        created_at=now,
        updated_at=now,
    )


# --- Engine Fixtures (real services on SQLite) ---


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Fresh file-backed SQLite database per test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'workhive_test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


@pytest.fixture
def make_actor(db_session: AsyncSession) -> Callable[..., Awaitable[Actor]]:
    """Factory persisting a user and returning its Actor descriptor."""

    async def _make(role: UserRole, name: str | None = None) -> Actor:
        suffix = uuid4().hex[:8]
        user = User(
            email=f"{role.value}.{suffix}@example.com",
            hashed_password="fakehashedpassword",
            role=role,
            name=name or f"{role.value.title()} {suffix}",
        )
        db_session.add(user)
        await db_session.commit()
        return Actor.model_validate(user)

    return _make


@pytest.fixture
def make_job(db_session: AsyncSession) -> Callable[..., Awaitable[Job]]:
    """Factory persisting an open job for the given client.

    The row is detached once committed so a later rollback in the session
    does not expire it.
    """

    async def _make(client: Actor, **overrides: object) -> Job:
        values: dict[str, object] = {
            "title": "Paint the fence",
            "description": "Two coats, white.",
            "category": "painting",
            "budget": 200.0,
            "location": "Abuja",
            "skills": ["painting"],
            "deadline": datetime.now(timezone.utc) + timedelta(days=10),
        }
        values.update(overrides)
        job = Job(client_id=client.id, status=JobStatus.OPEN, **values)
        db_session.add(job)
        await db_session.commit()
        db_session.expunge(job)
        return job

    return _make
