"""
Test configuration and fixtures for the NHBEA backend tests.
"""
import os
import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

import app.models  # noqa: F401
from app.main import app
from app.core.config import settings
from app.core.deps import get_store
from app.core.security import create_access_token, create_admin_token
from app.db.base import Base, get_db
from app.db.store import DocumentStore


# Use a file-based SQLite DB to avoid :memory: multiple-connection issues
# with SQLAlchemy + aiosqlite (each new connection would see an empty DB).
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"


class BrokenStore(DocumentStore):
    """A store whose every operation fails, as when the database is unreachable."""

    def __init__(self):
        super().__init__(session=None)

    async def _fail(self, *args, **kwargs):
        raise ConnectionError("database unreachable")

    get = list = add = set = update = delete = count = _fail


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
    # Clean up test database file
    try:
        os.remove("./test.db")
    except OSError:
        pass


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def store(db_session: AsyncSession) -> DocumentStore:
    """Document store over the test session."""
    return DocumentStore(db_session)


@pytest.fixture
def broken_store() -> DocumentStore:
    return BrokenStore()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def broken_client() -> AsyncGenerator[AsyncClient, None]:
    """Test client whose document store always fails."""
    async def override_get_store():
        return BrokenStore()

    app.dependency_overrides[get_store] = override_get_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    """Authorization headers carrying an admin token."""
    return {"Authorization": f"Bearer {create_admin_token('editor@nhbea.org')}"}


@pytest.fixture
def user_headers() -> dict:
    """Authorization headers for a valid token without the admin role."""
    return {"Authorization": f"Bearer {create_access_token('visitor@example.com')}"}


@pytest.fixture
def square_settings(monkeypatch):
    """Configure sandbox Square credentials."""
    monkeypatch.setattr(settings, "APP_ENV", "test")
    monkeypatch.setattr(settings, "SQUARE_APPLICATION_ID", "test-app-id")
    monkeypatch.setattr(settings, "SQUARE_ACCESS_TOKEN", "test-access-token")
    monkeypatch.setattr(settings, "SQUARE_LOCATION_ID", "test-location-id")
    monkeypatch.setattr(settings, "SQUARE_WEBHOOK_SIGNATURE_KEY", "test-webhook-key")
    return settings


@pytest.fixture
def professional_form() -> dict:
    """A complete, valid professional membership application."""
    return {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "phone": "(555) 123-4567",
        "institution": "Test University",
        "position": "Professor",
        "yearsExperience": 10,
        "address": "123 Main St",
        "city": "Manchester",
        "state": "NH",
        "zipCode": "03101",
        "membershipType": "new",
        "communicationPreferences": {
            "newsletter": True,
            "updates": True,
            "events": True,
        },
    }


@pytest.fixture
def nomination_form() -> dict:
    return {
        "awardId": "award123",
        "awardCategory": "Excellence",
        "nomineeInfo": {
            "name": "John Doe",
            "email": "john@example.com",
            "organization": "Test High School",
            "position": "Business Teacher",
        },
        "nominatorInfo": {
            "name": "Jane Smith",
            "email": "jane@example.com",
            "organization": "Another School",
            "position": "Principal",
        },
        "nominationText": (
            "John is an exceptional educator who has transformed business education "
            "at our school. His innovative teaching methods and dedication to student "
            "success make him truly deserving of this recognition."
        ),
        "agreedToTerms": True,
    }


@pytest.fixture
def registration_form() -> dict:
    return {
        "fullName": "John Doe",
        "email": "john@example.com",
        "phone": "(555) 123-4567",
        "institution": "Test University",
        "membershipStatus": "member",
        "membershipId": "NHBEA-2024-0001",
        "registrationType": "regular",
        "sessionPreferences": ["Digital Marketing", "Entrepreneurship"],
        "agreeToTerms": True,
    }


def conference_document(now: datetime, **overrides) -> dict:
    """Stored conference document with registration open around ``now``."""
    doc = {
        "title": f"{now.year} NHBEA Annual Conference",
        "description": "Annual conference",
        "year": now.year,
        "schedule": {"date": now + timedelta(days=60)},
        "location": {"venue": "Manchester Downtown Hotel"},
        "registration": {
            "isOpen": True,
            "openDate": now - timedelta(days=30),
            "closeDate": now + timedelta(days=30),
            "capacity": 100,
            "currentCount": 0,
            "waitlistEnabled": True,
            "fees": {"member": 100, "nonMember": 150, "student": 50},
        },
        "status": "registration_open",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def make_conference():
    """Factory for stored conference documents (see ``conference_document``)."""
    return conference_document
