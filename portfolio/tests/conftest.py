"""
Pytest fixtures for Portfolio API tests.
Uses in-memory SQLite, mocks Redis, provides a test admin, auth token and a controllable rate limiter.
"""
import os
from types import SimpleNamespace
import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REDIS_URL"] = ""

from portfolio.app.db.base import Base
from portfolio.main import app
from portfolio.app.core.dependencies import get_db, get_rate_limiter
from portfolio.app.core.security import create_access_token, get_password_hash
from portfolio.app.models.admin_user import AdminUser
from portfolio.app.services.rate_limiter import RateLimiter

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so app uses our test engine
import portfolio.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal
# main.py imports engine directly; patch so startup uses our engine
import portfolio.main as main_module
main_module.engine = engine


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    """5s cooldown on a fake clock, injected in place of the app-lifespan limiter."""
    limiter = RateLimiter(5000, clock=clock)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    yield limiter
    app.dependency_overrides.pop(get_rate_limiter, None)


@pytest.fixture
def test_admin(db_session):
    """Create a test admin in the DB."""
    admin = AdminUser(
        id=1,
        username="admin",
        password_hash=get_password_hash("testpass123"),
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(test_admin):
    """Bearer token for test admin."""
    token = create_access_token(data={"sub": str(test_admin.id), "username": test_admin.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db_session, test_admin, rate_limiter):
    """TestClient with DB, test admin and fake-clock rate limiter."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def mock_redis():
    """Mock Redis cache: get returns None (cache miss), set/delete no-op. Skip connect."""
    with patch("portfolio.app.utils.cache.get", new_callable=AsyncMock, return_value=None) as get, \
         patch("portfolio.app.utils.cache.set", new_callable=AsyncMock) as set_, \
         patch("portfolio.app.utils.cache.delete", new_callable=AsyncMock) as delete, \
         patch("portfolio.app.utils.cache.connect", new_callable=AsyncMock), \
         patch("portfolio.app.utils.cache.close", new_callable=AsyncMock):
        yield SimpleNamespace(get=get, set=set_, delete=delete)


@pytest.fixture
def mock_cache(mock_redis):
    """The patched cache functions, for asserting on invalidation."""
    return mock_redis
