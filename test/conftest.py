# ============================================================================
# FILE: test/conftest.py
# Shared fixtures for ALL test suites
# ============================================================================

import pytest
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from api.app import create_app
from db.db import build_engine, get_db
from db.models import Base, KeyModel
from key_handler.config import Settings
from key_handler.services.claim_limiter import ClaimLimiter
from key_handler.services.cover_service import CoverResolver

ADMIN_TOKEN = "test-admin-token"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def test_engine():
    """Fresh in-memory SQLite store per test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine):
    SessionLocal = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return ClaimLimiter(attempt_window_seconds=10, success_cooldown_seconds=1800, clock=clock)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        admin_token=ADMIN_TOKEN,
        static_dir=None,
    )


@pytest.fixture
def cover_resolver():
    return CoverResolver(search_url="https://search.invalid/api/storesearch/", timeout_seconds=1)


@pytest.fixture
def app(settings, limiter, cover_resolver, db_session, test_engine):
    """Application wired to the per-test store."""
    app = create_app(settings, claim_limiter=limiter, cover_resolver=cover_resolver)
    RequestSession = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        # Fresh session per request, mirroring db.db.get_db
        session = RequestSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return {"x-admin-token": ADMIN_TOKEN}


@pytest.fixture
def make_key(db_session):
    """Insert a key directly and return it."""
    counter = {"n": 0}

    def _make_key(title=None, image_url=None, secret=None):
        counter["n"] += 1
        key = KeyModel(
            title=title or f"Game {counter['n']}",
            image_url=image_url or f"https://img.example/{counter['n']}.jpg",
            secret=secret or f"SECRET-{counter['n']:04d}",
            claimed=False,
        )
        db_session.add(key)
        db_session.commit()
        db_session.refresh(key)
        return key

    return _make_key


