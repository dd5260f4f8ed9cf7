"""
Pytest configuration and shared fixtures.

Provides:
- Test settings (in-memory SQLite, anonymous auth, metrics off)
- A ticking fake clock
- Store, repository and service wired to an in-memory database
- FastAPI test client
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.crud.customer_crud import CustomerRepository
from app.db.bootstrap import initialize_schema
from app.db.store import StoreAdapter
from app.main import create_app
from app.services.customer_service import CustomerService


class FakeClock:
    """Returns a strictly later time on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never read the environment's .env file."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite+pysqlite:///:memory:",
        AUTH_SCHEME="anonymous",
        ENABLE_METRICS=False,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def raw_store():
    """Connected store with no tables."""
    store = StoreAdapter("sqlite+pysqlite:///:memory:")
    store.ensure_connected()
    yield store
    store.dispose()


@pytest.fixture
def store(raw_store: StoreAdapter) -> StoreAdapter:
    """Connected store with the customers table in place."""
    initialize_schema(raw_store)
    return raw_store


@pytest.fixture
def repository(store: StoreAdapter, clock: FakeClock) -> CustomerRepository:
    return CustomerRepository(store, clock=clock)


@pytest.fixture
def service(repository: CustomerRepository, clock: FakeClock) -> CustomerService:
    return CustomerService(repository, clock=clock)


@pytest.fixture
def app_client(test_settings: Settings, clock: FakeClock) -> TestClient:
    app = create_app(test_settings, clock=clock)
    yield TestClient(app)
    app.state.context.close()
