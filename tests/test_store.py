"""
Tests for the store adapter.

Tests:
- Connection handling
- Table existence and creation
- Generic row operations
- Error wrapping
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import Column, Integer, String
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.errors import ConstraintViolationError, StorageError, StoreConnectionError
from app.db.store import StoreAdapter


def widget_columns():
    return [
        Column("id", String, primary_key=True),
        Column("label", String, nullable=False, unique=True),
        Column("count", Integer),
    ]


@pytest.fixture
def widgets(raw_store: StoreAdapter) -> StoreAdapter:
    raw_store.create_table("widgets", widget_columns())
    raw_store.insert("widgets", {"id": "w1", "label": "first", "count": 1})
    raw_store.insert("widgets", {"id": "w2", "label": "second", "count": 2})
    return raw_store


class TestConnection:
    """Test suite for ensure_connected."""

    def test_ensure_connected_is_idempotent(self):
        store = StoreAdapter("sqlite+pysqlite:///:memory:")
        engine = store.ensure_connected()

        assert store.ensure_connected() is engine
        store.dispose()

    def test_unreachable_database_raises_connection_error(self, tmp_path):
        store = StoreAdapter(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")

        with pytest.raises(StoreConnectionError) as exc_info:
            store.ensure_connected()

        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)

    def test_unknown_driver_raises_connection_error(self):
        with pytest.raises(StoreConnectionError):
            StoreAdapter("nosuchdriver://localhost/db").ensure_connected()

    def test_dispose_allows_reconnect(self, tmp_path):
        store = StoreAdapter(f"sqlite:///{tmp_path / 'db.sqlite'}")
        first = store.ensure_connected()
        store.dispose()

        assert store.ensure_connected() is not first
        store.dispose()


class TestTables:
    """Test suite for table existence and creation."""

    def test_table_exists(self, raw_store: StoreAdapter):
        assert raw_store.table_exists("widgets") is False

        raw_store.create_table("widgets", widget_columns())

        assert raw_store.table_exists("widgets") is True

    def test_create_existing_table_fails(self, raw_store: StoreAdapter):
        raw_store.create_table("widgets", widget_columns())

        with pytest.raises(StorageError):
            raw_store.create_table("widgets", widget_columns())

    def test_unknown_table_raises_storage_error(self, raw_store: StoreAdapter):
        with pytest.raises(StorageError):
            raw_store.select_all("nothing_here")

    def test_table_created_elsewhere_is_reflected(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'db.sqlite'}"
        creator = StoreAdapter(url)
        creator.create_table("widgets", widget_columns())
        creator.insert("widgets", {"id": "w1", "label": "first", "count": 1})
        creator.dispose()

        reader = StoreAdapter(url)
        assert reader.select_all("widgets") == [{"id": "w1", "label": "first", "count": 1}]
        reader.dispose()

    def test_concurrent_first_reads_reflect_table_once(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'db.sqlite'}"
        creator = StoreAdapter(url)
        creator.create_table("widgets", widget_columns())
        creator.insert("widgets", {"id": "w1", "label": "first", "count": 1})
        creator.dispose()

        reader = StoreAdapter(url)
        reader.ensure_connected()
        workers = 8
        barrier = threading.Barrier(workers)

        def read(i):
            barrier.wait()
            if i % 2:
                return reader.select_one("widgets", {"id": "w1"})
            return reader.select_all("widgets")[0]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            rows = list(pool.map(read, range(workers)))

        assert rows == [{"id": "w1", "label": "first", "count": 1}] * workers
        reader.dispose()


class TestRows:
    """Test suite for row operations."""

    def test_select_all(self, widgets: StoreAdapter):
        rows = widgets.select_all("widgets")

        assert {row["id"] for row in rows} == {"w1", "w2"}

    def test_select_one(self, widgets: StoreAdapter):
        assert widgets.select_one("widgets", {"id": "w2"}) == {"id": "w2", "label": "second", "count": 2}
        assert widgets.select_one("widgets", {"id": "missing"}) is None

    def test_update_returns_rows_affected(self, widgets: StoreAdapter):
        assert widgets.update("widgets", {"id": "w1"}, {"count": 10}) == 1
        assert widgets.update("widgets", {"id": "missing"}, {"count": 10}) == 0

        assert widgets.select_one("widgets", {"id": "w1"})["count"] == 10

    def test_delete_where_returns_rows_affected(self, widgets: StoreAdapter):
        assert widgets.delete_where("widgets", {"id": "w1"}) == 1
        assert widgets.delete_where("widgets", {"id": "w1"}) == 0

        assert [row["id"] for row in widgets.select_all("widgets")] == ["w2"]

    def test_unique_violation_raises_constraint_error(self, widgets: StoreAdapter):
        with pytest.raises(ConstraintViolationError) as exc_info:
            widgets.insert("widgets", {"id": "w3", "label": "first", "count": 3})

        assert isinstance(exc_info.value, StorageError)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert "UNIQUE" not in exc_info.value.detail

    def test_update_into_duplicate_raises_constraint_error(self, widgets: StoreAdapter):
        with pytest.raises(ConstraintViolationError):
            widgets.update("widgets", {"id": "w2"}, {"label": "first"})

    def test_not_null_violation_raises_constraint_error(self, widgets: StoreAdapter):
        with pytest.raises(ConstraintViolationError):
            widgets.insert("widgets", {"id": "w3", "label": None})

    def test_unknown_column_raises_storage_error(self, widgets: StoreAdapter):
        with pytest.raises(StorageError):
            widgets.select_one("widgets", {"colour": "red"})
