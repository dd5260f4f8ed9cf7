# app/db/store.py
import threading
from typing import Any, Iterable

from sqlalchemy import (
    Column,
    MetaData,
    Table,
    create_engine,
    delete,
    event,
    inspect,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import text

from app.core.errors import ConstraintViolationError, StorageError, StoreConnectionError
from app.core.logging import get_logger

logger = get_logger(__name__)


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if make_url(database_url).database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout gets an empty database
            engine_kwargs["poolclass"] = StaticPool
    return engine_kwargs


class StoreAdapter:
    """
    Thin wrapper over a SQLAlchemy engine.

    Offers table existence/creation and generic row operations keyed by a
    column-equality predicate. Every engine fault surfaces as a StorageError
    with the SQLAlchemy exception chained as its cause.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine: Engine | None = None
        self._metadata = MetaData()
        # Guards reflection into the shared MetaData
        self._lock = threading.Lock()

    def ensure_connected(self) -> Engine:
        """Creates the engine on first call and returns the same one afterwards."""
        if self._engine is not None:
            return self._engine

        try:
            engine = create_engine(self.database_url, **_engine_kwargs(self.database_url))
            if engine.dialect.name == "sqlite":
                @event.listens_for(engine, "connect")
                def _enable_foreign_keys(dbapi_connection, connection_record):
                    cursor = dbapi_connection.cursor()
                    cursor.execute("PRAGMA foreign_keys=ON")
                    cursor.close()

            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreConnectionError(f"Could not connect to database: {e}") from e

        logger.info(f"Connected to database ({engine.dialect.name})")
        self._engine = engine
        return engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._metadata = MetaData()

    def table_exists(self, name: str) -> bool:
        engine = self.ensure_connected()
        try:
            return inspect(engine).has_table(name)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not inspect table '{name}': {e}") from e

    def create_table(self, name: str, columns: Iterable[Column]) -> Table:
        """Creates `name`. Fails if the table already exists; check with table_exists first."""
        engine = self.ensure_connected()
        with self._lock:
            table = Table(name, self._metadata, *columns, extend_existing=True)
        try:
            with engine.begin() as conn:
                table.create(conn)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not create table '{name}': {e}") from e
        return table

    def _table(self, name: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is not None:
            return table
        engine = self.ensure_connected()
        with self._lock:
            if name in self._metadata.tables:
                return self._metadata.tables[name]
            # Table created outside this adapter; reflect it once
            try:
                return Table(name, self._metadata, autoload_with=engine)
            except SQLAlchemyError as e:
                raise StorageError(f"Could not load table '{name}': {e}") from e

    @staticmethod
    def _where(table: Table, predicate: dict[str, Any]):
        try:
            return [table.c[column] == value for column, value in predicate.items()]
        except KeyError as e:
            raise StorageError(f"Unknown column {e} on table '{table.name}'") from e

    def _write(self, statement, description: str) -> int:
        engine = self.ensure_connected()
        try:
            with engine.begin() as conn:
                return conn.execute(statement).rowcount
        except IntegrityError as e:
            raise ConstraintViolationError(f"Constraint violated during {description}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Storage failure during {description}: {e}") from e

    def _read(self, statement, description: str) -> list[dict[str, Any]]:
        engine = self.ensure_connected()
        try:
            with engine.connect() as conn:
                return [dict(row) for row in conn.execute(statement).mappings()]
        except SQLAlchemyError as e:
            raise StorageError(f"Storage failure during {description}: {e}") from e

    def insert(self, table: str, row: dict[str, Any]) -> None:
        t = self._table(table)
        self._write(insert(t).values(**row), f"insert into {table}")

    def select_all(self, table: str) -> list[dict[str, Any]]:
        t = self._table(table)
        return self._read(select(t), f"select from {table}")

    def select_one(self, table: str, predicate: dict[str, Any]) -> dict[str, Any] | None:
        t = self._table(table)
        rows = self._read(select(t).where(*self._where(t, predicate)).limit(1), f"select from {table}")
        return rows[0] if rows else None

    def update(self, table: str, predicate: dict[str, Any], patch: dict[str, Any]) -> int:
        t = self._table(table)
        return self._write(update(t).where(*self._where(t, predicate)).values(**patch), f"update of {table}")

    def delete_where(self, table: str, predicate: dict[str, Any]) -> int:
        t = self._table(table)
        return self._write(delete(t).where(*self._where(t, predicate)), f"delete from {table}")
