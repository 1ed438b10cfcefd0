"""Database adapter base class.

Manifesto:
    The record layer needs exactly four things from storage: run a
    parameterized statement, fetch rows as dicts, learn the key the backend
    assigned to an insert, and execute DDL. Every adapter exposes those
    through the same methods so that ``GenericRecord`` never sees a driver.

    Driver exceptions never leave an adapter raw. A violated constraint
    becomes :class:`~campfire.core.errors.IntegrityError`, any other driver
    failure :class:`~campfire.core.errors.QueryError`; both carry the SQL in
    ``context.metadata`` and chain the driver exception as ``__cause__``.

Features:
    - Abstract ``connect()``, ``disconnect()``, ``get_connection()``, ``transaction()``
    - ``run()`` executes one autocommitted statement and reports a
      :class:`StatementOutcome` (rows matched, key assigned)
    - ``execute()`` / ``execute_insert()`` / ``execute_ddl()`` on top of ``run()``
    - ``query()``, ``query_one()``, ``query_scalar()`` for reads
    - Context-manager protocol for connection lifecycle

Tags:
    campfire, database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from campfire.core.dialect import Dialect, get_dialect
from campfire.core.errors import ErrorContext, IntegrityError, QueryError
from campfire.core.protocols import Connection

from .types import DatabaseConfig, DatabaseType


@dataclass(frozen=True, slots=True)
class StatementOutcome:
    """What the backend reported for one executed statement.

    ``rowcount`` is the number of rows an UPDATE or DELETE matched; the
    record layer reads 0 as "the stored row is gone". ``lastrowid`` is the
    auto-increment key of an INSERT.
    """

    rowcount: int
    lastrowid: Any = None


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Subclasses set ``_integrity_errors`` and ``_driver_errors`` to their
    driver's exception classes (at ``connect()`` time when the driver is
    imported lazily) so that statement failures are translated.
    """

    _integrity_errors: tuple[type[BaseException], ...] = ()
    _driver_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._connected = False
        self._dialect: Dialect = get_dialect(config.db_type.value)

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        return self._config.db_type

    @property
    def is_connected(self) -> bool:
        return self._connected

    def describe(self) -> str:
        """Backend location without credentials."""
        return self._config.describe()

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def get_connection(self) -> Connection:
        """Get a connection (may be from pool)."""
        ...

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Context manager for a transaction: commit on success, rollback on error."""
        ...

    def _release(self, conn: Connection) -> None:
        """Hand a connection obtained by :meth:`get_connection` back."""
        return None

    @contextmanager
    def _translated(self, sql: str) -> Iterator[None]:
        """Re-raise driver exceptions from the block as campfire errors."""
        try:
            yield
        except self._integrity_errors as e:
            raise IntegrityError(
                f"Constraint violated: {e}",
                context=ErrorContext(metadata={"sql": sql}),
                cause=e,
            ) from e
        except self._driver_errors as e:
            raise QueryError(
                f"Statement failed: {e}",
                context=ErrorContext(metadata={"sql": sql}),
                cause=e,
            ) from e

    # -- Writes ------------------------------------------------------------

    def run(self, sql: str, params: tuple = ()) -> StatementOutcome:
        """Execute one statement in its own transaction."""
        with self._translated(sql), self.transaction() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, params)
                return StatementOutcome(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)
            finally:
                cursor.close()

    def execute(self, sql: str, params: tuple = ()) -> int:
        """Execute one statement and return the number of rows it matched."""
        return self.run(sql, params).rowcount

    def execute_insert(self, sql: str, values: tuple = ()) -> Any:
        """Execute an insert statement and return the backend-assigned key."""
        return self.run(sql, values).lastrowid

    def execute_ddl(self, sql: str) -> None:
        """Execute a schema statement (``CREATE TABLE``, ``DROP TABLE``)."""
        self.run(sql)

    def insert_statement(self, table: str, columns: list[str]) -> str:
        """Render ``INSERT INTO table (columns) VALUES (placeholders)``."""
        quote = self._dialect.quote_identifier
        return (
            f"INSERT INTO {quote(table)} ({', '.join(quote(c) for c in columns)}) "
            f"VALUES ({self._dialect.placeholders(len(columns))})"
        )

    def insert(self, table: str, data: dict[str, Any]) -> Any:
        """Insert a single row and return the backend-assigned key."""
        return self.execute_insert(self.insert_statement(table, list(data)), tuple(data.values()))

    # -- Reads -------------------------------------------------------------

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        with self._translated(sql):
            conn = self.get_connection()
            cursor = conn.cursor()
            try:
                cursor.execute(sql, params)
                columns = [desc[0] for desc in cursor.description]
                return [dict(zip(columns, row, strict=False)) for row in cursor.fetchall()]
            finally:
                cursor.close()
                self._release(conn)

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute query and return the first row (or None)."""
        results = self.query(sql, params)
        return results[0] if results else None

    def query_scalar(self, sql: str, params: tuple = ()) -> Any:
        """Execute query and return the first column of the first row."""
        with self._translated(sql):
            conn = self.get_connection()
            cursor = conn.cursor()
            try:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                return row[0] if row is not None else None
            finally:
                cursor.close()
                self._release(conn)

    def table_exists(self, table: str) -> bool:
        return self.query_one(self._dialect.table_exists_query(), (table,)) is not None

    def __enter__(self) -> DatabaseAdapter:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()


__all__ = [
    "DatabaseAdapter",
    "StatementOutcome",
]
