"""SQLite adapter for development, tests and single-process deployments.

One connection per adapter. For ``:memory:`` that connection *is* the
database, so every record sharing the adapter sees the same tables until
:meth:`SQLiteAdapter.disconnect`.

``cursor.rowcount`` after UPDATE and DELETE counts matched rows, which is
what :class:`~campfire.core.adapters.base.StatementOutcome` promises.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from campfire.core.errors import DatabaseConnectionError
from campfire.core.logging import get_logger
from campfire.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)

MEMORY = ":memory:"


class SQLiteAdapter(DatabaseAdapter):
    """Adapter over a single :mod:`sqlite3` connection with dict-like rows."""

    _integrity_errors = (sqlite3.IntegrityError,)
    _driver_errors = (sqlite3.Error,)

    def __init__(self, path: str = MEMORY, *, timeout: float = 5.0):
        super().__init__(DatabaseConfig(db_type=DatabaseType.SQLITE, path=path))
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._config.path or MEMORY

    @property
    def in_memory(self) -> bool:
        return self.path == MEMORY

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            conn = sqlite3.connect(
                self.path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=self.path.startswith("file:"),
            )
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Cannot open SQLite database {self.path!r}: {e}", cause=e
            ) from e
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._connected = True
        logger.debug("sqlite_connected", path=self.path)

    def disconnect(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        self._connected = False
        logger.debug("sqlite_disconnected", path=self.path, discarded=self.in_memory)

    def get_connection(self) -> Connection:
        self.connect()
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Commit when the block succeeds, roll back when it raises."""
        conn = self.get_connection()
        # sqlite3.Connection as a context manager commits or rolls back; it does not close
        with conn:
            yield conn


__all__ = [
    "MEMORY",
    "SQLiteAdapter",
]
