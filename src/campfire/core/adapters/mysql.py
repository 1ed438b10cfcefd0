"""MySQL / MariaDB adapter, the production backend of CampFire Manager.

Requires the ``mysql`` extra (``pip install campfire-manager[mysql]``).
``mysql.connector`` is imported by :meth:`MySQLAdapter.connect`, so the
package imports without it; connecting without it raises
:class:`~campfire.core.errors.ConfigError`.

Connections come from a small pool and are opened with
``ClientFlag.FOUND_ROWS``: MySQL otherwise reports *changed* rows for an
UPDATE, and an UPDATE that rewrites identical values would look like a
missing row to the record layer.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from campfire.core.errors import ConfigError, DatabaseConnectionError
from campfire.core.logging import get_logger
from campfire.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)

POOL_NAME = "campfire"


class MySQLAdapter(DatabaseAdapter):
    """Pooled adapter; every statement borrows a connection and closes it back."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 5,
        charset: str = "utf8",
    ):
        super().__init__(
            DatabaseConfig(
                db_type=DatabaseType.MYSQL,
                host=host,
                port=port,
                database=database,
                username=username,
                password=password,
                pool_size=pool_size,
                charset=charset,
            )
        )
        self._pool: Any = None

    def _pool_arguments(self, found_rows_flag: int) -> dict[str, Any]:
        config = self._config
        return {
            "pool_name": POOL_NAME,
            "pool_size": config.pool_size,
            "host": config.host,
            "port": config.port,
            "database": config.database,
            "user": config.username,
            "password": config.password,
            "charset": config.charset,
            "connect_timeout": config.connect_timeout,
            "autocommit": False,
            "client_flags": [found_rows_flag],
        }

    def connect(self) -> None:
        if self._pool is not None:
            return
        try:
            from mysql.connector import errors, pooling
            from mysql.connector.constants import ClientFlag
        except ImportError:
            raise ConfigError(
                "mysql-connector-python is required for MySQL. "
                "Install with: pip install campfire-manager[mysql]"
            ) from None

        self._integrity_errors = (errors.IntegrityError,)
        self._driver_errors = (errors.Error,)
        try:
            self._pool = pooling.MySQLConnectionPool(**self._pool_arguments(ClientFlag.FOUND_ROWS))
        except errors.Error as e:
            raise DatabaseConnectionError(
                f"Cannot reach MySQL at {self._config.host}:{self._config.port}: {e}",
                cause=e,
            ) from e
        self._connected = True
        logger.debug(
            "mysql_pool_created",
            host=self._config.host,
            database=self._config.database,
            pool_size=self._config.pool_size,
        )

    def disconnect(self) -> None:
        # Pools have no close-all; idle connections go with the pool
        self._pool = None
        self._connected = False

    def get_connection(self) -> Connection:
        self.connect()
        return self._pool.get_connection()

    def _release(self, conn: Connection) -> None:
        # Closing a pooled connection returns it to the pool
        conn.close()

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._release(conn)


__all__ = [
    "MySQLAdapter",
]
