"""Database types and configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DatabaseType(str, Enum):
    """Backends the record layer can run on."""

    SQLITE = "sqlite"
    MYSQL = "mysql"


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection parameters; each backend reads only its own fields."""

    db_type: DatabaseType = DatabaseType.SQLITE

    # SQLite
    path: str | None = None

    # MySQL
    host: str = "localhost"
    port: int = 3306
    database: str = ""
    username: str | None = None
    password: str | None = None
    pool_size: int = 5
    charset: str = "utf8"
    connect_timeout: int = 10

    def describe(self) -> str:
        """Where this config points, without credentials (for logs)."""
        if self.db_type is DatabaseType.SQLITE:
            return self.path or ":memory:"
        return f"{self.host}:{self.port}/{self.database}"


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]
