"""
Structural protocols for collaborators of the data layer.

The record layer talks to the database, the record cache and the hook
registry through the shapes declared here and in
:mod:`campfire.core.cache` / :mod:`campfire.core.hooks`, never through a
concrete class. Any object with the right methods satisfies them, which is
what lets tests inject an in-memory SQLite adapter or a recording fake.

Architecture:
    ::

        protocols.py
        ├── Connection      : DB-API 2.0 connection (sqlite3, mysql.connector)
        └── Cursor          : DB-API 2.0 cursor (execute, fetch*, lastrowid)

Tags:
    protocol, connection, database, campfire
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """Minimal DB-API 2.0 cursor used by the adapters."""

    description: Any
    lastrowid: Any
    rowcount: int

    def execute(self, sql: str, params: Any = ()) -> Any:
        ...

    def fetchone(self) -> Any:
        ...

    def fetchall(self) -> list:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Connection(Protocol):
    """
    Minimal SYNCHRONOUS DB-API 2.0 connection.

    ``sqlite3.Connection`` and ``mysql.connector`` connections both satisfy
    this. Statements are always issued through :meth:`cursor` so the same
    code path works for drivers without a connection-level ``execute``.
    """

    def cursor(self) -> Any:
        """Open a cursor."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...


__all__ = [
    "Connection",
    "Cursor",
]
