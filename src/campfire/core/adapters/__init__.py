"""Database adapters -- one interface for the supported backends.

Architecture::

    DatabaseAdapter (base.py)        Abstract base: run/execute/query, driver error translation
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- MySQLAdapter             mysql.connector (optional extra)

    DatabaseConfig (types.py)        Connection parameters
    DatabaseType (types.py)          Enum of supported backends

Guardrails:
    ❌ ``adapter.query("SELECT * FROM t WHERE id=" + user_input)``
    ✅ ``adapter.query("SELECT * FROM t WHERE id=?", (user_input,))``
    ❌ Importing optional drivers at module scope
    ✅ Import-guarded at ``connect()`` time with clear ``ConfigError``
"""

from .base import DatabaseAdapter, StatementOutcome
from .mysql import MySQLAdapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    "DatabaseType",
    "DatabaseConfig",
    "DatabaseAdapter",
    "StatementOutcome",
    "SQLiteAdapter",
    "MySQLAdapter",
]
