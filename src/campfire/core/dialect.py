"""SQL dialect abstraction for the generic record layer.

Provides a ``Dialect`` protocol and concrete implementations for the
supported backends. The record layer and the DDL builder in
:mod:`campfire.core.schema` ask the dialect for every backend-specific
fragment (placeholders, identifier quoting, auto-increment key column,
enum columns, unique keys, table options) and never hard-code one.

The production backend is MySQL; SQLite is what the test-suite and local
development run against.

Architecture::

    ┌──────────────────────────────────────────────────────────────────┐
    │                     Dialect Abstraction Layer                     │
    └──────────────────────────────────────────────────────────────────┘

    GenericRecord / build_create_table()
    ┌────────────────────────────────────────────────────────────────┐
    │  sql = f"SELECT * FROM t WHERE k = {d.placeholder(0)}"         │
    │  ddl = d.auto_increment_column("intScreenID")                  │
    └────────────────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌────────────────────────────┐  ┌──────────────────────────────────┐
    │ SQLite                     │  │ MySQL                            │
    │ ?, ?, ?                    │  │ %s, %s, %s                       │
    │ "col" INTEGER PRIMARY KEY  │  │ `col` int(11) NOT NULL           │
    │        AUTOINCREMENT       │  │        AUTO_INCREMENT            │
    │ TEXT CHECK (col IN (...))  │  │ enum('a','b')                    │
    │ (no table options)         │  │ ENGINE=MyISAM DEFAULT CHARSET=.. │
    └────────────────────────────┘  └──────────────────────────────────┘

Examples:
    >>> from campfire.core.dialect import get_dialect
    >>> d = get_dialect("mysql")
    >>> d.placeholders(2)
    '%s, %s'
    >>> d.enum_type("enumDirection", ["up", "down"])
    "enum('up','down')"

Guardrails:
    ❌ DON'T: Write backend-specific SQL in entity classes
    ✅ DO: Ask the dialect for the fragment

Tags:
    dialect, sql, ddl, abstraction, campfire
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


def _quote_literal(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** (string) valid for the target
    database.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    @property
    def inline_primary_key(self) -> bool:
        """Whether the auto-increment column already declares PRIMARY KEY."""
        ...

    # -- Placeholder generation --------------------------------------------

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index)."""
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list."""
        ...

    # -- DDL helpers -------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name."""
        ...

    def auto_increment_column(self, column: str) -> str:
        """Full column definition for the auto-incrementing integer key."""
        ...

    def column_type(self, type_name: str, length: int | None = None) -> str:
        """Column type with optional declared length (``varchar(255)``)."""
        ...

    def enum_type(self, column: str, options: Sequence[str]) -> str:
        """Column type restricting values to ``options``."""
        ...

    def primary_key_clause(self, columns: Sequence[str]) -> str:
        """Table-level ``PRIMARY KEY (...)`` constraint."""
        ...

    def unique_key_clause(self, columns: Sequence[str]) -> str:
        """Table-level composite unique constraint."""
        ...

    def table_options(self, *, engine: str, charset: str, auto_increment: bool) -> str:
        """Trailing ``CREATE TABLE`` options (may be empty)."""
        ...

    def table_exists_query(self) -> str:
        """Query returning rows if the table named by the one parameter exists."""
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class SQLiteDialect:
    """SQLite dialect: ``?`` placeholders, ``"quoted"`` identifiers."""

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def inline_primary_key(self) -> bool:
        return True

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def quote_identifier(self, name: str) -> str:
        return '"' + name.replace('"', '""') + '"'

    def auto_increment_column(self, column: str) -> str:
        return f"{self.quote_identifier(column)} INTEGER PRIMARY KEY AUTOINCREMENT"

    def column_type(self, type_name: str, length: int | None = None) -> str:
        if length is not None:
            return f"{type_name}({length})"
        return type_name

    def enum_type(self, column: str, options: Sequence[str]) -> str:
        # SQLite has no ENUM; a CHECK constraint gives the same guarantee.
        allowed = ",".join(_quote_literal(o) for o in options)
        return f"TEXT CHECK ({self.quote_identifier(column)} IN ({allowed}))"

    def primary_key_clause(self, columns: Sequence[str]) -> str:
        return f"PRIMARY KEY ({', '.join(self.quote_identifier(c) for c in columns)})"

    def unique_key_clause(self, columns: Sequence[str]) -> str:
        return f"UNIQUE ({', '.join(self.quote_identifier(c) for c in columns)})"

    def table_options(self, *, engine: str, charset: str, auto_increment: bool) -> str:  # noqa: ARG002
        return ""

    def table_exists_query(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type='table' AND name = ?"


class MySQLDialect:
    """MySQL dialect: ``%s`` placeholders, backtick identifiers.

    Compatible with ``mysql.connector`` (``%s`` format paramstyle).
    """

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def inline_primary_key(self) -> bool:
        return False

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def quote_identifier(self, name: str) -> str:
        return "`" + name.replace("`", "``") + "`"

    def auto_increment_column(self, column: str) -> str:
        return f"{self.quote_identifier(column)} int(11) NOT NULL AUTO_INCREMENT"

    def column_type(self, type_name: str, length: int | None = None) -> str:
        if length is not None:
            return f"{type_name}({length})"
        return type_name

    def enum_type(self, column: str, options: Sequence[str]) -> str:  # noqa: ARG002
        return f"enum({','.join(_quote_literal(o) for o in options)})"

    def primary_key_clause(self, columns: Sequence[str]) -> str:
        return f"PRIMARY KEY ({', '.join(self.quote_identifier(c) for c in columns)})"

    def unique_key_clause(self, columns: Sequence[str]) -> str:
        cols = ",".join(self.quote_identifier(c) for c in columns)
        return f"UNIQUE KEY `unique_key` ({cols})"

    def table_options(self, *, engine: str, charset: str, auto_increment: bool) -> str:
        options = f"ENGINE={engine} DEFAULT CHARSET={charset}"
        if auto_increment:
            options += " AUTO_INCREMENT=1"
        return options

    def table_exists_query(self) -> str:
        return (
            "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s"
        )


# =========================================================================
# Registry / Factory
# =========================================================================

# Dialects are stateless
_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),  # alias
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Args:
        db_type: ``'sqlite'``, ``'mysql'`` or ``'mariadb'`` (or a
                 :class:`~campfire.core.adapters.types.DatabaseType`).

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(set(_DIALECTS) - {'mariadb'})}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (third-party driver or test double)."""
    _DIALECTS[name.lower()] = dialect


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "get_dialect",
    "register_dialect",
]
