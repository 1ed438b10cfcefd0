"""
Entity descriptors and table DDL.

Each entity type declares its table once, as an :class:`EntitySchema`: the
table name, the auto-increment key column (or a composite key), and one
:class:`FieldSpec` per persisted column. The record layer validates every
column name it puts into SQL against this descriptor, and
:func:`build_create_table` turns it into an idempotent ``CREATE TABLE``.

Manifesto:
    Column names are the only SQL text the record layer does not bind as a
    parameter. They therefore come exclusively from a frozen descriptor,
    never from the caller.

Architecture:
    ::

        EntitySchema(table="screen", key_column="intScreenID", fields={
            "strScreen":  FieldSpec("varchar", length=255),
            "dtLastSeen": FieldSpec("datetime"),
            "lastChange": FieldSpec("datetime"),
        })
              │
              ▼
        build_create_table(schema, dialect)
              │
              ▼
        CREATE TABLE IF NOT EXISTS `screen` (
          `intScreenID` int(11) NOT NULL AUTO_INCREMENT,
          `strScreen` varchar(255) DEFAULT NULL,
          `dtLastSeen` datetime DEFAULT NULL,
          `lastChange` datetime DEFAULT NULL,
          PRIMARY KEY (`intScreenID`)
        ) ENGINE=MyISAM DEFAULT CHARSET=utf8 AUTO_INCREMENT=1

Nullability:
    ``nullable=None``  (undeclared) → ``DEFAULT NULL``
    ``nullable=True``               → ``NULL``
    ``nullable=False``              → ``NOT NULL``

Guardrails:
    ❌ DON'T: Build SQL with column names taken from request data
    ✅ DO: Check them with ``schema.is_column(name)`` first

    ❌ DON'T: Let callers set the timestamp field
    ✅ DO: Leave ``lastChange`` to create/write

Tags:
    schema, ddl, descriptor, campfire
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from campfire.core.dialect import Dialect
from campfire.core.errors import SchemaError

TEXT_TYPE = "text"
ENUM_TYPE = "enum"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Description of one persisted column.

    Attributes:
        type: Column type name (``varchar``, ``int``, ``datetime``, ``text``, ``enum``)
        length: Declared length, rendered as ``type(length)``; ignored for text/enum
        nullable: None for ``DEFAULT NULL``, True for ``NULL``, False for ``NOT NULL``
        unique: Column takes part in the table's composite unique key
        options: Allowed values of an enum column
    """

    type: str
    length: int | None = None
    nullable: bool | None = None
    unique: bool = False
    options: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.type:
            raise SchemaError("Field type must not be empty")
        if self.type == ENUM_TYPE and not self.options:
            raise SchemaError("Enum fields must declare their options")


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """Declarative description of one entity type's table.

    ``key_column`` names the auto-increment integer key. Types keyed by a
    set of their own columns leave it ``None`` and list them in
    ``composite_key`` instead.
    """

    table: str
    fields: Mapping[str, FieldSpec]
    key_column: str | None = None
    composite_key: tuple[str, ...] = ()
    timestamp_field: str = "lastChange"
    owner_field: str | None = "intUserID"
    _columns: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.table:
            raise SchemaError("Entity table name must not be empty")
        if not self.key_column and not self.composite_key:
            raise SchemaError(f"Entity {self.table!r} declares neither a key column nor a composite key")
        if self.key_column and self.key_column in self.fields:
            raise SchemaError(f"Key column {self.key_column!r} must not also be a declared field")
        missing = [col for col in self.composite_key if col not in self.fields]
        if missing:
            raise SchemaError(f"Composite key columns not declared on {self.table!r}: {missing}")

        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        columns = set(self.fields)
        if self.key_column:
            columns.add(self.key_column)
        object.__setattr__(self, "_columns", frozenset(columns))

    @property
    def field_names(self) -> list[str]:
        """Declared field names in declaration order."""
        return list(self.fields)

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp_field in self.fields

    @property
    def order_column(self) -> str:
        """Column listings are ordered by."""
        return self.key_column or self.composite_key[0]

    def is_column(self, name: str | None) -> bool:
        """Whether ``name`` is a declared field or the key column."""
        return name is not None and name in self._columns

    def is_declared(self, name: str) -> bool:
        return name in self.fields


def _nullability(spec: FieldSpec) -> str:
    if spec.nullable is None:
        return "DEFAULT NULL"
    return "NULL" if spec.nullable else "NOT NULL"


def _column_definition(name: str, spec: FieldSpec, dialect: Dialect) -> str:
    if spec.type == ENUM_TYPE:
        col_type = dialect.enum_type(name, spec.options)
    elif spec.type == TEXT_TYPE:
        col_type = dialect.column_type(TEXT_TYPE)
    else:
        col_type = dialect.column_type(spec.type, spec.length)
    return f"{dialect.quote_identifier(name)} {col_type} {_nullability(spec)}"


def build_create_table(
    schema: EntitySchema,
    dialect: Dialect,
    *,
    engine: str = "MyISAM",
    charset: str = "utf8",
) -> str:
    """Render the create-if-absent statement for ``schema``."""
    parts: list[str] = []

    if schema.key_column:
        parts.append(dialect.auto_increment_column(schema.key_column))

    unique_columns: list[str] = []
    for name, spec in schema.fields.items():
        parts.append(_column_definition(name, spec, dialect))
        if spec.unique:
            unique_columns.append(name)

    if schema.key_column:
        if not dialect.inline_primary_key:
            parts.append(dialect.primary_key_clause([schema.key_column]))
    else:
        parts.append(dialect.primary_key_clause(schema.composite_key))

    if unique_columns:
        parts.append(dialect.unique_key_clause(unique_columns))

    sql = (
        f"CREATE TABLE IF NOT EXISTS {dialect.quote_identifier(schema.table)} "
        f"({', '.join(parts)})"
    )
    options = dialect.table_options(
        engine=engine, charset=charset, auto_increment=schema.key_column is not None
    )
    if options:
        sql += f" {options}"
    return sql


def build_drop_table(schema: EntitySchema, dialect: Dialect) -> str:
    return f"DROP TABLE IF EXISTS {dialect.quote_identifier(schema.table)}"


__all__ = [
    "FieldSpec",
    "EntitySchema",
    "build_create_table",
    "build_drop_table",
]
