"""
Generic persistent record.

:class:`GenericRecord` is the base every CampFire entity type (Screen, Room,
ScreenDirection, ...) derives from. A subclass only declares its
:class:`~campfire.core.schema.EntitySchema`, optionally a
:class:`~campfire.core.permissions.PermissionPolicy` and demo data; the base
provides brokers, dirty tracking, gated persistence, hooks, caching and
table initialization.

Manifesto:
    Every operation that touches storage answers with a ``Result``:

    - absence is success: ``Ok(None)`` from a by-id lookup, ``Ok([])`` from a search
    - an unknown column is ``Err(UnknownFieldError)`` and never reaches SQL
    - a refused gate is ``Err(AuthorizationError)`` and never reaches SQL
    - a failing backend is ``Err(DatabaseError)`` with the driver error chained
    - a collaborator that cannot be resolved is ``Err(DependencyError)``
      for this call only

    Failures are logged with the error's ``to_dict()`` payload before being
    returned.

Architecture:
    ::

        Screen.broker_by_id(1)
            │  cache hit ──────────────────────────────► Ok(screen)
            ▼
        SELECT * FROM "screen" WHERE "intScreenID" = ? LIMIT 1
            │  no row ─────────────────────────────────► Ok(None)
            ▼
        Screen(row) → cache.put("Screen", 1, screen) ──► Ok(screen)

        screen.set_key("strScreen", "Top of Stairs")     → dirty = {strScreen}
        screen.write(actor=admin)
            │  policy.check(actor) ── refused ─────────► Err(AuthorizationError)
            ▼
        UPDATE "screen" SET "strScreen" = ?, "lastChange" = ? WHERE "intScreenID" = ?
            ▼
        cache.put(...) ; hooks.trigger("record.updated") ─► Ok(screen)

Examples:
    >>> @register_entity("Room")
    ... class Room(GenericRecord):
    ...     schema = EntitySchema(
    ...         table="room",
    ...         key_column="intRoomID",
    ...         fields={"strRoom": FieldSpec("varchar", length=255),
    ...                 "lastChange": FieldSpec("datetime")},
    ...     )
    >>> room = Room(dependencies={"database": adapter})
    >>> room.set_key("strRoom", "Main Hall")
    <SetKeyOutcome.ACCEPTED: 'accepted'>
    >>> room.create(actor=admin).is_ok()
    True

Guardrails:
    ❌ DON'T: Assign ``record.values[...]`` directly
    ✅ DO: Use ``set_key`` so the change is tracked and written

    ❌ DON'T: Rely on a bare ``bool`` from persistence calls
    ✅ DO: Match on ``Ok`` / ``Err`` and inspect ``error.category``

Tags:
    record, active-record, crud, cache, permissions, campfire
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, TypeVar

from campfire.core.actor import Actor
from campfire.core.dependencies import CACHE, DATABASE, HOOKS, DependencyContainer
from campfire.core.errors import (
    CampfireError,
    DatabaseError,
    DependencyError,
    ErrorContext,
    NotApplicableError,
    UnknownFieldError,
)
from campfire.core.hooks import RECORD_CREATED, RECORD_DELETED, RECORD_UPDATED, HookEvent
from campfire.core.logging import get_logger
from campfire.core.permissions import OPEN_POLICY, PermissionPolicy
from campfire.core.result import Err, Ok, Result
from campfire.core.schema import EntitySchema, build_create_table, build_drop_table
from campfire.core.settings import get_settings

logger = get_logger(__name__)

R = TypeVar("R", bound="GenericRecord")

WILDCARD = "%"

_TRUTHY = frozenset({"yes", "y", "true", "t", "on", "1"})


def as_boolean(value: Any) -> bool:
    """Coerce form-style input (``"yes"``, ``"on"``, ``"1"``, ``True``) to a bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUTHY


class SetKeyOutcome(str, Enum):
    """What :meth:`GenericRecord.set_key` did with a value."""

    ACCEPTED = "accepted"
    UNKNOWN_FIELD = "unknown_field"
    RESERVED_FIELD = "reserved_field"
    UNCHANGED = "unchanged"

    def __bool__(self) -> bool:
        return self is SetKeyOutcome.ACCEPTED


class GenericRecord:
    """Base class of every persisted CampFire entity.

    Subclasses set ``schema`` and may override ``policy`` and ``demo_data``.
    Collaborators (``database``, ``cache``, ``hooks``) come from the
    instance's :class:`DependencyContainer`; anything not injected resolves
    to the process default on first use.
    """

    schema: ClassVar[EntitySchema]
    policy: ClassVar[PermissionPolicy] = OPEN_POLICY
    demo_data: ClassVar[Sequence[Mapping[str, Any]]] = ()

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> None:
        schema = self.schema
        self._values: dict[str, Any] = {}
        if schema.key_column:
            self._values[schema.key_column] = None
        for name in schema.fields:
            self._values[name] = None
        if values:
            for name, value in values.items():
                if schema.is_column(name):
                    self._values[name] = value

        self._old: dict[str, Any] = dict(self._values)
        self._dirty: set[str] = set()
        self._full = False
        self._detached = False
        self._policy: PermissionPolicy = type(self).policy

        if isinstance(dependencies, DependencyContainer):
            self._dependencies = dependencies
        else:
            self._dependencies = DependencyContainer()
            if dependencies:
                self._dependencies.set_dependencies(dependencies)

    # ── Identity ─────────────────────────────────────────────────

    @classmethod
    def entity_name(cls) -> str:
        """Name this type is cached and reported under."""
        return cls.__name__

    @property
    def primary_key(self) -> Any:
        """Value of the auto-increment key (``None`` before ``create``)."""
        if not self.schema.key_column:
            return None
        return self._values.get(self.schema.key_column)

    @property
    def cache_key(self) -> Any:
        if self.schema.key_column:
            return self.primary_key
        return ":".join(str(self._values.get(col)) for col in self.schema.composite_key)

    @property
    def values(self) -> dict[str, Any]:
        """Copy of the current column values."""
        return dict(self._values)

    @property
    def old_values(self) -> dict[str, Any]:
        """Copy of the values as last loaded or persisted."""
        return dict(self._old)

    @property
    def dirty_fields(self) -> frozenset[str]:
        return frozenset(self._dirty)

    @property
    def detached(self) -> bool:
        """Whether this instance's row was deleted (or found missing)."""
        return self._detached

    @property
    def dependencies(self) -> DependencyContainer:
        return self._dependencies

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"

    # ── Field access ─────────────────────────────────────────────

    def set_key(self, name: str, value: Any) -> SetKeyOutcome:
        """Change one field and mark it dirty.

        The timestamp field is reserved for ``create``/``write``. Names that
        are neither declared fields nor the key column are ignored, as are
        values equal to the current one. The returned outcome says which.
        """
        if name == self.schema.timestamp_field:
            return SetKeyOutcome.RESERVED_FIELD
        if not self.schema.is_column(name):
            return SetKeyOutcome.UNKNOWN_FIELD
        if self._values.get(name) == value:
            return SetKeyOutcome.UNCHANGED
        self._values[name] = value
        self._dirty.add(name)
        return SetKeyOutcome.ACCEPTED

    def get_key(self, name: str) -> Any:
        """Current value of a declared field or the key column, else ``None``."""
        if not self.schema.is_column(name):
            return None
        return self._values.get(name)

    def set_full(self, full: Any) -> None:
        self._full = as_boolean(full)

    def get_full(self) -> bool:
        return self._full

    def set_policy(self, policy: PermissionPolicy) -> None:
        """Override the type's gates for this instance only."""
        self._policy = policy

    def to_dict(self, actor: Actor | None = None) -> dict[str, Any]:
        """Key, every declared field, and ``isEditable`` (field → type) for ``actor``.

        ``isEditable`` is empty when the actor may not modify the record.
        """
        data: dict[str, Any] = {}
        if self.schema.key_column:
            data[self.schema.key_column] = self.primary_key
        for name in self.schema.fields:
            data[name] = self._values.get(name)
        if self._policy.can_modify(actor, self._values, self.schema):
            data["isEditable"] = {name: spec.type for name, spec in self.schema.fields.items()}
        else:
            data["isEditable"] = {}
        return data

    # ── Collaborators ────────────────────────────────────────────

    def set_dependencies(self, dependencies: Mapping[str, Any]) -> bool:
        """Inject collaborators; failures are logged and reported as ``False``."""
        return self._dependencies.set_dependencies(dependencies)

    def set_dependency(self, name: str, value: Any) -> Result[None]:
        try:
            self._dependencies.set_dependency(name, value)
        except DependencyError as e:
            return self._fail("set_dependency", e)
        return Ok(None)

    def get_dependency(self, name: str) -> Result[Any]:
        try:
            return Ok(self._dependencies.get_dependency(name))
        except DependencyError as e:
            return self._fail("get_dependency", e)

    @staticmethod
    def _container(
        dependencies: DependencyContainer | Mapping[str, Any] | None,
    ) -> DependencyContainer:
        if isinstance(dependencies, DependencyContainer):
            return dependencies
        return DependencyContainer(dependencies)

    # ── Failure reporting ────────────────────────────────────────

    @classmethod
    def _fail(cls, operation: str, error: CampfireError) -> Err:
        if error.context.entity is None:
            error.with_context(entity=cls.entity_name(), table=cls.schema.table)
        if error.context.operation is None:
            error.with_context(operation=operation)
        logger.warning("record_operation_failed", **error.to_dict())
        return Err(error)

    @classmethod
    def _backend_failure(cls, operation: str, exc: Exception, sql: str = "") -> Err:
        if isinstance(exc, CampfireError):
            if sql:
                exc.context.metadata.setdefault("sql", sql)
            return cls._fail(operation, exc)
        error = DatabaseError(
            f"{operation} on {cls.schema.table} failed: {exc}",
            context=ErrorContext(
                entity=cls.entity_name(),
                table=cls.schema.table,
                operation=operation,
                metadata={"sql": sql} if sql else {},
            ),
            cause=exc,
        )
        return cls._fail(operation, error)

    @classmethod
    def _unknown_field(cls, operation: str, column: str | None) -> Err:
        return cls._fail(
            operation, UnknownFieldError(str(column), entity=cls.entity_name())
        )

    @classmethod
    def _no_timestamp(cls, operation: str) -> Err:
        return cls._fail(
            operation,
            NotApplicableError(
                f"{cls.entity_name()} does not declare a "
                f"{cls.schema.timestamp_field!r} field"
            ),
        )

    # ── SQL fragments ────────────────────────────────────────────

    @classmethod
    def _quote(cls, db: Any, name: str) -> str:
        return db.dialect.quote_identifier(name)

    @classmethod
    def _where(cls, db: Any, search: tuple[str, Any] | None) -> tuple[str, tuple]:
        """`` WHERE`` clause for an optional ``(column, value)`` search."""
        if search is None:
            return "", ()
        column, value = search
        quoted = cls._quote(db, column)
        if value == WILDCARD:
            return f" WHERE {quoted} IS NOT NULL", ()
        return f" WHERE {quoted} = {db.dialect.placeholder(0)}", (value,)

    @classmethod
    def _select(
        cls: type[R],
        operation: str,
        search: tuple[str, Any] | None,
        dependencies: DependencyContainer | Mapping[str, Any] | None,
    ) -> Result[list[R]]:
        try:
            deps = cls._container(dependencies)
            db = deps.get_dependency(DATABASE)
            cache = deps.get_dependency(CACHE)
        except DependencyError as e:
            return cls._fail(operation, e)

        where, params = cls._where(db, search)
        sql = (
            f"SELECT * FROM {cls._quote(db, cls.schema.table)}{where} "
            f"ORDER BY {cls._quote(db, cls.schema.order_column)} ASC"
        )
        try:
            rows = db.query(sql, params)
        except Exception as e:
            return cls._backend_failure(operation, e, sql)

        records = [cls(row, dependencies=deps) for row in rows]
        for record in records:
            cache.put(cls.entity_name(), record.cache_key, record)
        return Ok(records)

    @classmethod
    def _aggregate(
        cls,
        operation: str,
        function: str,
        column: str | None,
        search: tuple[str, Any] | None,
        dependencies: DependencyContainer | Mapping[str, Any] | None,
    ) -> Result[Any]:
        try:
            deps = cls._container(dependencies)
            db = deps.get_dependency(DATABASE)
        except DependencyError as e:
            return cls._fail(operation, e)

        target = "*" if column is None else cls._quote(db, column)
        where, params = cls._where(db, search)
        sql = f"SELECT {function}({target}) FROM {cls._quote(db, cls.schema.table)}{where}"
        try:
            return Ok(db.query_scalar(sql, params))
        except Exception as e:
            return cls._backend_failure(operation, e, sql)

    # ── Brokers ──────────────────────────────────────────────────

    @classmethod
    def broker_by_id(
        cls: type[R],
        key: Any,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[R | None]:
        """Load one record by its auto-increment key, consulting the cache first.

        Keys that are not positive integers are absent by definition.
        """
        if not cls.schema.key_column:
            return cls._fail(
                "broker_by_id",
                NotApplicableError(f"{cls.entity_name()} has no single key column"),
            )
        try:
            int_key = int(key)
        except (TypeError, ValueError):
            return Ok(None)
        if int_key <= 0:
            return Ok(None)

        try:
            deps = cls._container(dependencies)
            cache = deps.get_dependency(CACHE)
            cached = cache.get(cls.entity_name(), int_key)
            if cached is not None:
                return Ok(cached)
            db = deps.get_dependency(DATABASE)
        except DependencyError as e:
            return cls._fail("broker_by_id", e)

        sql = (
            f"SELECT * FROM {cls._quote(db, cls.schema.table)} "
            f"WHERE {cls._quote(db, cls.schema.key_column)} = {db.dialect.placeholder(0)} LIMIT 1"
        )
        try:
            row = db.query_one(sql, (int_key,))
        except Exception as e:
            return cls._backend_failure("broker_by_id", e, sql)

        if row is None:
            return Ok(None)
        record = cls(row, dependencies=deps)
        cache.put(cls.entity_name(), int_key, record)
        return Ok(record)

    @classmethod
    def broker_by_column_search(
        cls: type[R],
        column: str,
        value: Any,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[list[R]]:
        """Records whose ``column`` equals ``value`` (``"%"``: is not null), key ascending."""
        if not cls.schema.is_column(column):
            return cls._unknown_field("broker_by_column_search", column)
        return cls._select("broker_by_column_search", (column, value), dependencies)

    @classmethod
    def count_by_column_search(
        cls,
        column: str,
        value: Any,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[int]:
        if not cls.schema.is_column(column):
            return cls._unknown_field("count_by_column_search", column)
        return cls._aggregate(
            "count_by_column_search", "count", None, (column, value), dependencies
        ).map(lambda n: int(n or 0))

    @classmethod
    def last_change_by_column_search(
        cls,
        column: str,
        value: Any,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        """Most recent timestamp among matching records (``None`` when nothing matches)."""
        if not cls.schema.has_timestamp:
            return cls._no_timestamp("last_change_by_column_search")
        if not cls.schema.is_column(column):
            return cls._unknown_field("last_change_by_column_search", column)
        return cls._aggregate(
            "last_change_by_column_search",
            "max",
            cls.schema.timestamp_field,
            (column, value),
            dependencies,
        )

    @classmethod
    def broker_all(
        cls: type[R],
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[list[R]]:
        """Every record, key ascending."""
        return cls._select("broker_all", None, dependencies)

    @classmethod
    def count_all(
        cls,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[int]:
        return cls._aggregate("count_all", "count", None, None, dependencies).map(
            lambda n: int(n or 0)
        )

    @classmethod
    def last_change_all(
        cls,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        """Most recent timestamp across the whole table."""
        if not cls.schema.has_timestamp:
            return cls._no_timestamp("last_change_all")
        return cls._aggregate(
            "last_change_all", "max", cls.schema.timestamp_field, None, dependencies
        )

    # ── Persistence ──────────────────────────────────────────────

    def _timestamp(self) -> str:
        return datetime.now().strftime(get_settings().timestamp_format)

    def _authorize(self, actor: Actor | None, operation: str) -> Result[None]:
        result = self._policy.check(actor, self._values, self.schema, operation=operation)
        if result.is_err():
            return self._fail(operation, result.error)
        return result

    def _key_predicate(self, operation: str) -> Result[tuple[list[str], tuple]]:
        """Key columns and the values identifying this record's stored row.

        The values are the ones last loaded or persisted, so a record whose
        key column was edited still finds (and moves) its own row.
        """
        schema = self.schema
        key_columns = [schema.key_column] if schema.key_column else list(schema.composite_key)
        key_values = tuple(self._old.get(col) for col in key_columns)
        if schema.key_column and key_values[0] is None:
            return self._fail(
                operation,
                NotApplicableError(f"{self.entity_name()} has not been created yet"),
            )
        return Ok((key_columns, key_values))

    def _stored_cache_key(self, key_values: tuple) -> Any:
        if self.schema.key_column:
            return key_values[0]
        return ":".join(str(v) for v in key_values)

    def _refuse_detached(self, operation: str) -> Err | None:
        if not self._detached:
            return None
        return self._fail(
            operation,
            NotApplicableError(f"{self.entity_name()} {self.cache_key} has been deleted"),
        )

    def _lost_row(self, operation: str, cache: Any, stored_key: Any) -> Err:
        """The row matched no stored data: forget it and detach this instance."""
        cache.evict(self.entity_name(), stored_key)
        self._detached = True
        return self._fail(
            operation,
            NotApplicableError(f"{self.entity_name()} {stored_key} no longer exists"),
        )

    def _trigger(self, hooks: Any, name: str, sql: str, params: tuple) -> None:
        hooks.trigger(
            HookEvent(
                name=name,
                entity=self.entity_name(),
                record=self,
                statement=sql,
                params=params,
            )
        )

    def create(self, *, actor: Actor | None = None) -> Result[GenericRecord]:
        """Insert every declared field as a new row and capture the assigned key."""
        authorized = self._authorize(actor, "create")
        if authorized.is_err():
            return authorized

        try:
            db = self._dependencies.get_dependency(DATABASE)
            cache = self._dependencies.get_dependency(CACHE)
            hooks = self._dependencies.get_dependency(HOOKS)
        except DependencyError as e:
            return self._fail("create", e)

        schema = self.schema
        if schema.has_timestamp:
            self._values[schema.timestamp_field] = self._timestamp()

        columns = schema.field_names
        params = tuple(self._values.get(name) for name in columns)
        sql = db.insert_statement(schema.table, columns)
        try:
            new_key = db.execute_insert(sql, params)
        except Exception as e:
            return self._backend_failure("create", e, sql)

        if schema.key_column:
            self._values[schema.key_column] = new_key
        self._old = dict(self._values)
        self._dirty.clear()
        self._detached = False

        cache.put(self.entity_name(), self.cache_key, self)
        self._trigger(hooks, RECORD_CREATED, sql, params)
        logger.debug("record_created", entity=self.entity_name(), key=self.cache_key)
        return Ok(self)

    def write(self, *, actor: Actor | None = None) -> Result[GenericRecord]:
        """Persist the dirty fields (and a fresh timestamp) to the stored row.

        A changed key column is written like any other field; the row is
        found by its previous key. With nothing dirty and no timestamp field
        this is a successful no-op. Deleted instances, and rows that have
        disappeared underneath this one, answer ``Err(NotApplicableError)``.
        """
        authorized = self._authorize(actor, "write")
        if authorized.is_err():
            return authorized
        refused = self._refuse_detached("write")
        if refused is not None:
            return refused
        predicate = self._key_predicate("write")
        if predicate.is_err():
            return predicate
        key_columns, key_values = predicate.unwrap()

        schema = self.schema
        if schema.has_timestamp:
            self._values[schema.timestamp_field] = self._timestamp()
            self._dirty.add(schema.timestamp_field)

        # Key column first, then declared fields in declaration order
        changed = [name for name in self._values if name in self._dirty]
        if not changed:
            return Ok(self)

        try:
            db = self._dependencies.get_dependency(DATABASE)
            cache = self._dependencies.get_dependency(CACHE)
            hooks = self._dependencies.get_dependency(HOOKS)
        except DependencyError as e:
            return self._fail("write", e)

        ph = db.dialect.placeholder(0)
        assignments = ", ".join(f"{self._quote(db, name)} = {ph}" for name in changed)
        where = " AND ".join(f"{self._quote(db, col)} = {ph}" for col in key_columns)
        sql = f"UPDATE {self._quote(db, schema.table)} SET {assignments} WHERE {where}"
        params = tuple(self._values.get(name) for name in changed) + key_values
        try:
            matched = db.execute(sql, params)
        except Exception as e:
            return self._backend_failure("write", e, sql)

        stored_key = self._stored_cache_key(key_values)
        if matched == 0:
            return self._lost_row("write", cache, stored_key)

        if str(stored_key) != str(self.cache_key):
            cache.evict(self.entity_name(), stored_key)
        self._old = dict(self._values)
        self._dirty.clear()

        cache.put(self.entity_name(), self.cache_key, self)
        self._trigger(hooks, RECORD_UPDATED, sql, params)
        logger.debug("record_updated", entity=self.entity_name(), key=self.cache_key, fields=changed)
        return Ok(self)

    def delete(self, *, actor: Actor | None = None) -> Result[GenericRecord]:
        """Remove the stored row. The instance stays readable but is detached."""
        authorized = self._authorize(actor, "delete")
        if authorized.is_err():
            return authorized
        refused = self._refuse_detached("delete")
        if refused is not None:
            return refused
        predicate = self._key_predicate("delete")
        if predicate.is_err():
            return predicate
        key_columns, key_values = predicate.unwrap()

        try:
            db = self._dependencies.get_dependency(DATABASE)
            cache = self._dependencies.get_dependency(CACHE)
            hooks = self._dependencies.get_dependency(HOOKS)
        except DependencyError as e:
            return self._fail("delete", e)

        ph = db.dialect.placeholder(0)
        where = " AND ".join(f"{self._quote(db, col)} = {ph}" for col in key_columns)
        sql = f"DELETE FROM {self._quote(db, self.schema.table)} WHERE {where}"
        try:
            matched = db.execute(sql, key_values)
        except Exception as e:
            return self._backend_failure("delete", e, sql)

        stored_key = self._stored_cache_key(key_values)
        if matched == 0:
            return self._lost_row("delete", cache, stored_key)

        cache.evict(self.entity_name(), stored_key)
        self._detached = True
        self._trigger(hooks, RECORD_DELETED, sql, key_values)
        logger.debug("record_deleted", entity=self.entity_name(), key=stored_key)
        return Ok(self)

    # ── Table lifecycle ──────────────────────────────────────────

    @classmethod
    def initialize(
        cls,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[None]:
        """Create the table if it does not exist yet."""
        try:
            deps = cls._container(dependencies)
            db = deps.get_dependency(DATABASE)
        except DependencyError as e:
            return cls._fail("initialize", e)

        settings = get_settings()
        sql = build_create_table(
            cls.schema,
            db.dialect,
            engine=settings.mysql_engine,
            charset=settings.mysql_charset,
        )
        try:
            db.execute_ddl(sql)
        except Exception as e:
            return cls._backend_failure("initialize", e, sql)

        logger.info("table_initialized", entity=cls.entity_name(), table=cls.schema.table)
        return Ok(None)

    @classmethod
    def initialize_demo(
        cls,
        *,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[int]:
        """Drop and recreate the table, then seed ``demo_data`` with gates disabled.

        Returns the number of seeded records.
        """
        try:
            deps = cls._container(dependencies)
            db = deps.get_dependency(DATABASE)
            cache = deps.get_dependency(CACHE)
        except DependencyError as e:
            return cls._fail("initialize_demo", e)

        drop_sql = build_drop_table(cls.schema, db.dialect)
        try:
            db.execute_ddl(drop_sql)
        except Exception as e:
            logger.warning(
                "table_drop_failed", entity=cls.entity_name(), sql=drop_sql, error=str(e)
            )
        cache.clear_type(cls.entity_name())

        initialized = cls.initialize(dependencies=deps)
        if initialized.is_err():
            return initialized

        if not cls.demo_data:
            return cls._fail(
                "initialize_demo",
                NotApplicableError(f"{cls.entity_name()} has no demo data"),
            )

        seeded = 0
        for entry in cls.demo_data:
            record = cls(dependencies=deps)
            record.set_policy(OPEN_POLICY)
            for name, value in entry.items():
                record.set_key(name, value)
            created = record.create()
            if created.is_err():
                return created
            seeded += 1

        logger.info("demo_data_seeded", entity=cls.entity_name(), count=seeded)
        return Ok(seeded)


__all__ = [
    "WILDCARD",
    "GenericRecord",
    "SetKeyOutcome",
    "as_boolean",
]
