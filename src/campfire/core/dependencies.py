"""Per-record collaborator injection.

Every :class:`~campfire.core.record.GenericRecord` owns a
:class:`DependencyContainer`. A collaborator that was never injected is
created lazily from the default registered for its name the first time
the record asks for it.

Well-known names
----------------
``database``  :class:`~campfire.core.adapters.DatabaseAdapter`
``cache``     :class:`~campfire.core.cache.RecordCache`
``hooks``     :class:`~campfire.core.hooks.HookRegistry`

Usage::

    container = DependencyContainer()
    container.set_dependency("database", SQLiteAdapter(":memory:"))
    container.get_dependency("database")      # the injected adapter
    container.get_dependency("cache")         # process-wide RecordCache

Rules
-----
- Injecting a name twice raises :class:`DependencyError`; the first value stays.
- Injecting under an empty name raises :class:`DependencyError`.
- Resolving a name with no injected value and no registered default raises
  :class:`DependencyError`. It never terminates the process.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from campfire.core.adapters import DatabaseAdapter
from campfire.core.cache import get_record_cache
from campfire.core.errors import DependencyError
from campfire.core.hooks import get_hook_registry
from campfire.core.logging import get_logger

logger = get_logger(__name__)

DATABASE = "database"
CACHE = "cache"
HOOKS = "hooks"


# ── Default database ─────────────────────────────────────────────────────

_database: DatabaseAdapter | None = None


def get_database() -> DatabaseAdapter:
    """Get the process-wide database adapter built from settings."""
    global _database
    if _database is None:
        from campfire.core.connection import create_adapter
        from campfire.core.settings import get_settings

        settings = get_settings()
        _database = create_adapter(settings.database_url, charset=settings.mysql_charset)
    return _database


def set_database(adapter: DatabaseAdapter | None) -> None:
    """Replace (or with ``None``, reset) the process-wide database adapter."""
    global _database
    _database = adapter


# ── Default factories ────────────────────────────────────────────────────

_defaults: dict[str, Callable[[], Any]] = {
    DATABASE: get_database,
    CACHE: get_record_cache,
    HOOKS: get_hook_registry,
}


def register_default_dependency(name: str, factory: Callable[[], Any]) -> None:
    """Register (or replace) the default factory for a dependency name."""
    if not name:
        raise DependencyError("Dependency name must not be empty")
    _defaults[name] = factory
    logger.debug("default_dependency_registered", dependency=name)


def list_default_dependencies() -> list[str]:
    return sorted(_defaults)


class DependencyContainer:
    """Named collaborators of one record instance."""

    def __init__(self, dependencies: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        if dependencies:
            for name, value in dependencies.items():
                self.set_dependency(name, value)

    def set_dependency(self, name: str | None, value: Any) -> None:
        """Inject one collaborator.

        Raises:
            DependencyError: If ``name`` is empty or already injected.
        """
        if not name:
            raise DependencyError("Dependency name must not be empty")
        if value is None:
            raise DependencyError(f"Dependency {name!r} must not be None", dependency=name)
        if name in self._values:
            raise DependencyError(f"Dependency {name!r} is already set", dependency=name)
        self._values[name] = value

    def set_dependencies(self, dependencies: Mapping[str, Any]) -> bool:
        """Inject several collaborators.

        Every entry is attempted; failures are logged. Returns ``True`` only
        if all of them were injected.
        """
        ok = True
        for name, value in dependencies.items():
            try:
                self.set_dependency(name, value)
            except DependencyError as e:
                logger.warning("dependency_injection_failed", **e.to_dict())
                ok = False
        return ok

    def get_dependency(self, name: str) -> Any:
        """Return the collaborator for ``name``, resolving the default on first use.

        Raises:
            DependencyError: If nothing is injected and no default can be built.
        """
        if name in self._values:
            return self._values[name]

        factory = _defaults.get(name)
        if factory is None:
            raise DependencyError(f"No dependency registered for {name!r}", dependency=name)

        try:
            value = factory()
        except Exception as e:
            raise DependencyError(
                f"Failed to create default dependency {name!r}: {e}",
                dependency=name,
                cause=e,
            ) from e

        self._values[name] = value
        return value

    def has_dependency(self, name: str) -> bool:
        """Whether ``name`` has been injected or already resolved."""
        return name in self._values

    def __contains__(self, name: object) -> bool:
        return name in self._values


__all__ = [
    "DATABASE",
    "CACHE",
    "HOOKS",
    "DependencyContainer",
    "get_database",
    "set_database",
    "register_default_dependency",
    "list_default_dependencies",
]
