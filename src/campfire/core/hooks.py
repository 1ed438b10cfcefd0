"""Post-mutation hooks.

Why This Module Exists
----------------------
Other parts of the application react when a record is created, updated or
deleted (pushing a changed talk to the screens, announcing it over a
messaging Glue). The record layer must not import any of them. It only
triggers a named hook with the affected record; observers register for the
hook names they care about.

Hook names
----------
``record.created``  after a successful ``create``
``record.updated``  after a successful ``write``
``record.deleted``  after a successful ``delete``

Patterns accept ``*`` (everything) and ``record.*`` (prefix) wildcards.

Usage::

    from campfire.core.hooks import get_hook_registry

    def announce(event):
        print(event.name, event.entity, event.record.primary_key)

    get_hook_registry().register("record.*", announce)
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from campfire.core.logging import get_logger

logger = get_logger(__name__)

RECORD_CREATED = "record.created"
RECORD_UPDATED = "record.updated"
RECORD_DELETED = "record.deleted"


@dataclass
class HookEvent:
    """Notification payload handed to hook handlers.

    Attributes:
        name: Hook name (``record.created`` ...)
        entity: Entity type name of the affected record
        record: The affected record instance
        statement: SQL that was executed
        params: Parameters bound to ``statement``
        timestamp: When the hook fired (UTC)
    """

    name: str
    entity: str
    record: Any
    statement: str = ""
    params: tuple = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def matches(self, pattern: str) -> bool:
        """Check if the hook name matches a pattern (supports wildcards)."""
        if pattern == "*":
            return True
        if pattern.endswith(".*"):
            return self.name.startswith(pattern[:-2] + ".")
        return self.name == pattern


HookHandler = Callable[[HookEvent], None]


@dataclass
class _Registration:
    id: str
    pattern: str
    handler: HookHandler


class HookRegistry:
    """Synchronous in-process hook dispatcher.

    Handlers run in registration order. A handler that raises is logged and
    skipped; the remaining handlers still run and the triggering operation
    still succeeds.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, _Registration] = {}

    def register(self, pattern: str, handler: HookHandler) -> str:
        """Register ``handler`` for hooks matching ``pattern``; returns a registration ID."""
        reg_id = f"hook_{uuid.uuid4().hex[:12]}"
        self._registrations[reg_id] = _Registration(id=reg_id, pattern=pattern, handler=handler)
        return reg_id

    def unregister(self, registration_id: str) -> None:
        self._registrations.pop(registration_id, None)

    def trigger(self, event: HookEvent) -> int:
        """Deliver ``event`` to every matching handler. Returns the number delivered."""
        delivered = 0
        for reg in list(self._registrations.values()):
            if not event.matches(reg.pattern):
                continue
            try:
                reg.handler(event)
                delivered += 1
            except Exception as e:
                logger.warning(
                    "hook_handler_error",
                    registration_id=reg.id,
                    hook=event.name,
                    entity=event.entity,
                    error=str(e),
                )
        return delivered

    def clear(self) -> None:
        self._registrations.clear()

    @property
    def registration_count(self) -> int:
        return len(self._registrations)


# ── Process default ──────────────────────────────────────────────────────

_hook_registry: HookRegistry | None = None


def get_hook_registry() -> HookRegistry:
    """Get the process-wide hook registry."""
    global _hook_registry
    if _hook_registry is None:
        _hook_registry = HookRegistry()
    return _hook_registry


def set_hook_registry(registry: HookRegistry | None) -> None:
    """Replace (or with ``None``, reset) the process-wide hook registry."""
    global _hook_registry
    _hook_registry = registry


__all__ = [
    "RECORD_CREATED",
    "RECORD_UPDATED",
    "RECORD_DELETED",
    "HookEvent",
    "HookHandler",
    "HookRegistry",
    "get_hook_registry",
    "set_hook_registry",
]
