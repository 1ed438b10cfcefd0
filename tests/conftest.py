"""
Shared pytest fixtures for campfire tests.

This module provides:
- An in-memory SQLite adapter and a DependencyContainer wired to it
- A fresh RecordCache and HookRegistry per test
- Actors with the usual capability combinations
- Small test-only entity types (a creator-owned Talk, a timestamp-less Tag)
- Isolation of process defaults (settings, cache, hooks, database, registry)

Usage:
    def test_something(deps, admin):
        Screen.initialize(dependencies=deps)
        ...
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import campfire.objects  # noqa: F401
from campfire.core import dependencies as dependencies_module
from campfire.core import registry as registry_module
from campfire.core.actor import Actor
from campfire.core.adapters import SQLiteAdapter
from campfire.core.cache import InMemoryCache, RecordCache, set_record_cache
from campfire.core.dependencies import DependencyContainer, set_database
from campfire.core.hooks import HookEvent, HookRegistry, set_hook_registry
from campfire.core.permissions import PermissionPolicy
from campfire.core.record import GenericRecord
from campfire.core.schema import EntitySchema, FieldSpec
from campfire.core.settings import get_settings


# =============================================================================
# Test-only entity types
# =============================================================================


class Talk(GenericRecord):
    """Entity owned by the user who proposed it."""

    schema = EntitySchema(
        table="talk",
        key_column="intTalkID",
        fields={
            "strTalk": FieldSpec("varchar", length=255),
            "intUserID": FieldSpec("int", length=11),
            "lastChange": FieldSpec("datetime"),
        },
    )
    policy = PermissionPolicy(creator_only=True)


class Tag(GenericRecord):
    """Entity without a last-modified column."""

    schema = EntitySchema(
        table="tag",
        key_column="intTagID",
        fields={"strTag": FieldSpec("varchar", length=64, unique=True)},
    )


# =============================================================================
# Process isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_process_defaults(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset every process-wide default around each test."""
    monkeypatch.setenv("CAMPFIRE_DATABASE_URL", "memory")
    get_settings.cache_clear()
    set_record_cache(None)
    set_hook_registry(None)
    set_database(None)
    entities = dict(registry_module._registry)
    defaults = dict(dependencies_module._defaults)

    yield

    registry_module._registry.clear()
    registry_module._registry.update(entities)
    dependencies_module._defaults.clear()
    dependencies_module._defaults.update(defaults)
    set_record_cache(None)
    set_hook_registry(None)
    set_database(None)
    get_settings.cache_clear()


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def adapter() -> Iterator[SQLiteAdapter]:
    db = SQLiteAdapter(":memory:")
    db.connect()
    yield db
    db.disconnect()


@pytest.fixture
def record_cache() -> RecordCache:
    return RecordCache(InMemoryCache(max_size=1000))


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def fired(hooks: HookRegistry) -> list[HookEvent]:
    """Every hook event triggered through the ``hooks`` fixture."""
    events: list[HookEvent] = []
    hooks.register("*", events.append)
    return events


@pytest.fixture
def deps(adapter: SQLiteAdapter, record_cache: RecordCache, hooks: HookRegistry) -> DependencyContainer:
    return DependencyContainer({"database": adapter, "cache": record_cache, "hooks": hooks})


@pytest.fixture
def fresh_deps(adapter: SQLiteAdapter) -> DependencyContainer:
    """Same database as ``deps`` but an empty cache, to force real lookups."""
    return DependencyContainer(
        {"database": adapter, "cache": RecordCache(), "hooks": HookRegistry()}
    )


# =============================================================================
# Actors
# =============================================================================


@pytest.fixture
def admin() -> Actor:
    return Actor(actor_id=1, is_admin=True, is_worker=True)


@pytest.fixture
def worker() -> Actor:
    return Actor(actor_id=2, is_worker=True)


@pytest.fixture
def attendee() -> Actor:
    return Actor(actor_id=3)


# =============================================================================
# Tables
# =============================================================================


@pytest.fixture
def talk_table(deps: DependencyContainer) -> type[Talk]:
    Talk.initialize(dependencies=deps).unwrap()
    return Talk


@pytest.fixture
def tag_table(deps: DependencyContainer) -> type[Tag]:
    Tag.initialize(dependencies=deps).unwrap()
    return Tag
