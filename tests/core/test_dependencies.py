"""Tests for campfire.core.dependencies."""

import pytest

from campfire.core.adapters import SQLiteAdapter
from campfire.core.cache import RecordCache, get_record_cache
from campfire.core.dependencies import (
    CACHE,
    DATABASE,
    HOOKS,
    DependencyContainer,
    get_database,
    list_default_dependencies,
    register_default_dependency,
)
from campfire.core.errors import DependencyError
from campfire.core.hooks import get_hook_registry


class TestSetDependency:
    def test_inject_and_get(self, adapter):
        container = DependencyContainer()
        container.set_dependency(DATABASE, adapter)
        assert container.get_dependency(DATABASE) is adapter
        assert DATABASE in container

    def test_reinjection_is_refused(self, adapter):
        container = DependencyContainer({DATABASE: adapter})
        with pytest.raises(DependencyError, match="already set") as exc_info:
            container.set_dependency(DATABASE, SQLiteAdapter())
        assert exc_info.value.dependency == DATABASE
        assert container.get_dependency(DATABASE) is adapter

    @pytest.mark.parametrize("name", [None, ""])
    def test_unnamed_is_refused(self, name):
        with pytest.raises(DependencyError, match="must not be empty"):
            DependencyContainer().set_dependency(name, object())

    def test_none_value_is_refused(self):
        with pytest.raises(DependencyError):
            DependencyContainer().set_dependency(CACHE, None)


class TestSetDependencies:
    def test_all_succeed(self, adapter):
        container = DependencyContainer()
        assert container.set_dependencies({DATABASE: adapter, CACHE: RecordCache()}) is True

    def test_partial_failure_reports_false_but_keeps_going(self, adapter):
        container = DependencyContainer({DATABASE: adapter})
        cache = RecordCache()
        assert container.set_dependencies({DATABASE: SQLiteAdapter(), CACHE: cache}) is False
        assert container.get_dependency(DATABASE) is adapter
        assert container.get_dependency(CACHE) is cache


class TestDefaults:
    def test_well_known_names(self):
        assert {DATABASE, CACHE, HOOKS} <= set(list_default_dependencies())

    def test_cache_and_hooks_resolve_to_process_defaults(self):
        container = DependencyContainer()
        assert container.get_dependency(CACHE) is get_record_cache()
        assert container.get_dependency(HOOKS) is get_hook_registry()

    def test_database_resolves_from_settings(self):
        container = DependencyContainer()
        db = container.get_dependency(DATABASE)
        assert isinstance(db, SQLiteAdapter)
        assert db is get_database()

    def test_resolution_is_remembered(self):
        calls = []
        register_default_dependency("clock", lambda: calls.append(1) or object())
        container = DependencyContainer()
        first = container.get_dependency("clock")
        assert container.get_dependency("clock") is first
        assert calls == [1]

    def test_unknown_name(self):
        with pytest.raises(DependencyError, match="No dependency registered"):
            DependencyContainer().get_dependency("mailer")

    def test_failing_factory_is_wrapped(self):
        def broken():
            raise RuntimeError("cannot reach database")

        register_default_dependency(DATABASE, broken)
        with pytest.raises(DependencyError) as exc_info:
            DependencyContainer().get_dependency(DATABASE)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_register_requires_name(self):
        with pytest.raises(DependencyError):
            register_default_dependency("", object)
