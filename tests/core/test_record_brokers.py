"""Tests for GenericRecord brokers (by id, by column, all) and aggregates."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from campfire.core.cache import RecordCache
from campfire.core.dependencies import DATABASE, DependencyContainer, register_default_dependency
from campfire.core.errors import (
    DatabaseError,
    DependencyError,
    ErrorCategory,
    NotApplicableError,
    QueryError,
    UnknownFieldError,
)
from campfire.core.hooks import HookRegistry
from campfire.objects import Screen


@pytest.fixture
def screens(deps):
    """Three screens: two named, one with no name."""
    Screen.initialize(dependencies=deps).unwrap()
    created = []
    for name in ("Base of Stairs", "Top of Stairs", None):
        screen = Screen(dependencies=deps)
        if name is not None:
            screen.set_key("strScreen", name)
        created.append(screen.create().unwrap())
    return created


@pytest.fixture
def mock_deps():
    """Container whose database records calls and must not be touched."""
    return DependencyContainer(
        {"database": MagicMock(), "cache": RecordCache(), "hooks": HookRegistry()}
    )


class TestBrokerById:
    def test_cache_hit_returns_same_instance(self, deps, screens):
        assert Screen.broker_by_id(1, dependencies=deps).unwrap() is screens[0]

    def test_lookup_populates_cache(self, fresh_deps, screens):
        loaded = Screen.broker_by_id(2, dependencies=fresh_deps).unwrap()
        assert loaded is not screens[1]
        assert loaded.values == screens[1].values
        assert loaded.dirty_fields == frozenset()
        assert Screen.broker_by_id("2", dependencies=fresh_deps).unwrap() is loaded

    def test_missing_row_is_absent(self, deps, screens):
        assert Screen.broker_by_id(99, dependencies=deps).unwrap() is None

    @pytest.mark.parametrize("key", [0, -1, "abc", None, "0"])
    def test_invalid_key_is_absent_without_lookup(self, mock_deps, key):
        result = Screen.broker_by_id(key, dependencies=mock_deps)
        assert result.is_ok()
        assert result.unwrap() is None
        assert mock_deps.get_dependency(DATABASE).method_calls == []

    def test_backend_failure(self, deps):
        result = Screen.broker_by_id(1, dependencies=deps)
        assert isinstance(result.error, DatabaseError)
        assert isinstance(result.error.__cause__, sqlite3.OperationalError)
        assert result.error.context.operation == "broker_by_id"


class TestBrokerByColumnSearch:
    def test_exact_match(self, fresh_deps, screens):
        found = Screen.broker_by_column_search(
            "strScreen", "Top of Stairs", dependencies=fresh_deps
        ).unwrap()
        assert [s.primary_key for s in found] == [2]

    def test_wildcard_matches_non_null_in_key_order(self, fresh_deps, screens):
        found = Screen.broker_by_column_search("strScreen", "%", dependencies=fresh_deps).unwrap()
        assert [s.get_key("strScreen") for s in found] == ["Base of Stairs", "Top of Stairs"]

    def test_no_match_is_empty_list(self, deps, screens):
        assert Screen.broker_by_column_search("strScreen", "Roof", dependencies=deps).unwrap() == []

    def test_key_column_is_searchable(self, deps, screens):
        found = Screen.broker_by_column_search("intScreenID", 3, dependencies=deps).unwrap()
        assert len(found) == 1

    @pytest.mark.parametrize("column", ["strNope", "", None, "intScreenID; DROP TABLE screen"])
    def test_unknown_column_is_contract_violation(self, mock_deps, column):
        result = Screen.broker_by_column_search(column, "%", dependencies=mock_deps)
        assert isinstance(result.error, UnknownFieldError)
        assert result.error.category == ErrorCategory.VALIDATION
        assert mock_deps.get_dependency(DATABASE).method_calls == []

    def test_results_are_cached(self, fresh_deps, screens):
        found = Screen.broker_by_column_search("strScreen", "%", dependencies=fresh_deps).unwrap()
        assert Screen.broker_by_id(1, dependencies=fresh_deps).unwrap() is found[0]


class TestCounts:
    def test_count_by_column_search(self, deps, screens):
        assert Screen.count_by_column_search("strScreen", "Top of Stairs", dependencies=deps).unwrap() == 1
        assert Screen.count_by_column_search("strScreen", "%", dependencies=deps).unwrap() == 2
        assert Screen.count_by_column_search("strScreen", "Roof", dependencies=deps).unwrap() == 0

    def test_count_unknown_column(self, deps, screens):
        result = Screen.count_by_column_search("strNope", "x", dependencies=deps)
        assert isinstance(result.error, UnknownFieldError)

    def test_count_all(self, deps, screens):
        assert Screen.count_all(dependencies=deps).unwrap() == 3


class TestLastChange:
    @pytest.fixture
    def stamped(self, adapter, screens):
        for key, stamp in ((1, "2024-05-01 09:00:00"), (2, "2024-05-02 10:30:00"), (3, "2024-04-30 08:00:00")):
            adapter.execute(
                'UPDATE "screen" SET "lastChange" = ? WHERE "intScreenID" = ?', (stamp, key)
            )
        return screens

    def test_by_column_search(self, deps, stamped):
        result = Screen.last_change_by_column_search("strScreen", "Base of Stairs", dependencies=deps)
        assert result.unwrap() == "2024-05-01 09:00:00"

    def test_by_column_search_wildcard(self, deps, stamped):
        result = Screen.last_change_by_column_search("strScreen", "%", dependencies=deps)
        assert result.unwrap() == "2024-05-02 10:30:00"

    def test_by_column_search_no_match(self, deps, stamped):
        assert Screen.last_change_by_column_search("strScreen", "Roof", dependencies=deps).unwrap() is None

    def test_all(self, deps, stamped):
        assert Screen.last_change_all(dependencies=deps).unwrap() == "2024-05-02 10:30:00"

    def test_unknown_column(self, deps, stamped):
        result = Screen.last_change_by_column_search("strNope", "x", dependencies=deps)
        assert isinstance(result.error, UnknownFieldError)

    def test_not_applicable_without_timestamp_field(self, deps, tag_table):
        assert isinstance(
            tag_table.last_change_all(dependencies=deps).error, NotApplicableError
        )
        assert isinstance(
            tag_table.last_change_by_column_search("strTag", "%", dependencies=deps).error,
            NotApplicableError,
        )


class TestBrokerAll:
    def test_all_in_key_order(self, fresh_deps, screens):
        found = Screen.broker_all(dependencies=fresh_deps).unwrap()
        assert [s.primary_key for s in found] == [1, 2, 3]

    def test_empty_table(self, deps):
        Screen.initialize(dependencies=deps).unwrap()
        assert Screen.broker_all(dependencies=deps).unwrap() == []
        assert Screen.count_all(dependencies=deps).unwrap() == 0

    def test_missing_table_is_query_error(self, deps):
        result = Screen.broker_all(dependencies=deps)
        assert isinstance(result.error, QueryError)
        assert result.error.context.operation == "broker_all"
        assert "SELECT" in result.error.context.metadata["sql"]


class TestDefaultCollaborators:
    def test_process_defaults_are_used(self):
        Screen.initialize().unwrap()
        screen = Screen()
        screen.set_key("strScreen", "Lobby")
        screen.create().unwrap()
        assert Screen.broker_by_id(1).unwrap() is screen

    def test_unresolvable_database_fails_only_the_call(self):
        def unreachable():
            raise RuntimeError("cannot reach database")

        register_default_dependency(DATABASE, unreachable)

        result = Screen.broker_all()
        assert isinstance(result.error, DependencyError)
        assert result.error.category == ErrorCategory.CONFIG
        assert Screen.broker_by_id(0).unwrap() is None
