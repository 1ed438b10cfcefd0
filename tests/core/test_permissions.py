"""Tests for campfire.core.permissions."""

import pytest

from campfire.core.actor import Actor
from campfire.core.errors import AuthorizationError
from campfire.core.permissions import OPEN_POLICY, PermissionPolicy
from campfire.core.schema import EntitySchema, FieldSpec

OWNED = EntitySchema(
    table="talk",
    key_column="intTalkID",
    fields={"strTalk": FieldSpec("varchar", length=255), "intUserID": FieldSpec("int")},
)
UNOWNED = EntitySchema(
    table="room",
    key_column="intRoomID",
    fields={"strRoom": FieldSpec("varchar", length=255)},
)


class TestActor:
    def test_owns(self):
        actor = Actor(actor_id=5)
        assert actor.owns(5)
        assert actor.owns("5")
        assert not actor.owns(6)
        assert not actor.owns(None)
        assert not actor.owns("nobody")


class TestOpenPolicy:
    def test_everyone_may_modify(self):
        assert OPEN_POLICY.check(None, {}, OWNED).is_ok()


class TestAdminOnly:
    policy = PermissionPolicy(admin_only=True)

    def test_admin_allowed(self):
        assert self.policy.check(Actor(1, is_admin=True), {}, UNOWNED).is_ok()

    @pytest.mark.parametrize("actor", [None, Actor(2), Actor(3, is_worker=True)])
    def test_others_refused(self, actor):
        result = self.policy.check(actor, {}, UNOWNED, operation="create")
        assert isinstance(result.error, AuthorizationError)
        assert result.error.context.operation == "create"


class TestCreatorOnly:
    policy = PermissionPolicy(creator_only=True)
    values = {"intUserID": 5}

    def test_owner_with_both_roles_allowed(self):
        actor = Actor(5, is_admin=True, is_worker=True)
        assert self.policy.check(actor, self.values, OWNED).is_ok()

    @pytest.mark.parametrize(
        "actor",
        [
            None,
            Actor(5),
            Actor(5, is_worker=True),
            Actor(5, is_admin=True),
            Actor(6, is_admin=True, is_worker=True),
        ],
    )
    def test_everyone_else_refused(self, actor):
        result = self.policy.check(actor, self.values, OWNED)
        assert result.is_err()
        assert result.error.context.column == "intUserID"

    def test_ignored_without_owner_field(self):
        assert self.policy.check(None, {}, UNOWNED).is_ok()

    def test_can_modify(self):
        assert self.policy.can_modify(Actor(5, is_admin=True, is_worker=True), self.values, OWNED)
        assert not self.policy.can_modify(None, self.values, OWNED)
