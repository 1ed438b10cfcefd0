"""Mutation gates for generic records.

Manifesto:
    Two independent gates guard ``create``, ``write`` and ``delete``:

    - **admin-only**: the actor must be signed in and be an administrator.
    - **creator-only**: applies only to entity types that declare an owner
      field (``intUserID`` by default). The actor must be signed in, be the
      record's owner, and hold both the worker and the admin capability.

    A refused gate produces :class:`~campfire.core.errors.AuthorizationError`
    before any SQL reaches the backend.

Examples:
    >>> policy = PermissionPolicy(admin_only=True)
    >>> policy.check(None, {}, schema).is_err()
    True

Tags:
    permissions, authorization, campfire
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from campfire.core.actor import Actor
from campfire.core.errors import AuthorizationError, ErrorContext
from campfire.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from campfire.core.schema import EntitySchema


@dataclass(frozen=True)
class PermissionPolicy:
    """Gate configuration of an entity type.

    Attributes:
        admin_only: Only administrators may mutate records.
        creator_only: Only the record's owner (who must also be worker and
            admin) may mutate records. Ignored when the type has no owner field.
    """

    admin_only: bool = False
    creator_only: bool = False

    def check(
        self,
        actor: Actor | None,
        values: Mapping[str, Any],
        schema: EntitySchema,
        *,
        operation: str = "write",
    ) -> Result[None]:
        """Evaluate both gates for ``actor`` against a record's current ``values``."""
        if self.admin_only and (actor is None or not actor.is_admin):
            return Err(
                AuthorizationError(
                    f"{operation} on {schema.table} requires an administrator",
                    context=ErrorContext(table=schema.table, operation=operation),
                )
            )

        owner_field = schema.owner_field
        if self.creator_only and owner_field and owner_field in schema.fields:
            allowed = (
                actor is not None
                and actor.owns(values.get(owner_field))
                and actor.is_worker
                and actor.is_admin
            )
            if not allowed:
                return Err(
                    AuthorizationError(
                        f"{operation} on {schema.table} is restricted to the record's creator",
                        context=ErrorContext(
                            table=schema.table, column=owner_field, operation=operation
                        ),
                    )
                )

        return Ok(None)

    def can_modify(
        self, actor: Actor | None, values: Mapping[str, Any], schema: EntitySchema
    ) -> bool:
        return self.check(actor, values, schema).is_ok()


OPEN_POLICY = PermissionPolicy()

__all__ = ["PermissionPolicy", "OPEN_POLICY"]
