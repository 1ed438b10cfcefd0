"""The party performing a mutation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Actor:
    """Identity and capability flags of whoever is creating, writing or deleting.

    Passed explicitly to every mutating operation. ``None`` in place of an
    actor means nobody is signed in.
    """

    actor_id: int
    is_admin: bool = False
    is_worker: bool = False

    def owns(self, owner_value: Any) -> bool:
        """Whether ``owner_value`` (a stored owner-column value) identifies this actor."""
        if owner_value is None:
            return False
        try:
            return int(owner_value) == int(self.actor_id)
        except (TypeError, ValueError):
            return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "actor_id": self.actor_id,
            "is_admin": self.is_admin,
            "is_worker": self.is_worker,
        }


__all__ = ["Actor"]
