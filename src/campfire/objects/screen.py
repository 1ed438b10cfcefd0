"""Display screens around the venue.

A screen registers itself the first time it connects, named after its
remote address. Registration also creates one
:class:`~campfire.objects.screen_direction.ScreenDirection` per known room,
with the direction left ``unset`` until an administrator points it. A
registration that fails part way leaves neither screen nor directions behind.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from campfire.core.actor import Actor
from campfire.core.dependencies import DependencyContainer
from campfire.core.errors import DependencyError
from campfire.core.logging import get_logger
from campfire.core.record import GenericRecord
from campfire.core.registry import register_entity
from campfire.core.result import Err, Ok, Result
from campfire.core.schema import EntitySchema, FieldSpec
from campfire.objects.room import Room
from campfire.objects.screen_direction import ScreenDirection

logger = get_logger(__name__)

UNSET_DIRECTION = "unset"
HIDDEN_DIRECTION = "hidden"


@register_entity("Screen")
class Screen(GenericRecord):
    schema = EntitySchema(
        table="screen",
        key_column="intScreenID",
        fields={
            "strScreen": FieldSpec("varchar", length=255),
            "dtLastSeen": FieldSpec("datetime"),
            "lastChange": FieldSpec("datetime"),
        },
    )
    demo_data = (
        {"intScreenID": 1, "strScreen": "Base of Stairs", "dtLastSeen": None},
        {"intScreenID": 2, "strScreen": "Top of Stairs", "dtLastSeen": None},
        {"intScreenID": 3, "strScreen": "Outside Room 1", "dtLastSeen": None},
        {"intScreenID": 4, "strScreen": "Outside Room 2", "dtLastSeen": None},
        {"intScreenID": 5, "strScreen": "Outside Room 3", "dtLastSeen": None},
    )

    @classmethod
    def register(
        cls,
        name: str,
        *,
        actor: Actor | None = None,
        dependencies: DependencyContainer | Mapping[str, Any] | None = None,
    ) -> Result[Screen]:
        """Create a screen called ``name`` plus an ``unset`` direction for every room.

        Registration is all or nothing: when listing rooms or creating a
        direction fails, the directions made so far and the screen itself are
        deleted again and the original error is returned.
        """
        try:
            deps = cls._container(dependencies)
        except DependencyError as e:
            return cls._fail("register", e)

        screen = cls(dependencies=deps)
        screen.set_key("strScreen", name)
        created = screen.create(actor=actor)
        if created.is_err():
            return created

        rooms = Room.broker_all(dependencies=deps)
        if rooms.is_err():
            return screen._roll_back_registration([], rooms, actor)

        made_directions: list[ScreenDirection] = []
        for room in rooms.unwrap():
            direction = ScreenDirection(dependencies=deps)
            direction.set_key("intScreenID", screen.primary_key)
            direction.set_key("intRoomID", room.primary_key)
            direction.set_key("enumDirection", UNSET_DIRECTION)
            made = direction.create(actor=actor)
            if made.is_err():
                return screen._roll_back_registration(made_directions, made, actor)
            made_directions.append(direction)

        logger.info(
            "screen_registered",
            screen_id=screen.primary_key,
            name=name,
            rooms=len(made_directions),
        )
        return Ok(screen)

    def _roll_back_registration(
        self,
        directions: list[ScreenDirection],
        failure: Err,
        actor: Actor | None,
    ) -> Err:
        """Undo a partial :meth:`register` and pass ``failure`` through."""
        leftovers = []
        for record in [*reversed(directions), self]:
            undone = record.delete(actor=actor)
            if undone.is_err():
                leftovers.append(str(record.cache_key))
        if leftovers:
            logger.warning(
                "screen_registration_rollback_incomplete",
                screen_id=self.primary_key,
                leftovers=leftovers,
            )
        else:
            logger.info(
                "screen_registration_rolled_back",
                screen_id=self.primary_key,
                directions=len(directions),
                reason=str(failure.error),
            )
        return failure

    def get_data(self, actor: Actor | None = None) -> Result[dict[str, Any]]:
        """:meth:`to_dict` plus ``arrDirections``: direction → room ID → ScreenDirection.

        Rooms whose direction is ``hidden`` are left out.
        """
        data = self.to_dict(actor)
        directions = ScreenDirection.broker_by_column_search(
            "intScreenID", self.primary_key, dependencies=self.dependencies
        )
        if directions.is_err():
            return directions

        grouped: dict[str, dict[Any, ScreenDirection]] = {}
        for direction in directions.unwrap():
            value = direction.get_key("enumDirection")
            if value == HIDDEN_DIRECTION:
                continue
            grouped.setdefault(value, {})[direction.get_key("intRoomID")] = direction
        data["arrDirections"] = grouped
        return Ok(data)
