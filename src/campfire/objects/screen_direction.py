"""Which way a screen should point people for each room."""

from __future__ import annotations

from campfire.core.record import GenericRecord
from campfire.core.registry import register_entity
from campfire.core.schema import EntitySchema, FieldSpec

DIRECTIONS = (
    "upleft",
    "up",
    "upright",
    "left",
    "inside",
    "right",
    "downleft",
    "down",
    "downright",
    "unset",
    "hidden",
)


@register_entity("ScreenDirection")
class ScreenDirection(GenericRecord):
    """Direction shown on one screen for one room.

    Keyed by the ``(intScreenID, intRoomID)`` pair rather than an
    auto-increment column.
    """

    schema = EntitySchema(
        table="screendirection",
        fields={
            "intScreenID": FieldSpec("int", length=11, nullable=False),
            "intRoomID": FieldSpec("int", length=11, nullable=False),
            "enumDirection": FieldSpec("enum", options=DIRECTIONS),
            "lastChange": FieldSpec("datetime"),
        },
        composite_key=("intScreenID", "intRoomID"),
    )
