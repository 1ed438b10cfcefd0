"""Rooms talks can be scheduled in."""

from __future__ import annotations

from campfire.core.permissions import PermissionPolicy
from campfire.core.record import GenericRecord
from campfire.core.registry import register_entity
from campfire.core.schema import EntitySchema, FieldSpec


@register_entity("Room")
class Room(GenericRecord):
    """A room. Only administrators may add, change or remove rooms."""

    schema = EntitySchema(
        table="room",
        key_column="intRoomID",
        fields={
            "strRoom": FieldSpec("varchar", length=255),
            "intCapacity": FieldSpec("int", length=11),
            "lastChange": FieldSpec("datetime"),
        },
    )
    policy = PermissionPolicy(admin_only=True)
    demo_data = (
        {"strRoom": "Room 1", "intCapacity": 50},
        {"strRoom": "Room 2", "intCapacity": 30},
        {"strRoom": "Room 3", "intCapacity": 20},
    )
