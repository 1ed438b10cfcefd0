"""CampFire entity types.

Importing this package registers every entity with
:mod:`campfire.core.registry`.
"""

from campfire.objects.room import Room
from campfire.objects.screen import Screen
from campfire.objects.screen_direction import DIRECTIONS, ScreenDirection

__all__ = [
    "DIRECTIONS",
    "Room",
    "Screen",
    "ScreenDirection",
]
