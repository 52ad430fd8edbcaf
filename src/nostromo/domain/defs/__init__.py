"""Domain definition exports."""

from .character_def import CharacterDef
from .objective_def import ObjectiveDef
from .room_def import LayoutDef, RoomDef

__all__ = [
    "CharacterDef",
    "LayoutDef",
    "ObjectiveDef",
    "RoomDef",
]
