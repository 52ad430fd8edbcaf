"""Deck plan definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class RoomDef:
    """A room entry from map.json."""

    name: str
    named: bool
    connections: Tuple[str, ...]
    ladder: str | None = None


@dataclass(slots=True)
class LayoutDef:
    """Start rooms and initial placements by room name."""

    player_start: str
    xenomorph_start: str
    ash_start: str
    default_room: str
    scrap_rooms: Tuple[str, ...] = ()
    event_rooms: Tuple[str, ...] = ()
    coolant_rooms: Tuple[str, ...] = ()
