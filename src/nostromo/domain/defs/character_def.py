"""Crew member definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CharacterDef:
    """A selectable crew member."""

    id: str
    first_name: str
    last_name: str
    max_actions: int
    ability_id: str
    ability_description: str
