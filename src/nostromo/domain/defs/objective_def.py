"""Objective definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from nostromo.domain.items import ItemType
from nostromo.domain.objectives import ObjectiveKind


@dataclass(slots=True)
class ObjectiveDef:
    """An objective from the pool, referencing its room by name."""

    id: str
    name: str
    kind: ObjectiveKind
    location_name: str
    item_type: ItemType | None = None
    minimum_scrap: int = 0
