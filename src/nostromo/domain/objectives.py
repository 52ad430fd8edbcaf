"""Standard objectives drawn at game start."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nostromo.domain.graph import Room
from nostromo.domain.items import ItemType

DROP_COOLANT_REQUIRED = 2


class ObjectiveKind(Enum):
    """Predicate families an objective can use."""

    BRING_ITEM_TO_LOCATION = "bring_item_to_location"
    CREW_AT_LOCATION_WITH_MINIMUM_SCRAP = "crew_at_location_with_minimum_scrap"
    DROP_COOLANT = "drop_coolant"


@dataclass(eq=False, slots=True)
class Objective:
    """An objective bound to a room on the current map.

    ``completed`` only ever flips from False to True.
    """

    name: str
    kind: ObjectiveKind
    location: Room
    item_type: ItemType | None = None
    minimum_scrap: int = 0
    completed: bool = False

    def describe(self) -> str:
        if self.kind is ObjectiveKind.BRING_ITEM_TO_LOCATION:
            assert self.item_type is not None
            return f"Bring {self.item_type.label} to {self.location.name}"
        if self.kind is ObjectiveKind.CREW_AT_LOCATION_WITH_MINIMUM_SCRAP:
            text = f"All Crew members in {self.location.name}"
            if self.minimum_scrap > 0:
                text += f" with at least {self.minimum_scrap} Scrap each"
            return text
        return (
            f"Drop {DROP_COOLANT_REQUIRED} {ItemType.COOLANT_CANISTER.label}S in {self.location.name}"
        )
