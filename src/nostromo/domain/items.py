"""Item catalogue and runtime item instances."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

UNLIMITED_USES = -1


class ItemType(Enum):
    """Closed set of items the crew can carry."""

    FLASHLIGHT = "FLASHLIGHT"
    MOTION_TRACKER = "MOTION TRACKER"
    GRAPPLE_GUN = "GRAPPLE GUN"
    INCINERATOR = "INCINERATOR"
    ELECTRIC_PROD = "ELECTRIC PROD"
    CAT_CARRIER = "CAT CARRIER"
    COOLANT_CANISTER = "COOLANT CANISTER"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ItemSpec:
    """Static rules for one item type."""

    cost: int | None
    uses: int
    uses_action: bool
    description: str

    @property
    def craftable(self) -> bool:
        return self.cost is not None


ITEM_SPECS: Dict[ItemType, ItemSpec] = {
    ItemType.FLASHLIGHT: ItemSpec(
        cost=2,
        uses=UNLIMITED_USES,
        uses_action=False,
        description="Reveal adjacent rooms. Lets a fleeing holder stop 1-3 spaces away.",
    ),
    ItemType.MOTION_TRACKER: ItemSpec(
        cost=3,
        uses=UNLIMITED_USES,
        uses_action=True,
        description="Resolve an Event up to 2 spaces away without moving.",
    ),
    ItemType.GRAPPLE_GUN: ItemSpec(
        cost=3,
        uses=2,
        uses_action=True,
        description="Drag the Xenomorph (within 2 spaces) to an empty room near it.",
    ),
    ItemType.INCINERATOR: ItemSpec(
        cost=4,
        uses=2,
        uses_action=True,
        description="Drive the Xenomorph (within 1 space) back to its nest. Ends your turn.",
    ),
    ItemType.ELECTRIC_PROD: ItemSpec(
        cost=3,
        uses=2,
        uses_action=False,
        description="Prevent 2 Morale loss when meeting an adversary.",
    ),
    ItemType.CAT_CARRIER: ItemSpec(
        cost=1,
        uses=1,
        uses_action=False,
        description="Prevent 1 Morale loss.",
    ),
    ItemType.COOLANT_CANISTER: ItemSpec(
        cost=None,
        uses=1,
        uses_action=False,
        description="Objective and final mission component. Hurts Ash.",
    ),
}


@dataclass(slots=True)
class Item:
    """An item instance held by a character or lying in a room."""

    type: ItemType
    uses: int

    @property
    def spec(self) -> ItemSpec:
        return ITEM_SPECS[self.type]

    @property
    def uses_action(self) -> bool:
        return self.spec.uses_action

    @property
    def label(self) -> str:
        if self.uses == UNLIMITED_USES:
            return f"{self.type.label} (inf uses)"
        return f"{self.type.label} ({self.uses} uses)"

    def spend_use(self) -> bool:
        """Spend one use. Return True when the item is used up."""
        if self.uses == UNLIMITED_USES:
            return False
        self.uses = max(0, self.uses - 1)
        return self.uses == 0


def new_item(item_type: ItemType) -> Item:
    """Instantiate an item with its full number of uses."""
    return Item(type=item_type, uses=ITEM_SPECS[item_type].uses)


def craftable_types() -> List[ItemType]:
    """Return craftable item types in catalogue order."""
    return [item_type for item_type in ItemType if ITEM_SPECS[item_type].craftable]


def craft_cost(item_type: ItemType, discount: int = 0) -> int:
    """Return the Scrap cost of crafting an item, never below zero."""
    cost = ITEM_SPECS[item_type].cost
    if cost is None:
        raise ValueError(f"{item_type.label} cannot be crafted.")
    return max(0, cost - discount)
