"""Crew member runtime model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from nostromo.domain.graph import Room
from nostromo.domain.items import Item, ItemType

GENERIC_ITEM_CAPACITY = 3


@dataclass(eq=False, slots=True)
class Character:
    """A crew member on the roster.

    Generic items live in ``items`` (at most three); a coolant canister can
    only be carried in the exclusive ``coolant`` slot.
    """

    id: str
    first_name: str
    last_name: str
    max_actions: int
    ability_id: str
    ability_description: str
    location: Room
    current_actions: int = 0
    scrap: int = 0
    items: List[Item] = field(default_factory=list)
    coolant: Item | None = None
    countdown: int | None = None

    @property
    def name(self) -> str:
        return self.last_name

    @property
    def has_free_item_slot(self) -> bool:
        return len(self.items) < GENERIC_ITEM_CAPACITY

    def carried_items(self) -> List[Item]:
        carried = list(self.items)
        if self.coolant is not None:
            carried.append(self.coolant)
        return carried

    def find_item(self, item_type: ItemType) -> Item | None:
        for item in self.carried_items():
            if item.type == item_type:
                return item
        return None

    def has_item(self, item_type: ItemType) -> bool:
        return self.find_item(item_type) is not None

    def can_take(self, item: Item) -> bool:
        if item.type == ItemType.COOLANT_CANISTER:
            return self.coolant is None
        return self.has_free_item_slot

    def take_item(self, item: Item) -> bool:
        """Store an item in the matching slot; return False when it is full."""
        if not self.can_take(item):
            return False
        if item.type == ItemType.COOLANT_CANISTER:
            self.coolant = item
        else:
            self.items.append(item)
        return True

    def remove_item(self, item: Item) -> None:
        if item is self.coolant:
            self.coolant = None
            return
        for index, held in enumerate(self.items):
            if held is item:
                del self.items[index]
                return
        raise ValueError(f"{self.name} is not holding {item.label}.")
