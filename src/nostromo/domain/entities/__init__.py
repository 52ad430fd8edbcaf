"""Runtime entity exports."""

from .character import GENERIC_ITEM_CAPACITY, Character

__all__ = [
    "Character",
    "GENERIC_ITEM_CAPACITY",
]
