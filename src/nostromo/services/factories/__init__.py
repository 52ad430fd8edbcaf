"""Factory helpers for runtime entities."""

from .character_factory import create_character
from .objective_factory import create_objective

__all__ = [
    "create_character",
    "create_objective",
]
