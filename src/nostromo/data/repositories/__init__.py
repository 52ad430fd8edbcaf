"""Repository exports."""

from .characters_repo import CharactersRepository
from .map_repo import MapRepository
from .objectives_repo import ObjectivesRepository

__all__ = [
    "CharactersRepository",
    "MapRepository",
    "ObjectivesRepository",
]
