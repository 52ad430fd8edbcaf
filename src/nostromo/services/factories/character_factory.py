"""Factory for creating crew members from definitions."""
from __future__ import annotations

from nostromo.data.repositories import CharactersRepository
from nostromo.domain.entities import Character
from nostromo.domain.graph import Room
from nostromo.services.errors import FactoryError


def create_character(character_id: str, characters_repo: CharactersRepository, location: Room) -> Character:
    """Instantiate a crew member standing in ``location``."""
    try:
        character_def = characters_repo.get(character_id)
    except KeyError as exc:
        raise FactoryError(f"Character '{character_id}' not found.") from exc

    return Character(
        id=character_def.id,
        first_name=character_def.first_name,
        last_name=character_def.last_name,
        max_actions=character_def.max_actions,
        ability_id=character_def.ability_id,
        ability_description=character_def.ability_description,
        location=location,
    )
