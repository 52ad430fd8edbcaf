"""Crew pool repository."""
from __future__ import annotations

from typing import Dict

from nostromo.data.errors import DataValidationError
from nostromo.data.repositories.base import RepositoryBase
from nostromo.domain.defs import CharacterDef

_FIELDS = {"first_name", "last_name", "max_actions", "ability", "ability_description"}


class CharactersRepository(RepositoryBase[CharacterDef]):
    """Loads and validates crew member definitions."""

    def __init__(self, base_path=None, *, known_abilities: set[str] | None = None) -> None:
        super().__init__("characters.json", base_path)
        self._known_abilities = known_abilities

    def _build(self, raw: dict[str, object]) -> Dict[str, CharacterDef]:
        characters: Dict[str, CharacterDef] = {}
        for raw_id, payload in raw.items():
            mapping = self._require_mapping(payload, f"character '{raw_id}'")
            unknown = set(mapping) - _FIELDS
            missing = _FIELDS - set(mapping)
            if unknown or missing:
                raise DataValidationError(
                    f"character '{raw_id}' has schema issues "
                    f"(missing: {sorted(missing)}, unknown: {sorted(unknown)})."
                )
            ability_id = self._require_str(mapping["ability"], f"character '{raw_id}' ability")
            if self._known_abilities is not None and ability_id not in self._known_abilities:
                raise DataValidationError(
                    f"character '{raw_id}' uses unknown ability '{ability_id}'."
                )
            characters[raw_id] = CharacterDef(
                id=raw_id,
                first_name=self._require_str(mapping["first_name"], f"character '{raw_id}' first_name"),
                last_name=self._require_str(mapping["last_name"], f"character '{raw_id}' last_name"),
                max_actions=self._require_int(
                    mapping["max_actions"], f"character '{raw_id}' max_actions", minimum=1
                ),
                ability_id=ability_id,
                ability_description=self._require_str(
                    mapping["ability_description"], f"character '{raw_id}' ability_description"
                ),
            )
        return characters
