"""Objective pool repository."""
from __future__ import annotations

from typing import Dict

from nostromo.data.errors import DataValidationError
from nostromo.data.repositories.base import RepositoryBase
from nostromo.domain.defs import ObjectiveDef
from nostromo.domain.items import ItemType
from nostromo.domain.objectives import ObjectiveKind


class ObjectivesRepository(RepositoryBase[ObjectiveDef]):
    """Loads the pool objectives are drawn from."""

    def __init__(self, base_path=None) -> None:
        super().__init__("objectives.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ObjectiveDef]:
        objectives: Dict[str, ObjectiveDef] = {}
        for raw_id, payload in raw.items():
            context = f"objective '{raw_id}'"
            mapping = self._require_mapping(payload, context)
            kind_value = self._require_str(mapping.get("kind"), f"{context} kind")
            try:
                kind = ObjectiveKind(kind_value)
            except ValueError as exc:
                raise DataValidationError(f"{context} has unknown kind '{kind_value}'.") from exc

            item_type = None
            if kind is ObjectiveKind.BRING_ITEM_TO_LOCATION:
                item_value = self._require_str(mapping.get("item"), f"{context} item")
                try:
                    item_type = ItemType[item_value]
                except KeyError as exc:
                    raise DataValidationError(f"{context} has unknown item '{item_value}'.") from exc
            elif "item" in mapping:
                raise DataValidationError(f"{context} only bring-item objectives take an item.")

            objectives[raw_id] = ObjectiveDef(
                id=raw_id,
                name=self._require_str(mapping.get("name"), f"{context} name"),
                kind=kind,
                location_name=self._require_str(mapping.get("location"), f"{context} location"),
                item_type=item_type,
                minimum_scrap=self._require_int(
                    mapping.get("minimum_scrap", 0), f"{context} minimum_scrap", minimum=0
                ),
            )
        return objectives
