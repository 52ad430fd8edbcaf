"""Factory binding pool objectives to rooms of the current map."""
from __future__ import annotations

from nostromo.domain.defs import ObjectiveDef
from nostromo.domain.objectives import Objective
from nostromo.domain.state import GameState
from nostromo.services.final_mission_service import resolve_room


def create_objective(objective_def: ObjectiveDef, state: GameState) -> Objective:
    return Objective(
        name=objective_def.name,
        kind=objective_def.kind,
        location=resolve_room(state, objective_def.location_name),
        item_type=objective_def.item_type,
        minimum_scrap=objective_def.minimum_scrap,
    )
