"""Objective predicates and the hand-off to the final mission."""
from __future__ import annotations

import logging
from typing import List

from nostromo.domain.items import ItemType
from nostromo.domain.objectives import DROP_COOLANT_REQUIRED, Objective, ObjectiveKind
from nostromo.domain.state import GameState
from nostromo.services.context import GameContext
from nostromo.services.events import ObjectiveCompletedEvent
from nostromo.services.final_mission_service import FinalMissionController

logger = logging.getLogger(__name__)


def is_satisfied(state: GameState, objective: Objective) -> bool:
    """Evaluate an objective against the board as it stands right now."""
    room = objective.location
    if objective.kind is ObjectiveKind.BRING_ITEM_TO_LOCATION:
        assert objective.item_type is not None
        return any(
            character.has_item(objective.item_type) for character in state.characters_in(room)
        )
    if objective.kind is ObjectiveKind.CREW_AT_LOCATION_WITH_MINIMUM_SCRAP:
        return all(
            character.location is room and character.scrap >= objective.minimum_scrap
            for character in state.characters
        )
    if objective.kind is ObjectiveKind.DROP_COOLANT:
        return room.count_items(ItemType.COOLANT_CANISTER) >= DROP_COOLANT_REQUIRED
    raise ValueError(f"Unknown objective kind: {objective.kind}")


class ObjectiveTracker:
    def __init__(self, final_missions: FinalMissionController) -> None:
        self._final_missions = final_missions

    def evaluate(self, ctx: GameContext) -> List[Objective]:
        """Complete any satisfied objectives; start a final mission once all are done.

        Returns the objectives completed by this call. Completed objectives are
        never looked at again.
        """
        state = ctx.state
        completed: List[Objective] = []
        for objective in state.objectives:
            if objective.completed:
                continue
            if is_satisfied(state, objective):
                objective.completed = True
                completed.append(objective)
                logger.debug("Objective complete: %s", objective.name)
                ctx.emit(ObjectiveCompletedEvent(name=objective.name))

        if (
            state.final_mission is None
            and state.objectives
            and all(objective.completed for objective in state.objectives)
        ):
            mission = ctx.rng.choice(self._final_missions.available_missions(state))
            self._final_missions.start(ctx, mission)
        return completed
