"""End-of-turn encounter cards."""
from __future__ import annotations

import logging
from typing import Callable, Dict

from nostromo.domain.encounters import ADVERSARY_CARDS, EncounterType
from nostromo.domain.final_missions import FINAL_MISSIONS
from nostromo.services.adversary_service import AdversaryController
from nostromo.services.context import GameContext
from nostromo.services.events import EncounterDrawnEvent, RoomSuppliedEvent, ScrapChangedEvent
from nostromo.services.final_mission_service import FinalMissionController
from nostromo.services.movement_service import MovementService

logger = logging.getLogger(__name__)

ORDER_937_ASH_MOVES = 2


class EncounterService:
    """Draws one card from the encounter deck and applies it."""

    def __init__(
        self,
        adversaries: AdversaryController,
        movement: MovementService,
        final_missions: FinalMissionController,
    ) -> None:
        self._adversaries = adversaries
        self._movement = movement
        self._final_missions = final_missions
        self._handlers: Dict[EncounterType, Callable[[GameContext], None]] = {
            EncounterType.QUIET: self._quiet,
            EncounterType.LOST_THE_SIGNAL: self._lost_the_signal,
            EncounterType.STALK: self._stalk,
            EncounterType.HUNT: self._hunt,
            EncounterType.MEET_ME_IN_THE_INFIRMARY: self._meet_me_in_the_infirmary,
            EncounterType.CREW_EXPENDABLE: self._crew_expendable,
            EncounterType.COLLATING_DATA: self._collating_data,
        }

    def draw_and_resolve(self, ctx: GameContext) -> EncounterType:
        card = ctx.state.deck.draw()
        logger.debug("Encounter drawn: %s", card.value)
        ctx.emit(EncounterDrawnEvent(encounter=card))
        if card in ADVERSARY_CARDS:
            self._final_missions.check_encounter_win(ctx)
        self._handlers[card](ctx)
        return card

    # -----------------------
    # Alien cards
    # -----------------------
    def _quiet(self, ctx: GameContext) -> None:
        state = ctx.state
        room = ctx.rng.choice(state.graph.named_rooms())
        roll = ctx.rng.randint(1, 11)
        if roll <= 8:
            bonus = 2
        elif roll <= 10:
            bonus = 3
        else:
            bonus = 1
        room.scrap += bonus
        suppressed = (
            state.final_mission is not None
            and FINAL_MISSIONS[state.final_mission.mission].suppresses_new_events
        )
        if not suppressed:
            room.has_event = True
        ctx.emit(RoomSuppliedEvent(room_name=room.name, scrap_added=bonus, event_added=not suppressed))
        self._adversaries.advance_xenomorph(ctx, 1, 2)
        self._adversaries.advance_ash(ctx, 1)

    def _lost_the_signal(self, ctx: GameContext) -> None:
        state = ctx.state
        self._adversaries.place_xenomorph(ctx, state.layout.xenomorph_start)
        self._adversaries.advance_xenomorph(ctx, 0, 2)
        self._adversaries.advance_ash(ctx, 1)
        state.deck.replace(lambda card: card.is_alien)

    def _stalk(self, ctx: GameContext) -> None:
        self._adversaries.advance_xenomorph(ctx, 3, 3)

    def _hunt(self, ctx: GameContext) -> None:
        self._adversaries.advance_xenomorph(ctx, 2, 4)

    # -----------------------
    # Order 937 cards
    # -----------------------
    def _meet_me_in_the_infirmary(self, ctx: GameContext) -> None:
        state = ctx.state
        character = state.active_character
        if character.location is not state.layout.ash_start:
            self._movement.relocate(ctx, character, state.layout.ash_start, forced=True)
            self._adversaries.advance_xenomorph(ctx, 0, 2)
        self._adversaries.advance_ash(ctx, ORDER_937_ASH_MOVES)

    def _crew_expendable(self, ctx: GameContext) -> None:
        state = ctx.state
        state.deck.replace(lambda card: card.is_order_937)
        self._adversaries.advance_ash(ctx, ORDER_937_ASH_MOVES)
        character = state.active_character
        if character.scrap:
            lost = character.scrap
            character.scrap = 0
            ctx.emit(
                ScrapChangedEvent(
                    character_name=character.name, amount=-lost, total=0, reason="Crew expendable"
                )
            )

    def _collating_data(self, ctx: GameContext) -> None:
        for character in ctx.state.characters:
            if character.scrap > 0:
                character.scrap -= 1
                ctx.emit(
                    ScrapChangedEvent(
                        character_name=character.name,
                        amount=-1,
                        total=character.scrap,
                        reason="Collating data",
                    )
                )
        self._adversaries.advance_ash(ctx, ORDER_937_ASH_MOVES)
