"""Final mission setup, win predicates and the self-destruct countdown."""
from __future__ import annotations

import logging
from typing import List

from nostromo.domain.encounters import ORDER_937_DECK, expand_counts
from nostromo.domain.entities import Character
from nostromo.domain.final_missions import (
    AIRLOCK,
    ASH_STARTING_HEALTH,
    BRIDGE,
    DOCKING_BAY,
    FINAL_MISSIONS,
    FinalMission,
    FinalMissionState,
)
from nostromo.domain.graph import Room
from nostromo.domain.items import ItemType, new_item
from nostromo.domain.state import GameState
from nostromo.services.adversary_service import AdversaryController
from nostromo.services.context import GameContext
from nostromo.services.errors import GameLost, GameWon
from nostromo.services.events import CountdownEvent, FinalMissionStartedEvent, ItemsPlacedEvent

logger = logging.getLogger(__name__)


def resolve_room(state: GameState, name: str) -> Room:
    """Look up a hardcoded room name, falling back to the map's default room."""
    room = state.graph.lookup_by_name(name)
    if room is None:
        logger.warning(
            "Room '%s' is not on this map; using %s instead", name, state.layout.default_room.name
        )
        return state.layout.default_room
    return room


def place_items(ctx: GameContext, room: Room, item_type: ItemType, count: int) -> int:
    """Drop up to ``count`` fresh items in ``room``; return how many fit."""
    placed = 0
    for _ in range(count):
        if not room.add_item(new_item(item_type)):
            logger.warning(
                "%s is full; %d %s not placed", room.name, count - placed, item_type.label
            )
            break
        placed += 1
    if placed:
        ctx.emit(ItemsPlacedEvent(room_name=room.name, item_name=item_type.label, count=placed))
    return placed


class FinalMissionController:
    """Activates one final mission and decides when the game is won or lost."""

    def __init__(self, adversaries: AdversaryController) -> None:
        self._adversaries = adversaries

    def available_missions(self, state: GameState) -> List[FinalMission]:
        solo = len(state.characters) == 1
        return [
            mission
            for mission, definition in FINAL_MISSIONS.items()
            if definition.solo_allowed or not solo
        ]

    def start(self, ctx: GameContext, mission: FinalMission) -> FinalMissionState:
        state = ctx.state
        if state.final_mission is not None:
            raise ValueError("A final mission is already active.")
        definition = FINAL_MISSIONS[mission]
        active = FinalMissionState(
            mission=mission,
            rooms={name: resolve_room(state, name) for name in definition.rooms},
        )
        state.final_mission = active
        logger.debug("Final mission: %s", mission.title)
        ctx.emit(FinalMissionStartedEvent(title=mission.title, description=definition.description))

        if definition.coolant_room is not None:
            room = resolve_room(state, definition.coolant_room)
            place_items(ctx, room, ItemType.COOLANT_CANISTER, len(state.characters))
        if definition.countdown is not None:
            holder = state.active_character
            holder.countdown = definition.countdown
            ctx.emit(CountdownEvent(character_name=holder.name, remaining=holder.countdown))
        if definition.brings_in_ash:
            self._bring_in_ash(ctx)
        return active

    def _bring_in_ash(self, ctx: GameContext) -> None:
        state = ctx.state
        state.ash.defeated = False
        state.ash.health = ASH_STARTING_HEALTH
        self._adversaries.place_ash(ctx, state.layout.ash_start)
        missing = [card for card in expand_counts(ORDER_937_DECK) if not state.deck.contains(card)]
        if missing:
            state.deck.add_cards(missing)

    # -----------------------
    # Win and loss
    # -----------------------
    def check_win(self, ctx: GameContext) -> None:
        """Raise GameWon when the active mission's board condition holds."""
        state = ctx.state
        final = state.final_mission
        if final is None:
            return
        mission = final.mission
        if mission is FinalMission.ESCAPE_ON_THE_NARCISSUS:
            won = self._escaped_on_narcissus(state, final.room(DOCKING_BAY))
        elif mission is FinalMission.BLOW_UP_THE_SHIP:
            won = self._assembled_for_self_destruct(state, final.room(AIRLOCK))
        elif mission is FinalMission.CUT_OFF_EVERY_BULKHEAD:
            won = not state.graph.event_rooms()
        else:
            # Won at encounter time or by incineration.
            won = False
        if won:
            raise GameWon(f"Final mission complete: {mission.title}")

    def check_encounter_win(self, ctx: GameContext) -> None:
        """Checked when an adversary card is drawn."""
        state = ctx.state
        final = state.final_mission
        if final is None or final.mission is not FinalMission.BLOW_IT_OUT_INTO_SPACE:
            return
        bay = final.room(DOCKING_BAY)
        xenomorph = state.xenomorph_location
        near_bay = (
            xenomorph is bay
            or state.graph.is_adjacent(xenomorph, bay)
            or state.graph.is_adjacent(bay, xenomorph)
        )
        if not near_bay:
            return
        in_airlock = state.characters_in(final.room(AIRLOCK))
        in_bridge = state.characters_in(final.room(BRIDGE))
        if any(a is not b for a in in_airlock for b in in_bridge):
            raise GameWon(f"Final mission complete: {final.mission.title}")

    def check_incineration_win(self, ctx: GameContext) -> None:
        """Checked when the Xenomorph is incinerated."""
        state = ctx.state
        if state.mission_is(FinalMission.YOU_HAVE_MY_SYMPATHIES) and state.ash.defeated:
            raise GameWon(f"Final mission complete: {FinalMission.YOU_HAVE_MY_SYMPATHIES.title}")

    def tick_countdown(self, ctx: GameContext, character: Character) -> None:
        if character.countdown is None:
            return
        character.countdown -= 1
        ctx.emit(CountdownEvent(character_name=character.name, remaining=max(0, character.countdown)))
        if character.countdown <= 0:
            character.countdown = 0
            raise GameLost("The Nostromo self-destructed")

    @staticmethod
    def _escaped_on_narcissus(state: GameState, bay: Room) -> bool:
        crew = state.characters
        if any(character.location is not bay for character in crew):
            return False
        if bay.count_items(ItemType.COOLANT_CANISTER) < len(crew):
            return False
        return all(
            character.has_item(ItemType.CAT_CARRIER) and character.has_item(ItemType.INCINERATOR)
            for character in crew
        )

    @staticmethod
    def _assembled_for_self_destruct(state: GameState, airlock: Room) -> bool:
        return all(
            character.location is airlock and character.scrap >= 1 and character.coolant is not None
            for character in state.characters
        )
