"""Movement policy for the Xenomorph and Ash."""
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from nostromo.domain.entities import Character
from nostromo.domain.final_missions import FinalMission
from nostromo.domain.graph import Room, RoomGraph
from nostromo.domain.pathfinding import Path, path_length, shortest_path, step_along
from nostromo.services.context import GameContext
from nostromo.services.events import (
    AdversaryMovedEvent,
    AshCollectedScrapEvent,
    AshDamagedEvent,
    AshDefeatedEvent,
    InterceptionEvent,
    ScrapChangedEvent,
)
from nostromo.services.morale_service import MoraleLedger
from nostromo.services.movement_service import MovementService

logger = logging.getLogger(__name__)

ASH_RETREAT_DISTANCE = 3
ASH_SYMPATHIES_PENALTY = 3
ASH_NO_SCRAP_PENALTY = 1


def nearest_character_path(
    graph: RoomGraph, agent_location: Room, characters: Iterable[Character]
) -> Path | None:
    """Shortest of the per-character paths; ties go to the earlier roster slot."""
    best: Path | None = None
    for character in characters:
        path = shortest_path(graph, agent_location, character.location)
        if path is not None and (best is None or len(path) < len(best)):
            best = path
    return best


class AdversaryController:
    """Moves both adversaries and resolves what happens when they catch the crew."""

    def __init__(self, morale: MoraleLedger, movement: MovementService) -> None:
        self._morale = morale
        self._movement = movement

    # -----------------------
    # Xenomorph
    # -----------------------
    def advance_xenomorph(self, ctx: GameContext, num_spaces: int, morale_penalty: int) -> bool:
        """Move up to ``num_spaces`` towards the nearest character, then check for interceptions.

        A zero-space advance only runs the interception check. Returns True when
        at least one character was caught.
        """
        state = ctx.state
        if num_spaces > 0:
            path = nearest_character_path(ctx.graph, state.xenomorph_location, state.characters)
            if path is None:
                logger.debug("Xenomorph has no path to any character")
            else:
                self.place_xenomorph(ctx, step_along(path, num_spaces))
        return self.check_xenomorph_interception(ctx, morale_penalty)

    def place_xenomorph(self, ctx: GameContext, room: Room) -> None:
        state = ctx.state
        origin = state.xenomorph_location
        if room is origin:
            return
        state.xenomorph_location = room
        logger.debug("Xenomorph: %s -> %s", origin.name, room.name)
        ctx.emit(AdversaryMovedEvent(adversary="xenomorph", from_room=origin.name, to_room=room.name))

    def check_xenomorph_interception(self, ctx: GameContext, morale_penalty: int) -> bool:
        state = ctx.state
        room = state.xenomorph_location
        caught = state.characters_in(room)
        if not caught:
            return False
        ctx.emit(
            InterceptionEvent(
                adversary="xenomorph",
                room_name=room.name,
                character_names=tuple(character.name for character in caught),
            )
        )
        for character in caught:
            self._morale.apply_damage(
                ctx, morale_penalty, adversary_involved=True, reason="The Xenomorph attacks"
            )
            self._movement.flee(ctx, character)
        return True

    # -----------------------
    # Ash
    # -----------------------
    def advance_ash(self, ctx: GameContext, num_spaces: int) -> bool:
        """Move Ash up to ``num_spaces``, collecting Scrap on the way, then check for interceptions.

        Outside "You Have My Sympathies" Ash heads for the nearest character or
        Scrap pile. Reaching a Scrap pile with movement left over continues the
        hunt with the remaining budget.
        """
        state = ctx.state
        ash = state.ash
        if not ash.in_play:
            return False
        hunting_only = state.mission_is(FinalMission.YOU_HAVE_MY_SYMPATHIES)
        remaining = num_spaces
        while remaining > 0:
            if not hunting_only:
                self._collect_scrap(ctx)
            elif all(character.location is ash.location for character in state.characters):
                break
            path, is_scrap_target = self._ash_target_path(ctx, hunting_only)
            if path is None or path_length(path) == 0:
                break
            steps = min(remaining, path_length(path))
            self.place_ash(ctx, step_along(path, steps))
            remaining -= steps
            if not (is_scrap_target and ash.location is path[0]):
                break
        if not hunting_only:
            self._collect_scrap(ctx)
        return self.check_ash_interception(ctx)

    def place_ash(self, ctx: GameContext, room: Room) -> None:
        ash = ctx.state.ash
        origin = ash.location
        if room is origin:
            return
        ash.location = room
        logger.debug("Ash: %s -> %s", origin.name if origin else None, room.name)
        ctx.emit(
            AdversaryMovedEvent(
                adversary="ash", from_room=origin.name if origin else None, to_room=room.name
            )
        )

    def check_ash_interception(self, ctx: GameContext) -> bool:
        state = ctx.state
        ash = state.ash
        if not ash.in_play:
            return False
        room = ash.location
        assert room is not None
        caught = state.characters_in(room)
        if not caught:
            return False
        ctx.emit(
            InterceptionEvent(
                adversary="ash",
                room_name=room.name,
                character_names=tuple(character.name for character in caught),
            )
        )
        if state.mission_is(FinalMission.YOU_HAVE_MY_SYMPATHIES):
            for character in caught:
                self._sympathies_interception(ctx, character)
                if ash.location is not room:
                    break
            return True

        for character in caught:
            if character.scrap > 0:
                character.scrap -= 1
                ctx.emit(
                    ScrapChangedEvent(
                        character_name=character.name,
                        amount=-1,
                        total=character.scrap,
                        reason="Ash takes your Scrap",
                    )
                )
            else:
                self._morale.apply_damage(
                    ctx, ASH_NO_SCRAP_PENALTY, adversary_involved=True, reason="Ash finds you empty-handed"
                )
        return True

    def _sympathies_interception(self, ctx: GameContext, character: Character) -> None:
        state = ctx.state
        ash = state.ash
        coolant = character.coolant
        if coolant is not None and ctx.prompter.confirm(
            f"Ash corners {character.name}. Throw the {coolant.type.label} at him?"
        ):
            if coolant.spend_use():
                character.remove_item(coolant)
            ash.health -= 1
            ctx.emit(AshDamagedEvent(character_name=character.name, health=max(0, ash.health)))
            if ash.health <= 0:
                self._defeat_ash(ctx)
                return
            assert ash.location is not None
            choices = ctx.graph.rooms_within_distance(ash.location, ASH_RETREAT_DISTANCE)
            if not choices:
                return
            retreat = ctx.prompter.choose(
                "Ash retreats. Choose where he goes:", ((room.name, room) for room in choices)
            )
            self.place_ash(ctx, retreat)
            return

        self._morale.apply_damage(
            ctx, ASH_SYMPATHIES_PENALTY, adversary_involved=True, reason="Ash attacks"
        )
        self._movement.flee(ctx, character)

    def _defeat_ash(self, ctx: GameContext) -> None:
        state = ctx.state
        ash = state.ash
        assert ash.location is not None
        room_name = ash.location.name
        ash.health = 0
        ash.defeated = True
        ash.location = None
        removed = state.deck.remove(lambda card: card.is_order_937)
        logger.debug("Ash defeated; %d Order 937 card(s) removed", removed)
        ctx.emit(AshDefeatedEvent(room_name=room_name))

    def _collect_scrap(self, ctx: GameContext) -> None:
        room = ctx.state.ash.location
        if room is None or room.scrap <= 0:
            return
        amount = room.scrap
        room.scrap = 0
        ctx.emit(AshCollectedScrapEvent(room_name=room.name, amount=amount))

    def _ash_target_path(self, ctx: GameContext, hunting_only: bool) -> Tuple[Path | None, bool]:
        """Nearest character path, or nearest Scrap room path when that is strictly shorter."""
        state = ctx.state
        ash_location = state.ash.location
        assert ash_location is not None
        best = nearest_character_path(ctx.graph, ash_location, state.characters)
        if hunting_only:
            return best, False
        scrap_rooms: List[Room] = [room for room in ctx.graph if room.scrap > 0]
        is_scrap_target = False
        for room in scrap_rooms:
            path = shortest_path(ctx.graph, ash_location, room)
            if path is not None and (best is None or len(path) < len(best)):
                best = path
                is_scrap_target = True
        return best, is_scrap_target
