"""Character movement: legal destinations, relocation and the flee protocol."""
from __future__ import annotations

import logging
from typing import List, Sequence

from nostromo.domain.entities import Character
from nostromo.domain.graph import Room
from nostromo.domain.items import ItemType
from nostromo.services.context import GameContext
from nostromo.services.events import CharacterMovedEvent, FleeStartedEvent
from nostromo.services.menus import MenuOption, numbered_options

logger = logging.getLogger(__name__)

FLEE_DISTANCE = 3
LADDER_KEY = "l"


class MovementService:
    """Enumerates destinations and moves characters around the deck plan."""

    def destination_options(self, ctx: GameContext, room: Room) -> List[MenuOption]:
        """Neighbors in connection order, then the ladder under its own key."""
        neighbors = ctx.graph.neighbors(room)
        options = numbered_options((neighbor.name, neighbor) for neighbor in neighbors)
        ladder = ctx.graph.shortcut(room)
        if ladder is not None and ladder not in neighbors:
            options.append(MenuOption(key=LADDER_KEY, label=f"Ladder to {ladder.name}", value=ladder))
        return options

    def choose_destination(
        self,
        ctx: GameContext,
        character: Character,
        *,
        allowed: Sequence[Room] | None = None,
        title: str | None = None,
        allow_back: bool = True,
    ) -> Room | None:
        """Ask where ``character`` goes; None when the player backs out."""
        if allowed is None:
            options = self.destination_options(ctx, character.location)
        else:
            options = numbered_options((room.name, room) for room in allowed)
        if not options:
            return None
        option = ctx.prompter.select(
            title or f"Move {character.name} from {character.location.name} to:",
            options,
            allow_back=allow_back,
        )
        return None if option is None else option.value

    def relocate(
        self, ctx: GameContext, character: Character, destination: Room, *, forced: bool = False
    ) -> None:
        origin = character.location
        character.location = destination
        logger.debug("%s: %s -> %s (forced=%s)", character.name, origin.name, destination.name, forced)
        ctx.emit(
            CharacterMovedEvent(
                character_name=character.name,
                from_room=origin.name,
                to_room=destination.name,
                forced=forced,
            )
        )

    def flee_destinations(self, ctx: GameContext, character: Character) -> List[Room]:
        """Rooms exactly three spaces away, or 1-3 spaces with a flashlight.

        On small or sparse maps with nothing at distance three, the farthest
        reachable rooms within three spaces are used instead. The Xenomorph's
        room is left out unless it is the only way to go.
        """
        rooms = self._reachable_flee_rooms(ctx, character)
        safe = [room for room in rooms if room is not ctx.state.xenomorph_location]
        return safe or rooms

    def _reachable_flee_rooms(self, ctx: GameContext, character: Character) -> List[Room]:
        graph = ctx.graph
        origin = character.location
        if character.has_item(ItemType.FLASHLIGHT):
            return graph.rooms_within_distance(origin, FLEE_DISTANCE)
        rooms = graph.rooms_at_distance(origin, FLEE_DISTANCE)
        if rooms:
            return rooms
        distances = graph.distances_from(origin, FLEE_DISTANCE)
        farthest = max(distances.values())
        if farthest == 0:
            return []
        return [room for room, hops in distances.items() if hops == farthest]

    def flee(self, ctx: GameContext, character: Character) -> Room:
        """Force ``character`` away from danger. Returns where it ended up."""
        origin = character.location
        candidates = self.flee_destinations(ctx, character)
        if not candidates:
            logger.debug("%s has nowhere to flee from %s", character.name, origin.name)
            return origin
        ctx.emit(
            FleeStartedEvent(character_name=character.name, from_room=origin.name, distance=FLEE_DISTANCE)
        )
        destination = self.choose_destination(
            ctx,
            character,
            allowed=candidates,
            title=f"{character.name} must flee. Choose a room:",
            allow_back=False,
        )
        assert destination is not None
        self.relocate(ctx, character, destination, forced=True)
        return destination
