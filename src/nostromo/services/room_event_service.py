"""Event-pending rooms and the 1-12 event table."""
from __future__ import annotations

import logging

from nostromo.domain.entities import Character
from nostromo.domain.graph import Room
from nostromo.services.adversary_service import AdversaryController
from nostromo.services.context import GameContext
from nostromo.services.events import RoomEventOutcome, RoomEventResolvedEvent
from nostromo.services.morale_service import MoraleLedger
from nostromo.services.movement_service import MovementService

logger = logging.getLogger(__name__)

EVENT_DIE_SIDES = 12
SAFE_MAX_ROLL = 8
JONESY_MAX_ROLL = 10
JONESY_PENALTY = 1
# Walking into the Xenomorph's room, or it appearing in a scanned room.
CONTACT_PENALTY = 2


class RoomEventService:
    def __init__(
        self, morale: MoraleLedger, movement: MovementService, adversaries: AdversaryController
    ) -> None:
        self._morale = morale
        self._movement = movement
        self._adversaries = adversaries

    def roll_outcome(self, ctx: GameContext) -> RoomEventOutcome:
        roll = ctx.rng.randint(1, EVENT_DIE_SIDES)
        if roll <= SAFE_MAX_ROLL:
            return RoomEventOutcome.SAFE
        if roll <= JONESY_MAX_ROLL:
            return RoomEventOutcome.JONESY
        return RoomEventOutcome.SURPRISE_ATTACK

    def trigger(self, ctx: GameContext, character: Character) -> RoomEventOutcome:
        """Resolve the event in the room ``character`` just walked into, if any."""
        room = character.location
        if not room.has_event:
            return RoomEventOutcome.NONE
        room.has_event = False
        outcome = self.roll_outcome(ctx)
        logger.debug("Event in %s for %s: %s", room.name, character.name, outcome.value)
        ctx.emit(RoomEventResolvedEvent(room_name=room.name, outcome=outcome))
        if outcome is RoomEventOutcome.JONESY:
            self._jonesy(ctx)
        elif outcome is RoomEventOutcome.SURPRISE_ATTACK:
            self._adversaries.place_xenomorph(ctx, room)
            penalty = ctx.rng.randint(1, 2)
            self._morale.apply_damage(
                ctx, penalty, adversary_involved=True, reason="Surprise attack"
            )
            self._movement.flee(ctx, character)
        return outcome

    def resolve_remote(self, ctx: GameContext, room: Room) -> RoomEventOutcome:
        """Resolve an event from a distance, as the motion tracker does."""
        if not room.has_event:
            return RoomEventOutcome.NONE
        room.has_event = False
        outcome = self.roll_outcome(ctx)
        logger.debug("Remote event in %s: %s", room.name, outcome.value)
        ctx.emit(RoomEventResolvedEvent(room_name=room.name, outcome=outcome, remote=True))
        if outcome is RoomEventOutcome.JONESY:
            self._jonesy(ctx)
        elif outcome is RoomEventOutcome.SURPRISE_ATTACK:
            self._adversaries.place_xenomorph(ctx, room)
            self._adversaries.advance_xenomorph(ctx, 0, CONTACT_PENALTY)
        return outcome

    def _jonesy(self, ctx: GameContext) -> None:
        self._morale.apply_damage(
            ctx, JONESY_PENALTY, adversary_involved=False, reason="Jonesy hisses at you"
        )
