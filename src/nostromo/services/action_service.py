"""Player actions: move, pick up, drop, craft, use item, trade and abilities."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from nostromo.core.types import TradeDirection
from nostromo.domain.entities import Character
from nostromo.domain.items import Item, ItemType, craft_cost, craftable_types, new_item
from nostromo.domain.pathfinding import path_length, shortest_path
from nostromo.services.ability_service import AbilityService, craft_discount
from nostromo.services.adversary_service import AdversaryController
from nostromo.services.context import GameContext
from nostromo.services.events import (
    ActionCanceledEvent,
    ActionRejectedEvent,
    ItemCraftedEvent,
    ItemDroppedEvent,
    ItemPickedUpEvent,
    ItemUsedEvent,
    RoomEventOutcome,
    RoomsRevealedEvent,
    ScrapChangedEvent,
    TradeEvent,
)
from nostromo.services.final_mission_service import FinalMissionController
from nostromo.services.movement_service import MovementService
from nostromo.services.room_event_service import CONTACT_PENALTY, RoomEventService

logger = logging.getLogger(__name__)

MOTION_TRACKER_RANGE = 2
GRAPPLE_RANGE = 2
GRAPPLE_DRAG_DISTANCE = 2
INCINERATOR_RANGE = 1

_SCRAP = "scrap"


@dataclass(slots=True)
class ActionOutcome:
    """How one resolved command affects the rest of the turn."""

    consumed: bool = False
    end_turn: bool = False
    suppress_encounter: bool = False
    ability_spent: bool = False


def _rejected(ctx: GameContext, reason: str) -> ActionOutcome:
    ctx.emit(ActionRejectedEvent(reason=reason))
    return ActionOutcome()


def _canceled(ctx: GameContext, action: str) -> ActionOutcome:
    ctx.emit(ActionCanceledEvent(action=action))
    return ActionOutcome()


class ActionResolver:
    """Resolves one player command against the game state."""

    def __init__(
        self,
        movement: MovementService,
        adversaries: AdversaryController,
        room_events: RoomEventService,
        abilities: AbilityService,
        final_missions: FinalMissionController,
    ) -> None:
        self._movement = movement
        self._adversaries = adversaries
        self._room_events = room_events
        self._abilities = abilities
        self._final_missions = final_missions

    # -----------------------
    # Movement
    # -----------------------
    def move(self, ctx: GameContext, character: Character) -> ActionOutcome:
        destination = self._movement.choose_destination(ctx, character)
        if destination is None:
            return _canceled(ctx, "move")
        self._movement.relocate(ctx, character, destination)
        outcome = ActionOutcome(consumed=True)
        if self._arrive(ctx, character):
            outcome.end_turn = True
            outcome.suppress_encounter = True
        return outcome

    def _arrive(self, ctx: GameContext, character: Character) -> bool:
        """Run room events and contact checks after a move. True when the Xenomorph struck."""
        surprised = self._room_events.trigger(ctx, character) is RoomEventOutcome.SURPRISE_ATTACK
        # Only the mover's own contact cuts its turn short.
        walked_in = character.location is ctx.state.xenomorph_location
        self._adversaries.check_xenomorph_interception(ctx, CONTACT_PENALTY)
        self._adversaries.check_ash_interception(ctx)
        return surprised or walked_in

    # -----------------------
    # Pick up / drop
    # -----------------------
    def pick_up(self, ctx: GameContext, character: Character) -> ActionOutcome:
        room = character.location
        entries: List[Tuple[str, object]] = []
        if room.scrap:
            entries.append((f"Scrap ({room.scrap})", _SCRAP))
        entries.extend((item.label, item) for item in room.items)
        if not entries:
            return _rejected(ctx, "There are no items or Scrap to pick up.")
        choice = ctx.prompter.choose("Pick up:", entries, allow_back=True)
        if choice is None:
            return _canceled(ctx, "pick up")

        if choice == _SCRAP:
            amount = ctx.prompter.choose_amount(f"Pick up how much Scrap? (max {room.scrap})", room.scrap)
            room.scrap -= amount
            character.scrap += amount
            ctx.emit(
                ScrapChangedEvent(
                    character_name=character.name,
                    amount=amount,
                    total=character.scrap,
                    reason=f"Picked up in {room.name}",
                )
            )
            return ActionOutcome(consumed=True)

        assert isinstance(choice, Item)
        if not character.can_take(choice):
            if choice.type is ItemType.COOLANT_CANISTER:
                return _rejected(ctx, f"{character.name} is already holding a COOLANT CANISTER.")
            return _rejected(ctx, f"{character.name} is already holding 3 items.")
        room.remove_item(choice)
        character.take_item(choice)
        ctx.emit(ItemPickedUpEvent(character_name=character.name, item_name=choice.label, room_name=room.name))
        return ActionOutcome(consumed=True)

    def drop(self, ctx: GameContext, character: Character) -> ActionOutcome:
        room = character.location
        entries: List[Tuple[str, object]] = []
        if character.scrap:
            entries.append((f"Scrap ({character.scrap})", _SCRAP))
        entries.extend((item.label, item) for item in character.carried_items())
        if not entries:
            return _rejected(ctx, f"{character.name} has no items or Scrap to drop.")
        choice = ctx.prompter.choose("Drop:", entries, allow_back=True)
        if choice is None:
            return _canceled(ctx, "drop")

        if choice == _SCRAP:
            amount = ctx.prompter.choose_amount(
                f"Drop how much Scrap? (max {character.scrap})", character.scrap
            )
            character.scrap -= amount
            room.scrap += amount
            ctx.emit(
                ScrapChangedEvent(
                    character_name=character.name,
                    amount=-amount,
                    total=character.scrap,
                    reason=f"Dropped in {room.name}",
                )
            )
            return ActionOutcome(consumed=True)

        assert isinstance(choice, Item)
        if not room.has_free_item_slot:
            return _rejected(ctx, f"{room.name} already has 4 items.")
        character.remove_item(choice)
        room.add_item(choice)
        ctx.emit(ItemDroppedEvent(character_name=character.name, item_name=choice.label, room_name=room.name))
        return ActionOutcome(consumed=True)

    # -----------------------
    # Crafting
    # -----------------------
    def craft(self, ctx: GameContext, character: Character) -> ActionOutcome:
        discount = craft_discount(character)
        entries = [
            (f"{item_type.label}: costs {craft_cost(item_type, discount)} Scrap", item_type)
            for item_type in craftable_types()
        ]
        item_type = ctx.prompter.choose(
            f"Craft ({character.scrap} Scrap available):", entries, allow_back=True
        )
        if item_type is None:
            return _canceled(ctx, "craft")
        return self.craft_item(ctx, character, item_type)

    def craft_item(self, ctx: GameContext, character: Character, item_type: ItemType) -> ActionOutcome:
        cost = craft_cost(item_type, craft_discount(character))
        if character.scrap < cost:
            return _rejected(
                ctx, f"{item_type.label} costs {cost} Scrap; {character.name} has {character.scrap}."
            )
        if not character.has_free_item_slot:
            return _rejected(ctx, f"{character.name} is already holding 3 items.")
        character.scrap -= cost
        character.take_item(new_item(item_type))
        ctx.emit(ItemCraftedEvent(character_name=character.name, item_name=item_type.label, cost=cost))
        return ActionOutcome(consumed=True)

    # -----------------------
    # Items
    # -----------------------
    def use_item(self, ctx: GameContext, character: Character) -> ActionOutcome:
        if not character.items:
            return _rejected(ctx, f"{character.name} has no items to use.")
        item = ctx.prompter.choose(
            "Use which item?", ((item.label, item) for item in character.items), allow_back=True
        )
        if item is None:
            return _canceled(ctx, "use item")
        handlers = {
            ItemType.FLASHLIGHT: self._use_flashlight,
            ItemType.MOTION_TRACKER: self._use_motion_tracker,
            ItemType.GRAPPLE_GUN: self._use_grapple_gun,
            ItemType.INCINERATOR: self._use_incinerator,
        }
        handler = handlers.get(item.type)
        if handler is None:
            return _rejected(ctx, f"{item.type.label} is used automatically when Morale would drop.")
        return handler(ctx, character, item)

    def _spend(self, ctx: GameContext, character: Character, item: Item, detail: str) -> None:
        exhausted = item.spend_use()
        if exhausted:
            character.remove_item(item)
        ctx.emit(
            ItemUsedEvent(
                character_name=character.name,
                item_name=item.type.label,
                detail=detail,
                exhausted=exhausted,
            )
        )

    def _use_flashlight(self, ctx: GameContext, character: Character, item: Item) -> ActionOutcome:
        state = ctx.state
        lines = []
        for room in ctx.graph.exits(character.location):
            contents: List[str] = []
            if room.scrap:
                contents.append(f"{room.scrap} Scrap")
            contents.extend(held.label for held in room.items)
            if room.has_event:
                contents.append("an Event")
            if state.xenomorph_location is room:
                contents.append("the Xenomorph")
            if state.ash.in_play and state.ash.location is room:
                contents.append("Ash")
            lines.append(f"{room.name}: {', '.join(contents) if contents else 'nothing'}")
        self._spend(ctx, character, item, "Lit up the adjacent rooms")
        ctx.emit(RoomsRevealedEvent(lines=tuple(lines)))
        return ActionOutcome(consumed=item.uses_action)

    def _use_motion_tracker(self, ctx: GameContext, character: Character, item: Item) -> ActionOutcome:
        nearby = [
            room
            for room in ctx.graph.rooms_within_distance(
                character.location, MOTION_TRACKER_RANGE, include_source=True
            )
            if room.has_event
        ]
        if not nearby:
            return _rejected(ctx, f"No Events within {MOTION_TRACKER_RANGE} spaces.")
        room = ctx.prompter.choose(
            "Resolve the Event in which room?", ((room.name, room) for room in nearby), allow_back=True
        )
        if room is None:
            return _canceled(ctx, "motion tracker")
        self._spend(ctx, character, item, f"Scanned {room.name}")
        self._room_events.resolve_remote(ctx, room)
        return ActionOutcome(consumed=item.uses_action)

    def _xenomorph_distance(self, ctx: GameContext, character: Character) -> int | None:
        path = shortest_path(ctx.graph, character.location, ctx.state.xenomorph_location)
        return None if path is None else path_length(path)

    def _use_grapple_gun(self, ctx: GameContext, character: Character, item: Item) -> ActionOutcome:
        state = ctx.state
        distance = self._xenomorph_distance(ctx, character)
        if distance is None or distance > GRAPPLE_RANGE:
            return _rejected(ctx, f"The Xenomorph is not within {GRAPPLE_RANGE} spaces.")
        targets = [
            room
            for room in ctx.graph.rooms_within_distance(state.xenomorph_location, GRAPPLE_DRAG_DISTANCE)
            if not state.characters_in(room)
        ]
        if not targets:
            return _rejected(ctx, "There is nowhere to drag the Xenomorph.")
        room = ctx.prompter.choose(
            "Drag the Xenomorph to:", ((room.name, room) for room in targets), allow_back=True
        )
        if room is None:
            return _canceled(ctx, "grapple gun")
        self._spend(ctx, character, item, f"Dragged the Xenomorph to {room.name}")
        self._adversaries.place_xenomorph(ctx, room)
        return ActionOutcome(consumed=item.uses_action)

    def _use_incinerator(self, ctx: GameContext, character: Character, item: Item) -> ActionOutcome:
        state = ctx.state
        distance = self._xenomorph_distance(ctx, character)
        if distance is None or distance > INCINERATOR_RANGE:
            return _rejected(ctx, f"The Xenomorph is not within {INCINERATOR_RANGE} space.")
        start = state.layout.xenomorph_start
        self._spend(ctx, character, item, f"Drove the Xenomorph back to {start.name}")
        self._adversaries.place_xenomorph(ctx, start)
        self._adversaries.advance_xenomorph(ctx, 0, CONTACT_PENALTY)
        self._final_missions.check_incineration_win(ctx)
        return ActionOutcome(consumed=item.uses_action, end_turn=True, suppress_encounter=True)

    # -----------------------
    # Trading
    # -----------------------
    def trade(self, ctx: GameContext, character: Character) -> ActionOutcome:
        partners = [
            member for member in ctx.state.characters_in(character.location) if member is not character
        ]
        if not partners:
            return _rejected(ctx, f"No other Crew members in {character.location.name}.")
        partner = ctx.prompter.choose(
            "Trade with:", ((member.name, member) for member in partners), allow_back=True
        )
        if partner is None:
            return _canceled(ctx, "trade")
        direction: TradeDirection | None = ctx.prompter.choose(
            f"Trade with {partner.name}:",
            [(f"Give to {partner.name}", "give"), (f"Take from {partner.name}", "take")],
            allow_back=True,
        )
        if direction is None:
            return _canceled(ctx, "trade")
        giver, receiver = (character, partner) if direction == "give" else (partner, character)
        return self.transfer(ctx, giver, receiver)

    def transfer(self, ctx: GameContext, giver: Character, receiver: Character) -> ActionOutcome:
        entries: List[Tuple[str, object]] = []
        if giver.scrap:
            entries.append((f"Scrap ({giver.scrap})", _SCRAP))
        entries.extend((item.label, item) for item in giver.carried_items())
        if not entries:
            return _rejected(ctx, f"{giver.name} has nothing to trade.")
        choice = ctx.prompter.choose(
            f"{giver.name} gives {receiver.name}:", entries, allow_back=True
        )
        if choice is None:
            return _canceled(ctx, "trade")

        if choice == _SCRAP:
            amount = ctx.prompter.choose_amount("How much Scrap?", giver.scrap)
            giver.scrap -= amount
            receiver.scrap += amount
            what = f"{amount} Scrap"
        else:
            assert isinstance(choice, Item)
            if not receiver.can_take(choice):
                return _rejected(ctx, f"{receiver.name} cannot carry {choice.type.label}.")
            giver.remove_item(choice)
            receiver.take_item(choice)
            what = choice.label
        ctx.emit(TradeEvent(giver_name=giver.name, receiver_name=receiver.name, what=what))
        return ActionOutcome(consumed=True)

    # -----------------------
    # Abilities
    # -----------------------
    def use_ability(self, ctx: GameContext, character: Character, *, locked: bool) -> ActionOutcome:
        if locked:
            return _rejected(ctx, f"{character.name} already used their ability this turn.")
        result = self._abilities.use(ctx, character)
        if result is None:
            return ActionOutcome()

        if result.forced_move_index is not None:
            moved = ctx.state.characters[result.forced_move_index]
            if not self._forced_move(ctx, moved, result.forced_move_distance):
                return _canceled(ctx, "ability")
        return ActionOutcome(consumed=result.consumed_action, ability_spent=not result.repeatable)

    def _forced_move(self, ctx: GameContext, moved: Character, distance: int) -> bool:
        if distance == 1:
            destination = self._movement.choose_destination(
                ctx, moved, title=f"Move {moved.name} to:"
            )
        else:
            rooms = ctx.graph.rooms_within_distance(moved.location, distance)
            destination = self._movement.choose_destination(
                ctx, moved, allowed=rooms, title=f"Move {moved.name} to:"
            )
        if destination is None:
            return False
        self._movement.relocate(ctx, moved, destination, forced=True)
        self._arrive(ctx, moved)
        return True
