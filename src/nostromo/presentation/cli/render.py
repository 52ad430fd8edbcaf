"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Sequence

from nostromo.services.errors import GameEnded, GameExited, GameWon
from nostromo.services.events import (
    AbilityUsedEvent,
    ActionCanceledEvent,
    ActionRejectedEvent,
    AdversaryMovedEvent,
    AshCollectedScrapEvent,
    AshDamagedEvent,
    AshDefeatedEvent,
    CharacterMovedEvent,
    CountdownEvent,
    EncounterDrawnEvent,
    FinalMissionStartedEvent,
    FleeStartedEvent,
    GameEvent,
    InterceptionEvent,
    ItemCraftedEvent,
    ItemDroppedEvent,
    ItemPickedUpEvent,
    ItemsPlacedEvent,
    ItemUsedEvent,
    MitigationUsedEvent,
    MoraleChangedEvent,
    ObjectiveCompletedEvent,
    RoomEventOutcome,
    RoomEventResolvedEvent,
    RoomsRevealedEvent,
    RoomSuppliedEvent,
    RoundStartedEvent,
    ScrapChangedEvent,
    TradeEvent,
    TurnEndedEvent,
    TurnStartedEvent,
    ViewShownEvent,
)
from nostromo.services.menus import BACK_KEY, MenuOption
from nostromo.services.views import (
    CurrentRoomView,
    HelpView,
    LocationsView,
    ObjectivesView,
    RoomView,
    TextMapView,
)

_ADVERSARY_NAMES = {"xenomorph": "The Xenomorph", "ash": "Ash"}

_ROOM_EVENT_TEXT = {
    RoomEventOutcome.SAFE: "Safe. Nothing here.",
    RoomEventOutcome.JONESY: "Jonesy hisses at you!",
    RoomEventOutcome.SURPRISE_ATTACK: "Surprise attack! The Xenomorph is here!",
}


def debug_enabled() -> bool:
    """Return True only when NOSTROMO_DEBUG is explicitly set to '1'."""
    return os.getenv("NOSTROMO_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[MenuOption], *, allow_back: bool) -> None:
    """Display a menu with each option's key."""
    print(title)
    for option in options:
        print(f"\t{option.key}) {option.label}")
    if allow_back:
        print(f"\t{BACK_KEY}) Back")


def format_event(event: GameEvent) -> list[str]:
    """Turn one service event into display lines."""
    if isinstance(event, RoundStartedEvent):
        return [f"\n-----Round {event.round_index}-----"]
    if isinstance(event, TurnStartedEvent):
        return [f"-----Turn {event.turn_number}: {event.character_name}-----"]
    if isinstance(event, TurnEndedEvent):
        return []
    if isinstance(event, ActionRejectedEvent):
        return [event.reason]
    if isinstance(event, ActionCanceledEvent):
        return [f"Canceled {event.action}"]
    if isinstance(event, CharacterMovedEvent):
        verb = "was moved" if event.forced else "moved"
        return [f"{event.character_name} {verb} from {event.from_room} to {event.to_room}"]
    if isinstance(event, FleeStartedEvent):
        return [f"{event.character_name} must flee {event.distance} spaces from {event.from_room}!"]
    if isinstance(event, RoomEventResolvedEvent):
        prefix = "[SCAN]" if event.remote else "[EVENT]"
        return [f"{prefix} {event.room_name}: {_ROOM_EVENT_TEXT.get(event.outcome, '')}"]
    if isinstance(event, MoraleChangedEvent):
        direction = "increases" if event.amount > 0 else "decreases"
        return [f"{event.reason}. Morale {direction} by {abs(event.amount)} (now {event.morale})."]
    if isinstance(event, MitigationUsedEvent):
        return [f"{event.character_name} used {event.item_name} to prevent {event.prevented} Morale loss."]
    if isinstance(event, AdversaryMovedEvent):
        name = _ADVERSARY_NAMES[event.adversary]
        if event.from_room is None:
            return [f"{name} appears in {event.to_room}."]
        return [f"{name} moved from {event.from_room} to {event.to_room}."]
    if isinstance(event, InterceptionEvent):
        name = _ADVERSARY_NAMES[event.adversary]
        return [f"{name} meets {', '.join(event.character_names)} in {event.room_name}!"]
    if isinstance(event, AshCollectedScrapEvent):
        return [f"Ash collected {event.amount} Scrap in {event.room_name}."]
    if isinstance(event, AshDamagedEvent):
        return [f"{event.character_name} hurt Ash! Ash has {event.health} health left."]
    if isinstance(event, AshDefeatedEvent):
        return [f"Ash has been destroyed in {event.room_name}."]
    if isinstance(event, ScrapChangedEvent):
        sign = "+" if event.amount > 0 else ""
        return [f"{event.character_name}: {sign}{event.amount} Scrap ({event.reason}), now {event.total}."]
    if isinstance(event, RoomSuppliedEvent):
        lines = [f"[ENCOUNTER] All is quiet in {event.room_name}. {event.scrap_added} Scrap appeared there."]
        if event.event_added:
            lines.append(f"Something stirs in {event.room_name}.")
        return lines
    if isinstance(event, EncounterDrawnEvent):
        return [f"[ENCOUNTER] {event.encounter.value}"]
    if isinstance(event, ItemPickedUpEvent):
        return [f"{event.character_name} picked up {event.item_name} in {event.room_name}"]
    if isinstance(event, ItemDroppedEvent):
        return [f"{event.character_name} dropped {event.item_name} in {event.room_name}"]
    if isinstance(event, ItemCraftedEvent):
        return [f"{event.character_name} crafted a {event.item_name} for {event.cost} Scrap"]
    if isinstance(event, ItemUsedEvent):
        lines = [f"{event.character_name} used {event.item_name}: {event.detail}"]
        if event.exhausted:
            lines.append(f"The {event.item_name} is used up.")
        return lines
    if isinstance(event, RoomsRevealedEvent):
        return [f"- {line}" for line in event.lines]
    if isinstance(event, TradeEvent):
        return [f"{event.giver_name} gave {event.what} to {event.receiver_name}"]
    if isinstance(event, AbilityUsedEvent):
        return [f"[{event.character_name}] {line}" for line in event.detail.splitlines()]
    if isinstance(event, ObjectiveCompletedEvent):
        return [f"[OBJECTIVE COMPLETE] {event.name}"]
    if isinstance(event, FinalMissionStartedEvent):
        return [f"[FINAL MISSION] {event.title}", event.description]
    if isinstance(event, ItemsPlacedEvent):
        return [f"{event.count} {event.item_name}(S) placed in {event.room_name}"]
    if isinstance(event, CountdownEvent):
        return [f"[SELF-DESTRUCT] {event.remaining} turn(s) left ({event.character_name})"]
    if isinstance(event, ViewShownEvent):
        return format_view(event.view)
    return [str(event)]


def render_event(event: GameEvent) -> None:
    for line in format_event(event):
        print(line)


def _format_room(view: RoomView) -> list[str]:
    lines = [f"{view.name}:", f"\tScrap: {view.scrap}"]
    lines.append(f"\tItems: {', '.join(view.items) if view.items else 'none'}")
    if view.has_event:
        lines.append("\tThere is an Event here")
    if view.crew:
        lines.append(f"\tCrew: {', '.join(view.crew)}")
    if view.xenomorph_here:
        lines.append("\tThe Xenomorph is here!")
    if view.ash_here:
        lines.append("\tAsh is here!")
    exits = ", ".join(view.exits)
    if view.ladder:
        exits += f" (ladder to {view.ladder})"
    lines.append(f"\tExits: {exits}")
    return lines


def format_view(view: object) -> list[str]:
    if isinstance(view, CurrentRoomView):
        inventory = view.inventory
        lines = _format_room(view.room)
        lines.append(
            f"{inventory.character_name} - Actions {inventory.current_actions}/{inventory.max_actions}, "
            f"Scrap {inventory.scrap}"
        )
        lines.append(f"\tItems: {', '.join(inventory.items) if inventory.items else 'none'}")
        lines.append(f"\tCoolant: {inventory.coolant or 'none'}")
        if inventory.countdown is not None:
            lines.append(f"\tSelf-destruct in {inventory.countdown} turn(s)")
        lines.append(f"\tAbility: {inventory.ability_description}")
        return lines
    if isinstance(view, LocationsView):
        lines = [f"{name} at {room}" for name, room in view.crew]
        lines.append(f"Xenomorph at {view.xenomorph_room}")
        if view.ash_room is not None:
            lines.append(f"Ash at {view.ash_room}")
        lines.append(f"Morale: {view.morale} - Round {view.round_index}")
        if view.ash_health is not None:
            lines.append(f"[debug] Ash health {view.ash_health}, encounter cards left {view.deck_size}")
        return lines
    if isinstance(view, ObjectivesView):
        lines = [
            f"[{'x' if line.completed else ' '}] {line.name}: {line.description}"
            for line in view.objectives
        ]
        if view.final_mission_title is not None:
            lines.append(f"Final mission - {view.final_mission_title}: {view.final_mission_description}")
        return lines
    if isinstance(view, TextMapView):
        return list(view.lines)
    if isinstance(view, HelpView):
        return [f"{key} - {label}" for key, label in view.commands]
    return [str(view)]


def render_outcome(ended: GameEnded) -> None:
    if isinstance(ended, GameWon):
        render_heading("YOU WIN")
    elif isinstance(ended, GameExited):
        render_heading("GOODBYE")
    else:
        render_heading("GAME OVER")
    print(ended.message)
