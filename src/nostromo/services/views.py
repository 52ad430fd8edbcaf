"""Read-only views of the game state for the display.

Nothing in this module mutates ``GameState``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from nostromo.domain.entities import Character
from nostromo.domain.graph import Room
from nostromo.domain.state import GameState


@dataclass(slots=True)
class RoomView:
    name: str
    scrap: int
    items: Tuple[str, ...]
    has_event: bool
    crew: Tuple[str, ...]
    xenomorph_here: bool
    ash_here: bool
    exits: Tuple[str, ...]
    ladder: str | None


@dataclass(slots=True)
class InventoryView:
    character_name: str
    current_actions: int
    max_actions: int
    scrap: int
    items: Tuple[str, ...]
    coolant: str | None
    countdown: int | None
    ability_description: str


@dataclass(slots=True)
class CurrentRoomView:
    """What the ``v`` command shows: the active character's room and inventory."""

    room: RoomView
    inventory: InventoryView


@dataclass(slots=True)
class LocationsView:
    crew: Tuple[Tuple[str, str], ...]
    xenomorph_room: str
    ash_room: str | None
    morale: int
    round_index: int
    ash_health: int | None = None
    deck_size: int | None = None


@dataclass(slots=True)
class ObjectiveLine:
    name: str
    description: str
    completed: bool


@dataclass(slots=True)
class ObjectivesView:
    objectives: Tuple[ObjectiveLine, ...]
    final_mission_title: str | None
    final_mission_description: str | None


@dataclass(slots=True)
class TextMapView:
    lines: Tuple[str, ...]


@dataclass(slots=True)
class HelpView:
    commands: Tuple[Tuple[str, str], ...]


def build_room_view(state: GameState, room: Room) -> RoomView:
    ladder = state.graph.shortcut(room)
    return RoomView(
        name=room.name,
        scrap=room.scrap,
        items=tuple(item.label for item in room.items),
        has_event=room.has_event,
        crew=tuple(character.name for character in state.characters_in(room)),
        xenomorph_here=state.xenomorph_location is room,
        ash_here=state.ash.in_play and state.ash.location is room,
        exits=tuple(neighbor.name for neighbor in state.graph.neighbors(room)),
        ladder=None if ladder is None else ladder.name,
    )


def build_inventory_view(character: Character) -> InventoryView:
    return InventoryView(
        character_name=character.name,
        current_actions=character.current_actions,
        max_actions=character.max_actions,
        scrap=character.scrap,
        items=tuple(item.label for item in character.items),
        coolant=None if character.coolant is None else character.coolant.label,
        countdown=character.countdown,
        ability_description=character.ability_description,
    )


def build_current_room_view(state: GameState, character: Character) -> CurrentRoomView:
    return CurrentRoomView(
        room=build_room_view(state, character.location),
        inventory=build_inventory_view(character),
    )


def build_locations_view(state: GameState, *, debug: bool = False) -> LocationsView:
    ash = state.ash
    view = LocationsView(
        crew=tuple((character.name, character.location.name) for character in state.characters),
        xenomorph_room=state.xenomorph_location.name,
        ash_room=ash.location.name if ash.in_play and ash.location is not None else None,
        morale=state.morale,
        round_index=state.round_index,
    )
    if debug:
        view.ash_health = ash.health
        view.deck_size = len(state.deck.draw_pile)
    return view


def build_objectives_view(state: GameState) -> ObjectivesView:
    final = state.final_mission
    return ObjectivesView(
        objectives=tuple(
            ObjectiveLine(
                name=objective.name,
                description=objective.describe(),
                completed=objective.completed,
            )
            for objective in state.objectives
        ),
        final_mission_title=None if final is None else final.mission.title,
        final_mission_description=None if final is None else final.definition.description,
    )


def build_text_map(state: GameState) -> TextMapView:
    """One line per room with its exits and markers for crew and adversaries."""
    lines: List[str] = []
    for room in state.graph:
        markers: List[str] = []
        if room.has_event:
            markers.append("!")
        if room.scrap:
            markers.append(f"{room.scrap} Scrap")
        if state.xenomorph_location is room:
            markers.append("XENOMORPH")
        if state.ash.in_play and state.ash.location is room:
            markers.append("ASH")
        markers.extend(character.name for character in state.characters_in(room))
        exits = ", ".join(neighbor.name for neighbor in state.graph.neighbors(room))
        line = f"{room.name} -> {exits}"
        ladder = state.graph.shortcut(room)
        if ladder is not None:
            line += f" (ladder: {ladder.name})"
        if markers:
            line += f" [{'; '.join(markers)}]"
        lines.append(line)
    return TextMapView(lines=tuple(lines))


def build_ascii_map(state: GameState) -> TextMapView:
    if state.ascii_map is None:
        return build_text_map(state)
    return TextMapView(lines=tuple(state.ascii_map.splitlines()))
