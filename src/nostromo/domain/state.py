"""Aggregate game state shared by every service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from nostromo.core.rng import RNG
from nostromo.domain.encounters import EncounterDeck, EncounterType
from nostromo.domain.entities import Character
from nostromo.domain.final_missions import FinalMission, FinalMissionState
from nostromo.domain.graph import MapLayout, Room, RoomGraph
from nostromo.domain.objectives import Objective

MAX_ROSTER_SIZE = 5


@dataclass(slots=True)
class AshState:
    """Location and health of the secondary adversary."""

    location: Room | None = None
    health: int = 0
    defeated: bool = False

    @property
    def in_play(self) -> bool:
        return self.location is not None and not self.defeated


@dataclass(slots=True)
class GameState:
    """Everything that changes during a game, owned by the turn loop."""

    seed: int
    rng: RNG
    graph: RoomGraph
    layout: MapLayout
    characters: List[Character]
    morale: int
    xenomorph_location: Room
    deck: EncounterDeck
    starting_morale: int = 0
    ash: AshState = field(default_factory=AshState)
    objectives: List[Objective] = field(default_factory=list)
    final_mission: FinalMissionState | None = None
    round_index: int = 1
    turn_index: int = 0
    ascii_map: str | None = None

    def __post_init__(self) -> None:
        if len(self.characters) > MAX_ROSTER_SIZE:
            raise ValueError(f"At most {MAX_ROSTER_SIZE} characters can play.")
        if not self.starting_morale:
            self.starting_morale = self.morale

    @property
    def active_character(self) -> Character:
        return self.characters[self.turn_index]

    @property
    def discard_pile(self) -> List[EncounterType]:
        return self.deck.discard_pile

    def characters_in(self, room: Room) -> List[Character]:
        return [character for character in self.characters if character.location is room]

    def mission_is(self, mission: FinalMission) -> bool:
        return self.final_mission is not None and self.final_mission.mission is mission
