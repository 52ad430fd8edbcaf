"""Final mission catalogue.

One final mission becomes active once every standard objective is complete.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from nostromo.domain.graph import Room

DOCKING_BAY = "DOCKING BAY"
AIRLOCK = "AIRLOCK"
BRIDGE = "BRIDGE"

SELF_DESTRUCT_TURNS = 4
ASH_STARTING_HEALTH = 3


class FinalMission(Enum):
    YOU_HAVE_MY_SYMPATHIES = "You Have My Sympathies"
    ESCAPE_ON_THE_NARCISSUS = "Escape On The Narcissus"
    BLOW_IT_OUT_INTO_SPACE = "Blow It Out Into Space"
    BLOW_UP_THE_SHIP = "We're Going To Blow Up The Ship"
    CUT_OFF_EVERY_BULKHEAD = "Cut Off Every Bulkhead And Vent"

    @property
    def title(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FinalMissionDef:
    """Setup parameters for a final mission."""

    mission: FinalMission
    description: str
    coolant_room: str | None = None
    countdown: int | None = None
    solo_allowed: bool = True
    brings_in_ash: bool = False
    suppresses_new_events: bool = False
    rooms: tuple[str, ...] = ()


FINAL_MISSIONS: Dict[FinalMission, FinalMissionDef] = {
    FinalMission.YOU_HAVE_MY_SYMPATHIES: FinalMissionDef(
        mission=FinalMission.YOU_HAVE_MY_SYMPATHIES,
        description="Defeat Ash, then incinerate the Xenomorph.",
        coolant_room="HYPERSLEEP",
        solo_allowed=False,
        brings_in_ash=True,
    ),
    FinalMission.ESCAPE_ON_THE_NARCISSUS: FinalMissionDef(
        mission=FinalMission.ESCAPE_ON_THE_NARCISSUS,
        description=(
            "Assemble all Crew members in DOCKING BAY. DOCKING BAY must have a COOLANT CANISTER "
            "for each Crew member. Crew must have a CAT CARRIER and INCINERATOR."
        ),
        coolant_room="GARAGE",
        rooms=(DOCKING_BAY,),
    ),
    FinalMission.BLOW_IT_OUT_INTO_SPACE: FinalMissionDef(
        mission=FinalMission.BLOW_IT_OUT_INTO_SPACE,
        description=(
            "Bring the Xenomorph near DOCKING BAY. A Crew member must be in AIRLOCK and another in "
            "BRIDGE, then encounter the Xenomorph at the end of a turn."
        ),
        solo_allowed=False,
        rooms=(DOCKING_BAY, AIRLOCK, BRIDGE),
    ),
    FinalMission.BLOW_UP_THE_SHIP: FinalMissionDef(
        mission=FinalMission.BLOW_UP_THE_SHIP,
        description=(
            "Assemble all Crew members in AIRLOCK with at least 1 Scrap and 1 COOLANT CANISTER "
            "within 4 turns before the Nostromo self-destructs."
        ),
        coolant_room="WORKSHOP",
        countdown=SELF_DESTRUCT_TURNS,
        rooms=(AIRLOCK,),
    ),
    FinalMission.CUT_OFF_EVERY_BULKHEAD: FinalMissionDef(
        mission=FinalMission.CUT_OFF_EVERY_BULKHEAD,
        description="Clear all Events within 4 turns before the Nostromo self-destructs.",
        countdown=SELF_DESTRUCT_TURNS,
        suppresses_new_events=True,
    ),
}


@dataclass(slots=True)
class FinalMissionState:
    """The active final mission and the rooms it was resolved against."""

    mission: FinalMission
    rooms: Dict[str, Room] = field(default_factory=dict)

    @property
    def definition(self) -> FinalMissionDef:
        return FINAL_MISSIONS[self.mission]

    def room(self, name: str) -> Room:
        return self.rooms[name]
