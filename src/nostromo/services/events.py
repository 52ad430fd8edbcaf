"""Events emitted by the services for the presentation layer to render."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from nostromo.core.types import AdversaryName
from nostromo.domain.encounters import EncounterType


class RoomEventOutcome(Enum):
    NONE = "none"
    SAFE = "safe"
    JONESY = "jonesy"
    SURPRISE_ATTACK = "surprise_attack"


@dataclass(slots=True)
class GameEvent:
    """Base class for everything the services report."""


@dataclass(slots=True)
class RoundStartedEvent(GameEvent):
    round_index: int


@dataclass(slots=True)
class TurnStartedEvent(GameEvent):
    turn_number: int
    character_name: str
    max_actions: int


@dataclass(slots=True)
class TurnEndedEvent(GameEvent):
    character_name: str
    encounter_suppressed: bool


@dataclass(slots=True)
class ActionRejectedEvent(GameEvent):
    reason: str


@dataclass(slots=True)
class ActionCanceledEvent(GameEvent):
    action: str


@dataclass(slots=True)
class CharacterMovedEvent(GameEvent):
    character_name: str
    from_room: str
    to_room: str
    forced: bool = False


@dataclass(slots=True)
class FleeStartedEvent(GameEvent):
    character_name: str
    from_room: str
    distance: int


@dataclass(slots=True)
class RoomEventResolvedEvent(GameEvent):
    room_name: str
    outcome: RoomEventOutcome
    remote: bool = False


@dataclass(slots=True)
class MoraleChangedEvent(GameEvent):
    amount: int
    morale: int
    reason: str


@dataclass(slots=True)
class MitigationUsedEvent(GameEvent):
    character_name: str
    item_name: str
    prevented: int


@dataclass(slots=True)
class AdversaryMovedEvent(GameEvent):
    adversary: AdversaryName
    from_room: str | None
    to_room: str


@dataclass(slots=True)
class InterceptionEvent(GameEvent):
    adversary: AdversaryName
    room_name: str
    character_names: Tuple[str, ...]


@dataclass(slots=True)
class AshCollectedScrapEvent(GameEvent):
    room_name: str
    amount: int


@dataclass(slots=True)
class AshDamagedEvent(GameEvent):
    character_name: str
    health: int


@dataclass(slots=True)
class AshDefeatedEvent(GameEvent):
    room_name: str


@dataclass(slots=True)
class ScrapChangedEvent(GameEvent):
    character_name: str
    amount: int
    total: int
    reason: str


@dataclass(slots=True)
class RoomSuppliedEvent(GameEvent):
    room_name: str
    scrap_added: int
    event_added: bool


@dataclass(slots=True)
class EncounterDrawnEvent(GameEvent):
    encounter: EncounterType


@dataclass(slots=True)
class ItemPickedUpEvent(GameEvent):
    character_name: str
    item_name: str
    room_name: str


@dataclass(slots=True)
class ItemDroppedEvent(GameEvent):
    character_name: str
    item_name: str
    room_name: str


@dataclass(slots=True)
class ItemCraftedEvent(GameEvent):
    character_name: str
    item_name: str
    cost: int


@dataclass(slots=True)
class ItemUsedEvent(GameEvent):
    character_name: str
    item_name: str
    detail: str
    exhausted: bool = False


@dataclass(slots=True)
class RoomsRevealedEvent(GameEvent):
    lines: Tuple[str, ...]


@dataclass(slots=True)
class TradeEvent(GameEvent):
    giver_name: str
    receiver_name: str
    what: str


@dataclass(slots=True)
class AbilityUsedEvent(GameEvent):
    character_name: str
    detail: str


@dataclass(slots=True)
class ObjectiveCompletedEvent(GameEvent):
    name: str


@dataclass(slots=True)
class FinalMissionStartedEvent(GameEvent):
    title: str
    description: str


@dataclass(slots=True)
class ItemsPlacedEvent(GameEvent):
    room_name: str
    item_name: str
    count: int


@dataclass(slots=True)
class CountdownEvent(GameEvent):
    character_name: str
    remaining: int


@dataclass(slots=True)
class ViewShownEvent(GameEvent):
    """Carries a read-only view built for the display."""

    view: object
