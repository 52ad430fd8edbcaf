"""Per-game context handed to every service call."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from nostromo.core.rng import RNG
from nostromo.domain.graph import RoomGraph
from nostromo.domain.state import GameState
from nostromo.services.events import GameEvent
from nostromo.services.menus import Prompter

EventListener = Callable[[GameEvent], None]


@dataclass(slots=True)
class GameContext:
    """Bundles the owned game state with its input and output collaborators.

    Events are delivered to ``listener`` immediately so narration appears
    before any prompt that follows it. When ``record_events`` is set they are
    also kept in ``events``.
    """

    state: GameState
    prompter: Prompter
    listener: EventListener | None = None
    record_events: bool = True
    events: List[GameEvent] = field(default_factory=list)

    @property
    def rng(self) -> RNG:
        return self.state.rng

    @property
    def graph(self) -> RoomGraph:
        return self.state.graph

    def emit(self, event: GameEvent) -> None:
        if self.record_events:
            self.events.append(event)
        if self.listener is not None:
            self.listener(event)
