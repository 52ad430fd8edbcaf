"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .turn_controller import COMMANDS, Command, TurnEngine, build_turn_engine

__all__ = [
    "COMMANDS",
    "Command",
    "TurnEngine",
    "build_turn_engine",
]
