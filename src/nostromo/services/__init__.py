"""Service layer exports."""

from .context import GameContext
from .errors import FactoryError, GameEnded, GameExited, GameLost, GameWon
from .menus import BACK_KEY, MenuOption, Prompter
from .setup_service import GameOptions, GameSetupService

__all__ = [
    "BACK_KEY",
    "FactoryError",
    "GameContext",
    "GameEnded",
    "GameExited",
    "GameLost",
    "GameOptions",
    "GameSetupService",
    "GameWon",
    "MenuOption",
    "Prompter",
]
