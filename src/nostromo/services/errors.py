"""Service-layer exceptions.

``GameEnded`` and its subclasses are terminal: they are raised where the game
ends and are only handled by the entry point.
"""


class GameEnded(Exception):
    """Raised when the game reaches a terminal state."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GameWon(GameEnded):
    """Raised when the active final mission is completed."""


class GameLost(GameEnded):
    """Raised when morale runs out or the self-destruct countdown expires."""


class GameExited(GameEnded):
    """Raised when the players confirm they want to quit."""


class FactoryError(Exception):
    """Raised when runtime entities cannot be created from definitions."""
