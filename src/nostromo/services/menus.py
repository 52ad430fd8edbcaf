"""Menu building and the blocking selection primitive.

Every decision the players make goes through ``Prompter.select``: the caller
builds an ordered list of options, and the prompter blocks until one legal key
(or the back key, when offered) is entered.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

BACK_KEY = "b"

# Letters that are reserved for fixed commands are not handed out to options.
OPTION_KEYS = "123456789acdfghijkmnopqrstuvwxyz"


@dataclass(frozen=True, slots=True)
class MenuOption:
    """A selectable entry: the key to type, the text to show and the value returned."""

    key: str
    label: str
    value: Any


def numbered_options(entries: Iterable[tuple[str, Any]]) -> List[MenuOption]:
    """Assign single-character keys to (label, value) pairs in order."""
    options: List[MenuOption] = []
    for index, (label, value) in enumerate(entries):
        if index >= len(OPTION_KEYS):
            raise ValueError(f"Menus support at most {len(OPTION_KEYS)} options.")
        options.append(MenuOption(key=OPTION_KEYS[index], label=label, value=value))
    return options


class Prompter:
    """Input collaborator. Subclasses only need to implement ``read_key``."""

    def read_key(
        self, title: str, options: Sequence[MenuOption], *, allow_back: bool, listed: bool = True
    ) -> str:
        """Block until the user types something and return it.

        When ``listed`` is False the options are not shown; the caller offers
        another way to list them.
        """
        raise NotImplementedError

    def reject(self, key: str) -> None:
        """Called when the entered key is not a legal choice."""

    def select(
        self,
        title: str,
        options: Sequence[MenuOption],
        *,
        allow_back: bool = False,
        listed: bool = True,
    ) -> MenuOption | None:
        """Return the chosen option, or None when the user backs out."""
        if not options and not allow_back:
            raise ValueError(f"Menu '{title}' has nothing to choose from.")
        by_key = {option.key: option for option in options}
        if len(by_key) != len(options):
            raise ValueError(f"Menu '{title}' has duplicate keys.")
        while True:
            key = self.read_key(title, options, allow_back=allow_back, listed=listed).strip().lower()
            if allow_back and key == BACK_KEY:
                return None
            option = by_key.get(key)
            if option is not None:
                return option
            self.reject(key)

    def choose(
        self, title: str, entries: Iterable[tuple[str, Any]], *, allow_back: bool = False
    ) -> Any | None:
        """Build a numbered menu from (label, value) pairs and return the chosen value."""
        option = self.select(title, numbered_options(entries), allow_back=allow_back)
        return None if option is None else option.value

    def confirm(self, question: str) -> bool:
        options = [MenuOption("y", "Yes", True), MenuOption("n", "No", False)]
        option = self.select(question, options)
        assert option is not None
        return bool(option.value)

    def choose_amount(self, title: str, maximum: int) -> int:
        """Pick a quantity between 1 and ``maximum``."""
        if maximum < 1:
            raise ValueError("Nothing to choose from.")
        upper = min(maximum, len(OPTION_KEYS))
        value = self.choose(title, ((str(amount), amount) for amount in range(1, upper + 1)))
        assert value is not None
        return int(value)
