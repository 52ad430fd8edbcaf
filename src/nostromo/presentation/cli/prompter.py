"""Console implementation of the input collaborator."""
from __future__ import annotations

from typing import Sequence

from nostromo.services.errors import GameExited
from nostromo.services.menus import MenuOption, Prompter

from .render import render_menu


class ConsolePrompter(Prompter):
    """Reads single-key answers from stdin."""

    def read_key(
        self, title: str, options: Sequence[MenuOption], *, allow_back: bool, listed: bool = True
    ) -> str:
        if listed:
            render_menu(title, options, allow_back=allow_back)
        else:
            print(title)
        try:
            return input("> ")
        except EOFError as exc:
            raise GameExited("Input closed") from exc

    def reject(self, key: str) -> None:
        print(f"Unrecognized command '{key}'" if key else "Please enter a choice.")
