"""Crew special abilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from nostromo.domain.entities import Character
from nostromo.domain.pathfinding import path_length, shortest_path
from nostromo.services.context import GameContext
from nostromo.services.events import AbilityUsedEvent, ActionRejectedEvent, ScrapChangedEvent
from nostromo.services.morale_service import MoraleLedger

KNOWN_ABILITIES = frozenset({"rally", "command", "salvage", "navigation", "tinkerer"})

CRAFT_DISCOUNTS: Dict[str, int] = {"tinkerer": 1}


@dataclass(slots=True)
class AbilityResult:
    """What the turn loop has to do after an ability resolves.

    ``forced_move_index`` names a roster slot whose character must now be
    moved ``forced_move_distance`` spaces by the acting player.
    """

    consumed_action: bool
    repeatable: bool
    forced_move_index: int | None = None
    forced_move_distance: int = 1


AbilityHandler = Callable[[GameContext, Character], "AbilityResult | None"]


def craft_discount(character: Character) -> int:
    return CRAFT_DISCOUNTS.get(character.ability_id, 0)


class AbilityService:
    """Dispatches a character's ability by id. Handlers return None when nothing happened."""

    def __init__(self, morale: MoraleLedger) -> None:
        self._morale = morale
        self._handlers: Dict[str, AbilityHandler] = {
            "rally": self._rally,
            "command": self._command,
            "salvage": self._salvage,
            "navigation": self._navigation,
            "tinkerer": self._tinkerer,
        }

    def use(self, ctx: GameContext, character: Character) -> AbilityResult | None:
        handler = self._handlers.get(character.ability_id)
        if handler is None:
            raise ValueError(f"Unknown ability '{character.ability_id}'.")
        return handler(ctx, character)

    def _rally(self, ctx: GameContext, character: Character) -> AbilityResult | None:
        if ctx.state.morale >= ctx.state.starting_morale:
            ctx.emit(ActionRejectedEvent(reason="Morale is already at its starting value."))
            return None
        self._morale.restore(ctx, 1, reason=f"{character.name} rallies the crew")
        ctx.emit(AbilityUsedEvent(character_name=character.name, detail="Rallied the crew: +1 Morale"))
        return AbilityResult(consumed_action=True, repeatable=False)

    def _command(self, ctx: GameContext, character: Character) -> AbilityResult | None:
        state = ctx.state
        others = [
            (f"{member.name} ({member.location.name})", index)
            for index, member in enumerate(state.characters)
            if member is not character
        ]
        if not others:
            ctx.emit(ActionRejectedEvent(reason="There is no one else to command."))
            return None
        index = ctx.prompter.choose("Who should move?", others, allow_back=True)
        if index is None:
            return None
        return AbilityResult(consumed_action=True, repeatable=False, forced_move_index=index)

    def _salvage(self, ctx: GameContext, character: Character) -> AbilityResult:
        character.scrap += 1
        ctx.emit(
            ScrapChangedEvent(
                character_name=character.name, amount=1, total=character.scrap, reason="Salvage"
            )
        )
        return AbilityResult(consumed_action=True, repeatable=False)

    def _navigation(self, ctx: GameContext, character: Character) -> AbilityResult:
        state = ctx.state
        lines = []
        for member in state.characters:
            path = shortest_path(ctx.graph, member.location, state.xenomorph_location)
            distance = "unreachable" if path is None else f"{path_length(path)} space(s)"
            lines.append(f"{member.name}: {distance} from the Xenomorph")
        ctx.emit(AbilityUsedEvent(character_name=character.name, detail="\n".join(lines)))
        return AbilityResult(consumed_action=False, repeatable=True)

    def _tinkerer(self, ctx: GameContext, character: Character) -> AbilityResult:
        ctx.emit(AbilityUsedEvent(character_name=character.name, detail=character.ability_description))
        return AbilityResult(consumed_action=False, repeatable=False)
