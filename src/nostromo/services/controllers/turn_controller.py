"""UI-agnostic turn loop: rounds, per-character action budgets and the end-of-turn encounter."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Literal, Tuple

from nostromo.domain.entities import Character
from nostromo.services.ability_service import AbilityService
from nostromo.services.action_service import ActionOutcome, ActionResolver
from nostromo.services.adversary_service import AdversaryController
from nostromo.services.context import GameContext
from nostromo.services.encounter_service import EncounterService
from nostromo.services.errors import GameExited
from nostromo.services.events import RoundStartedEvent, TurnEndedEvent, TurnStartedEvent, ViewShownEvent
from nostromo.services.final_mission_service import FinalMissionController
from nostromo.services.menus import MenuOption
from nostromo.services.morale_service import MoraleLedger
from nostromo.services.movement_service import MovementService
from nostromo.services.objective_service import ObjectiveTracker
from nostromo.services.room_event_service import RoomEventService
from nostromo.services.views import (
    HelpView,
    build_ascii_map,
    build_current_room_view,
    build_locations_view,
    build_objectives_view,
    build_text_map,
)

logger = logging.getLogger(__name__)

Command = Literal[
    "move",
    "pick_up",
    "drop",
    "craft",
    "use_item",
    "trade",
    "ability",
    "end_turn",
    "view",
    "locations",
    "ascii_map",
    "text_map",
    "objectives",
    "help",
    "exit",
]

COMMANDS: Tuple[Tuple[str, str, Command], ...] = (
    ("m", "Move", "move"),
    ("p", "Pick up", "pick_up"),
    ("d", "Drop", "drop"),
    ("c", "Craft", "craft"),
    ("i", "Use item", "use_item"),
    ("t", "Trade", "trade"),
    ("a", "Ability", "ability"),
    ("n", "End turn", "end_turn"),
    ("v", "View current room", "view"),
    ("l", "Character locations", "locations"),
    ("q", "Draw map", "ascii_map"),
    ("r", "Print text map", "text_map"),
    ("o", "Objectives", "objectives"),
    ("h", "Help", "help"),
    ("e", "Exit", "exit"),
)

VIEW_COMMANDS = frozenset({"view", "locations", "ascii_map", "text_map", "objectives", "help"})


class TurnEngine:
    """Drives rounds and turns, delegating every command to the ActionResolver.

    Responsibilities:
    - Count each character's action budget down from its maximum
    - Run win checks after actions, encounters and at turn end
    - Draw the end-of-turn encounter unless an interruption suppressed it

    Rendering and raw input stay in the presentation layer.
    """

    def __init__(
        self,
        resolver: ActionResolver,
        encounters: EncounterService,
        objectives: ObjectiveTracker,
        final_missions: FinalMissionController,
        *,
        debug: bool = False,
    ) -> None:
        self._resolver = resolver
        self._encounters = encounters
        self._objectives = objectives
        self._final_missions = final_missions
        self._debug = debug
        self._actions: Dict[Command, Callable[[GameContext, Character], ActionOutcome]] = {
            "move": resolver.move,
            "pick_up": resolver.pick_up,
            "drop": resolver.drop,
            "craft": resolver.craft,
            "use_item": resolver.use_item,
            "trade": resolver.trade,
        }

    def run(self, ctx: GameContext) -> None:
        """Play rounds until a GameEnded exception escapes."""
        while True:
            self.play_round(ctx)

    def play_round(self, ctx: GameContext) -> None:
        state = ctx.state
        ctx.emit(RoundStartedEvent(round_index=state.round_index))
        for index, character in enumerate(list(state.characters)):
            state.turn_index = index
            self.play_turn(ctx, character)
        state.round_index += 1

    def play_turn(self, ctx: GameContext, character: Character) -> None:
        state = ctx.state
        ctx.emit(
            TurnStartedEvent(
                turn_number=state.turn_index + 1,
                character_name=character.name,
                max_actions=character.max_actions,
            )
        )
        suppress_encounter = False
        ability_locked = False
        character.current_actions = character.max_actions
        while character.current_actions > 0:
            command = self.read_command(ctx, character)
            if command in VIEW_COMMANDS:
                self.show_view(ctx, character, command)
                continue
            if command == "end_turn":
                break
            if command == "exit":
                if ctx.prompter.confirm("Are you sure you want to exit? Game progress will not be saved."):
                    raise GameExited("Game exited")
                continue

            if command == "ability":
                outcome = self._resolver.use_ability(ctx, character, locked=ability_locked)
            else:
                outcome = self._actions[command](ctx, character)
            ability_locked = ability_locked or outcome.ability_spent
            self._objectives.evaluate(ctx)
            self._final_missions.check_win(ctx)
            if outcome.end_turn:
                suppress_encounter = outcome.suppress_encounter
                break
            if outcome.consumed:
                character.current_actions -= 1

        character.current_actions = 0
        if not suppress_encounter:
            self._encounters.draw_and_resolve(ctx)
            self._objectives.evaluate(ctx)
        self._final_missions.check_win(ctx)
        self._final_missions.tick_countdown(ctx, character)
        ctx.emit(TurnEndedEvent(character_name=character.name, encounter_suppressed=suppress_encounter))

    def read_command(self, ctx: GameContext, character: Character) -> Command:
        options = [MenuOption(key=key, label=label, value=command) for key, label, command in COMMANDS]
        option = ctx.prompter.select(
            f"{character.name} in {character.location.name} - Actions {character.current_actions}/"
            f"{character.max_actions} (h for help)",
            options,
            listed=False,
        )
        assert option is not None
        return option.value

    def show_view(self, ctx: GameContext, character: Character, command: Command) -> None:
        state = ctx.state
        if command == "view":
            view: object = build_current_room_view(state, character)
        elif command == "locations":
            view = build_locations_view(state, debug=self._debug)
        elif command == "ascii_map":
            view = build_ascii_map(state)
        elif command == "text_map":
            view = build_text_map(state)
        elif command == "objectives":
            view = build_objectives_view(state)
        else:
            view = HelpView(commands=tuple((key, label) for key, label, _ in COMMANDS))
        ctx.emit(ViewShownEvent(view=view))


def build_turn_engine(*, debug: bool = False) -> TurnEngine:
    """Wire every service together."""
    morale = MoraleLedger()
    movement = MovementService()
    adversaries = AdversaryController(morale, movement)
    room_events = RoomEventService(morale, movement, adversaries)
    final_missions = FinalMissionController(adversaries)
    objectives = ObjectiveTracker(final_missions)
    encounters = EncounterService(adversaries, movement, final_missions)
    resolver = ActionResolver(
        movement=movement,
        adversaries=adversaries,
        room_events=room_events,
        abilities=AbilityService(morale),
        final_missions=final_missions,
    )
    return TurnEngine(resolver, encounters, objectives, final_missions, debug=debug)
