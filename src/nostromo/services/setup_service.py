"""New game setup: map, crew selection, objectives and the encounter deck."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from nostromo.core.rng import RNG
from nostromo.data.repositories import CharactersRepository, MapRepository, ObjectivesRepository
from nostromo.domain.encounters import EncounterDeck
from nostromo.domain.entities import Character
from nostromo.domain.final_missions import ASH_STARTING_HEALTH
from nostromo.domain.state import MAX_ROSTER_SIZE, AshState, GameState
from nostromo.services.ability_service import KNOWN_ABILITIES
from nostromo.services.context import EventListener, GameContext
from nostromo.services.errors import GameExited
from nostromo.services.factories import create_character, create_objective
from nostromo.services.menus import Prompter

logger = logging.getLogger(__name__)

INITIAL_SCRAP = 2
LARGE_CREW_SIZE = 3
LARGE_CREW_MORALE = 20
SMALL_CREW_MORALE = 15


@dataclass(slots=True)
class GameOptions:
    """Choices made before the first round."""

    seed: int
    num_characters: int = 2
    num_objectives: int = 3
    use_ash: bool = True


def starting_morale(num_characters: int) -> int:
    return LARGE_CREW_MORALE if num_characters > LARGE_CREW_SIZE else SMALL_CREW_MORALE


class GameSetupService:
    """Builds a ready-to-play GameContext from the definition repositories."""

    def __init__(
        self,
        map_repo: MapRepository | None = None,
        characters_repo: CharactersRepository | None = None,
        objectives_repo: ObjectivesRepository | None = None,
    ) -> None:
        self._map_repo = map_repo or MapRepository()
        self._characters_repo = characters_repo or CharactersRepository(known_abilities=set(KNOWN_ABILITIES))
        self._objectives_repo = objectives_repo or ObjectivesRepository()

    def new_game(
        self,
        options: GameOptions,
        prompter: Prompter,
        *,
        listener: EventListener | None = None,
        record_events: bool = True,
    ) -> GameContext:
        if not 1 <= options.num_characters <= MAX_ROSTER_SIZE:
            raise ValueError(f"Between 1 and {MAX_ROSTER_SIZE} characters can play.")
        pool = self._objectives_repo.all()
        if not 1 <= options.num_objectives <= len(pool):
            raise ValueError(f"Between 1 and {len(pool)} objectives can be drawn.")

        rng = RNG(options.seed)
        ship = self._map_repo.build_ship_map()
        layout = ship.layout
        for room in layout.scrap_rooms:
            room.scrap += INITIAL_SCRAP
        for room in layout.event_rooms:
            room.has_event = True

        ash = AshState()
        if options.use_ash:
            ash = AshState(location=layout.ash_start, health=ASH_STARTING_HEALTH)
        state = GameState(
            seed=options.seed,
            rng=rng,
            graph=ship.graph,
            layout=layout,
            characters=[],
            morale=starting_morale(options.num_characters),
            xenomorph_location=layout.xenomorph_start,
            deck=EncounterDeck.build(rng, include_order_937=options.use_ash),
            ash=ash,
            ascii_map=ship.ascii_map,
        )
        ctx = GameContext(state=state, prompter=prompter, listener=listener, record_events=record_events)

        state.characters.extend(self._select_characters(ctx, options.num_characters))

        rng.shuffle(pool)
        state.objectives = [create_objective(objective_def, state) for objective_def in pool[: options.num_objectives]]
        logger.debug(
            "New game seed=%d crew=%s objectives=%s",
            options.seed,
            [character.name for character in state.characters],
            [objective.name for objective in state.objectives],
        )
        return ctx

    def _select_characters(self, ctx: GameContext, count: int) -> List[Character]:
        remaining = self._characters_repo.all()
        start = ctx.state.layout.player_start
        chosen: List[Character] = []
        for slot in range(1, count + 1):
            entries = [
                (
                    f"{definition.last_name} ({definition.max_actions} actions): "
                    f"{definition.ability_description}",
                    definition.id,
                )
                for definition in remaining
            ]
            entries.append(("Exit", None))
            character_id = ctx.prompter.choose(f"Choose character {slot} of {count}:", entries)
            if character_id is None:
                raise GameExited("Exited during character selection")
            chosen.append(create_character(character_id, self._characters_repo, start))
            remaining = [definition for definition in remaining if definition.id != character_id]
        return chosen
