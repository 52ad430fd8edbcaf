"""Console entry point: options, logging and the game loop."""
from __future__ import annotations

import argparse
import logging
import secrets
from typing import Sequence

from nostromo.data.errors import DataError
from nostromo.data.repositories import CharactersRepository, MapRepository, ObjectivesRepository
from nostromo.domain.state import MAX_ROSTER_SIZE
from nostromo.services import GameEnded, GameOptions, GameSetupService
from nostromo.services.ability_service import KNOWN_ABILITIES
from nostromo.services.controllers import build_turn_engine
from nostromo.services.views import build_objectives_view

from .config import MAX_OBJECTIVES, load_config, save_config
from .prompter import ConsolePrompter
from .render import debug_enabled, format_view, render_event, render_heading, render_outcome

_MAX_RANDOM_SEED = 2**31 - 1

logger = logging.getLogger(__name__)


def build_parser(defaults: dict[str, object]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nostromo", description="Survive the Xenomorph aboard the Nostromo."
    )
    parser.add_argument(
        "--characters",
        type=int,
        default=defaults["characters"],
        help=f"number of crew members (1-{MAX_ROSTER_SIZE})",
    )
    parser.add_argument(
        "--objectives",
        type=int,
        default=defaults["objectives"],
        help=f"number of objectives to draw (1-{MAX_OBJECTIVES})",
    )
    parser.add_argument(
        "--no-ash",
        dest="use_ash",
        action="store_false",
        default=defaults["use_ash"],
        help="play without Ash until a final mission brings him in",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: random)")
    parser.add_argument("--map", dest="map_path", default=None, help="alternate definitions directory")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="remember --characters, --objectives and --no-ash for next time",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Run one game. Returns the process exit status."""
    parser = build_parser(load_config())
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not 1 <= args.characters <= MAX_ROSTER_SIZE:
        parser.error(f"--characters must be between 1 and {MAX_ROSTER_SIZE}")
    if not 1 <= args.objectives <= MAX_OBJECTIVES:
        parser.error(f"--objectives must be between 1 and {MAX_OBJECTIVES}")
    if args.save_defaults:
        save_config(
            {"characters": args.characters, "objectives": args.objectives, "use_ash": args.use_ash}
        )

    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    setup = GameSetupService(
        map_repo=MapRepository(args.map_path),
        characters_repo=CharactersRepository(args.map_path, known_abilities=set(KNOWN_ABILITIES)),
        objectives_repo=ObjectivesRepository(args.map_path),
    )
    options = GameOptions(
        seed=seed,
        num_characters=args.characters,
        num_objectives=args.objectives,
        use_ash=args.use_ash,
    )
    engine = build_turn_engine(debug=debug_enabled())

    print("=== ALIEN: Fate of the Nostromo ===")
    try:
        ctx = setup.new_game(options, ConsolePrompter(), listener=render_event, record_events=False)
        print(f"Game started with seed: {seed}")
        render_heading("Objectives")
        for line in format_view(build_objectives_view(ctx.state)):
            print(line)
        engine.run(ctx)
    except DataError as exc:
        logger.error("Could not load game data: %s", exc)
        return 1
    except GameEnded as ended:
        render_outcome(ended)
    return 0
