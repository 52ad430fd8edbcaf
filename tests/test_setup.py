import pytest

from nostromo.domain.encounters import EncounterType
from nostromo.services import GameOptions, GameSetupService
from nostromo.services.errors import GameExited
from tests.helpers.builders import ScriptedPrompter


def test_new_game_from_shipped_data() -> None:
    prompter = ScriptedPrompter(["1", "1"])

    ctx = GameSetupService().new_game(GameOptions(seed=42), prompter)
    state = ctx.state

    assert [character.name for character in state.characters] == ["BRETT", "DALLAS"]
    assert all(character.location.name == "GALLEY" for character in state.characters)
    assert state.morale == 15
    assert len(state.objectives) == 3
    assert len(state.deck) == 14
    assert state.ash.in_play and state.ash.location.name == "MED BAY"
    assert state.xenomorph_location.name == "NEST"
    assert state.graph.lookup_by_name("COMPUTER CORE").scrap == 2
    assert state.graph.lookup_by_name("BRIDGE").has_event


def test_chosen_characters_leave_the_menu() -> None:
    prompter = ScriptedPrompter(["5", "4"])

    ctx = GameSetupService().new_game(GameOptions(seed=1), prompter)

    assert [character.name for character in ctx.state.characters] == ["RIPLEY", "PARKER"]
    assert ctx.state.characters[0].max_actions == 4


def test_large_crew_starts_with_more_morale() -> None:
    prompter = ScriptedPrompter(["1"] * 4)

    ctx = GameSetupService().new_game(GameOptions(seed=1, num_characters=4), prompter)

    assert ctx.state.morale == 20
    assert ctx.state.starting_morale == 20


def test_exit_from_character_selection() -> None:
    with pytest.raises(GameExited):
        GameSetupService().new_game(GameOptions(seed=1), ScriptedPrompter(["6"]))


def test_without_ash_deck_has_only_alien_cards() -> None:
    ctx = GameSetupService().new_game(GameOptions(seed=1, use_ash=False), ScriptedPrompter(["1", "1"]))

    assert len(ctx.state.deck) == 11
    assert not ctx.state.ash.in_play
    assert not ctx.state.deck.contains(EncounterType.CREW_EXPENDABLE)


def test_same_seed_draws_same_objectives() -> None:
    first = GameSetupService().new_game(GameOptions(seed=9), ScriptedPrompter(["1", "1"]))
    second = GameSetupService().new_game(GameOptions(seed=9), ScriptedPrompter(["1", "1"]))

    assert [o.name for o in first.state.objectives] == [o.name for o in second.state.objectives]
    assert first.state.deck.draw_pile == second.state.deck.draw_pile


@pytest.mark.parametrize(
    "options",
    [GameOptions(seed=1, num_characters=0), GameOptions(seed=1, num_characters=6), GameOptions(seed=1, num_objectives=11)],
)
def test_out_of_range_counts_rejected(options: GameOptions) -> None:
    with pytest.raises(ValueError):
        GameSetupService().new_game(options, ScriptedPrompter())
