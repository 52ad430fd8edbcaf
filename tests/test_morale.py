import pytest

from nostromo.domain.items import ItemType, new_item
from nostromo.services.errors import GameLost
from nostromo.services.events import MitigationUsedEvent, MoraleChangedEvent
from nostromo.services.morale_service import MoraleLedger
from tests.helpers.builders import (
    build_line,
    events_of,
    make_character,
    make_context,
    make_state,
    prompter_of,
    room,
)


def _make_ctx(*, morale: int = 15, keys=(), items_by_holder=None):
    graph = build_line(3)
    crew = [make_character("RIPLEY", room(graph, "R0")), make_character("PARKER", room(graph, "R0"))]
    for index, item_types in (items_by_holder or {}).items():
        for item_type in item_types:
            crew[index].take_item(new_item(item_type))
    state = make_state(graph, crew, xenomorph="R2", morale=morale)
    return make_context(state, keys), crew


def test_damage_without_items_reduces_morale() -> None:
    ctx, _ = _make_ctx()

    applied = MoraleLedger().apply_damage(ctx, 2, adversary_involved=True, reason="Test")

    assert applied == 2
    assert ctx.state.morale == 13
    assert events_of(ctx, MoraleChangedEvent)[0].amount == -2
    assert prompter_of(ctx).titles == []


def test_single_mitigator_is_confirmed_and_consumed() -> None:
    ctx, crew = _make_ctx(keys=["y"], items_by_holder={1: [ItemType.CAT_CARRIER]})

    MoraleLedger().apply_damage(ctx, 2, adversary_involved=False)

    assert ctx.state.morale == 14
    assert not crew[1].has_item(ItemType.CAT_CARRIER)
    assert events_of(ctx, MitigationUsedEvent)[0].character_name == "PARKER"


def test_declined_mitigation_keeps_item() -> None:
    ctx, crew = _make_ctx(keys=["n"], items_by_holder={0: [ItemType.CAT_CARRIER]})

    MoraleLedger().apply_damage(ctx, 2, adversary_involved=False)

    assert ctx.state.morale == 13
    assert crew[0].has_item(ItemType.CAT_CARRIER)


def test_prod_only_offered_against_adversaries() -> None:
    ctx, crew = _make_ctx(items_by_holder={0: [ItemType.ELECTRIC_PROD]})

    MoraleLedger().apply_damage(ctx, 1, adversary_involved=False)

    assert ctx.state.morale == 14
    assert prompter_of(ctx).titles == []


def test_prod_reduction_never_goes_negative() -> None:
    ctx, crew = _make_ctx(keys=["y"], items_by_holder={0: [ItemType.ELECTRIC_PROD]})

    applied = MoraleLedger().apply_damage(ctx, 1, adversary_involved=True)

    assert applied == 0
    assert ctx.state.morale == 15
    prod = crew[0].find_item(ItemType.ELECTRIC_PROD)
    assert prod is not None and prod.uses == 1
    assert events_of(ctx, MoraleChangedEvent) == []


def test_two_mitigators_offer_a_choice() -> None:
    ctx, crew = _make_ctx(
        keys=["2"], items_by_holder={0: [ItemType.CAT_CARRIER], 1: [ItemType.ELECTRIC_PROD]}
    )

    MoraleLedger().apply_damage(ctx, 3, adversary_involved=True)

    assert ctx.state.morale == 14
    assert crew[0].has_item(ItemType.CAT_CARRIER)


def test_use_neither_applies_full_damage() -> None:
    ctx, crew = _make_ctx(
        keys=["3"], items_by_holder={0: [ItemType.CAT_CARRIER, ItemType.ELECTRIC_PROD]}
    )

    MoraleLedger().apply_damage(ctx, 3, adversary_involved=True)

    assert ctx.state.morale == 12
    assert crew[0].has_item(ItemType.CAT_CARRIER)
    assert crew[0].has_item(ItemType.ELECTRIC_PROD)


def test_morale_reaching_zero_loses_the_game() -> None:
    ctx, _ = _make_ctx(morale=2)

    with pytest.raises(GameLost):
        MoraleLedger().apply_damage(ctx, 3, adversary_involved=True)

    assert ctx.state.morale == 0


def test_restore_is_capped_at_starting_morale() -> None:
    ctx, _ = _make_ctx(morale=15)
    ctx.state.morale = 14

    gained = MoraleLedger().restore(ctx, 3, reason="Rally")

    assert gained == 1
    assert ctx.state.morale == 15
