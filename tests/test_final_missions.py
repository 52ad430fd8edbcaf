import logging

import pytest

from nostromo.domain.encounters import EncounterType
from nostromo.domain.final_missions import (
    AIRLOCK,
    DOCKING_BAY,
    FinalMission,
    FinalMissionState,
)
from nostromo.domain.items import ItemType, new_item
from nostromo.services.errors import GameLost, GameWon
from nostromo.services.events import CountdownEvent
from nostromo.services.final_mission_service import place_items
from tests.helpers.builders import (
    build_graph,
    events_of,
    make_character,
    make_context,
    make_services,
    make_state,
    room,
)

_ROOMS = ["GALLEY", "DOCKING BAY", "AIRLOCK", "HYPERSLEEP", "MED BAY", "NEST"]


def _make_ctx(crew_size: int = 2, *, keys=(), cards=None, ash=None):
    graph = build_graph(
        _ROOMS,
        [("GALLEY", "DOCKING BAY"), ("GALLEY", "AIRLOCK"), ("GALLEY", "HYPERSLEEP"), ("GALLEY", "MED BAY")],
        named=_ROOMS,
    )
    names = ["RIPLEY", "PARKER"][:crew_size]
    crew = [make_character(name, room(graph, "GALLEY")) for name in names]
    state = make_state(graph, crew, xenomorph="NEST", ash=ash, cards=cards)
    state.layout.ash_start = room(graph, "MED BAY")
    return make_context(state, keys), crew


def test_countdown_runs_out_after_four_turns() -> None:
    ctx, crew = _make_ctx()
    controller = make_services().final_missions

    controller.start(ctx, FinalMission.BLOW_UP_THE_SHIP)
    holder = crew[0]
    assert holder.countdown == 4
    for _ in range(3):
        controller.tick_countdown(ctx, holder)
    controller.tick_countdown(ctx, crew[1])

    with pytest.raises(GameLost):
        controller.tick_countdown(ctx, holder)
    assert [event.remaining for event in events_of(ctx, CountdownEvent)] == [4, 3, 2, 1, 0]


def test_countdown_ends_the_game_through_turns() -> None:
    ctx, crew = _make_ctx(1, keys=["n"] * 4, cards=[EncounterType.QUIET])
    services = make_services()
    services.final_missions.start(ctx, FinalMission.BLOW_UP_THE_SHIP)

    for _ in range(3):
        services.engine.play_turn(ctx, crew[0])

    with pytest.raises(GameLost):
        services.engine.play_turn(ctx, crew[0])


def test_self_destruct_won_when_crew_assembles_in_airlock() -> None:
    ctx, crew = _make_ctx()
    controller = make_services().final_missions
    controller.start(ctx, FinalMission.BLOW_UP_THE_SHIP)
    airlock = room(ctx.graph, AIRLOCK)
    for member in crew:
        member.location = airlock
        member.scrap = 1
        member.take_item(new_item(ItemType.COOLANT_CANISTER))

    with pytest.raises(GameWon):
        controller.check_win(ctx)


def test_narcissus_needs_coolant_per_crew_and_both_items() -> None:
    ctx, crew = _make_ctx()
    controller = make_services().final_missions
    ctx.state.final_mission = FinalMissionState(
        mission=FinalMission.ESCAPE_ON_THE_NARCISSUS,
        rooms={DOCKING_BAY: room(ctx.graph, DOCKING_BAY)},
    )
    bay = room(ctx.graph, DOCKING_BAY)
    for member in crew:
        member.location = bay
        member.take_item(new_item(ItemType.CAT_CARRIER))
        member.take_item(new_item(ItemType.INCINERATOR))
        bay.add_item(new_item(ItemType.COOLANT_CANISTER))
    crew[1].remove_item(crew[1].find_item(ItemType.INCINERATOR))

    controller.check_win(ctx)

    crew[1].take_item(new_item(ItemType.INCINERATOR))
    with pytest.raises(GameWon):
        controller.check_win(ctx)


def test_cut_off_won_once_every_event_is_cleared() -> None:
    ctx, _ = _make_ctx()
    controller = make_services().final_missions
    hypersleep = room(ctx.graph, "HYPERSLEEP")
    hypersleep.has_event = True
    controller.start(ctx, FinalMission.CUT_OFF_EVERY_BULKHEAD)

    controller.check_win(ctx)
    hypersleep.has_event = False

    with pytest.raises(GameWon):
        controller.check_win(ctx)


def test_sympathies_brings_in_ash_and_order_937() -> None:
    ctx, _ = _make_ctx(cards=[EncounterType.QUIET])
    controller = make_services().final_missions

    controller.start(ctx, FinalMission.YOU_HAVE_MY_SYMPATHIES)

    ash = ctx.state.ash
    assert ash.in_play
    assert ash.location is room(ctx.graph, "MED BAY")
    assert ash.health == 3
    assert ctx.state.deck.contains(EncounterType.MEET_ME_IN_THE_INFIRMARY)
    assert len(ctx.state.deck) == 4
    assert room(ctx.graph, "HYPERSLEEP").count_items(ItemType.COOLANT_CANISTER) == 2


def test_incineration_wins_only_after_ash_is_defeated() -> None:
    ctx, _ = _make_ctx(ash="MED BAY")
    controller = make_services().final_missions
    ctx.state.final_mission = FinalMissionState(mission=FinalMission.YOU_HAVE_MY_SYMPATHIES)

    controller.check_incineration_win(ctx)
    ctx.state.ash.defeated = True

    with pytest.raises(GameWon):
        controller.check_incineration_win(ctx)


def test_only_one_final_mission_at_a_time() -> None:
    ctx, _ = _make_ctx()
    controller = make_services().final_missions
    controller.start(ctx, FinalMission.CUT_OFF_EVERY_BULKHEAD)

    with pytest.raises(ValueError):
        controller.start(ctx, FinalMission.BLOW_UP_THE_SHIP)


def test_full_room_warns_about_unplaced_coolant(caplog) -> None:
    ctx, _ = _make_ctx()
    galley = room(ctx.graph, "GALLEY")
    for _ in range(3):
        galley.add_item(new_item(ItemType.FLASHLIGHT))

    with caplog.at_level(logging.WARNING):
        placed = place_items(ctx, galley, ItemType.COOLANT_CANISTER, 2)

    assert placed == 1
    assert "GALLEY is full" in caplog.text
