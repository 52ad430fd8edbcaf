from nostromo.domain.items import ItemType, new_item
from nostromo.services.events import (
    AbilityUsedEvent,
    ActionCanceledEvent,
    ActionRejectedEvent,
    InterceptionEvent,
    ItemCraftedEvent,
    RoomsRevealedEvent,
    TradeEvent,
)
from tests.helpers.builders import (
    build_graph,
    build_line,
    events_of,
    make_character,
    make_context,
    make_services,
    make_state,
    room,
)


def _make_ctx(keys=(), *, count: int = 5, xenomorph: str = "R4", ability: str = "salvage", scrap: int = 0):
    graph = build_line(count)
    ripley = make_character("RIPLEY", room(graph, "R1"), ability=ability, scrap=scrap)
    state = make_state(graph, [ripley], xenomorph=xenomorph)
    return make_context(state, keys), ripley


def _with_partner(ctx, **kwargs):
    partner = make_character("PARKER", room(ctx.graph, "R1"), **kwargs)
    ctx.state.characters.append(partner)
    return partner


# -----------------------
# Crafting
# -----------------------
def test_craft_rejected_without_enough_scrap() -> None:
    ctx, ripley = _make_ctx(scrap=1)

    outcome = make_services().resolver.craft_item(ctx, ripley, ItemType.FLASHLIGHT)

    assert not outcome.consumed
    assert ripley.scrap == 1
    assert events_of(ctx, ActionRejectedEvent)


def test_craft_with_exact_scrap_from_menu() -> None:
    ctx, ripley = _make_ctx(["1"], scrap=2)

    outcome = make_services().resolver.craft(ctx, ripley)

    assert outcome.consumed
    assert ripley.scrap == 0
    assert ripley.has_item(ItemType.FLASHLIGHT)


def test_tinkerer_crafts_for_one_less() -> None:
    ctx, ripley = _make_ctx(ability="tinkerer", scrap=3)

    make_services().resolver.craft_item(ctx, ripley, ItemType.INCINERATOR)

    assert ripley.scrap == 0
    assert events_of(ctx, ItemCraftedEvent)[0].cost == 3


def test_craft_rejected_with_full_hands() -> None:
    ctx, ripley = _make_ctx(scrap=10)
    for _ in range(3):
        ripley.take_item(new_item(ItemType.CAT_CARRIER))

    outcome = make_services().resolver.craft_item(ctx, ripley, ItemType.FLASHLIGHT)

    assert not outcome.consumed
    assert ripley.scrap == 10


def test_craft_back_out_is_free() -> None:
    ctx, ripley = _make_ctx(["b"], scrap=5)

    outcome = make_services().resolver.craft(ctx, ripley)

    assert not outcome.consumed
    assert events_of(ctx, ActionCanceledEvent)


# -----------------------
# Pick up / drop
# -----------------------
def test_pick_up_scrap() -> None:
    ctx, ripley = _make_ctx(["1", "2"])
    ripley.location.scrap = 3

    outcome = make_services().resolver.pick_up(ctx, ripley)

    assert outcome.consumed
    assert ripley.scrap == 2
    assert ripley.location.scrap == 1


def test_pick_up_item_listed_after_scrap() -> None:
    ctx, ripley = _make_ctx(["2"])
    ripley.location.scrap = 1
    ripley.location.add_item(new_item(ItemType.FLASHLIGHT))

    make_services().resolver.pick_up(ctx, ripley)

    assert ripley.has_item(ItemType.FLASHLIGHT)
    assert ripley.location.items == []
    assert ripley.location.scrap == 1


def test_second_coolant_cannot_be_picked_up() -> None:
    ctx, ripley = _make_ctx(["1"])
    ripley.take_item(new_item(ItemType.COOLANT_CANISTER))
    ripley.location.add_item(new_item(ItemType.COOLANT_CANISTER))

    outcome = make_services().resolver.pick_up(ctx, ripley)

    assert not outcome.consumed
    assert ripley.location.count_items(ItemType.COOLANT_CANISTER) == 1


def test_pick_up_in_empty_room_rejected() -> None:
    ctx, ripley = _make_ctx()

    outcome = make_services().resolver.pick_up(ctx, ripley)

    assert not outcome.consumed
    assert events_of(ctx, ActionRejectedEvent)


def test_drop_item() -> None:
    ctx, ripley = _make_ctx(["1"])
    ripley.take_item(new_item(ItemType.MOTION_TRACKER))

    outcome = make_services().resolver.drop(ctx, ripley)

    assert outcome.consumed
    assert not ripley.has_item(ItemType.MOTION_TRACKER)
    assert ripley.location.count_items(ItemType.MOTION_TRACKER) == 1


# -----------------------
# Movement
# -----------------------
def test_move_to_chosen_neighbor() -> None:
    ctx, ripley = _make_ctx(["2"])

    outcome = make_services().resolver.move(ctx, ripley)

    assert outcome.consumed and not outcome.end_turn
    assert ripley.location is room(ctx.graph, "R2")


def test_move_back_out_costs_nothing() -> None:
    ctx, ripley = _make_ctx(["b"])

    outcome = make_services().resolver.move(ctx, ripley)

    assert not outcome.consumed
    assert ripley.location is room(ctx.graph, "R1")


def test_move_by_ladder() -> None:
    graph = build_graph(["A", "B", "C"], [("A", "B")], ladders=[("A", "C")])
    ripley = make_character("RIPLEY", room(graph, "A"))
    ctx = make_context(make_state(graph, [ripley], xenomorph="B"), ["l"])

    make_services().resolver.move(ctx, ripley)

    assert ripley.location is room(graph, "C")


def test_walking_into_xenomorph_ends_turn() -> None:
    ctx, ripley = _make_ctx(["2", "1"], xenomorph="R2")

    outcome = make_services().resolver.move(ctx, ripley)

    assert outcome.end_turn and outcome.suppress_encounter
    assert ctx.state.morale == 13
    assert ripley.location is not room(ctx.graph, "R2")


def test_move_does_not_end_turn_when_someone_else_is_caught() -> None:
    graph = build_line(8)
    parker = make_character("PARKER", room(graph, "R4"))
    dallas = make_character("DALLAS", room(graph, "R6"))
    ctx = make_context(make_state(graph, [parker, dallas], xenomorph="R4"), ["1", "1"])

    outcome = make_services().resolver.move(ctx, dallas)

    assert outcome.consumed
    assert not outcome.end_turn and not outcome.suppress_encounter
    assert dallas.location is room(graph, "R5")
    assert events_of(ctx, InterceptionEvent)[0].character_names == ("PARKER",)
    assert ctx.state.morale == 13


# -----------------------
# Trading
# -----------------------
def test_give_scrap_to_partner() -> None:
    ctx, ripley = _make_ctx(["1", "1", "1", "2"], scrap=2)
    parker = _with_partner(ctx)

    outcome = make_services().resolver.trade(ctx, ripley)

    assert outcome.consumed
    assert (ripley.scrap, parker.scrap) == (0, 2)
    assert events_of(ctx, TradeEvent)[0].what == "2 Scrap"


def test_take_item_from_partner() -> None:
    ctx, ripley = _make_ctx(["1", "2", "1"])
    parker = _with_partner(ctx)
    parker.take_item(new_item(ItemType.FLASHLIGHT))

    make_services().resolver.trade(ctx, ripley)

    assert ripley.has_item(ItemType.FLASHLIGHT)
    assert not parker.has_item(ItemType.FLASHLIGHT)


def test_trade_needs_a_partner_in_the_room() -> None:
    ctx, ripley = _make_ctx()
    parker = _with_partner(ctx)
    parker.location = room(ctx.graph, "R0")

    outcome = make_services().resolver.trade(ctx, ripley)

    assert not outcome.consumed


# -----------------------
# Items
# -----------------------
def test_grapple_drags_xenomorph_to_empty_room() -> None:
    ctx, ripley = _make_ctx(["1", "2"], xenomorph="R3")
    ripley.take_item(new_item(ItemType.GRAPPLE_GUN))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert outcome.consumed
    # Candidates are R2 and R4; R1 holds Ripley.
    assert ctx.state.xenomorph_location is room(ctx.graph, "R4")
    assert ripley.find_item(ItemType.GRAPPLE_GUN).uses == 1


def test_grapple_out_of_range() -> None:
    ctx, ripley = _make_ctx(["1"], xenomorph="R4")
    ripley.take_item(new_item(ItemType.GRAPPLE_GUN))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert not outcome.consumed
    assert ripley.find_item(ItemType.GRAPPLE_GUN).uses == 2


def test_incinerator_drives_xenomorph_home() -> None:
    ctx, ripley = _make_ctx(["1"], xenomorph="R4")
    ctx.state.xenomorph_location = room(ctx.graph, "R2")
    ripley.take_item(new_item(ItemType.INCINERATOR))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert outcome.consumed and outcome.end_turn and outcome.suppress_encounter
    assert ctx.state.xenomorph_location is room(ctx.graph, "R4")
    assert ripley.find_item(ItemType.INCINERATOR).uses == 1


def test_incinerator_catches_crew_waiting_at_xenomorph_start() -> None:
    ctx, ripley = _make_ctx(["1", "1"], count=8, xenomorph="R4")
    ctx.state.xenomorph_location = room(ctx.graph, "R2")
    parker = _with_partner(ctx)
    parker.location = room(ctx.graph, "R4")
    ripley.take_item(new_item(ItemType.INCINERATOR))

    make_services().resolver.use_item(ctx, ripley)

    assert ctx.state.xenomorph_location is room(ctx.graph, "R4")
    assert events_of(ctx, InterceptionEvent)[0].character_names == ("PARKER",)
    assert ctx.state.morale == 13
    assert parker.location is not room(ctx.graph, "R4")


def test_incinerator_needs_adjacent_xenomorph() -> None:
    ctx, ripley = _make_ctx(["1"], xenomorph="R3")
    ripley.take_item(new_item(ItemType.INCINERATOR))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert not outcome.end_turn
    assert ctx.state.xenomorph_location is room(ctx.graph, "R3")


def test_motion_tracker_resolves_distant_event(monkeypatch) -> None:
    ctx, ripley = _make_ctx(["1", "1"])
    room(ctx.graph, "R3").has_event = True
    ripley.take_item(new_item(ItemType.MOTION_TRACKER))
    monkeypatch.setattr(ctx.rng, "randint", lambda _a, _b: 1)

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert outcome.consumed
    assert not room(ctx.graph, "R3").has_event
    assert ripley.location is room(ctx.graph, "R1")


def test_flashlight_is_free_and_reveals_neighbors() -> None:
    ctx, ripley = _make_ctx(["1"], xenomorph="R2")
    room(ctx.graph, "R0").scrap = 2
    ripley.take_item(new_item(ItemType.FLASHLIGHT))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert not outcome.consumed
    assert events_of(ctx, RoomsRevealedEvent)[0].lines == ("R0: 2 Scrap", "R2: the Xenomorph")


def test_prod_cannot_be_used_directly() -> None:
    ctx, ripley = _make_ctx(["1"])
    ripley.take_item(new_item(ItemType.ELECTRIC_PROD))

    outcome = make_services().resolver.use_item(ctx, ripley)

    assert not outcome.consumed
    assert ripley.find_item(ItemType.ELECTRIC_PROD).uses == 2


# -----------------------
# Abilities
# -----------------------
def test_salvage_then_locked() -> None:
    ctx, ripley = _make_ctx()
    resolver = make_services().resolver

    first = resolver.use_ability(ctx, ripley, locked=False)
    second = resolver.use_ability(ctx, ripley, locked=True)

    assert first.consumed and first.ability_spent
    assert not second.consumed
    assert ripley.scrap == 1


def test_command_moves_another_crew_member() -> None:
    ctx, dallas = _make_ctx(["1", "2"], ability="command")
    parker = _with_partner(ctx)

    outcome = make_services().resolver.use_ability(ctx, dallas, locked=False)

    assert outcome.consumed and outcome.ability_spent
    assert parker.location is room(ctx.graph, "R2")
    assert dallas.location is room(ctx.graph, "R1")


def test_command_back_out_keeps_ability() -> None:
    ctx, dallas = _make_ctx(["1", "b"], ability="command")
    _with_partner(ctx)

    outcome = make_services().resolver.use_ability(ctx, dallas, locked=False)

    assert not outcome.consumed and not outcome.ability_spent


def test_navigation_is_free_and_repeatable() -> None:
    ctx, lambert = _make_ctx(ability="navigation", xenomorph="R4")

    outcome = make_services().resolver.use_ability(ctx, lambert, locked=False)

    assert not outcome.consumed and not outcome.ability_spent
    assert events_of(ctx, AbilityUsedEvent)[0].detail == "RIPLEY: 3 space(s) from the Xenomorph"


def test_rally_restores_one_morale_below_start() -> None:
    ctx, ripley = _make_ctx(ability="rally")
    resolver = make_services().resolver

    at_max = resolver.use_ability(ctx, ripley, locked=False)
    ctx.state.morale = 10
    rallied = resolver.use_ability(ctx, ripley, locked=False)

    assert not at_max.consumed
    assert rallied.consumed
    assert ctx.state.morale == 11
