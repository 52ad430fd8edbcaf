from nostromo.services.events import RoomEventOutcome, RoomEventResolvedEvent
from tests.helpers.builders import (
    build_line,
    events_of,
    make_character,
    make_context,
    make_services,
    make_state,
    room,
)


def _fix_rolls(monkeypatch, ctx, *values: int) -> None:
    rolls = iter(values)
    monkeypatch.setattr(ctx.rng, "randint", lambda _a, _b: next(rolls))


def _make_ctx(keys=()):
    graph = build_line(6)
    room(graph, "R1").has_event = True
    ripley = make_character("RIPLEY", room(graph, "R1"))
    ctx = make_context(make_state(graph, [ripley], xenomorph="R5"), keys)
    return ctx, ripley


def test_room_without_event_does_nothing() -> None:
    ctx, ripley = _make_ctx()
    ripley.location = room(ctx.graph, "R0")

    outcome = make_services().room_events.trigger(ctx, ripley)

    assert outcome is RoomEventOutcome.NONE
    assert ctx.events == []


def test_low_roll_is_safe_and_clears_event(monkeypatch) -> None:
    ctx, ripley = _make_ctx()
    _fix_rolls(monkeypatch, ctx, 8)

    outcome = make_services().room_events.trigger(ctx, ripley)

    assert outcome is RoomEventOutcome.SAFE
    assert not room(ctx.graph, "R1").has_event
    assert ctx.state.morale == 15


def test_jonesy_costs_one_morale(monkeypatch) -> None:
    ctx, ripley = _make_ctx()
    _fix_rolls(monkeypatch, ctx, 10)

    outcome = make_services().room_events.trigger(ctx, ripley)

    assert outcome is RoomEventOutcome.JONESY
    assert ctx.state.morale == 14


def test_surprise_attack_brings_xenomorph_and_forces_flee(monkeypatch) -> None:
    ctx, ripley = _make_ctx(["1"])
    _fix_rolls(monkeypatch, ctx, 12, 2)

    outcome = make_services().room_events.trigger(ctx, ripley)

    assert outcome is RoomEventOutcome.SURPRISE_ATTACK
    assert ctx.state.xenomorph_location is room(ctx.graph, "R1")
    assert ctx.state.morale == 13
    assert ripley.location is room(ctx.graph, "R4")


def test_remote_surprise_places_xenomorph_in_scanned_room(monkeypatch) -> None:
    ctx, ripley = _make_ctx()
    ripley.location = room(ctx.graph, "R0")
    _fix_rolls(monkeypatch, ctx, 11)

    outcome = make_services().room_events.resolve_remote(ctx, room(ctx.graph, "R1"))

    assert outcome is RoomEventOutcome.SURPRISE_ATTACK
    assert ctx.state.xenomorph_location is room(ctx.graph, "R1")
    assert ctx.state.morale == 15
    assert events_of(ctx, RoomEventResolvedEvent)[0].remote
