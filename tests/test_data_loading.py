import json
from pathlib import Path

import pytest

from nostromo.data.errors import DataLoadError, DataReferenceError, DataValidationError
from nostromo.data.repositories import CharactersRepository, MapRepository, ObjectivesRepository
from nostromo.domain.items import ItemType
from nostromo.domain.objectives import ObjectiveKind


def test_shipped_map_builds_full_deck_plan() -> None:
    ship = MapRepository().build_ship_map()
    graph = ship.graph

    assert len(graph) == 23
    assert len(graph.named_rooms()) == 12
    assert ship.layout.player_start.name == "GALLEY"
    assert ship.layout.xenomorph_start.name == "NEST"
    assert ship.layout.ash_start.name == "MED BAY"
    assert ship.ascii_map is not None

    galley = graph.lookup_by_name("galley")
    assert galley is not None
    assert [room.name for room in graph.neighbors(galley)] == ["CORRIDOR 2", "CORRIDOR 3"]
    corridor_3 = graph.lookup_by_name("CORRIDOR 3")
    assert corridor_3 is not None
    assert graph.shortcut(corridor_3) is graph.lookup_by_name("CORRIDOR 8")


def test_shipped_map_places_initial_coolant() -> None:
    ship = MapRepository().build_ship_map()

    for room in ship.layout.coolant_rooms:
        assert room.count_items(ItemType.COOLANT_CANISTER) == 1


def test_each_build_returns_a_fresh_graph() -> None:
    repo = MapRepository()
    first = repo.build_ship_map()
    second = repo.build_ship_map()

    first.layout.player_start.scrap = 5

    assert second.layout.player_start.scrap == 0
    assert first.graph.rooms[0] is not second.graph.rooms[0]


def test_shipped_characters_load() -> None:
    repo = CharactersRepository(known_abilities={"rally", "command", "salvage", "navigation", "tinkerer"})
    characters = repo.all()

    assert [character.id for character in characters] == ["brett", "dallas", "lambert", "parker", "ripley"]
    assert repo.get("ripley").max_actions == 4


def test_shipped_objectives_load() -> None:
    objectives = ObjectivesRepository().all()

    assert len(objectives) == 10
    by_id = {objective.id: objective for objective in objectives}
    assert by_id["this_ball"].item_type is ItemType.GRAPPLE_GUN
    assert by_id["crew_meeting"].minimum_scrap == 1
    assert by_id["prep_suits"].kind is ObjectiveKind.DROP_COOLANT


def test_map_unknown_connection_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _minimal_map()
    payload["rooms"]["A"]["connections"] = ["NOWHERE"]
    _write_json(definitions_dir / "map.json", payload)

    with pytest.raises(DataReferenceError):
        MapRepository(base_path=definitions_dir).build_ship_map()


def test_map_layout_unknown_room_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _minimal_map()
    payload["layout"]["xenomorph_start"] = "NOWHERE"
    _write_json(definitions_dir / "map.json", payload)

    with pytest.raises(DataReferenceError):
        MapRepository(base_path=definitions_dir).layout()


def test_map_duplicate_room_names_raise(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _minimal_map()
    payload["rooms"]["a"] = {"connections": []}
    _write_json(definitions_dir / "map.json", payload)

    with pytest.raises(DataValidationError):
        MapRepository(base_path=definitions_dir).build_ship_map()


def test_missing_map_file_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError):
        MapRepository(base_path=definitions_dir).build_ship_map()


def test_character_missing_field_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {"kane": {"first_name": "Gilbert", "last_name": "KANE", "max_actions": 3, "ability": "rally"}},
    )

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir).all()


def test_character_unknown_ability_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {
            "kane": {
                "first_name": "Gilbert",
                "last_name": "KANE",
                "max_actions": 3,
                "ability": "chestburst",
                "ability_description": "Unfortunate.",
            }
        },
    )

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir, known_abilities={"rally"}).all()


def test_objective_unknown_kind_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "objectives.json",
        {"odd": {"name": "ODD", "kind": "collect_eggs", "location": "NEST"}},
    )

    with pytest.raises(DataValidationError):
        ObjectivesRepository(base_path=definitions_dir).all()


def test_objective_item_only_allowed_for_bring_item(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "objectives.json",
        {"odd": {"name": "ODD", "kind": "drop_coolant", "location": "NEST", "item": "FLASHLIGHT"}},
    )

    with pytest.raises(DataValidationError):
        ObjectivesRepository(base_path=definitions_dir).all()


def _minimal_map() -> dict:
    return {
        "layout": {
            "player_start": "A",
            "xenomorph_start": "B",
            "ash_start": "A",
            "default_room": "A",
        },
        "rooms": {
            "A": {"named": True, "connections": ["B"]},
            "B": {"connections": ["A"]},
        },
    }


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
