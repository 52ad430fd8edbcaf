"""Repository for the ship deck plan."""
from __future__ import annotations

from typing import Dict, Tuple

from nostromo.data.errors import DataReferenceError, DataValidationError
from nostromo.data.repositories.base import RepositoryBase
from nostromo.domain.defs import LayoutDef, RoomDef
from nostromo.domain.graph import MapLayout, Room, RoomGraph, ShipMap
from nostromo.domain.items import ItemType, new_item


class MapRepository(RepositoryBase[RoomDef]):
    """Loads map.json and builds a fresh RoomGraph for each game."""

    def __init__(self, base_path=None) -> None:
        super().__init__("map.json", base_path)
        self._layout: LayoutDef | None = None
        self._ascii_map: str | None = None

    def _build(self, raw: dict[str, object]) -> Dict[str, RoomDef]:
        rooms_raw = self._require_mapping(raw.get("rooms"), "map.json rooms")
        if not rooms_raw:
            raise DataValidationError("map.json must define at least one room.")
        known = {name.strip().upper() for name in rooms_raw}
        if len(known) != len(rooms_raw):
            raise DataValidationError("map.json room names must be unique.")

        definitions: Dict[str, RoomDef] = {}
        for name, payload in rooms_raw.items():
            mapping = self._require_mapping(payload, f"room '{name}'")
            named = mapping.get("named", False)
            if not isinstance(named, bool):
                raise DataValidationError(f"room '{name}' named must be a boolean.")
            connections = self._require_str_list(
                mapping.get("connections", []), f"room '{name}' connections"
            )
            for target in connections:
                if target.upper() not in known:
                    raise DataReferenceError(
                        f"room '{name}' connects to unknown room '{target}'."
                    )
            ladder = mapping.get("ladder")
            if ladder is not None:
                ladder = self._require_str(ladder, f"room '{name}' ladder")
                if ladder.upper() not in known:
                    raise DataReferenceError(f"room '{name}' has a ladder to unknown room '{ladder}'.")
            definitions[name] = RoomDef(
                name=name,
                named=named,
                connections=tuple(connections),
                ladder=ladder,
            )

        self._layout = self._build_layout(raw.get("layout"), known)
        ascii_map = raw.get("ascii_map")
        if ascii_map is not None:
            self._ascii_map = "\n".join(self._require_str_list(ascii_map, "map.json ascii_map"))
        return definitions

    def _build_layout(self, raw_layout: object, known: set[str]) -> LayoutDef:
        mapping = self._require_mapping(raw_layout, "map.json layout")

        def room_name(key: str) -> str:
            value = self._require_str(mapping.get(key), f"layout {key}")
            if value.upper() not in known:
                raise DataReferenceError(f"layout {key} references unknown room '{value}'.")
            return value

        def room_names(key: str) -> Tuple[str, ...]:
            values = self._require_str_list(mapping.get(key, []), f"layout {key}")
            for value in values:
                if value.upper() not in known:
                    raise DataReferenceError(f"layout {key} references unknown room '{value}'.")
            return tuple(values)

        return LayoutDef(
            player_start=room_name("player_start"),
            xenomorph_start=room_name("xenomorph_start"),
            ash_start=room_name("ash_start"),
            default_room=room_name("default_room"),
            scrap_rooms=room_names("scrap_rooms"),
            event_rooms=room_names("event_rooms"),
            coolant_rooms=room_names("coolant_rooms"),
        )

    def layout(self) -> LayoutDef:
        self._ensure_loaded()
        assert self._layout is not None
        return self._layout

    def build_ship_map(self) -> ShipMap:
        """Build a new graph in file order with initial Scrap, events and coolant placed."""
        self._ensure_loaded()
        assert self._definitions is not None
        graph = RoomGraph()
        for room_def in self._definitions.values():
            graph.add_room(room_def.name, named=room_def.named)
        for room_def in self._definitions.values():
            room = self._resolve(graph, room_def.name)
            for target in room_def.connections:
                graph.connect(room, self._resolve(graph, target))
            if room_def.ladder is not None:
                graph.set_shortcut(room, self._resolve(graph, room_def.ladder))

        layout_def = self.layout()
        layout = MapLayout(
            player_start=self._resolve(graph, layout_def.player_start),
            xenomorph_start=self._resolve(graph, layout_def.xenomorph_start),
            ash_start=self._resolve(graph, layout_def.ash_start),
            default_room=self._resolve(graph, layout_def.default_room),
            scrap_rooms=tuple(self._resolve(graph, name) for name in layout_def.scrap_rooms),
            event_rooms=tuple(self._resolve(graph, name) for name in layout_def.event_rooms),
            coolant_rooms=tuple(self._resolve(graph, name) for name in layout_def.coolant_rooms),
        )
        for room in layout.coolant_rooms:
            if not room.add_item(new_item(ItemType.COOLANT_CANISTER)):
                raise DataValidationError(f"room '{room.name}' cannot hold another item.")
        return ShipMap(graph=graph, layout=layout, ascii_map=self._ascii_map)

    @staticmethod
    def _resolve(graph: RoomGraph, name: str) -> Room:
        room = graph.lookup_by_name(name)
        if room is None:
            raise DataReferenceError(f"Unknown room '{name}'.")
        return room
