"""Ship deck graph: rooms, corridors and ladders."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from nostromo.domain.items import Item, ItemType

ROOM_ITEM_CAPACITY = 4


@dataclass(eq=False, slots=True)
class Room:
    """A node of the deck plan.

    Rooms compare and hash by identity. Connections are kept in definition
    order so menus list destinations in a stable order.
    """

    name: str
    named: bool = False
    connections: List["Room"] = field(default_factory=list, repr=False)
    shortcut: "Room | None" = field(default=None, repr=False)
    scrap: int = 0
    items: List[Item] = field(default_factory=list)
    has_event: bool = False

    @property
    def has_free_item_slot(self) -> bool:
        return len(self.items) < ROOM_ITEM_CAPACITY

    def count_items(self, item_type: ItemType) -> int:
        return sum(1 for item in self.items if item.type == item_type)

    def add_item(self, item: Item) -> bool:
        """Place an item in the room; return False when the room is full."""
        if not self.has_free_item_slot:
            return False
        self.items.append(item)
        return True

    def remove_item(self, item: Item) -> None:
        for index, held in enumerate(self.items):
            if held is item:
                del self.items[index]
                return
        raise ValueError(f"{item.label} is not in {self.name}.")


class RoomGraph:
    """Directed adjacency over rooms with at most one ladder per room."""

    def __init__(self) -> None:
        self._rooms: List[Room] = []
        self._by_name: Dict[str, Room] = {}
        self._index: Dict[Room, int] = {}

    # -----------------------
    # Construction
    # -----------------------
    def add_room(self, name: str, *, named: bool = False) -> Room:
        key = _normalize_name(name)
        if not key:
            raise ValueError("Room name must not be empty.")
        if key in self._by_name:
            raise ValueError(f"Duplicate room '{name}'.")
        room = Room(name=name.strip(), named=named)
        self._index[room] = len(self._rooms)
        self._rooms.append(room)
        self._by_name[key] = room
        return room

    def connect(self, source: Room, target: Room, *, both_ways: bool = False) -> None:
        self._require_member(source)
        self._require_member(target)
        if target not in source.connections:
            source.connections.append(target)
        if both_ways and source not in target.connections:
            target.connections.append(source)

    def set_shortcut(self, source: Room, target: Room) -> None:
        self._require_member(source)
        self._require_member(target)
        if source.shortcut is not None and source.shortcut is not target:
            raise ValueError(f"Room '{source.name}' already has a ladder.")
        source.shortcut = target

    # -----------------------
    # Queries
    # -----------------------
    @property
    def rooms(self) -> Tuple[Room, ...]:
        return tuple(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room: object) -> bool:
        return room in self._index

    def neighbors(self, room: Room) -> Tuple[Room, ...]:
        """Standard connections in definition order."""
        self._require_member(room)
        return tuple(room.connections)

    def shortcut(self, room: Room) -> Room | None:
        self._require_member(room)
        return room.shortcut

    def exits(self, room: Room) -> Tuple[Room, ...]:
        """Every room reachable in one step: connections first, then the ladder."""
        if room.shortcut is None or room.shortcut in room.connections:
            return self.neighbors(room)
        return self.neighbors(room) + (room.shortcut,)

    def is_adjacent(self, source: Room, target: Room) -> bool:
        return target in self.exits(source)

    def lookup_by_name(self, name: str) -> Room | None:
        return self._by_name.get(_normalize_name(name))

    def named_rooms(self) -> List[Room]:
        return [room for room in self._rooms if room.named]

    def event_rooms(self) -> List[Room]:
        return [room for room in self._rooms if room.has_event]

    def distances_from(self, source: Room, max_distance: int) -> Dict[Room, int]:
        """Breadth-first hop counts from ``source``, bounded by ``max_distance``.

        The result preserves discovery order, which makes it suitable for
        building menus directly.
        """
        self._require_member(source)
        distances: Dict[Room, int] = {source: 0}
        queue = deque([source])
        while queue:
            room = queue.popleft()
            distance = distances[room]
            if distance >= max_distance:
                continue
            for neighbor in self.exits(room):
                if neighbor not in distances:
                    distances[neighbor] = distance + 1
                    queue.append(neighbor)
        return distances

    def rooms_within_distance(
        self, source: Room, max_distance: int, *, include_source: bool = False
    ) -> List[Room]:
        return [
            room
            for room in self.distances_from(source, max_distance)
            if include_source or room is not source
        ]

    def rooms_at_distance(self, source: Room, distance: int) -> List[Room]:
        return [
            room for room, hops in self.distances_from(source, distance).items() if hops == distance
        ]

    def _require_member(self, room: Room) -> None:
        if room not in self._index:
            raise ValueError(f"Room '{room.name}' is not part of this map.")


@dataclass(slots=True)
class MapLayout:
    """Start rooms and initial placements resolved against a RoomGraph."""

    player_start: Room
    xenomorph_start: Room
    ash_start: Room
    default_room: Room
    scrap_rooms: Tuple[Room, ...] = ()
    event_rooms: Tuple[Room, ...] = ()
    coolant_rooms: Tuple[Room, ...] = ()


@dataclass(slots=True)
class ShipMap:
    """A finalized graph together with its layout."""

    graph: RoomGraph
    layout: MapLayout
    ascii_map: str | None = None


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).upper()
