"""Shortest-path search over the deck graph.

Every edge, ladders included, costs one step. The search keeps its tentative
distances and predecessors in a scratch object created per call, so nested
searches (an adversary moving while another search is in progress) never see
each other's bookkeeping.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from nostromo.domain.graph import Room, RoomGraph

logger = logging.getLogger(__name__)

_UNREACHED = float("inf")

Path = List[Room]


@dataclass(slots=True)
class _SearchScratch:
    distance: Dict[Room, float] = field(default_factory=dict)
    previous: Dict[Room, Room | None] = field(default_factory=dict)

    @classmethod
    def for_rooms(cls, rooms: Sequence[Room], source: Room) -> "_SearchScratch":
        scratch = cls()
        for room in rooms:
            scratch.distance[room] = _UNREACHED
            scratch.previous[room] = None
        scratch.distance[source] = 0
        return scratch

    def trace(self, target: Room) -> Path:
        path: Path = []
        node: Room | None = target
        while node is not None:
            path.append(node)
            node = self.previous[node]
        return path


def shortest_path(graph: RoomGraph, source: Room, target: Room) -> Path | None:
    """Return the rooms from ``target`` back to ``source`` inclusive, or None.

    ``path[0]`` is the target and ``path[-1]`` the source, so ``path.pop()``
    walks away from the source one step at a time. Among frontier rooms at the
    same tentative distance the one added to the graph first is settled first.
    """
    if source not in graph or target not in graph:
        raise ValueError("Both rooms must belong to the graph.")

    scratch = _SearchScratch.for_rooms(graph.rooms, source)
    frontier: List[Room] = list(graph.rooms)
    unsettled = set(frontier)

    while frontier:
        # min() keeps the first of equal keys: lowest insertion index wins ties.
        closest = min(frontier, key=scratch.distance.__getitem__)
        closest_distance = scratch.distance[closest]
        if closest_distance == _UNREACHED:
            break
        if closest is target:
            path = scratch.trace(target)
            logger.debug(
                "Path %s -> %s: %s", source.name, target.name, [room.name for room in reversed(path)]
            )
            return path

        frontier.remove(closest)
        unsettled.discard(closest)
        for neighbor in graph.exits(closest):
            if neighbor not in unsettled:
                continue
            candidate = closest_distance + 1
            if candidate < scratch.distance[neighbor]:
                scratch.distance[neighbor] = candidate
                scratch.previous[neighbor] = closest

    logger.debug("No path from %s to %s", source.name, target.name)
    return None


def path_length(path: Path) -> int:
    """Number of steps along a path."""
    return len(path) - 1


def step_along(path: Path, steps: int) -> Room:
    """Return the room ``steps`` moves from the source end of ``path``.

    Moving past the target stops on the target.
    """
    if not path:
        raise ValueError("Cannot walk an empty path.")
    steps = max(0, min(steps, path_length(path)))
    return path[len(path) - 1 - steps]
