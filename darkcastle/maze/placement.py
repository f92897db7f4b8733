"""Randomized depth-first item hiding.

The walk starts at a given cell and explores carved rooms depth first. Every
unvisited neighbor is either picked on the spot (small chance) or walked
into; whichever sibling reports a pick last wins. The result favors rooms
some distance from the start without always landing on the deepest leaf.

Neighbors are considered in North, East, South, West order so a fixed rng
seed always hides items in the same rooms.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Set, Tuple

from ..errors import PlacementFailed
from ..logging_utils import get_logger
from .cells import Cell, Item
from .connectivity import linked_neighbors

log = get_logger("darkcastle.placement")

PICK_CHANCE = 0.1


def _candidates(origin: Cell, visited: Set[Cell], avoid: Set[Cell]) -> List[Cell]:
    return [adj for adj in linked_neighbors(origin) if adj not in visited and adj not in avoid]


def dfs_walk_to_random(
    origin: Cell,
    visited: Set[Cell],
    avoid: Set[Cell],
    rng=None,
    pick_chance: float = PICK_CHANCE,
) -> Optional[Cell]:
    if rng is None:
        rng = random
    visited.add(origin)
    candidates = _candidates(origin, visited, avoid)
    chosen = None
    for candidate in candidates:
        # An earlier sibling's walk may have reached this one already.
        if candidate in visited:
            continue
        if rng.random() < pick_chance:
            chosen = candidate
        else:
            found = dfs_walk_to_random(candidate, visited, avoid, rng, pick_chance)
            if found is not None:
                chosen = found
    log.debug(event="walk", cell=origin.name, candidates=len(candidates), chosen=getattr(chosen, "name", None))
    return chosen


def place_item(
    start: Cell,
    item: Item,
    avoid_cell: Cell | Iterable[Cell] | None,
    rng=None,
    pick_chance: float = PICK_CHANCE,
) -> Tuple[Cell, str]:
    """Hide ``item`` somewhere reachable from ``start``; returns (cell, hint).

    Raises PlacementFailed when the walk never picks a room.
    """
    if avoid_cell is None:
        avoid: Set[Cell] = set()
    elif isinstance(avoid_cell, Cell):
        avoid = {avoid_cell}
    else:
        avoid = set(avoid_cell)
    room = dfs_walk_to_random(start, set(), avoid, rng, pick_chance)
    if room is None:
        raise PlacementFailed(item.name, start.name)
    room.items_on_floor.add(item)
    hint = f"The {item.name} is in {room.name}"
    log.debug(event="item_placed", item=item.name, cell=room.name)
    return room, hint


__all__ = ["PICK_CHANCE", "dfs_walk_to_random", "place_item"]
