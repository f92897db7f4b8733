"""Reachability queries and structural checks over carved-room adjacency."""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from ..errors import InvariantViolation
from .cells import Cell
from .directions import DIRECTIONS, opposite
from .grid import Grid


def linked_neighbors(cell: Cell) -> List[Cell]:
    """Adjacent rooms in North, East, South, West order."""
    return [adj for adj in (cell.neighbor(d) for d in DIRECTIONS) if adj is not None]


def reachable_from(start: Cell, avoid: Iterable[Cell] = ()) -> Set[Cell]:
    avoid = set(avoid)
    if start is None or start in avoid:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        current = q.popleft()
        for adj in linked_neighbors(current):
            if adj not in visited and adj not in avoid:
                visited.add(adj)
                q.append(adj)
    return visited


def path_between(start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """Shortest room-to-room path including both ends, or None."""
    if start is None or goal is None:
        return None
    parents: Dict[Cell, Optional[Cell]] = {start: None}
    q = deque([start])
    while q:
        current = q.popleft()
        if current is goal:
            path = []
            node: Optional[Cell] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            return path[::-1]
        for adj in linked_neighbors(current):
            if adj not in parents:
                parents[adj] = current
                q.append(adj)
    return None


def asymmetric_links(grid: Grid) -> List[tuple]:
    bad = []
    for cell in grid:
        for d in DIRECTIONS:
            adj = cell.neighbor(d)
            if adj is not None and adj.neighbor(opposite(d)) is not cell:
                bad.append((cell.name, d, adj.name))
    return bad


def verify_maze(grid: Grid) -> None:
    """Raise InvariantViolation if the carved maze is not a usable, connected whole."""
    bad = asymmetric_links(grid)
    if bad:
        raise InvariantViolation(f"asymmetric adjacency: {bad[:5]}")
    for cell in grid:
        if not cell.is_room and cell.has_connections():
            raise InvariantViolation(f"solid cell {cell.name} has links")
    start, exit_cell = grid.start_cell, grid.exit_cell
    if start is None or not start.is_room:
        raise InvariantViolation("start cell missing or not carved")
    if exit_cell is None or not exit_cell.is_room:
        raise InvariantViolation("exit cell missing or not carved")
    exits = [c.name for c in grid if c.is_exit]
    if exits != [exit_cell.name]:
        raise InvariantViolation(f"expected exactly one exit, found {exits}")
    reach = reachable_from(start)
    missing = [c.name for c in grid.rooms() if c not in reach]
    if missing:
        raise InvariantViolation(f"unreachable rooms: {missing[:5]}")


__all__ = ["linked_neighbors", "reachable_from", "path_between", "asymmetric_links", "verify_maze"]
