"""Maze carving: recursive branching corridors grown outward from a start cell.

Phases:
    * Allocate a blank grid (every cell solid, random flavor text).
    * Grow four corridor systems from the start cell, one per cardinal
      direction. Each corridor runs 2-4 cells in a fixed direction and may
      sprout side corridors whose branch chance shrinks by ``branch_decay``
      per generation, so recursion dies out on its own.
    * The cell where the westward system ends is carved and becomes the exit.
    * Link every pair of orthogonally adjacent carved rooms both ways.

Invariants checked before returning (see ``connectivity.verify_maze``):
    * adjacency is symmetric;
    * every carved room is reachable from the start cell;
    * the exit is a carved room.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, Tuple

from ..errors import InvariantViolation
from ..logging_utils import get_logger
from .config import MazeConfig
from .connectivity import verify_maze
from .directions import DIRECTIONS, EAST, NORTH, SOUTH, WEST, dir2rel
from .grid import Grid
from .metrics import init_metrics

log = get_logger("darkcastle.maze")


def build_line_of_rooms(
    grid: Grid,
    row: int,
    col: int,
    direction: int | None,
    branch_probability: float,
    rng=None,
    config: MazeConfig | None = None,
    metrics: Dict[str, Any] | None = None,
    _depth: int = 0,
) -> Tuple[int, int]:
    """Carve one corridor from (row, col) and return the coordinates where it ended.

    Carves the rolled length, or fewer at the grid edge. The returned cell is
    the one past the last carved cell and is left solid, unless the corridor
    hit the edge, in which case it is the last carved cell.
    """
    if rng is None:
        rng = random
    if config is None:
        config = MazeConfig(rows=grid.rows, cols=grid.cols)
    if metrics is None:
        metrics = init_metrics()
    if direction is None:
        direction = rng.choice(DIRECTIONS)
    d_row, d_col = dir2rel(direction)
    metrics["corridors_carved"] += 1
    metrics["max_branch_depth"] = max(metrics["max_branch_depth"], _depth)

    distance = rng.randint(config.corridor_min, config.corridor_max)
    for _ in range(distance):
        grid.get_cell(row, col).is_room = True
        if grid.get_cell(row + d_row, col + d_col) is None:
            metrics["edge_stops"] += 1
            return row, col
        if rng.random() < branch_probability:
            metrics["branches_spawned"] += 1
            build_line_of_rooms(
                grid,
                row,
                col,
                None,
                branch_probability - config.branch_decay,
                rng=rng,
                config=config,
                metrics=metrics,
                _depth=_depth + 1,
            )
        row += d_row
        col += d_col
    return row, col


def build_cell_connections(grid: Grid, current) -> int:
    """Link ``current`` to each carved orthogonal neighbor; returns links made."""
    made = 0
    if not current.is_room:
        return made
    for direction in DIRECTIONS:
        adj = grid.get_cell_relative(current, direction)
        if adj is None or not adj.is_room:
            continue
        if current.neighbor(direction) is not adj:
            current.link(direction, adj)
            made += 1
    return made


def build_all_cell_connections(grid: Grid) -> int:
    return sum(build_cell_connections(grid, cell) for cell in grid)


def generate_grid(config: MazeConfig | None = None, rng=None) -> Grid:
    """Build, carve and link a maze. The rng (or config.seed) decides everything."""
    config = (config or MazeConfig()).validate()
    if rng is None:
        if config.seed is None:
            config.seed = random.randint(0, 2**31 - 1)
        rng = random.Random(config.seed)
    t0 = time.perf_counter()
    metrics = init_metrics()

    grid = Grid().build(config.rows, config.cols, rng)
    grid.seed = config.seed
    grid.start_cell = grid.get_cell(config.start_row, config.start_col)

    row, col = config.start
    for direction in (NORTH, EAST, SOUTH):
        build_line_of_rooms(grid, row, col, direction, config.branch_probability, rng, config, metrics)
    exit_row, exit_col = build_line_of_rooms(
        grid, row, col, WEST, config.branch_probability, rng, config, metrics
    )

    exit_cell = grid.get_cell(exit_row, exit_col)
    if exit_cell is grid.start_cell:
        raise InvariantViolation(f"exit collapsed onto start cell {exit_cell.name}")
    # adjacent to the last carved WEST cell, so carving it keeps the maze connected
    exit_cell.is_room = True
    exit_cell.is_exit = True
    grid.exit_cell = exit_cell

    metrics["links"] = build_all_cell_connections(grid)
    verify_maze(grid)

    rooms = list(grid.rooms())
    metrics["rooms"] = len(rooms)
    metrics["dead_ends"] = sum(
        1 for c in rooms if sum(c.neighbor(d) is not None for d in DIRECTIONS) == 1
    )
    metrics["runtime_ms"] = round((time.perf_counter() - t0) * 1000.0, 3)
    grid.metrics = metrics
    log.info(
        event="maze_generated",
        seed=grid.seed,
        rows=grid.rows,
        cols=grid.cols,
        rooms=metrics["rooms"],
        start=grid.start_cell.name,
        exit=exit_cell.name,
    )
    return grid


__all__ = [
    "build_line_of_rooms",
    "build_cell_connections",
    "build_all_cell_connections",
    "generate_grid",
]
