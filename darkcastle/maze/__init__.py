"""Public maze package interface.

    from darkcastle.maze import generate_grid, place_item, MazeConfig, NORTH
"""

from .carver import build_all_cell_connections, build_line_of_rooms, generate_grid
from .cells import Cell, Item, ItemSet
from .config import MazeConfig
from .connectivity import path_between, reachable_from, verify_maze
from .directions import (
    DIRECTION_NAMES,
    DIRECTIONS,
    EAST,
    NORTH,
    SOUTH,
    WEST,
    dir2rel,
    opposite,
    parse_direction,
)
from .grid import Grid
from .placement import dfs_walk_to_random, place_item

__all__ = [
    "Cell",
    "Item",
    "ItemSet",
    "Grid",
    "MazeConfig",
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "DIRECTIONS",
    "DIRECTION_NAMES",
    "dir2rel",
    "opposite",
    "parse_direction",
    "build_line_of_rooms",
    "build_all_cell_connections",
    "generate_grid",
    "reachable_from",
    "path_between",
    "verify_maze",
    "dfs_walk_to_random",
    "place_item",
]
