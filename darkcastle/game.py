"""Game state and the navigation/gate engine.

A ``Game`` holds the player's position (a reference into the grid), the
items they carry and the hints recorded while hiding items. ``move_cell`` is
the only way position and the visited/discovered flags change. Entering a
room picks up everything on its floor.

Rejected moves never raise; they come back as a ``MoveResult`` with a
``reason`` of ``"no_room"``, ``"locked"`` or ``"bad_direction"``.
"""
from __future__ import annotations

import random
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple

from .logging_utils import get_logger
from .maze import (
    DIRECTION_NAMES,
    DIRECTIONS,
    Cell,
    Grid,
    Item,
    ItemSet,
    MazeConfig,
    generate_grid,
    parse_direction,
    place_item,
)
from .maze.placement import PICK_CHANCE

log = get_logger("darkcastle.game")

EXIT_KEY_NAME = "Red Key"
MAP_NAME = "Map"


class MoveResult(NamedTuple):
    moved: bool
    cell: Optional[Cell]
    reason: Optional[str] = None
    missing: FrozenSet[Item] = frozenset()
    picked_up: Tuple[Item, ...] = ()


class Game:
    def __init__(self, grid: Grid, rng=None, pick_chance: float = PICK_CHANCE):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.pick_chance = pick_chance
        self.current_cell: Cell = grid.start_cell
        self.owned_items: ItemSet = set()
        self.has_map = False
        self.hints: List[str] = []
        self.log = log.bind(seed=grid.seed)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def dfs_place(self, start: Cell, item: Item, avoid: Cell) -> Cell:
        room, hint = place_item(start, item, avoid, self.rng, self.pick_chance)
        self.hints.append(hint)
        return room

    # ------------------------------------------------------------------
    # Locks & movement
    # ------------------------------------------------------------------
    def can_enter(self, cell: Optional[Cell]) -> Tuple[bool, ItemSet]:
        """(enterable, missing items). Never changes state."""
        if cell is None or not cell.is_room:
            return False, set()
        missing = cell.required_items - self.owned_items
        return not missing, missing

    def move_cell(self, requested: Optional[Cell]) -> MoveResult:
        ok, missing = self.can_enter(requested)
        if not ok:
            reason = "locked" if missing else "no_room"
            self.log.debug(
                event="move_rejected",
                target=getattr(requested, "name", None),
                reason=reason,
                missing=",".join(sorted(i.name for i in missing)) or None,
            )
            return MoveResult(False, self.current_cell, reason, frozenset(missing))
        requested.visited = True
        requested.discovered = True
        for adj in self.grid.neighbors(requested):
            adj.discovered = True
        self.current_cell = requested
        picked = self.pick_up_items()
        return MoveResult(True, requested, picked_up=tuple(picked))

    def move(self, direction) -> MoveResult:
        d = parse_direction(direction)
        if d is None:
            return MoveResult(False, self.current_cell, "bad_direction")
        return self.move_cell(self.current_cell.neighbor(d))

    def pick_up_items(self) -> List[Item]:
        """Take everything lying in the current cell."""
        floor = self.current_cell.items_on_floor
        picked = sorted(floor, key=lambda i: i.name)
        for item in picked:
            self.owned_items.add(item)
            if item.name == MAP_NAME:
                self.has_map = True
        floor.clear()
        return picked

    @property
    def is_finished(self) -> bool:
        return self.current_cell is self.grid.exit_cell

    # ------------------------------------------------------------------
    # Read-only views for presenters
    # ------------------------------------------------------------------
    def preview_exits(self) -> Dict[str, Dict[str, Any]]:
        out = {}
        for d in DIRECTIONS:
            target = self.grid.get_cell_relative(self.current_cell, d)
            linked = self.current_cell.neighbor(d)
            ok, missing = self.can_enter(linked)
            out[DIRECTION_NAMES[d]] = {
                "name": target.name if target is not None else None,
                "room": linked is not None,
                "enterable": ok,
                "locked": bool(missing),
                "missing": sorted(i.name for i in missing),
            }
        return out

    def inventory(self) -> List[str]:
        return sorted(i.name for i in self.owned_items)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "seed": self.grid.seed,
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "current": self.current_cell.to_dict(),
            "exits": self.preview_exits(),
            "items": self.inventory(),
            "has_map": self.has_map,
            "finished": self.is_finished,
            "cells": [
                [
                    {
                        "room": c.is_room,
                        "visited": c.visited,
                        "discovered": c.discovered,
                        "exit": c.is_exit and (self.has_map or c.discovered),
                    }
                    for c in line
                ]
                for line in self.grid.cells
            ],
        }


def build_game(config: MazeConfig | None = None, rng=None) -> Game:
    """Generate a maze, lock the exit, hide the key and the map, place the player."""
    config = (config or MazeConfig()).validate()
    if rng is None:
        if config.seed is None:
            config.seed = random.randint(0, 2**31 - 1)
        rng = random.Random(config.seed)
    grid = generate_grid(config, rng)
    game = Game(grid, rng, config.placement_pick_chance)

    exit_key = Item(EXIT_KEY_NAME)
    grid.exit_cell.required_items.add(exit_key)
    game.dfs_place(grid.start_cell, exit_key, grid.exit_cell)
    game.dfs_place(grid.start_cell, Item(MAP_NAME), grid.exit_cell)

    game.current_cell = grid.start_cell
    game.move_cell(grid.start_cell)
    game.log.info(event="game_ready", start=grid.start_cell.name, exit=grid.exit_cell.name)
    return game


__all__ = ["EXIT_KEY_NAME", "MAP_NAME", "MoveResult", "Game", "build_game"]
