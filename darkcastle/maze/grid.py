"""Cell matrix ownership and coordinate lookups."""
from __future__ import annotations

import random
from typing import Dict, Iterator, List, Optional

from ..errors import InvariantViolation
from ..logging_utils import get_logger
from ..messages import ROOM_DESCRIPTIONS
from .cells import Cell
from .directions import DIRECTIONS, dir2rel

log = get_logger("darkcastle.maze")


class Grid:
    def __init__(self):
        self.rows = 0
        self.cols = 0
        self.cells: List[List[Cell]] = []
        self._by_name: Dict[str, Cell] = {}
        self.start_cell: Optional[Cell] = None
        self.exit_cell: Optional[Cell] = None
        self.seed: Optional[int] = None
        self.metrics: Dict[str, int | float] = {}

    def build(self, rows: int, cols: int, rng=None) -> "Grid":
        """Allocate every cell of a rows x cols matrix with a random flavor description."""
        if rng is None:
            rng = random
        self.rows = rows
        self.cols = cols
        self.cells = []
        self._by_name = {}
        for row in range(rows):
            line = []
            for col in range(cols):
                cell = Cell(row, col, rng.choice(ROOM_DESCRIPTIONS))
                line.append(cell)
                self._by_name[cell.name] = cell
            self.cells.append(line)
        return self

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        try:
            return self.cells[row][col]
        except IndexError:
            raise InvariantViolation(f"grid has no cell at in-range {row}:{col}") from None

    def get_cell_relative(self, cell: Cell, direction: int) -> Optional[Cell]:
        d_row, d_col = dir2rel(direction)
        return self.get_cell(cell.row + d_row, cell.col + d_col)

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """In-grid cells around ``cell`` whether carved or not."""
        for direction in DIRECTIONS:
            adj = self.get_cell_relative(cell, direction)
            if adj is not None:
                yield adj

    def find_cell(self, name: str) -> Optional[Cell]:
        cell = self._by_name.get(name)
        if cell is None:
            log.warn(event="cell_not_found", name=name)
        return cell

    def __iter__(self) -> Iterator[Cell]:
        for line in self.cells:
            yield from line

    def rooms(self) -> Iterator[Cell]:
        return (c for c in self if c.is_room)

    @property
    def size(self):
        return self.rows, self.cols
