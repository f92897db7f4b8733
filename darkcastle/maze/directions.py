# Cardinal directions centralized for modular imports
from typing import Dict, Tuple

NORTH = 0
EAST = 1
SOUTH = 2
WEST = 3

DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

DIRECTION_NAMES = {NORTH: "North", EAST: "East", SOUTH: "South", WEST: "West"}

# (d_row, d_col); rows grow southwards
_DELTAS: Dict[int, Tuple[int, int]] = {
    NORTH: (-1, 0),
    EAST: (0, 1),
    SOUTH: (1, 0),
    WEST: (0, -1),
}

_ALIASES = {
    "n": NORTH,
    "north": NORTH,
    "e": EAST,
    "east": EAST,
    "s": SOUTH,
    "south": SOUTH,
    "w": WEST,
    "west": WEST,
}


def dir2rel(direction: int) -> Tuple[int, int]:
    try:
        return _DELTAS[direction]
    except KeyError:
        raise ValueError(f"Direction unknown: {direction!r}") from None


def opposite(direction: int) -> int:
    dir2rel(direction)
    return (direction + 2) % 4


def parse_direction(value) -> int | None:
    """Accept a direction constant or a name/abbreviation; None when unrecognised."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value in _DELTAS else None
    if isinstance(value, str):
        return _ALIASES.get(value.strip().lower())
    return None


__all__ = [
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "DIRECTIONS",
    "DIRECTION_NAMES",
    "dir2rel",
    "opposite",
    "parse_direction",
]
