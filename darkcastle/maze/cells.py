from typing import Optional, Set

from .directions import EAST, NORTH, SOUTH, WEST, opposite

_LINK_ATTRS = {NORTH: "north", EAST: "east", SOUTH: "south", WEST: "west"}


class Item:
    """Something the player can carry; identity is the name."""
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Item) and other.name == self.name

    def __hash__(self):
        return hash(("item", self.name))

    def __repr__(self):
        return f"Item({self.name!r})"


ItemSet = Set[Item]


class Cell:
    """One grid position. Becomes a room only once carved."""
    __slots__ = (
        "row", "col", "name", "description",
        "is_room", "is_exit", "visited", "discovered",
        "north", "east", "south", "west",
        "items_on_floor", "required_items",
    )

    def __init__(self, row: int, col: int, description: str):
        self.row = row
        self.col = col
        self.name = f"{row}:{col}"
        self.description = description
        self.is_room = False
        self.is_exit = False
        self.visited = False
        self.discovered = False
        self.north: Optional["Cell"] = None
        self.east: Optional["Cell"] = None
        self.south: Optional["Cell"] = None
        self.west: Optional["Cell"] = None
        self.items_on_floor: ItemSet = set()
        self.required_items: ItemSet = set()

    @property
    def coords(self):
        return self.row, self.col

    def neighbor(self, direction: int) -> Optional["Cell"]:
        try:
            return getattr(self, _LINK_ATTRS[direction])
        except KeyError:
            raise ValueError(f"Direction unknown: {direction!r}") from None

    def link(self, direction: int, other: "Cell") -> None:
        """Connect both ways so adjacency stays symmetric."""
        setattr(self, _LINK_ATTRS[direction], other)
        setattr(other, _LINK_ATTRS[opposite(direction)], self)

    def has_connections(self) -> bool:
        return any(getattr(self, attr) is not None for attr in _LINK_ATTRS.values())

    def to_dict(self):
        return {
            "name": self.name,
            "row": self.row,
            "col": self.col,
            "description": self.description,
            "room": self.is_room,
            "exit": self.is_exit,
            "visited": self.visited,
            "discovered": self.discovered,
        }

    def __repr__(self):
        return f"Cell({self.name}{' room' if self.is_room else ''})"
