"""Fatal error types.

Player-facing problems (walls, locked doors, unknown commands) are never
raised; they come back as ``MoveResult`` / ``CommandResult`` values. The
exceptions here signal a broken maze and end the process.
"""


class InvariantViolation(RuntimeError):
    """A generated structure broke one of its own guarantees."""


class PlacementFailed(InvariantViolation):
    """The placement walk explored every reachable room without choosing one."""

    def __init__(self, item_name: str, start_name: str):
        super().__init__(f"no hiding spot found for {item_name!r} walking from {start_name}")
        self.item_name = item_name
        self.start_name = start_name
