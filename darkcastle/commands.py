"""Closed command set accepted by the core.

Presenters turn player text into one of ``MOVE``, ``INVENTORY``, ``HINT`` or
``QUIT`` (plus a direction for moves) and hand it to ``execute``. The result
is a plain value; nothing here prints or raises for player mistakes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .game import Game, MoveResult

MOVE = "move"
INVENTORY = "inventory"
HINT = "hint"
QUIT = "quit"

COMMANDS = frozenset({MOVE, INVENTORY, HINT, QUIT})


@dataclass
class CommandResult:
    ok: bool
    command: Optional[str]
    error: Optional[str] = None
    move: Optional[MoveResult] = None
    items: List[str] = field(default_factory=list)
    hint: Optional[str] = None
    quit: bool = False
    finished: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"ok": self.ok, "command": self.command, "finished": self.finished}
        if self.error:
            out["error"] = self.error
        if self.move is not None:
            out["moved"] = self.move.moved
            out["cell"] = self.move.cell.name if self.move.cell is not None else None
            out["missing"] = sorted(i.name for i in self.move.missing)
            out["picked_up"] = [i.name for i in self.move.picked_up]
        if self.command == INVENTORY:
            out["items"] = list(self.items)
        if self.hint is not None:
            out["hint"] = self.hint
        if self.quit:
            out["quit"] = True
        return out


def execute(game: Game, command: Optional[str], direction=None) -> CommandResult:
    if command == MOVE:
        result = game.move(direction)
        return CommandResult(
            ok=result.moved,
            command=MOVE,
            error=result.reason,
            move=result,
            finished=game.is_finished,
        )
    if command == INVENTORY:
        return CommandResult(ok=True, command=INVENTORY, items=game.inventory(), finished=game.is_finished)
    if command == HINT:
        if not game.hints:
            return CommandResult(ok=False, command=HINT, error="no_hints", finished=game.is_finished)
        return CommandResult(ok=True, command=HINT, hint=game.rng.choice(game.hints), finished=game.is_finished)
    if command == QUIT:
        return CommandResult(ok=True, command=QUIT, quit=True, finished=game.is_finished)
    return CommandResult(ok=False, command=command, error="unknown_command", finished=game.is_finished)


__all__ = ["MOVE", "INVENTORY", "HINT", "QUIT", "COMMANDS", "CommandResult", "execute"]
