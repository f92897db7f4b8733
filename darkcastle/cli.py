"""Terminal presenter.

Turns typed words into core commands and draws the player's surroundings.
Everything shown is read off the ``Game``; no rule lives here.
"""
from __future__ import annotations

import sys
from typing import Callable, List, Optional, Tuple

from colorama import Fore, Style
from colorama import init as _color_init

from .commands import HINT, INVENTORY, MOVE, QUIT, CommandResult, execute
from .game import Game
from .maze import DIRECTION_NAMES, EAST, NORTH, SOUTH, WEST, Grid
from .messages import message

PLAYER_ICON = "+"
ICON_BLOCK = "█"

_WORDS = {
    "n": (MOVE, NORTH),
    "north": (MOVE, NORTH),
    "e": (MOVE, EAST),
    "east": (MOVE, EAST),
    "s": (MOVE, SOUTH),
    "south": (MOVE, SOUTH),
    "w": (MOVE, WEST),
    "west": (MOVE, WEST),
    "i": (INVENTORY, None),
    "inv": (INVENTORY, None),
    "items": (INVENTORY, None),
    "inventory": (INVENTORY, None),
    "h": (HINT, None),
    "hint": (HINT, None),
    "q": (QUIT, None),
    "quit": (QUIT, None),
}

_color_init()
_COLOR_ENABLED = sys.stdout.isatty()


def set_color(enabled: bool) -> None:
    global _COLOR_ENABLED
    _COLOR_ENABLED = enabled


def _paint(text: str, *codes: str) -> str:
    if not _COLOR_ENABLED:
        return text
    return "".join(codes) + text + Style.RESET_ALL


def cell_text(text: str) -> str:
    return _paint(text, Fore.BLUE, Style.BRIGHT)


def denied_text(text: str) -> str:
    return _paint(text, Fore.RED, Style.BRIGHT)


def item_text(text: str) -> str:
    return _paint(text, Fore.GREEN, Style.BRIGHT)


def subtle_text(text: str) -> str:
    return _paint(text, Style.DIM)


def action_text(word: str) -> str:
    return _paint(word[:1], Fore.MAGENTA, Style.BRIGHT) + _paint(word[1:], Fore.MAGENTA)


def parse_command(text: str) -> Tuple[Optional[str], Optional[int]]:
    """Map a typed word to (command, direction); (None, None) if not understood."""
    return _WORDS.get((text or "").strip().lower(), (None, None))


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------
def direction_label(game: Game, direction: int) -> str:
    info = game.preview_exits()[DIRECTION_NAMES[direction]]
    if not info["room"]:
        return subtle_text("# Wall #")
    label = f"{action_text(DIRECTION_NAMES[direction])}: ({cell_text(info['name'])})"
    if info["locked"]:
        label += " " + denied_text("(" + ",".join(info["missing"]) + ")")
    return label


def map_glyph(game: Game, cell) -> str:
    if cell is game.current_cell:
        return _paint(PLAYER_ICON, Fore.GREEN, Style.BRIGHT)
    if cell.visited:
        return cell_text("v")
    if cell.discovered:
        return subtle_text("o" if cell.is_room else ICON_BLOCK)
    if game.has_map and cell.is_exit:
        return denied_text("£")
    return subtle_text(".")


def render_map(game: Game) -> str:
    indent = " " * 24
    cur = game.current_cell
    lines = [indent + direction_label(game, NORTH), ""]
    for row in range(game.grid.rows):
        glyphs = "".join(map_glyph(game, c) for c in game.grid.cells[row])
        if row == cur.row:
            lines.append(f"{direction_label(game, WEST):>23} {glyphs} {direction_label(game, EAST)}")
        else:
            lines.append(indent + glyphs)
    lines += ["", indent + direction_label(game, SOUTH)]
    return "\n".join(lines)


def render_frame(game: Game, picked: List[str] | None = None) -> str:
    cur = game.current_cell
    parts = [f"{message('IN_ROOM')} {cell_text(message(cur.description))} ({cell_text(cur.name)})", ""]
    for name in picked or []:
        parts.append(item_text(message("PICKED_UP", item=name)))
    parts.append(render_map(game))
    parts.append("")
    parts.append(f"- {action_text('Inventory')}: \tShow inventory")
    parts.append(f"- {action_text('Hint')}: \tShow hint")
    return "\n".join(parts)


def render_full_map(grid: Grid) -> str:
    """Whole maze revealed: # solid, . room, S start, X exit, * item."""
    rows = []
    for line in grid.cells:
        out = []
        for c in line:
            if c is grid.start_cell:
                out.append("S")
            elif c.is_exit:
                out.append("X")
            elif c.items_on_floor:
                out.append("*")
            else:
                out.append("." if c.is_room else "#")
        rows.append("".join(out))
    return "\n".join(rows)


def describe_result(game: Game, result: CommandResult) -> str:
    if result.command is None or result.error == "unknown_command":
        return message("UNKNOWN_COMMAND")
    if result.command == MOVE:
        move = result.move
        if move.moved:
            return message("OPEN_DOOR") + cell_text(message(move.cell.description))
        if move.reason == "locked":
            return "\n".join(denied_text(message("NEED_ITEM", item=i.name)) for i in sorted(move.missing, key=lambda i: i.name))
        if move.reason == "bad_direction":
            return message("BAD_DIRECTION")
        return message("NOTHING_THERE")
    if result.command == INVENTORY:
        lines = [message("ITEM_INVENTORY", count=len(result.items))]
        lines += [f"Item: {item_text(name)}" for name in result.items]
        return "\n".join(lines)
    if result.command == HINT:
        return result.hint if result.ok else message("NO_HINTS")
    return message("GOODBYE")


# ----------------------------------------------------------------------
# Loop
# ----------------------------------------------------------------------
def play(game: Game, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> int:
    """Run the interactive loop until the exit is reached, the player quits, or input ends."""
    picked: List[str] = []
    while True:
        if game.is_finished:
            write(message("EXIT"))
            return 0
        write(render_frame(game, picked))
        picked = []
        try:
            text = read("\n> ")
        except EOFError:
            write(message("GOODBYE"))
            return 0
        command, direction = parse_command(text)
        result = execute(game, command, direction)
        write("")
        write(describe_result(game, result))
        if result.quit:
            return 0
        if result.move is not None and result.move.moved:
            picked = [i.name for i in result.move.picked_up]


__all__ = [
    "parse_command",
    "render_map",
    "render_frame",
    "render_full_map",
    "describe_result",
    "play",
    "set_color",
]
