"""
project: Dark Castle
module: game_api.py
License: MIT

JSON routes over the game core.

Each browser session owns one game, kept in an in-process cache under an id
stored in the Flask session. Each cached game carries its own lock, held
while a request reads or changes it. Rejected moves still answer 200; the
body says why the player did not move.
"""

import threading
import uuid
from typing import NamedTuple

from flask import Blueprint, jsonify, request, session

from ..commands import HINT, INVENTORY, MOVE, execute
from ..errors import InvariantViolation
from ..game import Game, build_game
from ..logging_utils import get_logger
from ..maze import MazeConfig

log = get_logger("darkcastle.api")


class _Entry(NamedTuple):
    game: Game
    lock: threading.Lock


_games = {}
_games_lock = threading.Lock()
_GAME_CACHE_MAX = 32  # small LRU-ish manual cap

bp_game = Blueprint("game", __name__)


def _int_or_none(value, field):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an integer") from None


def _current_entry():
    game_id = session.get("game_id")
    if not game_id:
        return None
    with _games_lock:
        return _games.get(game_id)


def _no_game():
    return jsonify({"error": "No game found"}), 404


@bp_game.route("/api/game/new", methods=["POST"])
def new_game():
    """Start a game. Body (all optional): {"seed": int, "rows": int, "cols": int}."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON object"}), 400
    try:
        config = MazeConfig.from_env(
            seed=_int_or_none(data.get("seed"), "seed"),
            rows=_int_or_none(data.get("rows"), "rows"),
            cols=_int_or_none(data.get("cols"), "cols"),
        ).validate()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    try:
        game = build_game(config)
    except InvariantViolation as e:
        log.error(event="generation_failed", seed=config.seed, error=str(e))
        return jsonify({"error": "generation_failed", "seed": config.seed}), 500
    game_id = uuid.uuid4().hex
    game.log = game.log.bind(game_id=game_id)
    with _games_lock:
        _games[game_id] = _Entry(game, threading.Lock())
        if len(_games) > _GAME_CACHE_MAX:
            first_key = next(iter(_games.keys()))
            if first_key != game_id:
                _games.pop(first_key, None)
    session["game_id"] = game_id
    game.log.info(event="game_created", rows=config.rows, cols=config.cols)
    return jsonify({"game_id": game_id, "seed": game.grid.seed, "state": game.snapshot()}), 201


@bp_game.route("/api/game/state")
def game_state():
    entry = _current_entry()
    if entry is None:
        return _no_game()
    with entry.lock:
        return jsonify(entry.game.snapshot())


@bp_game.route("/api/game/move", methods=["POST"])
def game_move():
    """Body: {"dir": "n"|"e"|"s"|"w"|full name}."""
    entry = _current_entry()
    if entry is None:
        return _no_game()
    data = request.get_json(silent=True) or {}
    direction = data.get("dir") if isinstance(data, dict) else None
    # Moves for one game run one at a time; each sees the state the last one left.
    with entry.lock:
        result = execute(entry.game, MOVE, direction)
        payload = result.to_dict()
        payload["state"] = entry.game.snapshot()
    return jsonify(payload)


@bp_game.route("/api/game/inventory")
def game_inventory():
    entry = _current_entry()
    if entry is None:
        return _no_game()
    with entry.lock:
        return jsonify(execute(entry.game, INVENTORY).to_dict())


@bp_game.route("/api/game/hint")
def game_hint():
    entry = _current_entry()
    if entry is None:
        return _no_game()
    with entry.lock:
        return jsonify(execute(entry.game, HINT).to_dict())


@bp_game.route("/api/game/can_enter")
def game_can_enter():
    """Lock preview for the four directions around the player."""
    entry = _current_entry()
    if entry is None:
        return _no_game()
    with entry.lock:
        return jsonify({"current": entry.game.current_cell.name, "exits": entry.game.preview_exits()})
