"""Minimal structured logging helper.

Wraps print() to emit key=value pairs with a timestamp and level so game and
generation events stay greppable without configuring the stdlib logging tree.
Loggers can be bound to context (a seed, a game id) that is stamped on every
event they emit.

Usage:
    from darkcastle.logging_utils import get_logger
    log = get_logger("darkcastle.maze").bind(seed=7)
    log.info(event="maze_generated", rooms=42)

All non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.

When the HTTP server is running, warn and error events are also written to
its rotating log file (see ``attach_handler``).
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_STDLIB_LEVELS = {"warn": logging.WARNING, "error": logging.ERROR}

# Sink for warn/error lines; empty (and silent) until a handler is attached.
_events = logging.getLogger("darkcastle.events")
_events.propagate = False
_events.setLevel(logging.WARNING)


def _current_level() -> int:
    return LEVELS.get(os.getenv("DARKCASTLE_LOG_LEVEL", "warn").lower(), 30)


def _json_mode() -> bool:
    return os.getenv("DARKCASTLE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


def attach_handler(handler: logging.Handler) -> None:
    """Copy warn/error events to ``handler`` (replaces any earlier one)."""
    detach_handlers()
    _events.addHandler(handler)


def detach_handlers() -> None:
    for h in list(_events.handlers):
        _events.removeHandler(h)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "darkcastle"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every event; call-site fields win."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        fields = {**self.context, **fields}
        if "logger" not in fields:
            fields["logger"] = self.name
        line = _format(lvl, **fields)
        print(line, file=sys.stdout if lvl != "error" else sys.stderr)
        if lvl in _STDLIB_LEVELS and _events.handlers:
            _events.log(_STDLIB_LEVELS[lvl], line)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("darkcastle")
