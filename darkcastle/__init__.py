"""
project: Dark Castle
module: __init__.py
License: MIT

Procedurally generated maze-exploration text adventure.

Subpackages:
    maze     grid, corridor carving, connectivity checks, item placement
    routes   JSON HTTP adapter (Flask blueprint)

Modules:
    game      player state plus the navigation/gate engine
    commands  closed command set executed against a game
    cli       terminal presenter used by run.py
    server    Flask application factory

A local ``.env`` is loaded on import so DARKCASTLE_* settings can live there
during development.
"""

from dotenv import load_dotenv

load_dotenv()

__all__ = ["maze", "game", "commands"]
