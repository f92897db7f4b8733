"""Flask application factory for the JSON game adapter."""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask

from . import logging_utils


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    )
    if config:
        app.config.update(config)

    from .routes.game_api import bp_game

    app.register_blueprint(bp_game)
    return app


def _configure_logging(log_dir: str) -> str:
    """Send Werkzeug/Flask records and game warn/error events to <log_dir>/app.log.

    Werkzeug request lines also go to the console; game events already print
    there through ``logging_utils``, so they only get the file. Returns the
    log file path.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "app.log")

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    # Reconfiguring replaces, never stacks
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(file_handler)
    root.addHandler(console)

    logging_utils.attach_handler(file_handler)
    return log_path


def start_server(host: str, port: int, debug: bool = False):  # pragma: no cover (network)
    app = create_app()
    _configure_logging(app.instance_path)
    print(f"[INFO] Starting game API on {host}:{port}")
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
