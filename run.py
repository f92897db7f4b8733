"""Dark Castle CLI entry point.

Provides subcommands for playing in the terminal, printing a generated maze
and serving the JSON game API. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dark Castle

    Explore a freshly carved castle maze one room at a time. Find the key that
    opens the exit gate; a map of the castle is hidden somewhere too.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DARKCASTLE_ROWS                Grid height (default: 10)
          DARKCASTLE_COLS                Grid width (default: 20)
          DARKCASTLE_SEED                Fixed seed for a reproducible castle
          DARKCASTLE_BRANCH_PROBABILITY  Side-corridor chance per step (default: 0.5)
          DARKCASTLE_LOG_LEVEL           debug | info | warn | error (default: warn)
          HOST / PORT                    Bind address for the API server

        Examples:
          # Play a random castle
          python run.py

          # Replay the same castle
          python run.py play --seed 1234

          # Show a whole castle without playing
          python run.py map --seed 1234

          # Serve the JSON API
          python run.py server --port 8080

        In-game commands:
          n/e/s/w (or north/east/south/west)   Walk through a door
          i, inventory                         Show what you carry
          h, hint                              Hear a rumour about an item
          q, quit                              Leave the castle
        """
    )

    parser = argparse.ArgumentParser(
        prog="DarkCastle",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Dark Castle {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_maze_flags(sub):
        sub.add_argument("--seed", type=int, default=None, help="Seed (default: env DARKCASTLE_SEED or random)")
        sub.add_argument("--rows", type=int, default=None, help="Grid rows (default: env DARKCASTLE_ROWS or 10)")
        sub.add_argument("--cols", type=int, default=None, help="Grid columns (default: env DARKCASTLE_COLS or 20)")

    play_parser = subparsers.add_parser(
        "play",
        help="Play in this terminal",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_maze_flags(play_parser)
    play_parser.set_defaults(command="play")

    map_parser = subparsers.add_parser(
        "map",
        help="Generate a castle and print the whole layout",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Print a generated castle: # solid, . room, S start, X exit, * hidden item.",
    )
    add_maze_flags(map_parser)
    map_parser.set_defaults(command="map")

    server_parser = subparsers.add_parser(
        "server",
        help="Serve the JSON game API",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to play
    if len(argv) == 0:
        argv = ["play"]

    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    def handle_sigint(sig, frame):
        print("\n[INFO] Leaving the castle...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    mode = (getattr(args, "command", None) or "play").lower()

    # Import the game only after the environment is ready
    from darkcastle.errors import InvariantViolation
    from darkcastle.logging_utils import log

    if mode == "server":
        from darkcastle.server import start_server

        host = getattr(args, "host", None) or os.getenv("HOST", "127.0.0.1")
        port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
        debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
        log.info(event="listen", host=host, port=port, debug=debug)
        start_server(host=host, port=port, debug=debug)
        return 0

    from darkcastle import cli
    from darkcastle.game import build_game
    from darkcastle.maze import MazeConfig

    try:
        config = MazeConfig.from_env(seed=args.seed, rows=args.rows, cols=args.cols).validate()
    except ValueError as e:
        prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
        print(f"{prefix} {e}")
        return 1

    try:
        game = build_game(config)
    except InvariantViolation as e:
        log.error(event="generation_failed", seed=config.seed, error=str(e))
        return 2

    log.info(event="startup", mode=mode, seed=game.grid.seed)
    if mode == "map":
        print(f"seed={game.grid.seed} rooms={game.grid.metrics.get('rooms')}")
        print(cli.render_full_map(game.grid))
        for hint in game.hints:
            print(hint)
        return 0

    cli.set_color(_COLOR_ENABLED)
    return cli.play(game)


def _console_main():  # pragma: no cover - console_scripts shim
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
