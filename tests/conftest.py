import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from darkcastle.server import create_app  # noqa: E402
from tests.maze_test_utils import carve, first_playable_game  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "DARKCASTLE_ROWS",
        "DARKCASTLE_COLS",
        "DARKCASTLE_SEED",
        "DARKCASTLE_BRANCH_PROBABILITY",
        "DARKCASTLE_LOG_LEVEL",
        "DARKCASTLE_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def corridor_grid():
    """One row of six rooms, 0:0 .. 0:5, start at the west end and exit at the east end."""
    return carve(3, 6, [(0, c) for c in range(6)], start=(0, 0), exit=(0, 5))


@pytest.fixture
def plus_grid():
    """Start at 2:2 with one room in each direction and nothing else."""
    return carve(5, 5, [(2, 2), (1, 2), (2, 3), (3, 2), (2, 1)], start=(2, 2))


@pytest.fixture
def seeded_game():
    return first_playable_game(start_seed=101)


@pytest.fixture()
def client():
    app = create_app({"TESTING": True, "SECRET_KEY": "test"})
    return app.test_client()
