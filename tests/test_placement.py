import random

import pytest

from darkcastle.errors import InvariantViolation, PlacementFailed
from darkcastle.maze import Item, MazeConfig, dfs_walk_to_random, generate_grid, place_item
from tests.maze_test_utils import ScriptedRandom, bfs_reachable


def test_first_neighbor_picked_immediately(corridor_grid):
    start = corridor_grid.start_cell
    room, hint = place_item(start, Item("Map"), corridor_grid.exit_cell, ScriptedRandom([0.0]))
    assert room.name == "0:1"
    assert Item("Map") in room.items_on_floor
    assert hint == "The Map is in 0:1"


def test_walk_descends_before_picking(corridor_grid):
    rng = ScriptedRandom([0.5, 0.5, 0.0])
    room, _ = place_item(corridor_grid.start_cell, Item("Map"), corridor_grid.exit_cell, rng)
    assert room.name == "0:3"


def test_last_selected_sibling_wins(plus_grid):
    # Every neighbor is picked on the spot; West is visited last.
    room = dfs_walk_to_random(plus_grid.start_cell, set(), set(), ScriptedRandom([], default=0.0))
    assert room.name == "2:1"


def test_avoided_cell_never_selected(plus_grid):
    west = plus_grid.get_cell(2, 1)
    room = dfs_walk_to_random(plus_grid.start_cell, set(), {west}, ScriptedRandom([], default=0.0))
    assert room.name == "3:2"


def test_avoided_cell_blocks_traversal(corridor_grid):
    # Walk into 0:1 without picking; 0:2 is off limits so nothing lies beyond.
    with pytest.raises(PlacementFailed):
        place_item(corridor_grid.start_cell, Item("Key"), corridor_grid.get_cell(0, 2), ScriptedRandom([0.5]))


def test_exhausted_walk_is_fatal(corridor_grid):
    with pytest.raises(InvariantViolation) as exc:
        place_item(corridor_grid.start_cell, Item("Key"), corridor_grid.exit_cell, ScriptedRandom())
    assert isinstance(exc.value, PlacementFailed)
    assert exc.value.item_name == "Key"
    assert all(not c.items_on_floor for c in corridor_grid)


def test_start_cell_is_never_chosen(plus_grid):
    for seed in range(30):
        try:
            room, _ = place_item(plus_grid.start_cell, Item("x"), None, random.Random(seed))
        except PlacementFailed:
            continue
        assert room is not plus_grid.start_cell


def test_independent_calls_may_share_a_room(corridor_grid):
    a, _ = place_item(corridor_grid.start_cell, Item("Map"), corridor_grid.exit_cell, ScriptedRandom([0.0]))
    b, _ = place_item(corridor_grid.start_cell, Item("Red Key"), corridor_grid.exit_cell, ScriptedRandom([0.0]))
    assert a is b
    assert {i.name for i in a.items_on_floor} == {"Map", "Red Key"}


@pytest.mark.structure
def test_generated_placements_stay_reachable_and_avoid_exit():
    placed = 0
    for seed in range(40):
        g = generate_grid(MazeConfig(seed=seed))
        allowed = bfs_reachable(g.start_cell, avoid=[g.exit_cell])
        try:
            room, _ = place_item(g.start_cell, Item("Red Key"), g.exit_cell, random.Random(seed))
        except PlacementFailed:
            continue
        placed += 1
        assert room is not g.exit_cell
        assert room is not g.start_cell
        assert room in allowed
    assert placed > 20
