import pytest

from darkcastle.game import EXIT_KEY_NAME, MAP_NAME, Game, build_game
from darkcastle.maze import EAST, NORTH, WEST, Item, MazeConfig
from tests.maze_test_utils import bfs_reachable, carve, first_playable_game, path_avoiding


@pytest.fixture
def locked_corridor(corridor_grid):
    key = Item(EXIT_KEY_NAME)
    corridor_grid.exit_cell.required_items.add(key)
    game = Game(corridor_grid)
    game.move_cell(corridor_grid.start_cell)
    return game, key


def test_locked_door_rejects_then_opens(locked_corridor):
    game, key = locked_corridor
    for _ in range(4):
        assert game.move(EAST).moved
    before = game.current_cell
    result = game.move_cell(game.grid.exit_cell)
    assert not result.moved
    assert result.reason == "locked"
    assert result.missing == frozenset({key})
    assert game.current_cell is before
    assert not game.grid.exit_cell.visited

    game.owned_items.add(key)
    result = game.move_cell(game.grid.exit_cell)
    assert result.moved
    assert game.current_cell is game.grid.exit_cell
    assert game.is_finished


def test_can_enter_is_pure(locked_corridor):
    game, key = locked_corridor
    exit_cell = game.grid.exit_cell
    first = game.can_enter(exit_cell)
    second = game.can_enter(exit_cell)
    assert first == second == (False, {key})
    assert not exit_cell.visited and not exit_cell.discovered
    assert game.current_cell is game.grid.start_cell


def test_can_enter_reports_empty_missing_on_success(corridor_grid):
    game = Game(corridor_grid)
    assert game.can_enter(corridor_grid.get_cell(0, 1)) == (True, set())


def test_walls_and_nothing_are_not_enterable(corridor_grid):
    game = Game(corridor_grid)
    assert game.can_enter(None) == (False, set())
    assert game.can_enter(corridor_grid.get_cell(1, 0)) == (False, set())
    result = game.move(NORTH)
    assert not result.moved and result.reason == "no_room"
    assert game.current_cell is corridor_grid.start_cell


def test_unknown_direction_leaves_state(corridor_grid):
    game = Game(corridor_grid)
    result = game.move("up")
    assert result.reason == "bad_direction"
    assert game.current_cell is corridor_grid.start_cell


def test_direction_names_accepted(corridor_grid):
    game = Game(corridor_grid)
    assert game.move("e").moved
    assert game.move("West").moved
    assert game.current_cell is corridor_grid.start_cell


def test_entering_marks_visited_and_discovers_neighbors():
    g = carve(3, 3, [(1, 1), (0, 1), (2, 1)], start=(1, 1))
    game = Game(g)
    game.move_cell(g.get_cell(1, 1))
    assert g.get_cell(1, 1).visited
    for r, c in [(0, 1), (2, 1), (1, 0), (1, 2)]:
        cell = g.get_cell(r, c)
        assert cell.discovered
        assert not cell.visited
    assert not g.get_cell(0, 0).discovered


def test_entering_a_corner_room(corridor_grid):
    game = Game(corridor_grid)
    game.move_cell(corridor_grid.start_cell)
    assert corridor_grid.get_cell(1, 0).discovered
    assert corridor_grid.get_cell(0, 1).discovered


def test_two_floor_items_picked_up_together(corridor_grid):
    target = corridor_grid.get_cell(0, 1)
    target.items_on_floor.update({Item("Lamp"), Item(MAP_NAME)})
    game = Game(corridor_grid)
    result = game.move_cell(target)
    assert {i.name for i in game.owned_items} == {"Lamp", MAP_NAME}
    assert target.items_on_floor == set()
    assert [i.name for i in result.picked_up] == ["Lamp", MAP_NAME]
    assert game.has_map


def test_reentering_does_not_duplicate_pickup(corridor_grid):
    target = corridor_grid.get_cell(0, 1)
    target.items_on_floor.add(Item("Lamp"))
    game = Game(corridor_grid)
    game.move_cell(target)
    game.move(WEST)
    again = game.move_cell(target)
    assert again.moved
    assert again.picked_up == ()
    assert len(game.owned_items) == 1
    assert game.pick_up_items() == []


def test_preview_exits_shows_locks(locked_corridor):
    game, _ = locked_corridor
    for _ in range(4):
        game.move(EAST)
    preview = game.preview_exits()
    assert preview["East"] == {
        "name": "0:5",
        "room": True,
        "enterable": False,
        "locked": True,
        "missing": [EXIT_KEY_NAME],
    }
    assert preview["North"]["name"] is None
    assert preview["South"]["room"] is False
    assert preview["West"]["enterable"] is True


def test_built_game_is_ready(seeded_game):
    game = seeded_game
    grid = game.grid
    assert game.current_cell is grid.start_cell
    assert grid.start_cell.visited
    assert game.owned_items == set()
    assert not game.has_map
    assert grid.exit_cell.required_items == {Item(EXIT_KEY_NAME)}
    assert len(game.hints) == 2
    assert game.hints[0].startswith(f"The {EXIT_KEY_NAME} is in ")
    assert game.hints[1].startswith(f"The {MAP_NAME} is in ")


@pytest.mark.structure
def test_key_hidden_reachably_and_not_at_exit(seeded_game):
    grid = seeded_game.grid
    key = Item(EXIT_KEY_NAME)
    holders = [c for c in grid if key in c.items_on_floor]
    assert len(holders) == 1
    key_cell = holders[0]
    assert key_cell is not grid.exit_cell
    assert key_cell in bfs_reachable(grid.start_cell, avoid=[grid.exit_cell])
    assert seeded_game.hints[0] == f"The {EXIT_KEY_NAME} is in {key_cell.name}"


def test_same_seed_same_game(seeded_game):
    again = build_game(MazeConfig(seed=seeded_game.grid.seed))
    assert again.hints == seeded_game.hints
    assert again.grid.exit_cell.name == seeded_game.grid.exit_cell.name


def test_full_playthrough():
    game = first_playable_game(start_seed=7)
    grid = game.grid
    key = Item(EXIT_KEY_NAME)
    key_cell = next(c for c in grid if key in c.items_on_floor)

    to_key = path_avoiding(game.current_cell, key_cell, avoid=[grid.exit_cell])
    for cell in to_key[1:]:
        assert game.move_cell(cell).moved
    assert key in game.owned_items

    to_exit = path_avoiding(game.current_cell, grid.exit_cell)
    for cell in to_exit[1:]:
        assert game.move_cell(cell).moved
    assert game.is_finished
