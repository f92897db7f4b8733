import threading

import pytest

import darkcastle.routes.game_api as game_api
from darkcastle.errors import InvariantViolation


def new_game(client, start_seed=61):
    """POST /api/game/new with the first seed whose placement walk succeeds."""
    for seed in range(start_seed, start_seed + 50):
        r = client.post("/api/game/new", json={"seed": seed})
        if r.status_code == 201:
            return r.get_json()
        assert r.status_code == 500
    raise AssertionError("no playable seed")


def test_state_without_game_is_404(client):
    r = client.get("/api/game/state")
    assert r.status_code == 404
    assert r.get_json()["error"] == "No game found"
    assert client.post("/api/game/move", json={"dir": "n"}).status_code == 404


def test_new_game_returns_state(client):
    data = new_game(client)
    assert data["game_id"]
    state = data["state"]
    assert state["rows"] == 10 and state["cols"] == 20
    assert state["current"]["name"] == "5:10"
    assert state["current"]["visited"] is True
    assert state["items"] == []
    assert state["finished"] is False
    assert set(state["exits"]) == {"North", "East", "South", "West"}


def test_state_is_stable_for_session(client):
    data = new_game(client)
    s1 = client.get("/api/game/state").get_json()
    s2 = client.get("/api/game/state").get_json()
    assert s1 == s2
    assert s1["seed"] == data["seed"]


def test_move_through_open_door(client):
    state = new_game(client)["state"]
    direction = next(name for name, info in state["exits"].items() if info["enterable"])
    r = client.post("/api/game/move", json={"dir": direction})
    assert r.status_code == 200
    body = r.get_json()
    assert body["moved"] is True
    assert body["cell"] == state["exits"][direction]["name"]
    assert body["state"]["current"]["name"] == body["cell"]


def test_invalid_direction_is_ignored(client):
    state = new_game(client)["state"]
    r = client.post("/api/game/move", json={"dir": "zzz"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["moved"] is False
    assert body["error"] == "bad_direction"
    assert body["state"]["current"]["name"] == state["current"]["name"]


def test_inventory_and_hint(client):
    new_game(client)
    inv = client.get("/api/game/inventory").get_json()
    assert inv["ok"] is True and inv["items"] == []
    hint = client.get("/api/game/hint").get_json()
    assert hint["hint"].startswith("The ")


def test_can_enter_preview(client):
    state = new_game(client)["state"]
    body = client.get("/api/game/can_enter").get_json()
    assert body["current"] == state["current"]["name"]
    assert body["exits"] == state["exits"]


@pytest.mark.parametrize(
    "payload",
    [{"seed": "abc"}, {"rows": 1}, {"cols": "x"}, {"rows": 1500, "cols": 1500, "seed": 1}, {"cols": 101}],
)
def test_bad_new_game_payload(client, payload):
    r = client.post("/api/game/new", json=payload)
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_generation_failure_is_500(client, monkeypatch):
    def boom(config):
        raise InvariantViolation("broken maze")

    monkeypatch.setattr(game_api, "build_game", boom)
    r = client.post("/api/game/new", json={"seed": 5})
    assert r.status_code == 500
    assert r.get_json() == {"error": "generation_failed", "seed": 5}


def test_game_logger_carries_game_id(client):
    data = new_game(client)
    game = game_api._games[data["game_id"]].game
    assert game.log.context == {"seed": data["seed"], "game_id": data["game_id"]}


def test_requests_for_one_game_wait_for_its_lock(client):
    data = new_game(client)
    entry = game_api._games[data["game_id"]]
    responses = []
    worker = threading.Thread(
        target=lambda: responses.append(client.post("/api/game/move", json={"dir": "zzz"}))
    )
    with entry.lock:
        worker.start()
        worker.join(timeout=0.3)
        assert worker.is_alive()
        assert responses == []
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert responses[0].status_code == 200
    assert responses[0].get_json()["error"] == "bad_direction"
