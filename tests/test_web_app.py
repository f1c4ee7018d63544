"""
API tests for the Flask web application using Flask's test client.
"""
import pytest

from conftest import make_game
from courtside.models import GameStatus
from courtside.services import ServiceFactory
from courtside.ui.web_app import create_app


def _ids(count):
    return [f"p{i}" for i in range(1, count + 1)]


@pytest.fixture
def client(roster_store):
    roster_store.save_game(make_game("g1", _ids(7), status=GameStatus.SCHEDULED))
    app = create_app(service_factory=ServiceFactory(persistence_service=roster_store))
    app.config["TESTING"] = True
    return app.test_client()


def test_players_and_stats(client):
    response = client.post("/api/players", json={"name": "New Kid", "number": 42})
    assert response.status_code == 201
    player = response.get_json()["player"]
    assert player["number"] == "42"

    response = client.post("/api/players", json={"name": "Copycat", "number": "42"})
    assert response.status_code == 400
    assert response.get_json()["success"] is False

    players = client.get("/api/players").get_json()["players"]
    assert len(players) == 11

    stats = client.get(f"/api/players/{player['id']}/stats").get_json()["stats"]
    assert stats["games_attended"] == 0
    assert client.get("/api/players/ghost/stats").status_code == 404
    assert len(client.get("/api/stats").get_json()["stats"]) == 11


def test_not_found_and_bad_input(client):
    assert client.get("/api/games/nope").status_code == 404
    assert client.post("/api/games/nope/start").status_code == 404

    response = client.post("/api/games/g1/optimize", json={"strategy": "coin-flip"})
    assert response.status_code == 400
    assert "coin-flip" in response.get_json()["error"]

    assert client.post("/api/games/g1/attendance", json={}).status_code == 400
    assert client.post("/api/games", json={"date": "2024-01-01"}).status_code == 400

    response = client.post("/api/games/g1/optimize", json={"attending_player_ids": [{"id": "p1"}]})
    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_live_game_flow(client):
    assert client.post("/api/games/g1/start").status_code == 200

    response = client.post(
        "/api/games/g1/rotations", json={"quarter": 1, "swap": 1, "player_ids": _ids(5)}
    )
    assert response.status_code == 201

    court = client.get("/api/games/g1/court").get_json()
    assert [p["id"] for p in court["on_court"]] == _ids(5)
    assert [p["id"] for p in court["available"]] == ["p6", "p7"]

    recommendations = client.get("/api/games/g1/recommendations?count=2&exclude=p7").get_json()
    assert [r["player_id"] for r in recommendations["recommendations"]] == ["p6", "p1"]

    response = client.post(
        "/api/games/g1/substitution",
        json={"quarter": 1, "swap": 1, "player_out": "p1", "player_in": "p6"},
    )
    assert response.status_code == 200
    rotation = response.get_json()["rotation"]
    assert rotation["player_minutes"]["p1"] == 2
    assert rotation["player_minutes"]["p6"] == 2

    response = client.post(
        "/api/games/g1/substitution",
        json={"quarter": 2, "swap": 1, "player_out": "p2", "player_in": "p7"},
    )
    assert response.status_code == 400

    response = client.put("/api/games/g1/rotations/1/1/minutes", json={"player_id": "p2", "minutes": 9})
    assert response.status_code == 400
    response = client.put("/api/games/g1/rotations/1/1/minutes", json={"player_id": "p2", "minutes": 3})
    assert response.get_json()["rotation"]["player_minutes"]["p2"] == 3

    game = client.post("/api/games/g1/advance").get_json()["game"]
    assert (game["current_quarter"], game["current_swap"]) == (1, 2)

    game = client.post("/api/games/g1/end").get_json()["game"]
    assert game["status"] == "completed"


def test_optimize_and_manual_overrides(client):
    response = client.put("/api/games/g1/manual/1/1", json={"player_ids": ["p7", "p6"]})
    assert response.get_json()["player_ids"] == ["p7", "p6"]

    response = client.post("/api/games/g1/manual/1/1/toggle", json={"player_id": "p5"})
    assert response.get_json()["player_ids"] == ["p7", "p6", "p5"]

    response = client.put("/api/games/g1/manual/1/2", json={"player_ids": ["ghost"]})
    assert response.status_code == 400

    response = client.post("/api/games/g1/optimize", json={"strategy": "manual"})
    optimization = response.get_json()["optimization"]
    assert len(optimization["rotations"]) == 8
    assert optimization["rotations"][0]["player_ids"] == ["p7", "p6", "p5"]

    manual = client.get("/api/games/g1/manual").get_json()["manual_rotations"]
    assert len(manual) == 8

    assert client.delete("/api/games/g1/manual/1/1").get_json()["cleared"] is True
    assert client.delete("/api/games/g1/manual/1/1").get_json()["cleared"] is False

    response = client.post("/api/games/g1/optimize", json={"strategy": "simple"})
    assert response.get_json()["optimization"]["fairness_score"] >= 0


def test_game_crud_and_player_stats(client):
    response = client.post("/api/games", json={"opponent": "Owls", "date": "2024-03-01"})
    assert response.status_code == 201
    game_id = response.get_json()["game"]["id"]

    response = client.post(f"/api/games/{game_id}/attendance", json={"player_ids": ["p1", "p2"]})
    assert response.get_json()["game"]["attendance"] == ["p1", "p2"]
    response = client.post(f"/api/games/{game_id}/start")
    assert response.get_json()["game"]["status"] == "in-progress"

    response = client.post(f"/api/games/{game_id}/players/p1/stats", json={"stat": "made_3pt"})
    assert response.get_json()["stats"]["made_3pt"] == 1
    response = client.put(f"/api/games/{game_id}/players/p2/swaps", json={"swaps_attended": 4})
    assert response.get_json()["stats"]["swaps_attended"] == 4
    response = client.put(f"/api/games/{game_id}/players/p2/swaps", json={})
    assert response.status_code == 400

    assert len(client.get("/api/games").get_json()["games"]) == 2
    assert client.delete(f"/api/games/{game_id}").status_code == 200
    assert client.get(f"/api/games/{game_id}").status_code == 404
