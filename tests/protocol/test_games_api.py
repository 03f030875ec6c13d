from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from chessforyou.protocol.http.app import create_app


def new_client_and_game() -> tuple[TestClient, dict]:
    client = TestClient(create_app())
    white = client.post("/players", json={"user_name": "white"}).json()
    black = client.post("/players", json={"user_name": "black"}).json()
    r = client.post(
        "/games", json={"white_player_id": white["id"], "black_player_id": black["id"]}
    )
    assert r.status_code == 201
    return client, r.json()


def test_create_game_response_shape() -> None:
    _, game = new_client_and_game()
    assert game["status"] == "InProgress"
    assert game["side_to_move"] == "White"
    assert game["fen"] == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    assert game["pieces"]["e1"] == "K"
    assert game["pieces"]["d8"] == "q"
    assert len(game["pieces"]) == 32
    assert game["allowed_positions"]["g1"] == ["f3", "h3"]
    assert game["winner_id"] is None
    assert game["move_history"] == []


def test_create_game_with_unknown_player() -> None:
    client = TestClient(create_app())
    white = client.post("/players", json={"user_name": "white"}).json()
    r = client.post(
        "/games", json={"white_player_id": white["id"], "black_player_id": str(uuid.uuid4())}
    )
    assert r.status_code == 404


def test_play_moves_through_put() -> None:
    client, game = new_client_and_game()
    r = client.put(f"/games/{game['id']}", json={"from": "e2", "to": "e4"})
    assert r.status_code == 200
    body = r.json()
    assert body["side_to_move"] == "Black"
    assert body["move_history"] == ["e2e4"]
    assert "e2" not in body["pieces"]

    r = client.get(f"/games/{game['id']}")
    assert r.json()["fen"].split()[3] == "e3"


def test_fools_mate_over_http() -> None:
    client, game = new_client_and_game()
    for src, dst in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        r = client.put(f"/games/{game['id']}", json={"from": src, "to": dst})
        assert r.status_code == 200
    body = r.json()
    assert body["status"] == "CheckMate"
    assert body["is_check"] is True
    assert body["is_check_mate_or_stale_mate"] is True
    assert body["winner_id"] == game["black_player_id"]


def test_illegal_move_is_bad_request() -> None:
    client, game = new_client_and_game()
    r = client.put(f"/games/{game['id']}", json={"from": "e2", "to": "e5"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "illegal_move"
    assert err["message"] == "Move from e2 to e5 is not allowed"


def test_malformed_square_and_unknown_game() -> None:
    client, game = new_client_and_game()
    r = client.put(f"/games/{game['id']}", json={"from": "z9", "to": "e4"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"

    r = client.put(f"/games/{uuid.uuid4()}", json={"from": "e2", "to": "e4"})
    assert r.status_code == 404

    r = client.get("/games/not-a-uuid")
    assert r.status_code == 400


def test_promotion_over_http() -> None:
    client, game = new_client_and_game()
    moves = [
        ("h2", "h4"), ("g7", "g5"),
        ("h4", "g5"), ("f8", "g7"),
        ("g5", "g6"), ("e7", "e6"),
        ("g6", "h7"), ("a7", "a6"),
    ]
    for src, dst in moves:
        r = client.put(f"/games/{game['id']}", json={"from": src, "to": dst})
        assert r.status_code == 200, r.json()

    r = client.put(f"/games/{game['id']}", json={"from": "h7", "to": "g8"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "promotion_required"

    r = client.put(
        f"/games/{game['id']}", json={"from": "h7", "to": "g8", "promote": "Knight"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["pieces"]["g8"] == "N"
    assert body["move_history"][-1] == "h7g8n"


def test_invalid_promotion_piece_over_http() -> None:
    client, game = new_client_and_game()
    for src, dst in [
        ("h2", "h4"), ("g7", "g5"),
        ("h4", "g5"), ("f8", "g7"),
        ("g5", "g6"), ("e7", "e6"),
        ("g6", "h7"), ("a7", "a6"),
    ]:
        assert client.put(f"/games/{game['id']}", json={"from": src, "to": dst}).status_code == 200

    r = client.put(f"/games/{game['id']}", json={"from": "h7", "to": "g8", "promote": "King"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "invalid_promotion"
    assert err["message"] == "White King is not a valid promotion option."

    r = client.put(f"/games/{game['id']}", json={"from": "h7", "to": "g8", "promote": "Dragon"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"
