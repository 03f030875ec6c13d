from __future__ import annotations

import threading

import pytest

from chessforyou.application.errors import AlreadyExistsError, NotFoundError
from chessforyou.application.player_service import Player
from chessforyou.engine.game import Game
from chessforyou.infrastructure.repositories import InMemoryGameRepository, InMemoryPlayerRepository


def test_player_repository_indexes_by_id_and_name() -> None:
    repo = InMemoryPlayerRepository()
    player = repo.add(Player(user_name="anna"))
    assert repo.get_by_id(player.id) is player
    assert repo.get_by_user_name("anna") is player
    with pytest.raises(NotFoundError, match="not found"):
        repo.get_by_id("missing")


def test_player_repository_rejects_taken_user_name() -> None:
    repo = InMemoryPlayerRepository()
    first = repo.add(Player(user_name="anna"))
    with pytest.raises(AlreadyExistsError, match="anna already exists"):
        repo.add(Player(user_name="anna"))
    assert repo.get_by_user_name("anna") is first
    # Storing the same player again is an upsert, not a conflict
    assert repo.add(first) is first


def test_player_repository_concurrent_same_name_only_one_wins() -> None:
    repo = InMemoryPlayerRepository()
    created, conflicts = [], []

    def worker() -> None:
        try:
            created.append(repo.add(Player(user_name="race")))
        except AlreadyExistsError:
            conflicts.append(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(created) == 1
    assert len(conflicts) == 7
    assert repo.get_by_user_name("race") is created[0]


def test_game_repository_add_and_get() -> None:
    repo = InMemoryGameRepository()
    game = repo.add(Game.new("w", "b"))
    assert repo.get(game.id) is game
    with pytest.raises(NotFoundError, match="Game with id missing not found"):
        repo.get("missing")


def test_game_repository_concurrent_adds() -> None:
    repo = InMemoryGameRepository()
    games = [Game("w", "b") for _ in range(50)]

    def worker(chunk):
        for g in chunk:
            repo.add(g)

    threads = [threading.Thread(target=worker, args=(games[i::5],)) for i in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    for g in games:
        assert repo.get(g.id) is g
