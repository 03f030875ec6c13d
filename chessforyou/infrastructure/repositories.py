from __future__ import annotations

import threading
from typing import Dict

from ..application.errors import AlreadyExistsError, NotFoundError
from ..application.player_service import Player
from ..engine.game import Game


class InMemoryPlayerRepository:
    """Thread-safe in-memory player store, indexed by id and by user name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: Dict[str, Player] = {}
        self._by_user_name: Dict[str, Player] = {}

    def add(self, player: Player) -> Player:
        """Store `player` under its id and its unique user name.

        Raises:
            AlreadyExistsError: If another player already has the user name.
        """
        with self._lock:
            existing = self._by_user_name.get(player.user_name)
            if existing is not None and existing.id != player.id:
                raise AlreadyExistsError(f"Player with user name {player.user_name} already exists")
            self._by_id[player.id] = player
            self._by_user_name[player.user_name] = player
        return player

    def get_by_id(self, player_id: str) -> Player:
        with self._lock:
            player = self._by_id.get(player_id)
        if player is None:
            raise NotFoundError(f"Player with id {player_id} not found")
        return player

    def get_by_user_name(self, user_name: str) -> Player:
        with self._lock:
            player = self._by_user_name.get(user_name)
        if player is None:
            raise NotFoundError(f"Player with user name {user_name} not found")
        return player


class InMemoryGameRepository:
    """Thread-safe in-memory game store.

    Responsibilities:
    - Insert or replace a game under its `id`
    - Retrieve existing games by `id`
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def add(self, game: Game) -> Game:
        with self._lock:
            self._games[game.id] = game
        return game

    def get(self, game_id: str) -> Game:
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise NotFoundError(f"Game with id {game_id} not found")
        return game

