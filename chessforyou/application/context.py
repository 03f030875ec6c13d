from __future__ import annotations

from dataclasses import dataclass

from ..infrastructure.repositories import InMemoryGameRepository, InMemoryPlayerRepository
from .game_service import GameAppService
from .player_service import PlayerAppService


@dataclass
class AppContext:
    """Repositories and services for one running application.

    Built once at startup and handed to the protocol layer; nothing here is
    module-global.
    """

    player_repository: InMemoryPlayerRepository
    game_repository: InMemoryGameRepository
    players: PlayerAppService
    games: GameAppService

    @classmethod
    def create(cls) -> "AppContext":
        player_repository = InMemoryPlayerRepository()
        game_repository = InMemoryGameRepository()
        return cls(
            player_repository=player_repository,
            game_repository=game_repository,
            players=PlayerAppService(player_repository),
            games=GameAppService(game_repository, player_repository),
        )
