from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ..engine.errors import MoveError
from ..engine.game import Game
from ..engine.piece import Piece, PieceKind
from ..engine.square import Square
from .errors import parse_uuid

if TYPE_CHECKING:  # pragma: no cover
    from ..infrastructure.repositories import InMemoryGameRepository, InMemoryPlayerRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateGameCmd:
    white_player_id: str
    black_player_id: str


@dataclass(frozen=True)
class MoveCmd:
    """Move request as received from a caller, still in text form."""

    game_id: str
    from_square: str
    to_square: str
    promote: Optional[str] = None


class GameAppService:
    """Create games, fetch them, and play moves on them.

    ``move_piece`` is a read-modify-write of a whole game, so moves are
    serialized behind a lock.
    """

    def __init__(
        self,
        game_repository: "InMemoryGameRepository",
        player_repository: "InMemoryPlayerRepository",
    ) -> None:
        self.game_repository = game_repository
        self.player_repository = player_repository
        self._lock = threading.RLock()

    def create(self, cmd: CreateGameCmd) -> Game:
        white_id = parse_uuid(cmd.white_player_id, "White Player")
        black_id = parse_uuid(cmd.black_player_id, "Black Player")
        white = self.player_repository.get_by_id(white_id)
        black = self.player_repository.get_by_id(black_id)

        game = self.game_repository.add(Game.new(white.id, black.id))
        logger.info(
            "game created",
            extra={"game_id": game.id, "white_player_id": white.id, "black_player_id": black.id},
        )
        return game

    def get(self, game_id: str) -> Game:
        return self.game_repository.get(parse_uuid(game_id, "Game"))

    def move_piece(self, cmd: MoveCmd) -> Game:
        """Validate and play ``cmd``; the stored game only changes on success.

        Raises:
            InvalidIdentifierError: If the game id is not a UUID.
            NotFoundError: If the game does not exist.
            ValueError: If a square or promotion name is malformed.
            MoveError: If the move is illegal.
        """
        game_id = parse_uuid(cmd.game_id, "Game")
        from_sq = Square.parse(cmd.from_square)
        to_sq = Square.parse(cmd.to_square)

        with self._lock:
            game = self.game_repository.get(game_id)
            promotion = None
            if cmd.promote:
                promotion = Piece(game.board.side_to_move, PieceKind.from_name(cmd.promote))
            try:
                game.apply_move(from_sq, to_sq, promotion)
            except MoveError as e:
                logger.warning("move rejected", extra={"game_id": game_id, "reason": str(e)})
                raise
            self.game_repository.add(game)

        logger.info(
            "move executed",
            extra={"game_id": game_id, "move": game.move_history[-1], "status": game.status.value},
        )
        return game
