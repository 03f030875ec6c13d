from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .board import Board
from .check import is_check
from .legality import allowed_positions
from .movement import execute
from .piece import Color, Piece, PieceKind
from .rules import is_terminal
from .square import Square


class GameStatus(Enum):
    IN_PROGRESS = "InProgress"
    CHECK = "Check"
    CHECK_MATE = "CheckMate"
    STALE_MATE = "StaleMate"
    # Reserved for the surrounding application, never set by the engine
    DRAW = "Draw"
    RESIGNATION = "Resignation"
    TIMEOUT = "Timeout"


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: hold the current board and players, play moves through
    the movement executor, and keep status and the allowed-destination hint
    map in sync after every move.
    """

    white_player_id: str
    black_player_id: str
    board: Board = field(default_factory=Board.initial)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    is_check: bool = False
    is_check_mate_or_stale_mate: bool = False
    status: GameStatus = GameStatus.IN_PROGRESS
    winner_id: Optional[str] = None
    allowed_positions: Dict[str, List[str]] = field(default_factory=dict)
    move_history: List[str] = field(default_factory=list)

    @classmethod
    def new(cls, white_player_id: str, black_player_id: str) -> "Game":
        game = cls(white_player_id=white_player_id, black_player_id=black_player_id)
        game.refresh()
        return game

    @classmethod
    def from_fen(cls, white_player_id: str, black_player_id: str, fen: str) -> "Game":
        game = cls(
            white_player_id=white_player_id,
            black_player_id=black_player_id,
            board=Board.from_fen(fen),
        )
        game.refresh()
        return game

    def to_fen(self) -> str:
        return self.board.to_fen()

    @property
    def is_over(self) -> bool:
        return self.status in (GameStatus.CHECK_MATE, GameStatus.STALE_MATE)

    def apply_move(self, from_sq: Square, to_sq: Square, promotion: Optional[Piece] = None) -> None:
        """Play a move, then refresh status and hints.

        Raises:
            MoveError: If the move is illegal; the game is left unchanged.
        """
        mover = self.board.get(from_sq)
        self.board = execute(self.board, from_sq, to_sq, promotion)
        promoted = (
            mover is not None
            and mover.kind is PieceKind.PAWN
            and to_sq.rank == mover.color.promotion_rank
        )
        suffix = promotion.kind.value if promoted and promotion is not None else ""
        self.move_history.append(f"{from_sq}{to_sq}{suffix}")
        self.refresh()

    def refresh(self) -> None:
        """Recompute check/terminal flags, status, winner and the hint map."""
        self.is_check = is_check(self.board)
        self.is_check_mate_or_stale_mate = is_terminal(self.board)
        self.update_status(self.is_check, self.is_check_mate_or_stale_mate)
        self.allowed_positions = allowed_positions(self.board)

    def update_status(self, in_check: bool, terminal: bool) -> None:
        if in_check and terminal:
            self.status = GameStatus.CHECK_MATE
            if self.board.side_to_move is Color.WHITE:
                self.winner_id = self.black_player_id
            else:
                self.winner_id = self.white_player_id
        elif terminal:
            self.status = GameStatus.STALE_MATE
        elif in_check:
            self.status = GameStatus.CHECK
        else:
            self.status = GameStatus.IN_PROGRESS
