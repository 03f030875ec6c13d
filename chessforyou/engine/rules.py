from __future__ import annotations

from enum import Enum

from .board import Board
from .check import is_check
from .legality import legal_moves


class Outcome(Enum):
    NONE = "none"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def is_terminal(board: Board) -> bool:
    """Return True if no piece of the side to move has a legal destination.

    Mate and stalemate are told apart by combining this with ``is_check``.
    """
    return not any(legal_moves(board, sq) for sq, _ in board.pieces(board.side_to_move))


def outcome(board: Board) -> Outcome:
    in_check = is_check(board)
    if is_terminal(board):
        return Outcome.CHECKMATE if in_check else Outcome.STALEMATE
    return Outcome.CHECK if in_check else Outcome.NONE
