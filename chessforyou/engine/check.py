from __future__ import annotations

from .board import Board
from .generators import attacks
from .piece import Color
from .square import Square


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Return True if any piece of ``by_color`` attacks ``square``.

    Runs each of ``by_color``'s attack patterns and stops on the first hit.
    The patterns are the raw (unfiltered) generators, so this never recurses
    into legality filtering.
    """
    for origin, _ in board.pieces(by_color):
        if square in attacks(board, origin):
            return True
    return False


def is_check(board: Board) -> bool:
    """Return True if the side to move's king is attacked.

    Raises:
        InvalidBoardState: If the side to move has no king.
    """
    color = board.side_to_move
    return is_square_attacked(board, board.king_square(color), color.opponent())
