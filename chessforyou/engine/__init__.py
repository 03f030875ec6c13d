from __future__ import annotations

from .board import STARTPOS_FEN, Board
from .check import is_check, is_square_attacked
from .errors import InvalidBoardState, InvalidPromotionError, MoveError, PromotionError
from .legality import all_legal_moves, allowed_positions, legal_moves
from .movement import execute
from .perft import perft
from .piece import PROMOTION_KINDS, Color, Piece, PieceKind
from .rules import Outcome, is_terminal, outcome
from .square import Square

__all__ = [
    "STARTPOS_FEN",
    "Board",
    "Color",
    "InvalidBoardState",
    "InvalidPromotionError",
    "MoveError",
    "Outcome",
    "PROMOTION_KINDS",
    "Piece",
    "PieceKind",
    "PromotionError",
    "Square",
    "all_legal_moves",
    "allowed_positions",
    "execute",
    "is_check",
    "is_square_attacked",
    "is_terminal",
    "legal_moves",
    "outcome",
    "perft",
]
