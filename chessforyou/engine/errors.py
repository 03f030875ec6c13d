from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .square import Square


class MoveError(ValueError):
    """A requested move is not legal on the given board.

    Attributes:
        from_sq (Square): Origin of the attempted move.
        to_sq (Square): Destination of the attempted move.
    """

    def __init__(self, from_sq: "Square", to_sq: "Square", message: Optional[str] = None) -> None:
        self.from_sq = from_sq
        self.to_sq = to_sq
        super().__init__(message or f"Move from {from_sq} to {to_sq} is not allowed")


class PromotionError(MoveError):
    """A pawn reaches its last rank without a valid promotion piece."""


class InvalidPromotionError(PromotionError):
    """The requested promotion piece is not a queen, rook, bishop or knight of the mover."""


class InvalidBoardState(RuntimeError):
    """Internal consistency violation, e.g. a missing king.

    Signals a bug rather than bad input and is never handled by the engine.
    """
