from __future__ import annotations

from typing import Optional

from .board import Board
from .errors import InvalidPromotionError, MoveError, PromotionError
from .legality import legal_moves
from .piece import PROMOTION_KINDS, Piece, PieceKind
from .square import Square


def execute(
    board: Board, from_sq: Square, to_sq: Square, promotion: Optional[Piece] = None
) -> Board:
    """Play a move and return the resulting board.

    This is the only entry point that performs moves for players: the legal
    destinations of ``from_sq`` are recomputed and ``to_sq`` must be among
    them. ``board`` itself is left unchanged.

    Args:
        board (Board): Current position.
        from_sq (Square): Square of a piece belonging to the side to move.
        to_sq (Square): Requested destination.
        promotion (Optional[Piece]): Queen, rook, bishop or knight of the
            mover's color; required when a pawn reaches its last rank and
            ignored otherwise.

    Returns:
        Board: New position with the side to move flipped.

    Raises:
        MoveError: If ``from_sq`` holds no piece of the side to move or
            ``to_sq`` is not a legal destination.
        PromotionError: If a required promotion is missing.
        InvalidPromotionError: If the promotion piece is not allowed.
    """
    piece = board.get(from_sq)
    if piece is None or piece.color is not board.side_to_move:
        raise MoveError(from_sq, to_sq)
    if to_sq not in legal_moves(board, from_sq):
        raise MoveError(from_sq, to_sq)

    promote_to = None
    if piece.kind is PieceKind.PAWN and to_sq.rank == piece.color.promotion_rank:
        promote_to = _validate_promotion(piece, from_sq, to_sq, promotion)
    return board.move(from_sq, to_sq, promote_to)


def _validate_promotion(
    pawn: Piece, from_sq: Square, to_sq: Square, promotion: Optional[Piece]
) -> Piece:
    if promotion is None:
        raise PromotionError(
            from_sq, to_sq, "It is a promotion but no option was provided to promote to."
        )
    if promotion.color is not pawn.color or promotion.kind not in PROMOTION_KINDS:
        raise InvalidPromotionError(
            from_sq, to_sq, f"{promotion} is not a valid promotion option."
        )
    return promotion
