from __future__ import annotations

from .board import Board
from .legality import legal_moves
from .piece import PROMOTION_KINDS, Piece, PieceKind


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1),
      counting each promotion piece as its own child.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for from_sq, piece in board.pieces(board.side_to_move):
        for to_sq in legal_moves(board, from_sq):
            promoting = piece.kind is PieceKind.PAWN and to_sq.rank == piece.color.promotion_rank
            if depth == 1:
                nodes += len(PROMOTION_KINDS) if promoting else 1
                continue
            if promoting:
                for kind in PROMOTION_KINDS:
                    child = board.move(from_sq, to_sq, Piece(piece.color, kind))
                    nodes += perft(child, depth - 1)
            else:
                nodes += perft(board.move(from_sq, to_sq), depth - 1)
    return nodes
