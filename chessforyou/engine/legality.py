"""Legal destinations: raw generators filtered by king safety, plus castling."""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from .board import KING_HOME_FILE, Board
from .check import is_check, is_square_attacked
from .generators import generate
from .piece import Color, Piece, PieceKind
from .square import Square


def _leaves_king_safe(board: Board, origin: Square, to: Square, piece: Piece) -> bool:
    promote_to = None
    if piece.kind is PieceKind.PAWN and to.rank == piece.color.promotion_rank:
        promote_to = Piece(piece.color, PieceKind.QUEEN)
    # Simulate from the mover's side so its own king is the one verified
    simulated = board.move(origin, to, promote_to, keep_side=True)
    return not is_check(simulated)


def legal_moves(board: Board, origin: Square) -> Set[Square]:
    """Return the legal destinations of the piece on ``origin``.

    Every raw candidate is played on a copy of the board and dropped if it
    leaves the mover's own king attacked. Kings additionally get castling
    destinations. An empty ``origin`` has no moves.
    """
    piece = board.get(origin)
    if piece is None:
        return set()
    result = {to for to in generate(board, origin) if _leaves_king_safe(board, origin, to, piece)}
    if piece.kind is PieceKind.KING:
        result |= castling_moves(board, origin)
    return result


def castling_moves(board: Board, origin: Square) -> Set[Square]:
    """Return the castling destinations available to the king on ``origin``."""
    king = board.get(origin)
    if king is None or king.kind is not PieceKind.KING:
        return set()
    color = king.color
    if origin != Square(color.home_rank, KING_HOME_FILE):
        return set()
    sides = [(kingside, d) for kingside, d in ((True, 1), (False, -1)) if board.can_castle(color, kingside)]
    if not sides:
        return set()
    if is_square_attacked(board, origin, color.opponent()):
        return set()

    result: Set[Square] = set()
    for _, direction in sides:
        destination = _castle_destination(board, origin, color, direction)
        if destination is not None:
            result.add(destination)
    return result


def _castle_destination(board: Board, origin: Square, color: Color, direction: int) -> Optional[Square]:
    corner = Square(origin.rank, "h" if direction > 0 else "a")
    rook = Piece(color, PieceKind.ROOK)
    opponent = color.opponent()
    square = origin.step(0, direction)
    while square is not None:
        occupant = board.get(square)
        if occupant is not None:
            if square == corner and occupant == rook:
                return origin.step(0, 2 * direction)
            return None
        if is_square_attacked(board, square, opponent):
            return None
        square = square.step(0, direction)
    return None


def all_legal_moves(board: Board) -> Dict[Tuple[Piece, Square], Set[Square]]:
    """Legal destinations for every occupied square, both colors."""
    return {(piece, sq): legal_moves(board, sq) for sq, piece in board.placement.items()}


def allowed_positions(board: Board) -> Dict[str, List[str]]:
    """Origin square name -> sorted destination names, as cached by a game."""
    return {
        str(sq): sorted(str(to) for to in moves)
        for (_, sq), moves in sorted(all_legal_moves(board).items(), key=lambda item: item[0][1])
    }
