"""Raw per-piece move generation (king safety ignored) and attack patterns."""

from __future__ import annotations

from typing import Callable, Dict, Set, Tuple

from .board import Board
from .errors import InvalidBoardState
from .piece import Color, Piece, PieceKind
from .square import Square


Offsets = Tuple[Tuple[int, int], ...]

# (d_rank, d_file)
KNIGHT_OFFSETS: Offsets = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))
KING_OFFSETS: Offsets = ((1, 1), (1, -1), (-1, 1), (-1, -1), (1, 0), (0, 1), (-1, 0), (0, -1))
BISHOP_DIRS: Offsets = ((1, 1), (-1, 1), (1, -1), (-1, -1))
ROOK_DIRS: Offsets = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS: Offsets = BISHOP_DIRS + ROOK_DIRS


def _expect(board: Board, origin: Square, kind: PieceKind) -> Piece:
    piece = board.get(origin)
    if piece is None or piece.kind is not kind:
        raise InvalidBoardState(
            f"The piece {piece} at position {origin} is not a {kind.name.lower()}"
        )
    return piece


def _slide(board: Board, origin: Square, color: Color, directions: Offsets) -> Set[Square]:
    targets: Set[Square] = set()
    for d_rank, d_file in directions:
        to = origin.step(d_rank, d_file)
        while to is not None:
            occupant = board.get(to)
            if occupant is None:
                targets.add(to)
            else:
                if occupant.color is not color:
                    targets.add(to)
                break
            to = to.step(d_rank, d_file)
    return targets


def _jump(board: Board, origin: Square, color: Color, offsets: Offsets) -> Set[Square]:
    targets: Set[Square] = set()
    for d_rank, d_file in offsets:
        to = origin.step(d_rank, d_file)
        if to is None:
            continue
        occupant = board.get(to)
        if occupant is None or occupant.color is not color:
            targets.add(to)
    return targets


def bishop_moves(board: Board, origin: Square) -> Set[Square]:
    piece = _expect(board, origin, PieceKind.BISHOP)
    return _slide(board, origin, piece.color, BISHOP_DIRS)


def rook_moves(board: Board, origin: Square) -> Set[Square]:
    piece = _expect(board, origin, PieceKind.ROOK)
    return _slide(board, origin, piece.color, ROOK_DIRS)


def queen_moves(board: Board, origin: Square) -> Set[Square]:
    piece = _expect(board, origin, PieceKind.QUEEN)
    return _slide(board, origin, piece.color, QUEEN_DIRS)


def knight_moves(board: Board, origin: Square) -> Set[Square]:
    piece = _expect(board, origin, PieceKind.KNIGHT)
    return _jump(board, origin, piece.color, KNIGHT_OFFSETS)


def is_king_around(board: Board, square: Square, color: Color) -> bool:
    """Return True if ``color``'s king stands on a square adjacent to ``square``."""
    king = Piece(color, PieceKind.KING)
    for d_rank, d_file in KING_OFFSETS:
        near = square.step(d_rank, d_file)
        if near is not None and board.get(near) == king:
            return True
    return False


def king_moves(board: Board, origin: Square) -> Set[Square]:
    """Adjacent squares, never next to the opponent king. Castling lives in legality."""
    piece = _expect(board, origin, PieceKind.KING)
    opponent = piece.color.opponent()
    return {
        to
        for to in _jump(board, origin, piece.color, KING_OFFSETS)
        if not is_king_around(board, to, opponent)
    }


def pawn_moves(board: Board, origin: Square) -> Set[Square]:
    """Pawn destinations.

    1. One square forward when empty.
    2. Two squares forward from the home rank when both are empty.
    3. Diagonal-forward onto an opponent piece.
    4. Diagonal-forward onto the en passant target when the pawn beside it
       belongs to the opponent.
    """
    piece = _expect(board, origin, PieceKind.PAWN)
    color = piece.color
    forward = color.forward
    targets: Set[Square] = set()

    one = origin.step(forward, 0)
    if one is not None and board.is_empty(one):
        targets.add(one)
        if origin.rank == color.pawn_rank:
            two = one.step(forward, 0)
            if two is not None and board.is_empty(two):
                targets.add(two)

    for d_file in (-1, 1):
        diagonal = origin.step(forward, d_file)
        if diagonal is None:
            continue
        occupant = board.get(diagonal)
        if occupant is not None:
            if occupant.color is not color:
                targets.add(diagonal)
        elif diagonal == board.en_passant:
            beside = origin.step(0, d_file)
            if beside is not None and board.get(beside) == Piece(color.opponent(), PieceKind.PAWN):
                targets.add(diagonal)
    return targets


def pawn_attacks(board: Board, origin: Square) -> Set[Square]:
    piece = _expect(board, origin, PieceKind.PAWN)
    squares = (origin.step(piece.color.forward, -1), origin.step(piece.color.forward, 1))
    return {sq for sq in squares if sq is not None}


def king_attacks(board: Board, origin: Square) -> Set[Square]:
    _expect(board, origin, PieceKind.KING)
    squares = (origin.step(d_rank, d_file) for d_rank, d_file in KING_OFFSETS)
    return {sq for sq in squares if sq is not None}


Generator = Callable[[Board, Square], Set[Square]]

GENERATORS: Dict[PieceKind, Generator] = {
    PieceKind.PAWN: pawn_moves,
    PieceKind.KNIGHT: knight_moves,
    PieceKind.BISHOP: bishop_moves,
    PieceKind.ROOK: rook_moves,
    PieceKind.QUEEN: queen_moves,
    PieceKind.KING: king_moves,
}

# Squares a piece threatens. Pawns threaten diagonals whether or not they are
# occupied, kings threaten every neighbour.
ATTACKS: Dict[PieceKind, Generator] = {
    **GENERATORS,
    PieceKind.PAWN: pawn_attacks,
    PieceKind.KING: king_attacks,
}


def generate(board: Board, origin: Square) -> Set[Square]:
    """Return the squares the piece on ``origin`` can physically reach.

    Raises:
        InvalidBoardState: If ``origin`` is empty.
    """
    piece = board.get(origin)
    if piece is None:
        raise InvalidBoardState(f"There is no piece at position {origin}")
    return GENERATORS[piece.kind](board, origin)


def attacks(board: Board, origin: Square) -> Set[Square]:
    """Return the squares the piece on ``origin`` attacks."""
    piece = board.get(origin)
    if piece is None:
        raise InvalidBoardState(f"There is no piece at position {origin}")
    return ATTACKS[piece.kind](board, origin)
