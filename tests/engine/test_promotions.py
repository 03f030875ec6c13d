from __future__ import annotations

import pytest

from chessforyou.engine.board import Board
from chessforyou.engine.errors import InvalidPromotionError, MoveError, PromotionError
from chessforyou.engine.movement import execute
from chessforyou.engine.piece import Color, Piece, PieceKind
from chessforyou.engine.square import Square


def sq(text: str) -> Square:
    return Square.parse(text)


def test_push_to_last_rank_requires_promotion() -> None:
    b = Board.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(PromotionError) as excinfo:
        execute(b, sq("e7"), sq("e8"))
    assert "no option was provided" in str(excinfo.value)
    assert isinstance(excinfo.value, MoveError)
    assert b.get(sq("e7")) == Piece(Color.WHITE, PieceKind.PAWN)


def test_promotion_to_queen_places_mover_queen() -> None:
    b = Board.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    after = execute(b, sq("e7"), sq("e8"), Piece(Color.WHITE, PieceKind.QUEEN))
    assert after.get(sq("e8")) == Piece(Color.WHITE, PieceKind.QUEEN)
    assert after.is_empty(sq("e7"))
    assert after.side_to_move is Color.BLACK


@pytest.mark.parametrize("kind", [PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT])
def test_capture_promotion_underpromotes(kind: PieceKind) -> None:
    b = Board.from_fen("3rk3/4P3/8/8/8/8/8/4K3 w - - 0 1")
    after = execute(b, sq("e7"), sq("d8"), Piece(Color.WHITE, kind))
    assert after.get(sq("d8")) == Piece(Color.WHITE, kind)


def test_black_pawn_promotes_on_first_rank() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/3p4/7K b - - 0 1")
    after = execute(b, sq("d2"), sq("d1"), Piece(Color.BLACK, PieceKind.KNIGHT))
    assert after.get(sq("d1")) == Piece(Color.BLACK, PieceKind.KNIGHT)


@pytest.mark.parametrize(
    "promotion",
    [
        Piece(Color.WHITE, PieceKind.KING),
        Piece(Color.WHITE, PieceKind.PAWN),
        Piece(Color.BLACK, PieceKind.QUEEN),
    ],
)
def test_invalid_promotion_piece_rejected(promotion: Piece) -> None:
    b = Board.from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(InvalidPromotionError, match="is not a valid promotion option"):
        execute(b, sq("e7"), sq("e8"), promotion)


def test_promotion_argument_ignored_on_ordinary_move() -> None:
    b = Board.initial()
    after = execute(b, sq("e2"), sq("e4"), Piece(Color.WHITE, PieceKind.QUEEN))
    assert after.get(sq("e4")) == Piece(Color.WHITE, PieceKind.PAWN)
