from __future__ import annotations

from chessforyou.engine.board import Board
from chessforyou.engine.legality import legal_moves
from chessforyou.engine.movement import execute
from chessforyou.engine.piece import Color, Piece, PieceKind
from chessforyou.engine.square import Square


def sq(text: str) -> Square:
    return Square.parse(text)


def king_targets(fen: str, king: str = "e1") -> set[str]:
    b = Board.from_fen(fen)
    return {str(s) for s in legal_moves(b, sq(king))}


def test_white_castling_available_when_clear_and_not_in_check() -> None:
    moves = king_targets("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    assert {"g1", "c1"} <= moves


def test_black_castling_available() -> None:
    moves = king_targets("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1", "e8")
    assert {"g8", "c8"} <= moves


def test_castling_blocked_when_in_check() -> None:
    moves = king_targets("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "g1" not in moves
    assert "c1" not in moves


def test_castling_blocked_when_passing_through_attack() -> None:
    # Black rook on f8 covers f1
    moves = king_targets("5rk1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "g1" not in moves
    assert "c1" in moves


def test_castling_blocked_when_landing_square_attacked() -> None:
    moves = king_targets("6rk/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "g1" not in moves


def test_queenside_walk_includes_b_file() -> None:
    # b1 is attacked by the rook on b8; the walk towards a1 halts there
    moves = king_targets("1r4k1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "c1" not in moves
    assert "g1" in moves


def test_castling_blocked_by_piece_in_between() -> None:
    moves = king_targets("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1")
    assert "g1" not in moves
    assert "c1" not in moves


def test_castling_needs_the_right() -> None:
    moves = king_targets("r3k2r/8/8/8/8/8/8/R3K2R w Qkq - 0 1")
    assert "g1" not in moves
    assert "c1" in moves


def test_castling_moves_rook_and_revokes_rights() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    after = execute(b, sq("e1"), sq("g1"))
    assert after.get(sq("g1")) == Piece(Color.WHITE, PieceKind.KING)
    assert after.get(sq("f1")) == Piece(Color.WHITE, PieceKind.ROOK)
    assert after.is_empty(sq("h1"))
    assert after.castling == "kq"

    after = execute(after, sq("e8"), sq("c8"))
    assert after.get(sq("c8")) == Piece(Color.BLACK, PieceKind.KING)
    assert after.get(sq("d8")) == Piece(Color.BLACK, PieceKind.ROOK)
    assert after.castling == ""


def test_rook_move_loses_right_even_after_returning() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    b = execute(b, sq("h1"), sq("h2"))
    b = execute(b, sq("a8"), sq("a7"))
    b = execute(b, sq("h2"), sq("h1"))
    b = execute(b, sq("a7"), sq("a8"))
    assert b.castling == "Qk"
    assert "g1" not in {str(s) for s in legal_moves(b, sq("e1"))}
