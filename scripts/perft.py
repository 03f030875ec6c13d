#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `chessforyou/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from chessforyou.engine.board import Board, STARTPOS_FEN
from chessforyou.engine.legality import legal_moves
from chessforyou.engine.piece import PROMOTION_KINDS, Piece, PieceKind
from chessforyou.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Count legal move tree nodes for a FEN and depth")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print node counts per root move"
    )
    args = parser.parse_args()

    try:
        board = Board.from_fen(args.fen)
    except ValueError as e:
        parser.error(f"invalid FEN: {e}")

    start = time.perf_counter()
    if args.divide and args.depth > 0:
        nodes = 0
        for from_sq, piece in sorted(board.pieces(board.side_to_move), key=lambda item: item[0]):
            for to_sq in sorted(legal_moves(board, from_sq)):
                promoting = piece.kind is PieceKind.PAWN and to_sq.rank == piece.color.promotion_rank
                for kind in PROMOTION_KINDS if promoting else (None,):
                    promote_to = Piece(piece.color, kind) if kind is not None else None
                    count = perft(board.move(from_sq, to_sq, promote_to), args.depth - 1)
                    nodes += count
                    print(f"{from_sq}{to_sq}{kind.value if kind else ''}: {count}")
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
