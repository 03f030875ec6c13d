from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import InvalidBoardState, PromotionError
from .piece import Color, Piece, PieceKind
from .square import FILES, Square


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

CASTLING_ORDER = "KQkq"

KING_HOME_FILE = "e"

# Castling right letter -> (color, rook corner square)
_CASTLING_CORNERS: Dict[str, Tuple[Color, Square]] = {
    "K": (Color.WHITE, Square(1, "h")),
    "Q": (Color.WHITE, Square(1, "a")),
    "k": (Color.BLACK, Square(8, "h")),
    "q": (Color.BLACK, Square(8, "a")),
}


def castling_letter(color: Color, kingside: bool) -> str:
    letter = "K" if kingside else "Q"
    return letter if color is Color.WHITE else letter.lower()


@dataclass(frozen=True)
class Board:
    """Immutable board state with FEN I/O.

    Notes:
    - ``placement`` is sparse: empty squares are absent.
    - Every move produces a new Board; instances are never mutated.
    - ``castling`` holds explicit rights as a subset of ``"KQkq"``.
    """

    placement: Dict[Square, Piece] = field(default_factory=dict, hash=False)
    side_to_move: Color = Color.WHITE
    en_passant: Optional[Square] = None
    castling: str = ""
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> "Board":
        """Create a board initialized to the standard chess starting position."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string describing the position to load.

        Returns:
            Board: Board initialized with the state encoded in ``fen``.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid piece placement, king count, castling rights,
                en passant square, or move counters.

        Notes:
            Castling rights are normalized to ``KQkq`` order, and rights whose
            king or rook is not on its home square are dropped.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement_str, stm, castling, ep, halfmove, fullmove = parts

        ranks = placement_str.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        placement: Dict[Square, Piece] = {}
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    piece = Piece.from_symbol(ch)
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    placement[Square(rank_idx + 1, FILES[file_idx])] = piece
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        for color in Color:
            kings = sum(1 for p in placement.values() if p == Piece(color, PieceKind.KING))
            if kings != 1:
                raise ValueError(f"FEN must have exactly one {color.display_name} king")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")

        if castling != "-":
            for ch in castling:
                if ch not in CASTLING_ORDER:
                    raise ValueError("invalid castling rights")
            castling = "".join(c for c in CASTLING_ORDER if c in castling)
        else:
            castling = ""
        castling = _sanitize_castling(placement, castling)

        en_passant: Optional[Square]
        if ep == "-":
            en_passant = None
        else:
            try:
                en_passant = Square.parse(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            if en_passant.rank not in (3, 6):
                raise ValueError("invalid en passant square rank")

        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")

        return cls(
            placement=placement,
            side_to_move=Color(stm),
            en_passant=en_passant,
            castling=castling,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def to_fen(self) -> str:
        """Serialize the position into a normalized FEN string."""
        ranks_str: List[str] = []
        for rank in range(8, 0, -1):
            run = 0
            row = []
            for file in FILES:
                piece = self.placement.get(Square(rank, file))
                if piece is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(piece.symbol)
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        placement = "/".join(ranks_str)

        castling = self.castling if self.castling else "-"
        ep = str(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"{placement} {self.side_to_move.value} {castling} {ep} "
            f"{self.halfmove_clock} {self.fullmove_number}"
        )

    # --- Queries ---
    def get(self, square: Square) -> Optional[Piece]:
        return self.placement.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.placement

    def pieces(self, color: Color) -> List[Tuple[Square, Piece]]:
        """Return ``(square, piece)`` pairs for every piece of ``color``."""
        return [(sq, p) for sq, p in self.placement.items() if p.color is color]

    def king_square(self, color: Color) -> Square:
        """Return the square of ``color``'s king.

        Raises:
            InvalidBoardState: If ``color`` has no king on the board.
        """
        king = Piece(color, PieceKind.KING)
        for sq, piece in self.placement.items():
            if piece == king:
                return sq
        raise InvalidBoardState(f"Board in invalid state: no king for color {color.display_name}")

    def can_castle(self, color: Color, kingside: bool) -> bool:
        return castling_letter(color, kingside) in self.castling

    # --- Raw mutation ---
    def move(
        self,
        from_sq: Square,
        to_sq: Square,
        promote_to: Optional[Piece] = None,
        *,
        keep_side: bool = False,
    ) -> "Board":
        """Return a new Board with the piece on ``from_sq`` relocated to ``to_sq``.

        Legality is not checked. Handles captures, en passant removal of the
        passed pawn, the rook hop of a castling king, promotion placement,
        castling-rights revocation, the en passant target and move counters.

        Args:
            from_sq (Square): Square holding the moving piece.
            to_sq (Square): Destination square.
            promote_to (Optional[Piece]): Piece placed when a pawn reaches its
                last rank; ignored otherwise.
            keep_side (bool): Leave the moving piece's color to move, used to
                simulate candidates for king-safety tests.

        Raises:
            InvalidBoardState: If ``from_sq`` is empty.
            PromotionError: If a pawn reaches its last rank and ``promote_to``
                is None.
        """
        piece = self.placement.get(from_sq)
        if piece is None:
            raise InvalidBoardState(f"There is no piece at position {from_sq}")
        color = piece.color

        placement = dict(self.placement)
        del placement[from_sq]
        captured = placement.get(to_sq)
        captured_sq = to_sq

        if piece.kind is PieceKind.PAWN:
            if to_sq == self.en_passant and captured is None and to_sq.file != from_sq.file:
                passed_sq = to_sq.step(-color.forward, 0)
                if passed_sq is not None:
                    captured = placement.pop(passed_sq, None)
                    captured_sq = passed_sq
            if to_sq.rank == color.promotion_rank:
                if promote_to is None:
                    raise PromotionError(
                        from_sq, to_sq, "It is a promotion but no option was provided to promote to."
                    )
                piece = promote_to
        elif piece.kind is PieceKind.KING and abs(to_sq.file_index - from_sq.file_index) == 2:
            direction = 1 if to_sq.file_index > from_sq.file_index else -1
            rook_from = Square(from_sq.rank, "h" if direction > 0 else "a")
            rook = placement.pop(rook_from, None)
            if rook is None:
                raise InvalidBoardState(f"Castling without a rook on {rook_from}")
            rook_to = from_sq.step(0, direction)
            if rook_to is None:
                raise InvalidBoardState(f"Castling king on {from_sq} has no square for the rook")
            placement[rook_to] = rook

        placement[to_sq] = piece

        en_passant: Optional[Square] = None
        moved = self.placement[from_sq]
        if moved.kind is PieceKind.PAWN and abs(to_sq.rank - from_sq.rank) == 2:
            en_passant = from_sq.step(color.forward, 0)

        resets_clock = moved.kind is PieceKind.PAWN or captured is not None
        return Board(
            placement=placement,
            side_to_move=color if keep_side else color.opponent(),
            en_passant=en_passant,
            castling=_update_castling_rights_on_move(
                self.castling, moved, from_sq, captured, captured_sq
            ),
            halfmove_clock=0 if resets_clock else self.halfmove_clock + 1,
            fullmove_number=self.fullmove_number + (1 if color is Color.BLACK else 0),
        )

    def __str__(self) -> str:
        lines = []
        for rank in range(8, 0, -1):
            row = []
            for file in FILES:
                piece = self.placement.get(Square(rank, file))
                row.append(piece.symbol if piece else ".")
            lines.append(f"{rank} {' '.join(row)}")
        lines.append("  " + " ".join(FILES))
        return "\n".join(lines)


def _update_castling_rights_on_move(
    castling: str,
    moved: Piece,
    from_sq: Square,
    captured: Optional[Piece],
    captured_sq: Square,
) -> str:
    """Drop rights on king moves, rook moves off a corner and rook captures on a corner."""
    if not castling:
        return castling
    rights = set(castling)
    for letter, (color, corner) in _CASTLING_CORNERS.items():
        if moved.color is color:
            if moved.kind is PieceKind.KING:
                rights.discard(letter)
            elif moved.kind is PieceKind.ROOK and from_sq == corner:
                rights.discard(letter)
        if (
            captured is not None
            and captured == Piece(color, PieceKind.ROOK)
            and captured_sq == corner
        ):
            rights.discard(letter)
    return "".join(c for c in CASTLING_ORDER if c in rights)


def _sanitize_castling(placement: Dict[Square, Piece], castling: str) -> str:
    kept = []
    for letter in castling:
        color, corner = _CASTLING_CORNERS[letter]
        king_home = Square(color.home_rank, KING_HOME_FILE)
        if placement.get(king_home) == Piece(color, PieceKind.KING) and placement.get(
            corner
        ) == Piece(color, PieceKind.ROOK):
            kept.append(letter)
    return "".join(kept)
