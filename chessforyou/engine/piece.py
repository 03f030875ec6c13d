from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank direction pawns of this color advance in."""
        return 1 if self is Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Back rank holding this color's king and rooks at the start."""
        return 1 if self is Color.WHITE else 8

    @property
    def pawn_rank(self) -> int:
        return 2 if self is Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        return 8 if self is Color.WHITE else 1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class PieceKind(Enum):
    KING = "k"
    QUEEN = "q"
    ROOK = "r"
    BISHOP = "b"
    KNIGHT = "n"
    PAWN = "p"

    @classmethod
    def from_name(cls, name: str) -> "PieceKind":
        """Parse a piece kind from its name (``"Queen"``) or letter (``"q"``).

        Raises:
            ValueError: If ``name`` does not name a piece kind.
        """
        if isinstance(name, str):
            key = name.strip().lower()
            for kind in cls:
                if key == kind.value or key == kind.name.lower():
                    return kind
        raise ValueError(f"Piece {name!r} is not valid")

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)


@dataclass(frozen=True)
class Piece:
    """A colored piece. Placement is owned by the board, not the piece."""

    color: Color
    kind: PieceKind

    @property
    def symbol(self) -> str:
        """FEN letter, uppercase for white."""
        return self.kind.value.upper() if self.color is Color.WHITE else self.kind.value

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        if len(ch) != 1 or ch.lower() not in "kqrbnp":
            raise ValueError(f"invalid piece in FEN: {ch!r}")
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(color, PieceKind(ch.lower()))

    def __str__(self) -> str:
        return f"{self.color.display_name} {self.kind.display_name}"
