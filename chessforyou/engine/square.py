from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


FILES = "abcdefgh"
FIRST_RANK = 1
LAST_RANK = 8


@dataclass(frozen=True, order=True)
class Square:
    """One of the 64 board cells.

    Attributes:
        rank (int): Rank number in range 1..8 (white starts on ranks 1 and 2).
        file (str): File letter in ``"a".."h"``.
    """

    rank: int
    file: str

    def __post_init__(self) -> None:
        if not FIRST_RANK <= self.rank <= LAST_RANK or self.file not in FILES or len(self.file) != 1:
            raise ValueError(f"invalid square: rank={self.rank!r} file={self.file!r}")

    @classmethod
    def parse(cls, text: str) -> "Square":
        """Parse algebraic notation into a square.

        Args:
            text (str): Square name such as ``"e2"``, file letter first.

        Returns:
            Square: Parsed square.

        Raises:
            ValueError: If ``text`` is not exactly a file letter followed by a
                rank digit on the board.
        """
        if not isinstance(text, str) or len(text) != 2:
            raise ValueError(
                f"{text!r} is not a valid square, it must have 2 characters, "
                "file first and rank second, e.g. e2"
            )
        file, rank = text[0], text[1]
        if file not in FILES or rank < "1" or rank > "8":
            raise ValueError(
                f"{text!r} is not a valid square, file must be a..h and rank 1..8"
            )
        return cls(int(rank), file)

    @property
    def file_index(self) -> int:
        return FILES.index(self.file)

    def step(self, d_rank: int, d_file: int) -> Optional["Square"]:
        """Return the square offset by ``(d_rank, d_file)`` or None when off-board."""
        rank = self.rank + d_rank
        file_idx = self.file_index + d_file
        if FIRST_RANK <= rank <= LAST_RANK and 0 <= file_idx < 8:
            return _GRID[rank - 1][file_idx]
        return None

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


# Interned squares, indexed [rank - 1][file index]
_GRID = tuple(
    tuple(Square(rank, file) for file in FILES) for rank in range(FIRST_RANK, LAST_RANK + 1)
)


def all_squares() -> Iterator[Square]:
    """Iterate a1, b1, ..., h8 (rank-major from white's perspective)."""
    for row in _GRID:
        yield from row
