"""Square value type and coordinate helpers.

Board layout is rank-major with row 0 holding rank 8, matching FEN order:

    row 0: a8 b8 ... h8
    row 1: a7 b7 ... h7
    ...
    row 7: a1 b1 ... h1

Squares are interned: every ``(row, col)`` pair maps to one shared instance,
obtained through :func:`square_at` or :func:`parse_square`.
"""

from __future__ import annotations

from dataclasses import dataclass

FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Square:
    """Immutable board coordinate. Equal iff both row and col match."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise ValueError(f"Square out of bounds: ({self.row}, {self.col})")

    @property
    def index(self) -> int:
        """Flat 0-63 index, a8=0 ... h1=63."""
        return self.row * 8 + self.col

    @property
    def file_char(self) -> str:
        return FILES[self.col]

    @property
    def rank(self) -> int:
        """Rank number 1-8."""
        return 8 - self.row

    @property
    def name(self) -> str:
        return square_name(self)

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if 0 <= row < 8 and 0 <= col < 8:
            return _SQUARES[row * 8 + col]
        return None

    def __str__(self) -> str:
        return square_name(self)


_SQUARES: tuple[Square, ...] = tuple(Square(i >> 3, i & 7) for i in range(64))


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_at(row: int, col: int) -> Square:
    """Interned square for *row*, *col*."""
    if not in_bounds(row, col):
        raise ValueError(f"Square out of bounds: ({row}, {col})")
    return _SQUARES[row * 8 + col]


def square_from_index(index: int) -> Square:
    return _SQUARES[index]


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(4, 4)`` -> ``'e4'``."""
    return FILES[sq.col] + str(8 - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` -> ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return _SQUARES[(8 - int(name[1])) * 8 + FILES.index(name[0])]
