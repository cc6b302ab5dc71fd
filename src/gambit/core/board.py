"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core.enums import CastlingSide, Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_at, square_from_index

if TYPE_CHECKING:
    from gambit.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (rook origin col, rook destination col) per castling side.
ROOK_CASTLE_COLS: dict[CastlingSide, tuple[int, int]] = {
    CastlingSide.KINGSIDE: (7, 5),
    CastlingSide.QUEENSIDE: (0, 3),
}


class Board:
    """64-square board stored rank-major (row 0 = rank 8) with a king cache.

    Boards owned by a :class:`~gambit.core.state.GameState` are never mutated;
    every transition works on a :meth:`copy`.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.row * 8 + sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = sq.row * 8 + sq.col
        old_piece = self._squares[idx]
        if (
            old_piece is not None
            and old_piece.kind == PieceType.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._squares[idx] = piece
        if piece is not None and piece.kind == PieceType.KING:
            self._king_squares[piece.color] = sq

    def piece_at(self, row: int, col: int) -> Piece | None:
        return self._squares[row * 8 + col]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq.row * 8 + sq.col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All occupied squares in FEN order."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield square_from_index(idx), piece

    def pieces(self, color: Color) -> list[tuple[Square, Piece]]:
        """Squares and pieces belonging to *color*."""
        return [(sq, piece) for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """The king square for *color*, or ``None`` if the king is missing."""
        return self._king_squares[color]

    def grid(self) -> list[list[Piece | None]]:
        """Fresh 8x8 row-major snapshot (row 0 = rank 8)."""
        return [self._squares[row * 8 : row * 8 + 8] for row in range(8)]

    def placement(self) -> str:
        """FEN piece-placement field."""
        rows: list[str] = []
        for row in range(8):
            empty = 0
            text = ""
            for piece in self._squares[row * 8 : row * 8 + 8]:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    # -- Mutation / copying -------------------------------------------------

    def apply(self, move: Move) -> None:
        """Relocate pieces for *move* in place.

        Handles en-passant pawn removal, promotion and the castling rook.  This
        is the only piece-placement routine: legality checks and real moves
        both go through it, always on a copy of the authoritative board.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        self[move.from_sq] = None
        if move.is_en_passant:
            self[square_at(move.from_sq.row, move.to_sq.col)] = None

        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        self[move.to_sq] = placed

        if move.castling_side is not None:
            row = move.from_sq.row
            rook_from_col, rook_to_col = ROOK_CASTLE_COLS[move.castling_side]
            rook_from = square_at(row, rook_from_col)
            rook = self[rook_from]
            self[rook_from] = None
            self[square_at(row, rook_to_col)] = rook

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b[square_at(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[square_at(1, col)] = Piece(Color.BLACK, PieceType.PAWN)

        for col, kind in enumerate(_BACK_RANK):
            b[square_at(7, col)] = Piece(Color.WHITE, kind)
            b[square_at(0, col)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [
                str(p) if p else "." for p in self._squares[row * 8 : row * 8 + 8]
            ]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
