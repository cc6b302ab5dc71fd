"""Move value object.

A :class:`Move` built by hand (or by :meth:`Move.from_uci`) is only a
*proposal*: it may omit ``piece`` and the special-move fields.  Moves produced
by :class:`~gambit.core.move_generator.MoveGenerator` are fully populated, and
moves stored in a game's history additionally carry their SAN text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from gambit.core.enums import CastlingSide, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_CHARS_REV: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    piece: Piece | None = None
    captured: Piece | None = None
    promotion: PieceType | None = None
    castling_side: CastlingSide | None = None
    is_en_passant: bool = False
    san: str | None = None

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.castling_side is not None

    def matches(self, other: Move) -> bool:
        """Same origin, destination and promotion choice."""
        return (
            self.from_sq == other.from_sq
            and self.to_sq == other.to_sq
            and self.promotion == other.promotion
        )

    def with_san(self, san: str) -> Move:
        return replace(self, san=san)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Build a move proposal from long algebraic text, e.g. ``'e7e8q'``."""
        text = text.strip()
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = _PROMO_CHARS_REV.get(text[4].lower())
            if promotion is None:
                raise ValueError(f"Invalid UCI promotion piece: {text!r}")
        return cls(parse_square(text[0:2]), parse_square(text[2:4]), promotion=promotion)
