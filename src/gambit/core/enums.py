"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        return "w" if self == Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingSide(IntEnum):
    KINGSIDE = 0
    QUEENSIDE = 1


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def of(color: Color, side: CastlingSide) -> CastlingRights:
        """The single flag for *color* castling on *side*."""
        if color == Color.WHITE:
            if side == CastlingSide.KINGSIDE:
                return CastlingRights.WHITE_KINGSIDE
            return CastlingRights.WHITE_QUEENSIDE
        if side == CastlingSide.KINGSIDE:
            return CastlingRights.BLACK_KINGSIDE
        return CastlingRights.BLACK_QUEENSIDE

    @staticmethod
    def both(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_BOTH
        return CastlingRights.BLACK_BOTH


class GameStatus(Enum):
    """States of the per-position status machine.

    ``RESIGNED`` and ``TIMEOUT`` are never produced by the classifier; they are
    forced from outside and freeze the game until the next reset.
    """

    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_REPETITION = "draw_repetition"
    DRAW_50MOVE = "draw_50move"
    RESIGNED = "resigned"
    TIMEOUT = "timeout"

    @property
    def is_terminal(self) -> bool:
        return self not in (GameStatus.ACTIVE, GameStatus.CHECK)

    @property
    def is_draw(self) -> bool:
        return self in (
            GameStatus.STALEMATE,
            GameStatus.DRAW_REPETITION,
            GameStatus.DRAW_50MOVE,
        )

    @property
    def is_forced(self) -> bool:
        """Terminal states set externally rather than by the rules."""
        return self in (GameStatus.RESIGNED, GameStatus.TIMEOUT)

    def __str__(self) -> str:
        return self.value


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
