"""GameState - immutable snapshot of a game at one ply."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameStatus
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class GameState:
    """Full game state: board, side to move, castling, en passant, clocks,
    move history and canonical position history.

    Instances are never mutated.  Every accepted move, undo, redo, resignation
    or timeout produces a new ``GameState``; the board inside is owned by the
    state and is only ever copied, never written to.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    move_history: tuple[Move, ...] = ()
    position_history: tuple[str, ...] = ()
    status: GameStatus = GameStatus.ACTIVE
    ended_by: Color | None = None

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def position_key(self) -> str:
        """Canonical key used for repetition counting (no move counters)."""
        # Transitions always append the successor's key.
        if self.position_history:
            return self.position_history[-1]
        return position_key(self.board, self.turn, self.castling, self.en_passant)

    def repetition_count(self) -> int:
        """How many times the current position key occurred in history."""
        return self.position_history.count(self.position_key)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    def legal_moves(self, color: Color | None = None) -> list[Move]:
        """Legal moves for *color* (default: side to move)."""
        color = self.turn if color is None else color
        return MoveGenerator.for_state(self).generate_legal_moves(color)

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of whatever piece stands on *sq*."""
        return MoveGenerator.for_state(self).legal_moves_from(sq)

    def resolve(self, proposal: Move) -> Move | None:
        """The legal move matching *proposal* by origin, destination and
        promotion, or ``None``.  Only the side to move may move."""
        piece = self.board[proposal.from_sq]
        if piece is None or piece.color != self.turn:
            return None
        gen = MoveGenerator.for_state(self)
        for move in gen.legal_moves_from(proposal.from_sq):
            if proposal.matches(move):
                return move
        return None

    def is_in_check(self, color: Color | None = None) -> bool:
        color = self.turn if color is None else color
        return MoveGenerator.for_state(self).is_in_check(color)

    # ── Forced terminal states ───────────────────────────────────────────

    def resigned(self) -> GameState:
        """Side to move resigns; the board is untouched."""
        return replace(self, status=GameStatus.RESIGNED, ended_by=self.turn)

    def timed_out(self, color: Color) -> GameState:
        """*color* ran out of time; the board is untouched."""
        return replace(self, status=GameStatus.TIMEOUT, ended_by=color)


def castling_field(castling: CastlingRights) -> str:
    """FEN castling-availability field (``KQkq`` subset or ``-``)."""
    text = ""
    if castling & CastlingRights.WHITE_KINGSIDE:
        text += "K"
    if castling & CastlingRights.WHITE_QUEENSIDE:
        text += "Q"
    if castling & CastlingRights.BLACK_KINGSIDE:
        text += "k"
    if castling & CastlingRights.BLACK_QUEENSIDE:
        text += "q"
    return text or "-"


def position_key(
    board: Board,
    turn: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> str:
    """First four FEN fields: placement, side, castling, en passant."""
    ep = en_passant.name if en_passant is not None else "-"
    return f"{board.placement()} {turn.fen_char} {castling_field(castling)} {ep}"
