"""State transition: apply a legal move and produce the next GameState."""

from __future__ import annotations

from dataclasses import replace

from gambit.core.enums import CastlingRights, Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.notation.san import move_to_san
from gambit.core.rules import Rules
from gambit.core.state import GameState, position_key
from gambit.core.types import Square, square_at

_ROOK_HOMES: dict[Square, CastlingRights] = {
    square_at(7, 0): CastlingRights.WHITE_QUEENSIDE,
    square_at(7, 7): CastlingRights.WHITE_KINGSIDE,
    square_at(0, 0): CastlingRights.BLACK_QUEENSIDE,
    square_at(0, 7): CastlingRights.BLACK_KINGSIDE,
}


def advance(state: GameState, move: Move) -> GameState:
    """Apply an already-legal *move* and return the successor state.

    Board, turn, castling rights, en-passant target, clocks and both
    histories are updated.  The returned status is left as ``ACTIVE`` and the
    move is recorded without SAN: callers that need either use
    :func:`make_move`.
    """
    piece = state.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    board = state.board.copy()
    board.apply(move)

    is_capture = move.is_en_passant or state.board[move.to_sq] is not None
    castling = _next_castling(state.castling, move, piece.kind, piece.color)

    en_passant: Square | None = None
    if piece.kind == PieceType.PAWN and abs(move.to_sq.row - move.from_sq.row) == 2:
        en_passant = square_at((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)

    if piece.kind == PieceType.PAWN or is_capture:
        halfmove_clock = 0
    else:
        halfmove_clock = state.halfmove_clock + 1

    fullmove_number = state.fullmove_number
    if state.turn == Color.BLACK:
        fullmove_number += 1

    turn = state.turn.opposite
    return GameState(
        board=board,
        turn=turn,
        castling=castling,
        en_passant=en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
        move_history=state.move_history + (move,),
        position_history=state.position_history
        + (position_key(board, turn, castling, en_passant),),
    )


def make_move(state: GameState, move: Move) -> GameState:
    """Full transition: apply *move*, classify the result and notate it.

    *move* must be a legal move of *state* as produced by the move
    generator.  The recorded move carries SAN with a ``#`` suffix on
    checkmate and ``+`` when the new status is ``CHECK``; a check that
    completes a rule draw gets no suffix.
    """
    san = move_to_san(state, move)
    successor = advance(state, move)

    status = Rules.classify(successor)
    if status == GameStatus.CHECKMATE:
        san += "#"
    elif status == GameStatus.CHECK:
        san += "+"

    notated = move.with_san(san)
    return replace(
        successor,
        move_history=state.move_history + (notated,),
        status=status,
    )


def _next_castling(
    castling: CastlingRights,
    move: Move,
    kind: PieceType,
    color: Color,
) -> CastlingRights:
    """Rights only shrink: king moves drop both, rook-home moves or captures
    drop the matching side."""
    if kind == PieceType.KING:
        castling &= ~CastlingRights.both(color)
    for sq in (move.from_sq, move.to_sq):
        right = _ROOK_HOMES.get(sq)
        if right is not None:
            castling &= ~right
    return castling
