"""High-level chess rules: status classification, checkmate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameResult, GameStatus
from gambit.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    # Both the 50-move rule and threefold repetition end the game
    # automatically; no claim is required.

    @staticmethod
    def classify(
        state: GameState,
        legal_moves: list[Move] | None = None,
    ) -> GameStatus:
        """Status of *state* for its side to move.

        Priority: no legal moves (checkmate / stalemate), 50-move rule,
        threefold repetition, check, active.  Pass *legal_moves* when they
        are already known to skip regenerating them.
        """
        gen = MoveGenerator.for_state(state)
        color = state.turn
        if legal_moves is None:
            has_moves = gen.has_legal_move(color)
        else:
            has_moves = bool(legal_moves)

        in_check = gen.is_in_check(color)
        if not has_moves:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if Rules.is_fifty_move_rule(state):
            return GameStatus.DRAW_50MOVE
        if Rules.is_threefold_repetition(state):
            return GameStatus.DRAW_REPETITION
        if in_check:
            return GameStatus.CHECK
        return GameStatus.ACTIVE

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return MoveGenerator.for_state(state).is_in_check(state.turn)

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        gen = MoveGenerator.for_state(state)
        return gen.is_in_check(state.turn) and not gen.has_legal_move(state.turn)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        gen = MoveGenerator.for_state(state)
        return not gen.is_in_check(state.turn) and not gen.has_legal_move(state.turn)

    @staticmethod
    def is_fifty_move_rule(state: GameState) -> bool:
        return state.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(state: GameState) -> bool:
        return state.repetition_count() >= 3

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Outcome implied by the state's status.

        Only checkmate and rule draws decide a result here.  Resignation and
        timeout are recorded in ``GameState.ended_by`` and map to
        ``IN_PROGRESS``.
        """
        status = state.status
        if status == GameStatus.CHECKMATE:
            # The side to move is the one mated.
            if state.turn == Color.WHITE:
                return GameResult.BLACK_WINS
            return GameResult.WHITE_WINS
        if status.is_draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
