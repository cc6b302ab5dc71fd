"""Computer move selection keyed to difficulty."""

from __future__ import annotations

import logging
import random

from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.core.state import GameState
from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import Difficulty, SearchLimits

_LOGGER = logging.getLogger(__name__)

_EASY_RANDOM_MOVE_PROBABILITY = 0.3
_EASY_SCORE_WINDOW_CP = 50


def get_ai_move(
    state: GameState,
    difficulty: Difficulty,
    rng: random.Random | None = None,
) -> Move | None:
    """Pick a move for the side to move in *state*.

    Pure with respect to *state*: nothing is mutated.  Returns ``None`` when
    the game is already over or there is no legal move.

    Easy play is deliberately imprecise: 30% of the time a uniformly random
    legal move is played, otherwise a random pick among the moves scoring
    within 50 centipawns of the best one.
    """
    if state.is_game_over:
        return None
    moves = state.legal_moves()
    if not moves:
        return None

    rng = rng if rng is not None else random.Random()
    engine = MinimaxEngine()

    if difficulty == Difficulty.EASY:
        if rng.random() < _EASY_RANDOM_MOVE_PROBABILITY:
            move = rng.choice(moves)
            _LOGGER.debug("easy: random move %s", move)
            return move

        scored = engine.score_moves(state, difficulty.depth)
        scores = [score for _, score in scored]
        best = max(scores) if state.turn == Color.WHITE else min(scores)
        candidates = [m for m, score in scored if abs(score - best) < _EASY_SCORE_WINDOW_CP]
        move = rng.choice(candidates)
        _LOGGER.debug(
            "easy: %d candidates within %dcp of %d, picked %s",
            len(candidates),
            _EASY_SCORE_WINDOW_CP,
            best,
            move,
        )
        return move

    result = engine.search(state, SearchLimits.for_difficulty(difficulty))
    _LOGGER.debug(
        "%s: depth=%d nodes=%d score=%d move=%s",
        difficulty.value,
        result.depth,
        result.nodes,
        result.score_cp,
        result.best_move,
    )
    return result.best_move
