"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

from gambit.core.enums import Color, GameStatus
from gambit.core.move import Move
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.transition import advance
from gambit.engine.evaluation import PIECE_VALUES, evaluate
from gambit.engine.search import IEngine, SearchLimits, SearchResult

MATE_SCORE = 99_999
_INF_SCORE = 1_000_000


class MinimaxEngine(IEngine):
    """White maximises, black minimises; scores are white-relative.

    Children are built with :func:`~gambit.core.transition.advance`, the same
    transition used for real moves, so the search sees castling, en passant,
    promotion, the 50-move counter and repetitions exactly as the game does.
    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes

    def search(self, state: GameState, limits: SearchLimits) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        root_moves = state.legal_moves()
        if not root_moves:
            status = Rules.classify(state, root_moves)
            return SearchResult(None, self._terminal_score(state, status) or 0, 0, 0)

        maximizing = state.turn == Color.WHITE
        alpha = -_INF_SCORE
        beta = _INF_SCORE
        best_move: Move | None = None
        best_score = -_INF_SCORE if maximizing else _INF_SCORE

        for move in self._order_moves(root_moves):
            score = self._minimax(advance(state, move), limits.max_depth - 1, alpha, beta)
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

        return SearchResult(best_move, best_score, limits.max_depth, self._nodes)

    def score_moves(self, state: GameState, depth: int) -> list[tuple[Move, int]]:
        """Exact score of every legal root move, searched with a full window."""
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        return [
            (move, self._minimax(advance(state, move), depth - 1, -_INF_SCORE, _INF_SCORE))
            for move in self._order_moves(state.legal_moves())
        ]

    def _minimax(self, state: GameState, depth: int, alpha: int, beta: int) -> int:
        self._nodes += 1

        if depth <= 0:
            terminal = self._terminal_score(state, Rules.classify(state))
            return evaluate(state.board) if terminal is None else terminal

        moves = state.legal_moves()
        terminal = self._terminal_score(state, Rules.classify(state, moves))
        if terminal is not None:
            return terminal

        if state.turn == Color.WHITE:
            value = -_INF_SCORE
            for move in self._order_moves(moves):
                value = max(value, self._minimax(advance(state, move), depth - 1, alpha, beta))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value

        value = _INF_SCORE
        for move in self._order_moves(moves):
            value = min(value, self._minimax(advance(state, move), depth - 1, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    @staticmethod
    def _terminal_score(state: GameState, status: GameStatus) -> int | None:
        if status == GameStatus.CHECKMATE:
            # The side to move is mated.
            return -MATE_SCORE if state.turn == Color.WHITE else MATE_SCORE
        if status.is_draw:
            return 0
        return None

    @staticmethod
    def _order_moves(moves: list[Move]) -> list[Move]:
        """Captures first, most valuable victim first; stable otherwise."""
        return sorted(
            moves,
            key=lambda m: PIECE_VALUES[m.captured.kind] if m.captured else 0,
            reverse=True,
        )
