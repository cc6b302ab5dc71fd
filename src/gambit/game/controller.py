"""GameController - the orchestrator of a single chess game.

Owns the authoritative :class:`GameState` and the undo/redo history, and
emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus
from gambit.core.move import Move
from gambit.core.notation.fen import STARTING_FEN, state_from_fen, state_to_fen
from gambit.core.notation.models import PgnTags
from gambit.core.notation.pgn import build_pgn, parse_pgn_game, pgn_result_token
from gambit.core.notation.san import parse_san
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.transition import make_move
from gambit.core.types import Square
from gambit.engine.ai import get_ai_move
from gambit.engine.search import Difficulty
from gambit.game.history import HistoryManager
from gambit.game.interfaces import IGameController

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # notated move, new state
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, keeps undo/redo history, imports and
    exports FEN / PGN, and notifies listeners.

    Thread-safety: methods are meant to be called from a single thread.
    AI searches take a :class:`GameState` snapshot and never touch the
    controller; hosts submit the result through :meth:`make_move`.
    """

    __slots__ = ("_state", "_history", "events")

    def __init__(self, fen: str | None = None) -> None:
        self.events = GameEvents()
        self._state = state_from_fen(fen or STARTING_FEN)
        self._history = HistoryManager(self._state)

    # ── Read-only snapshots ──────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    def get_state(self) -> GameState:
        return self._state

    def get_board(self) -> Board:
        return self._state.board.copy()

    def get_turn(self) -> Color:
        return self._state.turn

    def get_status(self) -> GameStatus:
        return self._state.status

    def get_legal_moves(self, square: Square) -> list[Move]:
        if self._state.is_game_over:
            return []
        piece = self._state.board[square]
        if piece is None or piece.color != self._state.turn:
            return []
        return self._state.legal_moves_from(square)

    def get_all_legal_moves(self, color: Color | None = None) -> list[Move]:
        if self._state.is_game_over:
            return []
        return self._state.legal_moves(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def reset(self, fen: str | None = None) -> None:
        state = state_from_fen(fen or STARTING_FEN)
        self._state = state
        self._history = HistoryManager(state)
        _LOGGER.info("New game from %s", state_to_fen(state))

    def make_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            _LOGGER.debug("Rejected %s: game is over (%s)", move, self._state.status)
            return False

        legal = self._state.resolve(move)
        if legal is None:
            _LOGGER.debug("Rejected illegal move %s", move)
            return False

        self._state = make_move(self._state, legal)
        self._history.record_new_move()
        played = self._state.last_move
        _LOGGER.debug("Played %s (%s)", played.san, played.uci)

        self._emit_move(played)
        if self._state.is_game_over:
            self._emit_game_over()
        return True

    def make_uci_move(self, text: str) -> bool:
        """Submit a move in coordinate notation, e.g. ``e2e4`` or ``e7e8q``."""
        try:
            move = Move.from_uci(text)
        except ValueError:
            _LOGGER.debug("Rejected malformed move text %r", text)
            return False
        return self.make_move(move)

    def make_san_move(self, san: str) -> bool:
        """Submit a move in SAN, e.g. ``Nf3`` or ``exd8=Q+``."""
        if self._state.is_game_over:
            return False
        try:
            move = parse_san(self._state, san)
        except ValueError:
            _LOGGER.debug("Rejected SAN %r", san)
            return False
        return self.make_move(move)

    def resign(self) -> None:
        if self._state.is_game_over:
            return
        self._state = self._state.resigned()
        self._emit_game_over()

    def timeout(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state = self._state.timed_out(color)
        self._emit_game_over()

    # ── Undo / redo ──────────────────────────────────────────────────────

    def can_undo(self) -> bool:
        if self._state.status.is_forced:
            return False
        return self._history.can_undo(self._state)

    def can_redo(self) -> bool:
        if self._state.status.is_forced:
            return False
        return self._history.can_redo()

    def undo(self) -> bool:
        if not self.can_undo():
            _LOGGER.debug("Nothing to undo")
            return False
        rebuilt = self._history.undo(self._state)
        if rebuilt is None:
            return False
        self._state = rebuilt
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            _LOGGER.debug("Nothing to redo")
            return False
        replayed = self._history.redo(self._state)
        if replayed is None:
            return False
        self._state = replayed
        return True

    # ── Notation ─────────────────────────────────────────────────────────

    def to_fen(self) -> str:
        return state_to_fen(self._state)

    def to_pgn(self, tags: PgnTags | None = None) -> str:
        tags = tags if tags is not None else PgnTags()
        result_token = pgn_result_token(Rules.game_result(self._state))
        headers = tags.roster(result_token)

        start = self._history.start
        start_fen = state_to_fen(start)
        if start_fen != STARTING_FEN:
            headers["SetUp"] = "1"
            headers["FEN"] = start_fen

        start_ply = (start.fullmove_number - 1) * 2 + int(start.turn == Color.BLACK)
        sans = [move.san or move.uci for move in self._state.move_history]
        return build_pgn(headers, sans, result_token, start_ply=start_ply)

    def load_pgn(self, text: str) -> bool:
        try:
            parsed = parse_pgn_game(text)
            fen = parsed.headers.get("FEN") or STARTING_FEN
            start = state_from_fen(fen)
            state = start
            for pgn_move in parsed.moves:
                if state.is_game_over:
                    raise ValueError(f"Move {pgn_move.san!r} after the game ended")
                state = make_move(state, parse_san(state, pgn_move.san))
        except ValueError as exc:
            _LOGGER.info("PGN import failed: %s", exc)
            return False

        self._state = state
        self._history = HistoryManager(start)
        _LOGGER.info("Imported PGN game: %d plies, %s", state.ply_count, state.status)
        return True

    # ── AI ───────────────────────────────────────────────────────────────

    def get_ai_move(
        self,
        difficulty: Difficulty,
        rng: random.Random | None = None,
    ) -> Move | None:
        """Computer move for the side to move; the game is not advanced."""
        return get_ai_move(self._state, difficulty, rng)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        status = self._state.status
        _LOGGER.info("Game over: %s", status.value)
        for cb in self.events.on_game_over:
            cb(status)
