"""Qt bridge to run engine search in a worker thread.

Requires the optional ``qt`` extra (PyQt6).  Move the worker to a
``QThread`` and connect ``request_move`` through a queued signal so the
blocking search stays off the interaction thread.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.state import GameState
from gambit.engine.ai import get_ai_move
from gambit.engine.search import Difficulty


class EngineWorker(QObject):
    """Thread-affine worker that computes computer moves on demand.

    There is no cancellation: a bounded search depth is the only control.
    """

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_difficulty",)

    def __init__(self, *, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        super().__init__()
        self._difficulty = difficulty

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Search for a move in *state_obj* and emit the result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid state")
            return

        try:
            move = get_ai_move(state_obj, self._difficulty)
        except Exception as exc:
            self.search_error.emit(request_id, str(exc))
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return
        self.best_move_ready.emit(request_id, move)

    @pyqtSlot(str)
    def set_difficulty(self, difficulty: str) -> None:
        """Update difficulty (takes effect on the next request)."""
        self._difficulty = Difficulty(difficulty)
