"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest

pytest.importorskip("PyQt6.QtTest")

from PyQt6.QtTest import QSignalSpy  # noqa: E402

from gambit.core.notation import STARTING_FEN, state_from_fen  # noqa: E402
from gambit.engine.qt_bridge import EngineWorker  # noqa: E402
from gambit.engine.search import Difficulty  # noqa: E402

FOOLS_MATE = "rnbqkbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        state = state_from_fen(STARTING_FEN)
        worker = EngineWorker(difficulty=Difficulty.EASY)

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(state, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] in state.legal_moves()
        assert len(errors) == 0

    def test_emits_no_move_when_game_is_over(self) -> None:
        worker = EngineWorker(difficulty=Difficulty.EASY)

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(state_from_fen(FOOLS_MATE), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_for_invalid_state(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a state", 5)

        assert len(errors) == 1
        assert errors[0][0] == 5

    def test_set_difficulty(self) -> None:
        worker = EngineWorker()
        assert worker.difficulty == Difficulty.MEDIUM

        worker.set_difficulty("hard")

        assert worker.difficulty == Difficulty.HARD
