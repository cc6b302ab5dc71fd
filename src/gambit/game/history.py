"""Undo / redo by deterministic replay of the move list."""

from __future__ import annotations

from collections.abc import Iterable

from gambit.core.move import Move
from gambit.core.state import GameState
from gambit.core.transition import make_move


def replay(start: GameState, moves: Iterable[Move]) -> GameState:
    """Rebuild a game by applying *moves* to *start* one by one.

    Raises ``ValueError`` if a move is not legal where it is replayed.
    """
    state = start
    for move in moves:
        legal = state.resolve(move)
        if legal is None:
            raise ValueError(f"Move {move} is not legal in replay")
        state = make_move(state, legal)
    return state


class HistoryManager:
    """Keeps the game's starting state and the redo stack.

    Moves are never inverted in place: undo replays the starting state
    through the truncated move list.
    """

    __slots__ = ("_start", "_redo")

    def __init__(self, start: GameState) -> None:
        self._start = start
        self._redo: list[Move] = []

    @property
    def start(self) -> GameState:
        return self._start

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self, state: GameState) -> bool:
        return bool(state.move_history)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def record_new_move(self) -> None:
        """A genuinely new move invalidates everything that was undone."""
        self._redo.clear()

    def undo(self, state: GameState) -> GameState | None:
        if not state.move_history:
            return None
        *kept, undone = state.move_history
        rebuilt = replay(self._start, kept)
        self._redo.append(undone)
        return rebuilt

    def redo(self, state: GameState) -> GameState | None:
        if not self._redo:
            return None
        move = self._redo[-1]
        legal = state.resolve(move)
        if legal is None:
            raise ValueError(f"Redo move {move} is not legal in the current state")
        self._redo.pop()
        return make_move(state, legal)
