"""Abstract interface for the game layer.

Collaborators (board rendering, input handling, dialogs, clocks, audio)
depend on this ABC rather than on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.enums import Color, GameStatus
    from gambit.core.move import Move
    from gambit.core.state import GameState
    from gambit.core.types import Square


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def reset(self, fen: str | None = None) -> None:
        """Start a new game from *fen* or the standard position."""

    @abstractmethod
    def get_board(self) -> Board:
        """Copy of the current board."""

    @abstractmethod
    def get_state(self) -> GameState:
        """The current (immutable) game state."""

    @abstractmethod
    def get_turn(self) -> Color: ...

    @abstractmethod
    def get_status(self) -> GameStatus: ...

    @abstractmethod
    def get_legal_moves(self, square: Square) -> list[Move]:
        """Legal moves of the side-to-move piece on *square*."""

    @abstractmethod
    def get_all_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves for *color* (default: side to move)."""

    @abstractmethod
    def make_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the last move. Returns True on success."""

    @abstractmethod
    def redo(self) -> bool:
        """Redo the last undone move. Returns True on success."""

    @abstractmethod
    def resign(self) -> None:
        """Side to move resigns."""

    @abstractmethod
    def timeout(self, color: Color) -> None:
        """*color* ran out of time."""

    @abstractmethod
    def to_fen(self) -> str: ...

    @abstractmethod
    def to_pgn(self) -> str: ...

    @abstractmethod
    def load_pgn(self, text: str) -> bool:
        """Replace the game with a PGN import. All-or-nothing."""
