"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState


class Difficulty(Enum):
    """Computer strength; each level maps to a fixed search depth."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def depth(self) -> int:
        if self == Difficulty.EASY:
            return 1
        if self == Difficulty.MEDIUM:
            return 3
        return 4


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        return cls(max_depth=difficulty.depth)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score_cp`` is white-relative: positive values favour white.
    """

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(self, state: GameState, limits: SearchLimits) -> SearchResult: ...
