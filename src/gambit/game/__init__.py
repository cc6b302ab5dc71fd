"""Game layer: controller, undo/redo history and the controller interface."""

from gambit.game.controller import GameController, GameEvents
from gambit.game.history import HistoryManager, replay
from gambit.game.interfaces import IGameController

__all__ = [
    "GameController",
    "GameEvents",
    "HistoryManager",
    "IGameController",
    "replay",
]
