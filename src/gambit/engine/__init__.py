"""Chess engine package: evaluation, minimax search and move selection.

The optional Qt worker lives in :mod:`gambit.engine.qt_bridge` and is not
imported here so the engine works without PyQt6 installed.
"""

from gambit.engine.ai import get_ai_move
from gambit.engine.evaluation import PIECE_VALUES, evaluate
from gambit.engine.minimax import MATE_SCORE, MinimaxEngine
from gambit.engine.search import Difficulty, IEngine, SearchLimits, SearchResult

__all__ = [
    "MATE_SCORE",
    "PIECE_VALUES",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "get_ai_move",
]
