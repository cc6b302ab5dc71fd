"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import STARTING_FEN, make_move, parse_san, state_from_fen

    state = state_from_fen(STARTING_FEN)
    state = make_move(state, parse_san(state, "e4"))
    for move in state.legal_moves():
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    GameResult,
    GameStatus,
    PieceType,
)
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator, is_in_check, is_square_attacked
from gambit.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    state_from_fen,
    state_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState, position_key
from gambit.core.transition import advance, make_move
from gambit.core.types import Square, parse_square, square_at, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CastlingSide",
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_at",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Rules pipeline
    "advance",
    "is_in_check",
    "is_square_attacked",
    "make_move",
    "position_key",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "state_from_fen",
    "state_to_fen",
]
