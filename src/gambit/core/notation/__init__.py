"""Notation package: FEN / SAN / PGN parsing and serialization."""

from gambit.core.notation.fen import STARTING_FEN, state_from_fen, state_to_fen
from gambit.core.notation.models import ParsedPgn, PgnMove, PgnTags
from gambit.core.notation.pgn import (
    build_pgn,
    game_result_from_pgn,
    parse_pgn,
    parse_pgn_game,
    pgn_movetext_from_sans,
    pgn_result_token,
)
from gambit.core.notation.san import move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "PgnMove",
    "PgnTags",
    "ParsedPgn",
    "state_from_fen",
    "state_to_fen",
    "move_to_san",
    "parse_san",
    "pgn_result_token",
    "game_result_from_pgn",
    "pgn_movetext_from_sans",
    "build_pgn",
    "parse_pgn_game",
    "parse_pgn",
]
