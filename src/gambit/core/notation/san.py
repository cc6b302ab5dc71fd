"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import CastlingSide, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.types import FILES, parse_square, square_name

if TYPE_CHECKING:
    from gambit.core.state import GameState

SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in SAN_PIECE.items()}


def move_to_san(state: GameState, move: Move) -> str:
    """SAN for a legal *move* in *state*, without the ``+``/``#`` suffix.

    The suffix depends on the status of the resulting position and is added
    by :func:`gambit.core.transition.make_move`.
    """
    board = state.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    if move.castling_side == CastlingSide.KINGSIDE:
        return "O-O"
    if move.castling_side == CastlingSide.QUEENSIDE:
        return "O-O-O"

    san = ""
    is_capture = board[move.to_sq] is not None or move.is_en_passant

    if piece.kind == PieceType.PAWN:
        if is_capture:
            san += FILES[move.from_sq.col]
    else:
        san += SAN_PIECE[piece.kind]

        # Disambiguation among same-kind pieces reaching the same square
        gen = MoveGenerator.for_state(state)
        ambiguous = [
            m
            for m in gen.generate_legal_moves(piece.color)
            if m.to_sq == move.to_sq
            and m.from_sq != move.from_sq
            and m.piece is not None
            and m.piece.kind == piece.kind
        ]
        if ambiguous:
            same_file = any(m.from_sq.col == move.from_sq.col for m in ambiguous)
            same_rank = any(m.from_sq.row == move.from_sq.row for m in ambiguous)
            if not same_file:
                san += FILES[move.from_sq.col]
            elif not same_rank:
                san += str(move.from_sq.rank)
            else:
                san += square_name(move.from_sq)

    if is_capture:
        san += "x"

    san += square_name(move.to_sq)

    if move.promotion is not None:
        san += "=" + SAN_PIECE[move.promotion]

    return san


def parse_san(state: GameState, san: str) -> Move:
    """Parse a SAN string into the matching legal :class:`Move` of *state*."""
    legal = MoveGenerator.for_state(state).generate_legal_moves(state.turn)

    clean = san.strip().rstrip("+#!?")

    # Castling
    if clean in ("O-O", "0-0"):
        for m in legal:
            if m.castling_side == CastlingSide.KINGSIDE:
                return m
        raise ValueError(f"Illegal move: {san}")

    if clean in ("O-O-O", "0-0-0"):
        for m in legal:
            if m.castling_side == CastlingSide.QUEENSIDE:
                return m
        raise ValueError(f"Illegal move: {san}")

    # Promotion
    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo_char = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo_char)
        if promotion is None or promotion == PieceType.KING:
            raise ValueError(f"Invalid promotion in SAN: {san}")

    # Destination (last two chars)
    if len(clean) < 2:
        raise ValueError(f"Invalid SAN: {san}")
    to_sq = parse_square(clean[-2:])
    clean = clean[:-2]

    # Capture marker
    if clean.endswith("x"):
        clean = clean[:-1]

    # Piece type
    if clean and clean[0] in _SAN_PIECE_REV:
        kind = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        kind = PieceType.PAWN

    # Disambiguation
    from_col: int | None = None
    from_rank: int | None = None
    if len(clean) == 2:
        from_sq = parse_square(clean)
        from_col = from_sq.col
        from_rank = from_sq.rank
    elif len(clean) == 1:
        if clean in FILES:
            from_col = FILES.index(clean)
        elif clean in "12345678":
            from_rank = int(clean)
        else:
            raise ValueError(f"Invalid SAN disambiguation: {san}")
    elif clean:
        raise ValueError(f"Invalid SAN: {san}")

    # Find matching legal move
    candidates: list[Move] = []
    for m in legal:
        if m.piece is None or m.piece.kind != kind:
            continue
        if m.to_sq != to_sq:
            continue
        if m.promotion != promotion:
            continue
        if from_col is not None and m.from_sq.col != from_col:
            continue
        if from_rank is not None and m.from_sq.rank != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    raise ValueError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
