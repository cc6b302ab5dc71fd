"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, CastlingSide, Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, square_at, square_from_index

if TYPE_CHECKING:
    from gambit.core.state import GameState


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# side -> (cols that must be empty, cols the king crosses or lands on,
#          rook home col, king destination col)
_CASTLE_PATHS: dict[CastlingSide, tuple[tuple[int, ...], tuple[int, ...], int, int]] = {
    CastlingSide.KINGSIDE: ((5, 6), (5, 6), 7, 6),
    CastlingSide.QUEENSIDE: ((1, 2, 3), (3, 2), 0, 2),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for idx in range(64):
        origin = square_from_index(idx)
        moves: list[Square] = []
        for d_row, d_col in offsets:
            to_sq = origin.offset(d_row, d_col)
            if to_sq is not None:
                moves.append(to_sq)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for idx in range(64):
        row = idx >> 3
        col = idx & 7
        square_rays: list[tuple[Square, ...]] = []
        for d_row, d_col in directions:
            r = row + d_row
            c = col + d_col
            ray: list[Square] = []
            while 0 <= r < 8 and 0 <= c < 8:
                ray.append(square_at(r, c))
                r += d_row
                c += d_col
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][target] -> squares from which a pawn of *color* hits target."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color in (Color.WHITE, Color.BLACK):
        # White pawns capture towards row 0, so they sit one row below.
        behind = 1 if color == Color.WHITE else -1
        table: list[tuple[Square, ...]] = []
        for idx in range(64):
            target = square_from_index(idx)
            origins = [target.offset(behind, d_col) for d_col in (-1, 1)]
            table.append(tuple(sq for sq in origins if sq is not None))
        per_color.append(tuple(table))
    return tuple(per_color)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS = _build_pawn_attackers()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Attack detection ------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Pawns attack diagonally only; every other piece attacks the squares it
    could move to (castling excluded).
    """
    idx = sq.row * 8 + sq.col

    for origin in _PAWN_ATTACKERS[by_color][idx]:
        piece = board[origin]
        if piece is not None and piece.color == by_color and piece.kind == PieceType.PAWN:
            return True

    for origin in _KNIGHT_TARGETS[idx]:
        piece = board[origin]
        if (
            piece is not None
            and piece.color == by_color
            and piece.kind == PieceType.KNIGHT
        ):
            return True

    for origin in _KING_TARGETS[idx]:
        piece = board[origin]
        if piece is not None and piece.color == by_color and piece.kind == PieceType.KING:
            return True

    for ray in _BISHOP_RAYS[idx]:
        for origin in ray:
            piece = board[origin]
            if piece is None:
                continue
            if piece.color == by_color and piece.kind in (
                PieceType.BISHOP,
                PieceType.QUEEN,
            ):
                return True
            break

    for ray in _ROOK_RAYS[idx]:
        for origin in ray:
            piece = board[origin]
            if piece is None:
                continue
            if piece.color == by_color and piece.kind in (
                PieceType.ROOK,
                PieceType.QUEEN,
            ):
                return True
            break

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?  ``False`` without a king."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


class MoveGenerator:
    """Generates pseudo-legal and legal moves for a board snapshot.

    The generator never mutates the board it was given: every legality check
    runs :meth:`Board.apply` on a scratch copy.  The color to generate for is
    always explicit, so moves of the side *not* to move can be listed without
    touching any game state.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._board = board
        self._castling = castling
        self._en_passant = en_passant

    @classmethod
    def for_state(cls, state: GameState) -> MoveGenerator:
        return cls(state.board, state.castling, state.en_passant)

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        return [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if self._is_king_safe_after(move, color)
        ]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty if the square is empty)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            move
            for move in self.pseudo_legal_moves_from(sq)
            if self._is_king_safe_after(move, piece.color)
        ]

    def has_legal_move(self, color: Color) -> bool:
        for sq, piece in self._board.pieces(color):
            for move in self._pseudo_moves_for(sq, piece):
                if self._is_king_safe_after(move, color):
                    return True
        return False

    def is_legal(self, move: Move) -> bool:
        """Whether *move* matches a legal move of the piece on its origin."""
        return any(move.matches(m) for m in self.legal_moves_from(move.from_sq))

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq, piece in self._board.pieces(color):
            moves.extend(self._pseudo_moves_for(sq, piece))
        return moves

    def pseudo_legal_moves_from(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None:
            return []
        return self._pseudo_moves_for(sq, piece)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self._board, sq, by_color)

    # -- Legality filter ----------------------------------------------------

    def _is_king_safe_after(self, move: Move, color: Color) -> bool:
        scratch = self._board.copy()
        scratch.apply(move)
        return not is_in_check(scratch, color)

    # -- Piece-specific generators (private) -------------------------------

    def _pseudo_moves_for(self, sq: Square, piece: Piece) -> list[Move]:
        moves: list[Move] = []
        kind = piece.kind
        if kind == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif kind == PieceType.KNIGHT:
            self._gen_steps(sq, piece, _KNIGHT_TARGETS, moves)
        elif kind == PieceType.BISHOP:
            self._gen_sliding(sq, piece, _BISHOP_RAYS, moves)
        elif kind == PieceType.ROOK:
            self._gen_sliding(sq, piece, _ROOK_RAYS, moves)
        elif kind == PieceType.QUEEN:
            self._gen_sliding(sq, piece, _QUEEN_RAYS, moves)
        elif kind == PieceType.KING:
            self._gen_steps(sq, piece, _KING_TARGETS, moves)
            self._gen_castling(sq, piece, moves)
        else:
            raise AssertionError(f"Unhandled piece kind: {kind!r}")
        return moves

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        color = piece.color
        step = -1 if color == Color.WHITE else 1
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(step, 0)
        if one_step is not None and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, piece, None, moves)
            if sq.row == start_row:
                two_step = square_at(sq.row + 2 * step, sq.col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, piece))

        for d_col in (-1, 1):
            cap_sq = sq.offset(step, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, piece, target, moves)
            elif cap_sq == self._en_passant:
                victim = board[square_at(sq.row, cap_sq.col)]
                if (
                    victim is not None
                    and victim.kind == PieceType.PAWN
                    and victim.color != color
                ):
                    moves.append(
                        Move(sq, cap_sq, piece, captured=victim, is_en_passant=True)
                    )

    @staticmethod
    def _add_pawn_move(
        sq: Square,
        to_sq: Square,
        piece: Piece,
        captured: Piece | None,
        moves: list[Move],
    ) -> None:
        promo_row = 0 if piece.color == Color.WHITE else 7
        if to_sq.row != promo_row:
            moves.append(Move(sq, to_sq, piece, captured=captured))
            return
        for kind in PROMOTION_TYPES:
            moves.append(Move(sq, to_sq, piece, captured=captured, promotion=kind))

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        targets: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets[sq.row * 8 + sq.col]:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, piece))
            elif target.color != piece.color:
                moves.append(Move(sq, to_sq, piece, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        rays: tuple[tuple[tuple[Square, ...], ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays[sq.row * 8 + sq.col]:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece))
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece, captured=target))
                break

    def _gen_castling(self, king_sq: Square, piece: Piece, moves: list[Move]) -> None:
        color = piece.color
        if not self._castling & CastlingRights.both(color):
            return

        home_row = 7 if color == Color.WHITE else 0
        if king_sq.row != home_row or king_sq.col != 4:
            return

        board = self._board
        opponent = color.opposite
        if is_square_attacked(board, king_sq, opponent):
            return

        for side, (empty_cols, transit_cols, rook_col, king_to_col) in _CASTLE_PATHS.items():
            if not self._castling & CastlingRights.of(color, side):
                continue
            rook = board.piece_at(home_row, rook_col)
            if rook is None or rook.kind != PieceType.ROOK or rook.color != color:
                continue
            if any(board.piece_at(home_row, col) is not None for col in empty_cols):
                continue
            if any(
                is_square_attacked(board, square_at(home_row, col), opponent)
                for col in transit_cols
            ):
                continue
            moves.append(
                Move(king_sq, square_at(home_row, king_to_col), piece, castling_side=side)
            )
