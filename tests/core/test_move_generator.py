"""Perft tests: the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from gambit.core.enums import CastlingSide, Color, PieceType
from gambit.core.move_generator import MoveGenerator, is_in_check, is_square_attacked
from gambit.core.notation import STARTING_FEN, state_from_fen
from gambit.core.state import GameState
from gambit.core.transition import advance
from gambit.core.types import parse_square


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes at *depth* by applying moves to fresh states."""
    moves = state.legal_moves()
    if depth == 1:
        return len(moves)
    return sum(perft(advance(state, move), depth - 1) for move in moves)


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(state_from_fen(POS3), 3) == 2_812


# ── Position 4: promotions, castling out of check ───────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS4), 2) == 264


# ── Targeted rule checks ─────────────────────────────────────────────────────


class TestLegality:
    def test_no_move_leaves_own_king_in_check(self) -> None:
        state = state_from_fen(KIWIPETE)
        for move in state.legal_moves():
            child = advance(state, move)
            assert not is_in_check(child.board, Color.WHITE), str(move)

    def test_pinned_piece_cannot_move(self) -> None:
        state = state_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert state.legal_moves_from(parse_square("e2")) == []

    def test_pseudo_legal_includes_pinned_moves(self) -> None:
        state = state_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        gen = MoveGenerator.for_state(state)
        assert gen.pseudo_legal_moves_from(parse_square("e2"))

    def test_moves_for_side_not_to_move(self) -> None:
        state = state_from_fen(STARTING_FEN)
        gen = MoveGenerator.for_state(state)
        assert len(gen.generate_legal_moves(Color.BLACK)) == 20
        assert state.turn == Color.WHITE

    def test_promotion_offers_four_pieces(self) -> None:
        state = state_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        moves = state.legal_moves_from(parse_square("a7"))
        assert sorted(m.promotion for m in moves) == [
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.ROOK,
            PieceType.QUEEN,
        ]

    def test_empty_square_has_no_moves(self) -> None:
        state = state_from_fen(STARTING_FEN)
        assert state.legal_moves_from(parse_square("e4")) == []

    def test_is_legal(self) -> None:
        gen = MoveGenerator.for_state(state_from_fen(STARTING_FEN))
        moves = gen.generate_legal_moves(Color.WHITE)
        assert all(gen.is_legal(m) for m in moves)


class TestAttacks:
    def test_pawn_attacks_diagonally_only(self) -> None:
        state = state_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1")
        board = state.board
        assert is_square_attacked(board, parse_square("d5"), Color.WHITE)
        assert is_square_attacked(board, parse_square("f5"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("e5"), Color.WHITE)

    def test_slider_blocked(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/R3P3/7K w - - 0 1")
        board = state.board
        assert is_square_attacked(board, parse_square("d2"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("f2"), Color.WHITE)

    def test_no_king_is_never_in_check(self) -> None:
        state = state_from_fen(STARTING_FEN)
        board = state.board.copy()
        board[parse_square("e1")] = None
        assert not is_in_check(board, Color.WHITE)


class TestCastling:
    def test_both_sides_available(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        sides = {m.castling_side for m in state.legal_moves() if m.is_castling}
        assert sides == {CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE}

    def test_transit_square_attacked(self) -> None:
        # f1 is attacked, g1 is not.
        state = state_from_fen("4kr2/8/8/8/8/8/8/4K2R w K - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())

    def test_destination_attacked(self) -> None:
        state = state_from_fen("4k1r1/8/8/8/8/8/8/4K2R w K - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())

    def test_b_file_attack_does_not_block_queenside(self) -> None:
        state = state_from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert any(
            m.castling_side == CastlingSide.QUEENSIDE for m in state.legal_moves()
        )

    def test_cannot_castle_out_of_check(self) -> None:
        state = state_from_fen("4r1k1/8/8/8/8/8/8/4K2R w K - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())

    def test_blocked_path(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/R2QK3 w Q - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())

    def test_requires_right(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())

    def test_requires_rook_on_home_square(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K1R1 w K - 0 1")
        assert not any(m.is_castling for m in state.legal_moves())
