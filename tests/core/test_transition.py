"""Tests for the make-move state transition."""

from gambit.core.enums import CastlingRights, Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.notation import STARTING_FEN, parse_san, state_from_fen, state_to_fen
from gambit.core.piece import Piece
from gambit.core.state import castling_field
from gambit.core.transition import advance, make_move
from gambit.core.types import parse_square

CASTLE_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


class TestCountersAndTurn:
    def test_double_push(self, start_state, play) -> None:
        state = play(start_state, "e4")
        assert state.turn == Color.BLACK
        assert state.en_passant == parse_square("e3")
        assert state.halfmove_clock == 0
        assert state.fullmove_number == 1
        assert state_to_fen(state) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_fullmove_increments_after_black(self, start_state, play) -> None:
        state = play(start_state, "e4", "e5")
        assert state.fullmove_number == 2

    def test_quiet_piece_move_increments_halfmove(
        self, start_state, play
    ) -> None:
        state = play(start_state, "Nf3", "Nf6")
        assert state.halfmove_clock == 2

    def test_capture_resets_halfmove(self, start_state, play) -> None:
        state = play(start_state, "Nf3", "d5", "Nc3", "d4", "Nb5", "c6", "Nbxd4")
        assert state.halfmove_clock == 0

    def test_histories_grow_by_one(self, start_state, play) -> None:
        state = play(start_state, "d4")
        assert len(state.move_history) == 1
        assert len(state.position_history) == 2
        assert state.position_history[-1] == state.position_key

    def test_last_move(self, start_state, play) -> None:
        assert start_state.last_move is None
        state = play(start_state, "e4", "c5")
        assert state.last_move.san == "c5"
        assert state.last_move is state.move_history[-1]


class TestPurity:
    def test_input_state_untouched(self, start_state) -> None:
        before = state_to_fen(start_state)
        make_move(start_state, parse_san(start_state, "e4"))
        assert state_to_fen(start_state) == before
        assert start_state.move_history == ()

    def test_advance_leaves_status_and_san_blank(self, start_state) -> None:
        child = advance(start_state, parse_san(start_state, "e4"))
        assert child.status == GameStatus.ACTIVE
        assert child.move_history[-1].san is None


class TestCastlingRights:
    def test_king_move_drops_both(self, play) -> None:
        state = play(state_from_fen(CASTLE_FEN), "Kf1")
        assert castling_field(state.castling) == "kq"

    def test_rook_move_drops_one_side(self, play) -> None:
        state = play(state_from_fen(CASTLE_FEN), "Rb1")
        assert castling_field(state.castling) == "Kkq"

    def test_rook_capture_drops_victim_side(self, play) -> None:
        state = play(state_from_fen(CASTLE_FEN), "Rxh8+")
        assert castling_field(state.castling) == "Qq"

    def test_castle_kingside(self, play) -> None:
        state = play(state_from_fen(CASTLE_FEN), "O-O")
        board = state.board
        assert board[parse_square("g1")] == Piece(Color.WHITE, PieceType.KING)
        assert board[parse_square("f1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[parse_square("h1")] is None
        assert state.castling == CastlingRights.BLACK_BOTH
        assert state.move_history[-1].san == "O-O"

    def test_castle_queenside_black(self, play) -> None:
        state = state_from_fen(CASTLE_FEN.replace(" w ", " b "))
        state = play(state, "O-O-O")
        assert state.board[parse_square("c8")] == Piece(Color.BLACK, PieceType.KING)
        assert state.board[parse_square("d8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert state.castling == CastlingRights.WHITE_BOTH


class TestEnPassant:
    def test_capture_immediately(self, start_state, play) -> None:
        state = play(start_state, "e4", "a6", "e5", "d5")
        assert state.en_passant == parse_square("d6")
        state = play(state, "exd6")
        assert state.board[parse_square("d6")] == Piece(Color.WHITE, PieceType.PAWN)
        assert state.board[parse_square("d5")] is None
        assert state.move_history[-1].san == "exd6"
        assert state.move_history[-1].is_en_passant

    def test_target_expires_after_one_ply(self, start_state, play) -> None:
        state = play(start_state, "e4", "a6", "e5", "d5", "h3")
        assert state.en_passant is None
        state = play(state, "h6")
        moves = state.legal_moves_from(parse_square("e5"))
        assert not any(m.is_en_passant for m in moves)
        assert all(m.to_sq != parse_square("d6") for m in moves)


class TestSanSuffixes:
    def test_check_suffix(self, start_state, play) -> None:
        state = play(start_state, "e4", "f5", "Qh5")
        assert state.move_history[-1].san == "Qh5+"

    def test_mate_suffix(self, start_state, play) -> None:
        state = play(start_state, "f4", "e5", "g4", "Qh4")
        assert [m.san for m in state.move_history] == ["f4", "e5", "g4", "Qh4#"]

    def test_promotion_with_check(self, play) -> None:
        state = play(state_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1"), "a8=Q")
        assert state.move_history[-1].san == "a8=Q+"
        assert state.board[parse_square("a8")] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_check_completing_fifty_move_draw_has_no_suffix(self, play) -> None:
        state = play(state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 99 80"), "Ra8")
        assert state.status == GameStatus.DRAW_50MOVE
        assert state.is_in_check()
        assert state.move_history[-1].san == "Ra8"

    def test_same_check_before_the_limit_is_marked(self, play) -> None:
        state = play(state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 98 80"), "Ra8")
        assert state.status == GameStatus.CHECK
        assert state.move_history[-1].san == "Ra8+"

    def test_underpromotion(self) -> None:
        state = state_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        proposal = Move.from_uci("a7a8n")
        legal = state.resolve(proposal)
        assert legal is not None
        state = make_move(state, legal)
        assert state.move_history[-1].san == "a8=N"


class TestResolve:
    def test_wrong_color_rejected(self) -> None:
        state = state_from_fen(STARTING_FEN)
        assert state.resolve(Move.from_uci("e7e5")) is None

    def test_match_by_destination_and_promotion(self) -> None:
        state = state_from_fen(STARTING_FEN)
        legal = state.resolve(Move.from_uci("g1f3"))
        assert legal is not None
        assert legal.piece == Piece(Color.WHITE, PieceType.KNIGHT)
        assert state.resolve(Move.from_uci("g1g3")) is None

    def test_promotion_required(self) -> None:
        state = state_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        assert state.resolve(Move.from_uci("a7a8")) is None
