"""Tests for the status classifier (check, mate, stalemate, draws)."""

from gambit.core.enums import Color, GameResult, GameStatus
from gambit.core.notation import STARTING_FEN, state_from_fen
from gambit.core.rules import Rules


class TestCheckmate:
    def test_fools_mate(self, start_state, play) -> None:
        state = play(start_state, "f4", "e5", "g4", "Qh4")
        assert state.status == GameStatus.CHECKMATE
        assert Rules.is_checkmate(state)
        assert Rules.game_result(state) == GameResult.BLACK_WINS
        assert state.is_game_over

    def test_scholars_mate(self, start_state, play) -> None:
        state = play(start_state, "e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7")
        assert state.status == GameStatus.CHECKMATE
        assert Rules.game_result(state) == GameResult.WHITE_WINS

    def test_back_rank(self) -> None:
        state = state_from_fen("R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1")
        assert state.status == GameStatus.CHECKMATE


class TestStalemate:
    def test_queen_stalemate(self) -> None:
        state = state_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert state.status == GameStatus.STALEMATE
        assert Rules.is_stalemate(state)
        assert not Rules.is_checkmate(state)
        assert Rules.game_result(state) == GameResult.DRAW


class TestCheck:
    def test_check_status(self, start_state, play) -> None:
        state = play(start_state, "e4", "f5", "Qh5")
        assert state.status == GameStatus.CHECK
        assert Rules.is_in_check(state)
        assert not state.is_game_over

    def test_active(self, start_state) -> None:
        assert start_state.status == GameStatus.ACTIVE
        assert Rules.game_result(start_state) == GameResult.IN_PROGRESS


class TestFiftyMoveRule:
    def test_reaching_100_half_moves(self, play) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 99 60")
        assert state.status == GameStatus.ACTIVE
        state = play(state, "Ra2")
        assert state.halfmove_clock == 100
        assert state.status == GameStatus.DRAW_50MOVE
        assert Rules.game_result(state) == GameResult.DRAW

    def test_pawn_move_resets_before_draw(self, play) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/P7/4K3 w - - 99 60")
        state = play(state, "a3")
        assert state.halfmove_clock == 0
        assert state.status == GameStatus.ACTIVE

    def test_checkmate_takes_priority(self) -> None:
        state = state_from_fen("R5k1/5ppp/8/8/8/8/8/6K1 b - - 100 80")
        assert state.status == GameStatus.CHECKMATE


class TestThreefoldRepetition:
    SHUFFLE = ("Nf3", "Nf6", "Ng1", "Ng8")

    def test_draw_on_third_occurrence(self, start_state, play) -> None:
        state = play(start_state, *self.SHUFFLE, "Nf3", "Nf6", "Ng1")
        assert state.status == GameStatus.ACTIVE
        state = play(state, "Ng8")
        assert state.repetition_count() == 3
        assert state.status == GameStatus.DRAW_REPETITION
        assert Rules.game_result(state) == GameResult.DRAW

    def test_second_occurrence_is_not_a_draw(self, start_state, play) -> None:
        state = play(start_state, *self.SHUFFLE)
        assert state.repetition_count() == 2
        assert state.status == GameStatus.ACTIVE

    def test_en_passant_target_is_part_of_key(self, start_state, play) -> None:
        state = play(start_state, "e4")
        assert state.position_key.endswith(" b KQkq e3")
        assert state.position_key != state_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        ).position_key

    def test_key_excludes_clocks(self) -> None:
        a = state_from_fen(STARTING_FEN)
        b = state_from_fen(STARTING_FEN.replace(" 0 1", " 7 30"))
        assert a.position_key == b.position_key


class TestForcedTerminal:
    def test_resigned_keeps_board_and_turn(self, start_state) -> None:
        state = start_state.resigned()
        assert state.status == GameStatus.RESIGNED
        assert state.ended_by == Color.WHITE
        assert state.turn == Color.WHITE
        assert state.board == start_state.board
        assert Rules.game_result(state) == GameResult.IN_PROGRESS

    def test_timed_out(self, start_state) -> None:
        state = start_state.timed_out(Color.BLACK)
        assert state.status == GameStatus.TIMEOUT
        assert state.ended_by == Color.BLACK
        assert state.is_game_over
