"""
Unit tests for the game session.

Tests input edge detection, the mapping from buttons to board
operations, and the win/loss round handling.
"""
import pytest
from ngmines.game import Board, BoardConfig
from ngmines.generation import (
    GameSession,
    GameState,
    InputAction,
    InputState,
    SessionConfig,
)
from ngmines.solver import Found, NotSolvable


def make_session(no_guess: bool = False, clock=None) -> GameSession:
    config = SessionConfig(board=BoardConfig(5, 5, 1), no_guess=no_guess, seed=0)
    if clock is None:
        return GameSession(config)
    return GameSession(config, clock=clock)


def click(position, *actions: InputAction) -> InputState:
    """Input for a single fresh button press over a cell."""
    return InputState(hovered=position, pressed=set(actions))


# ============================================================================
# Input State Tests
# ============================================================================

class TestInputState:
    """Test press edge detection."""

    def test_just_pressed_only_on_first_tick(self) -> None:
        state = InputState(hovered=(0, 0))
        state.press(InputAction.MINE)
        assert state.just_pressed(InputAction.MINE) is True

        state.end_tick()
        assert state.just_pressed(InputAction.MINE) is False

    def test_release_and_press_again(self) -> None:
        state = InputState()
        state.press(InputAction.FLAG)
        state.end_tick()
        state.release(InputAction.FLAG)
        state.end_tick()
        state.press(InputAction.FLAG)
        assert state.just_pressed(InputAction.FLAG) is True

    def test_actions_are_independent(self) -> None:
        state = InputState()
        state.press(InputAction.MINE)
        assert state.just_pressed(InputAction.FLAG) is False


# ============================================================================
# Tick Tests
# ============================================================================

class TestTick:
    """Test button-to-operation mapping."""

    def test_mine_reveals_hovered_cell(self, center_mine_board: Board) -> None:
        session = make_session()
        session.load_board(center_mine_board)

        state = session.tick(click((0, 0), InputAction.MINE))

        assert state == GameState.PLAYING
        assert center_mine_board.get_cell(0, 0).is_revealed is True
        assert center_mine_board.revealed_count == 1

    def test_held_button_acts_once(self, center_mine_board: Board) -> None:
        """Dragging a held button onto another cell does nothing."""
        session = make_session()
        session.load_board(center_mine_board)
        state = InputState(hovered=(0, 0))
        state.press(InputAction.MINE)

        session.tick(state)
        state.hovered = (0, 1)
        session.tick(state)

        assert center_mine_board.get_cell(0, 1).is_revealed is False

    def test_no_hover_does_nothing(self, center_mine_board: Board) -> None:
        session = make_session()
        session.load_board(center_mine_board)
        session.tick(InputState(pressed={InputAction.MINE}))
        assert center_mine_board.revealed_count == 0

    def test_flag_toggles_hidden_cell(self, center_mine_board: Board) -> None:
        session = make_session()
        session.load_board(center_mine_board)

        session.tick(click((1, 1), InputAction.FLAG))
        assert center_mine_board.get_cell(1, 1).is_flagged is True
        session.tick(click((1, 1), InputAction.FLAG))
        assert center_mine_board.get_cell(1, 1).is_flagged is False

    def test_flag_on_revealed_flags_neighbors(self, center_mine_board: Board) -> None:
        session = make_session()
        session.load_board(center_mine_board)
        session.tick(click((0, 0), InputAction.MINE))

        session.tick(click((0, 0), InputAction.FLAG))

        assert center_mine_board.flagged_count == 3
        assert center_mine_board.get_cell(0, 0).is_flagged is False

    def test_mine_on_revealed_chords(self, center_mine_board: Board) -> None:
        session = make_session()
        session.load_board(center_mine_board)
        session.tick(click((0, 0), InputAction.MINE))
        session.tick(click((1, 1), InputAction.FLAG))

        session.tick(click((0, 0), InputAction.MINE))

        assert center_mine_board.get_cell(0, 1).is_revealed is True
        assert center_mine_board.get_cell(1, 0).is_revealed is True
        assert center_mine_board.revealed_count == 3


# ============================================================================
# Round Tests
# ============================================================================

class TestRounds:
    """Test win and loss handling."""

    def test_loss_deals_new_board(self, corner_mine_board: Board) -> None:
        session = make_session()
        session.load_board(corner_mine_board)

        state = session.tick(click((0, 0), InputAction.MINE))

        assert state == GameState.LOST
        assert session.stats.losses == 1
        assert session.board is not corner_mine_board
        assert session.board.revealed_count == 0

    def test_loss_skips_flag(self, corner_mine_board: Board) -> None:
        """A losing reveal ends the tick before the flag is applied."""
        session = make_session()
        session.load_board(corner_mine_board)
        session.tick(click((0, 0), InputAction.MINE, InputAction.FLAG))
        assert session.board.flagged_count == 0

    def test_win_records_round_time(self, corner_mine_board: Board) -> None:
        times = iter([10.0, 14.5])
        session = make_session(clock=lambda: next(times))
        session.load_board(corner_mine_board)

        state = session.tick(click((4, 4), InputAction.MINE))

        assert state == GameState.WON
        assert session.stats.wins == 1
        assert session.stats.round_times == [4.5]
        assert session.stats.average_time == pytest.approx(4.5)
        assert session.board is not corner_mine_board

    def test_state_returns_to_playing(self, corner_mine_board: Board) -> None:
        session = make_session()
        session.load_board(corner_mine_board)
        session.tick(click((0, 0), InputAction.MINE))

        assert session.tick(InputState()) == GameState.PLAYING
        assert session.stats.rounds_played == 1

    def test_empty_stats(self) -> None:
        session = make_session()
        assert session.stats.rounds_played == 0
        assert session.stats.average_time == 0.0


# ============================================================================
# Board Loading Tests
# ============================================================================

class TestLoadBoard:
    """Test adopting hand-built boards."""

    def test_no_guess_session_deals_certified_board(self) -> None:
        session = make_session(no_guess=True)
        assert session.board.safe_start is not None

    def test_plain_session_deals_unmarked_board(self) -> None:
        session = make_session(no_guess=False)
        assert session.board.safe_start is None

    def test_load_marks_safe_start(self, corner_mine_board: Board) -> None:
        session = make_session(no_guess=True)

        result = session.load_board(corner_mine_board)

        assert result == Found(0, 2)
        assert corner_mine_board.safe_start == (0, 2)
        assert session.board is corner_mine_board

    def test_load_unsolvable_board(self, fifty_fifty_board: Board) -> None:
        session = make_session(no_guess=True)

        result = session.load_board(fifty_fifty_board)

        assert isinstance(result, NotSolvable)
        assert fifty_fifty_board.safe_start is None

    def test_load_keeps_existing_safe_start(self, corner_mine_board: Board) -> None:
        corner_mine_board.mark_safe_start(4, 4)
        session = make_session(no_guess=True)
        assert session.load_board(corner_mine_board) == Found(4, 4)

    def test_load_without_no_guess(self, corner_mine_board: Board) -> None:
        session = make_session(no_guess=False)
        assert session.load_board(corner_mine_board) is None
        assert corner_mine_board.safe_start is None

    def test_guessing_marker_is_moved(self, wall_board: Board) -> None:
        """A marker that needs a guess is moved to a certified opening."""
        wall_board.mark_safe_start(0, 1)
        session = make_session(no_guess=True)

        result = session.load_board(wall_board)

        assert result == Found(2, 0)
        assert wall_board.safe_start == (2, 0)

    def test_marker_on_fifty_fifty_is_not_certified(
        self, fifty_fifty_board: Board
    ) -> None:
        """A caller-set marker is never reported as a certificate by itself."""
        fifty_fifty_board.mark_safe_start(0, 0)
        session = make_session(no_guess=True)

        result = session.load_board(fifty_fifty_board)

        assert isinstance(result, NotSolvable)
        assert fifty_fifty_board.safe_start is None

    def test_loaded_size_carries_to_next_round(
        self, center_mine_board: Board
    ) -> None:
        """Rounds after a load keep the loaded board's size and mines."""
        session = make_session()
        session.load_board(center_mine_board)

        session.tick(click((1, 1), InputAction.MINE))

        assert (session.board.width, session.board.height) == (3, 3)
        assert session.board.num_mines == 1
        assert session.board is not center_mine_board
