"""
Game session driving a board from per-tick input.

The session owns the active board. Each tick it reads one InputState,
maps it to reveal/flag operations on the hovered cell, and starts a new
round on a win or a loss.
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Set

from ..game.board import Board, BoardConfig, Position
from ..game.reveal import (
    field_clear,
    reveal_adjacent_cells,
    reveal_cell,
    set_adjacent_cells_flags,
    toggle_flag_cell,
)
from ..solver.result import Found, SolveResult
from .factory import BoardFactory, GenerationConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Outcome of the most recent tick."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class InputAction(Enum):
    """Buttons the input layer can press over a cell."""

    MINE = auto()
    FLAG = auto()


# ============================================================================
# Input State
# ============================================================================

@dataclass
class InputState:
    """
    Everything the input layer knows about one frame.

    Attributes:
        hovered: Grid cell under the cursor, if any.
        pressed: Actions held down this tick.
        pressed_last_tick: Actions held down on the previous tick.
    """

    hovered: Optional[Position] = None
    pressed: Set[InputAction] = field(default_factory=set)
    pressed_last_tick: Set[InputAction] = field(default_factory=set)

    def press(self, action: InputAction) -> None:
        self.pressed.add(action)

    def release(self, action: InputAction) -> None:
        self.pressed.discard(action)

    def just_pressed(self, action: InputAction) -> bool:
        """True only on the tick the action went down."""
        return action in self.pressed and action not in self.pressed_last_tick

    def end_tick(self) -> None:
        """Roll this tick's buttons into the previous-tick set."""
        self.pressed_last_tick = set(self.pressed)


# ============================================================================
# Configuration and Statistics
# ============================================================================

@dataclass
class SessionConfig:
    """
    Configuration for a game session.

    Attributes:
        board: Board size and mine count for every round.
        no_guess: Certify each new board as no-guess solvable.
        max_attempts: Retry cap for no-guess generation (None = unbounded).
        seed: Seed for board generation.
    """

    board: BoardConfig = field(default_factory=BoardConfig)
    no_guess: bool = True
    max_attempts: Optional[int] = None
    seed: Optional[int] = None


@dataclass
class SessionStats:
    """Results of the rounds played so far."""

    wins: int = 0
    losses: int = 0
    round_times: List[float] = field(default_factory=list)

    @property
    def rounds_played(self) -> int:
        return self.wins + self.losses

    @property
    def average_time(self) -> float:
        """Mean time of won rounds in seconds."""
        if not self.round_times:
            return 0.0
        return sum(self.round_times) / len(self.round_times)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """Owns the active board and applies input to it."""

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        factory: Optional[BoardFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the session and deal the first board.

        Args:
            config: Session configuration.
            factory: Board source (default: built from config).
            clock: Time source for round timing.
        """
        self.config = config or SessionConfig()
        self.factory = factory or BoardFactory(
            GenerationConfig(
                max_attempts=self.config.max_attempts, seed=self.config.seed
            )
        )
        self.clock = clock
        self.stats = SessionStats()
        self.game_state = GameState.PLAYING
        self._round_start: Optional[float] = None
        self.board_config = self.config.board
        self.board = self._deal()

    # ========================================================================
    # Rounds
    # ========================================================================

    def _deal(self) -> Board:
        board_config = self.board_config
        if self.config.no_guess:
            return self.factory.generate_ng_solvable_board(
                board_config.num_mines, board_config.width, board_config.height
            )
        return self.factory.generate_board(
            board_config.num_mines, board_config.width, board_config.height
        )

    def new_round(self) -> None:
        """Replace the board wholesale and reset the round timer."""
        self.board = self._deal()
        self._round_start = None

    def load_board(self, board: Board) -> Optional[SolveResult]:
        """
        Adopt an externally constructed board.

        In no-guess mode the board is certified: an existing safe start
        is kept only if play from it needs no guess, otherwise the
        solver looks for an opening and the mark moves there (or is
        removed when none exists). Returns None when no-guess mode is
        off. Later rounds keep the loaded board's size and mine count.
        """
        result: Optional[SolveResult] = None
        if self.config.no_guess:
            result = self._certify(board)
        self.board = board
        self.board_config = board.config
        self._round_start = None
        return result

    def _certify(self, board: Board) -> SolveResult:
        solver = self.factory.solver
        marked = board.safe_start
        if marked is not None and solver.simulate(board, marked).solved:
            logger.info("Loaded board is no-guess solvable from its safe start %s", marked)
            return Found(*marked)

        result = solver.solve(board, board.num_mines)
        if isinstance(result, Found):
            board.mark_safe_start(result.row, result.col)
            logger.info("Loaded board is no-guess solvable from %s", result.position)
        else:
            board.clear_safe_start()
            logger.info("Loaded board is not no-guess solvable")
        return result

    # ========================================================================
    # Tick
    # ========================================================================

    def tick(self, input_state: InputState) -> GameState:
        """
        Apply one frame of input.

        Returns:
            WON or LOST when this tick ended the round (a new board is
            already in place), PLAYING otherwise.
        """
        self.game_state = GameState.PLAYING
        if input_state.hovered is not None:
            row, col = input_state.hovered
            if input_state.just_pressed(InputAction.MINE):
                if not self.mine(row, col):
                    self._finish_round(GameState.LOST)
            if self.game_state == GameState.PLAYING and input_state.just_pressed(InputAction.FLAG):
                self.flag(row, col)

        if self.game_state == GameState.PLAYING and field_clear(self.board):
            self._finish_round(GameState.WON)

        input_state.end_tick()
        return self.game_state

    def mine(self, row: int, col: int) -> bool:
        """Reveal a hidden cell or chord a revealed one."""
        if self._round_start is None:
            self._round_start = self.clock()
        if self.board.get_cell(row, col).is_revealed:
            return reveal_adjacent_cells(self.board, row, col)
        return reveal_cell(self.board, row, col)

    def flag(self, row: int, col: int) -> None:
        """Toggle a flag, or flag every unrevealed neighbor of a revealed cell."""
        if self.board.get_cell(row, col).is_revealed:
            set_adjacent_cells_flags(self.board, row, col, True)
        else:
            toggle_flag_cell(self.board, row, col)

    def _finish_round(self, outcome: GameState) -> None:
        self.game_state = outcome
        if outcome == GameState.WON:
            self.stats.wins += 1
            if self._round_start is not None:
                self.stats.round_times.append(self.clock() - self._round_start)
            logger.info("Field cleared (%d wins)", self.stats.wins)
        else:
            self.stats.losses += 1
            logger.info("Mine hit (%d losses)", self.stats.losses)
        self.new_round()
