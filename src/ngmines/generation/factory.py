"""
No-guess board factory.

Generates random boards and certifies them with the no-guess solver
until one passes. The loop can run on the caller's thread or as a
cancellable background task.
"""
import logging
import random
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from ..game.board import Board
from ..game.generator import generate_board
from ..solver.no_guess import NoGuessSolver
from ..solver.result import Found

logger = logging.getLogger(__name__)


# ============================================================================
# Errors
# ============================================================================

class GenerationError(RuntimeError):
    """Base class for failures of the generate-and-retry loop."""


class GenerationExhausted(GenerationError):
    """No no-guess board was found within max_attempts."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"No no-guess board found after {attempts} attempts")
        self.attempts = attempts


class GenerationCancelled(GenerationError):
    """The generation task was cancelled before a board was found."""


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class GenerationConfig:
    """
    Configuration for the retry loop.

    Attributes:
        max_attempts: Boards to try before giving up; None retries forever.
        seed: Seed for mine placement; None for a fresh random layout.
    """

    max_attempts: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


# ============================================================================
# Background Task
# ============================================================================

class GenerationTask:
    """Handle on a board being generated in the background."""

    def __init__(self, future: "Future[Board]", cancel_event: threading.Event) -> None:
        self.future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Ask the loop to stop before its next attempt."""
        self._cancel_event.set()
        self.future.cancel()

    def done(self) -> bool:
        return self.future.done()

    def result(self, timeout: Optional[float] = None) -> Board:
        """
        Wait for the board.

        Raises:
            GenerationCancelled: If the task was cancelled.
            GenerationExhausted: If max_attempts ran out.
        """
        if self.future.cancelled():
            raise GenerationCancelled("Generation was cancelled before it started")
        return self.future.result(timeout=timeout)


# ============================================================================
# Board Factory
# ============================================================================

class BoardFactory:
    """
    Generates boards, optionally certified as no-guess solvable.

    Background tasks run on a single worker thread. Use the factory as a
    context manager, or call shutdown(), to cancel outstanding tasks and
    stop the worker.
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        solver: Optional[NoGuessSolver] = None,
    ) -> None:
        """
        Initialize the factory.

        Args:
            config: Retry loop configuration.
            solver: Certifier to use (default: all rules enabled).
        """
        self.config = config or GenerationConfig()
        self.solver = solver or NoGuessSolver()
        self._rng = random.Random(self.config.seed)
        self._executor: Optional[ThreadPoolExecutor] = None
        self._tasks: List[GenerationTask] = []

    def __enter__(self) -> "BoardFactory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def generate_board(self, mine_count: int, width: int, height: int) -> Board:
        """Generate a plain board with no solvability guarantee."""
        return generate_board(mine_count, width, height, rng=self._rng)

    def generate_ng_solvable_board(
        self,
        mine_count: int,
        width: int,
        height: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> Board:
        """
        Generate boards until one is no-guess solvable.

        Args:
            mine_count: Number of mines.
            width: Number of columns.
            height: Number of rows.
            cancel_event: Checked before every attempt.

        Returns:
            Board with exactly one cell marked safe_start.

        Raises:
            ValueError: If the dimensions or mine count are invalid.
            GenerationExhausted: If max_attempts boards all failed.
            GenerationCancelled: If cancel_event was set.
        """
        return self._generate_ng(mine_count, width, height, self._rng, cancel_event)

    def _generate_ng(
        self,
        mine_count: int,
        width: int,
        height: int,
        rng: random.Random,
        cancel_event: Optional[threading.Event],
    ) -> Board:
        attempts = 0
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise GenerationCancelled(f"Cancelled after {attempts} attempts")
            if self.config.max_attempts is not None and attempts >= self.config.max_attempts:
                raise GenerationExhausted(attempts)

            attempts += 1
            board = generate_board(mine_count, width, height, rng=rng)
            result = self.solver.solve(board, mine_count)
            if isinstance(result, Found):
                board.mark_safe_start(result.row, result.col)
                logger.info(
                    "Generated no-guess %dx%d board with %d mines after %d attempt(s), "
                    "safe start at %s",
                    width, height, mine_count, attempts, result.position,
                )
                return board

            logger.debug(
                "Board %d is not no-guess solvable (%d openings tried), "
                "generating a new board and trying again",
                attempts, result.candidates_tried,
            )

    def submit(self, mine_count: int, width: int, height: int) -> GenerationTask:
        """
        Run generate_ng_solvable_board on a background thread.

        Each task draws from its own generator, seeded from the factory's
        at submit time, so seeded results don't depend on thread timing.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="board-factory"
            )
        rng = random.Random(self._rng.getrandbits(64))
        cancel_event = threading.Event()
        future = self._executor.submit(
            self._generate_ng, mine_count, width, height, rng, cancel_event
        )
        task = GenerationTask(future, cancel_event)
        self._tasks = [t for t in self._tasks if not t.done()]
        self._tasks.append(task)
        return task

    def shutdown(self) -> None:
        """Cancel outstanding tasks and stop the background worker."""
        for task in self._tasks:
            task.cancel()
        self._tasks = []
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


def generate_ng_solvable_board(
    mine_count: int,
    width: int,
    height: int,
    max_attempts: Optional[int] = None,
    seed: Optional[int] = None,
) -> Board:
    """Generate one no-guess board with a throwaway factory."""
    factory = BoardFactory(GenerationConfig(max_attempts=max_attempts, seed=seed))
    return factory.generate_ng_solvable_board(mine_count, width, height)
