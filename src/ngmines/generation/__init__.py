"""
Board generation and game session module.

Provides the generate-and-certify factory and the session that drives
a board from per-tick input.
"""
from .factory import (
    BoardFactory,
    GenerationConfig,
    GenerationTask,
    GenerationError,
    GenerationExhausted,
    GenerationCancelled,
    generate_ng_solvable_board,
)
from .session import (
    GameSession,
    GameState,
    InputAction,
    InputState,
    SessionConfig,
    SessionStats,
)

__all__ = [
    "BoardFactory",
    "GenerationConfig",
    "GenerationTask",
    "GenerationError",
    "GenerationExhausted",
    "GenerationCancelled",
    "generate_ng_solvable_board",
    "GameSession",
    "GameState",
    "InputAction",
    "InputState",
    "SessionConfig",
    "SessionStats",
]
