"""
Minesweeper game module.

Provides the board model, random layout generation and the reveal/flag
operations used during play.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, Position, BEGINNER, INTERMEDIATE, EXPERT
from .generator import generate_board
from .reveal import (
    reveal_cell,
    reveal_adjacent_cells,
    toggle_flag_cell,
    set_adjacent_cells_flags,
    field_clear,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Position",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "generate_board",
    "reveal_cell",
    "reveal_adjacent_cells",
    "toggle_flag_cell",
    "set_adjacent_cells_flags",
    "field_clear",
    "MinesweeperEnv",
]
