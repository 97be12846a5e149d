"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src and the project root (main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "src"))

from ngmines.game import Board, BoardConfig, Cell


# ============================================================================
# Hand-built Board Fixtures
# ============================================================================

@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the middle."""
    return Board.from_mine_layout([
        [0, 0, 0],
        [0, 1, 0],
        [0, 0, 0],
    ])


@pytest.fixture
def corner_mine_board() -> Board:
    """
    5x5 board with one mine in the top-left corner.

    Every cell except the three around the mine is empty.
    """
    layout = [[0] * 5 for _ in range(5)]
    layout[0][0] = 1
    return Board.from_mine_layout(layout)


@pytest.fixture
def wall_board() -> Board:
    """
    3x4 board with mines in both top corners.

    Opening the bottom row leaves the top row hidden behind a wall of
    ones; clearing it needs subset elimination.
    """
    return Board.from_mine_layout([
        [1, 0, 0, 1],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])


@pytest.fixture
def line_board() -> Board:
    """
    1x5 board with the mine in the middle.

    The far side can only be cleared by counting the mines left.
    """
    return Board.from_mine_layout([[0, 0, 1, 0, 0]])


@pytest.fixture
def fifty_fifty_board() -> Board:
    """
    2x3 board whose last column is a coin flip.

    Both ones see the same two hidden cells and nothing tells them apart.
    """
    return Board.from_mine_layout([
        [0, 0, 1],
        [0, 0, 0],
    ])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
