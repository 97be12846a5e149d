"""
Random mine layout generation.

Produces structurally valid boards only; no-guess certification is
layered on top by the solver and the board factory.
"""
import random
from typing import Optional

from .board import Board, BoardConfig


def generate_board(
    mine_count: int,
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Generate a board with mines placed uniformly at random.

    Args:
        mine_count: Number of mines, 0 <= mine_count < width * height.
        width: Number of columns.
        height: Number of rows.
        rng: Random source; a fresh unseeded one when omitted.

    Returns:
        Board with mines placed and adjacency counts computed.

    Raises:
        ValueError: If the dimensions or mine count are invalid.
    """
    config = BoardConfig(width=width, height=height, num_mines=mine_count)
    rng = rng or random.Random()

    board = Board(config)
    positions = list(board.positions())
    board.place_mines(rng.sample(positions, config.num_mines))
    return board
