"""
Reveal and flag operations on a board.

These are the only functions that change cell state during play.
Out-of-range coordinates raise IndexError from Board.get_cell.
"""
from collections import deque
from typing import Deque, Set

from .board import Board, Position


# ============================================================================
# Revealing
# ============================================================================

def reveal_cell(board: Board, row: int, col: int) -> bool:
    """
    Reveal a cell, cascading through connected empty cells.

    Flagged and already revealed cells are left alone. Revealing an
    empty cell opens its whole zero region plus the numbered cells on
    its border; numbered cells are revealed but never expanded.

    Args:
        board: Board to mutate.
        row: Row index to reveal.
        col: Column index to reveal.

    Returns:
        False if the cell is a mine (loss signal), True otherwise.
    """
    cell = board.get_cell(row, col)
    if not cell.is_hidden:
        return True

    cell.reveal()
    if cell.is_mine:
        return False

    if cell.adjacent_mines == 0:
        _cascade(board, (row, col))
    return True


def _cascade(board: Board, start: Position) -> None:
    """Open the zero region around start using an explicit work queue."""
    queue: Deque[Position] = deque([start])
    visited: Set[Position] = {start}

    while queue:
        row, col = queue.popleft()
        for neighbor in board.neighbors(row, col):
            if neighbor in visited:
                continue
            visited.add(neighbor)

            cell = board.get_cell(*neighbor)
            if not cell.is_hidden or cell.is_mine:
                continue
            cell.reveal()
            if cell.adjacent_mines == 0:
                queue.append(neighbor)


def reveal_adjacent_cells(board: Board, row: int, col: int) -> bool:
    """
    Chord: reveal all unflagged neighbors of a satisfied number.

    Only acts when the cell is revealed, numbered, and has exactly as
    many flagged neighbors as adjacent mines.

    Returns:
        False as soon as a revealed neighbor is a mine, True otherwise.
    """
    cell = board.get_cell(row, col)
    if not cell.is_revealed or not cell.is_numbered:
        return True
    if count_adjacent_flags(board, row, col) != cell.adjacent_mines:
        return True

    for neighbor_row, neighbor_col in board.neighbors(row, col):
        if not board.get_cell(neighbor_row, neighbor_col).is_hidden:
            continue
        if not reveal_cell(board, neighbor_row, neighbor_col):
            return False
    return True


def count_adjacent_flags(board: Board, row: int, col: int) -> int:
    """Count flagged cells adjacent to position."""
    return sum(
        1 for nr, nc in board.neighbors(row, col)
        if board.get_cell(nr, nc).is_flagged
    )


# ============================================================================
# Flagging
# ============================================================================

def toggle_flag_cell(board: Board, row: int, col: int) -> None:
    """Flip the flag on an unrevealed cell; revealed cells are ignored."""
    board.get_cell(row, col).toggle_flag()


def set_adjacent_cells_flags(board: Board, row: int, col: int, value: bool) -> None:
    """Set the flag of every unrevealed neighbor of (row, col) to value."""
    board.get_cell(row, col)
    for neighbor_row, neighbor_col in board.neighbors(row, col):
        board.get_cell(neighbor_row, neighbor_col).set_flag(value)


# ============================================================================
# Win Condition
# ============================================================================

def field_clear(board: Board) -> bool:
    """Check if every non-mine cell is revealed and no mine is."""
    revealed = 0
    for cell in board.cells():
        if cell.is_revealed:
            if cell.is_mine:
                return False
            revealed += 1
    return revealed == board.safe_cell_count
