#!/usr/bin/env python3
"""Watch the no-guess solver clear a board step by step."""
import time
import os

from ngmines.game import reveal_cell
from ngmines.generation import generate_ng_solvable_board
from ngmines.solver import NoGuessSolver


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.5, games: int = 3, size: int = 9, mines: int = 10):
    """Generate no-guess boards and replay the deductions that clear them."""
    solver = NoGuessSolver()

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    for game in range(games):
        board = generate_ng_solvable_board(mines, size, size)
        opening = board.safe_start
        result = solver.simulate(board, opening)

        reveal_cell(board, *opening)
        clear_screen()
        print(f"=== Game {game + 1}/{games} | Opening {opening} ===\n")
        print(board.render())
        time.sleep(delay)

        for step, deduction in enumerate(result.steps, start=1):
            for row, col in sorted(deduction.mines):
                board.get_cell(row, col).set_flag(True)
            for row, col in sorted(deduction.safe):
                reveal_cell(board, row, col)

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(
                f"{deduction.rule.name}: {len(deduction.safe)} safe, "
                f"{len(deduction.mines)} mines\n"
            )
            print(board.render())
            time.sleep(delay)

        print(f"\n*** Cleared in {len(result.steps)} deduction steps ***")
        time.sleep(1.0)  # Pause between games


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.5, help="Delay between steps")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~15%% of cells)")
    args = parser.parse_args()

    # Default mines to ~15% of cells
    mines = args.mines if args.mines else int(args.size * args.size * 0.15)

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines)
