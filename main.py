#!/usr/bin/env python3
"""
No-guess Minesweeper - Main entry point.

Usage:
    python main.py generate [--width W] [--height H] [--mines N]
    python main.py certify [--boards N]
    python main.py play [--difficulty {beginner,intermediate,expert}]
"""
import argparse
import logging
import random
import sys
from typing import List, Optional

from ngmines.game import BEGINNER, INTERMEDIATE, EXPERT, BoardConfig, generate_board
from ngmines.generation import (
    BoardFactory,
    GameSession,
    GameState,
    GenerationConfig,
    GenerationError,
    InputAction,
    InputState,
    SessionConfig,
)
from ngmines.solver import Found, NoGuessSolver

DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def generate(args: argparse.Namespace) -> None:
    """Generate and print a no-guess board."""
    factory = BoardFactory(
        GenerationConfig(max_attempts=args.max_attempts, seed=args.seed)
    )
    try:
        board = factory.generate_ng_solvable_board(args.mines, args.width, args.height)
    except GenerationError as exc:
        print(f"Generation failed: {exc}")
        sys.exit(1)

    print(f"{args.width}x{args.height} board with {args.mines} mines")
    print(f"Safe start: {board.safe_start}\n")
    print(board.render(show_mines=args.show_mines))


def certify(args: argparse.Namespace) -> None:
    """Report how many random boards are no-guess solvable."""
    rng = random.Random(args.seed)
    solver = NoGuessSolver()

    solvable = 0
    for _ in range(args.boards):
        board = generate_board(args.mines, args.width, args.height, rng=rng)
        if isinstance(solver.solve(board, args.mines), Found):
            solvable += 1

    density = args.mines / (args.width * args.height)
    print(f"Board: {args.width}x{args.height} with {args.mines} mines ({density:.1%} density)")
    print(f"No-guess solvable: {solvable}/{args.boards} ({solvable / args.boards:.1%})")


def play(args: argparse.Namespace) -> None:
    """Play in the terminal: 'm row col' mines/chords, 'f row col' flags, 'q' quits."""
    preset = DIFFICULTIES[args.difficulty]
    config = SessionConfig(
        board=BoardConfig(preset.width, preset.height, preset.num_mines),
        seed=args.seed,
    )
    session = GameSession(config)
    input_state = InputState()

    print(play.__doc__)
    while True:
        print()
        print(session.board.render())
        try:
            line = input("> ").split()
        except EOFError:
            break
        if not line:
            continue
        if line[0] == "q":
            break
        if line[0] not in ("m", "f") or len(line) != 3:
            print("Commands: m ROW COL, f ROW COL, q")
            continue

        try:
            row, col = int(line[1]), int(line[2])
        except ValueError:
            print("Row and column must be integers")
            continue
        if not session.board.is_valid_position(row, col):
            print("Position is off the board")
            continue

        action = InputAction.MINE if line[0] == "m" else InputAction.FLAG
        input_state.hovered = (row, col)
        input_state.press(action)
        outcome = session.tick(input_state)
        input_state.release(action)
        input_state.end_tick()

        if outcome == GameState.WON:
            print(f"\n*** FIELD CLEAR! ({session.stats.wins} wins) ***")
        elif outcome == GameState.LOST:
            print(f"\n*** BOOM ({session.stats.losses} losses) ***")

    stats = session.stats
    print(f"\nWins: {stats.wins} | Losses: {stats.losses} | Avg time: {stats.average_time:.2f}s")


def check_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject board and count arguments that would fail later."""
    if args.command in ("generate", "certify"):
        try:
            BoardConfig(args.width, args.height, args.mines)
        except ValueError as exc:
            parser.error(str(exc))
    if args.command == "generate" and args.max_attempts is not None and args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")
    if args.command == "certify" and args.boards < 1:
        parser.error("--boards must be at least 1")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="No-guess Minesweeper - Generate and certify boards"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log generation progress"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Print a no-guess board")
    gen_parser.add_argument("--width", type=int, default=9, help="Board width")
    gen_parser.add_argument("--height", type=int, default=9, help="Board height")
    gen_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    gen_parser.add_argument(
        "--max-attempts", type=int, default=None, help="Give up after N boards"
    )
    gen_parser.add_argument(
        "--show-mines", action="store_true", help="Show mine positions"
    )

    # Certify command
    cert_parser = subparsers.add_parser(
        "certify", help="Measure the no-guess rate of random boards"
    )
    cert_parser.add_argument("--width", type=int, default=9, help="Board width")
    cert_parser.add_argument("--height", type=int, default=9, help="Board height")
    cert_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    cert_parser.add_argument(
        "--boards", type=int, default=100, help="Number of boards to test"
    )
    cert_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="beginner",
        help="Board preset",
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)
    check_args(parser, args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "generate":
        generate(args)
    elif args.command == "certify":
        certify(args)
    elif args.command == "play":
        play(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
