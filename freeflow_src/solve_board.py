"""Solve a Flow Free puzzle from the command line."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from freeflow_src.flowfree.board import Board, parse_grid, validate
from freeflow_src.flowfree.errors import InvalidBoardError, SearchBudgetExceeded
from freeflow_src.flowfree.search import ORDERS, SearchStats, StateSearch
from freeflow_src.util.config import get_key, is_verbose
from freeflow_src.util.save_util import export_ndarray, import_ndarray

SAMPLE_GRID: list[list[int]] = [
    [0, 0, 0, 0],
    [0, 1, 2, 0],
    [0, 0, 0, 0],
    [2, 0, 0, 1],
]


def non_negative_int(text: str) -> int:
    """Argparse type for counts that may be zero but not negative."""
    try:
        value = int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from e
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the solver."""
    parser = argparse.ArgumentParser(description="Find every way to fill a Flow Free board.")
    parser.add_argument(
        "puzzle",
        nargs="?",
        type=Path,
        help="Text file with one digit per cell (0 or . for empty), or a .npy/.npz grid. "
        "Defaults to a built-in 4x4 sample.",
    )
    parser.add_argument("-o", "--order", choices=ORDERS, default=get_key("search.order", "bfs"))
    parser.add_argument(
        "-m",
        "--max-expansions",
        type=non_negative_int,
        default=get_key("search.max_expansions", None),
        help="Give up after expanding this many states",
    )
    parser.add_argument(
        "-u",
        "--unique",
        action="store_true",
        default=get_key("search.unique", False),
        help="Print each distinct solved board only once",
    )
    parser.add_argument("-l", "--limit", type=non_negative_int, default=None, help="Stop after N solutions")
    parser.add_argument("-s", "--save", type=Path, default=None, help="Save the first solution as .npy")
    parser.add_argument("-v", "--verbose", action="store_true", default=is_verbose())
    return parser.parse_args(argv)


def load_grid(path: Path) -> list[list[int]]:
    """Read a puzzle grid from a text or numpy file."""
    if path.suffix in (".npy", ".npz"):
        return import_ndarray(path).tolist()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidBoardError(f"{path} is not a utf-8 text file") from e
    return parse_grid(text)


def format_board(board: Board) -> str:
    """Render a board, falling back to space separated numbers for more than nine colors."""
    try:
        return board.render()
    except ValueError:
        return "\n".join(" ".join(f"{v:>2}" for v in row) for row in board.cells.tolist())


def main(argv: list[str] | None = None) -> int:
    """Solve the puzzle and print every solution, separated by blank lines."""
    args = parse_args(argv)

    try:
        grid = load_grid(args.puzzle) if args.puzzle else SAMPLE_GRID
        board = validate(grid)
    except OSError as e:
        print(f"Cannot read {args.puzzle}: {e}")
        return 1
    except InvalidBoardError as e:
        print("invalid")
        if args.verbose:
            print(e)
        return 1

    print(format_board(board))

    stats = SearchStats()
    search = StateSearch(
        board,
        order=args.order,
        max_expansions=args.max_expansions,
        unique=args.unique,
        stats=stats,
        verbose=args.verbose,
    )
    try:
        for state in search:
            print()
            print(format_board(state.board))
            if args.save is not None and stats.solutions == 1:
                saved = export_ndarray(state.board.cells, args.save)
                if args.verbose:
                    print(f"Saved first solution to {saved}")
            if args.limit is not None and stats.solutions >= args.limit:
                break
    except SearchBudgetExceeded as e:
        print(f"Gave up: {e}")
        return 2

    if stats.solutions == 0:
        print()
        print("no solution")
    return 0


if __name__ == "__main__":
    sys.exit(main())
