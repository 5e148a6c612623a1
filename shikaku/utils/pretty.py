"""Pretty-print helpers for puzzles and dissections."""

from __future__ import annotations

import string
import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import Puzzle, Rect, SolverResult


REGION_SYMBOLS = string.ascii_uppercase + string.ascii_lowercase + string.digits


def _header(width: int, cell_width: int) -> List[str]:
    header_cells = [f"{c:>{cell_width}}" for c in range(width)]
    return [
        "    " + " ".join(header_cells),
        "    " + "-" * ((cell_width + 1) * width - 1),
    ]


def format_puzzle(puzzle: Puzzle) -> str:
    """Render clue values on a dotted grid."""

    cell_width = max(2, len(str(max((c.value for c in puzzle.clues), default=0))))
    board = [["." for _ in range(puzzle.width)] for _ in range(puzzle.height)]
    for clue in puzzle.clues:
        board[clue.row][clue.col] = str(clue.value)
    lines = _header(puzzle.width, cell_width)
    for r, row in enumerate(board):
        lines.append(f"{r:>2} | " + " ".join(f"{symbol:>{cell_width}}" for symbol in row))
    return "\n".join(lines)


def format_solution(puzzle: Puzzle, rects: Optional[Sequence[Rect]] = None) -> str:
    """Render a dissection with one symbol per region (``?`` for gaps)."""

    rects = puzzle.solution if rects is None else rects
    board = [["?" for _ in range(puzzle.width)] for _ in range(puzzle.height)]
    for index, rect in enumerate(rects):
        symbol = REGION_SYMBOLS[index % len(REGION_SYMBOLS)]
        for r, c in rect.cells():
            board[r][c] = symbol
    lines = _header(puzzle.width, 2)
    for r, row in enumerate(board):
        lines.append(f"{r:>2} | " + " ".join(f"{symbol:>2}" for symbol in row))
    return "\n".join(lines)


def pretty_print_puzzle(puzzle: Puzzle, *, label: str | None = None, show_solution: bool = False, stream=None) -> None:
    """Print the puzzle (and optionally its dissection) in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_puzzle(puzzle), file=stream)
    if show_solution:
        print(file=stream)
        print(format_solution(puzzle), file=stream)


def print_puzzle_stats(
    puzzle: Puzzle,
    result: Optional[SolverResult] = None,
    *,
    seed: Optional[str] = None,
    stream=None,
) -> None:
    """Print grid + layout stats, and solver stats when ``result`` is given."""

    stream = stream or sys.stdout
    areas = [rect.area for rect in puzzle.solution]
    distribution = Counter(areas)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {puzzle.width} x {puzzle.height} ({puzzle.cell_count} cells)", file=stream)
    print(f"  Rectangles:    {len(puzzle.solution)}", file=stream)
    if areas:
        print(f"  Area range:    {min(areas)}-{max(areas)} (avg {sum(areas) / len(areas):.1f})", file=stream)
        parts = [f"{area}:{count}" for area, count in sorted(distribution.items())]
        print(f"  Distribution:  {' '.join(parts)}", file=stream)
        strips = sum(1 for rect in puzzle.solution if min(rect.width, rect.height) == 1)
        print(f"  Strips:        {strips}", file=stream)

    if result is not None:
        print(file=stream)
        print("--- Solver ---", file=stream)
        print(f"  Solved:        {'yes' if result.solution is not None else 'no'}", file=stream)
        print(f"  Unique:        {'yes' if result.is_unique else 'no'}", file=stream)
        print(f"  Backtracks:    {result.backtracks}", file=stream)
        print(f"  Nodes:         {result.nodes}", file=stream)
        if result.aborted:
            print("  Search hit a resource cap", file=stream)

    if seed is not None:
        print(file=stream)
        print(f"Seed: {seed}", file=stream)
