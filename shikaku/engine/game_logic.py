"""Board checks used while a player places rectangles."""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.models import Clue, Puzzle, Rect, RectCheck, clues_inside


def check_rect(rect: Rect, clues: Sequence[Clue]) -> RectCheck:
    """A rectangle is correct when it holds exactly one clue equal to its area."""

    inside = clues_inside(rect, clues)
    if len(inside) == 1:
        index = inside[0]
        return RectCheck(is_correct=clues[index].value == rect.area, clue_index=index)
    return RectCheck(is_correct=False, clue_index=-1)


def rects_overlap(a: Rect, b: Rect) -> bool:
    return a.overlaps(b)


def check_complete(placed: Sequence[Rect], puzzle: Puzzle) -> bool:
    covered = [[False] * puzzle.width for _ in range(puzzle.height)]
    for rect in placed:
        if not check_rect(rect, puzzle.clues).is_correct:
            return False
        for r, c in rect.cells():
            if 0 <= r < puzzle.height and 0 <= c < puzzle.width:
                covered[r][c] = True
    return all(all(row) for row in covered)


def reveal_hint(puzzle: Puzzle, placed: Sequence[Rect]) -> Optional[Rect]:
    """First solution rectangle not yet placed and clear of every placed rectangle."""

    placed_set = set(placed)
    for rect in puzzle.solution:
        if rect in placed_set:
            continue
        if any(rect.overlaps(other) for other in placed):
            continue
        return rect
    return None
