"""Clue binding: one numbered cell per partitioned rectangle."""

from __future__ import annotations

from typing import List, Sequence

from ..core.models import Clue, Rect
from .prng import SeededRng, seeded_choice


def bind_clue(rect: Rect, rng: SeededRng) -> Clue:
    """Pick a uniformly random cell of ``rect`` to carry its area."""

    row, col = seeded_choice(list(rect.cells()), rng)
    return Clue(row=row, col=col, value=rect.area)


def bind_clues(rects: Sequence[Rect], rng: SeededRng) -> List[Clue]:
    """Return clues aligned with ``rects``: ``clues[i]`` lies inside ``rects[i]``."""

    return [bind_clue(rect, rng) for rect in rects]
