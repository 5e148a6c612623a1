"""Rectangle adjacency and greedy display colouring."""

from __future__ import annotations

from typing import Dict, List, Sequence, Set

from ..core.constants import MONDRIAN_PALETTE
from ..core.models import Rect
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

AdjacencyGraph = Dict[int, Set[int]]


def shares_edge(a: Rect, b: Rect) -> bool:
    """True when ``a`` and ``b`` share a boundary segment of positive length."""

    if a.right == b.col or b.right == a.col:
        if min(a.bottom, b.bottom) > max(a.row, b.row):
            return True
    if a.bottom == b.row or b.bottom == a.row:
        if min(a.right, b.right) > max(a.col, b.col):
            return True
    return False


def build_adjacency(rectangles: Sequence[Rect]) -> AdjacencyGraph:
    """Map each rectangle index to the indices it shares an edge with.

    Corner-only contact is not adjacency.
    """

    adjacency: AdjacencyGraph = {index: set() for index in range(len(rectangles))}
    for i in range(len(rectangles)):
        for j in range(i + 1, len(rectangles)):
            if shares_edge(rectangles[i], rectangles[j]):
                adjacency[i].add(j)
                adjacency[j].add(i)
    return adjacency


def assign_colors(
    rectangles: Sequence[Rect], palette: Sequence[str] = MONDRIAN_PALETTE
) -> Dict[int, str]:
    """Greedily colour rectangles in input order.

    Each rectangle takes the least-used palette entry not held by an already
    coloured neighbour (ties go to palette order). When every entry is
    excluded the first palette entry is used and the clash is logged.
    """

    if not palette:
        raise ValueError("Colour palette must not be empty")

    adjacency = build_adjacency(rectangles)
    colors: Dict[int, str] = {}
    usage: Dict[str, int] = {color: 0 for color in palette}

    for index in range(len(rectangles)):
        taken = {colors[n] for n in adjacency[index] if n in colors}
        legal: List[str] = [color for color in palette if color not in taken]
        if legal:
            choice = min(legal, key=lambda color: usage[color])
        else:
            choice = palette[0]
            LOGGER.warning("Rectangle %d has every colour taken by neighbours; reusing %s", index, choice)
        colors[index] = choice
        usage[choice] += 1
    return colors
