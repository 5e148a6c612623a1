"""Backtracking Shikaku solver with forced-move propagation.

The solver owns a flat ``width * height`` list of owner indices (``-1`` for
uncovered cells) and an append-only trail of ``(cell, previous_owner)``
pairs. Placements push onto the trail; undoing pops back to a recorded mark
in LIFO order, so no grid copies are made while searching.

Search outcome doubles as the difficulty measure: ``backtracks`` counts the
contradictions met across the whole search.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_MAX_NODES, MAX_SEARCH_DEPTH
from ..core.models import Clue, Puzzle, Rect, SolverResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def factor_pairs(value: int) -> List[Tuple[int, int]]:
    """All ``(width, height)`` pairs with ``width * height == value``."""

    return [(w, value // w) for w in range(1, value + 1) if value % w == 0]


class ShikakuSolver:
    """Single-use search over one puzzle's clues."""

    def __init__(
        self,
        width: int,
        height: int,
        clues: Sequence[Clue],
        find_all: bool = True,
        max_nodes: int = DEFAULT_MAX_NODES,
        max_depth: int = MAX_SEARCH_DEPTH,
    ) -> None:
        self.width = width
        self.height = height
        self.clues = list(clues)
        self.max_nodes = max_nodes
        self.max_depth = max_depth
        self.max_solutions = 2 if find_all else 1

        self.owners: List[int] = [-1] * (width * height)
        self.clue_at: List[int] = [-1] * (width * height)
        self.trail: List[Tuple[int, int]] = []
        self.assigned: List[Optional[Rect]] = [None] * len(self.clues)
        self.resolved: List[bool] = [False] * len(self.clues)
        self.shapes: List[List[Tuple[int, int]]] = []

        self.backtracks = 0
        self.nodes = 0
        self.aborted = False
        self.solutions: List[Tuple[Rect, ...]] = []

        for index, clue in enumerate(self.clues):
            self.shapes.append(
                [(w, h) for w, h in factor_pairs(clue.value) if w <= width and h <= height]
                if clue.value > 0 else []
            )
            if 0 <= clue.row < height and 0 <= clue.col < width:
                self.clue_at[clue.row * width + clue.col] = index

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> SolverResult:
        total = sum(clue.value for clue in self.clues)
        if total != self.width * self.height or not self._clues_well_placed():
            LOGGER.debug(
                "Clue areas sum to %d for a %dx%d grid; no dissection possible",
                total, self.width, self.height,
            )
            return SolverResult(solution=None, backtracks=0, is_unique=False)

        self._search(0)
        result = SolverResult(
            solution=self.solutions[0] if self.solutions else None,
            backtracks=self.backtracks,
            is_unique=len(self.solutions) == 1 and not self.aborted,
            nodes=self.nodes,
            aborted=self.aborted,
        )
        LOGGER.debug(
            "Solver finished: nodes=%d backtracks=%d solutions=%d aborted=%s",
            self.nodes, self.backtracks, len(self.solutions), self.aborted,
        )
        return result

    def _clues_well_placed(self) -> bool:
        seen = set()
        for clue in self.clues:
            key = (clue.row, clue.col)
            if not (0 <= clue.row < self.height and 0 <= clue.col < self.width) or key in seen:
                return False
            seen.add(key)
        return True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search(self, depth: int) -> None:
        self.nodes += 1
        if self.nodes > self.max_nodes or depth > self.max_depth:
            self.aborted = True
            return

        mark = len(self.trail)
        forced: List[int] = []
        if not self._propagate(forced):
            self.backtracks += 1
            self._rollback(mark, forced)
            return

        branch = self._most_constrained()
        if branch is None:
            self.solutions.append(tuple(self.assigned))  # type: ignore[arg-type]
            self._rollback(mark, forced)
            return

        index, candidates = branch
        if not candidates:
            self.backtracks += 1
            self._rollback(mark, forced)
            return

        for candidate in candidates:
            if len(self.solutions) >= self.max_solutions or self.nodes > self.max_nodes:
                break
            inner_mark = len(self.trail)
            self._place(index, candidate)
            self._search(depth + 1)
            self._unplace(index, inner_mark)

        self._rollback(mark, forced)

    def _propagate(self, forced: List[int]) -> bool:
        """Place every forced clue until a fixpoint; False on contradiction."""

        progress = True
        while progress:
            progress = False
            for index in range(len(self.clues)):
                if self.resolved[index]:
                    continue
                candidates = self.candidates(index)
                if not candidates:
                    return False
                if len(candidates) == 1:
                    self._place(index, candidates[0])
                    forced.append(index)
                    progress = True
        return True

    def _most_constrained(self) -> Optional[Tuple[int, List[Rect]]]:
        best: Optional[Tuple[int, List[Rect]]] = None
        for index in range(len(self.clues)):
            if self.resolved[index]:
                continue
            candidates = self.candidates(index)
            if best is None or len(candidates) < len(best[1]):
                best = (index, candidates)
                if not candidates:
                    break
        return best

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------
    def candidates(self, index: int) -> List[Rect]:
        """Legal placements for clue ``index`` against the current grid."""

        clue = self.clues[index]
        found: List[Rect] = []
        for w, h in self.shapes[index]:
            for row in range(max(0, clue.row - h + 1), min(clue.row, self.height - h) + 1):
                for col in range(max(0, clue.col - w + 1), min(clue.col, self.width - w) + 1):
                    if self._is_free(row, col, w, h, index):
                        found.append(Rect(row, col, w, h))
        return found

    def _is_free(self, row: int, col: int, w: int, h: int, index: int) -> bool:
        owners = self.owners
        clue_at = self.clue_at
        for r in range(row, row + h):
            start = r * self.width + col
            for cell in range(start, start + w):
                if owners[cell] != -1:
                    return False
                other = clue_at[cell]
                if other != -1 and other != index:
                    return False
        return True

    # ------------------------------------------------------------------
    # Trail
    # ------------------------------------------------------------------
    def _place(self, index: int, rect: Rect) -> None:
        owners = self.owners
        for r in range(rect.row, rect.bottom):
            start = r * self.width + rect.col
            for cell in range(start, start + rect.width):
                self.trail.append((cell, owners[cell]))
                owners[cell] = index
        self.resolved[index] = True
        self.assigned[index] = rect

    def _unplace(self, index: int, mark: int) -> None:
        self._restore(mark)
        self.resolved[index] = False
        self.assigned[index] = None

    def _rollback(self, mark: int, forced: List[int]) -> None:
        self._restore(mark)
        for index in forced:
            self.resolved[index] = False
            self.assigned[index] = None

    def _restore(self, mark: int) -> None:
        owners = self.owners
        trail = self.trail
        while len(trail) > mark:
            cell, previous = trail.pop()
            owners[cell] = previous


def solve(puzzle: Puzzle, find_all: bool = True, max_nodes: int = DEFAULT_MAX_NODES) -> SolverResult:
    """Solve ``puzzle`` from its clues alone; its ``solution`` field is ignored.

    With ``find_all`` the search continues after the first solution just far
    enough to tell whether a second one exists.
    """

    solver = ShikakuSolver(
        puzzle.width, puzzle.height, puzzle.clues, find_all=find_all, max_nodes=max_nodes
    )
    return solver.run()
