"""CP-SAT dissection counting using OR-Tools.

An independent check on how many dissections a clue layout admits. It models
the puzzle as an exact cover: one boolean per legal ``(clue, placement)``
pair, exactly one placement per clue and exactly one covering placement per
cell. It is used to audit generated puzzles; generation itself relies on the
backtracking solver because its contradiction count is the difficulty measure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.models import Clue, Puzzle, Rect
from ..utils.logger import get_logger
from .solver import factor_pairs


LOGGER = get_logger(__name__)


@dataclass
class CpSatAudit:
    status: str
    solutions: List[Tuple[Rect, ...]] = field(default_factory=list)
    complete: bool = True

    @property
    def is_unique(self) -> bool:
        return self.complete and len(self.solutions) == 1

    @property
    def solution_count(self) -> int:
        return len(self.solutions)


class _DissectionCollector(cp_model.CpSolverSolutionCallback):
    """Records each dissection found and stops once ``limit`` is reached."""

    def __init__(self, choices: List[List[Tuple[Rect, cp_model.IntVar]]], limit: int) -> None:
        super().__init__()
        self._choices = choices
        self._limit = limit
        self.solutions: List[Tuple[Rect, ...]] = []

    def on_solution_callback(self) -> None:
        picked = []
        for options in self._choices:
            for rect, var in options:
                if self.boolean_value(var):
                    picked.append(rect)
                    break
        self.solutions.append(tuple(picked))
        if len(self.solutions) >= self._limit:
            self.stop_search()


def placements_for(index: int, clues: Sequence[Clue], width: int, height: int) -> List[Rect]:
    """Every in-bounds rectangle sized for ``clues[index]`` that holds no other clue."""

    clue = clues[index]
    others = [(c.row, c.col) for i, c in enumerate(clues) if i != index]
    placements: List[Rect] = []
    for w, h in factor_pairs(clue.value):
        if w > width or h > height:
            continue
        for row in range(max(0, clue.row - h + 1), min(clue.row, height - h) + 1):
            for col in range(max(0, clue.col - w + 1), min(clue.col, width - w) + 1):
                rect = Rect(row, col, w, h)
                if any(rect.contains(r, c) for r, c in others):
                    continue
                placements.append(rect)
    return placements


def count_dissections(puzzle: Puzzle, limit: int = 2, timeout: float = 10.0) -> CpSatAudit:
    """Enumerate up to ``limit`` dissections of ``puzzle``'s clue layout."""

    if not puzzle.clues:
        return CpSatAudit(status="INFEASIBLE")

    model = cp_model.CpModel()
    choices: List[List[Tuple[Rect, cp_model.IntVar]]] = []
    covering: Dict[Tuple[int, int], List[cp_model.IntVar]] = {
        (r, c): [] for r in range(puzzle.height) for c in range(puzzle.width)
    }

    for index, clue in enumerate(puzzle.clues):
        options: List[Tuple[Rect, cp_model.IntVar]] = []
        for rect in placements_for(index, puzzle.clues, puzzle.width, puzzle.height):
            var = model.new_bool_var(f"p_{index}_{rect.row}_{rect.col}_{rect.width}x{rect.height}")
            options.append((rect, var))
            for cell in rect.cells():
                covering[cell].append(var)
        if not options:
            LOGGER.debug("Clue %d at (%d,%d) has no placement", index, clue.row, clue.col)
            return CpSatAudit(status="INFEASIBLE")
        model.add_exactly_one([var for _, var in options])
        choices.append(options)

    for cell, vars_ in covering.items():
        if not vars_:
            return CpSatAudit(status="INFEASIBLE")
        model.add_exactly_one(vars_)

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.enumerate_all_solutions = True
    collector = _DissectionCollector(choices, limit)

    status = solver.solve(model, collector)
    status_name = solver.status_name(status)
    # OPTIMAL: enumeration ran to completion. FEASIBLE: stopped at the limit or timed out.
    complete = status in (cp_model.OPTIMAL, cp_model.INFEASIBLE)
    LOGGER.info(
        "CP-SAT audit: %d dissection(s) found (status=%s, %.2fs)",
        len(collector.solutions), status_name, solver.wall_time,
    )
    return CpSatAudit(status=status_name, solutions=collector.solutions, complete=complete)
