"""Deterministic validation of submitted dissections.

The validator never trusts a stored puzzle. It regenerates the canonical
clues from ``(seed, difficulty, width, height)`` and checks the submitted
rectangles against them. Any legal dissection of that clue layout passes,
not only the recorded solution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..core.constants import Difficulty
from ..core.exceptions import ShikakuError, ValidationError
from ..core.models import Clue, Rect
from ..utils.logger import get_logger
from .generator import GeneratorConfig, generate_puzzle


LOGGER = get_logger(__name__)

RectLike = Union[Rect, Mapping[str, Any]]

REASON_REGENERATE = "Failed to regenerate puzzle"
REASON_BOUNDS = "Invalid rectangle bounds"
REASON_OVERLAP = "Overlapping rectangles"
REASON_UNCOVERED = "Grid not fully covered"
REASON_MULTIPLE_CLUES = "Rectangle contains multiple clues"
REASON_NO_CLUE = "Rectangle contains no clue"
REASON_AREA = "Rectangle area does not match clue value"
REASON_CLUE_REUSED = "Clue used by multiple rectangles"
REASON_CLUE_UNCLAIMED = "Not all clues covered"


@dataclass
class ValidationResult:
    valid: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        payload: dict = {"valid": self.valid}
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class SolveValidator:
    """Checks a rectangle list against an explicit clue layout."""

    def __init__(self, width: int, height: int, clues: Sequence[Clue]) -> None:
        self.width = width
        self.height = height
        self.clues = list(clues)

    def validate(self, placed: Sequence[RectLike]) -> ValidationResult:
        try:
            rects = self._check_bounds(placed)
            self._check_coverage(rects)
            self._check_clues(rects)
        except ValidationError as exc:
            LOGGER.info("Rejected submission: %s", exc)
            return ValidationResult(valid=False, reason=str(exc))
        return ValidationResult(valid=True)

    def _check_bounds(self, placed: Sequence[RectLike]) -> List[Rect]:
        rects: List[Rect] = []
        for item in placed:
            fields = self._fields(item)
            if fields is None:
                raise ValidationError(REASON_BOUNDS)
            row, col, width, height = fields
            if (
                row < 0 or col < 0 or width < 1 or height < 1
                or row + height > self.height or col + width > self.width
            ):
                raise ValidationError(REASON_BOUNDS)
            rects.append(Rect(row, col, width, height))
        return rects

    @staticmethod
    def _fields(item: RectLike) -> Optional[tuple]:
        if isinstance(item, Rect):
            values = (item.row, item.col, item.width, item.height)
        elif isinstance(item, Mapping):
            values = tuple(item.get(key) for key in ("row", "col", "width", "height"))
        else:
            return None
        fields = []
        for value in values:
            # JSON clients may send 2.0 for 2.
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if isinstance(value, bool) or not isinstance(value, int):
                return None
            fields.append(value)
        return tuple(fields)

    def _check_coverage(self, rects: Sequence[Rect]) -> None:
        covered = [[False] * self.width for _ in range(self.height)]
        for rect in rects:
            for r, c in rect.cells():
                if covered[r][c]:
                    raise ValidationError(REASON_OVERLAP)
                covered[r][c] = True
        for r in range(self.height):
            for c in range(self.width):
                if not covered[r][c]:
                    raise ValidationError(REASON_UNCOVERED)

    def _check_clues(self, rects: Sequence[Rect]) -> None:
        claimed = [False] * len(self.clues)
        for rect in rects:
            matched = -1
            for index, clue in enumerate(self.clues):
                if not rect.contains(clue.row, clue.col):
                    continue
                if matched != -1:
                    raise ValidationError(REASON_MULTIPLE_CLUES)
                matched = index
            if matched == -1:
                raise ValidationError(REASON_NO_CLUE)
            if self.clues[matched].value != rect.area:
                raise ValidationError(REASON_AREA)
            if claimed[matched]:
                raise ValidationError(REASON_CLUE_REUSED)
            claimed[matched] = True
        if not all(claimed):
            raise ValidationError(REASON_CLUE_UNCLAIMED)


def validate_solve(
    placed: Sequence[RectLike],
    seed: str,
    difficulty: Union[Difficulty, str],
    width: int,
    height: int,
) -> ValidationResult:
    """Validate ``placed`` against the clues regenerated from the seed."""

    try:
        puzzle = generate_puzzle(
            GeneratorConfig(difficulty=difficulty, seed=seed, width=width, height=height)
        )
    except ShikakuError as exc:
        LOGGER.warning("Could not regenerate puzzle for seed %r: %s", seed, exc)
        return ValidationResult(valid=False, reason=REASON_REGENERATE)
    if puzzle.width != width or puzzle.height != height:
        return ValidationResult(valid=False, reason=REASON_REGENERATE)
    return SolveValidator(width, height, puzzle.clues).validate(placed)
