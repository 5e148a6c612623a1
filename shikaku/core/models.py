"""Data models supporting puzzle generation, solving and validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .exceptions import PuzzleFormatError


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle of grid cells anchored at its top-left cell."""

    row: int
    col: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def bottom(self) -> int:
        return self.row + self.height

    @property
    def right(self) -> int:
        return self.col + self.width

    def contains(self, row: int, col: int) -> bool:
        return self.row <= row < self.bottom and self.col <= col < self.right

    def cells(self) -> Iterator[Tuple[int, int]]:
        for r in range(self.row, self.bottom):
            for c in range(self.col, self.right):
                yield r, c

    def overlaps(self, other: "Rect") -> bool:
        return not (
            self.right <= other.col
            or other.right <= self.col
            or self.bottom <= other.row
            or other.bottom <= self.row
        )

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Clue:
    """A numbered cell; ``value`` is the area of the rectangle that owns it."""

    row: int
    col: int
    value: int

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col, "value": self.value}


@dataclass(frozen=True)
class Puzzle:
    """Generated puzzle. ``clues[i]`` belongs to ``solution[i]``."""

    width: int
    height: int
    clues: Tuple[Clue, ...]
    solution: Tuple[Rect, ...]

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the value immutable.
        object.__setattr__(self, "clues", tuple(self.clues))
        object.__setattr__(self, "solution", tuple(self.solution))

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "clues": [clue.to_dict() for clue in self.clues],
            "solution": [rect.to_dict() for rect in self.solution],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Puzzle":
        try:
            width = _as_int(payload["width"], "width")
            height = _as_int(payload["height"], "height")
            clues = [
                Clue(
                    row=_as_int(item["row"], "clue.row"),
                    col=_as_int(item["col"], "clue.col"),
                    value=_as_int(item["value"], "clue.value"),
                )
                for item in payload.get("clues", [])
            ]
            solution = [rect_from_mapping(item) for item in payload.get("solution", [])]
        except (KeyError, TypeError) as exc:
            raise PuzzleFormatError(f"Malformed puzzle payload: {exc}") from exc
        return cls(width=width, height=height, clues=tuple(clues), solution=tuple(solution))


@dataclass(frozen=True)
class SolverResult:
    solution: Optional[Tuple[Rect, ...]]
    backtracks: int
    is_unique: bool
    nodes: int = 0
    aborted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solution": [rect.to_dict() for rect in self.solution] if self.solution is not None else None,
            "backtracks": self.backtracks,
            "isUnique": self.is_unique,
            "nodes": self.nodes,
            "aborted": self.aborted,
        }


@dataclass
class RectCheck:
    is_correct: bool
    clue_index: int = -1


def rect_from_mapping(item: Mapping[str, Any]) -> Rect:
    return Rect(
        row=_as_int(item["row"], "rect.row"),
        col=_as_int(item["col"], "rect.col"),
        width=_as_int(item["width"], "rect.width"),
        height=_as_int(item["height"], "rect.height"),
    )


def clues_inside(rect: Rect, clues: Sequence[Clue]) -> List[int]:
    """Indices of the clues whose cell lies within ``rect``."""

    return [index for index, clue in enumerate(clues) if rect.contains(clue.row, clue.col)]


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PuzzleFormatError(f"Field '{name}' must be an integer, got {value!r}")
    return value
