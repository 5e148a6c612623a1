"""Shared constants, difficulty tiers and tunables for the Shikaku engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from .exceptions import ConfigError


class Difficulty(str, Enum):
    """Puzzle difficulty tiers."""

    PRIMER = "primer"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"
    NIGHTMARE = "nightmare"


@dataclass(frozen=True)
class DifficultyConfig:
    """Per-tier bounds driving partitioning and difficulty calibration."""

    name: str
    label: str
    min_grid: int
    max_grid: int
    min_area: int
    max_area: int
    backtrack_min: int
    backtrack_max: int
    estimated_time: str
    split_probability: float
    elongated_bias: float


DIFFICULTY_CONFIGS: Dict[Difficulty, DifficultyConfig] = {
    Difficulty.PRIMER: DifficultyConfig(
        name="Primer", label="Primer", min_grid=4, max_grid=5, min_area=2, max_area=6,
        backtrack_min=0, backtrack_max=0, estimated_time="1–3 min",
        split_probability=0.30, elongated_bias=0.0,
    ),
    Difficulty.EASY: DifficultyConfig(
        name="Easy", label="Easy", min_grid=6, max_grid=7, min_area=2, max_area=8,
        backtrack_min=0, backtrack_max=3, estimated_time="2–5 min",
        split_probability=0.40, elongated_bias=0.05,
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        name="Medium", label="Medium", min_grid=8, max_grid=10, min_area=2, max_area=12,
        backtrack_min=2, backtrack_max=15, estimated_time="5–15 min",
        split_probability=0.50, elongated_bias=0.10,
    ),
    Difficulty.HARD: DifficultyConfig(
        name="Hard", label="Hard", min_grid=12, max_grid=15, min_area=2, max_area=16,
        backtrack_min=10, backtrack_max=50, estimated_time="15–30 min",
        split_probability=0.55, elongated_bias=0.15,
    ),
    Difficulty.EXPERT: DifficultyConfig(
        name="Expert", label="Expert", min_grid=18, max_grid=22, min_area=2, max_area=24,
        backtrack_min=20, backtrack_max=100, estimated_time="30–60 min",
        split_probability=0.55, elongated_bias=0.20,
    ),
    Difficulty.NIGHTMARE: DifficultyConfig(
        name="Nightmare", label="Nightmare", min_grid=25, max_grid=40, min_area=2, max_area=32,
        backtrack_min=30, backtrack_max=999, estimated_time="60+ min",
        split_probability=0.55, elongated_bias=0.20,
    ),
}

# ----------------------------------------------------------------------
# Tunables. Heuristic values, not proven optimal.
# ----------------------------------------------------------------------
LARGE_GRID_CELLS = 300
MAX_ATTEMPTS = 8
LARGE_GRID_MAX_ATTEMPTS = 4
DEFAULT_MAX_NODES = 50_000
LARGE_GRID_MAX_NODES = 10_000
MAX_SEARCH_DEPTH = 500
RELAX_AFTER_ATTEMPTS = 3
RELAXED_FACTOR = 1.5

SPLIT_ATTEMPTS = 5
LONG_AXIS_BIAS = 0.8
# Cumulative thresholds: edge-biased, wide-range, otherwise center-biased.
EDGE_SPLIT_WEIGHT = 0.15
WIDE_SPLIT_WEIGHT = 0.40
WIDE_SPLIT_RANGE: Tuple[float, float] = (0.10, 0.90)
CENTER_SPLIT_RANGE: Tuple[float, float] = (0.30, 0.70)

FALLBACK_SEED_SUFFIX = "_fallback"
# Draws reserved at the head of every layout stream for width and height.
SIZE_DRAWS = 2

MONDRIAN_PALETTE: Tuple[str, ...] = ("#D40920", "#F9C30F", "#1356A2")


def resolve_difficulty(value: Union[Difficulty, str]) -> Difficulty:
    """Return the :class:`Difficulty` for an enum member or its string value."""

    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown difficulty '{value}'") from None


def difficulty_config(value: Union[Difficulty, str]) -> DifficultyConfig:
    return DIFFICULTY_CONFIGS[resolve_difficulty(value)]
