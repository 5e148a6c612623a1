"""Puzzle generation with difficulty calibration.

Each attempt runs Partition -> Bind -> Solve on an attempt-specific stream
derived from the seed. An attempt is accepted when the solver's backtrack
count lands inside the tier's band and the dissection is unique. The band
widens after a few failures, the closest unique miss is kept as a fallback,
and a last unconditional pass guarantees a well-formed puzzle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..core.constants import (
    DEFAULT_MAX_NODES,
    FALLBACK_SEED_SUFFIX,
    LARGE_GRID_CELLS,
    LARGE_GRID_MAX_ATTEMPTS,
    LARGE_GRID_MAX_NODES,
    MAX_ATTEMPTS,
    RELAX_AFTER_ATTEMPTS,
    RELAXED_FACTOR,
    SIZE_DRAWS,
    Difficulty,
    DifficultyConfig,
    DIFFICULTY_CONFIGS,
    resolve_difficulty,
)
from ..core.exceptions import ConfigError
from ..core.models import Clue, Puzzle, Rect
from ..utils.logger import get_logger
from .clues import bind_clues
from .partition import Partitioner
from .prng import SeededRng, seeded_rand_int
from .solver import solve


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    difficulty: Union[Difficulty, str]
    seed: str
    width: Optional[int] = None
    height: Optional[int] = None
    verify_large_grids: bool = False

    def __post_init__(self) -> None:
        self.difficulty = resolve_difficulty(self.difficulty)
        if not isinstance(self.seed, str) or not self.seed:
            raise ConfigError("Generator seed must be a non-empty string")
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise ConfigError(f"Grid {name} must be a non-negative integer, got {value!r}")

    @property
    def tier(self) -> DifficultyConfig:
        return DIFFICULTY_CONFIGS[self.difficulty]


@dataclass
class _Candidate:
    puzzle: Puzzle
    backtracks: int


class PuzzleGenerator:
    """Runs the calibration loop for one configuration."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config
        self.tier = config.tier

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> Puzzle:
        width, height = self._grid_size()
        if width * height < 2:
            raise ConfigError(f"Grid {width}x{height} is too small for a puzzle")

        large = width * height > LARGE_GRID_CELLS
        max_attempts = LARGE_GRID_MAX_ATTEMPTS if large else MAX_ATTEMPTS
        relax = RELAXED_FACTOR if large else 1.0
        node_cap = LARGE_GRID_MAX_NODES if large else DEFAULT_MAX_NODES
        check_uniqueness = not large
        best: Optional[_Candidate] = None

        for attempt in range(max_attempts):
            if attempt >= RELAX_AFTER_ATTEMPTS:
                relax = RELAXED_FACTOR
            LOGGER.info(
                "Generation attempt %s/%s (%s, %dx%d, seed=%s)",
                attempt + 1, max_attempts, self.config.difficulty.value, width, height,
                self.config.seed,
            )
            rng = SeededRng(self._attempt_seed(attempt))
            rng.burn(SIZE_DRAWS)
            rects, clues = self._build_layout(width, height, rng)
            if not self._well_formed(rects, width, height):
                LOGGER.info("Attempt %s rejected: malformed partition", attempt + 1)
                continue

            puzzle = Puzzle(width=width, height=height, clues=tuple(clues), solution=tuple(rects))
            if large and not self.config.verify_large_grids:
                LOGGER.info("Large grid (%d cells): accepting partition without solving", width * height)
                return puzzle

            result = solve(puzzle, find_all=check_uniqueness, max_nodes=node_cap)
            if result.solution is None:
                LOGGER.info("Attempt %s rejected: solver found no dissection", attempt + 1)
            else:
                low = self.tier.backtrack_min
                high = self.tier.backtrack_max * relax
                unique = result.is_unique or not check_uniqueness
                in_band = low <= result.backtracks <= high
                if in_band and unique:
                    LOGGER.info(
                        "Accepted attempt %s: backtracks=%d within [%d, %.1f]",
                        attempt + 1, result.backtracks, low, high,
                    )
                    return puzzle
                if not unique:
                    LOGGER.info(
                        "Attempt %s rejected: dissection not unique (aborted=%s)",
                        attempt + 1, result.aborted,
                    )
                    continue
                LOGGER.info(
                    "Attempt %s outside target: backtracks=%d band=[%d, %.1f]",
                    attempt + 1, result.backtracks, low, high,
                )
                if self._closer(result.backtracks, best):
                    best = _Candidate(puzzle=puzzle, backtracks=result.backtracks)

        if best is not None:
            LOGGER.warning(
                "No attempt hit the %s band; using closest unique candidate (backtracks=%d)",
                self.config.difficulty.value, best.backtracks,
            )
            return best.puzzle
        return self._fallback(width, height)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _grid_size(self) -> Tuple[int, int]:
        """Resolve dimensions from the bare-seed stream.

        Both size draws are always taken, and every layout stream skips
        ``SIZE_DRAWS`` values, so a puzzle generated with tier-chosen
        dimensions is rebuilt exactly when the same dimensions are given.
        """

        rng = SeededRng(self.config.seed)
        drawn_width = seeded_rand_int(self.tier.min_grid, self.tier.max_grid, rng)
        drawn_height = seeded_rand_int(self.tier.min_grid, self.tier.max_grid, rng)
        return self.config.width or drawn_width, self.config.height or drawn_height

    def _attempt_seed(self, attempt: int) -> str:
        return self.config.seed if attempt == 0 else f"{self.config.seed}+{attempt}"

    def _build_layout(self, width: int, height: int, rng: SeededRng) -> Tuple[List[Rect], List[Clue]]:
        rects = Partitioner(self.tier, rng).partition(Rect(0, 0, width, height))
        return rects, bind_clues(rects, rng)

    @staticmethod
    def _well_formed(rects: List[Rect], width: int, height: int) -> bool:
        if any(rect.area < 2 for rect in rects):
            return False
        return sum(rect.area for rect in rects) == width * height

    def _closer(self, backtracks: int, best: Optional[_Candidate]) -> bool:
        if best is None:
            return True
        target = self.tier.backtrack_min
        return abs(backtracks - target) < abs(best.backtracks - target)

    def _fallback(self, width: int, height: int) -> Puzzle:
        LOGGER.warning(
            "Generation for seed %s exhausted its attempts; using unconditional fallback layout",
            self.config.seed,
        )
        rng = SeededRng(self.config.seed + FALLBACK_SEED_SUFFIX)
        rng.burn(SIZE_DRAWS)
        rects, clues = self._build_layout(width, height, rng)
        return Puzzle(width=width, height=height, clues=tuple(clues), solution=tuple(rects))


def generate_puzzle(config: GeneratorConfig) -> Puzzle:
    """Generate the puzzle for ``config``; identical configs yield identical puzzles."""

    return PuzzleGenerator(config).generate()


def generate(
    difficulty: Union[Difficulty, str],
    seed: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Puzzle:
    """Keyword-friendly wrapper around :func:`generate_puzzle`."""

    return generate_puzzle(GeneratorConfig(difficulty=difficulty, seed=seed, width=width, height=height))
