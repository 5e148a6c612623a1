"""Recursive rectangle partitioning.

The partitioner tiles a region with smaller rectangles. Each region either
stops (when its area is inside the tier's band and a draw exceeds the split
probability) or is split. Splits come in two flavours:

* an elongated strip carve that peels a one-cell-wide strip off an edge and
  recurses on the remainder only;
* a binary split along an axis biased toward the longer side, with the cut
  position drawn from edge-biased, wide-range or center-biased strategies.

No split may create a child below ``max(min_area, 2)`` cells. Failing to
find a legal split is not an error: the region is returned whole.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.constants import (
    CENTER_SPLIT_RANGE,
    DifficultyConfig,
    EDGE_SPLIT_WEIGHT,
    LONG_AXIS_BIAS,
    SPLIT_ATTEMPTS,
    WIDE_SPLIT_RANGE,
    WIDE_SPLIT_WEIGHT,
)
from ..core.models import Rect
from ..utils.logger import get_logger
from .prng import SeededRng, seeded_choice


LOGGER = get_logger(__name__)


class Partitioner:
    """Splits regions into rectangles according to a :class:`DifficultyConfig`."""

    def __init__(self, config: DifficultyConfig, rng: SeededRng) -> None:
        self.config = config
        self.rng = rng
        self.min_child_area = max(config.min_area, 2)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def partition(self, region: Rect) -> List[Rect]:
        area = region.area
        if (
            self.config.min_area <= area <= self.config.max_area
            and self.rng.random() > self.config.split_probability
        ):
            return [region]

        if area < 2 * self.min_child_area:
            return [region]

        if self.config.elongated_bias > 0 and self.rng.random() < self.config.elongated_bias:
            carved = self._carve_strip(region)
            if carved is not None:
                strip, remainder = carved
                return [strip, *self.partition(remainder)]

        halves = self._binary_split(region)
        if halves is None:
            LOGGER.debug(
                "No legal split for region (%d,%d) %dx%d; keeping it whole",
                region.row, region.col, region.width, region.height,
            )
            return [region]
        first, second = halves
        return [*self.partition(first), *self.partition(second)]

    # ------------------------------------------------------------------
    # Strip carving
    # ------------------------------------------------------------------
    def _carve_strip(self, region: Rect) -> Optional[Tuple[Rect, Rect]]:
        options = [
            pair for pair in self._strip_options(region)
            if pair[0].area >= self.min_child_area and pair[1].area >= self.min_child_area
        ]
        if not options:
            return None
        return seeded_choice(options, self.rng)

    @staticmethod
    def _strip_options(region: Rect) -> List[Tuple[Rect, Rect]]:
        r, c, w, h = region.row, region.col, region.width, region.height
        options: List[Tuple[Rect, Rect]] = []
        if h > 1:
            options.append((Rect(r, c, w, 1), Rect(r + 1, c, w, h - 1)))  # top
            options.append((Rect(r + h - 1, c, w, 1), Rect(r, c, w, h - 1)))  # bottom
        if w > 1:
            options.append((Rect(r, c, 1, h), Rect(r, c + 1, w - 1, h)))  # left
            options.append((Rect(r, c + w - 1, 1, h), Rect(r, c, w - 1, h)))  # right
        return options

    # ------------------------------------------------------------------
    # Binary split
    # ------------------------------------------------------------------
    def _binary_split(self, region: Rect) -> Optional[Tuple[Rect, Rect]]:
        split_vertical = self._choose_axis(region)
        length = region.width if split_vertical else region.height
        if length < 2:
            split_vertical = not split_vertical
            length = region.width if split_vertical else region.height

        for _ in range(SPLIT_ATTEMPTS):
            position = self._split_position(length)
            if position < 1 or position >= length:
                continue
            halves = self._halves(region, position, split_vertical)
            if halves[0].area < self.min_child_area or halves[1].area < self.min_child_area:
                continue
            return halves
        return None

    def _choose_axis(self, region: Rect) -> bool:
        """Return True to cut across columns (vertical line), False across rows."""

        draw = self.rng.random()
        if region.width > region.height:
            return draw < LONG_AXIS_BIAS
        if region.height > region.width:
            return draw >= LONG_AXIS_BIAS
        return draw < 0.5

    def _split_position(self, length: int) -> int:
        strategy = self.rng.random()
        if strategy < EDGE_SPLIT_WEIGHT:
            return 1 if self.rng.random() < 0.5 else length - 1
        low, high = WIDE_SPLIT_RANGE if strategy < WIDE_SPLIT_WEIGHT else CENTER_SPLIT_RANGE
        return int(length * (low + self.rng.random() * (high - low)))

    @staticmethod
    def _halves(region: Rect, position: int, split_vertical: bool) -> Tuple[Rect, Rect]:
        if split_vertical:
            return (
                Rect(region.row, region.col, position, region.height),
                Rect(region.row, region.col + position, region.width - position, region.height),
            )
        return (
            Rect(region.row, region.col, region.width, position),
            Rect(region.row + position, region.col, region.width, region.height - position),
        )


def partition_region(region: Rect, config: DifficultyConfig, rng: SeededRng) -> List[Rect]:
    """Partition ``region`` with a fresh :class:`Partitioner`."""

    return Partitioner(config, rng).partition(region)
