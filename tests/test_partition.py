import unittest
from dataclasses import replace

from shikaku.core.constants import DIFFICULTY_CONFIGS, Difficulty
from shikaku.core.models import Rect
from shikaku.engine.clues import bind_clues
from shikaku.engine.partition import Partitioner, partition_region
from shikaku.engine.prng import SeededRng


def assert_tiles(test: unittest.TestCase, rects, width: int, height: int) -> None:
    owner = [[None] * width for _ in range(height)]
    for index, rect in enumerate(rects):
        for r, c in rect.cells():
            test.assertTrue(0 <= r < height and 0 <= c < width, f"{rect} leaves the grid")
            test.assertIsNone(owner[r][c], f"{rect} overlaps rectangle {owner[r][c]}")
            owner[r][c] = index
    test.assertEqual(sum(rect.area for rect in rects), width * height)


class PartitionTests(unittest.TestCase):
    def test_partitions_tile_the_grid(self) -> None:
        for difficulty in Difficulty:
            config = DIFFICULTY_CONFIGS[difficulty]
            for i in range(5):
                width, height = 4 + i, 9 - i
                rects = partition_region(
                    Rect(0, 0, width, height), config, SeededRng(f"tile-{difficulty.value}-{i}")
                )
                assert_tiles(self, rects, width, height)
                for rect in rects:
                    self.assertGreaterEqual(rect.area, 2)

    def test_partition_is_deterministic(self) -> None:
        config = DIFFICULTY_CONFIGS[Difficulty.HARD]
        first = partition_region(Rect(0, 0, 12, 12), config, SeededRng("same"))
        second = partition_region(Rect(0, 0, 12, 12), config, SeededRng("same"))
        self.assertEqual(first, second)

    def test_offset_region_stays_inside(self) -> None:
        config = DIFFICULTY_CONFIGS[Difficulty.MEDIUM]
        region = Rect(3, 5, 6, 4)
        for rect in partition_region(region, config, SeededRng("offset")):
            self.assertGreaterEqual(rect.row, region.row)
            self.assertGreaterEqual(rect.col, region.col)
            self.assertLessEqual(rect.bottom, region.bottom)
            self.assertLessEqual(rect.right, region.right)

    def test_tiny_regions_are_not_split(self) -> None:
        config = replace(DIFFICULTY_CONFIGS[Difficulty.EASY], split_probability=1.0)
        for region in (Rect(0, 0, 1, 2), Rect(0, 0, 3, 1), Rect(0, 0, 1, 3)):
            self.assertEqual(partition_region(region, config, SeededRng("tiny")), [region])

    def test_minimum_child_area_respected(self) -> None:
        config = replace(DIFFICULTY_CONFIGS[Difficulty.EASY], min_area=3, split_probability=1.0)
        rects = partition_region(Rect(0, 0, 8, 8), config, SeededRng("min-area"))
        assert_tiles(self, rects, 8, 8)
        for rect in rects:
            self.assertGreaterEqual(rect.area, 3)

    def test_strip_carving_produces_strips(self) -> None:
        config = replace(
            DIFFICULTY_CONFIGS[Difficulty.HARD], elongated_bias=1.0, split_probability=1.0
        )
        rects = partition_region(Rect(0, 0, 6, 6), config, SeededRng("strips"))
        assert_tiles(self, rects, 6, 6)
        self.assertEqual(min(rects[0].width, rects[0].height), 1)

    def test_strip_options_for_thin_region(self) -> None:
        options = Partitioner._strip_options(Rect(0, 0, 1, 4))
        self.assertEqual(len(options), 2)
        for strip, remainder in options:
            self.assertEqual(strip.area + remainder.area, 4)


class ClueBindingTests(unittest.TestCase):
    def test_one_clue_per_rectangle_inside_it(self) -> None:
        config = DIFFICULTY_CONFIGS[Difficulty.MEDIUM]
        rng = SeededRng("clues")
        rects = partition_region(Rect(0, 0, 8, 8), config, rng)
        clues = bind_clues(rects, rng)
        self.assertEqual(len(clues), len(rects))
        for clue, rect in zip(clues, rects):
            self.assertTrue(rect.contains(clue.row, clue.col))
            self.assertEqual(clue.value, rect.area)
            self.assertGreaterEqual(clue.value, 2)
