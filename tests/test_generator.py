import unittest
from unittest import mock

from shikaku.core.constants import DIFFICULTY_CONFIGS, FALLBACK_SEED_SUFFIX, SIZE_DRAWS, Difficulty
from shikaku.core.exceptions import ConfigError
from shikaku.core.models import Rect, SolverResult
from shikaku.engine.clues import bind_clues
from shikaku.engine.generator import GeneratorConfig, PuzzleGenerator, generate, generate_puzzle
from shikaku.engine.partition import partition_region
from shikaku.engine.prng import SeededRng
from shikaku.engine.solver import solve


class GeneratorTests(unittest.TestCase):
    def test_same_seed_same_puzzle(self) -> None:
        first = generate("easy", "det-seed", 6, 6)
        second = generate("easy", "det-seed", 6, 6)
        self.assertEqual(first, second)

    def test_different_seeds_differ(self) -> None:
        self.assertNotEqual(generate("easy", "seed-one", 6, 6), generate("easy", "seed-two", 6, 6))

    def test_solution_tiles_grid_and_matches_clues(self) -> None:
        for seed in ("tile-1", "tile-2", "tile-3"):
            puzzle = generate("primer", seed)
            self.assertEqual(len(puzzle.clues), len(puzzle.solution))
            covered = set()
            for clue, rect in zip(puzzle.clues, puzzle.solution):
                self.assertTrue(rect.contains(clue.row, clue.col))
                self.assertEqual(clue.value, rect.area)
                cells = set(rect.cells())
                self.assertFalse(covered & cells)
                covered |= cells
            self.assertEqual(len(covered), puzzle.cell_count)

    def test_generated_puzzle_is_solvable(self) -> None:
        puzzle = generate("easy", "solvable", 6, 6)
        self.assertIsNotNone(solve(puzzle).solution)

    def test_tier_dimensions_when_unspecified(self) -> None:
        tier = DIFFICULTY_CONFIGS[Difficulty.PRIMER]
        for seed in ("dims-a", "dims-b", "dims-c"):
            puzzle = generate(Difficulty.PRIMER, seed)
            self.assertTrue(tier.min_grid <= puzzle.width <= tier.max_grid)
            self.assertTrue(tier.min_grid <= puzzle.height <= tier.max_grid)

    def test_large_grid_skips_solver(self) -> None:
        with mock.patch("shikaku.engine.generator.solve") as patched:
            puzzle = generate("expert", "large", 20, 20)
        patched.assert_not_called()
        self.assertEqual(sum(rect.area for rect in puzzle.solution), 400)


class GeneratorConfigTests(unittest.TestCase):
    def test_unknown_difficulty(self) -> None:
        with self.assertRaises(ConfigError):
            GeneratorConfig(difficulty="impossible", seed="x")

    def test_empty_seed(self) -> None:
        with self.assertRaises(ConfigError):
            GeneratorConfig(difficulty="easy", seed="")

    def test_negative_dimension(self) -> None:
        with self.assertRaises(ConfigError):
            GeneratorConfig(difficulty="easy", seed="x", width=-1)

    def test_single_cell_grid_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            generate_puzzle(GeneratorConfig(difficulty="easy", seed="x", width=1, height=1))

    def test_accepts_enum_or_string(self) -> None:
        self.assertIs(GeneratorConfig(difficulty="HARD", seed="x").difficulty, Difficulty.HARD)


class CalibrationFallbackTests(unittest.TestCase):
    def _layout(self, seed: str, width: int, height: int):
        rng = SeededRng(seed)
        rng.burn(SIZE_DRAWS)
        rects = partition_region(Rect(0, 0, width, height), DIFFICULTY_CONFIGS[Difficulty.EASY], rng)
        return tuple(rects), tuple(bind_clues(rects, rng))

    def test_unsolvable_attempts_use_fallback_seed(self) -> None:
        unsolved = SolverResult(solution=None, backtracks=0, is_unique=False)
        with mock.patch("shikaku.engine.generator.solve", return_value=unsolved) as patched:
            puzzle = generate("easy", "fallback", 6, 6)
        self.assertEqual(patched.call_count, 8)
        rects, clues = self._layout("fallback" + FALLBACK_SEED_SUFFIX, 6, 6)
        self.assertEqual(puzzle.solution, rects)
        self.assertEqual(puzzle.clues, clues)

    def test_closest_unique_miss_is_kept(self) -> None:
        too_hard = SolverResult(solution=(Rect(0, 0, 1, 1),), backtracks=100, is_unique=True)
        with mock.patch("shikaku.engine.generator.solve", return_value=too_hard):
            puzzle = generate("easy", "closest", 6, 6)
        rects, _ = self._layout("closest", 6, 6)
        self.assertEqual(puzzle.solution, rects)

    def test_attempt_seeds(self) -> None:
        generator = PuzzleGenerator(GeneratorConfig(difficulty="easy", seed="abc"))
        self.assertEqual(generator._attempt_seed(0), "abc")
        self.assertEqual(generator._attempt_seed(2), "abc+2")

    def test_widened_band_accepts_after_three_misses(self) -> None:
        tier = DIFFICULTY_CONFIGS[Difficulty.EASY]
        # Above the plain band (max 3) but inside the widened one (3 * 1.5).
        backtracks = tier.backtrack_max + 1
        near_miss = SolverResult(solution=(Rect(0, 0, 1, 1),), backtracks=backtracks, is_unique=True)
        with mock.patch("shikaku.engine.generator.solve", return_value=near_miss) as patched:
            puzzle = generate("easy", "relax", 6, 6)
        self.assertEqual(patched.call_count, 4)
        rects, clues = self._layout("relax+3", 6, 6)
        self.assertEqual(puzzle.solution, rects)
        self.assertEqual(puzzle.clues, clues)

    def test_ambiguous_attempts_are_never_kept(self) -> None:
        ambiguous = SolverResult(solution=(Rect(0, 0, 1, 1),), backtracks=0, is_unique=False)
        with mock.patch("shikaku.engine.generator.solve", return_value=ambiguous):
            with self.assertLogs("shikaku.engine.generator", level="INFO") as logs:
                puzzle = generate("easy", "ambiguous", 6, 6)
        self.assertTrue(any("not unique" in line for line in logs.output))
        rects, _ = self._layout("ambiguous" + FALLBACK_SEED_SUFFIX, 6, 6)
        self.assertEqual(puzzle.solution, rects)


class SizeStreamTests(unittest.TestCase):
    def test_tier_chosen_size_rebuilds_with_explicit_size(self) -> None:
        for seed in ("adhoc-0", "adhoc-1", "adhoc-2", "adhoc-3"):
            drawn = generate("easy", seed)
            self.assertEqual(drawn, generate("easy", seed, drawn.width, drawn.height))

    def test_one_explicit_dimension_keeps_the_other_draw(self) -> None:
        drawn = generate("primer", "half-size")
        self.assertEqual(drawn, generate("primer", "half-size", width=drawn.width))
        self.assertEqual(drawn, generate("primer", "half-size", height=drawn.height))
