import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

import main
from shikaku.core.models import Clue, Puzzle, Rect, SolverResult
from shikaku.utils.pretty import format_puzzle, format_solution, print_puzzle_stats


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.out = Path(self.tmp.name) / "out.json"

    def _run(self, *argv: str):
        code = main.main([*argv, "--output", str(self.out)])
        return code, json.loads(self.out.read_text(encoding="utf-8"))

    def test_generate_with_solver_and_colours(self) -> None:
        code, payload = self._run("--seed", "cli", "--difficulty", "primer", "--solve", "--colors")
        self.assertEqual(code, 0)
        self.assertEqual(payload["seed"], "cli")
        self.assertEqual(payload["difficulty"], "primer")
        self.assertEqual(len(payload["colors"]), len(payload["puzzle"]["solution"]))
        self.assertIn("isUnique", payload["solver"])

    def test_weekly_schedule(self) -> None:
        code, payload = self._run("--weekly", "2026-10-17")
        self.assertEqual(code, 0)
        self.assertEqual(payload["seed"], "weekly-2026-W42")
        self.assertEqual(payload["puzzle"]["width"], 20)

    def test_validate_own_solution(self) -> None:
        _, payload = self._run("--seed", "cli-validate", "--difficulty", "primer")
        submission = Path(self.tmp.name) / "rects.json"
        submission.write_text(json.dumps({"rects": payload["puzzle"]["solution"]}), encoding="utf-8")
        code, verdict = self._run(
            "--seed", "cli-validate", "--difficulty", "primer", "--validate", str(submission)
        )
        self.assertEqual(code, 0)
        self.assertEqual(verdict, {"valid": True})

    def test_validate_rejects_gap(self) -> None:
        _, payload = self._run("--seed", "cli-gap", "--difficulty", "primer")
        submission = Path(self.tmp.name) / "rects.json"
        submission.write_text(json.dumps(payload["puzzle"]["solution"][1:]), encoding="utf-8")
        code, verdict = self._run("--seed", "cli-gap", "--difficulty", "primer", "--validate", str(submission))
        self.assertEqual(code, 1)
        self.assertFalse(verdict["valid"])

    def test_seed_required(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            main.main(["--difficulty", "easy"])

    def test_schedule_excludes_seed(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            main.main(["--daily", "2026-10-17", "--seed", "x"])


class PrettyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.puzzle = Puzzle(
            width=4, height=2, clues=(Clue(0, 0, 4), Clue(1, 3, 4)),
            solution=(Rect(0, 0, 2, 2), Rect(0, 2, 2, 2)),
        )

    def test_format_puzzle(self) -> None:
        lines = format_puzzle(self.puzzle).splitlines()
        self.assertEqual(len(lines), 4)
        self.assertIn("4", lines[2])
        self.assertIn(".", lines[3])

    def test_format_solution(self) -> None:
        lines = format_solution(self.puzzle).splitlines()
        self.assertEqual(lines[2].split("|")[1].split(), ["A", "A", "B", "B"])

    def test_format_solution_marks_gaps(self) -> None:
        self.assertIn("?", format_solution(self.puzzle, [Rect(0, 0, 2, 2)]))

    def test_stats(self) -> None:
        stream = io.StringIO()
        result = SolverResult(solution=self.puzzle.solution, backtracks=2, is_unique=True, nodes=5)
        print_puzzle_stats(self.puzzle, result, seed="pretty", stream=stream)
        text = stream.getvalue()
        self.assertIn("Rectangles:    2", text)
        self.assertIn("Backtracks:    2", text)
        self.assertIn("Seed: pretty", text)
