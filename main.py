"""CLI entrypoint for the Shikaku puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

from shikaku.core.constants import Difficulty, MONDRIAN_PALETTE
from shikaku.core.exceptions import ShikakuError
from shikaku.engine.coloring import assign_colors
from shikaku.engine.generator import GeneratorConfig, generate_puzzle
from shikaku.engine.scheduled import daily_seed, monthly_seed, scheduled_config, weekly_seed
from shikaku.engine.solver import solve
from shikaku.engine.validator import validate_solve
from shikaku.utils.logger import configure_logging
from shikaku.utils.pretty import pretty_print_puzzle, print_puzzle_stats


SCHEDULE_SEEDS = {
    "daily": daily_seed,
    "weekly": weekly_seed,
    "monthly": monthly_seed,
}


def parse_rect_file(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON list of rectangles, or an object holding one under ``rects``."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("rects", payload.get("solution", []))
    if not isinstance(payload, list):
        raise ValueError(f"{path} does not contain a rectangle list")
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate, solve and validate Shikaku rectangle-dissection puzzles",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Difficulty tier",
    )
    parser.add_argument("--seed", type=str, help="Seed string (any non-empty text)")
    parser.add_argument("--width", type=int, default=0, help="Grid width in cells (0 = tier default)")
    parser.add_argument("--height", type=int, default=0, help="Grid height in cells (0 = tier default)")
    schedule = parser.add_mutually_exclusive_group()
    for kind in SCHEDULE_SEEDS:
        schedule.add_argument(
            f"--{kind}",
            type=date.fromisoformat,
            metavar="YYYY-MM-DD",
            help=f"Generate the {kind} puzzle for the given date",
        )
    parser.add_argument("--solve", action="store_true", help="Re-solve the puzzle and report solver stats")
    parser.add_argument("--audit", action="store_true", help="Count dissections with the CP-SAT audit")
    parser.add_argument("--colors", action="store_true", help="Attach display colours to the solution")
    parser.add_argument("--pretty", action="store_true", help="Print the grid and stats to stderr")
    parser.add_argument(
        "--validate",
        type=Path,
        metavar="FILE",
        help="Validate a JSON rectangle list against the puzzle instead of printing it",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def resolve_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> GeneratorConfig:
    for kind, seed_for in SCHEDULE_SEEDS.items():
        day = getattr(args, kind)
        if day is None:
            continue
        if args.seed or args.width or args.height:
            parser.error(f"--{kind} cannot be combined with --seed, --width or --height")
        return scheduled_config(kind, seed_for(day))
    if not args.seed:
        parser.error("provide --seed or one of --daily / --weekly / --monthly")
    return GeneratorConfig(
        difficulty=args.difficulty,
        seed=args.seed,
        width=args.width or None,
        height=args.height or None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    try:
        config = resolve_config(args, parser)
        puzzle = generate_puzzle(config)
    except ShikakuError as exc:
        parser.error(str(exc))

    if args.validate:
        rects = parse_rect_file(args.validate)
        verdict = validate_solve(rects, config.seed, config.difficulty, puzzle.width, puzzle.height)
        _emit(verdict.to_dict(), args.output)
        return 0 if verdict.valid else 1

    payload: Dict[str, Any] = {
        "seed": config.seed,
        "difficulty": config.difficulty.value,
        "puzzle": puzzle.to_dict(),
    }

    result = None
    if args.solve:
        result = solve(puzzle)
        payload["solver"] = result.to_dict()
    if args.audit:
        from shikaku.engine.cpsat import count_dissections

        audit = count_dissections(puzzle)
        payload["audit"] = {
            "status": audit.status,
            "dissections": audit.solution_count,
            "complete": audit.complete,
            "unique": audit.is_unique,
        }
    if args.colors:
        colors = assign_colors(puzzle.solution, MONDRIAN_PALETTE)
        payload["colors"] = [colors[index] for index in range(len(puzzle.solution))]

    if args.pretty:
        pretty_print_puzzle(puzzle, label=f"Seed: {config.seed}", show_solution=True, stream=sys.stderr)
        print_puzzle_stats(puzzle, result, stream=sys.stderr)

    _emit(payload, args.output)
    return 0


def _emit(payload: Dict[str, Any], output: Path | None) -> None:
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
