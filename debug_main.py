"""Convenience entrypoint for stepping through the generation pipeline.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(difficulty="medium", seed="debug-1")
    debug_main.step_partition(state)
    debug_main.step_bind_clues(state)
    debug_main.step_solve(state)
    debug_main.step_colors(state)
    puzzle = debug_main.build_puzzle(state)

Call :func:`run_debug` for a one-liner, or :func:`difficulty_survey` to see
how often generated puzzles land inside their tier's backtrack band.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from shikaku.core.constants import DIFFICULTY_CONFIGS, LARGE_GRID_CELLS, MONDRIAN_PALETTE, SIZE_DRAWS, resolve_difficulty
from shikaku.core.models import Puzzle, Rect
from shikaku.engine.clues import bind_clues
from shikaku.engine.coloring import assign_colors
from shikaku.engine.dispatch import generate_many
from shikaku.engine.generator import GeneratorConfig, PuzzleGenerator
from shikaku.engine.partition import Partitioner
from shikaku.engine.prng import SeededRng
from shikaku.engine.solver import solve
from shikaku.utils.logger import configure_logging, get_logger
from shikaku.utils.pretty import pretty_print_puzzle, print_puzzle_stats

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "difficulty": "medium",
    "seed": "debug",
    "width": None,
    "height": None,
}

LOGGER = get_logger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(overrides.pop("log_level", logging.INFO))
    config = GeneratorConfig(
        difficulty=args["difficulty"],
        seed=str(args["seed"]),
        width=args.get("width"),
        height=args.get("height"),
    )
    generator = PuzzleGenerator(config)
    width, height = generator._grid_size()
    rng = SeededRng(config.seed)
    rng.burn(SIZE_DRAWS)
    return {
        "config": config,
        "generator": generator,
        "width": width,
        "height": height,
        "rng": rng,
        "rects": [],
        "clues": [],
        "result": None,
        "colors": {},
    }


def step_partition(state: Dict[str, Any]) -> List[Rect]:
    started = time.perf_counter()
    partitioner = Partitioner(state["generator"].tier, state["rng"])
    state["rects"] = partitioner.partition(Rect(0, 0, state["width"], state["height"]))
    LOGGER.info(
        "Partitioned %dx%d into %d rectangles in %.3fs",
        state["width"], state["height"], len(state["rects"]), time.perf_counter() - started,
    )
    return state["rects"]


def step_bind_clues(state: Dict[str, Any]):
    state["clues"] = bind_clues(state["rects"], state["rng"])
    return state["clues"]


def step_solve(state: Dict[str, Any], find_all: bool = True):
    started = time.perf_counter()
    state["result"] = solve(build_puzzle(state), find_all=find_all)
    LOGGER.info(
        "Solved in %.3fs: backtracks=%d unique=%s",
        time.perf_counter() - started, state["result"].backtracks, state["result"].is_unique,
    )
    return state["result"]


def step_colors(state: Dict[str, Any]):
    state["colors"] = assign_colors(state["rects"], MONDRIAN_PALETTE)
    return state["colors"]


def build_puzzle(state: Dict[str, Any]) -> Puzzle:
    return Puzzle(
        width=state["width"],
        height=state["height"],
        clues=tuple(state["clues"]),
        solution=tuple(state["rects"]),
    )


def run_debug(**overrides: Any) -> Puzzle:
    """Generate through the full calibration loop and print the outcome."""

    state = prepare_state(**overrides)
    puzzle = state["generator"].generate()
    result = solve(puzzle) if puzzle.cell_count <= LARGE_GRID_CELLS else None
    pretty_print_puzzle(puzzle, label=f"Seed: {state['config'].seed}", show_solution=True)
    print_puzzle_stats(puzzle, result, seed=state["config"].seed)
    return puzzle


def difficulty_survey(
    difficulty: str,
    seeds: Iterable[str],
    width: Optional[int] = None,
    height: Optional[int] = None,
    parallel_runs: int = 4,
):
    """Generate one puzzle per seed and tabulate its measured difficulty.

    Returns a pandas DataFrame with one row per seed. Large grids are not
    re-solved; their ``backtracks`` and ``unique`` columns are left empty.
    """

    try:
        import pandas as pd
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "The difficulty survey requires pandas. Install it via 'pip install pandas'."
        ) from exc

    tier = DIFFICULTY_CONFIGS[resolve_difficulty(difficulty)]
    configs = [
        GeneratorConfig(difficulty=difficulty, seed=seed, width=width, height=height)
        for seed in seeds
    ]
    puzzles = generate_many(configs, max_workers=parallel_runs)

    rows = []
    for config, puzzle in zip(configs, puzzles):
        row: Dict[str, Any] = {
            "seed": config.seed,
            "width": puzzle.width,
            "height": puzzle.height,
            "rectangles": len(puzzle.solution),
            "backtracks": None,
            "unique": None,
            "in_band": None,
        }
        if puzzle.cell_count <= LARGE_GRID_CELLS:
            result = solve(puzzle)
            row["backtracks"] = result.backtracks
            row["unique"] = result.is_unique
            row["in_band"] = tier.backtrack_min <= result.backtracks <= tier.backtrack_max
        rows.append(row)
    return pd.DataFrame(rows, columns=list(rows[0]) if rows else None)


def summarize_survey(frame) -> Dict[str, Any]:
    """Headline numbers for a :func:`difficulty_survey` frame."""

    if frame.empty:
        return {"puzzles": 0, "measured": 0}
    solved = frame.dropna(subset=["backtracks"])
    if solved.empty:
        return {"puzzles": int(len(frame)), "measured": 0}
    return {
        "puzzles": int(len(frame)),
        "measured": int(len(solved)),
        "in_band_ratio": float(solved["in_band"].astype(bool).mean()),
        "unique_ratio": float(solved["unique"].astype(bool).mean()),
        "backtracks_mean": float(solved["backtracks"].astype(float).mean()),
        "backtracks_max": int(solved["backtracks"].max()),
    }
