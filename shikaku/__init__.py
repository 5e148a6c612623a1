"""Shikaku (rectangle dissection) puzzle engine.

This package exposes the public API surface via:

- ``shikaku.engine.generator.generate_puzzle``: seeded, difficulty-calibrated generation.
- ``shikaku.engine.solver.solve``: backtracking solver reporting uniqueness and backtracks.
- ``shikaku.engine.validator.validate_solve``: seed-based checking of submitted dissections.
- ``shikaku.engine.coloring`` helpers: rectangle adjacency and display colouring.
- ``shikaku.engine.game_logic`` helpers: per-rectangle checks, completion and hints.
"""

from .core.constants import DIFFICULTY_CONFIGS, Difficulty, DifficultyConfig
from .core.models import Clue, Puzzle, Rect, SolverResult
from .engine.coloring import assign_colors, build_adjacency
from .engine.game_logic import check_complete, check_rect, reveal_hint
from .engine.generator import GeneratorConfig, PuzzleGenerator, generate, generate_puzzle
from .engine.prng import SeededRng, seeded_rand_int, seeded_shuffle
from .engine.solver import solve
from .engine.validator import ValidationResult, validate_solve

__all__ = [
    "DIFFICULTY_CONFIGS",
    "Clue",
    "Difficulty",
    "DifficultyConfig",
    "GeneratorConfig",
    "Puzzle",
    "PuzzleGenerator",
    "Rect",
    "SeededRng",
    "SolverResult",
    "ValidationResult",
    "assign_colors",
    "build_adjacency",
    "check_complete",
    "check_rect",
    "generate",
    "generate_puzzle",
    "reveal_hint",
    "seeded_rand_int",
    "seeded_shuffle",
    "solve",
    "validate_solve",
]

__version__ = "0.1.0"
