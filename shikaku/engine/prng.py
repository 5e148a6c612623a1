"""Seeded pseudo-random stream shared by the partitioner and clue binder.

The stream is Mulberry32 over a 32-bit state derived from the seed string
with a ``31 * h + code_unit`` fold. All arithmetic is masked to 32 bits so
the sequence matches other implementations of the same generator bit for
bit. Seed characters are folded as UTF-16 code units for the same reason.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from ..core.exceptions import SeedError

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def hash_seed(seed: str) -> int:
    """Fold ``seed`` into an unsigned 32-bit state."""

    if not seed:
        raise SeedError("PRNG seed cannot be empty")
    state = 0
    encoded = seed.encode("utf-16-le", "surrogatepass")
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        state = (_imul(31, state) + code_unit) & MASK32
    return state


class SeededRng:
    """Deterministic ``[0, 1)`` float stream derived from a string seed.

    Instances carry mutable state and are passed explicitly to every
    consumer; nothing in the engine keeps a module-level stream.
    """

    __slots__ = ("seed", "_state", "draws")

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self._state = hash_seed(seed)
        self.draws = 0

    def random(self) -> float:
        self._state = (self._state + _GOLDEN_GAMMA) & MASK32
        state = self._state
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & MASK32) ^ t
        self.draws += 1
        return (t ^ (t >> 14)) / _TWO_POW_32

    __call__ = random

    def burn(self, count: int) -> None:
        """Discard ``count`` draws to keep derived streams aligned."""

        for _ in range(count):
            self.random()


def seeded_shuffle(items: Sequence[T], rng: SeededRng) -> List[T]:
    """Fisher-Yates shuffle returning a new list; ``items`` is left untouched."""

    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def seeded_rand_int(low: int, high: int, rng: SeededRng) -> int:
    """Random integer in ``[low, high]`` inclusive."""

    return int(rng.random() * (high - low + 1)) + low


def seeded_choice(items: Sequence[T], rng: SeededRng) -> T:
    return items[int(rng.random() * len(items))]
