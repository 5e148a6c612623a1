"""Off-thread generation with a synchronous fallback, plus batch generation.

Generation is a pure function of its config, so a worker that times out or
fails can always be replaced by an in-process run. A worker result that
arrives after the timeout is simply never read.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor, TimeoutError as FutureTimeout, as_completed
from typing import Dict, List, Optional, Sequence

from ..core.models import Puzzle
from ..utils.logger import get_logger
from .generator import GeneratorConfig, generate_puzzle


LOGGER = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def generate_with_timeout(
    config: GeneratorConfig,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    executor: Optional[Executor] = None,
) -> Puzzle:
    """Generate on ``executor`` (a private worker thread by default).

    On timeout or worker failure the puzzle is generated synchronously.
    """

    owns_executor = executor is None
    pool = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="puzzle-worker")
    future: Optional[Future] = None
    try:
        try:
            future = pool.submit(generate_puzzle, config)
            return future.result(timeout=timeout_seconds)
        except FutureTimeout:
            LOGGER.warning(
                "Worker generation for seed %s exceeded %.1fs; generating in-process",
                config.seed, timeout_seconds,
            )
        except Exception as exc:  # worker crashed or could not start
            LOGGER.warning(
                "Worker generation for seed %s failed (%s); generating in-process",
                config.seed, exc,
            )
        if future is not None:
            future.cancel()
        return generate_puzzle(config)
    finally:
        if owns_executor:
            pool.shutdown(wait=False, cancel_futures=True)


def generate_many(configs: Sequence[GeneratorConfig], max_workers: int = 4) -> List[Puzzle]:
    """Generate independent puzzles in parallel, returned in ``configs`` order."""

    if not configs:
        return []
    results: Dict[int, Puzzle] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(configs)))) as executor:
        futures: Dict[Future, int] = {
            executor.submit(generate_puzzle, config): index for index, config in enumerate(configs)
        }
        for future in as_completed(futures):
            index = futures[future]
            results[index] = future.result()
            LOGGER.debug("Batch item %d/%d finished (seed %s)", index + 1, len(configs), configs[index].seed)
    return [results[index] for index in range(len(configs))]
