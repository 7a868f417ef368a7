"""
Phase checkpoints for long-running generation steps

Purely observational: nothing here changes what the pipeline does.
"""

import time
from typing import Dict, Iterator, Sequence, TypeVar

from loguru import logger
from tqdm import tqdm

T = TypeVar("T")


class PhaseTimer:
    """
    Logs phase start/stop with elapsed time; phases that walk a list of
    items also get a tqdm progress bar.

    Usage:
        timer = PhaseTimer(show_progress=True)
        timer.start("place candidates")
        ...
        timer.stop("place candidates")

        for item in timer.track("prune", items):
            ...
    """

    def __init__(self, show_progress: bool = False):
        self.show_progress = show_progress
        self._started: Dict[str, float] = {}
        self.timings: Dict[str, float] = {}

    def start(self, name: str):
        self._started[name] = time.perf_counter()
        logger.info(f"Start: {name}")

    def stop(self, name: str) -> float:
        started = self._started.pop(name, None)
        if started is None:
            raise KeyError(f"Phase '{name}' was never started")
        elapsed = time.perf_counter() - started
        self.timings[name] = elapsed
        logger.info(f"Done: {name} ({elapsed:.3f}s)")
        return elapsed

    def track(self, name: str, items: Sequence[T]) -> Iterator[T]:
        """Yield `items` in order, timing the walk as phase `name`"""
        self.start(name)
        yield from tqdm(items, desc=name, total=len(items), leave=False, disable=not self.show_progress)
        self.stop(name)
