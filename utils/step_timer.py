import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Dict


class StepTimer:
    """Accumulates wall-clock time per pipeline stage."""

    def __init__(self):
        self.durations: Dict[str, float] = {}

    @contextmanager
    def timeit(self, stage: str):
        start = perf_counter()
        try:
            yield
        finally:
            elapsed = perf_counter() - start
            self.durations[stage] = self.durations.get(stage, 0.0) + elapsed
            logging.debug(f"[timer] {stage} took {elapsed:.4f}s")

    @property
    def total(self) -> float:
        return sum(self.durations.values())

    def format_summary(self, title: str = "⏱️ Stage timings") -> str:
        width = max((len(k) for k in self.durations), default=10)
        lines = [title, "-" * (width + 14)]
        lines += [f"{stage.ljust(width)} : {secs:8.3f}s" for stage, secs in self.durations.items()]
        lines.append(f"{'total'.ljust(width)} : {self.total:8.3f}s")
        return "\n".join(lines)
