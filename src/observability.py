"""Observability: in-process counters/timers for the gap recompute pipeline."""

import threading
import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Thread-safe counters and duration samples keyed by metric name."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = {}
        self._durations: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Record wall-clock duration of the wrapped block under `name`."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                self._durations.setdefault(name, []).append(elapsed)

    def summary(self) -> dict[str, Any]:
        with self._lock:
            timers = {
                name: {
                    "count": len(samples),
                    "avg_ms": round(sum(samples) / len(samples) * 1000, 3),
                    "max_ms": round(max(samples) * 1000, 3),
                }
                for name, samples in self._durations.items()
                if samples
            }
            return {"counters": dict(self._counters), "timers": timers}

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._durations.clear()


# Module-level singleton
metrics = Metrics()


def log_metrics_summary():
    """Emit the current metrics snapshot as one structured log line."""
    logger.info("metrics.summary", **metrics.summary())
