"""Diagnostic counters and timing samples for fail-soft recoveries.

Recovered failures (complexity falling back to 1, a rule raising, ...)
never reach the caller's result. They are counted here instead so that
production behaviour stays observable.

Example usage:
    diagnostics = DiagnosticsCollector()

    diagnostics.increment("rule_failures")

    with diagnostics.measure("analyze"):
        run_analysis()

    stats = diagnostics.get_stats("analyze")
    print(f"P95 latency: {stats['p95_ms']}ms")
"""

import time
from collections import defaultdict, deque
from collections.abc import Generator
from contextlib import contextmanager
from threading import Lock
from typing import Any

MAX_SAMPLES = 1000


class DiagnosticsCollector:
    """Thread-safe failure counters and timing samples.

    Unlike a process-wide singleton, each analyzer owns its collector so
    that one analyzer's history never influences another's.
    """

    def __init__(self, max_samples: int = MAX_SAMPLES):
        self._lock = Lock()
        self._counters: dict[str, int] = defaultdict(int)
        self._timings: dict[str, deque] = {}
        self._max_samples = max_samples

    def increment(self, name: str, amount: int = 1) -> None:
        """Increment a named counter.

        Args:
            name: Counter name (e.g. ``complexity_failures``).
            amount: Value to add.
        """
        with self._lock:
            self._counters[name] += amount

    def get_count(self, name: str) -> int:
        """Current value of a counter (0 if never incremented)."""
        with self._lock:
            return self._counters.get(name, 0)

    def record(self, operation: str, duration_ms: float) -> None:
        """Record a timing sample.

        Args:
            operation: Name of the operation.
            duration_ms: Duration in milliseconds.
        """
        with self._lock:
            if operation not in self._timings:
                self._timings[operation] = deque(maxlen=self._max_samples)
            self._timings[operation].append(duration_ms)

    @contextmanager
    def measure(self, operation: str) -> Generator[None, None, None]:
        """Context manager to measure and record operation duration.

        Args:
            operation: Name of the operation to measure.
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record(operation, (time.perf_counter() - start) * 1000)

    def get_stats(self, operation: str) -> dict[str, float]:
        """Get statistics for an operation.

        Args:
            operation: Name of the operation.

        Returns:
            count, avg, min, max, p50 and p95 in milliseconds, or an empty
            dict if nothing was recorded.
        """
        with self._lock:
            values = list(self._timings.get(operation, ()))

        if not values:
            return {}

        sorted_values = sorted(values)
        n = len(sorted_values)
        return {
            "count": n,
            "avg_ms": sum(values) / n,
            "min_ms": sorted_values[0],
            "max_ms": sorted_values[-1],
            "p50_ms": self._percentile(sorted_values, 50),
            "p95_ms": self._percentile(sorted_values, 95),
        }

    def snapshot(self) -> dict[str, Any]:
        """Export all counters and timing statistics."""
        with self._lock:
            counters = dict(self._counters)
            operations = list(self._timings.keys())
        return {
            "counters": counters,
            "timings": {op: self.get_stats(op) for op in operations},
        }

    def reset(self) -> None:
        """Clear all counters and samples."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()

    @staticmethod
    def _percentile(sorted_values: list[float], percentile: int) -> float:
        """Linear-interpolated percentile of pre-sorted values."""
        n = len(sorted_values)
        if n == 1:
            return sorted_values[0]

        k = (percentile / 100) * (n - 1)
        f = int(k)
        c = f + 1 if f + 1 < n else f
        if f == c:
            return sorted_values[f]
        return sorted_values[f] + (k - f) * (sorted_values[c] - sorted_values[f])
