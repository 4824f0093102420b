"""Metrics collection and monitoring."""

import threading
import time
from typing import Dict, Any
from collections import defaultdict


class MetricsCollector:
    """
    Collects stage timings and counters for one archive job.
    Implements IMetricsCollector protocol.

    Counters may be incremented from download and notification workers,
    so every mutation goes through a lock.
    """

    def __init__(self):
        self._start_time = time.time()
        self._timers: Dict[str, float] = {}
        self._metrics: Dict[str, Any] = defaultdict(list)
        self._counters: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        with self._lock:
            self._timers[name] = time.time()

    def stop_timer(self, name: str) -> float:
        """
        Stop a named timer and return elapsed time.

        Args:
            name: Timer name

        Returns:
            Elapsed time in seconds

        Raises:
            KeyError: If timer was not started
        """
        with self._lock:
            if name not in self._timers:
                raise KeyError(f"Timer '{name}' was not started")
            elapsed = time.time() - self._timers.pop(name)

        self.record_metric(f"{name}_duration", elapsed)
        return elapsed

    def record_metric(self, name: str, value: Any) -> None:
        """Record a metric value."""
        with self._lock:
            self._metrics[name].append(value)

    def increment_counter(self, name: str, amount: int = 1) -> None:
        """Increment a counter."""
        with self._lock:
            self._counters[name] += amount

    def get_summary(self) -> Dict[str, Any]:
        """
        Get summary of all metrics.

        Returns:
            Dictionary with metric summaries
        """
        with self._lock:
            counters = dict(self._counters)
            metrics = {name: list(values) for name, values in self._metrics.items()}

        summary = {
            "total_elapsed": self.elapsed_time(),
            "counters": counters,
            "metrics": {}
        }

        for name, values in metrics.items():
            if not values:
                continue
            if all(isinstance(v, (int, float)) for v in values):
                summary["metrics"][name] = {
                    "count": len(values),
                    "sum": sum(values),
                    "avg": sum(values) / len(values),
                    "min": min(values),
                    "max": max(values),
                }
            else:
                summary["metrics"][name] = {
                    "count": len(values),
                    "values": values
                }

        return summary

    def elapsed_time(self) -> float:
        """Get total elapsed time since initialization."""
        return time.time() - self._start_time

    def log_summary(self, logger) -> None:
        """Write a formatted summary of metrics to a logger."""
        summary = self.get_summary()
        logger.info(f"Total elapsed: {summary['total_elapsed']:.2f}s")

        for name, value in summary['counters'].items():
            logger.info(f"  {name}: {value}")

        for name, data in summary['metrics'].items():
            if 'avg' in data:
                logger.info(f"  {name}: {data['sum']:.3f}")
