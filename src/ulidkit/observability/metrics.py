"""ulidkit metrics collection.

Thread-safe in-process counters and histograms with Prometheus text export.
Generators record how many identifiers they produced and how often they ran
out of randomness headroom; nothing here is touched while a generator lock
is held.

Example:
    >>> from ulidkit.observability.metrics import get_metrics
    >>> metrics = get_metrics()
    >>> metrics.increment_counter("ulidkit_generated_total", {"generator": "monotonic"}, 10)
    >>> print(metrics.export_prometheus())
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import ClassVar

_LabelKey = tuple[tuple[str, str], ...]


def _label_key(labels: dict[str, str] | None) -> _LabelKey:
    return tuple(sorted((labels or {}).items()))


@dataclass
class Counter:
    """A monotonically increasing counter metric."""

    name: str
    help_text: str
    values: dict[_LabelKey, float] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def increment(self, labels: dict[str, str] | None = None, value: float = 1.0) -> None:
        key = _label_key(labels)
        with self._lock:
            self.values[key] = self.values.get(key, 0.0) + value

    def get(self, labels: dict[str, str] | None = None) -> float:
        key = _label_key(labels)
        with self._lock:
            return self.values.get(key, 0.0)


# Wait durations are on the order of one clock tick (milliseconds)
DEFAULT_WAIT_BUCKETS = (0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0)


@dataclass
class Histogram:
    """A histogram metric for measuring distributions."""

    name: str
    help_text: str
    buckets: tuple[float, ...] = DEFAULT_WAIT_BUCKETS
    counts: dict[_LabelKey, list[float]] = field(default_factory=dict)
    sums: dict[_LabelKey, float] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        key = _label_key(labels)
        with self._lock:
            # One slot per bucket plus the +Inf slot.
            counts = self.counts.setdefault(key, [0.0] * (len(self.buckets) + 1))
            for i, bound in enumerate(self.buckets):
                if value <= bound:
                    counts[i] += 1.0
            counts[-1] += 1.0
            self.sums[key] = self.sums.get(key, 0.0) + value

    def get_count(self, labels: dict[str, str] | None = None) -> float:
        key = _label_key(labels)
        with self._lock:
            counts = self.counts.get(key)
            return counts[-1] if counts else 0.0


class MetricsCollector:
    """Collects and exports generation metrics in Prometheus format."""

    DEFAULT_COUNTERS: ClassVar[dict[str, str]] = {
        "ulidkit_generated_total": "Total number of ULIDs generated",
        "ulidkit_exhausted_total": "Total number of times a timestamp ran out of randomness",
        "ulidkit_waits_total": "Total number of waits for the next clock millisecond",
        "ulidkit_wait_cancelled_total": "Total number of waits aborted by cancellation",
        "ulidkit_duplicate_retries_total": "Total number of duplicate ULIDs drawn and retried",
    }

    DEFAULT_HISTOGRAMS: ClassVar[dict[str, str]] = {
        "ulidkit_wait_duration_seconds": "Time spent waiting for the next clock millisecond",
    }

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, Counter] = {
            name: Counter(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_COUNTERS.items()
        }
        self._histograms: dict[str, Histogram] = {
            name: Histogram(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_HISTOGRAMS.items()
        }

    def increment_counter(
        self, name: str, labels: dict[str, str] | None = None, value: float = 1.0
    ) -> None:
        with self._lock:
            counter = self._counters.get(name)
        if counter is not None:
            counter.increment(labels, value)

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            histogram = self._histograms.get(name)
        if histogram is not None:
            histogram.observe(value, labels)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            counter = self._counters.get(name)
        return counter.get(labels) if counter is not None else 0.0

    def get_histogram_count(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            histogram = self._histograms.get(name)
        return histogram.get_count(labels) if histogram is not None else 0.0

    @staticmethod
    def _format_labels(labels: _LabelKey, extra: str = "") -> str:
        parts = [
            '{}="{}"'.format(k, v.replace("\\", "\\\\").replace('"', '\\"')) for k, v in labels
        ]
        if extra:
            parts.append(extra)
        return "{" + ",".join(parts) + "}" if parts else ""

    def export_prometheus(self) -> str:
        """Export all metrics in Prometheus text exposition format."""
        lines: list[str] = []

        with self._lock:
            counters = list(self._counters.values())
            histograms = list(self._histograms.values())

        for counter in counters:
            lines.append(f"# HELP {counter.name} {counter.help_text}")
            lines.append(f"# TYPE {counter.name} counter")
            with counter._lock:
                values = dict(counter.values)
            if not values:
                lines.append(f"{counter.name} 0")
            for key, value in values.items():
                lines.append(f"{counter.name}{self._format_labels(key)} {value}")

        for histogram in histograms:
            lines.append(f"# HELP {histogram.name} {histogram.help_text}")
            lines.append(f"# TYPE {histogram.name} histogram")
            with histogram._lock:
                counts = {k: list(v) for k, v in histogram.counts.items()}
                sums = dict(histogram.sums)
            if not counts:
                counts = {(): [0.0] * (len(histogram.buckets) + 1)}
            for key, bucket_counts in counts.items():
                for bound, count in zip(histogram.buckets, bucket_counts):
                    label_str = self._format_labels(key, f'le="{bound}"')
                    lines.append(f"{histogram.name}_bucket{label_str} {count}")
                total = bucket_counts[-1]
                inf_labels = self._format_labels(key, 'le="+Inf"')
                base_labels = self._format_labels(key)
                lines.append(f"{histogram.name}_bucket{inf_labels} {total}")
                lines.append(f"{histogram.name}_sum{base_labels} {sums.get(key, 0.0)}")
                lines.append(f"{histogram.name}_count{base_labels} {total}")

        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Reset all metrics to zero. Useful for testing."""
        with self._lock:
            for counter in self._counters.values():
                with counter._lock:
                    counter.values.clear()
            for histogram in self._histograms.values():
                with histogram._lock:
                    histogram.counts.clear()
                    histogram.sums.clear()


_metrics_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics() -> MetricsCollector:
    """Get the global metrics collector instance."""
    global _metrics_collector
    with _collector_lock:
        if _metrics_collector is None:
            _metrics_collector = MetricsCollector()
        return _metrics_collector


def reset_metrics() -> None:
    """Reset the global metrics collector. Useful for testing."""
    with _collector_lock:
        collector = _metrics_collector
    if collector is not None:
        collector.reset()
