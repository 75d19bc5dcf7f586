"""Tests for ulidkit observability metrics module."""

import threading

from ulidkit.observability.metrics import (
    Counter,
    Histogram,
    MetricsCollector,
    get_metrics,
    reset_metrics,
)


class TestCounter:
    """Tests for Counter metric."""

    def test_counter_increment_default(self) -> None:
        """Test counter increments by 1 by default."""
        counter = Counter(name="test_counter", help_text="Test counter")
        counter.increment()
        assert counter.get() == 1.0

    def test_counter_increment_with_labels(self) -> None:
        """Test counter with labels."""
        counter = Counter(name="test_counter", help_text="Test counter")
        counter.increment(labels={"generator": "monotonic"}, value=5)
        counter.increment(labels={"generator": "simple"})

        assert counter.get(labels={"generator": "monotonic"}) == 5.0
        assert counter.get(labels={"generator": "simple"}) == 1.0
        assert counter.get(labels={"generator": "unknown"}) == 0.0

    def test_counter_thread_safety(self) -> None:
        counter = Counter(name="test_counter", help_text="Test counter")

        def worker() -> None:
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.get() == 8000.0


class TestHistogram:
    """Tests for Histogram metric."""

    def test_histogram_observe(self) -> None:
        histogram = Histogram(name="test_histogram", help_text="Test", buckets=(0.1, 0.5, 1.0))
        histogram.observe(0.25)
        histogram.observe(0.75)
        histogram.observe(5.0)

        assert histogram.get_count() == 3.0
        assert histogram.counts[()] == [0.0, 1.0, 2.0, 3.0]
        assert histogram.sums[()] == 6.0

    def test_histogram_empty_count(self) -> None:
        histogram = Histogram(name="test_histogram", help_text="Test")
        assert histogram.get_count() == 0.0


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_default_metrics_registered(self) -> None:
        output = MetricsCollector().export_prometheus()

        for name in MetricsCollector.DEFAULT_COUNTERS:
            assert f"# TYPE {name} counter" in output
            assert f"{name} 0" in output
        assert "# TYPE ulidkit_wait_duration_seconds histogram" in output
        assert "ulidkit_wait_duration_seconds_count 0.0" in output

    def test_unknown_metric_is_ignored(self) -> None:
        collector = MetricsCollector()
        collector.increment_counter("not_a_metric")
        collector.observe_histogram("not_a_histogram", 1.0)

        assert collector.get_counter("not_a_metric") == 0.0
        assert collector.get_histogram_count("not_a_histogram") == 0.0

    def test_export_with_labels(self) -> None:
        collector = MetricsCollector()
        collector.increment_counter("ulidkit_generated_total", {"generator": "monotonic"}, 3)

        output = collector.export_prometheus()

        assert 'ulidkit_generated_total{generator="monotonic"} 3.0' in output

    def test_export_histogram(self) -> None:
        collector = MetricsCollector()
        collector.observe_histogram("ulidkit_wait_duration_seconds", 0.002)

        output = collector.export_prometheus()

        assert 'ulidkit_wait_duration_seconds_bucket{le="0.001"} 0.0' in output
        assert 'ulidkit_wait_duration_seconds_bucket{le="0.0025"} 1.0' in output
        assert 'ulidkit_wait_duration_seconds_bucket{le="+Inf"} 1.0' in output
        assert "ulidkit_wait_duration_seconds_sum 0.002" in output
        assert "ulidkit_wait_duration_seconds_count 1.0" in output

    def test_label_values_escaped(self) -> None:
        collector = MetricsCollector()
        collector.increment_counter("ulidkit_generated_total", {"generator": 'a"b'})

        assert 'generator="a\\"b"' in collector.export_prometheus()

    def test_reset(self) -> None:
        collector = MetricsCollector()
        collector.increment_counter("ulidkit_waits_total")
        collector.observe_histogram("ulidkit_wait_duration_seconds", 0.01)
        collector.reset()

        assert collector.get_counter("ulidkit_waits_total") == 0.0
        assert collector.get_histogram_count("ulidkit_wait_duration_seconds") == 0.0


class TestGlobalCollector:
    """Tests for get_metrics and reset_metrics."""

    def test_get_metrics_is_singleton(self) -> None:
        assert get_metrics() is get_metrics()

    def test_reset_metrics(self) -> None:
        get_metrics().increment_counter("ulidkit_waits_total")
        reset_metrics()

        assert get_metrics().get_counter("ulidkit_waits_total") == 0.0
