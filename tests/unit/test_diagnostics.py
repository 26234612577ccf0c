"""Unit tests for debt_analyzer.diagnostics module."""

import threading

import pytest

from debt_analyzer.diagnostics import DiagnosticsCollector


class TestCounters:
    """Tests for failure counters."""

    def test_unknown_counter_is_zero(self):
        assert DiagnosticsCollector().get_count("rule_failures") == 0

    def test_increment(self):
        diagnostics = DiagnosticsCollector()
        diagnostics.increment("rule_failures")
        diagnostics.increment("rule_failures", 2)
        assert diagnostics.get_count("rule_failures") == 3

    def test_thread_safe(self):
        diagnostics = DiagnosticsCollector()

        def work():
            for _ in range(100):
                diagnostics.increment("hits")

        threads = [threading.Thread(target=work) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert diagnostics.get_count("hits") == 1000

    def test_collectors_are_independent(self):
        first = DiagnosticsCollector()
        first.increment("hits")
        assert DiagnosticsCollector().get_count("hits") == 0


class TestTimings:
    """Tests for timing samples."""

    def test_get_stats(self):
        diagnostics = DiagnosticsCollector()
        for value in (1.0, 2.0, 3.0):
            diagnostics.record("analyze", value)
        stats = diagnostics.get_stats("analyze")
        assert stats["count"] == 3
        assert stats["avg_ms"] == pytest.approx(2.0)
        assert stats["min_ms"] == 1.0
        assert stats["max_ms"] == 3.0
        assert stats["p50_ms"] == 2.0
        assert stats["p95_ms"] == pytest.approx(2.9)

    def test_no_samples(self):
        assert DiagnosticsCollector().get_stats("analyze") == {}

    def test_measure(self):
        diagnostics = DiagnosticsCollector()
        with diagnostics.measure("analyze"):
            pass
        assert diagnostics.get_stats("analyze")["count"] == 1

    def test_max_samples(self):
        diagnostics = DiagnosticsCollector(max_samples=2)
        for value in (1.0, 2.0, 3.0):
            diagnostics.record("analyze", value)
        assert diagnostics.get_stats("analyze")["min_ms"] == 2.0

    def test_snapshot_and_reset(self):
        diagnostics = DiagnosticsCollector()
        diagnostics.increment("requests_ok")
        diagnostics.record("analyze", 5.0)
        snapshot = diagnostics.snapshot()
        assert snapshot["counters"] == {"requests_ok": 1}
        assert snapshot["timings"]["analyze"]["count"] == 1

        diagnostics.reset()
        assert diagnostics.snapshot() == {"counters": {}, "timings": {}}
