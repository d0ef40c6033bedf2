"""Structural tests for the cancan benchmarks.

Verifies that each benchmark function is callable and returns a dict
with the expected required keys.
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))

_REQUIRED_KEYS = {"operation", "ops_per_second", "avg_latency_ms"}


def test_bench_can_throughput_returns_expected_keys() -> None:
    """bench_can_throughput returns a dict with required keys."""
    from bench_can_throughput import run_benchmark

    result = run_benchmark()
    assert isinstance(result, dict)
    for key in _REQUIRED_KEYS:
        assert key in result, f"Missing key: {key!r}"


def test_bench_can_throughput_ops_per_second_positive() -> None:
    """ops_per_second must be a positive float."""
    from bench_can_throughput import run_benchmark

    result = run_benchmark()
    assert float(result["ops_per_second"]) > 0.0  # type: ignore[arg-type]
    assert result["rule_count"] == 101
