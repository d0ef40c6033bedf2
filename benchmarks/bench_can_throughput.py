"""Benchmark: permission check throughput — can() calls per second.

Measures how many CanCan.can() calls complete per second against a registry
mixing plain, attribute-map and predicate rules, where the matching rule is
registered last so every query scans the whole registry.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cancan.engine import CanCan
from cancan.models import Record

_ITERATIONS: int = 10_000
_FILLER_RULES: int = 50

User = Record.subclass("User")
Product = Record.subclass("Product")
Order = Record.subclass("Order")


def _make_engine() -> CanCan:
    """Build an engine with filler rules ahead of the one that matches."""
    engine = CanCan()
    for index in range(_FILLER_RULES):
        engine.allow(User, f"action_{index}", Order)
        engine.allow(User, "read", Order, {"tenant": f"tenant-{index}"})
    engine.allow(User, ["read", "update"], Product, lambda user, product, options: (
        product.get("owner") == user.get("id")
    ))
    return engine


def bench_can_throughput() -> dict[str, object]:
    """Benchmark CanCan.can() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, rule_count.
    """
    engine = _make_engine()
    user = User(id=7)
    product = Product(owner=7)

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        engine.can(user, "update", product)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "can_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "rule_count": len(engine),
    }
    print(
        f"[bench_can_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_can_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "can_throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
