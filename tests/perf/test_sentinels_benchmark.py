"""Performance sentinels (gated)."""

from __future__ import annotations

import pytest

from anyhash.api import digest_sha256
from anyhash._internal.benchmarks import (
    MAX_LONG_SEQUENCE_MS,
    MAX_RECORD_CHAIN_MS,
    MAX_RECORD_TREE_MS,
    MAX_WIDE_MAP_MS,
    long_sequence,
    record_chain,
    record_tree,
    run_sentinel_case,
    wide_map,
)


def _assert_budget(benchmark, max_ms: float) -> None:
    mean_ms = benchmark.stats.stats.mean * 1000.0
    assert mean_ms < max_ms, f"Mean {mean_ms:.2f} ms exceeded budget {max_ms:.2f} ms"


@pytest.mark.perf
def test_wide_map_sentinel(benchmark):
    value = wide_map()
    result = benchmark.pedantic(lambda: digest_sha256(value), rounds=3, iterations=1)
    assert len(result) == 32

    _assert_budget(benchmark, MAX_WIDE_MAP_MS)


@pytest.mark.perf
def test_long_sequence_sentinel(benchmark):
    value = long_sequence()
    result = benchmark.pedantic(lambda: digest_sha256(value), rounds=3, iterations=1)
    assert len(result) == 32

    _assert_budget(benchmark, MAX_LONG_SEQUENCE_MS)


@pytest.mark.perf
def test_record_tree_sentinel(benchmark):
    value = record_tree()
    result = benchmark.pedantic(lambda: digest_sha256(value), rounds=3, iterations=1)
    assert len(result) == 32

    _assert_budget(benchmark, MAX_RECORD_TREE_MS)


@pytest.mark.perf
def test_record_chain_sentinel(benchmark):
    value = record_chain()
    result = benchmark.pedantic(lambda: digest_sha256(value), rounds=3, iterations=1)
    assert len(result) == 32

    _assert_budget(benchmark, MAX_RECORD_CHAIN_MS)


@pytest.mark.perf
def test_sentinel_runner_is_deterministic():
    _, first = run_sentinel_case("record_tree")
    _, second = run_sentinel_case("record_tree")
    assert first == second
