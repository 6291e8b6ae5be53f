"""Performance sentinel workloads and budgets.

Budgets are mean milliseconds per digest and can be overridden through
environment variables on slow CI machines.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Tuple

from anyhash.api import digest_sha256


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_WIDE_MAP_MS = _budget_from_env("ANYHASH_MAX_WIDE_MAP_MS", 500.0)
MAX_LONG_SEQUENCE_MS = _budget_from_env("ANYHASH_MAX_LONG_SEQUENCE_MS", 500.0)
MAX_RECORD_TREE_MS = _budget_from_env("ANYHASH_MAX_RECORD_TREE_MS", 1000.0)
MAX_RECORD_CHAIN_MS = _budget_from_env("ANYHASH_MAX_RECORD_CHAIN_MS", 500.0)


@dataclass
class TreeNode:
    name: str = ""
    weight: float = 0.0
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["TreeNode"] = field(default_factory=list)
    parent: Optional[str] = None


def wide_map(size: int = 10_000) -> Dict[str, Any]:
    """Flat mapping; dominated by key sub-hashing and sorting."""
    return {f"key-{i:06d}": {"index": i, "even": i % 2 == 0} for i in range(size)}


def long_sequence(size: int = 100_000) -> List[Any]:
    """Flat list of mixed scalars; dominated by per-node dispatch."""
    return [(i, f"item-{i}", i * 0.5, i % 3 == 0) for i in range(size)]


def record_tree(depth: int = 6, fanout: int = 4) -> TreeNode:
    """Balanced tree of records; dominated by field selection."""
    def build(level: int, name: str) -> TreeNode:
        node = TreeNode(name=name, weight=level * 1.5, attributes={"level": str(level)})
        if level < depth:
            node.children = [build(level + 1, f"{name}.{i}") for i in range(fanout)]
        return node

    return build(1, "root")


@dataclass
class ChainLink:
    next: Optional["ChainLink"] = None
    label: str = ""


def record_chain(length: int = 200) -> ChainLink:
    """Records nested through their first field; dominated by zero checks."""
    head = ChainLink(label="tail")
    for _ in range(length):
        head = ChainLink(next=head)
    return head


SENTINELS: Dict[str, Tuple[Callable[[], Any], float]] = {
    "wide_map": (wide_map, MAX_WIDE_MAP_MS),
    "long_sequence": (long_sequence, MAX_LONG_SEQUENCE_MS),
    "record_tree": (record_tree, MAX_RECORD_TREE_MS),
    "record_chain": (record_chain, MAX_RECORD_CHAIN_MS),
}


def run_sentinel_case(case: str) -> Tuple[float, bytes]:
    """Digest a sentinel workload and return elapsed ms plus the digest.

    Building the workload is not timed.
    """
    build, _ = SENTINELS[case]
    value = build()
    start = perf_counter()
    result = digest_sha256(value)
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, result
