"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed anyhash package.
"""

from functools import singledispatch

import pytest

from anyhash.config import get_default_config, set_default_config
from anyhash.kernel.shapes import classify, text_of, unwrap


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture(autouse=True)
def restore_default_config():
    """Tests that call configure() must not leak into each other."""
    saved = get_default_config()
    yield
    set_default_config(saved)


@pytest.fixture(autouse=True)
def restore_registries():
    """Tests that register shapes or unwrappers must not leak into each other.

    singledispatch has no unregister, so every changed entry is pointed at
    whatever the saved registry would have dispatched it to.
    """
    saved = {func: dict(func.registry) for func in (classify, unwrap, text_of)}
    yield
    for func, before in saved.items():
        original = singledispatch(before[object])
        for cls, impl in before.items():
            if cls is not object:
                original.register(cls, impl)
        for cls, impl in list(func.registry.items()):
            if before.get(cls) is not impl:
                func.register(cls, original.dispatch(cls))
