"""Error types for anyhash.

Canonicalization itself never raises for odd input; these cover
configuration mistakes and the optional recursion budget.
"""


class AnyhashError(Exception):
    """Base exception for all anyhash errors."""
    pass


class UnknownAlgorithmError(AnyhashError, ValueError):
    """Raised when a hash algorithm name is not available."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown or unsupported hash algorithm: {name!r}")


class DepthBudgetExceededError(AnyhashError, RecursionError):
    """Raised when a walk nests deeper than the configured max_depth."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            f"Value nests deeper than max_depth={max_depth} "
            f"(cyclic or unbounded input?)"
        )
