"""Zero-value policy.

A zero value is its type's idiomatic empty value: None, empty text or
bytes, numeric zero, False, a dead reference, an empty container, or a
record whose every field (visible or not) is zero. Zero values contribute
nothing to the canonical stream, and neither does anything beneath them.
"""

from typing import Any, Dict, Optional, Tuple

from anyhash.kernel.records import iter_fields
from anyhash.kernel.scalars import scalar_is_zero
from anyhash.kernel.shapes import Shape, classify, deref


class ZeroPolicy:
    """Zero checks for one walk, with record verdicts cached.

    Records are judged once per walk. A record reached again while its own
    verdict is still pending sits on a cycle and counts as content, so the
    walker (and its depth budget) sees the cycle instead of this check.
    The policy must not outlive the walk: the input may not change under it.
    """

    def __init__(self):
        # id -> (record, verdict); holding the record keeps its id from being reused.
        self._records: Dict[int, Tuple[Any, Optional[bool]]] = {}

    def is_zero(self, value: Any) -> bool:
        """Return True if ``value`` should be elided from the canonical stream."""
        if value is None:
            return True

        shape = classify(value)
        if shape is Shape.SCALAR:
            return scalar_is_zero(value)
        if shape is Shape.REFERENCE:
            return deref(value) is None
        if shape in (Shape.SEQUENCE, Shape.MAP, Shape.SET):
            return len(value) == 0
        if shape is Shape.RECORD:
            return self._record_is_zero(value)
        # Dynamic wrappers are judged after unwrapping; other values always count.
        return False

    def _record_is_zero(self, value: Any) -> bool:
        key = id(value)
        cached = self._records.get(key)
        if cached is not None:
            verdict = cached[1]
            return False if verdict is None else verdict

        self._records[key] = (value, None)
        verdict = all(self.is_zero(field.value) for field in iter_fields(value))
        self._records[key] = (value, verdict)
        return verdict


def is_zero(value: Any) -> bool:
    """Return True if ``value`` should be elided from the canonical stream."""
    return ZeroPolicy().is_zero(value)
