"""Canonical walker: writes the canonical byte stream of a value to a sink.

Rules, applied at every depth:
- zero values write nothing (see ``anyhash.kernel.zero``)
- scalars write their fixed encoding (see ``anyhash.kernel.scalars``)
- sequences write their elements in order, with no separators
- maps write ``key_hash(key) + canonical(value)`` per non-zero entry,
  ordered by ``key_hash``
- sets write ``key_hash(element)`` per element, ordered by the hash
- records write ``name + canonical(value)`` per selected non-zero field,
  ordered by name, unless the record's ``canonical_bytes()`` hook supplies
  bytes of its own
- dynamic wrappers write their unwrapped payload
- anything else writes its text form

Nothing here raises for odd input. The only failure is running out of
stack on cyclic values, or ``DepthBudgetExceededError`` when
``HasherConfig.max_depth`` is set.
"""

import logging
from typing import Any, Optional

from anyhash.config import HasherConfig, get_default_config
from anyhash.errors import DepthBudgetExceededError
from anyhash.kernel.ordering import FieldEntry, KeyEntry, sort_entries
from anyhash.kernel.records import select_fields
from anyhash.kernel.scalars import encode_scalar
from anyhash.kernel.shapes import Shape, classify, deref, text_of, unwrap
from anyhash.kernel.zero import ZeroPolicy
from anyhash.sinks import HashSink

logger = logging.getLogger(__name__)

HOOK_NAME = "canonical_bytes"


class CanonicalWalker:
    """Recursive canonicalization engine bound to one ``HasherConfig``.

    An instance runs one walk at a time; zero verdicts are cached per walk.
    """

    def __init__(self, config: Optional[HasherConfig] = None):
        self.config = config if config is not None else get_default_config()
        self._zero = ZeroPolicy()

    def canonicalize(self, sink: HashSink, value: Any) -> None:
        """Write the canonical encoding of ``value`` to ``sink``."""
        self._zero = ZeroPolicy()
        self._walk(sink, value, 1)

    def key_hash(self, key: Any) -> bytes:
        """Auxiliary digest of a key's canonical encoding."""
        self._zero = ZeroPolicy()
        return self._key_hash(key, 1)

    def _key_hash(self, key: Any, depth: int) -> bytes:
        key_sink = self.config.new_key_sink()
        self._walk(key_sink, key, depth)
        return key_sink.digest()

    def _walk(self, sink: HashSink, value: Any, depth: int) -> None:
        if self._zero.is_zero(value):
            return

        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise DepthBudgetExceededError(max_depth)

        shape = classify(value)
        if shape is Shape.SCALAR:
            sink.update(encode_scalar(value))
        elif shape is Shape.REFERENCE:
            self._walk_reference(sink, value, depth)
        elif shape is Shape.SEQUENCE:
            for item in value:
                self._walk(sink, item, depth + 1)
        elif shape is Shape.MAP:
            self._walk_map(sink, value, depth)
        elif shape is Shape.SET:
            self._walk_set(sink, value, depth)
        elif shape is Shape.RECORD:
            self._walk_record(sink, value, depth)
        elif shape is Shape.DYNAMIC:
            self._walk_dynamic(sink, value, depth)
        else:
            self._walk_other(sink, value)

    def _walk_reference(self, sink: HashSink, value: Any, depth: int) -> None:
        target = deref(value)
        # An absent referent writes nothing; a live one is walked in place.
        if target is not None:
            self._walk(sink, target, depth + 1)

    def _walk_map(self, sink: HashSink, value: Any, depth: int) -> None:
        entries = []
        for key, item in value.items():
            if self._zero.is_zero(item):
                continue
            entries.append(KeyEntry(self._key_hash(key, depth + 1), key, item))

        for entry in sort_entries(entries):
            sink.update(entry.sort_key)
            self._walk(sink, entry.value, depth + 1)

    def _walk_set(self, sink: HashSink, value: Any, depth: int) -> None:
        entries = [KeyEntry(self._key_hash(item, depth + 1), item) for item in value]
        for entry in sort_entries(entries):
            sink.update(entry.sort_key)

    def _walk_record(self, sink: HashSink, value: Any, depth: int) -> None:
        encoded = self._call_hook(value)
        if encoded is not None:
            sink.update(encoded)
            return

        entries = [
            FieldEntry(field.name.encode("utf-8"), field.value)
            for field in select_fields(value)
            if not self._zero.is_zero(field.value)
        ]
        for entry in sort_entries(entries):
            sink.update(entry.name)
            self._walk(sink, entry.value, depth + 1)

    def _call_hook(self, value: Any) -> Optional[bytes]:
        """Return the record's own canonical bytes, or None to walk its fields."""
        hook = getattr(value, HOOK_NAME, None)
        if not callable(hook):
            return None
        try:
            encoded = hook()
        except Exception as e:
            logger.debug("%s.%s() failed, walking fields instead: %s",
                         type(value).__name__, HOOK_NAME, e)
            return None
        if encoded is None:
            return None
        if not isinstance(encoded, (bytes, bytearray, memoryview)):
            logger.debug("%s.%s() returned %s, walking fields instead",
                         type(value).__name__, HOOK_NAME, type(encoded).__name__)
            return None
        return bytes(encoded)

    def _walk_dynamic(self, sink: HashSink, value: Any, depth: int) -> None:
        try:
            inner = unwrap(value)
        except Exception as e:
            logger.debug("Cannot unwrap %s, contributing nothing: %s", type(value).__name__, e)
            return
        self._walk(sink, inner, depth + 1)

    def _walk_other(self, sink: HashSink, value: Any) -> None:
        try:
            text = text_of(value)
        except Exception as e:
            logger.debug("Cannot describe %s, contributing nothing: %s", type(value).__name__, e)
            return
        if text:
            sink.update(encode_scalar(text))
