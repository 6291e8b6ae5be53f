"""Incremental hash sinks.

A sink is anything with ``update(data: bytes)`` and ``digest() -> bytes``,
which is exactly the protocol of ``hashlib`` objects. The walker only ever
calls ``update``; finalizing is left to whoever created the sink.
"""

import hashlib
import zlib
from typing import Protocol, runtime_checkable

from anyhash.errors import UnknownAlgorithmError

# Variable-length digests need a length argument to digest() and cannot be
# used where a fixed-width output is expected.
_VARIABLE_LENGTH = frozenset({"shake_128", "shake_256"})


@runtime_checkable
class HashSink(Protocol):
    """An object accepting byte writes, finalizable into a digest."""

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


def is_supported_algorithm(name: str) -> bool:
    """Return True if ``name`` is a fixed-length hashlib algorithm."""
    name = name.lower()
    return name in hashlib.algorithms_available and name not in _VARIABLE_LENGTH


def new_sink(name: str) -> HashSink:
    """Create a fresh hashlib sink for the named algorithm.

    Raises:
        UnknownAlgorithmError: if the algorithm is unknown or variable-length
    """
    if not is_supported_algorithm(name):
        raise UnknownAlgorithmError(name)
    return hashlib.new(name.lower())


class CaptureSink:
    """Sink that keeps the raw canonical stream instead of hashing it."""

    def __init__(self):
        self._buf = bytearray()
        self.chunks = 0

    def update(self, data: bytes) -> None:
        self._buf += data
        self.chunks += 1

    def digest(self) -> bytes:
        return bytes(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def reset(self) -> None:
        self._buf.clear()
        self.chunks = 0


class Crc32Sink:
    """CRC-32 (IEEE) checksum with the hashlib update/digest interface.

    ``digest()`` returns the 4-byte big-endian checksum.
    """

    digest_size = 4
    name = "crc32"

    def __init__(self):
        self._crc = 0

    def update(self, data: bytes) -> None:
        self._crc = zlib.crc32(data, self._crc)

    def digest(self) -> bytes:
        return self._crc.to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()
