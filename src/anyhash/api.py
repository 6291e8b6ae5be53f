"""Public API for anyhash.

Each wrapper creates a fresh sink, walks the value into it and returns the
finalized digest. ``hash_with`` takes a caller-owned sink instead, so
checksums or key-derivation functions can reuse the same canonical stream.
"""

import hashlib
from typing import Any, Optional

from anyhash.config import HasherConfig
from anyhash.kernel.walker import CanonicalWalker
from anyhash.sinks import CaptureSink, HashSink, new_sink


def hash_with(sink: HashSink, value: Any, config: Optional[HasherConfig] = None) -> None:
    """Write the canonical stream of ``value`` into ``sink``.

    The caller finalizes the sink (``sink.digest()``).
    """
    CanonicalWalker(config).canonicalize(sink, value)


def digest(value: Any, algorithm: str = "sha256", config: Optional[HasherConfig] = None) -> bytes:
    """Digest ``value`` with any fixed-length hashlib algorithm.

    Raises:
        UnknownAlgorithmError: if ``algorithm`` is not available
    """
    sink = new_sink(algorithm)
    hash_with(sink, value, config)
    return sink.digest()


def hexdigest(value: Any, algorithm: str = "sha256", config: Optional[HasherConfig] = None) -> str:
    """Like ``digest`` but returns lowercase hex."""
    return digest(value, algorithm, config).hex()


def digest_sha512(value: Any, config: Optional[HasherConfig] = None) -> bytes:
    """SHA-512 digest of the canonical stream of ``value``."""
    sink = hashlib.sha512()
    hash_with(sink, value, config)
    return sink.digest()


def digest_sha256(value: Any, config: Optional[HasherConfig] = None) -> bytes:
    """SHA-256 digest of the canonical stream of ``value``."""
    sink = hashlib.sha256()
    hash_with(sink, value, config)
    return sink.digest()


def digest_sha1(value: Any, config: Optional[HasherConfig] = None) -> bytes:
    """SHA-1 digest of the canonical stream of ``value``."""
    sink = hashlib.sha1()
    hash_with(sink, value, config)
    return sink.digest()


def canonical_bytes(value: Any, config: Optional[HasherConfig] = None) -> bytes:
    """Return the raw canonical stream of ``value`` (no hashing).

    Useful for debugging a digest mismatch, or for feeding the same stream to
    several sinks.
    """
    sink = CaptureSink()
    hash_with(sink, value, config)
    return sink.getvalue()
