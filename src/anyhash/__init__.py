"""anyhash: deterministic digests of arbitrary structured Python values."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("anyhash")
except PackageNotFoundError:
    __version__ = "dev"

from anyhash.api import (
    canonical_bytes,
    digest,
    digest_sha1,
    digest_sha256,
    digest_sha512,
    hash_with,
    hexdigest,
)
from anyhash.config import HasherConfig, configure, get_default_config, set_default_config
from anyhash.errors import AnyhashError, DepthBudgetExceededError, UnknownAlgorithmError
from anyhash.kernel.shapes import Shape, register_dynamic, register_shape
from anyhash.kernel.walker import CanonicalWalker
from anyhash.sinks import CaptureSink, Crc32Sink, HashSink, new_sink

__all__ = [
    "__version__",
    "digest_sha512",
    "digest_sha256",
    "digest_sha1",
    "digest",
    "hexdigest",
    "hash_with",
    "canonical_bytes",
    "CanonicalWalker",
    "HasherConfig",
    "configure",
    "get_default_config",
    "set_default_config",
    "Shape",
    "register_shape",
    "register_dynamic",
    "HashSink",
    "CaptureSink",
    "Crc32Sink",
    "new_sink",
    "AnyhashError",
    "UnknownAlgorithmError",
    "DepthBudgetExceededError",
]
