"""Hasher configuration.

``HasherConfig`` is immutable and is threaded explicitly into the walker.
A process-wide default exists for the convenience wrappers; replace it
before hashing starts, never while a computation is in flight.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from anyhash.sinks import HashSink, is_supported_algorithm, new_sink


class HasherConfig(BaseModel):
    """Settings shared by every walk that uses this config."""

    # Auxiliary digest used only to derive sortable map keys. It is
    # independent of the output digest chosen by the caller.
    key_hash_algorithm: str = "md5"
    # None means unbounded: cyclic input ends in Python's RecursionError.
    max_depth: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("key_hash_algorithm")
    @classmethod
    def validate_key_hash_algorithm(cls, v: str) -> str:
        """Key hash must be a fixed-length hashlib algorithm."""
        v = v.strip().lower()
        if not is_supported_algorithm(v):
            raise ValueError(
                f"key_hash_algorithm '{v}' is not a fixed-length hashlib algorithm"
            )
        return v

    def new_key_sink(self) -> HashSink:
        return new_sink(self.key_hash_algorithm)


_default_config = HasherConfig()


def get_default_config() -> HasherConfig:
    return _default_config


def set_default_config(config: HasherConfig) -> None:
    """Replace the process-wide default config."""
    global _default_config
    if not isinstance(config, HasherConfig):
        raise TypeError(f"expected HasherConfig, got {type(config).__name__}")
    _default_config = config


def configure(**overrides) -> HasherConfig:
    """Update fields of the process-wide default config and return it.

    Example:
        configure(key_hash_algorithm="sha1")
    """
    config = HasherConfig(**{**_default_config.model_dump(), **overrides})
    set_default_config(config)
    return config
