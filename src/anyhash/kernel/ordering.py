"""Deterministic ordering for unordered containers.

Map entries are ordered by the auxiliary hash of their key's canonical
encoding, record fields by the UTF-8 bytes of their name. Both sorts compare
raw bytes and are stable.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, TypeVar, Union


@dataclass(frozen=True)
class KeyEntry:
    """A map entry (or set element) tagged with its key sub-hash."""
    sort_key: bytes
    key: Any
    value: Any = None


@dataclass(frozen=True)
class FieldEntry:
    """A record field tagged with its encoded name."""
    name: bytes
    value: Any

    @property
    def sort_key(self) -> bytes:
        return self.name


Entry = TypeVar("Entry", bound=Union[KeyEntry, FieldEntry])


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Return entries in ascending byte order of their sort key."""
    return sorted(entries, key=lambda entry: entry.sort_key)
