"""Record field enumeration and selection.

A record is a dataclass instance, a pydantic model, a NamedTuple or a plain
object with ``__dict__``/``__slots__``. Fields can be marked as excluded
from hashing with the tag ``"-"``:

    @dataclass
    class User:
        name: str
        session: str = field(default="", metadata={"hash": "-"})

    class Job(BaseModel):
        name: str
        started: float = Field(default=0.0, json_schema_extra={"hash": "-"})

    class Plain:
        __hash_tags__ = {"cache": "-"}

Names starting with an underscore are not externally visible and never
contribute.
"""

import dataclasses
import logging
from typing import Any, Iterator, List, NamedTuple, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

HASH_TAG = "hash"
EXCLUDE_MARKER = "-"

_MISSING = object()


class RecordField(NamedTuple):
    name: str
    value: Any
    tag: Optional[str] = None


def is_visible(name: str) -> bool:
    """Return True if a field name is externally visible."""
    return not name.startswith("_")


def is_excluded(tag: Optional[Any]) -> bool:
    """Return True if a field's hash tag is exactly the exclusion marker."""
    return isinstance(tag, str) and tag.strip() == EXCLUDE_MARKER


def _class_tags(value: Any) -> dict:
    tags = getattr(type(value), "__hash_tags__", None)
    return tags if isinstance(tags, dict) else {}


def _read(value: Any, name: str) -> Any:
    try:
        return getattr(value, name)
    except Exception as e:
        # Unset slot, or an attribute the object refuses to expose.
        logger.debug("Cannot read field %r of %s, contributing nothing: %s",
                     name, type(value).__name__, e)
        return _MISSING


def _dataclass_fields(value: Any, tags: dict) -> Iterator[RecordField]:
    for f in dataclasses.fields(value):
        yield RecordField(f.name, _read(value, f.name), f.metadata.get(HASH_TAG, tags.get(f.name)))


def _model_fields(value: BaseModel, tags: dict) -> Iterator[RecordField]:
    for name, info in type(value).model_fields.items():
        extra = info.json_schema_extra
        tag = extra.get(HASH_TAG) if isinstance(extra, dict) else None
        yield RecordField(name, _read(value, name), tag if tag is not None else tags.get(name))
    for name, item in (value.model_extra or {}).items():
        yield RecordField(name, item, tags.get(name))
    for name, item in (value.__pydantic_private__ or {}).items():
        yield RecordField(name, item, tags.get(name))


def _slot_names(value: Any) -> List[str]:
    names = []
    for klass in type(value).__mro__[:-1]:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in names:
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


def _attribute_fields(value: Any, tags: dict) -> Iterator[RecordField]:
    seen = set()
    for name in _slot_names(value):
        seen.add(name)
        yield RecordField(name, _read(value, name), tags.get(name))
    for name, item in getattr(value, "__dict__", {}).items():
        if name not in seen:
            yield RecordField(name, item, tags.get(name))


def iter_fields(value: Any) -> Iterator[RecordField]:
    """Yield every declared field of a record, visible or not.

    Fields that cannot be read are skipped.
    """
    tags = _class_tags(value)
    if isinstance(value, BaseModel):
        fields = _model_fields(value, tags)
    elif dataclasses.is_dataclass(value):
        fields = _dataclass_fields(value, tags)
    elif isinstance(value, tuple) and hasattr(type(value), "_fields"):
        fields = (RecordField(name, item, tags.get(name)) for name, item in zip(value._fields, value))
    else:
        fields = _attribute_fields(value, tags)

    for field in fields:
        if field.value is not _MISSING:
            yield field


def select_fields(value: Any) -> List[RecordField]:
    """Return the fields that may contribute to a record's encoding.

    Invisible and excluded fields are dropped. Zero-valued fields are kept
    here; eliding them is the walker's job.
    """
    return [
        field for field in iter_fields(value)
        if is_visible(field.name) and not is_excluded(field.tag)
    ]
