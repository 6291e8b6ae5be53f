"""Value classification.

Every value handed to the walker is tagged with exactly one ``Shape``.
Classification goes through ``functools.singledispatch`` registries, so new
types are taught to the hasher by registering them rather than by editing a
type switch:

    register_shape(MyVector, Shape.SEQUENCE)
    register_dynamic(Lazy, lambda lazy: lazy.resolve())
"""

import dataclasses
import datetime
import decimal
import fractions
import functools
import pathlib
import types
import uuid
import weakref
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from functools import singledispatch
from typing import Any, Callable

from pydantic import BaseModel, RootModel


class Shape(str, Enum):
    """Structural shape of a value, as seen by the walker."""

    SCALAR = "scalar"
    REFERENCE = "reference"
    SEQUENCE = "sequence"
    MAP = "map"
    SET = "set"
    RECORD = "record"
    DYNAMIC = "dynamic"
    OTHER = "other"


def _has_slots(value: Any) -> bool:
    return any("__slots__" in vars(klass) for klass in type(value).__mro__[:-1])


@singledispatch
def classify(value: Any) -> Shape:
    """Return the shape of ``value``."""
    if isinstance(value, type):
        return Shape.OTHER
    if dataclasses.is_dataclass(value):
        return Shape.RECORD
    if hasattr(value, "__dict__") or _has_slots(value):
        return Shape.RECORD
    return Shape.OTHER


def register_shape(cls: type, shape: Shape) -> None:
    """Classify every instance of ``cls`` (and subclasses) as ``shape``."""
    shape = Shape(shape)
    classify.register(cls, lambda value: shape)


for _cls in (bool, int, float, complex, str, bytes, bytearray, memoryview, type(None)):
    register_shape(_cls, Shape.SCALAR)

register_shape(Mapping, Shape.MAP)
register_shape(Set, Shape.SET)
register_shape(Sequence, Shape.SEQUENCE)
register_shape(weakref.ref, Shape.REFERENCE)
register_shape(BaseModel, Shape.RECORD)
register_shape(Enum, Shape.DYNAMIC)
register_shape(RootModel, Shape.DYNAMIC)

# Library value types that hold their state in private slots or C fields.
# Their string form is canonical enough and far more useful than nothing.
for _cls in (
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    decimal.Decimal,
    fractions.Fraction,
    pathlib.PurePath,
    uuid.UUID,
):
    register_shape(_cls, Shape.OTHER)

# Written by qualified name. Callable instances holding state stay records.
for _cls in (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    functools.partial,
):
    register_shape(_cls, Shape.OTHER)


@classify.register(tuple)
def _classify_tuple(value: tuple) -> Shape:
    # NamedTuple instances are records; bare tuples are sequences.
    if hasattr(type(value), "_fields"):
        return Shape.RECORD
    return Shape.SEQUENCE


@singledispatch
def unwrap(value: Any) -> Any:
    """Return the concrete payload hidden by a dynamic wrapper."""
    raise TypeError(f"No unwrapper registered for {type(value).__name__}")


@unwrap.register(Enum)
def _unwrap_enum(value: Enum) -> Any:
    return value.value


@unwrap.register(RootModel)
def _unwrap_root_model(value: RootModel) -> Any:
    return value.root


def register_dynamic(cls: type, unwrapper: Callable[[Any], Any]) -> None:
    """Treat ``cls`` as a dynamic wrapper whose payload is ``unwrapper(value)``."""
    register_shape(cls, Shape.DYNAMIC)
    unwrap.register(cls, unwrapper)


def deref(value: Any) -> Any:
    """Follow a reference; returns None when the referent is gone."""
    return value()


@singledispatch
def text_of(value: Any) -> str:
    """Best-effort text for values with no structural shape."""
    return str(value)


@text_of.register(type)
def _text_of_type(value: type) -> str:
    return f"{value.__module__}.{value.__qualname__}"


@text_of.register(types.FunctionType)
@text_of.register(types.BuiltinFunctionType)
@text_of.register(types.MethodType)
def _text_of_function(value) -> str:
    return f"{getattr(value, '__module__', None)}.{value.__qualname__}"


@text_of.register(types.ModuleType)
def _text_of_module(value: types.ModuleType) -> str:
    return value.__name__


@text_of.register(functools.partial)
def _text_of_partial(value: functools.partial) -> str:
    bound = [text_of(arg) for arg in value.args]
    bound += [f"{name}={text_of(arg)}" for name, arg in sorted(value.keywords.items())]
    return f"{text_of(value.func)}({', '.join(bound)})"
