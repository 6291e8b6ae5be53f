"""Scalar encoding.

- text: raw UTF-8 bytes
- int: 8-byte little-endian (signed, or unsigned above the int64 range);
  wider values use the minimal signed little-endian form
- float: 8-byte little-endian IEEE-754 double
- complex: real then imaginary, each as a double
- bool: 0x01 when True, nothing when False
- bytes-like: raw bytes
"""

import struct
from functools import singledispatch

_INT64 = struct.Struct("<q")
_UINT64 = struct.Struct("<Q")
_DOUBLE = struct.Struct("<d")
_COMPLEX = struct.Struct("<dd")

_INT64_MIN = -(1 << 63)
_UINT64_MAX = (1 << 64) - 1


@singledispatch
def encode_scalar(value) -> bytes:
    raise TypeError(f"Not a scalar: {type(value).__name__}")


@encode_scalar.register(type(None))
def _encode_none(value) -> bytes:
    return b""


@encode_scalar.register(bool)
def _encode_bool(value: bool) -> bytes:
    return b"\x01" if value else b""


@encode_scalar.register(int)
def _encode_int(value: int) -> bytes:
    if _INT64_MIN <= value < -_INT64_MIN:
        return _INT64.pack(value)
    if 0 <= value <= _UINT64_MAX:
        return _UINT64.pack(value)
    length = (value.bit_length() + 8) // 8
    return value.to_bytes(length, "little", signed=True)


@encode_scalar.register(float)
def _encode_float(value: float) -> bytes:
    return _DOUBLE.pack(value)


@encode_scalar.register(complex)
def _encode_complex(value: complex) -> bytes:
    return _COMPLEX.pack(value.real, value.imag)


@encode_scalar.register(str)
def _encode_str(value: str) -> bytes:
    # surrogatepass keeps lone surrogates hashable instead of raising.
    return value.encode("utf-8", "surrogatepass")


@encode_scalar.register(bytes)
@encode_scalar.register(bytearray)
@encode_scalar.register(memoryview)
def _encode_bytes(value) -> bytes:
    return bytes(value)


def scalar_is_zero(value) -> bool:
    """Return True if a scalar is its type's default.

    Floats compare by bit pattern, so -0.0 and NaN are not zero.
    """
    if value is None:
        return True
    if isinstance(value, float):
        return _DOUBLE.pack(value) == b"\x00" * 8
    if isinstance(value, complex):
        return _COMPLEX.pack(value.real, value.imag) == b"\x00" * 16
    if isinstance(value, memoryview):
        return value.nbytes == 0
    return not value
