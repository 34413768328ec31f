"""Fixed-width 128-bit arithmetic over four 32-bit limbs.

A value is 16 big-endian bytes, split into limbs most-significant first.
Every intermediate stays within 64 bits, so the same steps work where only
native machine words are available.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Union

from .errors import InvalidValue

VALUE_BYTES = 16
LIMB_BITS = 32
LIMB_MASK = 0xFFFF_FFFF
ZERO = bytes(VALUE_BYTES)

_LIMBS = struct.Struct(">4I")


@dataclass(frozen=True)
class NativeQuotient:
    """Quotient that fits in 64 bits; later divisions can use plain integers."""

    quotient: int
    remainder: int


@dataclass(frozen=True)
class WideQuotient:
    """Quotient that still needs all four limbs."""

    quotient: bytes
    remainder: int


DivmodResult = Union[NativeQuotient, WideQuotient]


def require_value(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != VALUE_BYTES:
        raise InvalidValue("128-bit value requires exactly 16 bytes")
    return bytes(value)


def _require_limb(val: int, *, name: str, allow_zero: bool) -> int:
    lo = 0 if allow_zero else 1
    if not isinstance(val, int) or not lo <= val <= LIMB_MASK:
        raise InvalidValue(f"{name} must fit in 32 bits (>= {lo}); got {val!r}")
    return val


def split_limbs(value: bytes) -> tuple[int, int, int, int]:
    return _LIMBS.unpack(require_value(value))


def join_limbs(limbs: tuple[int, int, int, int] | list[int]) -> bytes:
    return _LIMBS.pack(*limbs)


def divmod_limb(limb: int, divisor: int, remainder: int = 0) -> tuple[int, int]:
    # remainder < divisor keeps the quotient limb within 32 bits
    dividend = (remainder << LIMB_BITS) | limb
    return dividend // divisor, dividend % divisor


def muladd_limb(limb: int, multiplier: int, addend: int = 0, carry: int = 0) -> tuple[int, int]:
    """Return ``(low 32 bits, carry)`` of ``limb * multiplier + carry + addend``."""
    product = limb * multiplier + carry + addend
    return product & LIMB_MASK, product >> LIMB_BITS


def divmod32(value: bytes, divisor: int) -> DivmodResult:
    """Long division of a 128-bit value by a 32-bit divisor.

    Returns a ``NativeQuotient`` once the two high quotient limbs are zero,
    otherwise a ``WideQuotient``. The remainder is always below ``divisor``.
    """
    _require_limb(divisor, name="divisor", allow_zero=False)
    quotients: list[int] = []
    remainder = 0
    for limb in split_limbs(value):
        q, remainder = divmod_limb(limb, divisor, remainder)
        quotients.append(q)
    if quotients[0] == 0 and quotients[1] == 0:
        return NativeQuotient((quotients[2] << LIMB_BITS) | quotients[3], remainder)
    return WideQuotient(join_limbs(quotients), remainder)


def muladd32(value: bytes, multiplier: int, addend: int = 0) -> bytes:
    """Return ``value * multiplier + addend`` truncated to 128 bits.

    The carry out of the most significant limb is dropped.
    """
    _require_limb(multiplier, name="multiplier", allow_zero=False)
    _require_limb(addend, name="addend", allow_zero=True)
    limbs = split_limbs(value)
    out = [0, 0, 0, 0]
    carry = 0
    for i in (3, 2, 1, 0):
        out[i], carry = muladd_limb(limbs[i], multiplier, addend if i == 3 else 0, carry)
    return join_limbs(out)
