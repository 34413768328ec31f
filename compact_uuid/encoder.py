from __future__ import annotations

from .alphabet import Alphabet
from .errors import InvalidValue
from .limbs import NativeQuotient, divmod32, require_value


def encode_digits(value: bytes, base: int) -> list[int]:
    """Return the base-``base`` digit indices of ``value``, least significant first."""
    remaining = require_value(value)
    digits: list[int] = []
    while True:
        step = divmod32(remaining, base)
        digits.append(step.remainder)
        if isinstance(step, NativeQuotient):
            num = step.quotient
            break
        remaining = step.quotient

    while num:
        num, digit = divmod(num, base)
        digits.append(digit)
    return digits


def encode_value(value: bytes, alphabet: Alphabet, pad_length: int | None = None) -> str:
    """Encode 16 big-endian bytes, most significant digit first.

    Output is left-padded with the zero digit up to ``pad_length`` (default:
    the alphabet's default pad length); it is never truncated.
    """
    if pad_length is None:
        pad_length = alphabet.default_pad_length()
    if pad_length < 0:
        raise InvalidValue(f"pad length must be >= 0; got {pad_length}")
    digits = encode_digits(value, alphabet.base)
    if pad_length > len(digits):
        digits.extend([0] * (pad_length - len(digits)))
    return "".join(alphabet.symbol(i) for i in reversed(digits))
