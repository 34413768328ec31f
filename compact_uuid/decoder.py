from __future__ import annotations

from .alphabet import Alphabet
from .errors import InvalidCharacter
from .limbs import ZERO, muladd32


def invalid_positions(text: str, alphabet: Alphabet) -> list[int]:
    return [i for i, ch in enumerate(text) if ch not in alphabet]


def decode_text(text: str, alphabet: Alphabet, *, strict: bool = False) -> bytes:
    """Decode ``text`` back to 16 big-endian bytes (Horner's method).

    Characters outside the alphabet count as the zero digit unless
    ``strict`` is set, in which case ``InvalidCharacter`` is raised.
    """
    base = alphabet.base
    acc = ZERO
    for position, ch in enumerate(text):
        index = alphabet.index_of(ch)
        if index is None:
            if strict:
                raise InvalidCharacter(ch, position)
            index = 0
        acc = muladd32(acc, base, index)
    return acc
