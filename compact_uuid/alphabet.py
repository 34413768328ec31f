from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from .errors import InvalidAlphabet

DEFAULT_ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Default padding is bounded by a 64-bit magnitude, not the full 128 bits.
# Callers needing fixed-width output over every 128-bit value pass
# full_width_length() explicitly.
_PAD_MAGNITUDE = float(2**64)


@dataclass(frozen=True)
class Alphabet:
    """Canonical symbol set: unique single characters sorted by code point.

    Use ``Alphabet.build`` to normalize arbitrary input; direct construction
    only accepts an already canonical string.
    """

    symbols: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.symbols, str):
            raise InvalidAlphabet("alphabet symbols must be a string")
        if len(self.symbols) < 2:
            raise InvalidAlphabet("alphabet with more than one unique symbol required")
        if "".join(sorted(set(self.symbols))) != self.symbols:
            raise InvalidAlphabet("alphabet is not canonical (use Alphabet.build)")
        object.__setattr__(self, "_index", {ch: i for i, ch in enumerate(self.symbols)})

    @classmethod
    def build(cls, symbols: Iterable[str]) -> Alphabet:
        if isinstance(symbols, Alphabet):
            return symbols
        seen: set[str] = set()
        for sym in symbols:
            if not isinstance(sym, str) or len(sym) != 1:
                raise InvalidAlphabet(f"alphabet symbols must be single characters; got {sym!r}")
            seen.add(sym)
        if len(seen) < 2:
            raise InvalidAlphabet("alphabet with more than one unique symbol required")
        return cls("".join(sorted(seen)))

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __str__(self) -> str:
        return self.symbols

    @property
    def base(self) -> int:
        return len(self.symbols)

    @property
    def zero_digit(self) -> str:
        return self.symbols[0]

    def index_of(self, ch: str) -> int | None:
        return self._index.get(ch)

    def symbol(self, index: int) -> str:
        return self.symbols[index]

    def default_pad_length(self) -> int:
        return int(math.ceil(math.log(_PAD_MAGNITUDE) / math.log(self.base)))

    def full_width_length(self) -> int:
        """Digits needed to hold any 128-bit value at this base."""
        return self.encode_length(16)

    def encode_length(self, num_bytes: int = 16) -> int:
        """Return the string length of a ``num_bytes`` payload at this base."""
        factor = math.log(256) / math.log(self.base)
        return int(math.ceil(factor * num_bytes))


DEFAULT = Alphabet(DEFAULT_ALPHABET)
