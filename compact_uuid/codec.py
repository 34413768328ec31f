from __future__ import annotations

import uuid
from typing import Callable

from .alphabet import DEFAULT, Alphabet
from .decoder import decode_text
from .encoder import encode_value
from .limbs import require_value
from .uuid5 import name_based_id, namespace_for_name


def _uuid4_bytes() -> bytes:
    return uuid.uuid4().bytes


class CompactUUID:
    """Alphabet-bound encoder/decoder.

    Instances are immutable; ``with_alphabet`` returns a new one, so a shared
    instance can serve concurrent encode/decode calls.
    """

    def __init__(
        self,
        alphabet: Alphabet | str | None = None,
        *,
        strict: bool = False,
        random_source: Callable[[], bytes] | None = None,
    ) -> None:
        self._alphabet = DEFAULT if alphabet is None else Alphabet.build(alphabet)
        self._strict = strict
        self._random_source = random_source or _uuid4_bytes

    def __repr__(self) -> str:
        return f"CompactUUID(alphabet={self._alphabet.symbols!r}, strict={self._strict})"

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def pad_length(self) -> int:
        return self._alphabet.default_pad_length()

    def with_alphabet(self, symbols: Alphabet | str) -> CompactUUID:
        return CompactUUID(symbols, strict=self._strict, random_source=self._random_source)

    def encode(self, value: bytes | uuid.UUID, pad_length: int | None = None) -> str:
        raw = value.bytes if isinstance(value, uuid.UUID) else value
        return encode_value(raw, self._alphabet, pad_length)

    def decode_bytes(self, text: str) -> bytes:
        return decode_text(text, self._alphabet, strict=self._strict)

    def decode(self, text: str) -> uuid.UUID:
        return uuid.UUID(bytes=self.decode_bytes(text))

    def random_value(self) -> bytes:
        return require_value(self._random_source())

    def uuid(self, name: str | None = None, pad_length: int | None = None) -> str:
        """Encode a name-based id for ``name``, or a random one when no name is given."""
        if name is None:
            raw = self.random_value()
        else:
            raw = name_based_id(namespace_for_name(name), name)
        return self.encode(raw, pad_length)

    def random(self, length: int | None = None) -> str:
        return self.uuid(pad_length=length)

    def encode_length(self, num_bytes: int = 16) -> int:
        return self._alphabet.encode_length(num_bytes)
