from __future__ import annotations

from .alphabet import DEFAULT, Alphabet
from .codec import CompactUUID
from .uuid5 import format_uuid, parse_uuid

ID_BYTES = 16
ID_LENGTH = DEFAULT.encode_length(ID_BYTES)

_default = CompactUUID()


def uuid4_compact() -> str:
    return _default.random(ID_LENGTH)


def uuid5_compact(name: str) -> str:
    return _default.uuid(name=name, pad_length=ID_LENGTH)


def uuid_text_to_compact(value: str) -> str:
    return _default.encode(parse_uuid(value), ID_LENGTH)


def compact_to_uuid_text(value: str) -> str:
    return format_uuid(_default.decode_bytes(value))


def is_compact(value: str, alphabet: Alphabet | str | None = None) -> bool:
    alpha = DEFAULT if alphabet is None else Alphabet.build(alphabet)
    if not isinstance(value, str) or len(value) != alpha.encode_length(ID_BYTES):
        return False
    return all(ch in alpha for ch in value)
