"""RFC 4122 name-based (version 5) identifiers and canonical UUID text."""

from __future__ import annotations

import hashlib
import uuid
from enum import Enum

from .limbs import VALUE_BYTES, require_value

_URL_PREFIXES = ("http://", "https://")


class Namespace(Enum):
    DNS = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")
    URL = uuid.UUID("6ba7b811-9dad-11d1-80b4-00c04fd430c8")
    OID = uuid.UUID("6ba7b812-9dad-11d1-80b4-00c04fd430c8")
    X500 = uuid.UUID("6ba7b814-9dad-11d1-80b4-00c04fd430c8")

    @property
    def bytes(self) -> bytes:
        return self.value.bytes


def namespace_for_name(name: str) -> Namespace:
    return Namespace.URL if name.startswith(_URL_PREFIXES) else Namespace.DNS


def name_based_id(namespace: Namespace | bytes, name: str) -> bytes:
    ns_bytes = namespace.bytes if isinstance(namespace, Namespace) else require_value(namespace)
    digest = hashlib.sha1(ns_bytes + name.encode("utf-8")).digest()
    raw = bytearray(digest[:VALUE_BYTES])
    # version 5
    raw[6] = (raw[6] & 0x0F) | 0x50
    # RFC 4122 variant: leftmost bits 10xxxxxx
    raw[8] = (raw[8] & 0x3F) | 0x80
    return bytes(raw)


def format_uuid(value: bytes) -> str:
    return str(uuid.UUID(bytes=require_value(value)))


def parse_uuid(text: str) -> bytes:
    return uuid.UUID(str(text).strip()).bytes
