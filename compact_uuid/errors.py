from __future__ import annotations


class CompactUUIDError(ValueError):
    """Base class for encoding, decoding and alphabet errors."""


class InvalidAlphabet(CompactUUIDError):
    """Raised when an alphabet has fewer than 2 distinct single-character symbols."""


class InvalidValue(CompactUUIDError):
    """Raised when a 128-bit value or a limb operand is out of shape."""


class InvalidCharacter(CompactUUIDError):
    """Raised by strict decoding when a character is not in the alphabet."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(f"character {character!r} at position {position} is not in the alphabet")
