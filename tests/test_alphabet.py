from __future__ import annotations

import pytest

from compact_uuid.alphabet import DEFAULT, DEFAULT_ALPHABET, Alphabet
from compact_uuid.errors import InvalidAlphabet


def test_build_dedupes_and_sorts_by_code_point():
    assert Alphabet.build("cbaabc").symbols == "abc"
    assert Alphabet.build(["z", "A", "0", "A"]).symbols == "0Az"


def test_same_symbol_set_builds_identical_alphabets():
    assert Alphabet.build("xyz") == Alphabet.build("zyxxy")


def test_default_alphabet_is_canonical():
    assert DEFAULT.base == 57
    assert Alphabet.build(DEFAULT_ALPHABET) == DEFAULT
    assert DEFAULT.zero_digit == "2"
    for ambiguous in "01IOl":
        assert ambiguous not in DEFAULT


def test_two_symbols_is_a_valid_alphabet():
    alpha = Alphabet.build("10")
    assert alpha.symbols == "01"
    assert alpha.base == 2


@pytest.mark.parametrize("symbols", ["", "a", "aaaa"])
def test_fewer_than_two_symbols_rejected(symbols):
    with pytest.raises(InvalidAlphabet):
        Alphabet.build(symbols)


def test_multi_character_symbols_rejected():
    with pytest.raises(InvalidAlphabet):
        Alphabet.build(["ab", "c"])


def test_direct_construction_requires_canonical_symbols():
    with pytest.raises(InvalidAlphabet):
        Alphabet("ba")
    with pytest.raises(InvalidAlphabet):
        Alphabet("aab")


def test_invalid_alphabet_is_value_error():
    assert issubclass(InvalidAlphabet, ValueError)


def test_index_lookup():
    assert DEFAULT.index_of("2") == 0
    assert DEFAULT.index_of("z") == 56
    assert DEFAULT.index_of("l") is None
    assert DEFAULT.symbol(1) == "3"


def test_default_pad_length_is_bounded_by_64_bits():
    assert DEFAULT.default_pad_length() == 11
    assert Alphabet.build("0123456789").default_pad_length() == 20


def test_encode_length():
    assert DEFAULT.encode_length() == 22
    assert DEFAULT.encode_length(16) == 22
    assert DEFAULT.full_width_length() == 22
    assert Alphabet.build("0123456789").encode_length(1) == 3
