"""Tests for the Crockford Base32 codec."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ulidkit.codec import (
    decode_bytes,
    decode_int,
    decoded_length,
    encode,
    encode_int,
    encoded_length,
)
from ulidkit.constants import CROCKFORD_ALPHABET, WORD_MASK
from ulidkit.errors import EncodedIntegerTooLongError, InvalidArgumentError, InvalidCharacterError


class TestAlphabet:
    """Tests for the symbol alphabet."""

    def test_alphabet_has_32_symbols(self) -> None:
        assert len(CROCKFORD_ALPHABET) == 32
        assert len(set(CROCKFORD_ALPHABET)) == 32

    def test_alphabet_excludes_ambiguous_letters(self) -> None:
        for letter in "ILOU":
            assert letter not in CROCKFORD_ALPHABET

    def test_alphabet_is_sorted(self) -> None:
        """Symbol order must match byte order so text sorts like binary."""
        assert list(CROCKFORD_ALPHABET) == sorted(CROCKFORD_ALPHABET)


class TestEncodeBytes:
    """Tests for encode()."""

    def test_known_vector(self) -> None:
        assert encode(b"Foobar") == "8SQPYRK1E8"

    def test_empty(self) -> None:
        assert encode(b"") == ""

    def test_single_byte_partial_group(self) -> None:
        """Trailing bits are zero-padded on the low end."""
        assert encode(b"\x00") == "00"
        assert encode(b"\xff") == "ZW"

    def test_full_quintet(self) -> None:
        assert encode(b"\x00\x00\x00\x00\x01") == "00000001"
        assert encode(b"\xff" * 5) == "Z" * 8

    def test_accepts_bytearray_and_memoryview(self) -> None:
        assert encode(bytearray(b"Foobar")) == "8SQPYRK1E8"
        assert encode(memoryview(b"Foobar")) == "8SQPYRK1E8"

    @pytest.mark.parametrize("length", range(0, 17))
    def test_encoded_length(self, length: int) -> None:
        assert len(encode(bytes(length))) == encoded_length(length) == math.ceil(8 * length / 5)


class TestEncodeInt:
    """Tests for encode_int()."""

    def test_known_vector(self) -> None:
        assert encode_int(1695565046968, 10) == "01HB3RTS5R"

    def test_left_pads_with_zero(self) -> None:
        assert encode_int(1, 5) == "00001"
        assert encode_int(0, 3) == "000"

    def test_zero_width(self) -> None:
        assert encode_int(12345, 0) == ""

    def test_drops_bits_beyond_width(self) -> None:
        assert encode_int(32, 1) == "0"
        assert encode_int(32, 2) == "10"

    def test_max_word(self) -> None:
        assert encode_int(WORD_MASK, 13) == "F" + "Z" * 12

    def test_value_taken_as_unsigned_64_bits(self) -> None:
        assert encode_int(-1, 13) == encode_int(WORD_MASK, 13)

    @pytest.mark.parametrize("width", [-1, 14, 26])
    def test_rejects_width_out_of_range(self, width: int) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            encode_int(1, width)

        assert exc_info.value.name == "width"


class TestDecodeBytes:
    """Tests for decode_bytes()."""

    def test_known_vector(self) -> None:
        assert decode_bytes("8SQPYRK1E8") == b"Foobar"

    def test_case_insensitive(self) -> None:
        assert decode_bytes("8sqpyrk1e8") == b"Foobar"
        assert decode_bytes("8SqPyRk1E8") == b"Foobar"

    def test_empty(self) -> None:
        assert decode_bytes("") == b""

    def test_partial_group(self) -> None:
        assert decode_bytes("ZW") == b"\xff"

    @pytest.mark.parametrize(
        ("symbols", "expected"),
        [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 3), (6, 3), (7, 4), (8, 5), (16, 10)],
    )
    def test_decoded_length(self, symbols: int, expected: int) -> None:
        assert decoded_length(symbols) == expected
        assert len(decode_bytes("0" * symbols)) == expected

    @pytest.mark.parametrize("letter", ["I", "L", "O", "U", "i", "l", "o", "u"])
    def test_rejects_ambiguous_letters(self, letter: str) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode_bytes("8SQPYRK1E" + letter)

        assert exc_info.value.character == letter
        assert exc_info.value.position == 9

    @pytest.mark.parametrize("character", ["{", "}", "-", " ", "*", "é"])
    def test_rejects_characters_outside_alphabet(self, character: str) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode_bytes(character + "0000000")

        assert exc_info.value.position == 0

    def test_rejects_invalid_trailing_character(self) -> None:
        """Characters whose bits fall past the last byte are still validated."""
        with pytest.raises(InvalidCharacterError):
            decode_bytes("00U")


class TestDecodeInt:
    """Tests for decode_int()."""

    def test_known_vector(self) -> None:
        assert decode_int("01HB3RTS5R") == 1695565046968

    def test_case_insensitive(self) -> None:
        assert decode_int("01hb3rts5r") == 1695565046968

    def test_empty_is_zero(self) -> None:
        assert decode_int("") == 0

    def test_max_word(self) -> None:
        assert decode_int("F" + "Z" * 12) == WORD_MASK

    def test_wraps_at_64_bits(self) -> None:
        assert decode_int("Z" * 13) == WORD_MASK
        assert decode_int("G" + "0" * 12) == 0

    def test_rejects_more_than_13_symbols(self) -> None:
        with pytest.raises(EncodedIntegerTooLongError) as exc_info:
            decode_int("0" * 14)

        assert exc_info.value.length == 14
        assert exc_info.value.max_length == 13

    def test_rejects_invalid_character(self) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode_int("01HB3RTS5O")

        assert exc_info.value.character == "O"
        assert exc_info.value.position == 9


class TestCodecProperties:
    """Property-based tests for the codec."""

    @given(st.binary(max_size=64))
    def test_bytes_round_trip(self, data: bytes) -> None:
        text = encode(data)

        assert decode_bytes(text) == data
        assert len(text) == math.ceil(8 * len(data) / 5)

    @given(st.binary(max_size=64))
    def test_lowercase_decodes_identically(self, data: bytes) -> None:
        assert decode_bytes(encode(data).lower()) == data

    @given(st.integers(min_value=0, max_value=WORD_MASK))
    def test_int_round_trip(self, value: int) -> None:
        assert decode_int(encode_int(value, 13)) == value

    @given(st.binary(min_size=1, max_size=16), st.binary(min_size=1, max_size=16))
    def test_encoding_preserves_order_for_equal_lengths(self, a: bytes, b: bytes) -> None:
        size = min(len(a), len(b))
        a, b = a[:size], b[:size]

        assert (a < b) == (encode(a) < encode(b))
