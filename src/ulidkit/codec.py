"""Crockford Base32 codec.

Packs 5-bit symbols across byte boundaries following the 8-symbol / 5-byte
cycle (40 bits per quintet). The alphabet drops I, L, O and U to avoid
ambiguous glyphs; decoding is case-insensitive and rejects anything outside
the alphabet instead of guessing.

The codec holds no mutable state and is safe to call from any number of
threads.

Example:
    >>> from ulidkit.codec import decode_bytes, decode_int, encode, encode_int
    >>> encode(b"Foobar")
    '8SQPYRK1E8'
    >>> decode_bytes("8sqpyrk1e8")
    b'Foobar'
    >>> encode_int(1695565046968, 10)
    '01HB3RTS5R'
    >>> decode_int("01HB3RTS5R")
    1695565046968
"""

from __future__ import annotations

from ulidkit.constants import CROCKFORD_ALPHABET, ENCODED_INT_MAX_LENGTH, WORD_MASK
from ulidkit.errors import EncodedIntegerTooLongError, InvalidArgumentError, InvalidCharacterError

SYMBOL_BITS = 5
SYMBOL_MASK = 0x1F
QUINTET_BYTES = 5
QUINTET_SYMBOLS = 8

# Symbol index for every accepted character, both cases.
_DECODE_MAP: dict[str, int] = {
    **{ch: i for i, ch in enumerate(CROCKFORD_ALPHABET)},
    **{ch.lower(): i for i, ch in enumerate(CROCKFORD_ALPHABET) if ch.isalpha()},
}

# Bit layout of one quintet:
#   aaaaabbb | bbcccccd | ddddeeee | efffffgg | ggghhhhh
#
# Encode table, indexed by symbol position modulo 8:
#   (byte offset, mask, left shift, right shift, next-byte mask, next-byte right shift)
_ENCODE_TABLE: tuple[tuple[int, int, int, int, int, int], ...] = (
    (0, 0xF8, 0, 3, 0x00, 0),
    (0, 0x07, 2, 0, 0xC0, 6),
    (1, 0x3E, 0, 1, 0x00, 0),
    (1, 0x01, 4, 0, 0xF0, 4),
    (2, 0x0F, 1, 0, 0x80, 7),
    (3, 0x7C, 0, 2, 0x00, 0),
    (3, 0x03, 3, 0, 0xE0, 5),
    (4, 0x1F, 0, 0, 0x00, 0),
)

# Decode table, indexed by symbol position modulo 8:
#   (byte offset, symbol mask, left shift, right shift, spill mask, spill left shift)
_DECODE_TABLE: tuple[tuple[int, int, int, int, int, int], ...] = (
    (0, 0x1F, 3, 0, 0x00, 0),
    (0, 0x1C, 0, 2, 0x03, 6),
    (1, 0x1F, 1, 0, 0x00, 0),
    (1, 0x10, 0, 4, 0x0F, 4),
    (2, 0x1E, 0, 1, 0x01, 7),
    (3, 0x1F, 2, 0, 0x00, 0),
    (3, 0x18, 0, 3, 0x07, 5),
    (4, 0x1F, 0, 0, 0x00, 0),
)

# Extra output bytes for a trailing partial quintet, keyed by leftover symbols.
_DECODED_BYTES_FOR_REMAINDER = (0, 0, 1, 1, 2, 3, 3, 4)


def encoded_length(byte_count: int) -> int:
    """Number of symbols ``encode`` produces for ``byte_count`` bytes."""
    return (byte_count * 8 + SYMBOL_BITS - 1) // SYMBOL_BITS


def decoded_length(symbol_count: int) -> int:
    """Number of bytes ``decode_bytes`` produces for ``symbol_count`` symbols."""
    quintets, remainder = divmod(symbol_count, QUINTET_SYMBOLS)
    return quintets * QUINTET_BYTES + _DECODED_BYTES_FOR_REMAINDER[remainder]


def _symbol_index(text: str, position: int) -> int:
    ch = text[position]
    index = _DECODE_MAP.get(ch)
    if index is None:
        raise InvalidCharacterError(ch, position)
    return index


def encode(data: bytes | bytearray | memoryview) -> str:
    """Encode a byte buffer as Crockford Base32.

    A trailing partial quintet is emitted from whatever bits remain,
    zero-padded on the low end.

    Args:
        data: Bytes to encode (any length, including empty)

    Returns:
        Uppercase text of ``ceil(8 * len(data) / 5)`` symbols
    """
    buf = bytes(data)
    length = len(buf)
    chars: list[str] = []

    for i in range(encoded_length(length)):
        quintet, seq = divmod(i, QUINTET_SYMBOLS)
        offset, mask, lshift, rshift, next_mask, next_rshift = _ENCODE_TABLE[seq]
        src = quintet * QUINTET_BYTES + offset

        index = ((buf[src] & mask) << lshift) >> rshift
        if next_mask and src + 1 < length:
            index |= (buf[src + 1] & next_mask) >> next_rshift

        chars.append(CROCKFORD_ALPHABET[index])

    return "".join(chars)


def encode_int(value: int, width: int) -> str:
    """Encode an unsigned 64-bit integer as exactly ``width`` symbols.

    The value is taken modulo 2**64. Symbols are produced from the low
    5 bits upwards, so a value needing fewer than ``width`` symbols is
    left-padded with ``0`` and higher bits beyond ``width`` symbols are
    dropped.

    Args:
        value: Integer to encode
        width: Number of symbols to emit, within [0, 13]

    Raises:
        InvalidArgumentError: If width is outside [0, 13]
    """
    if width < 0 or width > ENCODED_INT_MAX_LENGTH:
        raise InvalidArgumentError(
            "width", width, f"must be within [0, {ENCODED_INT_MAX_LENGTH}]"
        )

    current = value & WORD_MASK
    chars = ["0"] * width
    for pos in range(width - 1, -1, -1):
        chars[pos] = CROCKFORD_ALPHABET[current & SYMBOL_MASK]
        current >>= SYMBOL_BITS

    return "".join(chars)


def decode_bytes(text: str) -> bytes:
    """Decode Crockford Base32 text into bytes.

    Every character is validated, including those whose bits fall past the
    last whole output byte.

    Raises:
        InvalidCharacterError: On the first character outside the alphabet
    """
    indices = [_symbol_index(text, pos) for pos in range(len(text))]
    out_length = decoded_length(len(indices))
    out = bytearray(out_length)

    for i, index in enumerate(indices):
        quintet, seq = divmod(i, QUINTET_SYMBOLS)
        offset, mask, lshift, rshift, spill_mask, spill_lshift = _DECODE_TABLE[seq]
        dest = quintet * QUINTET_BYTES + offset
        if dest >= out_length:
            break

        out[dest] |= ((index & mask) << lshift) >> rshift
        if spill_mask and dest + 1 < out_length:
            out[dest + 1] |= (index & spill_mask) << spill_lshift

    return bytes(out)


def decode_int(text: str) -> int:
    """Decode up to 13 symbols into an unsigned 64-bit integer.

    The accumulator is 64 bits wide: a 13-symbol value above 2**64 - 1
    wraps.

    Raises:
        EncodedIntegerTooLongError: If text is longer than 13 symbols
        InvalidCharacterError: On the first character outside the alphabet
    """
    if len(text) > ENCODED_INT_MAX_LENGTH:
        raise EncodedIntegerTooLongError(len(text), ENCODED_INT_MAX_LENGTH)

    value = 0
    for pos in range(len(text)):
        value = ((value << SYMBOL_BITS) + _symbol_index(text, pos)) & WORD_MASK

    return value


__all__ = [
    "decode_bytes",
    "decode_int",
    "decoded_length",
    "encode",
    "encode_int",
    "encoded_length",
]
