"""The ULID value type.

A ULID is a 128-bit value: a 48-bit millisecond timestamp followed by 80
bits of randomness. It is held as two unsigned 64-bit words:

- most significant word: timestamp << 16 | high 16 bits of randomness
- least significant word: low 64 bits of randomness

Ordering compares the most significant word, then the least significant
one, which matches comparing (timestamp, randomness) and comparing the
16-byte big-endian form. The 26-character text form sorts the same way.

Example:
    >>> from ulidkit import Ulid
    >>> ulid = Ulid.from_words(1695025680000, 0xB4D9, 0xADA289269CF0BE33)
    >>> str(ulid)
    '01HAKQK7G0PKCTV8M94TEF1FHK'
    >>> Ulid.parse("01hakqk7g0pkctv8m94tef1fhk") == ulid
    True
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from ulidkit import codec
from ulidkit.constants import (
    BYTES,
    ENCODED_LENGTH,
    RANDOMNESS_BYTES,
    RANDOMNESS_HIGH_BITS,
    RANDOMNESS_HIGH_MASK,
    TIMESTAMP_BYTES,
    TIMESTAMP_ENCODED_LENGTH,
    TIMESTAMP_MAX_VALUE,
    TIMESTAMP_MIN_VALUE,
    TIMESTAMP_WORD_MASK,
    ULID_PATTERN,
    WORD_BITS,
    WORD_MASK,
)
from ulidkit.errors import (
    BufferRangeError,
    DatetimeOutOfRangeError,
    InvalidArgumentError,
    InvalidCharacterError,
    InvalidLengthError,
    TimestampOutOfRangeError,
)
from ulidkit.randomness import Randomness

_Buffer = bytes | bytearray | memoryview
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _check_timestamp(timestamp: int) -> int:
    if timestamp < TIMESTAMP_MIN_VALUE or timestamp > TIMESTAMP_MAX_VALUE:
        raise TimestampOutOfRangeError(timestamp)
    return timestamp


def _check_buffer(buffer: _Buffer, name: str, offset: int, required: int) -> None:
    if offset < 0 or len(buffer) < offset + required:
        raise BufferRangeError(name, offset, required, len(buffer))


class Ulid:
    """Immutable 128-bit ULID.

    Instances are hashable, picklable and totally ordered. Build them with
    the ``from_*`` constructors or :meth:`parse`; ``Ulid()`` is the minimum
    value.
    """

    __slots__ = ("_msb", "_lsb")

    MIN: Ulid
    MAX: Ulid

    def __init__(self, most_significant_bits: int = 0, least_significant_bits: int = 0) -> None:
        object.__setattr__(self, "_msb", most_significant_bits & WORD_MASK)
        object.__setattr__(self, "_lsb", least_significant_bits & WORD_MASK)

    # --- construction ---

    @classmethod
    def from_words(cls, timestamp: int, randomness_high: int, randomness_low: int) -> Ulid:
        """Build from a timestamp and randomness given as (high, low) words.

        Only the low 16 bits of ``randomness_high`` are kept.

        Raises:
            TimestampOutOfRangeError: If timestamp is outside [0, 2**48 - 1]
        """
        _check_timestamp(timestamp)
        return cls(
            (timestamp << RANDOMNESS_HIGH_BITS) | (randomness_high & RANDOMNESS_HIGH_MASK),
            randomness_low,
        )

    @classmethod
    def from_randomness(cls, timestamp: int, randomness: Randomness) -> Ulid:
        return cls.from_words(timestamp, randomness.high, randomness.low)

    @classmethod
    def from_timestamp_and_bytes(cls, timestamp: int, randomness: _Buffer, offset: int = 0) -> Ulid:
        """Build from a timestamp and 10 randomness bytes read at ``offset``.

        Raises:
            TimestampOutOfRangeError: If timestamp is outside [0, 2**48 - 1]
            BufferRangeError: If offset is negative or fewer than 10 bytes follow it
        """
        _check_timestamp(timestamp)
        _check_buffer(randomness, "randomness", offset, RANDOMNESS_BYTES)
        value = int.from_bytes(bytes(randomness[offset : offset + RANDOMNESS_BYTES]), "big")
        return cls((timestamp << RANDOMNESS_HIGH_BITS) | (value >> WORD_BITS), value)

    @classmethod
    def from_bytes(cls, data: _Buffer, offset: int = 0) -> Ulid:
        """Build from the 16-byte big-endian form read at ``offset``.

        Raises:
            BufferRangeError: If offset is negative or the 6 timestamp bytes or
                the 10 randomness bytes after them are missing
        """
        _check_buffer(data, "bytes", offset, TIMESTAMP_BYTES)
        _check_buffer(data, "bytes", offset + TIMESTAMP_BYTES, RANDOMNESS_BYTES)
        raw = bytes(data[offset : offset + BYTES])
        return cls(int.from_bytes(raw[:8], "big"), int.from_bytes(raw[8:], "big"))

    @classmethod
    def from_int(cls, value: int) -> Ulid:
        """Build from a 128-bit unsigned integer."""
        if value < 0 or value >> (2 * WORD_BITS):
            raise InvalidArgumentError("value", value, "must fit in 128 unsigned bits")
        return cls(value >> WORD_BITS, value)

    @classmethod
    def parse(cls, text: str) -> Ulid:
        """Parse the 26-character text form (case-insensitive).

        Raises:
            InvalidLengthError: If text is not exactly 26 characters
            InvalidCharacterError: If text holds a character outside the alphabet
            TimestampOutOfRangeError: If the first 10 symbols exceed 48 bits
        """
        if len(text) != ENCODED_LENGTH:
            raise InvalidLengthError(len(text), ENCODED_LENGTH)

        timestamp = codec.decode_int(text[:TIMESTAMP_ENCODED_LENGTH])
        try:
            randomness = codec.decode_bytes(text[TIMESTAMP_ENCODED_LENGTH:])
        except InvalidCharacterError as e:
            raise InvalidCharacterError(e.character, e.position + TIMESTAMP_ENCODED_LENGTH) from None
        return cls.from_timestamp_and_bytes(timestamp, randomness)

    # --- accessors ---

    @property
    def most_significant_bits(self) -> int:
        return self._msb

    @property
    def least_significant_bits(self) -> int:
        return self._lsb

    @property
    def timestamp(self) -> int:
        """Milliseconds since the Unix epoch."""
        return (self._msb & TIMESTAMP_WORD_MASK) >> RANDOMNESS_HIGH_BITS

    @property
    def datetime(self) -> datetime:
        """The timestamp as a timezone-aware UTC datetime.

        Raises:
            DatetimeOutOfRangeError: If the timestamp is past 9999-12-31T23:59:59.999Z
        """
        try:
            return _EPOCH + timedelta(milliseconds=self.timestamp)
        except OverflowError:
            raise DatetimeOutOfRangeError(self.timestamp) from None

    @property
    def randomness(self) -> int:
        return ((self._msb & RANDOMNESS_HIGH_MASK) << WORD_BITS) | self._lsb

    @property
    def randomness_words(self) -> Randomness:
        return Randomness(self._msb & RANDOMNESS_HIGH_MASK, self._lsb)

    @property
    def randomness_bytes(self) -> bytes:
        return self.randomness.to_bytes(RANDOMNESS_BYTES, "big")

    # --- conversions ---

    def to_bytes(
        self, buffer: bytearray | memoryview | None = None, offset: int = 0
    ) -> bytes | bytearray | memoryview:
        """Return the 16-byte big-endian form, or write it into ``buffer``.

        Args:
            buffer: Optional writable destination
            offset: Where to start writing in ``buffer``

        Returns:
            New ``bytes`` when no buffer is given, otherwise ``buffer`` itself

        Raises:
            BufferRangeError: If offset is negative or buffer is too small
        """
        raw = bytes(self)
        if buffer is None:
            return raw
        _check_buffer(buffer, "buffer", offset, BYTES)
        buffer[offset : offset + BYTES] = raw
        return buffer

    def __bytes__(self) -> bytes:
        return self._msb.to_bytes(8, "big") + self._lsb.to_bytes(8, "big")

    def __int__(self) -> int:
        return (self._msb << WORD_BITS) | self._lsb

    def __str__(self) -> str:
        return codec.encode_int(self.timestamp, TIMESTAMP_ENCODED_LENGTH) + codec.encode(
            self.randomness_bytes
        )

    def __repr__(self) -> str:
        return f"Ulid('{self}')"

    # --- identity and order ---

    def _key(self) -> tuple[int, int]:
        return (self._msb, self._lsb)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ulid):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ulid):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Ulid):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Ulid):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Ulid):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Ulid is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Ulid is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (Ulid, (self._msb, self._lsb))

    # --- pydantic integration ---

    @classmethod
    def _validate(cls, value: Any) -> Ulid:
        if isinstance(value, Ulid):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            if len(value) != BYTES:
                raise ValueError(f"ULID bytes must be exactly {BYTES} long, got {len(value)}")
            return cls.from_bytes(value)
        raise ValueError(f"Cannot build a Ulid from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "minLength": ENCODED_LENGTH,
            "maxLength": ENCODED_LENGTH,
            "pattern": ULID_PATTERN,
            "description": "ULID (Crockford Base32, 26 characters)",
        }


Ulid.MIN = Ulid(0, 0)
Ulid.MAX = Ulid(WORD_MASK, WORD_MASK)
