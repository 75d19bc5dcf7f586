"""ulidkit: Universally Unique Lexicographically Sortable Identifiers.

A ULID is a 128-bit identifier made of a 48-bit millisecond timestamp and
80 bits of randomness, written as 26 Crockford Base32 characters that sort
the same way as the binary value.

Example:
    >>> from ulidkit import MonotonicUlidGenerator, Ulid
    >>> generator = MonotonicUlidGenerator()
    >>> ulids = generator.generate(3)
    >>> ulids == sorted(ulids)
    True
    >>> Ulid.parse(str(ulids[0])) == ulids[0]
    True
"""

__version__ = "1.0.0"

from ulidkit.config import GeneratorConfig
from ulidkit.errors import (
    BufferRangeError,
    CodecError,
    DatetimeOutOfRangeError,
    EncodedIntegerTooLongError,
    InvalidArgumentError,
    InvalidCharacterError,
    InvalidCountError,
    InvalidLengthError,
    TimestampOutOfRangeError,
    UlidError,
    UlidValidationError,
)
from ulidkit.generators import (
    IssuedState,
    MonotonicUlidGenerator,
    SimpleUlidGenerator,
    UlidGenerator,
)
from ulidkit.randomness import Randomness
from ulidkit.ulid import Ulid

__all__ = [
    "__version__",
    "BufferRangeError",
    "CodecError",
    "DatetimeOutOfRangeError",
    "EncodedIntegerTooLongError",
    "GeneratorConfig",
    "InvalidArgumentError",
    "InvalidCharacterError",
    "InvalidCountError",
    "InvalidLengthError",
    "IssuedState",
    "MonotonicUlidGenerator",
    "Randomness",
    "SimpleUlidGenerator",
    "TimestampOutOfRangeError",
    "Ulid",
    "UlidError",
    "UlidGenerator",
    "UlidValidationError",
]
