"""Arithmetic over the 80-bit randomness component.

Randomness is kept as two words: a high word holding 16 valid bits and a
64-bit low word. Every routine here is pure; overflow is reported to the
caller, which decides what to do with it (the monotonic generator clamps,
for example).
"""

from __future__ import annotations

from typing import NamedTuple, Protocol

from ulidkit.constants import (
    MAX_BATCH_SIZE,
    RANDOMNESS_BYTES,
    RANDOMNESS_HIGH_BITS,
    RANDOMNESS_HIGH_MASK,
    RANDOMNESS_MAX_VALUE,
    WORD_BITS,
    WORD_MASK,
)
from ulidkit.errors import BufferRangeError, InvalidArgumentError


class RandomSource(Protocol):
    """Anything that yields random words on demand.

    ``random.Random`` and ``random.SystemRandom`` both satisfy this.
    """

    def getrandbits(self, k: int, /) -> int: ...


class Randomness(NamedTuple):
    """An unsigned 80-bit quantity split into (high 16 bits, low 64 bits)."""

    high: int
    low: int

    @classmethod
    def from_int(cls, value: int) -> Randomness:
        if value < 0 or value > RANDOMNESS_MAX_VALUE:
            raise InvalidArgumentError(
                "randomness", value, f"must be within [0, {RANDOMNESS_MAX_VALUE}]"
            )
        return cls((value >> WORD_BITS) & RANDOMNESS_HIGH_MASK, value & WORD_MASK)

    @classmethod
    def from_bytes(cls, data: bytes) -> Randomness:
        """Read the first 10 bytes of ``data`` as a big-endian value."""
        if len(data) < RANDOMNESS_BYTES:
            raise BufferRangeError("data", 0, RANDOMNESS_BYTES, len(data))
        return cls.from_int(int.from_bytes(data[:RANDOMNESS_BYTES], "big"))

    def to_int(self) -> int:
        return ((self.high & RANDOMNESS_HIGH_MASK) << WORD_BITS) | (self.low & WORD_MASK)

    def to_bytes(self) -> bytes:
        return self.to_int().to_bytes(RANDOMNESS_BYTES, "big")

    @property
    def is_max(self) -> bool:
        return self.high == RANDOMNESS_HIGH_MASK and self.low == WORD_MASK


RANDOMNESS_MIN = Randomness(0, 0)
RANDOMNESS_MAX = Randomness(RANDOMNESS_HIGH_MASK, WORD_MASK)


def generate_randomness(source: RandomSource) -> Randomness:
    """Draw 80 random bits as two 64-bit draws, keeping the first draw's low 16 bits."""
    high = source.getrandbits(WORD_BITS) & RANDOMNESS_HIGH_MASK
    low = source.getrandbits(WORD_BITS) & WORD_MASK
    return Randomness(high, low)


def _carry(high: int, low: int) -> tuple[Randomness, bool]:
    high += low >> WORD_BITS
    overflow = (high >> RANDOMNESS_HIGH_BITS) != 0
    return Randomness(high & RANDOMNESS_HIGH_MASK, low & WORD_MASK), overflow


def increment_randomness(randomness: Randomness) -> tuple[Randomness, bool]:
    """Add one, carrying from the low word into the high word.

    Returns:
        ``(result, overflow)``; overflow is True only for 2**80 - 1, in which
        case the result wraps to zero.
    """
    return _carry(randomness.high & RANDOMNESS_HIGH_MASK, (randomness.low & WORD_MASK) + 1)


def add_randomness(randomness: Randomness, addend: int) -> tuple[Randomness, bool]:
    """Add an unsigned 32-bit addend, carrying across both words.

    On overflow the wrapped sum is returned together with the flag; clamping
    to the maximum is left to the caller.

    Raises:
        InvalidArgumentError: If addend is negative or does not fit 32 bits
    """
    if addend < 0 or addend > MAX_BATCH_SIZE:
        raise InvalidArgumentError("addend", addend, f"must be within [0, {MAX_BATCH_SIZE}]")
    return _carry(randomness.high & RANDOMNESS_HIGH_MASK, (randomness.low & WORD_MASK) + addend)


__all__ = [
    "RANDOMNESS_MAX",
    "RANDOMNESS_MIN",
    "RandomSource",
    "Randomness",
    "add_randomness",
    "generate_randomness",
    "increment_randomness",
]
