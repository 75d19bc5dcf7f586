"""ulidkit error taxonomy.

This module defines the error hierarchy for ulidkit, providing structured
errors with specific error codes and context information.

Validation and codec errors also derive from ValueError, so callers that
only care about "bad input" can catch that.
"""
from __future__ import annotations

from typing import Any

from ulidkit.constants import TIMESTAMP_MAX_VALUE, TIMESTAMP_MIN_VALUE


class UlidError(Exception):
    """Base exception for all ulidkit errors.

    Attributes:
        code: Error code following the ulid:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UlidValidationError(UlidError, ValueError):
    """Raised when a caller-supplied argument is rejected at the call boundary."""


class InvalidCountError(UlidValidationError):
    """Raised when a requested count is negative or above the batch cap.

    Attributes:
        count: The rejected count
        max_count: The largest count accepted
    """

    def __init__(self, count: int, max_count: int, details: dict[str, Any] | None = None) -> None:
        if count < 0:
            message = f"'count' cannot be negative: {count}"
        else:
            message = f"'count' cannot exceed {max_count}: {count}"
        super().__init__(
            code="ulid:validation/invalid_count",
            message=message,
            details={"count": count, "max_count": max_count, **(details or {})},
        )
        self.count = count
        self.max_count = max_count


class TimestampOutOfRangeError(UlidValidationError):
    """Raised when a timestamp falls outside the 48-bit millisecond range.

    Attributes:
        timestamp: The rejected timestamp
    """

    def __init__(self, timestamp: int, details: dict[str, Any] | None = None) -> None:
        message = (
            f"'timestamp' must be within [{TIMESTAMP_MIN_VALUE}, {TIMESTAMP_MAX_VALUE}]: "
            f"{timestamp}"
        )
        super().__init__(
            code="ulid:validation/timestamp_out_of_range",
            message=message,
            details={"timestamp": timestamp, **(details or {})},
        )
        self.timestamp = timestamp


class BufferRangeError(UlidValidationError):
    """Raised when an offset is negative or a buffer is too short for it.

    Attributes:
        name: Name of the offending buffer parameter
        offset: Requested offset
        required: Number of bytes needed from the offset
        available: Length of the supplied buffer
    """

    def __init__(
        self,
        name: str,
        offset: int,
        required: int,
        available: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        if offset < 0:
            message = f"'{name}' offset cannot be negative: {offset}"
        else:
            message = (
                f"'{name}' does not have enough bytes: need {required} at offset {offset}, "
                f"have {available}"
            )
        super().__init__(
            code="ulid:validation/buffer_range",
            message=message,
            details={
                "name": name,
                "offset": offset,
                "required": required,
                "available": available,
                **(details or {}),
            },
        )
        self.name = name
        self.offset = offset
        self.required = required
        self.available = available


class InvalidLengthError(UlidValidationError):
    """Raised when ULID text does not have the canonical length."""

    def __init__(self, length: int, expected: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="ulid:validation/invalid_length",
            message=f"ULID text must be {expected} characters long, got {length}",
            details={"length": length, "expected": expected, **(details or {})},
        )
        self.length = length
        self.expected = expected


class InvalidArgumentError(UlidValidationError):
    """Raised for any other out-of-range argument (encode width, addend, intervals)."""

    def __init__(self, name: str, value: Any, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="ulid:validation/invalid_argument",
            message=f"Invalid '{name}': {reason}",
            details={"name": name, "value": value, **(details or {})},
        )
        self.name = name
        self.value = value


class DatetimeOutOfRangeError(UlidError, ValueError):
    """Raised when a valid timestamp lies past the last year `datetime` can hold.

    Timestamps above 253402300799999 (9999-12-31T23:59:59.999Z) are valid
    ULID timestamps but have no `datetime` form.

    Attributes:
        timestamp: The timestamp that could not be converted
    """

    def __init__(self, timestamp: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="ulid:conversion/datetime_out_of_range",
            message=f"timestamp {timestamp} is past the largest datetime (year 9999)",
            details={"timestamp": timestamp, **(details or {})},
        )
        self.timestamp = timestamp


class CodecError(UlidError, ValueError):
    """Base class for Crockford Base32 decoding failures."""


class InvalidCharacterError(CodecError):
    """Raised when text contains a symbol outside the Crockford alphabet.

    Attributes:
        character: The offending character
        position: Zero-based index of the character in the input
    """

    def __init__(self, character: str, position: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="ulid:codec/invalid_character",
            message=f"'{character}' at position {position} is not a valid character",
            details={"character": character, "position": position, **(details or {})},
        )
        self.character = character
        self.position = position


class EncodedIntegerTooLongError(CodecError):
    """Raised when integer text has more symbols than a 64-bit value can use."""

    def __init__(self, length: int, max_length: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="ulid:codec/integer_too_long",
            message=f"Encoded integer is too long: {length} > {max_length} characters",
            details={"length": length, "max_length": max_length, **(details or {})},
        )
        self.length = length
        self.max_length = max_length
