"""Constants for ulidkit.

This module defines the bit layout, encoded lengths and generation limits
shared across the codebase.
"""

# Timestamp component
TIMESTAMP_BITS = 48
TIMESTAMP_MIN_VALUE = 0
TIMESTAMP_MAX_VALUE = (1 << TIMESTAMP_BITS) - 1
"""Largest millisecond timestamp a ULID can carry (year 10889)."""

# Randomness component
RANDOMNESS_BITS = 80
RANDOMNESS_HIGH_BITS = 16
RANDOMNESS_HIGH_MASK = (1 << RANDOMNESS_HIGH_BITS) - 1
RANDOMNESS_MAX_VALUE = (1 << RANDOMNESS_BITS) - 1

# 64-bit word handling
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
TIMESTAMP_WORD_MASK = WORD_MASK ^ RANDOMNESS_HIGH_MASK

# Binary form
BYTES = 16
TIMESTAMP_BYTES = 6
RANDOMNESS_BYTES = 10

# Text form
TIMESTAMP_ENCODED_LENGTH = 10
RANDOMNESS_ENCODED_LENGTH = 16
ENCODED_LENGTH = TIMESTAMP_ENCODED_LENGTH + RANDOMNESS_ENCODED_LENGTH
ENCODED_INT_MAX_LENGTH = 13
"""Most symbols an integer encode/decode may use (13 * 5 = 65 bits >= 64)."""

CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_PATTERN = r"^[0-7][0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{25}$"

# Generation limits
MAX_BATCH_SIZE = (1 << 32) - 1
"""Largest count a single generate call accepts; the addend of one reservation fits 32 bits."""

DEFAULT_WAIT_INTERVAL_SECONDS = 0.001
"""Sleep between clock samples while waiting for the next millisecond."""
