"""ULID generators.

- MonotonicUlidGenerator: strictly increasing output per instance, thread-safe.
- SimpleUlidGenerator: independent random draws, no ordering within a millisecond.

Both satisfy the UlidGenerator protocol.
"""

from ulidkit.generators.base import (
    Clock,
    UlidGenerator,
    default_random_source,
    system_clock,
)
from ulidkit.generators.monotonic import IssuedState, MonotonicUlidGenerator
from ulidkit.generators.simple import SimpleUlidGenerator

__all__ = [
    "Clock",
    "IssuedState",
    "MonotonicUlidGenerator",
    "SimpleUlidGenerator",
    "UlidGenerator",
    "default_random_source",
    "system_clock",
]
