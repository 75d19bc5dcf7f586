"""Generator capability interface and injected sources.

Both generators expose the same four operations (best-effort or exact, with
or without an explicit starting timestamp) and take their clock and random
source as constructor arguments. Sources are owned by the caller; if a
generator is shared between threads, its sources must be safe to call
concurrently.
"""

from __future__ import annotations

import random
import threading
import time
from typing import Callable, Protocol, runtime_checkable

from ulidkit.config import GeneratorConfig
from ulidkit.constants import TIMESTAMP_MAX_VALUE, TIMESTAMP_MIN_VALUE
from ulidkit.errors import InvalidCountError, TimestampOutOfRangeError
from ulidkit.randomness import RandomSource
from ulidkit.ulid import Ulid

Clock = Callable[[], int]
"""Returns the current time in milliseconds since the Unix epoch."""


def system_clock() -> int:
    """Wall-clock milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def default_random_source() -> RandomSource:
    """OS-backed random source (``os.urandom`` under the hood)."""
    return random.SystemRandom()


@runtime_checkable
class UlidGenerator(Protocol):
    """What every ULID generator offers.

    ``generate`` may return fewer than ``count`` items; ``generate_exact``
    returns exactly ``count`` unless ``cancel`` is set while it waits.
    """

    def generate(self, count: int, timestamp: int | None = None) -> list[Ulid]: ...

    def generate_exact(
        self,
        count: int,
        timestamp: int | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Ulid]: ...


def validate_request(count: int, timestamp: int | None, config: GeneratorConfig) -> None:
    """Reject a bad count or explicit timestamp before any state is touched.

    Raises:
        InvalidCountError: If count is negative or above the configured batch cap
        TimestampOutOfRangeError: If timestamp is given and outside [0, 2**48 - 1]
    """
    if count < 0 or count > config.max_batch_size:
        raise InvalidCountError(count, config.max_batch_size)
    if timestamp is not None and not TIMESTAMP_MIN_VALUE <= timestamp <= TIMESTAMP_MAX_VALUE:
        raise TimestampOutOfRangeError(timestamp)
