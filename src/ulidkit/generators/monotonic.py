"""Monotonic ULID generation.

Every identifier handed out by one generator instance compares greater than
every identifier it handed out before, across threads. The generator keeps
the last issued (timestamp, randomness) pair behind a single lock and, per
round, reserves a contiguous block of randomness values under that lock:

1. ``now`` is later than the stored timestamp (or nothing was issued yet):
   draw fresh randomness and reserve from it.
2. Same or earlier ``now`` with headroom left: reserve right after the last
   issued value, keeping the stored timestamp.
3. Same or earlier ``now`` and the last issued randomness is 2**80 - 1: the
   timestamp is exhausted. Best-effort calls stop; exact calls release the
   lock, sleep one wait interval, re-sample the clock and try again.

A block that would run past 2**80 - 1 is clamped there, so a round may
reserve fewer items than requested; the call then runs another round.
Identifiers are built from the reserved block outside the lock.
"""

from __future__ import annotations

import threading
import time
from typing import NamedTuple

from ulidkit.config import DEFAULT_CONFIG, GeneratorConfig
from ulidkit.constants import TIMESTAMP_MAX_VALUE, TIMESTAMP_MIN_VALUE
from ulidkit.errors import TimestampOutOfRangeError
from ulidkit.generators.base import Clock, default_random_source, system_clock, validate_request
from ulidkit.observability import get_logger, get_metrics
from ulidkit.randomness import (
    RANDOMNESS_MAX,
    RandomSource,
    Randomness,
    add_randomness,
    generate_randomness,
    increment_randomness,
)
from ulidkit.ulid import Ulid

logger = get_logger(__name__)

GENERATOR_LABEL = {"generator": "monotonic"}


class IssuedState(NamedTuple):
    """Last issued timestamp and randomness of a monotonic generator."""

    timestamp: int
    randomness: Randomness


class _Reservation(NamedTuple):
    timestamp: int
    base: Randomness
    size: int


class MonotonicUlidGenerator:
    """Thread-safe generator of strictly increasing ULIDs.

    Instances are safe to share between threads as long as the supplied
    clock and random source are. Distinct instances share nothing.

    Args:
        clock: Millisecond epoch clock. Defaults to the system clock.
        random_source: Source of random words. Defaults to ``random.SystemRandom``.
        config: Wait interval and batch cap. Defaults to ``GeneratorConfig()``.

    Example:
        >>> generator = MonotonicUlidGenerator()
        >>> first, second = generator.generate(2)
        >>> first < second
        True
    """

    def __init__(
        self,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        config: GeneratorConfig | None = None,
    ) -> None:
        self._clock = clock or system_clock
        self._random = random_source if random_source is not None else default_random_source()
        self._config = config or DEFAULT_CONFIG
        self._lock = threading.Lock()
        self._last_timestamp = 0
        self._last_randomness: Randomness | None = None

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def random_source(self) -> RandomSource:
        return self._random

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def last_issued(self) -> IssuedState | None:
        """Snapshot of the last issued pair, or None before the first reservation."""
        with self._lock:
            if self._last_randomness is None:
                return None
            return IssuedState(self._last_timestamp, self._last_randomness)

    def generate(self, count: int, timestamp: int | None = None) -> list[Ulid]:
        """Generate up to ``count`` ULIDs without waiting.

        If the current timestamp runs out of randomness the call returns what
        it produced so far, possibly nothing.

        Args:
            count: Number of ULIDs wanted
            timestamp: Starting timestamp in milliseconds; compared against the
                last issued timestamp, so a past value never moves it backwards.
                Defaults to the clock.

        Raises:
            InvalidCountError: If count is negative or above the batch cap
            TimestampOutOfRangeError: If timestamp is outside [0, 2**48 - 1]
        """
        return self._generate(count, timestamp, exact=False, cancel=None)

    def generate_exact(
        self,
        count: int,
        timestamp: int | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Ulid]:
        """Generate exactly ``count`` ULIDs, waiting for the clock if needed.

        When a timestamp is exhausted the call sleeps for the configured wait
        interval and re-samples the clock until a later millisecond arrives.
        Setting ``cancel`` aborts the wait; the ULIDs produced so far are
        returned and no error is raised.

        Raises:
            InvalidCountError: If count is negative or above the batch cap
            TimestampOutOfRangeError: If timestamp is outside [0, 2**48 - 1]
        """
        return self._generate(count, timestamp, exact=True, cancel=cancel)

    def _generate(
        self,
        count: int,
        timestamp: int | None,
        exact: bool,
        cancel: threading.Event | None,
    ) -> list[Ulid]:
        validate_request(count, timestamp, self._config)

        ulids: list[Ulid] = []
        if count == 0:
            return ulids

        now = self._clock() if timestamp is None else timestamp
        exhausted = False

        while len(ulids) < count:
            if not TIMESTAMP_MIN_VALUE <= now <= TIMESTAMP_MAX_VALUE:
                raise TimestampOutOfRangeError(now)

            reservation = self._reserve(now, count - len(ulids))
            if reservation is None:
                # Counted once per run of exhausted reservations, not per wait.
                if not exhausted:
                    get_metrics().increment_counter("ulidkit_exhausted_total", GENERATOR_LABEL)
                    exhausted = True
                if not exact:
                    logger.debug(
                        "ulidkit.monotonic.exhausted",
                        timestamp=now,
                        produced=len(ulids),
                        requested=count,
                    )
                    break
                if not self._wait_for_next_tick(cancel):
                    logger.debug(
                        "ulidkit.monotonic.wait_cancelled",
                        timestamp=now,
                        produced=len(ulids),
                        requested=count,
                    )
                    break
                now = self._clock()
                continue

            exhausted = False
            self._emit(reservation, ulids)

        get_metrics().increment_counter("ulidkit_generated_total", GENERATOR_LABEL, len(ulids))
        return ulids

    def _reserve(self, now: int, count: int) -> _Reservation | None:
        """Claim up to ``count`` consecutive randomness values, or None if exhausted."""
        with self._lock:
            last = self._last_randomness
            if last is None or now > self._last_timestamp:
                timestamp = now
                base = generate_randomness(self._random)
            elif last.is_max:
                return None
            else:
                timestamp = self._last_timestamp
                base, _ = increment_randomness(last)

            end, overflow = add_randomness(base, count - 1)
            if overflow:
                end = RANDOMNESS_MAX

            self._last_timestamp = timestamp
            self._last_randomness = end

        return _Reservation(timestamp, base, end.to_int() - base.to_int() + 1)

    @staticmethod
    def _emit(reservation: _Reservation, out: list[Ulid]) -> None:
        randomness = reservation.base
        for remaining in range(reservation.size, 0, -1):
            out.append(Ulid.from_randomness(reservation.timestamp, randomness))
            if remaining > 1:
                randomness, overflow = increment_randomness(randomness)
                if overflow:
                    break

    def _wait_for_next_tick(self, cancel: threading.Event | None) -> bool:
        """Sleep one wait interval; False if ``cancel`` was set."""
        metrics = get_metrics()
        metrics.increment_counter("ulidkit_waits_total")
        interval = self._config.wait_interval_seconds

        started = time.monotonic()
        if cancel is None:
            time.sleep(interval)
            cancelled = False
        else:
            cancelled = cancel.wait(interval)
        metrics.observe_histogram("ulidkit_wait_duration_seconds", time.monotonic() - started)

        if cancelled:
            metrics.increment_counter("ulidkit_wait_cancelled_total")
        return not cancelled


__all__ = ["IssuedState", "MonotonicUlidGenerator"]
