"""Non-monotonic ULID generation.

Each item gets fresh randomness against one timestamp per call, so items
sharing a millisecond come out in random order. There is no shared state
beyond the injected sources.
"""

from __future__ import annotations

import threading

from ulidkit.config import DEFAULT_CONFIG, GeneratorConfig
from ulidkit.generators.base import Clock, default_random_source, system_clock, validate_request
from ulidkit.observability import get_logger, get_metrics
from ulidkit.randomness import RandomSource, generate_randomness
from ulidkit.ulid import Ulid

logger = get_logger(__name__)

GENERATOR_LABEL = {"generator": "simple"}


class SimpleUlidGenerator:
    """Generator drawing independent random ULIDs.

    Args:
        clock: Millisecond epoch clock. Defaults to the system clock.
        random_source: Source of random words. Defaults to ``random.SystemRandom``.
        config: Batch cap. Defaults to ``GeneratorConfig()``.
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

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def random_source(self) -> RandomSource:
        return self._random

    def generate(self, count: int, timestamp: int | None = None) -> list[Ulid]:
        """Draw ``count`` ULIDs; duplicates are dropped, so fewer may come back."""
        validate_request(count, timestamp, self._config)
        if count == 0:
            return []

        now = self._clock() if timestamp is None else timestamp
        drawn = dict.fromkeys(
            Ulid.from_randomness(now, generate_randomness(self._random)) for _ in range(count)
        )
        ulids = list(drawn)
        get_metrics().increment_counter("ulidkit_generated_total", GENERATOR_LABEL, len(ulids))
        return ulids

    def generate_exact(
        self,
        count: int,
        timestamp: int | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Ulid]:
        """Draw until ``count`` distinct ULIDs are collected.

        Never waits on the clock. ``cancel`` is checked before each retry of a
        duplicate draw; once set, the distinct ULIDs collected so far are
        returned.
        """
        validate_request(count, timestamp, self._config)
        if count == 0:
            return []

        now = self._clock() if timestamp is None else timestamp
        drawn: dict[Ulid, None] = {}
        retries = 0
        while len(drawn) < count:
            ulid = Ulid.from_randomness(now, generate_randomness(self._random))
            if ulid in drawn:
                retries += 1
                if cancel is not None and cancel.is_set():
                    break
                continue
            drawn[ulid] = None

        if retries:
            get_metrics().increment_counter("ulidkit_duplicate_retries_total", value=retries)
            logger.debug("ulidkit.simple.duplicates_retried", retries=retries, requested=count)

        ulids = list(drawn)
        get_metrics().increment_counter("ulidkit_generated_total", GENERATOR_LABEL, len(ulids))
        return ulids


__all__ = ["SimpleUlidGenerator"]
