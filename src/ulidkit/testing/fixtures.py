"""Pytest fixtures for code that generates ULIDs.

Load with ``pytest_plugins = ["ulidkit.testing.fixtures"]``.

Fixtures:
    frozen_clock: FrozenClock at FIXED_EPOCH_MILLIS.
    controlled_clock: ControlledClock starting at FIXED_EPOCH_MILLIS, one tick per read.
    predictable_random: PredictableRandom with bias 0 (every draw is 2**80 - 1).
    monotonic_generator: MonotonicUlidGenerator on frozen_clock with a seeded random.Random.
    simple_generator: SimpleUlidGenerator on frozen_clock with a seeded random.Random.
"""

import random

import pytest

from ulidkit.config import GeneratorConfig
from ulidkit.generators import MonotonicUlidGenerator, SimpleUlidGenerator
from ulidkit.testing.sources import ControlledClock, FrozenClock, PredictableRandom

FIXED_EPOCH_MILLIS = 1695025680000  # 2023-09-18T08:28:00Z
TEST_RANDOM_SEED = 20230918
TEST_WAIT_INTERVAL_SECONDS = 0.0005


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(FIXED_EPOCH_MILLIS)


@pytest.fixture
def controlled_clock() -> ControlledClock:
    return ControlledClock(FIXED_EPOCH_MILLIS, reads_per_tick=1)


@pytest.fixture
def predictable_random() -> PredictableRandom:
    return PredictableRandom(bias=0)


@pytest.fixture
def test_config() -> GeneratorConfig:
    """Config with a short wait interval so exact-generation tests stay fast."""
    return GeneratorConfig(wait_interval_seconds=TEST_WAIT_INTERVAL_SECONDS)


@pytest.fixture
def monotonic_generator(
    frozen_clock: FrozenClock, test_config: GeneratorConfig
) -> MonotonicUlidGenerator:
    return MonotonicUlidGenerator(
        clock=frozen_clock,
        random_source=random.Random(TEST_RANDOM_SEED),
        config=test_config,
    )


@pytest.fixture
def simple_generator(frozen_clock: FrozenClock) -> SimpleUlidGenerator:
    return SimpleUlidGenerator(clock=frozen_clock, random_source=random.Random(TEST_RANDOM_SEED))


__all__ = [
    "FIXED_EPOCH_MILLIS",
    "controlled_clock",
    "frozen_clock",
    "monotonic_generator",
    "predictable_random",
    "simple_generator",
    "test_config",
]
