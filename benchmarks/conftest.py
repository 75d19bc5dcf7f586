"""Benchmark fixtures and configuration."""

import random

import pytest

from ulidkit.generators import MonotonicUlidGenerator, SimpleUlidGenerator
from ulidkit.ulid import Ulid

SAMPLE_TEXT = "01HAKQK7G0PKCTV8M94TEF1FHK"


@pytest.fixture
def sample_ulid() -> Ulid:
    """A fixed ULID for parse/render benchmarks."""
    return Ulid.parse(SAMPLE_TEXT)


@pytest.fixture
def monotonic_generator() -> MonotonicUlidGenerator:
    """Monotonic generator on the system clock with a fast, seeded random source."""
    return MonotonicUlidGenerator(random_source=random.Random(0))


@pytest.fixture
def simple_generator() -> SimpleUlidGenerator:
    """Simple generator on the system clock with a fast, seeded random source."""
    return SimpleUlidGenerator(random_source=random.Random(0))
