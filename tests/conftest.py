"""Shared pytest fixtures for ulidkit tests.

Generator fixtures (frozen_clock, controlled_clock, predictable_random,
monotonic_generator, simple_generator) come from the ulidkit.testing plugin.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from ulidkit.observability import reset_metrics

# Load ulidkit.testing fixtures
pytest_plugins = ["ulidkit.testing.fixtures"]


@pytest.fixture(autouse=True)
def _reset_metrics() -> Iterator[None]:
    """Give every test a zeroed global metrics collector."""
    reset_metrics()
    yield
    reset_metrics()
