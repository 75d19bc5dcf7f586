"""ulidkit testing utilities.

Modules:
    sources: Deterministic clocks (FrozenClock, ControlledClock) and
             PredictableRandom for forcing randomness overflow.
    fixtures: Pytest fixtures built on them (frozen_clock, controlled_clock,
              predictable_random, monotonic_generator, simple_generator).

Example:
    >>> from ulidkit.testing import FrozenClock, PredictableRandom
    >>> from ulidkit import MonotonicUlidGenerator
    >>> generator = MonotonicUlidGenerator(FrozenClock(1000), PredictableRandom(0))
    >>> len(generator.generate(5))
    1
"""

from ulidkit.testing.sources import ControlledClock, FrozenClock, PredictableRandom

__all__ = ["ControlledClock", "FrozenClock", "PredictableRandom"]
