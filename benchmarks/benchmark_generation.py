"""Benchmarks for ULID generation, parsing and rendering.

These benchmarks measure the performance of:
- Crockford Base32 encoding of the 10 randomness bytes
- Ulid rendering to and parsing from the 26-character form
- Single and batched monotonic generation
- Simple generation
- Contended monotonic generation from several threads

Performance targets:
- Render / parse: < 10μs
- Monotonic generate(1): < 10μs
- Monotonic generate(1000): < 2ms

Run with: uv run pytest benchmarks/benchmark_generation.py --benchmark-only -v
"""

import threading
from typing import Any

from ulidkit.codec import decode_bytes, encode
from ulidkit.generators import MonotonicUlidGenerator, SimpleUlidGenerator
from ulidkit.ulid import Ulid

THREAD_COUNT = 4
CALLS_PER_THREAD = 250


class TestCodec:
    """Benchmarks for the Base32 codec."""

    def test_encode_randomness(self, benchmark: Any, sample_ulid: Ulid) -> None:
        data = sample_ulid.randomness_bytes

        result = benchmark(encode, data)
        assert len(result) == 16

    def test_decode_randomness(self, benchmark: Any, sample_ulid: Ulid) -> None:
        text = str(sample_ulid)[10:]

        result = benchmark(decode_bytes, text)
        assert result == sample_ulid.randomness_bytes


class TestUlidText:
    """Benchmarks for the Ulid text form."""

    def test_render(self, benchmark: Any, sample_ulid: Ulid) -> None:
        result = benchmark(str, sample_ulid)
        assert len(result) == 26

    def test_parse(self, benchmark: Any, sample_ulid: Ulid) -> None:
        text = str(sample_ulid)

        result = benchmark(Ulid.parse, text)
        assert result == sample_ulid


class TestMonotonicGeneration:
    """Benchmarks for MonotonicUlidGenerator."""

    def test_generate_one(
        self, benchmark: Any, monotonic_generator: MonotonicUlidGenerator
    ) -> None:
        result = benchmark(monotonic_generator.generate_exact, 1)
        assert len(result) == 1

    def test_generate_batch(
        self, benchmark: Any, monotonic_generator: MonotonicUlidGenerator
    ) -> None:
        result = benchmark(monotonic_generator.generate_exact, 1000)
        assert len(result) == 1000

    def test_generate_contended(
        self, benchmark: Any, monotonic_generator: MonotonicUlidGenerator
    ) -> None:
        """Several threads sharing one generator."""

        def run() -> int:
            produced: list[int] = [0] * THREAD_COUNT

            def worker(index: int) -> None:
                for _ in range(CALLS_PER_THREAD):
                    produced[index] += len(monotonic_generator.generate_exact(10))

            threads = [threading.Thread(target=worker, args=(i,)) for i in range(THREAD_COUNT)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
            return sum(produced)

        result = benchmark.pedantic(run, rounds=5, iterations=1)
        assert result == THREAD_COUNT * CALLS_PER_THREAD * 10


class TestSimpleGeneration:
    """Benchmarks for SimpleUlidGenerator."""

    def test_generate_batch(self, benchmark: Any, simple_generator: SimpleUlidGenerator) -> None:
        result = benchmark(simple_generator.generate_exact, 1000)
        assert len(result) == 1000
