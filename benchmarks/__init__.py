"""ulidkit performance benchmarks.

This package contains benchmarks for the hot paths of ULID generation.

Benchmark categories:
- Crockford Base32 encode/decode
- Ulid parsing and rendering
- Monotonic and simple generation, single- and multi-threaded

Run benchmarks with:
    uv run pytest benchmarks/ --benchmark-only
"""
