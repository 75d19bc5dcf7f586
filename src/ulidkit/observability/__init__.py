"""Observability module for ulidkit.

Structured logging (structlog) and Prometheus-compatible metrics for the
generators.

Example:
    >>> from ulidkit.observability import get_logger, get_metrics
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.debug("ulidkit.monotonic.wait", timestamp=1695025680000)
    >>>
    >>> metrics = get_metrics()
    >>> metrics.get_counter("ulidkit_generated_total", {"generator": "monotonic"})
"""

from ulidkit.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from ulidkit.observability.metrics import (
    MetricsCollector,
    get_metrics,
    reset_metrics,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_metrics",
    "reset_metrics",
    "MetricsCollector",
]
