"""Prometheus metrics for error responses emitted by the global handler."""

from __future__ import annotations

from typing import cast

from loguru import logger
from prometheus_client import REGISTRY, Counter

_METRICS_CACHE: dict[str, Counter] = globals().get("_METRICS_CACHE", {})


def _get_or_create_counter(
    name: str,
    documentation: str,
    labelnames: tuple[str, ...],
) -> Counter:
    """Return an existing counter or create one.

    Args:
        name: Metric name.
        documentation: Metric help text.
        labelnames: Ordered metric label names.

    Returns:
        Prometheus counter metric.
    """
    cached = _METRICS_CACHE.get(name)
    if cached is not None:
        return cached

    try:
        counter = Counter(name=name, documentation=documentation, labelnames=labelnames)
    except ValueError as exc:
        existing = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
        if existing is not None:
            counter = cast(Counter, existing)
            logger.debug("Reused existing counter collector", metric=name)
        else:
            raise exc

    _METRICS_CACHE[name] = counter
    return counter


error_responses_total: Counter = _get_or_create_counter(
    name="error_responses_total",
    documentation="Total number of error responses, labeled by error code and HTTP status.",
    labelnames=("code", "status"),
)


def increment_error_responses(code: str, status: int) -> None:
    """Increment the error response counter.

    Args:
        code: Error code placed in the response body.
        status: HTTP status code of the response.

    Raises:
        ValueError: If the code label is empty.
    """
    if not code:
        raise ValueError("code label must be a non-empty string.")

    error_responses_total.labels(code=code, status=str(status)).inc()


__all__ = ["error_responses_total", "increment_error_responses"]
