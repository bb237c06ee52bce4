"""Scoped wrapper turning metrics failures into logged no-ops."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from frontend.lib.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def suppress_metric_errors(metric: str) -> Iterator[None]:
    """Run a metrics update without letting its failure reach the caller.

    Usage::

        with suppress_metric_errors("input_length"):
            registry.set_gauge(len(text))
    """

    try:
        yield
    except Exception as exc:
        logger.warning(
            "metrics.record.failed",
            extra={"metric": metric, "error": str(exc), "error_type": type(exc).__name__},
        )
