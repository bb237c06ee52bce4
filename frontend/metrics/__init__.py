"""Prediction metrics: registry, exposition formatter and scrape route."""

from frontend.metrics.formatter import CONTENT_TYPE, render, render_or_placeholder
from frontend.metrics.guard import suppress_metric_errors
from frontend.metrics.registry import MetricsRegistry, MetricsSnapshot
from frontend.metrics.routes import get_metrics_registry, router

__all__ = [
    "CONTENT_TYPE",
    "MetricsRegistry",
    "MetricsSnapshot",
    "get_metrics_registry",
    "render",
    "render_or_placeholder",
    "router",
    "suppress_metric_errors",
]
