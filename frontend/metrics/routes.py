"""Prometheus scrape endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from frontend.metrics.formatter import CONTENT_TYPE, render_or_placeholder
from frontend.metrics.registry import MetricsRegistry

router = APIRouter()


def get_metrics_registry(request: Request) -> MetricsRegistry:
    registry: MetricsRegistry | None = getattr(request.app.state, "metrics", None)
    if registry is None:
        raise RuntimeError("Metrics registry not configured on application state")
    return registry


@router.get("/metrics", summary="Prometheus metrics")
async def metrics_endpoint(registry: MetricsRegistry = Depends(get_metrics_registry)) -> Response:
    """Expose metrics in the Prometheus text format; always answers 200."""

    return Response(content=render_or_placeholder(registry), media_type=CONTENT_TYPE)
