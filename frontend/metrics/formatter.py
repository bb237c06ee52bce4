"""Render registry snapshots using the Prometheus text exposition format."""

from __future__ import annotations

import math
from typing import Iterable

from frontend.lib.logger import get_logger
from frontend.metrics.registry import DEFAULT_RESULT_LABELS, MetricsRegistry, MetricsSnapshot

logger = get_logger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
PLACEHOLDER = "# Error formatting metrics\n"

_PREDICTIONS = "doda_predictions_total"
_INPUT_LENGTH = "doda_input_text_length"
_DURATION = "doda_prediction_duration_seconds"


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _ordered_labels(labels: Iterable[str]) -> list[str]:
    present = set(labels)
    known = [label for label in DEFAULT_RESULT_LABELS if label in present]
    return known + sorted(present.difference(DEFAULT_RESULT_LABELS))


def _counter_block(snapshot: MetricsSnapshot) -> list[str]:
    lines = [
        f"# HELP {_PREDICTIONS} Total number of SMS predictions by result",
        f"# TYPE {_PREDICTIONS} counter",
    ]
    for label in _ordered_labels(snapshot.counters):
        value = int(snapshot.counters[label])
        lines.append(f'{_PREDICTIONS}{{result="{_escape_label_value(label)}"}} {value}')
    return lines


def _gauge_block(snapshot: MetricsSnapshot) -> list[str]:
    return [
        f"# HELP {_INPUT_LENGTH} Length in characters of the most recent SMS input",
        f"# TYPE {_INPUT_LENGTH} gauge",
        f"{_INPUT_LENGTH} {int(snapshot.gauge)}",
    ]


def _histogram_block(snapshot: MetricsSnapshot) -> list[str]:
    lines = [
        f"# HELP {_DURATION} Time taken for SMS predictions",
        f"# TYPE {_DURATION} histogram",
    ]
    for boundary in sorted(snapshot.boundaries):
        lines.append(f'{_DURATION}_bucket{{le="{boundary:.2f}"}} {int(snapshot.bucket_count(boundary))}')
    lines.append(f'{_DURATION}_bucket{{le="+Inf"}} {int(snapshot.bucket_count(math.inf))}')
    lines.append(f"{_DURATION}_sum {float(snapshot.duration_sum):.6f}")
    lines.append(f"{_DURATION}_count {int(snapshot.duration_count)}")
    return lines


def render(snapshot: MetricsSnapshot) -> str:
    """Return the exposition document for ``snapshot``.

    Blocks are emitted as counters, gauge, histogram and separated by a blank
    line. Output depends only on the snapshot.
    """

    blocks = [_counter_block(snapshot), _gauge_block(snapshot), _histogram_block(snapshot)]
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


def render_or_placeholder(registry: MetricsRegistry) -> str:
    """Render the registry, degrading to a single comment line on any failure."""

    try:
        return render(registry.snapshot())
    except Exception:
        logger.exception("metrics.render.failed")
        return PLACEHOLDER


__all__ = ["CONTENT_TYPE", "PLACEHOLDER", "render", "render_or_placeholder"]
