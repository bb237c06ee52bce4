"""Exposition text rendering."""

from __future__ import annotations

import math

from frontend.metrics import MetricsRegistry, MetricsSnapshot, render, render_or_placeholder
from frontend.metrics.formatter import PLACEHOLDER

EMPTY_DOCUMENT = """\
# HELP doda_predictions_total Total number of SMS predictions by result
# TYPE doda_predictions_total counter
doda_predictions_total{result="success"} 0
doda_predictions_total{result="error"} 0

# HELP doda_input_text_length Length in characters of the most recent SMS input
# TYPE doda_input_text_length gauge
doda_input_text_length 0

# HELP doda_prediction_duration_seconds Time taken for SMS predictions
# TYPE doda_prediction_duration_seconds histogram
doda_prediction_duration_seconds_bucket{le="0.05"} 0
doda_prediction_duration_seconds_bucket{le="0.10"} 0
doda_prediction_duration_seconds_bucket{le="0.25"} 0
doda_prediction_duration_seconds_bucket{le="0.50"} 0
doda_prediction_duration_seconds_bucket{le="1.00"} 0
doda_prediction_duration_seconds_bucket{le="2.50"} 0
doda_prediction_duration_seconds_bucket{le="5.00"} 0
doda_prediction_duration_seconds_bucket{le="+Inf"} 0
doda_prediction_duration_seconds_sum 0.000000
doda_prediction_duration_seconds_count 0
"""


def test_fresh_registry_renders_every_series_as_zero() -> None:
    assert render(MetricsRegistry().snapshot()) == EMPTY_DOCUMENT


def test_mixed_activity_renders_expected_values() -> None:
    registry = MetricsRegistry()
    registry.increment_counter("success")
    registry.increment_counter("success")
    registry.increment_counter("error")
    registry.set_gauge(42)
    registry.record_duration(0.05)
    registry.record_duration(3.0)

    lines = render(registry.snapshot()).splitlines()

    assert 'doda_predictions_total{result="success"} 2' in lines
    assert 'doda_predictions_total{result="error"} 1' in lines
    assert "doda_input_text_length 42" in lines
    assert 'doda_prediction_duration_seconds_bucket{le="0.05"} 1' in lines
    assert 'doda_prediction_duration_seconds_bucket{le="2.50"} 1' in lines
    assert 'doda_prediction_duration_seconds_bucket{le="5.00"} 2' in lines
    assert 'doda_prediction_duration_seconds_bucket{le="+Inf"} 2' in lines
    assert "doda_prediction_duration_seconds_sum 3.050000" in lines
    assert "doda_prediction_duration_seconds_count 2" in lines


def test_blocks_are_emitted_in_fixed_order() -> None:
    text = render(MetricsRegistry().snapshot())
    blocks = text.rstrip("\n").split("\n\n")

    assert [block.splitlines()[1] for block in blocks] == [
        "# TYPE doda_predictions_total counter",
        "# TYPE doda_input_text_length gauge",
        "# TYPE doda_prediction_duration_seconds histogram",
    ]


def test_rendering_is_repeatable() -> None:
    registry = MetricsRegistry()
    registry.increment_counter("retry")
    registry.record_duration(0.3)
    snapshot = registry.snapshot()

    assert render(snapshot) == render(snapshot)


def test_counter_order_does_not_depend_on_insertion_order() -> None:
    forward = MetricsSnapshot(counters={"success": 3, "error": 1, "timeout": 2, "bad": 4})
    backward = MetricsSnapshot(counters={"bad": 4, "timeout": 2, "error": 1, "success": 3})

    text = render(forward)
    assert text == render(backward)
    counter_lines = [line for line in text.splitlines() if line.startswith("doda_predictions_total{")]
    assert counter_lines == [
        'doda_predictions_total{result="success"} 3',
        'doda_predictions_total{result="error"} 1',
        'doda_predictions_total{result="bad"} 4',
        'doda_predictions_total{result="timeout"} 2',
    ]


def test_label_values_are_escaped() -> None:
    text = render(MetricsSnapshot(counters={'say "hi"\\\n': 1}))

    assert 'doda_predictions_total{result="say \\"hi\\"\\\\\\n"} 1' in text.splitlines()


def test_missing_buckets_render_as_zero() -> None:
    snapshot = MetricsSnapshot(buckets={0.5: 3, math.inf: 3}, duration_count=3, duration_sum=1.2)
    lines = render(snapshot).splitlines()

    assert 'doda_prediction_duration_seconds_bucket{le="0.25"} 0' in lines
    assert 'doda_prediction_duration_seconds_bucket{le="0.50"} 3' in lines
    assert "doda_prediction_duration_seconds_sum 1.200000" in lines


def test_placeholder_when_snapshot_fails(monkeypatch) -> None:
    registry = MetricsRegistry()

    def _boom() -> MetricsSnapshot:
        raise RuntimeError("storage unavailable")

    monkeypatch.setattr(registry, "snapshot", _boom)

    assert render_or_placeholder(registry) == PLACEHOLDER


def test_placeholder_when_snapshot_is_malformed(monkeypatch) -> None:
    registry = MetricsRegistry()
    monkeypatch.setattr(registry, "snapshot", lambda: MetricsSnapshot(counters={"success": "lots"}))

    assert render_or_placeholder(registry) == "# Error formatting metrics\n"
