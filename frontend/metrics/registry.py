"""Thread-safe in-memory registry for the prediction metrics."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from frontend.lib.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RESULT_LABELS: tuple[str, ...] = ("success", "error")
DURATION_BUCKETS: tuple[float, ...] = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time copy of every metric held by a registry."""

    counters: Mapping[str, int] = field(default_factory=dict)
    gauge: int = 0
    boundaries: tuple[float, ...] = DURATION_BUCKETS
    buckets: Mapping[float, int] = field(default_factory=dict)
    duration_sum: float = 0.0
    duration_count: int = 0

    def bucket_count(self, boundary: float) -> int:
        return self.buckets.get(boundary, 0)


class MetricsRegistry:
    """Holds prediction counters, the input length gauge and the duration histogram.

    Every metric family is guarded by its own lock so writers to one family
    never wait on another. Mutators never raise: bad input is logged and
    leaves the previous state untouched.
    """

    def __init__(self, boundaries: tuple[float, ...] = DURATION_BUCKETS) -> None:
        self._boundaries = tuple(sorted(boundaries))

        self._counter_lock = threading.Lock()
        self._counters: dict[str, int] = {label: 0 for label in DEFAULT_RESULT_LABELS}

        self._gauge_lock = threading.Lock()
        self._gauge = 0

        self._histogram_lock = threading.Lock()
        self._bucket_counts: list[int] = [0] * len(self._boundaries)
        self._inf_count = 0
        self._duration_sum = 0.0
        self._duration_count = 0

    @property
    def bucket_boundaries(self) -> tuple[float, ...]:
        return self._boundaries

    def increment_counter(self, label: str) -> None:
        key = str(label)
        with self._counter_lock:
            self._counters[key] = self._counters.get(key, 0) + 1

    def set_gauge(self, value: int) -> None:
        try:
            new_value = int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning("metrics.gauge.invalid", extra={"value": repr(value)})
            return
        with self._gauge_lock:
            self._gauge = new_value

    def record_duration(self, seconds: float) -> None:
        try:
            observed = float(seconds)
        except (TypeError, ValueError):
            logger.warning("metrics.duration.invalid", extra={"value": repr(seconds)})
            return
        if not math.isfinite(observed) or observed < 0:
            logger.warning("metrics.duration.clamped", extra={"value": repr(seconds)})
            observed = 0.0

        # Bucket indexes are resolved before the lock so the update itself cannot fail halfway.
        hits = [index for index, boundary in enumerate(self._boundaries) if observed <= boundary]
        with self._histogram_lock:
            for index in hits:
                self._bucket_counts[index] += 1
            self._inf_count += 1
            self._duration_sum += observed
            self._duration_count += 1

    def snapshot(self) -> MetricsSnapshot:
        """Copy each metric family under its own lock.

        A histogram is always internally consistent; counters, gauge and
        histogram may reflect slightly different instants.
        """

        with self._counter_lock:
            counters = dict(self._counters)
        with self._gauge_lock:
            gauge = self._gauge
        with self._histogram_lock:
            bucket_counts = list(self._bucket_counts)
            inf_count = self._inf_count
            duration_sum = self._duration_sum
            duration_count = self._duration_count

        buckets: dict[float, int] = dict(zip(self._boundaries, bucket_counts))
        buckets[math.inf] = inf_count
        return MetricsSnapshot(
            counters=MappingProxyType(counters),
            gauge=gauge,
            boundaries=self._boundaries,
            buckets=MappingProxyType(buckets),
            duration_sum=duration_sum,
            duration_count=duration_count,
        )
