# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Process-wide cumulative latency histograms and the runtime metric registry.

A :class:`CumulativeHistogram` only ever grows: counts are incremented as
observations arrive and are never reset. Consumers obtain a windowed
distribution by reading it twice into :class:`HistogramSnapshot` buffers and
differencing the two reads.

Histograms are looked up by metric name, e.g. ``/sched/latencies:seconds``,
which is registered on first use with the default scheduling-latency layout.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

import numpy as np

from schedprobe.common.constants import NANOS_PER_SECOND, SCHED_LATENCIES_METRIC
from schedprobe.common.exceptions import HistogramLayoutError, UnknownMetricError
from schedprobe.common.models import HistogramSnapshot


def exponential_boundaries(
    start: float = 1e-6, factor: float = 2**0.25, count: int = 96
) -> list[float]:
    """Bucket lower edges in seconds: ``0`` followed by ``count`` geometric steps.

    The defaults give four buckets per doubling from 1us up to about 14s;
    anything above the last edge lands in the final, open-ended bucket.
    """
    return [0.0] + [start * factor**i for i in range(count)]


DEFAULT_SCHED_LATENCY_BOUNDARIES: tuple[float, ...] = tuple(exponential_boundaries())


class CumulativeHistogram:
    """Thread-safe, monotonically growing histogram of durations in seconds.

    ``boundaries[i]`` is the lower edge of bucket ``i``. An observation ``v``
    falls into the last bucket whose lower edge is ``<= v``; values below the
    first edge are counted in bucket 0.
    """

    def __init__(self, boundaries: Sequence[float] = DEFAULT_SCHED_LATENCY_BOUNDARIES) -> None:
        self._boundaries = np.array(boundaries, dtype=np.float64)
        if len(self._boundaries) == 0:
            raise ValueError("A histogram needs at least one bucket")
        if np.any(np.diff(self._boundaries) < 0):
            raise ValueError("Histogram boundaries must be non-decreasing")
        self._counts = np.zeros(len(self._boundaries), dtype=np.int64)
        self._lock = threading.Lock()

    @property
    def boundaries(self) -> np.ndarray:
        return self._boundaries.copy()

    def bucket_index(self, seconds: float) -> int:
        index = int(np.searchsorted(self._boundaries, seconds, side="right")) - 1
        return max(index, 0)

    def record(self, seconds: float) -> None:
        index = self.bucket_index(seconds)
        with self._lock:
            self._counts[index] += 1

    def record_ns(self, duration_ns: int) -> None:
        self.record(duration_ns / NANOS_PER_SECOND)

    def new_snapshot(self) -> HistogramSnapshot:
        """Allocate a zeroed snapshot buffer with this histogram's layout."""
        return HistogramSnapshot.empty(self._boundaries)

    def read_into(self, snapshot: HistogramSnapshot) -> HistogramSnapshot:
        """Copy the current counts into ``snapshot`` without reallocating it.

        Raises:
            HistogramLayoutError: If the snapshot was built for another layout.
        """
        if not np.array_equal(snapshot.boundaries, self._boundaries):
            raise HistogramLayoutError(
                "Snapshot buffer does not match the histogram bucket layout"
            )
        with self._lock:
            np.copyto(snapshot.counts, self._counts)
        return snapshot


# =============================================================================
# Runtime Metric Registry
# =============================================================================

_histograms: dict[str, CumulativeHistogram] = {}
_histograms_lock = threading.Lock()


def register_histogram(name: str, histogram: CumulativeHistogram) -> CumulativeHistogram:
    """Expose ``histogram`` under a runtime metric name, replacing any previous one."""
    with _histograms_lock:
        _histograms[name] = histogram
    return histogram


def unregister_histogram(name: str) -> None:
    with _histograms_lock:
        _histograms.pop(name, None)


def get_histogram(name: str) -> CumulativeHistogram:
    """Look up a registered histogram.

    The scheduling-latency metric is created on first access, so every reader
    in the process shares a single instance.

    Raises:
        UnknownMetricError: If no histogram is registered under ``name``.
    """
    histogram = _histograms.get(name)
    if histogram is None:
        with _histograms_lock:
            histogram = _histograms.get(name)
            if histogram is None:
                if name != SCHED_LATENCIES_METRIC:
                    raise UnknownMetricError(name)
                histogram = _histograms[name] = CumulativeHistogram()
    return histogram


def read_histogram(name: str, snapshot: HistogramSnapshot) -> HistogramSnapshot:
    """Read the named histogram into a snapshot buffer."""
    return get_histogram(name).read_into(snapshot)
