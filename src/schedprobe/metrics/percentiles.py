# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Percentile estimation over discrete samples and cumulative histograms.

Two estimators share one PercentileSpec:

- sample_percentiles: nearest-rank percentiles over a buffer of duration
  samples collected during one reporting window.
- histogram_percentiles: percentile boundaries of the distribution observed
  between two reads of an ever-growing cumulative histogram.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from schedprobe.common.duration import seconds_to_duration
from schedprobe.common.exceptions import (
    HistogramLayoutError,
    NonMonotonicHistogramError,
)

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from schedprobe.common.models import HistogramSnapshot, PercentileSpec

# =============================================================================
# Discrete Samples
# =============================================================================


def sample_percentiles(samples: list[int], percentiles: PercentileSpec) -> list[int]:
    """Nearest-rank percentiles of a window of duration samples.

    The buffer is sorted in place. Each fraction ``p`` selects
    ``samples[int(p * (n - 1))]`` without interpolation, so 0.0 yields the
    minimum and 1.0 the maximum. An empty buffer yields 0 for every fraction.

    Args:
        samples: Duration samples in nanoseconds. Sorted in place.
        percentiles: Fractions to extract.

    Returns:
        One duration per fraction, in the order of ``percentiles``.
    """
    samples.sort()
    if not samples:
        return [0] * len(percentiles.fractions)

    last_index = len(samples) - 1
    return [samples[int(p * last_index)] for p in percentiles.fractions]


# =============================================================================
# Cumulative Histogram Deltas
# =============================================================================


def cumulative_deltas(
    current: HistogramSnapshot, previous: HistogramSnapshot
) -> NDArray[np.int64]:
    """Running sum of the per-bucket count increase between two snapshots.

    Raises:
        HistogramLayoutError: If the snapshots do not share a bucket layout.
        NonMonotonicHistogramError: If any bucket count decreased.
    """
    if not current.same_layout(previous):
        raise HistogramLayoutError(
            f"Cannot diff histograms with different bucket layouts "
            f"({len(previous.boundaries)} vs {len(current.boundaries)} buckets)"
        )

    deltas = current.counts - previous.counts
    if len(deltas) and deltas.min() < 0:
        bucket = int(np.argmin(deltas))
        raise NonMonotonicHistogramError(
            bucket, int(previous.counts[bucket]), int(current.counts[bucket])
        )
    return np.cumsum(deltas)


def histogram_percentiles(
    current: HistogramSnapshot,
    previous: HistogramSnapshot,
    percentiles: PercentileSpec,
) -> list[int]:
    """Percentile boundaries of the observations recorded between two snapshots.

    Algorithm:
        1. Diff the counts bucket by bucket and form the cumulative sum of the
           deltas. ``total`` is the last cumulative value.
        2. For each fraction ``p`` the target rank is ``int(p * total)``. Find
           the first bucket whose cumulative delta is strictly greater than the
           target. For ``p == 1.0`` the comparison is ``>=`` so the maximum lands
           in the last non-empty bucket instead of one past it.
        3. Step one bucket forward to report the upper edge of the located
           bucket. If that runs past the layout, use the last boundary.
        4. Convert the boundary from seconds to a nanosecond duration.

    With no new observations (``total == 0``) every target is 0 and the search
    still resolves to a boundary; nothing is raised.

    Args:
        current: The snapshot just read.
        previous: The snapshot read one interval earlier, same bucket layout.
        percentiles: Fractions to extract.

    Returns:
        One duration per fraction, in the order of ``percentiles``.
    """
    cumulative = cumulative_deltas(current, previous)
    total = int(cumulative[-1]) if len(cumulative) else 0
    boundaries = current.boundaries
    if not len(boundaries):
        return [0] * len(percentiles.fractions)

    durations = []
    for p in percentiles.fractions:
        target = int(p * float(total))
        # side="left" finds the first cumulative >= target, side="right" the first > target
        side = "left" if p == 1.0 else "right"
        index = int(np.searchsorted(cumulative, target, side=side)) + 1

        if index >= len(boundaries):
            boundary = float(boundaries[-1])
        else:
            boundary = float(boundaries[index])
        durations.append(seconds_to_duration(boundary))
    return durations
