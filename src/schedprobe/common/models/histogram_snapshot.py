# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(slots=True)
class HistogramSnapshot:
    """Point-in-time copy of a cumulative histogram.

    ``boundaries[i]`` is the lower edge (in seconds) of bucket ``i``; its upper
    edge is ``boundaries[i + 1]`` and the last bucket is open above. ``counts``
    has the same length as ``boundaries``.

    A snapshot is a reusable buffer: reading a histogram into it overwrites
    ``counts`` in place instead of allocating a new array.
    """

    boundaries: NDArray[np.float64]
    counts: NDArray[np.int64]

    def __post_init__(self) -> None:
        if self.boundaries.shape != self.counts.shape:
            raise ValueError(
                f"Histogram has {len(self.boundaries)} boundaries but {len(self.counts)} counts"
            )

    @classmethod
    def empty(cls, boundaries: Sequence[float] | NDArray[np.float64]) -> HistogramSnapshot:
        """Create a zeroed snapshot buffer for the given bucket layout."""
        bounds = np.array(boundaries, dtype=np.float64)
        return cls(boundaries=bounds, counts=np.zeros(len(bounds), dtype=np.int64))

    @classmethod
    def from_counts(
        cls,
        boundaries: Sequence[float] | NDArray[np.float64],
        counts: Sequence[int] | NDArray[np.int64],
    ) -> HistogramSnapshot:
        return cls(
            boundaries=np.array(boundaries, dtype=np.float64),
            counts=np.array(counts, dtype=np.int64),
        )

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def same_layout(self, other: HistogramSnapshot) -> bool:
        return self.boundaries.shape == other.boundaries.shape and bool(
            np.array_equal(self.boundaries, other.boundaries)
        )
