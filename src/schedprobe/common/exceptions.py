# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class SchedProbeError(Exception):
    """Base class for all exceptions raised by schedprobe."""


class ConfigurationError(SchedProbeError, ValueError):
    """Exception raised when a configuration value is invalid.

    Also a ValueError so pydantic validators report it as a validation failure.
    """


class HistogramLayoutError(SchedProbeError):
    """Exception raised when two histogram snapshots do not share a bucket layout."""


class NonMonotonicHistogramError(SchedProbeError):
    """Exception raised when a cumulative histogram count decreased between two reads."""

    def __init__(self, bucket_index: int, previous: int, current: int) -> None:
        self.bucket_index = bucket_index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Bucket {bucket_index} count went from {previous} to {current}"
        )


class UnknownMetricError(SchedProbeError):
    """Exception raised when reading a runtime metric that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No runtime metric registered under '{name}'")
