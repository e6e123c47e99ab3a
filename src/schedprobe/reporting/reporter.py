# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import threading
from collections.abc import Sequence

from rich.console import Console

from schedprobe.common.constants import REPORT_NAME_WIDTH, REPORT_VALUE_WIDTH
from schedprobe.common.duration import format_duration, truncate
from schedprobe.common.models import PercentileSpec

__all__ = ["Reporter", "format_report_line"]


def format_report_line(
    name: str, labels: Sequence[str], values: Sequence[int]
) -> str:
    """Render one window summary, e.g. ``   timer delay: min 1.2µs  p50 ...``.

    Each value is truncated to a resolution matching its magnitude before it is
    printed, so low-order jitter does not masquerade as precision.
    """
    if len(labels) != len(values):
        raise ValueError(
            f"Expected {len(labels)} percentile values for '{name}', got {len(values)}"
        )
    fields = " ".join(
        f"{label} {format_duration(truncate(value)):<{REPORT_VALUE_WIDTH}}"
        for label, value in zip(labels, values, strict=True)
    )
    return f"{name:>{REPORT_NAME_WIDTH}}: {fields}"


class Reporter:
    """Writes report lines to standard output.

    Measurement loops run on different threads; a lock keeps each line whole.
    """

    def __init__(self, percentiles: PercentileSpec, console: Console | None = None) -> None:
        self._labels = percentiles.labels
        self._console = console or Console(
            highlight=False, markup=False, emoji=False, soft_wrap=True
        )
        self._lock = threading.Lock()

    @property
    def console(self) -> Console:
        return self._console

    def _print_line(self, line: str) -> None:
        with self._lock:
            self._console.print(line, markup=False, highlight=False, emoji=False)
            self._console.file.flush()

    def banner(self, summary: str) -> None:
        """Print the startup line echoing the active configuration."""
        self._print_line(f"Config: {summary}")

    def report(self, name: str, values: Sequence[int]) -> None:
        self._print_line(format_report_line(name, self._labels, values))
