# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import threading

from schedprobe.common.config import ProbeConfig
from schedprobe.common.constants import SCHED_LATENCIES_METRIC
from schedprobe.common.probe_logger import ProbeLoggerMixin
from schedprobe.metrics.percentiles import histogram_percentiles
from schedprobe.reporting.reporter import Reporter
from schedprobe.runtime.histogram import get_histogram, read_histogram
from schedprobe.runtime.timer import Ticker


class SchedLatencyProbe(ProbeLoggerMixin):
    """Reports the scheduling latency distribution observed in each interval.

    Keeps two snapshot buffers of the cumulative histogram. On every tick the
    histogram is read into ``current``, diffed against ``previous``, and the
    buffers trade roles so the next tick diffs against this read.
    """

    REPORT_NAME = "/sched/latencies"

    def __init__(
        self,
        config: ProbeConfig,
        reporter: Reporter,
        stop_event: threading.Event,
        metric_name: str = SCHED_LATENCIES_METRIC,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._report_interval_sec = config.report_interval_sec
        self._percentiles = config.percentile_spec
        self._reporter = reporter
        self._stop_event = stop_event
        self._metric_name = metric_name
        self.windows_reported = 0

    async def run(self) -> None:
        """Tick, diff and report until the stop event is set or cancelled."""
        histogram = get_histogram(self._metric_name)
        previous = histogram.new_snapshot()
        current = histogram.new_snapshot()
        read_histogram(self._metric_name, previous)

        ticker = Ticker(self._report_interval_sec)
        self.debug(lambda: f"Reading {self._metric_name} every {self._report_interval_sec}s")
        try:
            while not self._stop_event.is_set():
                await ticker.channel.get()
                read_histogram(self._metric_name, current)

                values = histogram_percentiles(current, previous, self._percentiles)
                self._reporter.report(self.REPORT_NAME, values)
                self.windows_reported += 1
                self.trace(
                    lambda: f"Tick {self.windows_reported}: {current.total - previous.total} new observations"
                )

                previous, current = current, previous
        finally:
            ticker.stop()
            if ticker.dropped_ticks:
                self.debug(lambda: f"Ticker dropped {ticker.dropped_ticks} ticks")
