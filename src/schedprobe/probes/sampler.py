# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Duration samplers timing a suspension against its requested length.

Each sampler records ``(stop - start) - interval`` for every timed wait and,
once a sample's stop timestamp passes the end of the open reporting window,
prints nearest-rank percentiles of the window and starts a new one.

- SleepDelayProbe blocks an OS thread in ``time.sleep``.
- TimerDelayProbe waits on one reusable event loop timer.
"""

import threading
import time
from typing import ClassVar

from schedprobe.common.config import ProbeConfig
from schedprobe.common.constants import NANOS_PER_SECOND
from schedprobe.common.probe_logger import ProbeLoggerMixin
from schedprobe.metrics.percentiles import sample_percentiles
from schedprobe.reporting.reporter import Reporter
from schedprobe.runtime.timer import ResettableTimer

__all__ = ["DurationSampler", "SleepDelayProbe", "TimerDelayProbe"]


class DurationSampler(ProbeLoggerMixin):
    """Window bookkeeping shared by the sleep and timer probes.

    ClassVars to override:
        REPORT_NAME: Name printed at the start of each report line.
    """

    REPORT_NAME: ClassVar[str]

    def __init__(
        self,
        config: ProbeConfig,
        reporter: Reporter,
        stop_event: threading.Event,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._interval_ns: int = config.sleep_interval
        self._report_interval_ns: int = config.report_interval
        self._percentiles = config.percentile_spec
        self._reporter = reporter
        self._stop_event = stop_event
        self._samples: list[int] = []
        self._report_after_ns = 0
        self.windows_reported = 0

    @property
    def interval_sec(self) -> float:
        return self._interval_ns / NANOS_PER_SECOND

    @property
    def pending_samples(self) -> int:
        return len(self._samples)

    def open_window(self) -> None:
        self._report_after_ns = time.perf_counter_ns() + self._report_interval_ns

    def record(self, start_ns: int, stop_ns: int) -> bool:
        """Add one sample and close the window if ``stop_ns`` is past its end.

        Returns:
            True if a report was emitted.
        """
        self._samples.append((stop_ns - start_ns) - self._interval_ns)
        if stop_ns <= self._report_after_ns:
            return False
        self._close_window()
        return True

    def _close_window(self) -> None:
        sample_count = len(self._samples)
        values = sample_percentiles(self._samples, self._percentiles)
        self._reporter.report(self.REPORT_NAME, values)
        self._samples.clear()
        self.windows_reported += 1
        self.trace(lambda: f"Window {self.windows_reported} closed with {sample_count} samples")
        # The next window starts now, not at the previous deadline
        self.open_window()


class SleepDelayProbe(DurationSampler):
    """Measures how late ``time.sleep`` returns. Runs on its own thread."""

    REPORT_NAME = "time.sleep delay"

    def run(self) -> None:
        """Sleep, measure and report until the stop event is set."""
        interval_sec = self.interval_sec
        self.debug(lambda: f"Sleep probe started with a {interval_sec}s interval")
        self.open_window()
        while not self._stop_event.is_set():
            start_ns = time.perf_counter_ns()
            time.sleep(interval_sec)
            stop_ns = time.perf_counter_ns()
            self.record(start_ns, stop_ns)
        self.debug(lambda: f"Sleep probe stopped after {self.windows_reported} windows")


class TimerDelayProbe(DurationSampler):
    """Measures how late a reused event loop timer fires.

    The timer is created once and re-armed for every sample, so its allocation
    never shows up in the measurement.
    """

    REPORT_NAME = "timer delay"

    async def run(self) -> None:
        """Arm, wait, measure and report until the stop event is set or cancelled."""
        timer = ResettableTimer(1.0)
        if not timer.stop():
            timer.channel.drain()

        interval_sec = self.interval_sec
        self.debug(lambda: f"Timer probe started with a {interval_sec}s interval")
        self.open_window()
        try:
            while not self._stop_event.is_set():
                start_ns = time.perf_counter_ns()
                timer.reset(interval_sec)
                stop_ns = await timer.channel.get()
                self.record(start_ns, stop_ns)
        finally:
            timer.stop()
            self.debug(lambda: f"Timer probe stopped after {self.windows_reported} windows")
