# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Event loop scheduling-latency instrumentation.

Every ``probe_interval`` the monitor enqueues a callback with ``call_soon`` and
records how long it waited in the loop's ready queue before running. That
wait, from becoming runnable to actually executing, is the loop's scheduling
latency; it grows whenever other callbacks or GIL-holding threads keep the
loop thread from getting back to its ready queue.

Observations go into the process-wide ``/sched/latencies:seconds`` histogram.
"""

import asyncio
import time

from schedprobe.common.constants import SCHED_LATENCIES_METRIC
from schedprobe.common.probe_logger import ProbeLoggerMixin
from schedprobe.runtime.histogram import CumulativeHistogram, get_histogram


class EventLoopLagMonitor(ProbeLoggerMixin):
    """
    Measures ready-queue wait on one event loop.

    Two-state model:
        - **Waiting**: a call_later handle is pending until the next probe.
        - **Enqueued**: a call_soon handle carries the enqueue timestamp.

    Thread Safety: start()/stop() must be called from the event loop thread.
    """

    def __init__(
        self,
        probe_interval_sec: float,
        histogram: CumulativeHistogram | None = None,
        **kwargs,
    ) -> None:
        """
        Args:
            probe_interval_sec: Pause between probes. Must be positive.
            histogram: Destination histogram. Defaults to the process-wide
                scheduling-latency histogram.
        """
        if probe_interval_sec <= 0:
            raise ValueError(
                f"Lag probe interval must be positive, got {probe_interval_sec}"
            )
        super().__init__(**kwargs)
        self._interval = probe_interval_sec
        self._histogram = histogram or get_histogram(SCHED_LATENCIES_METRIC)
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.Handle | asyncio.TimerHandle | None = None
        self.probe_count = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Begin probing. Starting a running monitor is a no-op."""
        if self.running:
            return
        self._loop = loop or asyncio.get_running_loop()
        self._handle = self._loop.call_later(self._interval, self._enqueue)
        self.debug(lambda: f"Probing event loop latency every {self._interval}s")

    def _enqueue(self) -> None:
        self._handle = self._loop.call_soon(self._record, time.perf_counter_ns())

    def _record(self, enqueued_ns: int) -> None:
        self._histogram.record_ns(time.perf_counter_ns() - enqueued_ns)
        self.probe_count += 1
        self._handle = self._loop.call_later(self._interval, self._enqueue)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            self.debug(lambda: f"Stopped after {self.probe_count} probes")
