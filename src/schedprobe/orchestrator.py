# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Starts every measurement loop and the load generator, then waits.

Concurrency layout:
    - event loop (caller's thread): timer probe task, scheduler latency probe
      task and the lag monitor feeding the scheduling latency histogram.
    - one OS thread: the sleep probe.
    - N OS threads: load generator workers.

All loops share one ``threading.Event`` that they poll at their suspension
points. ``stop()`` sets it from any thread; without it ``run()`` never returns.
"""

import asyncio
import functools
import threading
from collections.abc import Callable

from schedprobe.common.config import ProbeConfig
from schedprobe.common.probe_logger import ProbeLoggerMixin
from schedprobe.probes.load import LoadGenerator
from schedprobe.probes.sampler import SleepDelayProbe, TimerDelayProbe
from schedprobe.probes.sched_latency import SchedLatencyProbe
from schedprobe.reporting.reporter import Reporter
from schedprobe.runtime.lag_monitor import EventLoopLagMonitor

THREAD_JOIN_GRACE_SEC = 1.0


class ProbeOrchestrator(ProbeLoggerMixin):
    """Owns the lifecycle of all probes for one run."""

    def __init__(
        self, config: ProbeConfig, reporter: Reporter | None = None, **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.reporter = reporter or Reporter(config.percentile_spec)
        self.stop_event = threading.Event()

        self.sleep_probe = SleepDelayProbe(config, self.reporter, self.stop_event)
        self.timer_probe = TimerDelayProbe(config, self.reporter, self.stop_event)
        self.sched_probe = SchedLatencyProbe(config, self.reporter, self.stop_event)
        self.load_generator = LoadGenerator(config.workers, self.stop_event)
        self.lag_monitor = EventLoopLagMonitor(config.lag_probe_interval_sec)

        self._loop: asyncio.AbstractEventLoop | None = None
        self._wakeup: asyncio.Event | None = None
        self._threads: list[threading.Thread] = []
        self._tasks: list[asyncio.Task] = []
        self._failure: BaseException | None = None

    @property
    def threads(self) -> list[threading.Thread]:
        return list(self._threads)

    async def run(self) -> None:
        """Launch all loops and block until :meth:`stop` is called.

        Raises:
            Exception: The first error raised by any probe thread or task.
        """
        self._wakeup = asyncio.Event()
        self._loop = asyncio.get_running_loop()
        if self.stop_event.is_set():
            self._wakeup.set()

        self.reporter.banner(self.config.summary())

        self.lag_monitor.start(self._loop)
        for index in range(self.load_generator.worker_count):
            self._start_thread(
                functools.partial(self.load_generator.run_worker, index),
                f"load-worker-{index}",
            )
        self._start_thread(self.sleep_probe.run, "sleep-delay-probe")
        self._start_task(self.timer_probe.run(), "timer-delay-probe")
        self._start_task(self.sched_probe.run(), "sched-latency-probe")
        self.debug(
            lambda: f"Started {len(self._tasks)} tasks and {len(self._threads)} threads"
        )

        try:
            await self._wakeup.wait()
        finally:
            await self._shutdown()

        if self._failure is not None:
            raise self._failure

    def stop(self) -> None:
        """Signal every loop to stop. Safe to call from any thread."""
        self.stop_event.set()
        loop = self._loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(self._wake)

    def _wake(self) -> None:
        if self._wakeup is not None:
            self._wakeup.set()

    def _fail(self, error: BaseException) -> None:
        if self._failure is None:
            self._failure = error
        self.stop()

    def _start_thread(self, target: Callable[[], None], name: str) -> None:
        def guarded() -> None:
            try:
                target()
            except Exception as e:
                self.exception(f"{name} failed: {e!r}")
                self._fail(e)

        thread = threading.Thread(target=guarded, name=name, daemon=True)
        thread.start()
        self._threads.append(thread)

    def _start_task(self, coro, name: str) -> None:
        task = self._loop.create_task(coro, name=name)
        task.add_done_callback(self._task_done)
        self._tasks.append(task)

    def _task_done(self, task: asyncio.Task) -> None:
        # Must check cancelled() first - calling exception() on a cancelled task raises CancelledError
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.error(f"{task.get_name()} failed: {error!r}", exc_info=error)
            self._fail(error)

    async def _shutdown(self) -> None:
        self.stop_event.set()
        self.lag_monitor.stop()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        await asyncio.to_thread(self._join_threads)
        self.debug("All probes stopped")

    def _join_threads(self) -> None:
        timeout = self.config.sleep_interval_sec + THREAD_JOIN_GRACE_SEC
        for thread in self._threads:
            thread.join(timeout)
            if thread.is_alive():
                self.warning(f"Thread {thread.name} did not stop within {timeout:.2f}s")
