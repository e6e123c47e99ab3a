# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import threading

import orjson

from schedprobe.common.probe_logger import ProbeLoggerMixin
from schedprobe.runtime.stats import collect_runtime_stats


class LoadGenerator(ProbeLoggerMixin):
    """CPU-bound busy loops that contend with the measurement loops.

    Each worker serializes the same runtime statistics snapshot over and over.
    The work holds the GIL and churns the allocator; workers never sleep, they
    only check the stop event between iterations.
    """

    def __init__(self, worker_count: int, stop_event: threading.Event, **kwargs) -> None:
        super().__init__(**kwargs)
        self.worker_count = worker_count
        self._stop_event = stop_event
        self._iterations = [0] * worker_count

    @property
    def total_iterations(self) -> int:
        return sum(self._iterations)

    def run_worker(self, index: int) -> None:
        """Busy loop for one worker thread."""
        stats = collect_runtime_stats()
        iterations = 0
        try:
            while not self._stop_event.is_set():
                orjson.dumps(stats)
                iterations += 1
        finally:
            self._iterations[index] = iterations
            self.trace(lambda: f"Load worker {index} ran {iterations} iterations")
