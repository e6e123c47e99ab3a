# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import gc
import os
import sys
import threading
import time
from typing import Any


def collect_runtime_stats() -> dict[str, Any]:
    """Snapshot interpreter statistics into a plain, JSON-serializable dict."""
    return {
        "pid": os.getpid(),
        "timestamp_ns": time.time_ns(),
        "process_time_ns": time.process_time_ns(),
        "thread_count": threading.active_count(),
        "allocated_blocks": sys.getallocatedblocks(),
        "gc_counts": list(gc.get_count()),
        "gc_thresholds": list(gc.get_threshold()),
        "gc_generations": gc.get_stats(),
        "switch_interval_sec": sys.getswitchinterval(),
        "recursion_limit": sys.getrecursionlimit(),
    }


def available_parallelism() -> int:
    """Number of CPUs this process may run on."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1
