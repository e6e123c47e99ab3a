# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import os

import orjson

from schedprobe.runtime.stats import available_parallelism, collect_runtime_stats


class TestCollectRuntimeStats:
    def test_is_json_serializable(self):
        stats = collect_runtime_stats()
        decoded = orjson.loads(orjson.dumps(stats))
        assert decoded["pid"] == os.getpid()
        assert decoded["thread_count"] >= 1
        assert len(decoded["gc_counts"]) == 3


class TestAvailableParallelism:
    def test_is_positive(self):
        assert available_parallelism() >= 1

    def test_falls_back_to_cpu_count(self, monkeypatch):
        monkeypatch.delattr(os, "sched_getaffinity", raising=False)
        monkeypatch.setattr(os, "cpu_count", lambda: 3)
        assert available_parallelism() == 3

    def test_cpu_count_unknown(self, monkeypatch):
        monkeypatch.delattr(os, "sched_getaffinity", raising=False)
        monkeypatch.setattr(os, "cpu_count", lambda: None)
        assert available_parallelism() == 1
