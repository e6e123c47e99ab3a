# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

NANOS_PER_MICROS = 1_000
NANOS_PER_MILLIS = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE

MAX_DURATION_NS = 2**63 - 1
"""Largest representable duration, matching a signed 64-bit nanosecond count."""
MIN_DURATION_NS = -(2**63)

SCHED_LATENCIES_METRIC = "/sched/latencies:seconds"
"""Runtime metric name of the event loop scheduling latency histogram."""

REPORT_NAME_WIDTH = 20
REPORT_VALUE_WIDTH = 10
