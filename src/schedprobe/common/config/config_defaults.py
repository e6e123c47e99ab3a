# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass

from schedprobe.common.enums import ProbeLogLevel
from schedprobe.common.models import DEFAULT_PERCENTILES


@dataclass(frozen=True)
class ProbeDefaults:
    REPORT_INTERVAL = "1s"
    SLEEP_INTERVAL = "15ms"
    LAG_PROBE_INTERVAL = "1ms"
    PERCENTILES = DEFAULT_PERCENTILES
    ENV_PREFIX = "SCHEDPROBE_"


@dataclass(frozen=True)
class LoggingDefaults:
    LOG_LEVEL = ProbeLogLevel.INFO
    VERBOSE = False
