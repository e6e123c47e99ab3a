# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from schedprobe.common.models.base_models import ProbeBaseModel
from schedprobe.common.models.histogram_snapshot import HistogramSnapshot
from schedprobe.common.models.percentile_spec import (
    DEFAULT_PERCENTILES,
    PercentileSpec,
    parse_percentiles,
    percentile_label,
)

__all__ = [
    "DEFAULT_PERCENTILES",
    "HistogramSnapshot",
    "PercentileSpec",
    "ProbeBaseModel",
    "parse_percentiles",
    "percentile_label",
]
