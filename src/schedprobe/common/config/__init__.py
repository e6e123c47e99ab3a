# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from schedprobe.common.config.config_defaults import LoggingDefaults, ProbeDefaults
from schedprobe.common.config.probe_config import ProbeConfig

__all__ = ["LoggingDefaults", "ProbeConfig", "ProbeDefaults"]
