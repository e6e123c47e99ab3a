# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class ProbeBaseModel(BaseModel):
    """Base model for all schedprobe data models."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")
