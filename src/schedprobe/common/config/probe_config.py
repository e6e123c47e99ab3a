# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Probe configuration with command line and environment variable support."""

from typing import Annotated, Any

from cyclopts import Parameter
from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from schedprobe.common.config.config_defaults import LoggingDefaults, ProbeDefaults
from schedprobe.common.constants import NANOS_PER_SECOND
from schedprobe.common.duration import coerce_duration, format_duration
from schedprobe.common.enums import ProbeLogLevel
from schedprobe.common.models import PercentileSpec, parse_percentiles
from schedprobe.runtime.stats import available_parallelism


class ProbeConfig(BaseSettings):
    """Configuration shared by every measurement loop.

    Durations are stored as integer nanoseconds. On the command line and in
    ``SCHEDPROBE_*`` environment variables they may be written as ``15ms``,
    ``1.5s`` or as a bare number of seconds.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix=ProbeDefaults.ENV_PREFIX,
    )

    @model_validator(mode="after")
    def validate_intervals(self) -> Self:
        if self.report_interval <= 0:
            raise ValueError(
                f"--report-interval must be positive, got {format_duration(self.report_interval)}"
            )
        if self.sleep_interval < 0:
            raise ValueError(
                f"--sleep-interval cannot be negative, got {format_duration(self.sleep_interval)}"
            )
        if self.lag_probe_interval <= 0:
            raise ValueError(
                f"--lag-probe-interval must be positive, got {format_duration(self.lag_probe_interval)}"
            )
        return self

    @model_validator(mode="after")
    def validate_log_level_from_verbose_flag(self) -> Self:
        """Set log level based on the verbose flag."""
        if self.verbose:
            self.log_level = ProbeLogLevel.DEBUG
        return self

    report_interval: Annotated[
        Any,
        Field(
            description="How often each measurement loop summarizes and prints its window, e.g. `1s` or `500ms`.",
        ),
        BeforeValidator(coerce_duration),
        Parameter(name="--report-interval"),
    ] = ProbeDefaults.REPORT_INTERVAL

    sleep_interval: Annotated[
        Any,
        Field(
            description="Requested duration of each timed sleep and timer wait. The reported delay is the overshoot beyond it.",
        ),
        BeforeValidator(coerce_duration),
        Parameter(name="--sleep-interval"),
    ] = ProbeDefaults.SLEEP_INTERVAL

    lag_probe_interval: Annotated[
        Any,
        Field(
            description="Pause between event loop ready-queue probes feeding the scheduling latency histogram.",
        ),
        BeforeValidator(coerce_duration),
        Parameter(name="--lag-probe-interval"),
    ] = ProbeDefaults.LAG_PROBE_INTERVAL

    workers: Annotated[
        int,
        Field(
            ge=0,
            default_factory=available_parallelism,
            description="Number of CPU-bound load generator threads. Defaults to the number of CPUs available to the process.",
        ),
        Parameter(name=("--workers", "-w")),
    ]

    percentiles: Annotated[
        Any,
        Field(
            description="Percentile fractions to report, in ascending order. 0 is reported as `min` and 1 as `max`.",
        ),
        BeforeValidator(parse_percentiles),
        Parameter(name="--percentiles", consume_multiple=True),
    ] = ProbeDefaults.PERCENTILES

    log_level: Annotated[
        ProbeLogLevel,
        Field(description="Logging verbosity for diagnostics written to stderr."),
        Parameter(name="--log-level"),
    ] = LoggingDefaults.LOG_LEVEL

    verbose: Annotated[
        bool,
        Field(description="Equivalent to `--log-level DEBUG`."),
        Parameter(name=("--verbose", "-v")),
    ] = LoggingDefaults.VERBOSE

    @property
    def percentile_spec(self) -> PercentileSpec:
        return self.percentiles

    @property
    def report_interval_sec(self) -> float:
        return self.report_interval / NANOS_PER_SECOND

    @property
    def sleep_interval_sec(self) -> float:
        return self.sleep_interval / NANOS_PER_SECOND

    @property
    def lag_probe_interval_sec(self) -> float:
        return self.lag_probe_interval / NANOS_PER_SECOND

    def summary(self) -> str:
        """One-line rendering of the active settings for the startup banner."""
        fractions = ", ".join(f"{p:g}" for p in self.percentile_spec.fractions)
        return (
            f"{{report_interval: {format_duration(self.report_interval)}, "
            f"sleep_interval: {format_duration(self.sleep_interval)}, "
            f"lag_probe_interval: {format_duration(self.lag_probe_interval)}, "
            f"workers: {self.workers}, "
            f"percentiles: [{fractions}]}}"
        )
