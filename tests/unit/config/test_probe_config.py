# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from pydantic import ValidationError

from schedprobe.common.config import LoggingDefaults, ProbeConfig, ProbeDefaults
from schedprobe.common.constants import NANOS_PER_MILLIS, NANOS_PER_SECOND
from schedprobe.common.enums import ProbeLogLevel
from schedprobe.common.models import DEFAULT_PERCENTILES, PercentileSpec
from schedprobe.runtime import stats

MS = NANOS_PER_MILLIS


class TestProbeConfigDefaults:
    def test_defaults(self):
        config = ProbeConfig()

        assert config.report_interval == NANOS_PER_SECOND
        assert config.sleep_interval == 15 * MS
        assert config.lag_probe_interval == 1 * MS
        assert config.percentile_spec.fractions == DEFAULT_PERCENTILES
        assert config.log_level == LoggingDefaults.LOG_LEVEL
        assert config.verbose is False

    def test_default_workers_match_available_parallelism(self):
        assert ProbeConfig().workers == stats.available_parallelism()

    def test_second_properties(self):
        config = ProbeConfig()
        assert config.report_interval_sec == pytest.approx(1.0)
        assert config.sleep_interval_sec == pytest.approx(0.015)
        assert config.lag_probe_interval_sec == pytest.approx(0.001)

    def test_summary(self):
        config = ProbeConfig(workers=4)
        assert config.summary() == (
            "{report_interval: 1s, sleep_interval: 15ms, lag_probe_interval: 1ms, "
            "workers: 4, percentiles: [0, 0.5, 0.99, 1]}"
        )

    def test_env_prefix(self):
        assert ProbeDefaults.ENV_PREFIX == "SCHEDPROBE_"


class TestProbeConfigValues:
    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("report_interval", "500ms", 500 * MS),
            ("report_interval", 2, 2 * NANOS_PER_SECOND),
            ("sleep_interval", "0", 0),
            ("sleep_interval", "250us", 250_000),
            ("lag_probe_interval", "1.5ms", 1_500_000),
        ],
    )  # fmt: skip
    def test_duration_fields_accept_strings_and_seconds(self, field, value, expected):
        assert getattr(ProbeConfig(**{field: value}), field) == expected

    @pytest.mark.parametrize(
        "overrides",
        [
            {"report_interval": "0"},
            {"report_interval": "-1s"},
            {"sleep_interval": "-1ms"},
            {"lag_probe_interval": "0"},
            {"report_interval": "soon"},
            {"workers": -1},
            {"percentiles": "0.5,0.1"},
            {"percentiles": "0,1.5"},
            {"log_level": "LOUD"},
        ],
    )  # fmt: skip
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValidationError):
            ProbeConfig(**overrides)

    def test_percentiles_from_string(self):
        config = ProbeConfig(percentiles="0, 0.9, 0.999, 1")
        assert config.percentile_spec == PercentileSpec(fractions=(0.0, 0.9, 0.999, 1.0))
        assert "percentiles: [0, 0.9, 0.999, 1]" in config.summary()

    def test_percentiles_from_list(self):
        config = ProbeConfig(percentiles=["0.5", "1"])
        assert config.percentile_spec.fractions == (0.5, 1.0)

    def test_log_level_is_case_insensitive(self):
        assert ProbeConfig(log_level="trace").log_level == ProbeLogLevel.TRACE

    def test_verbose_sets_debug(self):
        config = ProbeConfig(verbose=True, log_level="WARNING")
        assert config.log_level == ProbeLogLevel.DEBUG

    def test_zero_workers_allowed(self):
        assert ProbeConfig(workers=0).workers == 0


class TestProbeConfigEnvironment:
    def test_reads_prefixed_env_vars(self, monkeypatch):
        monkeypatch.setenv("SCHEDPROBE_REPORT_INTERVAL", "250ms")
        monkeypatch.setenv("SCHEDPROBE_SLEEP_INTERVAL", "5ms")
        monkeypatch.setenv("SCHEDPROBE_WORKERS", "3")
        monkeypatch.setenv("SCHEDPROBE_PERCENTILES", "0,0.5,1")

        config = ProbeConfig()

        assert config.report_interval == 250 * MS
        assert config.sleep_interval == 5 * MS
        assert config.workers == 3
        assert config.percentile_spec.fractions == (0.0, 0.5, 1.0)

    def test_env_var_names_are_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("schedprobe_log_level", "error")
        assert ProbeConfig().log_level == ProbeLogLevel.ERROR

    def test_explicit_value_beats_env(self, monkeypatch):
        monkeypatch.setenv("SCHEDPROBE_WORKERS", "3")
        assert ProbeConfig(workers=1).workers == 1

    def test_invalid_env_value_raises(self, monkeypatch):
        monkeypatch.setenv("SCHEDPROBE_REPORT_INTERVAL", "fast")
        with pytest.raises(ValidationError, match="Invalid duration"):
            ProbeConfig()
