# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from pydantic import ValidationError

from schedprobe.common.exceptions import ConfigurationError
from schedprobe.common.models import (
    DEFAULT_PERCENTILES,
    PercentileSpec,
    parse_percentiles,
    percentile_label,
)


class TestPercentileSpec:
    def test_defaults(self):
        spec = PercentileSpec()
        assert spec.fractions == DEFAULT_PERCENTILES == (0.0, 0.5, 0.99, 1.0)
        assert spec.labels == ["min", "p50", "p99", "max"]

    def test_is_frozen(self):
        spec = PercentileSpec()
        with pytest.raises(ValidationError):
            spec.fractions = (0.5,)

    @pytest.mark.parametrize(
        "fractions",
        [
            (),
            (-0.1, 0.5),
            (0.5, 1.1),
            (0.5, 0.5),
            (0.9, 0.5),
        ],
    )  # fmt: skip
    def test_rejects_invalid_fractions(self, fractions):
        with pytest.raises(ValidationError):
            PercentileSpec(fractions=fractions)


class TestPercentileLabel:
    @pytest.mark.parametrize(
        "fraction,expected",
        [
            (0.0, "min"),
            (1.0, "max"),
            (0.5, "p50"),
            (0.99, "p99"),
            (0.999, "p99.9"),
            (0.25, "p25"),
            (0.001, "p0.1"),
        ],
    )  # fmt: skip
    def test_label(self, fraction: float, expected: str):
        assert percentile_label(fraction) == expected


class TestParsePercentiles:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0,0.5,0.99,1", (0.0, 0.5, 0.99, 1.0)),
            ("[0, 0.5, 0.99, 1]", (0.0, 0.5, 0.99, 1.0)),
            ("0.5 0.9", (0.5, 0.9)),
            (["0", "0.5", "1"], (0.0, 0.5, 1.0)),
            (["0,0.5", "1"], (0.0, 0.5, 1.0)),
            ((0.25, 0.75), (0.25, 0.75)),
            ([0, 1], (0.0, 1.0)),
        ],
    )  # fmt: skip
    def test_accepts_cli_env_and_sequence_forms(self, value, expected):
        assert parse_percentiles(value).fractions == expected

    def test_passes_spec_through(self):
        spec = PercentileSpec(fractions=(0.5,))
        assert parse_percentiles(spec) is spec

    @pytest.mark.parametrize(
        "value",
        [
            "0,half,1",
            "1,0",
            "0,2",
            "",
            42,
        ],
    )  # fmt: skip
    def test_rejects_invalid_values(self, value):
        with pytest.raises(ConfigurationError):
            parse_percentiles(value)
