# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import threading

import pytest

from schedprobe.common.models import PercentileSpec
from schedprobe.reporting.reporter import Reporter, format_report_line

LABELS = ["min", "p50", "p99", "max"]


class TestFormatReportLine:
    def test_layout(self):
        line = format_report_line(
            "timer delay", LABELS, [1_234, 1_234_567, 15_000_000, 1_234_567_891]
        )
        assert line == (
            "         timer delay: "
            "min 1.23µs     p50 1.23ms     p99 15ms       max 1.23s     "
        )

    def test_name_is_right_aligned_to_twenty_columns(self):
        line = format_report_line("/sched/latencies", ["max"], [0])
        assert line.index(":") == 20
        assert line.startswith("    /sched/latencies: max 0s")

    def test_values_are_truncated_before_formatting(self):
        line = format_report_line("x", ["max"], [1_999_999_999])
        assert "max 1.99s" in line

    def test_negative_values_are_printed_as_is(self):
        line = format_report_line("x", ["min"], [-123_456])
        assert "min -123.456µs" in line

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="Expected 4 percentile values"):
            format_report_line("x", LABELS, [1, 2])


class TestReporter:
    def test_banner(self, reporter, output):
        reporter.banner("{report_interval: 1s}")
        assert output.getvalue() == "Config: {report_interval: 1s}\n"

    def test_report_uses_spec_labels(self, console, output):
        reporter = Reporter(PercentileSpec(fractions=(0.5, 0.999)), console=console)
        reporter.report("time.sleep delay", [1_000, 2_000])
        line = output.getvalue().rstrip("\n")
        assert line.lstrip().startswith("time.sleep delay: p50 1µs")
        assert "p99.9 2µs" in line

    def test_markup_is_not_interpreted(self, reporter, output):
        reporter.banner("[bold]not markup[/bold]")
        assert "[bold]not markup[/bold]" in output.getvalue()

    def test_concurrent_reports_stay_whole(self, reporter, output):
        def report_many(name: str):
            for _ in range(50):
                reporter.report(name, [1, 2, 3, 4])

        threads = [
            threading.Thread(target=report_many, args=(f"probe-{i}",)) for i in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = output.getvalue().splitlines()
        assert len(lines) == 200
        assert all(line.lstrip().startswith("probe-") for line in lines)
        assert all(line.rstrip().endswith("max 4ns") for line in lines)
