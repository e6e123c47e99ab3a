# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for testing schedprobe.

This file contains fixtures that are automatically discovered by pytest
and made available to test functions in the same directory and subdirectories.
"""

import logging
import os
import threading
from collections.abc import Callable
from io import StringIO

import pytest
from rich.console import Console

from schedprobe.common.config import ProbeConfig
from schedprobe.common.models import PercentileSpec
from schedprobe.reporting.reporter import Reporter
from schedprobe.runtime import histogram as histogram_module


@pytest.fixture(autouse=True)
def isolated_histogram_registry(monkeypatch):
    """Give every test its own runtime metric registry."""
    monkeypatch.setattr(histogram_module, "_histograms", {})
    yield


@pytest.fixture(autouse=True)
def clean_probe_env(monkeypatch):
    """Drop SCHEDPROBE_* variables inherited from the outer environment."""
    for key in list(os.environ):
        if key.upper().startswith("SCHEDPROBE_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def make_config() -> Callable[..., ProbeConfig]:
    """Factory for ProbeConfig with fast, test-friendly defaults."""

    def _make(**overrides) -> ProbeConfig:
        values = {
            "report_interval": "50ms",
            "sleep_interval": "1ms",
            "lag_probe_interval": "1ms",
            "workers": 0,
        }
        values.update(overrides)
        return ProbeConfig(**values)

    return _make


@pytest.fixture
def default_percentiles() -> PercentileSpec:
    return PercentileSpec()


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def console(output: StringIO) -> Console:
    """Plain console writing into an in-memory buffer."""
    return Console(
        file=output,
        width=200,
        color_system=None,
        force_terminal=False,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )


@pytest.fixture
def reporter(default_percentiles: PercentileSpec, console: Console) -> Reporter:
    return Reporter(default_percentiles, console=console)


@pytest.fixture
def stop_event() -> threading.Event:
    return threading.Event()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
