# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for schedprobe."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from cyclopts import App

from schedprobe.cli_utils import exit_on_error
from schedprobe.common.config import ProbeConfig

app = App(name="schedprobe", help="Measure runtime scheduling latency under load")


@app.default
def run(config: ProbeConfig | None = None) -> None:
    """Run the sleep, timer and scheduler latency probes until interrupted.

    Args:
        config: Probe configuration
    """
    with exit_on_error(title="Error Running schedprobe"):
        from schedprobe.cli_runner import run_probe

        run_probe(config or ProbeConfig())
