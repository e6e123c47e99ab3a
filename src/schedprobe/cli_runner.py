# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
import contextlib
import signal

from schedprobe.common.config import ProbeConfig
from schedprobe.common.logging import setup_logging
from schedprobe.common.probe_logger import ProbeLogger
from schedprobe.orchestrator import ProbeOrchestrator

_logger = ProbeLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def _run_until_signalled(orchestrator: ProbeOrchestrator) -> None:
    loop = asyncio.get_running_loop()
    installed = []
    for sig in STOP_SIGNALS:
        # add_signal_handler is unavailable on Windows event loops
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, orchestrator.stop)
            installed.append(sig)
    try:
        await orchestrator.run()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def run_probe(config: ProbeConfig) -> None:
    """Configure logging and run every probe until interrupted."""
    setup_logging(config)
    orchestrator = ProbeOrchestrator(config)
    _logger.debug(lambda: f"Starting probes with config: {config.summary()}")
    try:
        asyncio.run(_run_until_signalled(orchestrator))
    except KeyboardInterrupt:
        orchestrator.stop()
        _logger.info("Interrupted, probes stopped")
