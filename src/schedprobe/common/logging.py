# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console logging for schedprobe diagnostics.

Report lines are the tool's output and go to stdout. Everything emitted
through :mod:`logging` goes to stderr instead, rendered as::

    HH:MM:SS.mmm LEVEL    message (logger_name:lineno)

so diagnostics can be silenced or redirected without touching the reports.

Usage::

    from schedprobe.common.logging import setup_logging

    setup_logging(config)
"""

import logging
from datetime import datetime

from rich.console import Console, ConsoleRenderable, Group
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from schedprobe.common.config import ProbeConfig
from schedprobe.common.probe_logger import _TRACE, ProbeLogger

_logger = ProbeLogger(__name__)

MAX_CONSOLE_MESSAGE_LENGTH = 2000


class LogHighlighter(RegexHighlighter):
    """Highlights durations, metric names, numbers and key=value pairs in log messages."""

    base_style = "repr."
    highlights = [
        r"(?P<number>(?<![.\w])-?\d+\.?\d*(?:ns|us|µs|ms|s|m|h)?\b)",
        r"(?P<path>(?<![\w.])(?:/[\w._-]+)+(?::\w+)?)",
        r"(?P<str>\"[^\"]*\"|'[^']*'|`[^`]*`)",
        r"\b(?P<bool_true>True)\b|\b(?P<bool_false>False)\b|\b(?P<none>None)\b",
        r"\b(?P<attrib_name>\w+)=(?P<attrib_value>[^\s,=\[\](){}]+)?",
    ]


class CustomRichHandler(RichHandler):
    """Rich logging handler with a compact, fixed-width prefix.

    Example Output::

        12:26:52.092 DEBUG    Sleep probe started with a 0.015s interval (SleepDelayProbe:96)
        12:26:53.104 DEBUG    Ticker dropped 1 ticks (SchedLatencyProbe:62)

    Attributes:
        LOG_LEVEL_STYLES: Mapping of log level names to Rich style strings.
        highlighter: LogHighlighter instance for syntax highlighting messages.
    """

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.highlighter = LogHighlighter()

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        """Render a log record as ``time level message (logger:lineno)``."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = Text(record.getMessage()[:MAX_CONSOLE_MESSAGE_LENGTH])
        self.highlighter.highlight(message)

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            message,
            Text(f" ({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record, appending a Rich traceback when exception info is present."""
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable)


def _resolve_level(config: ProbeConfig) -> int:
    level_name = str(config.log_level).upper()
    if level_name == "TRACE":
        return _TRACE
    return logging.getLevelName(level_name)


def setup_logging(config: ProbeConfig, console: Console | None = None) -> CustomRichHandler:
    """Route the root logger to a rich handler on stderr at the configured level.

    Existing root handlers are removed so repeated setup does not duplicate output.
    """
    level = _resolve_level(config)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    _logger.debug(lambda: f"Logging initialized with level: {logging.getLevelName(level)}")
    return rich_handler
