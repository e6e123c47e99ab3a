# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logger wrapper with lazily evaluated messages and a TRACE level.

Messages may be passed as zero-argument callables so that expensive f-strings
are only built when the level is enabled::

    _logger = ProbeLogger(__name__)
    _logger.debug(lambda: f"Window closed with {len(samples)} samples")
"""

import logging
from collections.abc import Callable

_TRACE = 5
_DEBUG = logging.DEBUG

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[..., str]


class ProbeLogger:
    """Thin wrapper around :class:`logging.Logger` that accepts lazy messages."""

    def __init__(self, logger_name: str | None = None, **kwargs) -> None:
        self._logger = logging.getLogger(logger_name)

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.isEnabledFor(_TRACE)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(_DEBUG)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def log(self, level: int, message: MessageT, *args, **kwargs) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(message):
            message = message()
        # stacklevel=3 reports the caller of trace()/debug()/..., not this wrapper
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, message, *args, **kwargs)

    def trace(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_TRACE, message, *args, **kwargs)

    def debug(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_DEBUG, message, *args, **kwargs)

    def info(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.CRITICAL, message, *args, **kwargs)


class ProbeLoggerMixin:
    """Mixin giving a class ``self.debug(...)``-style logging under its class name."""

    def __init__(self, logger_name: str | None = None, **kwargs) -> None:
        self.logger = ProbeLogger(logger_name or self.__class__.__name__)
        super().__init__(**kwargs)

    @property
    def is_trace_enabled(self) -> bool:
        return self.logger.is_trace_enabled

    @property
    def is_debug_enabled(self) -> bool:
        return self.logger.is_debug_enabled

    def trace(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.trace(message, *args, **kwargs)

    def debug(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.exception(message, *args, **kwargs)
