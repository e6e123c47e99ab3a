# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Integer-nanosecond duration helpers.

Durations are plain ``int`` nanosecond counts throughout schedprobe, taken from
``time.perf_counter_ns()``. This module converts to and from that
representation and renders durations in the compact ``1.23ms`` / ``1m2.5s``
notation used on report lines and accepted on the command line.
"""

import math
import re
from decimal import Decimal, InvalidOperation

from schedprobe.common.constants import (
    MAX_DURATION_NS,
    MIN_DURATION_NS,
    NANOS_PER_HOUR,
    NANOS_PER_MICROS,
    NANOS_PER_MILLIS,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
)
from schedprobe.common.exceptions import ConfigurationError

_UNIT_NANOS = {
    "ns": 1,
    "us": NANOS_PER_MICROS,
    "µs": NANOS_PER_MICROS,  # U+00B5 micro sign
    "μs": NANOS_PER_MICROS,  # U+03BC greek mu
    "ms": NANOS_PER_MILLIS,
    "s": NANOS_PER_SECOND,
    "m": NANOS_PER_MINUTE,
    "h": NANOS_PER_HOUR,
}

_COMPONENT_PATTERN = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def clamp_duration(ns: int) -> int:
    """Clamp a nanosecond count into the signed 64-bit duration range."""
    return max(MIN_DURATION_NS, min(MAX_DURATION_NS, ns))


def seconds_to_duration(seconds: float) -> int:
    """Convert fractional seconds into a nanosecond duration, truncating toward zero.

    Infinite values saturate to the largest (or smallest) representable duration.
    """
    if math.isnan(seconds):
        raise ValueError("Cannot convert NaN seconds to a duration")
    if math.isinf(seconds):
        return MAX_DURATION_NS if seconds > 0 else MIN_DURATION_NS
    return clamp_duration(int(seconds * NANOS_PER_SECOND))


def duration_to_seconds(ns: int) -> float:
    return ns / NANOS_PER_SECOND


def truncate_to_multiple(ns: int, multiple: int) -> int:
    """Round ``ns`` toward zero to a multiple of ``multiple``."""
    if multiple <= 0:
        return ns
    truncated = abs(ns) // multiple * multiple
    return truncated if ns >= 0 else -truncated


def truncate(ns: int) -> int:
    """Coarsen a duration to a resolution appropriate to its magnitude.

    Above one second the value keeps 10ms steps, above one millisecond 10us
    steps, above one microsecond 10ns steps. Anything smaller, including every
    negative value, is returned unchanged.
    """
    if ns > NANOS_PER_SECOND:
        return truncate_to_multiple(ns, 10 * NANOS_PER_MILLIS)
    if ns > NANOS_PER_MILLIS:
        return truncate_to_multiple(ns, 10 * NANOS_PER_MICROS)
    if ns > NANOS_PER_MICROS:
        return truncate_to_multiple(ns, 10)
    return ns


def _split_fraction(value: int, precision: int) -> tuple[int, str]:
    """Split ``value`` into its integer part and a ``.ddd`` suffix without trailing zeros."""
    if precision == 0:
        return value, ""
    integer, fraction = divmod(value, 10**precision)
    digits = f"{fraction:0{precision}d}".rstrip("0")
    return integer, f".{digits}" if digits else ""


def format_duration(ns: int) -> str:
    """Render a duration the way Go's ``time.Duration`` prints.

    Examples:
        >>> format_duration(0)
        '0s'
        >>> format_duration(1_230_000)
        '1.23ms'
        >>> format_duration(62_500_000_000)
        '1m2.5s'
    """
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    magnitude = abs(ns)

    if magnitude < NANOS_PER_SECOND:
        if magnitude < NANOS_PER_MICROS:
            precision, unit = 0, "ns"
        elif magnitude < NANOS_PER_MILLIS:
            precision, unit = 3, "µs"
        else:
            precision, unit = 6, "ms"
        integer, fraction = _split_fraction(magnitude, precision)
        return f"{sign}{integer}{fraction}{unit}"

    total_seconds, fraction = _split_fraction(magnitude, 9)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)

    text = f"{seconds}{fraction}s"
    if total_minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return f"{sign}{text}"


def parse_duration(text: str) -> int:
    """Parse a duration string such as ``"15ms"``, ``"1.5s"`` or ``"1h2m"``.

    A bare ``"0"`` is accepted. Any other value needs a unit on every component.

    Raises:
        ConfigurationError: If the text is not a valid duration.
    """
    original = text
    text = text.strip()
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ConfigurationError(f"Invalid duration '{original}'")

    total = Decimal(0)
    position = 0
    for match in _COMPONENT_PATTERN.finditer(text):
        if match.start() != position:
            break
        try:
            total += Decimal(match.group(1)) * _UNIT_NANOS[match.group(2)]
        except InvalidOperation as e:
            raise ConfigurationError(f"Invalid duration '{original}'") from e
        position = match.end()

    if position != len(text):
        raise ConfigurationError(
            f"Invalid duration '{original}': expected a number followed by one of "
            f"{', '.join(_UNIT_NANOS)}"
        )
    return clamp_duration(sign * int(total))


def coerce_duration(value: object) -> int:
    """Turn a config value into nanoseconds.

    Strings are parsed with :func:`parse_duration`; bare numbers are seconds.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid duration {value!r}")
    if isinstance(value, str):
        return parse_duration(value)
    if isinstance(value, int | float):
        return seconds_to_duration(float(value))
    raise ConfigurationError(f"Invalid duration {value!r}")
