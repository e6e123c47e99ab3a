# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Event loop timer primitives with one-slot signal channels.

Both primitives wrap asyncio's low-level scheduling (call_later, call_at) and
deliver the perf_counter_ns() timestamp at which they fired through a
:class:`SignalChannel`:

1. **ResettableTimer**: fires once per reset. Created once and reused, so each
   measurement exercises only the timer mechanism, not timer allocation.

2. **Ticker**: fires at a fixed rate. Deadlines advance by exactly one interval
   from the previous deadline; ticks that a slow receiver could not take are
   dropped rather than queued.

Example::

    timer = ResettableTimer(1.0)
    if not timer.stop():
        timer.channel.drain()

    timer.reset(0.015)
    fired_ns = await timer.channel.get()
"""

import asyncio
import time

__all__ = ["ResettableTimer", "SignalChannel", "Ticker"]


class SignalChannel:
    """Single-slot channel carrying fire timestamps.

    A send while the slot is full is dropped, so a receiver that falls behind
    sees the oldest undelivered fire time, never a backlog.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[int] = asyncio.Queue(maxsize=1)

    def send(self, timestamp_ns: int) -> bool:
        """Offer a timestamp. Returns False if the slot was already full."""
        try:
            self._queue.put_nowait(timestamp_ns)
        except asyncio.QueueFull:
            return False
        return True

    async def get(self) -> int:
        """Wait for the next timestamp."""
        return await self._queue.get()

    def drain(self) -> int | None:
        """Remove and return a pending timestamp without waiting, if any."""
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def empty(self) -> bool:
        return self._queue.empty()


class ResettableTimer:
    """
    One-shot timer that can be stopped and re-armed indefinitely.

    The timer starts armed with ``delay_sec``. ``stop()`` reports whether it
    prevented a pending fire; when it returns False the timer has already
    fired (or was never re-armed) and a timestamp may be waiting in the
    channel.

    Thread Safety: NOT thread-safe. Call from event loop thread only.
    """

    def __init__(
        self, delay_sec: float, loop: asyncio.AbstractEventLoop | None = None
    ) -> None:
        """
        Args:
            delay_sec: Initial delay before the first fire.
            loop: Event loop to use. If None, uses asyncio.get_running_loop().
        """
        self._loop: asyncio.AbstractEventLoop = loop or asyncio.get_running_loop()
        self.channel = SignalChannel()
        self._handle: asyncio.TimerHandle | None = None
        self._arm(delay_sec)

    @property
    def active(self) -> bool:
        """True while a fire is pending."""
        return self._handle is not None

    def _arm(self, delay_sec: float) -> None:
        self._handle = self._loop.call_later(max(delay_sec, 0.0), self._fire)

    def _fire(self) -> None:
        self._handle = None
        self.channel.send(time.perf_counter_ns())

    def stop(self) -> bool:
        """Prevent the pending fire.

        Returns:
            True if a pending fire was cancelled, False if the timer had already
            fired or been stopped.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def reset(self, delay_sec: float) -> bool:
        """Re-arm the timer to fire after ``delay_sec``.

        Returns:
            True if the timer was still pending when reset.
        """
        was_active = self.stop()
        self._arm(delay_sec)
        return was_active


class Ticker:
    """
    Fixed-rate ticker delivering fire timestamps on its channel.

    Deadlines are computed on loop.time() as ``start + k * interval``. If the
    loop wakes late past one or more deadlines, the missed ones are skipped.

    Thread Safety: NOT thread-safe. Call from event loop thread only.
    """

    def __init__(
        self, interval_sec: float, loop: asyncio.AbstractEventLoop | None = None
    ) -> None:
        """
        Args:
            interval_sec: Seconds between ticks. Must be positive.
            loop: Event loop to use. If None, uses asyncio.get_running_loop().

        Raises:
            ValueError: If interval_sec is not positive.
        """
        if interval_sec <= 0:
            raise ValueError(f"Ticker interval must be positive, got {interval_sec}")
        self._loop: asyncio.AbstractEventLoop = loop or asyncio.get_running_loop()
        self._interval = interval_sec
        self.channel = SignalChannel()
        self.dropped_ticks = 0
        self._deadline = self._loop.time() + interval_sec
        self._handle: asyncio.TimerHandle | None = self._loop.call_at(
            self._deadline, self._tick
        )

    def _tick(self) -> None:
        if not self.channel.send(time.perf_counter_ns()):
            self.dropped_ticks += 1

        now = self._loop.time()
        self._deadline += self._interval
        while self._deadline <= now:
            self._deadline += self._interval
            self.dropped_ticks += 1
        self._handle = self._loop.call_at(self._deadline, self._tick)

    def stop(self) -> None:
        """Stop delivering ticks. Pending timestamps stay in the channel."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
