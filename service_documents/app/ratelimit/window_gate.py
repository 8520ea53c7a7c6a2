"""
Fixed-window rate gate for outbound API calls.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from shared.errors import AdmissionCancelled, InvalidConfiguration
from shared.logging import get_logger
from shared.metrics import MetricsCollector


@dataclass
class QuotaState:
    """Admission counter for the current window."""
    capacity: int
    remaining: int
    window_start: float


class FixedWindowGate:
    """Admit at most ``capacity`` calls per ``interval`` seconds.

    The counter is refilled to full by a background ticker once per
    interval, independent of call traffic. A full burst is allowed at the
    start of every window, so two bursts may land back to back across a
    window boundary. Callers that find the window exhausted wait on a
    condition until the next reset.
    """

    def __init__(self, capacity: int, interval: float, metrics: Optional[MetricsCollector] = None):
        self.logger = get_logger("documents.rate_gate")
        self.metrics = metrics
        self._condition = asyncio.Condition()
        self._ticker_task: Optional[asyncio.Task] = None
        self.running = False
        self.closed = False
        self._interval, self._state = self._new_window(capacity, interval)

    @staticmethod
    def _new_window(capacity: int, interval: float) -> Tuple[float, QuotaState]:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise InvalidConfiguration(
                "Rate gate capacity must be a positive integer",
                details={"capacity": capacity}
            )
        if interval is None or interval <= 0:
            raise InvalidConfiguration(
                "Rate gate interval must be positive",
                details={"interval": interval}
            )

        return float(interval), QuotaState(
            capacity=capacity,
            remaining=capacity,
            window_start=time.monotonic()
        )

    async def configure(self, capacity: int, interval: float) -> None:
        """Replace the quota with a fresh, full window starting now.

        Waiters are woken so they can claim the new window, and a running
        ticker is restarted against the new interval.
        """
        interval, state = self._new_window(capacity, interval)

        restart = self._ticker_task is not None
        if restart:
            await self._cancel_ticker()

        async with self._condition:
            self._interval = interval
            self._state = state
            self._condition.notify_all()

        if restart and self.running:
            self._ticker_task = asyncio.create_task(self._ticker_loop())

        self.logger.info("Rate gate reconfigured", capacity=capacity, interval=interval)
        # Woken waiters claim the new window before later callers
        await asyncio.sleep(0)

    @property
    def capacity(self) -> int:
        return self._state.capacity

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def remaining(self) -> int:
        return self._state.remaining

    @property
    def window_start(self) -> float:
        """Start of the current window on the ``time.monotonic`` clock."""
        return self._state.window_start

    async def start(self):
        """Start the window reset ticker."""
        if self.running:
            return
        if self.closed:
            raise AdmissionCancelled("Rate gate is stopped")

        self.running = True
        self._state.window_start = time.monotonic()
        self._ticker_task = asyncio.create_task(self._ticker_loop())
        self.logger.info(
            "Rate gate started",
            capacity=self._state.capacity,
            interval=self._interval
        )

    async def stop(self):
        """Stop the ticker and release every waiter with AdmissionCancelled."""
        self.running = False
        self.closed = True
        await self._cancel_ticker()

        async with self._condition:
            self._condition.notify_all()

        self.logger.info("Rate gate stopped")

    async def acquire(self, timeout: Optional[float] = None) -> None:
        """Wait for a slot in the current window and consume it.

        Raises AdmissionCancelled when ``timeout`` elapses first or the gate
        is stopped. The counter is only decremented when admission is granted.
        """
        if not self.running:
            await self.start()

        started = time.monotonic()
        if timeout is None:
            await self._admit()
        else:
            try:
                await asyncio.wait_for(self._admit(), timeout)
            except asyncio.TimeoutError:
                self.logger.warning("Timed out waiting for rate gate slot", timeout=timeout)
                raise AdmissionCancelled(
                    "Timed out waiting for a rate gate slot",
                    details={"timeout": timeout}
                )

        waited = time.monotonic() - started
        if self.metrics:
            self.metrics.record_gate_wait(waited)

    async def _admit(self) -> None:
        async with self._condition:
            while True:
                if self.closed:
                    raise AdmissionCancelled("Rate gate is stopped")
                if self._state.remaining > 0:
                    self._state.remaining -= 1
                    return
                await self._condition.wait()

    async def _ticker_loop(self):
        """Refill the counter once per elapsed window."""
        while self.running:
            deadline = self._state.window_start + self._interval
            delay = deadline - time.monotonic()
            while delay > 0:
                await asyncio.sleep(delay)
                delay = deadline - time.monotonic()

            # Skip windows missed while the loop was busy
            missed = int((time.monotonic() - deadline) // self._interval)

            async with self._condition:
                self._state.remaining = self._state.capacity
                self._state.window_start = deadline + missed * self._interval
                self._condition.notify_all()

            if self.metrics:
                self.metrics.record_window_reset()

    async def _cancel_ticker(self):
        if self._ticker_task:
            self._ticker_task.cancel()
            try:
                await self._ticker_task
            except asyncio.CancelledError:
                pass
            self._ticker_task = None
