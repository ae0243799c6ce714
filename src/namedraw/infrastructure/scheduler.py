"""Cooperative timer scheduling on a single logical timeline.

The draw animation needs a periodic tick and a one-shot completion that
can be cancelled together. :class:`CooperativeScheduler` keeps a heap of
timers on a millisecond clock and runs them in due order on the caller's
thread. Without a ``sleep`` function the clock is virtual (tests jump
straight to the next due timer); with ``time.sleep`` the CLI paces the
same callbacks in real time.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class CancelHandle(Protocol):
    """Handle returned by a scheduler for one scheduled callback."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Capability for scheduling delayed and periodic callbacks."""

    def now(self) -> int: ...

    def call_later(self, delay_ms: int, callback: Callback) -> CancelHandle: ...

    def call_every(self, period_ms: int, callback: Callback) -> CancelHandle: ...

    def run_until(self, predicate: Callable[[], bool]) -> bool: ...


@dataclass(order=True)
class _Timer:
    due: int
    seq: int
    period: int | None = field(compare=False)
    callback: Callback = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class CooperativeScheduler:
    """Heap-ordered timers executed by :meth:`step` on the calling thread.

    Parameters:
        sleep: Called with seconds to wait before each due timer. ``None``
            keeps a purely virtual clock.
        start_ms: Initial clock value.
        max_steps: Safety limit for :meth:`run_until` and :meth:`run_all`.
    """

    def __init__(
        self,
        *,
        sleep: Callable[[float], None] | None = None,
        start_ms: int = 0,
        max_steps: int = 100_000,
    ) -> None:
        self._sleep = sleep
        self._now = start_ms
        self._max_steps = max_steps
        self._heap: list[_Timer] = []
        self._seq = itertools.count()

    def now(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callback) -> _Timer:
        """Run *callback* once, *delay_ms* after now."""
        return self._push(self._now + max(0, delay_ms), None, callback)

    def call_every(self, period_ms: int, callback: Callback) -> _Timer:
        """Run *callback* every *period_ms* until cancelled (first run after one period)."""
        if period_ms <= 0:
            msg = f"period_ms must be positive, got {period_ms}"
            raise ValueError(msg)
        return self._push(self._now + period_ms, period_ms, callback)

    @property
    def pending(self) -> int:
        """Number of timers that are scheduled and not cancelled."""
        return sum(1 for t in self._heap if not t.cancelled)

    def step(self) -> bool:
        """Run the next due timer. Returns False when nothing is scheduled."""
        timer = self._pop_live()
        if timer is None:
            return False

        if timer.due > self._now:
            if self._sleep is not None:
                self._sleep((timer.due - self._now) / 1000)
            self._now = timer.due

        if timer.period is not None:
            # Re-arm before running so the callback can cancel its own handle.
            timer.due += timer.period
            heapq.heappush(self._heap, timer)
        timer.callback()
        return True

    def advance(self, ms: int) -> None:
        """Run every timer due within the next *ms* milliseconds, then move the clock."""
        target = self._now + ms
        while True:
            nxt = self._peek_live()
            if nxt is None or nxt.due > target:
                break
            self.step()
        if self._sleep is not None and target > self._now:
            self._sleep((target - self._now) / 1000)
        self._now = max(self._now, target)

    def run_until(self, predicate: Callable[[], bool]) -> bool:
        """Step until *predicate* holds. Returns False if timers run out first."""
        for _ in range(self._max_steps):
            if predicate():
                return True
            if not self.step():
                return predicate()
        msg = f"Scheduler exceeded {self._max_steps} steps"
        raise RuntimeError(msg)

    def run_all(self) -> None:
        """Step until no live timers remain."""
        self.run_until(lambda: self.pending == 0)

    # ------------------------------------------------------------------
    # Heap helpers
    # ------------------------------------------------------------------

    def _push(self, due: int, period: int | None, callback: Callback) -> _Timer:
        timer = _Timer(due=due, seq=next(self._seq), period=period, callback=callback)
        heapq.heappush(self._heap, timer)
        return timer

    def _peek_live(self) -> _Timer | None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)
        return self._heap[0] if self._heap else None

    def _pop_live(self) -> _Timer | None:
        if self._peek_live() is None:
            return None
        return heapq.heappop(self._heap)
