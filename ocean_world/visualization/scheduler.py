"""
Refresh scheduling - run a callback once on the next display refresh.

TimerScheduler uses single-shot matplotlib canvas timers for interactive
windows. ManualScheduler queues callbacks until run_pending() is called,
which drives headless runs and tests.
"""

from collections import deque
from typing import Callable, Deque, Optional, Tuple

from ..core.constants import FRAME_INTERVAL_MS


class FrameHandle:
    """Cancellation handle for one scheduled callback."""

    def __init__(self):
        self.cancelled = False
        self.fired = False
        self._timer = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True
        if self._timer is not None:
            self._timer.stop()
            self._timer = None


class RefreshScheduler:
    """Schedules a callback for the next refresh and returns its handle."""

    def request(self, callback: Callable[[], None]) -> FrameHandle:
        raise NotImplementedError


class TimerScheduler(RefreshScheduler):
    """Single-shot matplotlib timer per request."""

    def __init__(self, figure, interval_ms: int = FRAME_INTERVAL_MS):
        self.figure = figure
        self.interval_ms = interval_ms

    def request(self, callback: Callable[[], None]) -> FrameHandle:
        handle = FrameHandle()
        timer = self.figure.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(self._fire, handle, callback)
        handle._timer = timer
        timer.start()
        return handle

    @staticmethod
    def _fire(handle: FrameHandle, callback: Callable[[], None]):
        if not handle.pending:
            return
        handle.fired = True
        handle._timer = None
        callback()


class ManualScheduler(RefreshScheduler):
    """Queues callbacks; run_pending() plays one refresh."""

    def __init__(self):
        self._queue: Deque[Tuple[FrameHandle, Callable[[], None]]] = deque()

    @property
    def pending_count(self) -> int:
        return sum(1 for handle, _ in self._queue if handle.pending)

    def request(self, callback: Callable[[], None]) -> FrameHandle:
        handle = FrameHandle()
        self._queue.append((handle, callback))
        return handle

    def run_pending(self) -> int:
        """
        Run the callbacks queued before this call.

        Callbacks scheduled while running wait for the next call.

        Returns:
            Number of callbacks executed
        """
        batch = list(self._queue)
        self._queue.clear()
        ran = 0
        for handle, callback in batch:
            if not handle.pending:
                continue
            handle.fired = True
            callback()
            ran += 1
        return ran

    def run(self, refreshes: int, until: Optional[Callable[[], bool]] = None) -> int:
        """Play up to `refreshes` refreshes. Returns callbacks executed."""
        total = 0
        for _ in range(refreshes):
            if until is not None and until():
                break
            total += self.run_pending()
        return total
