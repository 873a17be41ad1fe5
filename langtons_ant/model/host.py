"""Frame hosts: the timing surfaces that drive a GameLoop."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

FrameCallback = Callable[[float], None]


class FrameHost(ABC):
    """
    Abstract cooperative frame source; subclasses supply `_elapsed`.

    Callbacks are one-shot: each tick() delivers the elapsed time to every
    callback armed since the previous tick, and a callback that wants the
    next frame has to request it again. Control returns to the caller
    between ticks.
    """

    def __init__(self):
        self._pending: Dict[str, FrameCallback] = {}
        self.frame_count = 0

    def request_frame(self, name: str, callback: FrameCallback) -> None:
        self._pending[name] = callback

    def cancel_frame(self, name: str) -> None:
        self._pending.pop(name, None)

    def has_pending(self, name: str) -> bool:
        return name in self._pending

    @abstractmethod
    def _elapsed(self) -> float:
        """Seconds since the previous frame."""

    def tick(self) -> float:
        """Deliver one frame and return its elapsed time."""
        elapsed = self._elapsed()
        callbacks, self._pending = self._pending, {}
        for callback in callbacks.values():
            callback(elapsed)
        self.frame_count += 1
        return elapsed

    def run(self, frames: int,
            until: Optional[Callable[[], bool]] = None) -> int:
        """
        Deliver up to `frames` frames, stopping early once `until()` is true
        or nothing is armed. Returns the number of frames delivered.
        """
        delivered = 0
        while delivered < frames and self._pending:
            if until is not None and until():
                break
            self.tick()
            delivered += 1
        return delivered


class FixedStepHost(FrameHost):
    """Headless host that reports the same elapsed time every frame."""

    def __init__(self, frame_interval: float = 1 / 60):
        super().__init__()
        if frame_interval < 0:
            raise ValueError(f"Frame interval must be >= 0, got {frame_interval}")
        self.frame_interval = frame_interval

    def _elapsed(self) -> float:
        return self.frame_interval


class RealtimeHost(FrameHost):
    """
    Host paced by the wall clock.

    Elapsed time is measured with `timer`; after each frame the host sleeps
    off whatever is left of the frame budget.
    """

    def __init__(self, frame_rate: float = 60.0,
                 timer: Callable[[], float] = time.perf_counter,
                 sleep: Callable[[float], None] = time.sleep):
        super().__init__()
        if frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {frame_rate}")
        self.frame_budget = 1.0 / frame_rate
        self._timer = timer
        self._sleep = sleep
        self._last: Optional[float] = None

    def request_frame(self, name: str, callback: FrameCallback) -> None:
        # Measure the first frame from the moment something was attached.
        if self._last is None:
            self._last = self._timer()
        super().request_frame(name, callback)

    def cancel_frame(self, name: str) -> None:
        super().cancel_frame(name)
        # Time spent with nothing attached is never reported.
        if not self._pending:
            self._last = None

    def _elapsed(self) -> float:
        now = self._timer()
        if self._last is None:
            self._last = now
        elapsed = now - self._last
        self._last = now
        return elapsed

    def tick(self) -> float:
        started = self._timer()
        elapsed = super().tick()
        spare = self.frame_budget - (self._timer() - started)
        if spare > 0:
            self._sleep(spare)
        return elapsed
