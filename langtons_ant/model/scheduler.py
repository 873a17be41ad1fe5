"""Fixed-timestep scheduling: the simulation clock and the game loop."""

from typing import Callable, Optional, TYPE_CHECKING

from .errors import AlreadyAttachedError, NotAttachedError

if TYPE_CHECKING:
    from .host import FrameHost

# Receives the wall-clock seconds the previous frame took.
FrameListener = Callable[[float], None]


class SimulationClock:
    """
    Fixed-timestep accumulator.

    Elapsed frame time is subtracted from `time_remaining`; a tick is due
    once it drops to zero or below. Replenishing adds one interval back
    instead of resetting, so leftover time carries over to the next tick.
    """

    def __init__(self, tick_interval: float):
        self._check_interval(tick_interval)
        self.tick_interval = tick_interval
        self.time_remaining = tick_interval
        self.ticks = 0

    @staticmethod
    def _check_interval(tick_interval: float) -> None:
        if tick_interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {tick_interval}")

    def restart(self) -> None:
        """Begin a fresh accumulation cycle."""
        self.time_remaining = self.tick_interval
        self.ticks = 0

    def consume(self, elapsed: float) -> None:
        self.time_remaining -= elapsed

    def due(self) -> bool:
        return self.time_remaining <= 0

    def replenish(self) -> None:
        self.time_remaining += self.tick_interval
        self.ticks += 1

    def set_tick_interval(self, tick_interval: float) -> None:
        """Change the period. `time_remaining` is not rescaled."""
        self._check_interval(tick_interval)
        self.tick_interval = tick_interval

    def __repr__(self) -> str:
        return (f"SimulationClock(interval={self.tick_interval}, "
                f"remaining={self.time_remaining:.4f}, ticks={self.ticks})")


class GameLoop:
    """
    Per-frame driver attached to a frame host.

    Every frame the host calls on_frame() with the elapsed time; the loop
    hands it to its single listener and re-arms itself for the next frame.
    It never looks at the simulation's run state.
    """

    def __init__(self, name: str, listener: FrameListener):
        if not name:
            raise ValueError("GameLoop needs a non-empty name")
        self.name = name
        self.listener = listener
        self.host: Optional["FrameHost"] = None
        self.frame_count = 0

    @property
    def is_attached(self) -> bool:
        return self.host is not None

    def start(self, host: "FrameHost") -> None:
        """Attach to `host` and request the first frame."""
        if self.host is not None:
            raise AlreadyAttachedError(
                f"GameLoop '{self.name}' is already attached to a frame host. "
                "Stop it first."
            )
        host.request_frame(self.name, self.on_frame)
        self.host = host

    def stop(self) -> None:
        """Detach from the current host; no further frames are delivered."""
        if self.host is None:
            raise NotAttachedError(
                f"GameLoop '{self.name}' is not attached to any frame host."
            )
        self.host.cancel_frame(self.name)
        self.host = None

    def on_frame(self, elapsed: float) -> None:
        self.frame_count += 1

        self.listener(elapsed)

        # The listener may have stopped the loop.
        if self.host is not None:
            self.host.request_frame(self.name, self.on_frame)
