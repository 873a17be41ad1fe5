"""Simulation engine for Langton's Ant."""

import numpy as np
from typing import Callable, List, Optional, TYPE_CHECKING

from .automaton import Automaton
from .scheduler import GameLoop, SimulationClock
from .state import CellChange, SimulationState, StepResult

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from .host import FrameHost

StepObserver = Callable[[StepResult], None]


class SimulationEngine:
    """
    Drives the automaton from a frame host.

    Implements:
    1. Grid and ant initialization from the config
    2. The control surface (start, pause, reset, randomize, speed)
    3. Fixed-timestep stepping inside the game loop's frame callback
    4. Step notification to a single observer (the rendering layer)

    Catch-up policy: by default at most one step runs per frame and any
    leftover negative time stays in the clock, so a long stall is worked
    off over the following frames. With `config.catch_up` the engine keeps
    stepping within the frame until the clock is back above zero.
    """

    LOOP_NAME = "Ant Loop"

    def __init__(self, config: "SimulationConfig",
                 on_step: Optional[StepObserver] = None):
        self.config = config
        self.rng = np.random.default_rng(config.seed)

        self.automaton = Automaton(
            config.grid.rows, config.grid.columns,
            direction=config.direction
        )
        self.clock = SimulationClock(config.tick_interval)
        self.loop = GameLoop(self.LOOP_NAME, self.update)
        self.on_step = on_step

        self.frames_seen = 0

    # Host wiring

    def attach(self, host: "FrameHost") -> None:
        self.loop.start(host)

    def detach(self) -> None:
        self.loop.stop()

    def update(self, elapsed: float) -> int:
        """
        Frame listener. Returns the number of steps performed.

        Does nothing unless the run is active. Otherwise the elapsed time is
        charged against the clock and a step runs for each interval due.
        """
        self.frames_seen += 1
        if not self.automaton.is_running or self.automaton.is_paused:
            return 0

        self.clock.consume(elapsed)

        steps = 0
        while self.clock.due() and not self.is_finished():
            result = self.automaton.step()
            self.clock.replenish()
            steps += 1

            if self.on_step is not None:
                self.on_step(result)

            if not self.config.catch_up:
                break
        return steps

    # Control surface

    def start(self) -> bool:
        """Start from stopped (fresh ant and clock) or resume from paused."""
        reinitialized = self.automaton.start()
        if reinitialized:
            self.clock.restart()
        return reinitialized

    def pause(self) -> None:
        self.automaton.pause()

    def reset(self) -> None:
        self.automaton.reset()

    def randomize(self, density: Optional[float] = None) -> List[CellChange]:
        if density is None:
            density = self.config.density
        return self.automaton.randomize(self.rng, density)

    def set_tick_interval(self, tick_interval: float) -> None:
        """Change simulation speed; applies from the next replenish."""
        self.clock.set_tick_interval(tick_interval)
        self.config.tick_interval = tick_interval

    # Observation

    @property
    def step_count(self) -> int:
        return self.automaton.step_count

    def snapshot(self) -> SimulationState:
        state = self.automaton.snapshot()
        state.metrics['frames'] = self.frames_seen
        state.metrics['tick_interval'] = self.clock.tick_interval
        return state

    def is_finished(self) -> bool:
        """Check if the configured step budget is used up."""
        return (self.config.max_steps is not None and
                self.automaton.step_count >= self.config.max_steps)
