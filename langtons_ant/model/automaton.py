"""Langton's Ant state-transition rule and run lifecycle."""

from typing import List, Optional

import numpy as np

from .ant import Ant
from .direction import Direction
from .grid import CellGrid
from .state import CellChange, RunState, SimulationState, StepResult

# Reference fill: one sample per twenty cells.
DEFAULT_DENSITY = 0.05

# Start position is shifted left of centre.
START_OFFSET_X = 8


class Automaton:
    """
    Owns the grid, the ant and the run state.

    The classic two-colour rule, applied once per step():
    1. Move the ant one cell in its heading (with wraparound)
    2. Flip the cell it landed on
    3. Unmarked -> Marked: turn right. Marked -> Unmarked: turn left.
    4. Count the step

    step() is a pure transition and ignores the run state; whether steps
    happen at all is decided by the driver that calls it.
    """

    def __init__(self, rows: int, columns: int,
                 direction: Direction = Direction.DOWN):
        self.grid = CellGrid(rows, columns)
        self.default_direction = direction
        self.ant = Ant(*self.start_position, direction=direction)
        self.step_count = 0
        self.is_running = False
        self.is_paused = False

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def start_position(self):
        """Where the ant is placed when a run starts from stopped."""
        x = (self.columns // 2 - START_OFFSET_X) % self.columns
        y = self.rows // 2
        return x, y

    @property
    def run_state(self) -> RunState:
        if not self.is_running:
            return RunState.STOPPED
        if self.is_paused:
            return RunState.PAUSED
        return RunState.RUNNING

    def start(self) -> bool:
        """
        Start or resume the run.

        From stopped, the ant is moved back to the start position, faces the
        default direction and the step counter is cleared; the grid is kept.
        From paused, the run resumes untouched. Returns True if the ant was
        reinitialized.
        """
        if self.is_running and not self.is_paused:
            return False

        reinitialized = not self.is_paused
        if reinitialized:
            self.ant = Ant(*self.start_position, direction=self.default_direction)
            self.step_count = 0

        self.is_paused = False
        self.is_running = True
        return reinitialized

    def pause(self) -> None:
        if self.is_running:
            self.is_paused = True

    def reset(self) -> None:
        """Stop the run, unmark every cell and clear the step counter."""
        self.is_running = False
        self.is_paused = False
        self.grid.clear()
        self.step_count = 0

    def place_ant(self, x: int, y: int,
                  direction: Optional[Direction] = None) -> None:
        if not self.grid.contains(x, y):
            raise ValueError(
                f"Position ({x}, {y}) outside {self.columns}x{self.rows} grid"
            )
        self.ant.x, self.ant.y = x, y
        if direction is not None:
            self.ant.direction = direction

    def turn_left(self) -> None:
        self.ant.turn_left()

    def turn_right(self) -> None:
        self.ant.turn_right()

    def step(self) -> StepResult:
        """Execute one discrete update and return the resulting diff."""
        heading = self.ant.direction
        x, y = self.ant.advance(self.columns, self.rows)

        marked = self.grid.flip(x, y)
        if marked:
            self.turn_right()
        else:
            self.turn_left()

        self.step_count += 1

        return StepResult(
            step=self.step_count,
            change=CellChange(x=x, y=y, marked=marked),
            ant=self.ant.snapshot(),
            heading=heading,
        )

    def randomize(self, rng: np.random.Generator,
                  density: float = DEFAULT_DENSITY) -> List[CellChange]:
        """
        Mark a random sample of rows * columns * density cells.

        Samples are drawn with replacement, so fewer cells than samples may
        change. Ant position and run state are left alone.
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"Density must be within [0, 1], got {density}")

        samples = int(self.rows * self.columns * density)
        changed = self.grid.mark_random(rng, samples)
        return [CellChange(x=x, y=y, marked=True) for x, y in changed]

    def snapshot(self) -> SimulationState:
        """Create a snapshot of the current simulation state."""
        marked = self.grid.marked_count()
        total_cells = self.rows * self.columns
        return SimulationState(
            step=self.step_count,
            ant=self.ant.snapshot(),
            cells=self.grid.copy_cells(),
            run_state=self.run_state,
            metrics={
                'marked_cells': marked,
                'density': marked / total_cells,
            },
        )

    def __repr__(self) -> str:
        return (f"Automaton({self.columns}x{self.rows}, step={self.step_count}, "
                f"state={self.run_state.value}, ant={self.ant!r})")
