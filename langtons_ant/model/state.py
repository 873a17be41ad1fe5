"""State snapshot dataclasses for the Langton's Ant simulation."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
import numpy as np

from .direction import Direction


class RunState(Enum):
    """Lifecycle of a simulation run."""
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class CellChange:
    """A single cell that changed state. Renderers redraw from these."""
    x: int
    y: int
    marked: bool


@dataclass(frozen=True)
class AntSnapshot:
    """Immutable snapshot of the ant's position and heading."""
    x: int
    y: int
    direction: Direction


@dataclass(frozen=True)
class StepResult:
    """Outcome of one automaton step."""
    step: int
    change: CellChange
    ant: AntSnapshot
    heading: Direction  # direction the ant moved in during this step

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "step": self.step,
            "x": self.change.x,
            "y": self.change.y,
            "marked": int(self.change.marked),
            "ant_x": self.ant.x,
            "ant_y": self.ant.y,
            "direction": self.ant.direction.value,
        }


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given step."""
    step: int
    ant: AntSnapshot
    cells: np.ndarray   # Copy of the cell grid, [y, x]
    run_state: RunState
    metrics: Dict[str, float]
