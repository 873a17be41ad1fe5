"""Summary report generation for the Langton's Ant simulation."""

from collections import deque
from typing import Optional, Tuple, TYPE_CHECKING
from pathlib import Path

from ..model.direction import OFFSETS

if TYPE_CHECKING:
    from ..model.state import SimulationState, StepResult

# Once the ant builds its highway, its path repeats every 104 steps,
# shifting two cells diagonally each cycle.
HIGHWAY_PERIOD = 104
HIGHWAY_SHIFT = 2
HIGHWAY_CYCLES = 10


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str, seed: Optional[int],
                 initial_marked: int = 0,
                 start_position: Optional[Tuple[int, int]] = None):
        self.config_path = config_path
        self.seed = seed
        self.steps_seen = 0
        self.marked = initial_marked
        self.peak_marked = initial_marked
        self.wraps = 0
        self.highway_step: Optional[int] = None

        # Position on the unrolled plane, ignoring wraparound.
        self._unwrapped: Tuple[int, int] = (0, 0)
        self._history = deque(maxlen=HIGHWAY_PERIOD * HIGHWAY_CYCLES + 1)
        self._history.append(self._unwrapped)
        self._last_pos: Optional[Tuple[int, int]] = start_position

    def update(self, result: "StepResult") -> None:
        """Accumulate metrics per step."""
        self.steps_seen += 1

        self.marked += 1 if result.change.marked else -1
        if self.marked > self.peak_marked:
            self.peak_marked = self.marked

        dx, dy = OFFSETS[result.heading]
        ux, uy = self._unwrapped
        self._unwrapped = (ux + dx, uy + dy)
        self._history.append(self._unwrapped)

        # Landing anywhere but one cell ahead means the step crossed an edge.
        pos = (result.ant.x, result.ant.y)
        if self._last_pos is not None:
            if pos != (self._last_pos[0] + dx, self._last_pos[1] + dy):
                self.wraps += 1
        self._last_pos = pos

        if self.highway_step is None and self._is_on_highway():
            self.highway_step = result.step

    def _is_on_highway(self) -> bool:
        """True if each recent period moved the ant by the same diagonal shift."""
        if len(self._history) < self._history.maxlen:
            return False

        points = [self._history[-1 - HIGHWAY_PERIOD * i]
                  for i in range(HIGHWAY_CYCLES + 1)]
        shifts = {
            (a[0] - b[0], a[1] - b[1])
            for a, b in zip(points, points[1:])
        }
        if len(shifts) != 1:
            return False
        dx, dy = shifts.pop()
        return abs(dx) == abs(dy) == HIGHWAY_SHIFT

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        marked = int(metrics.get('marked_cells', self.marked))
        density = metrics.get('density', 0)
        ant = final_state.ant

        if self.highway_step is not None:
            highway = f"[X] Highway: emerged by step {self.highway_step}"
        else:
            highway = "[ ] Highway: not detected"

        # Build report
        lines = [
            "",
            "=" * 80,
            "                    LANGTON'S ANT SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Marked Cells:          {marked} ({density * 100:.2f}% of field)",
            f"Peak Marked Cells:     {self.peak_marked}",
            f"Edge Wraps:            {self.wraps}",
            f"Final Ant Position:    ({ant.x}, {ant.y}) facing {ant.direction.value}",
            "",
            "EMERGENT BEHAVIORS DETECTED",
            "-" * 40,
            highway,
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
