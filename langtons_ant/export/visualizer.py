"""Visualization and export for the Langton's Ant simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import Iterable, List, Optional, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import AntSnapshot, CellChange


class Visualizer:
    """
    Renders the field with matplotlib.

    Keeps its own copy of the cells and never reads the automaton's grid:
    it is updated through apply() with the changed cell of each step and
    through apply_all() with the cells marked by a random fill.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'unmarked': '#ECF0F1',  # Light gray
        'marked': '#2C3E50',    # Dark blue-gray
        'ant': '#E74C3C',       # Red
    }

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self.cells = np.zeros((rows, columns), dtype=bool)
        self.ant: Optional["AntSnapshot"] = None
        self.step = 0
        self.frames: List[Image.Image] = []

    def apply(self, change: "CellChange") -> None:
        """Apply a single cell diff to the display buffer."""
        self.cells[change.y, change.x] = change.marked

    def apply_all(self, changes: Iterable["CellChange"]) -> None:
        for change in changes:
            self.apply(change)

    def move_ant(self, ant: "AntSnapshot", step: int) -> None:
        self.ant = ant
        self.step = step

    def render_array(self) -> np.ndarray:
        """RGB image of the field, one pixel per cell."""
        image = np.empty((self.rows, self.columns, 3))
        image[:, :] = to_rgb(self.COLORS['unmarked'])
        image[self.cells] = to_rgb(self.COLORS['marked'])
        return image

    def _create_figure(self) -> plt.Figure:
        """Create matplotlib figure for the current display buffer."""
        # Determine figure size based on grid aspect ratio
        aspect = self.columns / self.rows
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Row 0 at the top: y grows downwards like the ant's movement.
        ax.imshow(self.render_array(), origin='upper', aspect='equal',
                  interpolation='nearest',
                  extent=[-0.5, self.columns - 0.5, self.rows - 0.5, -0.5])

        if self.ant is not None:
            ax.plot(self.ant.x, self.ant.y, 'o', color=self.COLORS['ant'],
                    markersize=5, markeredgecolor='white', markeredgewidth=0.3)
            direction = self.ant.direction.value
        else:
            direction = '-'

        marked = int(np.count_nonzero(self.cells))
        ax.set_title(f'Step {self.step} | Marked: {marked} | Heading: {direction}')
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self) -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure()

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, output_path: Path) -> None:
        """Save single PNG image of the current display buffer."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure()
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
