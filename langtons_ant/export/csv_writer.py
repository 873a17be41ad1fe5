"""CSV export functionality for the Langton's Ant simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import StepResult


class CSVWriter:
    """
    Exports one row per automaton step, incrementally.

    Output format:
        step,x,y,marked,ant_x,ant_y,direction
        1,37,46,1,36,46,left
        ...

    (x, y) is the cell flipped by the step and `marked` its new state.
    """

    FIELDNAMES = ['step', 'x', 'y', 'marked', 'ant_x', 'ant_y', 'direction']

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False
        self.rows_written = 0

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=self.FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, result: "StepResult") -> None:
        if not self._is_open:
            self.open()
        self.writer.writerow(result.to_csv_row())
        self.rows_written += 1

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
