"""Toroidal cell grid for the Langton's Ant simulation."""

from enum import Enum
from typing import List, Tuple

import numpy as np

from .errors import InvalidDimensionError


class Cell(Enum):
    """The two states a cell can be in."""
    UNMARKED = 0
    MARKED = 1


class CellGrid:
    """
    Fixed-size 2D field of binary cells whose edges wrap around.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    The size is chosen once at construction; there is no resize.
    """

    def __init__(self, rows: int, columns: int):
        if rows <= 0 or columns <= 0:
            raise InvalidDimensionError(
                f"Grid needs positive rows and columns, got {rows}x{columns}"
            )
        self.rows = rows
        self.columns = columns

        # Boolean mask: True = marked
        self.cells = np.zeros((rows, columns), dtype=bool)

    @classmethod
    def from_field(cls, width: int, height: int, cell_size: int) -> "CellGrid":
        """Build a grid covering a width x height pixel field."""
        if cell_size <= 0:
            raise InvalidDimensionError(f"Cell size must be positive, got {cell_size}")
        return cls(rows=height // cell_size, columns=width // cell_size)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows

    def cell_at(self, x: int, y: int) -> Cell:
        return Cell.MARKED if self.cells[y, x] else Cell.UNMARKED

    def is_marked(self, x: int, y: int) -> bool:
        return bool(self.cells[y, x])

    def set_marked(self, x: int, y: int, marked: bool = True) -> None:
        self.cells[y, x] = marked

    def flip(self, x: int, y: int) -> bool:
        """Toggle a cell and return its new state."""
        marked = not self.cells[y, x]
        self.cells[y, x] = marked
        return marked

    def clear(self) -> None:
        """Set every cell to unmarked."""
        self.cells.fill(False)

    def mark_random(self, rng: np.random.Generator,
                    samples: int) -> List[Tuple[int, int]]:
        """
        Mark `samples` cells picked uniformly with replacement.

        Picking an already marked cell is a no-op. Returns the coordinates
        of cells that changed, in pick order.
        """
        if samples <= 0:
            return []
        ys = rng.integers(0, self.rows, size=samples)
        xs = rng.integers(0, self.columns, size=samples)

        changed = []
        for x, y in zip(xs, ys):
            if not self.cells[y, x]:
                self.cells[y, x] = True
                changed.append((int(x), int(y)))
        return changed

    def marked_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def copy_cells(self) -> np.ndarray:
        return self.cells.copy()
