"""The ant: a position and heading on a toroidal grid."""

from typing import Tuple

from .direction import Direction, OFFSETS, turn_left, turn_right
from .state import AntSnapshot


class Ant:
    """
    Single agent walking the grid.

    Each move is exactly one cell, so leaving the grid on one side can only
    overshoot by one and a single correction per axis wraps it back.
    """

    def __init__(self, x: int = 0, y: int = 0,
                 direction: Direction = Direction.DOWN):
        self.x = x
        self.y = y
        self.direction = direction

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def advance(self, columns: int, rows: int) -> Tuple[int, int]:
        """Move one cell forward and wrap at the grid edges."""
        dx, dy = OFFSETS[self.direction]
        x = self.x + dx
        y = self.y + dy

        if x < 0:
            x = columns - 1
        elif x >= columns:
            x = 0

        if y < 0:
            y = rows - 1
        elif y >= rows:
            y = 0

        self.x, self.y = x, y
        return x, y

    def turn_left(self) -> None:
        self.direction = turn_left(self.direction)

    def turn_right(self) -> None:
        self.direction = turn_right(self.direction)

    def snapshot(self) -> AntSnapshot:
        return AntSnapshot(x=self.x, y=self.y, direction=self.direction)

    def __repr__(self) -> str:
        return (f"Ant(pos=({self.x}, {self.y}), "
                f"direction={self.direction.value})")
