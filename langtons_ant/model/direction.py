"""Cardinal directions and the 90-degree turn tables for the ant."""

from enum import Enum
from typing import Dict, Tuple


class Direction(Enum):
    """The four cardinal directions on the grid plus an inert placeholder."""
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# Screen coordinates: y grows downwards.
OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.NONE: (0, 0),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}

TURN_LEFT: Dict[Direction, Direction] = {
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.UP: Direction.LEFT,
}

TURN_RIGHT: Dict[Direction, Direction] = {
    Direction.LEFT: Direction.UP,
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
}

CARDINALS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


def turn_left(direction: Direction) -> Direction:
    """Rotate 90 degrees counter-clockwise. NONE stays NONE."""
    return TURN_LEFT.get(direction, direction)


def turn_right(direction: Direction) -> Direction:
    """Rotate 90 degrees clockwise. NONE stays NONE."""
    return TURN_RIGHT.get(direction, direction)


def parse_direction(name: str) -> Direction:
    """Look up a direction by its lowercase name (e.g. from a YAML file)."""
    try:
        return Direction(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown direction: {name}") from None
