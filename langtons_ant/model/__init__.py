"""Model package for the Langton's Ant simulation."""

from .direction import Direction, turn_left, turn_right
from .errors import (
    AntSimulationError,
    AlreadyAttachedError,
    NotAttachedError,
    InvalidDimensionError,
)
from .state import AntSnapshot, CellChange, RunState, SimulationState, StepResult
from .grid import Cell, CellGrid
from .ant import Ant
from .automaton import Automaton
from .scheduler import GameLoop, SimulationClock
from .host import FrameHost, FixedStepHost, RealtimeHost
from .engine import SimulationEngine

__all__ = [
    'Direction',
    'turn_left',
    'turn_right',
    'AntSimulationError',
    'AlreadyAttachedError',
    'NotAttachedError',
    'InvalidDimensionError',
    'AntSnapshot',
    'CellChange',
    'RunState',
    'SimulationState',
    'StepResult',
    'Cell',
    'CellGrid',
    'Ant',
    'Automaton',
    'GameLoop',
    'SimulationClock',
    'FrameHost',
    'FixedStepHost',
    'RealtimeHost',
    'SimulationEngine',
]
