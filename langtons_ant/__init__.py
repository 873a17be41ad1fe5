"""Langton's Ant: a fixed-timestep cellular automaton simulation."""

__version__ = "0.1.0"
