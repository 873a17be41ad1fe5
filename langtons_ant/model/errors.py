"""Exception types raised by the simulation core."""


class AntSimulationError(Exception):
    """Base class for all simulation core errors."""


class AlreadyAttachedError(AntSimulationError, RuntimeError):
    """A GameLoop was started while already attached to a frame host."""


class NotAttachedError(AntSimulationError, RuntimeError):
    """A GameLoop was stopped while not attached to any frame host."""


class InvalidDimensionError(AntSimulationError, ValueError):
    """A grid was requested with a non-positive size."""
