"""Configuration dataclasses and YAML loader for the Langton's Ant simulation."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import yaml

from .model.direction import Direction, parse_direction
from .model.automaton import DEFAULT_DENSITY


@dataclass
class GridConfig:
    width: int       # pixels
    height: int      # pixels
    cell_size: int   # pixels per cell

    @property
    def columns(self) -> int:
        return self.width // self.cell_size

    @property
    def rows(self) -> int:
        return self.height // self.cell_size


@dataclass
class SimulationConfig:
    grid: GridConfig
    tick_interval: float = 0.01          # seconds per automaton step
    max_steps: Optional[int] = 11000
    catch_up: bool = False               # loop to catch up, or one step per frame
    frame_interval: float = 1 / 60       # seconds per host frame (headless)
    direction: Direction = Direction.DOWN
    randomize: bool = False
    density: float = DEFAULT_DENSITY

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    gif_every: int = 100
    quiet: bool = False
    realtime: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    def validate(self) -> None:
        """Reject values the simulation cannot run with."""
        if self.grid.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.grid.cell_size}")
        if self.grid.rows <= 0 or self.grid.columns <= 0:
            raise ValueError(
                f"Field {self.grid.width}x{self.grid.height} is smaller than "
                f"one {self.grid.cell_size}px cell"
            )
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {self.frame_interval}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {self.max_steps}")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {self.density}")
        if self.gif_every <= 0:
            raise ValueError(f"gif_every must be positive, got {self.gif_every}")


def default_config() -> SimulationConfig:
    """A 90x90 field (720px at 8px per cell)."""
    return SimulationConfig(grid=GridConfig(width=720, height=720, cell_size=8))


def _parse_grid(grid_raw: Dict[str, Any]) -> GridConfig:
    return GridConfig(
        width=int(grid_raw['width']),
        height=int(grid_raw['height']),
        cell_size=int(grid_raw.get('cell_size', 8))
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if 'grid' not in raw:
        raise ValueError("Missing required section: grid")

    defaults = default_config()
    sim_raw = raw.get('simulation') or {}
    export_raw = raw.get('export') or {}

    config = SimulationConfig(
        grid=_parse_grid(raw['grid']),
        tick_interval=float(sim_raw.get('tick_interval', defaults.tick_interval)),
        max_steps=sim_raw.get('max_steps', defaults.max_steps),
        catch_up=bool(sim_raw.get('catch_up', defaults.catch_up)),
        frame_interval=float(sim_raw.get('frame_interval', defaults.frame_interval)),
        direction=parse_direction(sim_raw.get('direction', defaults.direction.value)),
        randomize=bool(sim_raw.get('randomize', defaults.randomize)),
        density=float(sim_raw.get('density', defaults.density)),
        seed=sim_raw.get('seed'),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        gif_every=int(export_raw.get('gif_every', defaults.gif_every))
    )
    config.validate()
    return config
