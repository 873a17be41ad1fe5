#!/usr/bin/env python3
"""
Langton's Ant Simulation

A single ant walks a toroidal grid of two-state cells: each step it moves,
flips the cell it lands on and turns right (unmarked cell) or left (marked
cell). After roughly ten thousand chaotic steps it settles into building a
repeating diagonal "highway".

Usage:
    langtons-ant [--config configs/default.yaml] [options]

Examples:
    langtons-ant
    langtons-ant --config configs/default.yaml --gif --out-dir results/
    langtons-ant --steps 500 --no-csv --no-snapshot --quiet
    langtons-ant --randomize --density 0.1 --seed 42
"""

import argparse
import math
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from langtons_ant.config import SimulationConfig, default_config, load_config
from langtons_ant.export.csv_writer import CSVWriter
from langtons_ant.export.reporter import Reporter
from langtons_ant.export.visualizer import Visualizer
from langtons_ant.model.engine import SimulationEngine
from langtons_ant.model.host import FixedStepHost, FrameHost, RealtimeHost
from langtons_ant.model.state import StepResult

# Extra frames allowed on top of the expected count before giving up.
FRAME_SLACK = 10


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Langton's Ant Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    langtons-ant
    langtons-ant --config configs/default.yaml --gif --out-dir results/
    langtons-ant --steps 500 --no-csv --no-snapshot --quiet
    langtons-ant --randomize --density 0.1 --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in 90x90 field)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--tick-interval', type=float, default=None,
                        help='Seconds of simulated time per ant step')
    parser.add_argument('--frame-interval', type=float, default=None,
                        help='Seconds per host frame in headless mode')
    parser.add_argument('--catch-up', action='store_true', default=False,
                        help='Run every overdue step within a frame instead of one per frame')
    parser.add_argument('--realtime', action='store_true', default=False,
                        help='Pace frames by the wall clock instead of simulating them')
    parser.add_argument('--randomize', action='store_true', default=False,
                        help='Mark a random sample of cells before starting')
    parser.add_argument('--density', type=float, default=None,
                        help='Fraction of cells sampled by --randomize (default: 0.05)')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def apply_overrides(config: SimulationConfig, args: argparse.Namespace) -> None:
    """Apply CLI overrides on top of the loaded configuration."""
    if args.steps is not None:
        config.max_steps = args.steps
    if args.tick_interval is not None:
        config.tick_interval = args.tick_interval
    if args.frame_interval is not None:
        config.frame_interval = args.frame_interval
    if args.catch_up:
        config.catch_up = True
    if args.realtime:
        config.realtime = True
    if args.randomize:
        config.randomize = True
    if args.density is not None:
        config.density = args.density
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir
    config.validate()


def make_host(config: SimulationConfig) -> FrameHost:
    if config.realtime:
        return RealtimeHost(frame_rate=1.0 / config.frame_interval)
    return FixedStepHost(config.frame_interval)


def frame_budget(config: SimulationConfig) -> int:
    """Frames needed to reach max_steps when every frame is on time."""
    frames_per_step = max(1.0, config.tick_interval / config.frame_interval)
    return math.ceil(config.max_steps * frames_per_step) + FRAME_SLACK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
        apply_overrides(config, args)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if config.max_steps is None:
        print("Error: a step budget is required (set max_steps or --steps)",
              file=sys.stderr)
        return 1

    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Grid: {config.grid.columns}x{config.grid.rows} cells "
              f"({config.grid.width}x{config.grid.height}px, {config.grid.cell_size}px/cell)")
        print(f"  Tick interval: {config.tick_interval}s")
        print(f"  Max steps: {config.max_steps}")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    visualizer = Visualizer(config.grid.rows, config.grid.columns)
    engine = SimulationEngine(config)

    if config.randomize:
        changes = engine.randomize()
        visualizer.apply_all(changes)
        if not config.quiet:
            print(f"  Randomized: {len(changes)} cells marked")

    engine.start()
    visualizer.move_ant(engine.automaton.ant.snapshot(), engine.step_count)
    reporter = Reporter(str(args.config or '(built-in defaults)'), config.seed,
                        initial_marked=engine.automaton.grid.marked_count(),
                        start_position=engine.automaton.ant.position)

    def on_step(result: StepResult) -> None:
        if csv_writer:
            csv_writer.append(result)

        visualizer.apply(result.change)
        visualizer.move_ant(result.ant, result.step)
        if config.gif_enabled and result.step % config.gif_every == 0:
            visualizer.buffer_frame()

        reporter.update(result)

        # Progress indicator
        if not config.quiet and result.step % 1000 == 0:
            print(f"  Step {result.step}: ant at ({result.ant.x}, {result.ant.y}), "
                  f"{reporter.marked} marked")

    engine.on_step = on_step

    host = make_host(config)
    engine.attach(host)

    # Main simulation loop
    if not config.quiet:
        print("\nRunning simulation...")

    try:
        host.run(frame_budget(config), until=engine.is_finished)
    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    finally:
        engine.detach()

    final_state = engine.snapshot()

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        if not visualizer.frames:
            visualizer.buffer_frame()
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
