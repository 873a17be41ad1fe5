"""Tests for the CSV writer, visualizer and reporter."""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np
from PIL import Image

from langtons_ant.export.csv_writer import CSVWriter
from langtons_ant.export.reporter import HIGHWAY_CYCLES, HIGHWAY_PERIOD, Reporter
from langtons_ant.export.visualizer import Visualizer
from langtons_ant.model.automaton import Automaton
from langtons_ant.model.direction import Direction
from langtons_ant.model.state import AntSnapshot, CellChange, StepResult


def stepped_automaton(steps: int, rows: int = 6, columns: int = 6) -> Automaton:
    automaton = Automaton(rows=rows, columns=columns)
    automaton.place_ant(2, 2, Direction.DOWN)
    for _ in range(steps):
        automaton.step()
    return automaton


class TestCSVWriter:
    def test_writes_header_and_rows(self, tmp_path: Path) -> None:
        automaton = Automaton(rows=4, columns=4)
        automaton.place_ant(2, 2, Direction.DOWN)
        out = tmp_path / "nested" / "log.csv"

        with CSVWriter(out) as writer:
            for _ in range(3):
                writer.append(automaton.step())
            assert writer.rows_written == 3

        with open(out, newline='') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 3
        assert rows[0] == {
            'step': '1', 'x': '2', 'y': '3', 'marked': '1',
            'ant_x': '2', 'ant_y': '3', 'direction': 'left',
        }
        assert [r['step'] for r in rows] == ['1', '2', '3']

    def test_append_opens_lazily(self, tmp_path: Path) -> None:
        automaton = Automaton(rows=4, columns=4)
        writer = CSVWriter(tmp_path / "log.csv")
        writer.append(automaton.step())
        writer.close()
        lines = (tmp_path / "log.csv").read_text().splitlines()
        assert lines[0] == ",".join(CSVWriter.FIELDNAMES)
        assert len(lines) == 2


def fed_visualizer(steps: int) -> Visualizer:
    """A visualizer kept current from the diffs of a stepped automaton."""
    automaton = Automaton(rows=6, columns=6)
    automaton.place_ant(2, 2, Direction.DOWN)
    visualizer = Visualizer(6, 6)
    for _ in range(steps):
        result = automaton.step()
        visualizer.apply(result.change)
        visualizer.move_ant(result.ant, result.step)
    return visualizer


class TestVisualizer:
    def test_diffs_reproduce_grid(self) -> None:
        automaton = Automaton(rows=8, columns=8)
        automaton.place_ant(4, 4, Direction.UP)
        visualizer = Visualizer(8, 8)
        for _ in range(200):
            result = automaton.step()
            visualizer.apply(result.change)
            visualizer.move_ant(result.ant, result.step)
        assert np.array_equal(visualizer.cells, automaton.grid.cells)
        assert visualizer.step == 200

    def test_apply_all_matches_random_fill(self) -> None:
        automaton = Automaton(rows=10, columns=10)
        visualizer = Visualizer(10, 10)
        visualizer.apply_all(automaton.randomize(np.random.default_rng(4), 0.3))
        assert np.array_equal(visualizer.cells, automaton.grid.cells)

    def test_render_array_colors(self) -> None:
        visualizer = Visualizer(2, 3)
        visualizer.cells[1, 2] = True
        image = visualizer.render_array()
        assert image.shape == (2, 3, 3)
        assert not np.allclose(image[1, 2], image[0, 0])

    def test_save_snapshot(self, tmp_path: Path) -> None:
        visualizer = fed_visualizer(10)
        out = tmp_path / "snap" / "final.png"
        visualizer.save_snapshot(out)
        assert out.exists()
        with Image.open(out) as img:
            assert img.format == "PNG"

    def test_gif(self, tmp_path: Path) -> None:
        visualizer = fed_visualizer(10)
        visualizer.buffer_frame()
        visualizer.apply(CellChange(0, 0, True))
        visualizer.buffer_frame()
        out = tmp_path / "anim.gif"
        visualizer.generate_gif(out, fps=5)
        assert out.exists()
        with Image.open(out) as img:
            assert img.n_frames == 2

    def test_gif_without_frames_writes_nothing(self, tmp_path: Path) -> None:
        out = tmp_path / "anim.gif"
        Visualizer(4, 4).generate_gif(out)
        assert not out.exists()


class TestReporter:
    def test_tracks_marked_and_peak(self) -> None:
        automaton = Automaton(rows=10, columns=10)
        automaton.place_ant(5, 5, Direction.DOWN)
        reporter = Reporter("cfg.yaml", seed=None)
        for _ in range(150):
            reporter.update(automaton.step())
        assert reporter.marked == automaton.grid.marked_count()
        assert reporter.peak_marked >= reporter.marked
        assert reporter.steps_seen == 150

    def test_counts_edge_wraps(self) -> None:
        automaton = Automaton(rows=4, columns=5)
        automaton.place_ant(0, 2, Direction.LEFT)
        reporter = Reporter("cfg.yaml", seed=1, start_position=(0, 2))
        reporter.update(automaton.step())
        assert reporter.wraps == 1
        reporter.update(automaton.step())
        assert reporter.wraps == 1

    def test_no_highway_in_chaotic_phase(self) -> None:
        automaton = Automaton(rows=200, columns=200)
        automaton.place_ant(100, 100, Direction.UP)
        reporter = Reporter("cfg.yaml", seed=None)
        for _ in range(5000):
            reporter.update(automaton.step())
        assert reporter.highway_step is None

    def test_detects_highway(self) -> None:
        automaton = Automaton(rows=200, columns=200)
        automaton.place_ant(100, 100, Direction.UP)
        reporter = Reporter("cfg.yaml", seed=None, start_position=(100, 100))
        for _ in range(12000):
            reporter.update(automaton.step())
        assert reporter.highway_step is not None
        assert 9000 < reporter.highway_step <= 12000
        assert reporter.wraps == 0

    def test_repeated_non_highway_shift_is_ignored(self) -> None:
        reporter = Reporter("cfg.yaml", seed=None)
        # Every period moves the ant (4, -4): periodic, but not the highway.
        path = [Direction.RIGHT] * 4 + [Direction.UP] * 4
        path += [Direction.LEFT, Direction.RIGHT] * ((HIGHWAY_PERIOD - 8) // 2)
        for step in range(1, HIGHWAY_PERIOD * (HIGHWAY_CYCLES + 2) + 1):
            heading = path[(step - 1) % HIGHWAY_PERIOD]
            reporter.update(StepResult(
                step=step,
                change=CellChange(0, 0, step % 2 == 1),
                ant=AntSnapshot(0, 0, heading),
                heading=heading,
            ))
        assert reporter.highway_step is None

    def test_repeated_diagonal_shift_is_highway(self) -> None:
        reporter = Reporter("cfg.yaml", seed=None)
        path = [Direction.RIGHT] * 2 + [Direction.DOWN] * 2
        path += [Direction.LEFT, Direction.RIGHT] * ((HIGHWAY_PERIOD - 4) // 2)
        total = HIGHWAY_PERIOD * HIGHWAY_CYCLES
        for step in range(1, total + 1):
            heading = path[(step - 1) % HIGHWAY_PERIOD]
            reporter.update(StepResult(
                step=step,
                change=CellChange(0, 0, step % 2 == 1),
                ant=AntSnapshot(0, 0, heading),
                heading=heading,
            ))
        assert reporter.highway_step == total

    def test_summary_text(self, tmp_path: Path) -> None:
        automaton = stepped_automaton(30)
        reporter = Reporter("configs/default.yaml", seed=42)
        report = reporter.generate_summary(
            automaton.snapshot(), tmp_path,
            csv_enabled=True, snapshot_enabled=False, gif_enabled=False
        )
        assert "LANGTON'S ANT SIMULATION REPORT" in report
        assert "Total Steps:           30" in report
        assert "Random Seed: 42" in report
        assert "Highway: not detected" in report
        assert "Snapshot:   (disabled)" in report
        assert str(tmp_path / 'simulation_log.csv') in report
