"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import Mock, patch

import pytest

from termlife.core.boundary import BoundaryPolicy
from termlife.frontends.cli import (
    TerminalGameOfLife,
    create_parser,
    main,
    resolve_size,
    validate_args,
)
from termlife.frontends.terminal import ESCAPE, TerminalSession


class ScriptedKeys:
    """Key source returning a fixed sequence, then nothing."""

    def __init__(self, *keys):
        self.keys = list(keys)

    def read_key(self):
        return self.keys.pop(0) if self.keys else None


class TestTerminalGameOfLife:
    """Test cases for the terminal Game of Life app."""

    def test_initialization(self):
        app = TerminalGameOfLife()
        assert app.pattern_library is not None
        assert app.simulator is None
        assert not app.paused

    def test_create_simulator_random(self):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=10, height=8, population_rate=1.0, seed=1)

        assert simulator is app.simulator
        assert simulator.grid.shape == (10, 8)
        assert simulator.population == 80
        assert simulator.boundary_policy is BoundaryPolicy.FIXED
        assert simulator.generation == 0

    def test_create_simulator_toroidal(self):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=5, height=5, toroidal=True)
        assert simulator.boundary_policy is BoundaryPolicy.WRAPPED

    def test_seed_is_reproducible(self):
        first = TerminalGameOfLife().create_simulator(width=12, height=12, population_rate=0.4, seed=5)
        second = TerminalGameOfLife().create_simulator(width=12, height=12, population_rate=0.4, seed=5)
        assert first.grid == second.grid

    def test_create_simulator_with_pattern(self):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=20, height=20, pattern="Blinker", pattern_x=10, pattern_y=10)

        assert sorted(simulator.grid.iter_live_cells()) == [(10, 11), (11, 11), (12, 11)]

    def test_pattern_clipped_to_grid(self):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=5, height=5, pattern="Blinker", pattern_x=4, pattern_y=0)
        assert simulator.population == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_unknown_pattern_falls_back_to_random(self, mock_stdout):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=10, height=10, population_rate=1.0, pattern="NoSuchPattern")

        assert "Warning: Pattern 'NoSuchPattern' not found" in mock_stdout.getvalue()
        assert simulator.population == 100

    @patch("sys.stdout", new_callable=StringIO)
    def test_verbose_output(self, mock_stdout):
        app = TerminalGameOfLife()
        app.create_simulator(width=6, height=4, population_rate=0.25, toroidal=True, verbose=True)

        output = mock_stdout.getvalue()
        assert "Generating random population (rate: 25.00%)" in output
        assert "Initializing 6x4 grid (boundary: wrapped)" in output

    def test_create_simulator_from_file(self, tmp_path):
        path = tmp_path / "grid.data"
        path.write_text("000\n111\n000\n")

        app = TerminalGameOfLife()
        simulator = app.create_simulator(width=50, height=50, grid_file=str(path))

        assert simulator.grid.shape == (3, 3)
        assert sorted(simulator.grid.iter_live_cells()) == [(0, 1), (1, 1), (2, 1)]

    @patch("termlife.frontends.cli.shutil.get_terminal_size", return_value=(2, 2))
    @patch("sys.stdout", new_callable=StringIO)
    def test_file_larger_than_terminal_warns(self, mock_stdout, mock_size, tmp_path):
        path = tmp_path / "grid.data"
        path.write_text("000\n111\n000\n")

        simulator = TerminalGameOfLife().create_simulator(grid_file=str(path))

        assert simulator.grid.shape == (3, 3)
        output = mock_stdout.getvalue()
        assert "Warning: 3x3 grid from" in output
        assert "larger than the 2x2 terminal" in output

    @patch("termlife.frontends.cli.shutil.get_terminal_size", return_value=(30, 12))
    def test_default_size_from_terminal(self, mock_size):
        app = TerminalGameOfLife()
        simulator = app.create_simulator(population_rate=0.0)
        assert simulator.grid.shape == (30, 11)

    @patch("termlife.frontends.cli.shutil.get_terminal_size", return_value=(80, 1))
    def test_resolve_size(self, mock_size):
        assert resolve_size(10, None) == (10, 1)
        assert resolve_size(None, 7) == (80, 7)
        assert resolve_size(3, 4) == (3, 4)

    def test_handle_keys(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=5, height=5, population_rate=0.0)

        assert app.handle_key("p") is True
        assert app.paused
        assert app.handle_key("p") is True
        assert not app.paused

        assert app.handle_key("x") is True
        assert app.handle_key("q") is False
        assert app.handle_key(ESCAPE) is False

    def test_restart(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=6, height=6, population_rate=1.0, toroidal=True, seed=2)
        app.simulator.advance()
        assert app.simulator.population == 0

        app.handle_key("r")

        assert app.simulator.generation == 0
        assert app.simulator.population == 36
        assert app.simulator.boundary_policy is BoundaryPolicy.WRAPPED

    def test_save_and_load_snapshot(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=5, height=5, pattern="Blinker", pattern_x=1, pattern_y=1)
        start = app.simulator.grid.copy()

        app.simulator.advance()
        app.handle_key("s")
        saved = app.simulator.grid.copy()
        assert saved != start
        app.simulator.advance()
        assert app.simulator.grid != saved

        app.handle_key("l")
        assert app.simulator.grid == saved
        assert app.simulator.generation == 0

        # The snapshot survives being loaded
        app.simulator.advance()
        app.handle_key("l")
        assert app.simulator.grid == saved

    def test_load_before_save_restores_start(self):
        """Test that loading with nothing saved goes back to the starting grid."""
        app = TerminalGameOfLife()
        app.create_simulator(width=8, height=8, seed=2)
        start = app.simulator.grid.copy()

        app.simulator.advance()
        assert app.simulator.grid != start

        app.handle_key("l")
        assert app.simulator.grid == start
        assert app.simulator.generation == 0

    def test_status_line(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=4, height=4, pattern="Block")

        assert app.status_line(max_width=200).startswith("Generation 0  Population 4")
        app.toggle_pause()
        assert "[paused]" in app.status_line(max_width=200)

    def test_status_line_fits_width(self):
        """Test that the status line never runs past the terminal edge."""
        app = TerminalGameOfLife()
        app.create_simulator(width=4, height=4, pattern="Block")
        app.simulator.run(1000)
        app.toggle_pause()

        line = app.status_line(max_width=80)
        assert len(line) == 80
        assert line.startswith("Generation 1000  Population 4  [paused]")
        assert app.status_line(max_width=10) == "Generation"
        assert app.status_line(max_width=0) == ""

    @patch("termlife.frontends.cli.shutil.get_terminal_size", return_value=(30, 12))
    def test_status_line_uses_terminal_width(self, mock_size):
        app = TerminalGameOfLife()
        app.create_simulator(width=4, height=4, pattern="Block")

        assert len(app.status_line()) == 30

    def test_run_until_max_generations(self):
        """Test that the loop renders, sleeps, then advances each frame."""
        app = TerminalGameOfLife()
        app.create_simulator(width=5, height=5, pattern="Blinker", pattern_x=1, pattern_y=1)
        session = Mock(spec=TerminalSession)
        sleep = Mock()

        generation = app.run(20, session, ScriptedKeys(), max_generations=3, sleep=sleep)

        assert generation == 3
        assert session.draw.call_count == 4
        assert sleep.call_count == 3
        sleep.assert_called_with(pytest.approx(0.05))

    def test_run_stops_on_quit(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=5, height=5, population_rate=0.0)
        session = Mock(spec=TerminalSession)

        generation = app.run(25, session, ScriptedKeys(None, None, "q"), sleep=Mock())

        assert generation == 2
        assert session.draw.call_count == 2

    def test_run_paused_does_not_advance(self):
        app = TerminalGameOfLife()
        app.create_simulator(width=5, height=5, population_rate=0.0)
        session = Mock(spec=TerminalSession)

        generation = app.run(25, session, ScriptedKeys("p", None, None, "q"), sleep=Mock())

        assert generation == 0
        assert session.draw.call_count == 3

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        TerminalGameOfLife().list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Still Life:" in output
        assert "Oscillators:" in output
        assert "Blinker: 3x1, 3 cells" in output


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args([])

        assert args.width is None
        assert args.height is None
        assert args.population == 0.5
        assert args.toroidal is False
        assert args.fps == 25
        assert args.max_generations is None
        assert args.pattern is None
        assert args.file is None
        assert args.seed is None

    def test_short_args(self):
        args = create_parser().parse_args(["-W", "25", "-H", "35", "-p", "0.15", "-t", "-m", "1000", "-v"])

        assert args.width == 25
        assert args.height == 35
        assert args.population == 0.15
        assert args.toroidal is True
        assert args.max_generations == 1000
        assert args.verbose is True

    def test_pattern_args(self):
        args = create_parser().parse_args(["--pattern", "Glider", "--pattern-x", "10", "--pattern-y", "15"])

        assert args.pattern == "Glider"
        assert args.pattern_x == 10
        assert args.pattern_y == 15

    def test_pattern_and_file_are_exclusive(self):
        with patch("sys.stderr", new_callable=StringIO):
            with pytest.raises(SystemExit):
                create_parser().parse_args(["--pattern", "Glider", "--file", "grid.data"])


class TestValidation:
    """Test argument validation."""

    def make_args(self, **overrides):
        values = dict(
            width=None,
            height=None,
            population=0.5,
            fps=25.0,
            max_generations=None,
            pattern_x=0,
            pattern_y=0,
        )
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_valid(self):
        assert validate_args(self.make_args()) is True
        assert validate_args(self.make_args(width=10, height=10, max_generations=5)) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_collects_all_errors(self, mock_stdout):
        args = self.make_args(width=0, height=-1, population=1.5, fps=0, max_generations=0, pattern_x=-1)

        assert validate_args(args) is False

        output = mock_stdout.getvalue()
        assert "Error: Invalid arguments:" in output
        assert "Width must be positive" in output
        assert "Height must be positive" in output
        assert "Population rate must be between 0.0 and 1.0" in output
        assert "FPS must be positive" in output
        assert "Max generations must be positive" in output
        assert "Pattern X offset must be non-negative" in output


class TestMain:
    """Test the main entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        assert main(["--list-patterns"]) == 0
        assert "Available patterns:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_invalid_args(self, mock_stdout):
        assert main(["--width", "0"]) == 1
        assert "Width must be positive" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_bad_grid_file(self, mock_stdout, tmp_path):
        path = tmp_path / "bad.data"
        path.write_text("01\n012\n")

        assert main(["--file", str(path)]) == 1
        assert "Error: Inconsistent row widths" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_missing_grid_file(self, mock_stdout, tmp_path):
        assert main(["--file", str(tmp_path / "missing.data")]) == 1
        assert "Error:" in mock_stdout.getvalue()

    @patch("termlife.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_runs_to_max_generations(self, mock_stdout, mock_sleep):
        assert main(["-W", "6", "-H", "6", "--pattern", "Block", "-m", "3"]) == 0

        output = mock_stdout.getvalue()
        assert "Stopped after 3 generations (population 4)" in output
        assert mock_sleep.call_count == 3

    @patch("termlife.frontends.cli.TerminalGameOfLife.run", side_effect=KeyboardInterrupt)
    @patch("sys.stdout", new_callable=StringIO)
    def test_interrupt_restores_terminal(self, mock_stdout, mock_run):
        assert main(["-W", "4", "-H", "4"]) == 0

        output = mock_stdout.getvalue()
        assert "Simulation interrupted by user" in output
        assert output.index("\x1b[?1049l") < output.index("Simulation interrupted")
