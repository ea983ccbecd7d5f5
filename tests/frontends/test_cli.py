"""Tests for the CLI frontend."""

import argparse
from unittest.mock import patch
from io import StringIO

import pytest

from lifegrid.core.grid import BorderPolicy, Grid
from lifegrid.frontends.cli import (
    CLEAR_SCREEN,
    CLIGameOfLife,
    create_parser,
    validate_args,
    main,
)


def make_args(**overrides) -> argparse.Namespace:
    """Build a namespace with valid defaults for validate_args."""
    values = dict(width=10, height=10, creatures=20, wrap="1", iterations=5, pause=0)
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGameOfLife()
        assert len(cli.pattern_library.list_patterns()) > 0

    @patch("lifegrid.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_random(self, mock_stdout, mock_sleep):
        """Test running an animated simulation with random creatures."""
        cli = CLIGameOfLife()

        stats = cli.run_simulation(
            width=6,
            height=4,
            creatures=8,
            border=BorderPolicy.WRAP,
            iterations=3,
            pause_ms=250,
            seed=11,
        )

        assert stats["generation"] == 3
        assert stats["initial_population"] == 8
        assert stats["grid_size"] == (6, 4)
        assert "duration_seconds" in stats

        output = mock_stdout.getvalue()
        assert output.count(CLEAR_SCREEN) == 3
        # Each frame is 4 rows
        assert output.count("\n") == 12

        assert mock_sleep.call_count == 3
        mock_sleep.assert_called_with(0.25)

    @patch("lifegrid.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_no_pause(self, mock_stdout, mock_sleep):
        """Test that a zero pause never sleeps."""
        cli = CLIGameOfLife()
        cli.run_simulation(5, 5, 5, BorderPolicy.CLIPPED, 2, 0)
        mock_sleep.assert_not_called()

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_with_pattern(self, mock_stdout):
        """Test the blinker frames without clearing."""
        cli = CLIGameOfLife()

        stats = cli.run_simulation(
            width=5,
            height=5,
            creatures=0,
            border=BorderPolicy.CLIPPED,
            iterations=2,
            pause_ms=0,
            pattern="Blinker",
            clear_screen=False,
        )

        assert stats["initial_population"] == 3
        assert stats["population"] == 3

        vertical = "     \n  #  \n  #  \n  #  \n     \n"
        horizontal = "     \n     \n ### \n     \n     \n"
        assert mock_stdout.getvalue() == vertical + horizontal

    def test_run_simulation_unknown_pattern(self):
        """Test that an unknown pattern is rejected before any frame is drawn."""
        cli = CLIGameOfLife()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            with pytest.raises(ValueError, match="Pattern 'Nope' not found"):
                cli.run_simulation(4, 4, 6, BorderPolicy.WRAP, 3, 0, pattern="Nope", seed=1)

        assert mock_stdout.getvalue() == ""

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_caps_creatures(self, mock_stdout):
        """Test that too many creatures are capped with a warning."""
        cli = CLIGameOfLife()

        stats = cli.run_simulation(3, 3, 50, BorderPolicy.CLIPPED, 0, 0)

        assert stats["initial_population"] == 9
        assert "Warning: 50 creatures exceed the 9 available cells" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_verbose(self, mock_stdout):
        """Test verbose progress output."""
        cli = CLIGameOfLife()
        cli.run_simulation(4, 4, 3, BorderPolicy.WRAP, 1, 0, seed=5, clear_screen=False, verbose=True)

        output = mock_stdout.getvalue()
        assert "Initializing 4x4 grid (border: wrap)" in output
        assert "Inserted 3 random creatures (seed 5)" in output
        assert "Initial population: 3 cells" in output

    def test_run_simulation_invalid_dimensions(self):
        """Test that the grid rejects invalid dimensions."""
        cli = CLIGameOfLife()
        with pytest.raises(ValueError):
            cli.run_simulation(0, 5, 1, BorderPolicy.WRAP, 1, 0)

    @patch("sys.stdout", new_callable=StringIO)
    def test_render_frame(self, mock_stdout):
        """Test a single frame with the clear sequence."""
        cli = CLIGameOfLife()
        grid = Grid(2, 1)
        grid.set_cell(0, 0, True)

        cli._render_frame(grid)

        assert mock_stdout.getvalue() == CLEAR_SCREEN + "# \n"

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test pattern listing."""
        cli = CLIGameOfLife()
        cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Blinker: 3x1, 3 cells" in output
        assert "Glider" in output


class TestArgumentParsing:
    """Test cases for argument parsing and validation."""

    def test_create_parser(self):
        """Test parsing the six positional parameters."""
        parser = create_parser()
        args = parser.parse_args(["10", "12", "20", "1", "100", "1000"])

        assert args.width == 10
        assert args.height == 12
        assert args.creatures == 20
        assert args.wrap == "1"
        assert args.iterations == 100
        assert args.pause == 1000
        assert args.seed is None
        assert args.no_clear is False

    def test_parser_options(self):
        """Test optional flags."""
        parser = create_parser()
        args = parser.parse_args(["5", "5", "3", "0", "2", "0", "--seed", "7", "--no-clear", "-v"])

        assert args.seed == 7
        assert args.no_clear is True
        assert args.verbose is True

    def test_parser_rejects_non_integer(self):
        """Test that malformed numbers are reported by argparse."""
        parser = create_parser()
        with patch("sys.stderr", new_callable=StringIO):
            with pytest.raises(SystemExit) as excinfo:
                parser.parse_args(["ten", "10", "20", "1", "100", "1000"])
        assert excinfo.value.code == 2

    def test_validate_args_valid(self):
        """Test validation of valid arguments."""
        assert validate_args(make_args()) is True
        assert validate_args(make_args(creatures=0, iterations=0)) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_invalid(self, mock_stdout):
        """Test that every problem is reported."""
        args = make_args(width=0, height=-1, creatures=-2, iterations=-3, pause=-4)

        assert validate_args(args) is False

        output = mock_stdout.getvalue()
        assert "Width must be positive" in output
        assert "Height must be positive" in output
        assert "Creatures must be non-negative" in output
        assert "Iterations must be non-negative" in output
        assert "Pause must be non-negative" in output


class TestMain:
    """Test cases for the main entry point."""

    @patch("lifegrid.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_success(self, mock_stdout, mock_sleep):
        """Test a complete run."""
        result = main(["6", "6", "10", "1", "3", "10", "--seed", "1"])

        assert result == 0
        assert mock_stdout.getvalue().count(CLEAR_SCREEN) == 3
        assert mock_sleep.call_count == 3

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_clipped_pattern(self, mock_stdout):
        """Test the wrap flag and pattern option together."""
        result = main(["5", "5", "0", "0", "1", "0", "--pattern", "Blinker", "--no-clear"])

        assert result == 0
        assert mock_stdout.getvalue() == "     \n  #  \n  #  \n  #  \n     \n"

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_missing_parameters(self, mock_stdout):
        """Test that missing positionals print the usage."""
        assert main(["10", "10"]) == 1

        output = mock_stdout.getvalue()
        assert "usage:" in output
        assert "Example: lifegrid 10 10 20 1 100 1000" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_arguments(self, mock_stdout):
        """Test that invalid values fail validation."""
        assert main(["0", "10", "5", "1", "10", "0"]) == 1
        assert "Width must be positive" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unknown_pattern(self, mock_stdout):
        """Test that an unknown pattern is an error."""
        assert main(["5", "5", "0", "1", "1", "0", "--pattern", "Nope"]) == 1
        assert "Error: Pattern 'Nope' not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_list_patterns(self, mock_stdout):
        """Test listing patterns without positionals."""
        assert main(["--list-patterns"]) == 0
        assert "Available patterns:" in mock_stdout.getvalue()

    @patch("lifegrid.frontends.cli.CLIGameOfLife.run_simulation", side_effect=KeyboardInterrupt)
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_keyboard_interrupt(self, mock_stdout, mock_run):
        """Test interrupting the animation."""
        assert main(["5", "5", "3", "1", "100", "100"]) == 1
        assert "Simulation interrupted by user" in mock_stdout.getvalue()

    @patch("lifegrid.frontends.cli.CLIGameOfLife.run_simulation", side_effect=RuntimeError("boom"))
    @patch("sys.stderr", new_callable=StringIO)
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unexpected_error_verbose(self, mock_stdout, mock_stderr, mock_run):
        """Test that unexpected errors are reported with a traceback in verbose mode."""
        assert main(["5", "5", "3", "1", "2", "0", "-v"]) == 1

        assert "Error: boom" in mock_stdout.getvalue()
        assert "Traceback" in mock_stderr.getvalue()
        assert "RuntimeError: boom" in mock_stderr.getvalue()

    @patch("lifegrid.frontends.cli.CLIGameOfLife.run_simulation", side_effect=RuntimeError("boom"))
    @patch("sys.stderr", new_callable=StringIO)
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unexpected_error_quiet(self, mock_stdout, mock_stderr, mock_run):
        """Test that unexpected errors skip the traceback without verbose."""
        assert main(["5", "5", "3", "1", "2", "0"]) == 1

        assert "Error: boom" in mock_stdout.getvalue()
        assert mock_stderr.getvalue() == ""
