"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import List, Optional

from ..core.grid import BorderPolicy, Grid
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary


# Erase the display and move the cursor home
CLEAR_SCREEN = "\x1b[2J\x1b[H"

USAGE_EXAMPLE = "Example: lifegrid 10 10 20 1 100 1000"


class CLIGameOfLife:
    """Command-line interface for running animated Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def run_simulation(
        self,
        width: int,
        height: int,
        creatures: int,
        border: BorderPolicy,
        iterations: int,
        pause_ms: int,
        pattern: Optional[str] = None,
        seed: Optional[int] = None,
        clear_screen: bool = True,
        verbose: bool = False,
    ) -> dict:
        """Seed a grid and animate it for a fixed number of generations.

        Each generation is computed, rendered and followed by a pause of
        ``pause_ms`` milliseconds.

        Args:
            width: Grid width
            height: Grid height
            creatures: Number of cells to bring to life initially
            border: Edge behaviour of the grid
            iterations: Number of generations to run
            pause_ms: Delay after each rendered generation, in milliseconds
            pattern: Optional pattern name to stamp instead of random cells
            seed: Random seed for reproducible populations
            clear_screen: Emit the terminal clear sequence before each frame
            verbose: Print progress updates

        Returns:
            Simulation statistics

        Raises:
            ValueError: If the pattern name is unknown
        """
        grid = Grid(width, height, border)
        game = GameOfLife(grid)

        if verbose:
            print(f"Initializing {width}x{height} grid (border: {border.value})")

        self._populate(game, creatures, pattern, seed, verbose)
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")
            print(f"Running {iterations} generations ({pause_ms} ms pause)")

        def show(current: GameOfLife) -> None:
            self._render_frame(current.grid, clear_screen)
            if pause_ms > 0:
                time.sleep(pause_ms / 1000.0)

        start_time = time.time()
        game.run(iterations, on_generation=show)
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["initial_population"] = initial_population
        stats["duration_seconds"] = duration
        return stats

    def _populate(
        self, game: GameOfLife, creatures: int, pattern: Optional[str], seed: Optional[int], verbose: bool
    ) -> None:
        """Fill the initial generation from a named pattern or random cells."""
        grid = game.grid

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")

            offset_x, offset_y = loaded_pattern.centered_offset(grid)
            if verbose:
                print(f"Loading pattern '{pattern}' at ({offset_x}, {offset_y})")
            loaded_pattern.apply_to_grid(grid, offset_x, offset_y)
            return

        if creatures > grid.capacity:
            print(f"Warning: {creatures} creatures exceed the {grid.capacity} available cells, capping")

        inserted = game.seed(creatures, rng=seed)
        if verbose:
            print(f"Inserted {inserted} random creatures" + (f" (seed {seed})" if seed is not None else ""))

    def _render_frame(self, grid: Grid, clear_screen: bool = True) -> None:
        """Write one generation to stdout."""
        frame = grid.render()
        if clear_screen:
            frame = CLEAR_SCREEN + frame
        print(frame, end="", flush=True)

    def list_patterns(self) -> None:
        """List available patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(name)
            size = pattern.get_size()
            print(f"  {name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
            if pattern.description:
                print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifegrid",
        description="Animate Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10x10 wrapped grid, 20 creatures, 100 generations, 1 second apart
  lifegrid 10 10 20 1 100 1000

  # 40x20 clipped grid, reproducible population
  lifegrid 40 20 200 0 50 100 --seed 42

  # Glider centred on a wrapped grid
  lifegrid 20 20 0 1 80 150 --pattern Glider
        """,
    )

    # Positional parameters; optional so --list-patterns works on its own
    parser.add_argument("width", type=int, nargs="?", help="Grid width")
    parser.add_argument("height", type=int, nargs="?", help="Grid height")
    parser.add_argument("creatures", type=int, nargs="?", help="Number of initially living cells")
    parser.add_argument("wrap", type=str, nargs="?", help="1 = wrap edges, 0 = clipped edges")
    parser.add_argument("iterations", type=int, nargs="?", help="Number of generations to run")
    parser.add_argument("pause", type=int, nargs="?", help="Pause between generations in milliseconds")

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible initial population",
    )

    parser.add_argument(
        "--pattern",
        type=str,
        help="Start from a named pattern instead of random creatures",
    )

    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Do not clear the terminal before each generation",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    return parser


POSITIONALS = ("width", "height", "creatures", "wrap", "iterations", "pause")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.creatures < 0:
        errors.append("Creatures must be non-negative")

    if args.iterations < 0:
        errors.append("Iterations must be non-negative")

    if args.pause < 0:
        errors.append("Pause must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if any(getattr(args, name) is None for name in POSITIONALS):
        parser.print_usage()
        print(USAGE_EXAMPLE)
        return 1

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(cli.pattern_library.list_patterns())}")
        return 1

    try:
        stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            creatures=args.creatures,
            border=BorderPolicy.from_flag(args.wrap),
            iterations=args.iterations,
            pause_ms=args.pause,
            pattern=args.pattern,
            seed=args.seed,
            clear_screen=not args.no_clear,
            verbose=args.verbose,
        )

        if args.verbose:
            print(
                f"\nCompleted {stats['generation']} generations, "
                f"population {stats['initial_population']} -> {stats['population']}, "
                f"{stats['duration_seconds']:.3f}s"
            )

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
