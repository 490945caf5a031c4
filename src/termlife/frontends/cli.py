"""Command-line interface running the Game of Life in a terminal."""

import argparse
import shutil
import sys
import time
from typing import Callable, Optional, Tuple

import numpy as np

from ..core.boundary import BoundaryPolicy
from ..core.grid import Grid
from ..core.patterns import PatternLibrary, PatternFileError, load_grid_file
from ..core.seeding import RandomSeed, new_grid
from ..core.simulator import Simulator
from .terminal import ESCAPE, KeyReader, TerminalSession, render_frame

DEFAULT_FPS = 25
DEFAULT_POPULATION = 0.5

KEY_HELP = "p pause  r restart  s save  l load  q quit"


class TerminalGameOfLife:
    """Interactive frame loop around a :class:`Simulator`.

    Besides driving the simulation it keeps the state behind the keyboard
    controls: pause, random restart and an in-memory snapshot.
    """

    def __init__(self, pattern_library: Optional[PatternLibrary] = None) -> None:
        self.pattern_library = pattern_library or PatternLibrary()
        self.simulator: Optional[Simulator] = None
        self.paused = False
        self.population_rate = DEFAULT_POPULATION
        self.rng = np.random.default_rng()
        self._snapshot: Optional[Grid] = None

    def create_simulator(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        population_rate: float = DEFAULT_POPULATION,
        toroidal: bool = False,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
        grid_file: Optional[str] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
    ) -> Simulator:
        """Build the initial grid and the simulator that owns it.

        Args:
            width: Grid width (defaults to the terminal width)
            height: Grid height (defaults to the terminal height minus the status line)
            population_rate: Random population density (0.0-1.0)
            toroidal: Whether grid edges wrap around
            pattern: Optional library pattern name to start from
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            grid_file: Optional 0/1 grid file; its size overrides width and height
            seed: Random seed for reproducible runs
            verbose: Print setup details

        Returns:
            The new simulator, also stored on ``self.simulator``

        Raises:
            PatternFileError: If the grid file is malformed
            OSError: If the grid file cannot be read
        """
        self.population_rate = population_rate
        self.rng = np.random.default_rng(seed)
        policy = BoundaryPolicy.from_toroidal(toroidal)

        if grid_file:
            width, height, strategy = load_grid_file(grid_file)
            if verbose:
                print(f"Loaded {width}x{height} grid from {grid_file} ({len(strategy.cells)} live cells)")
            columns, lines = shutil.get_terminal_size()
            if width > columns or height > lines - 1:
                print(
                    f"Warning: {width}x{height} grid from {grid_file} is larger than the "
                    f"{columns}x{lines} terminal and will wrap on screen"
                )
        else:
            width, height = resolve_size(width, height)
            strategy = None

            if pattern:
                loaded_pattern = self.pattern_library.get_pattern(pattern)
                if loaded_pattern:
                    if verbose:
                        print(f"Loading pattern '{loaded_pattern.name}' at ({pattern_x}, {pattern_y})")
                    strategy = loaded_pattern.to_seed(pattern_x, pattern_y, bounds=(width, height))
                else:
                    print(f"Warning: Pattern '{pattern}' not found, using random population")

            if strategy is None:
                if verbose:
                    print(f"Generating random population (rate: {population_rate:.2%})")
                strategy = RandomSeed(population_rate, self.rng)

        if verbose:
            print(f"Initializing {width}x{height} grid (boundary: {policy.value})")

        self.simulator = Simulator(new_grid(width, height, strategy), policy)
        self.paused = False
        self._snapshot = self.simulator.grid.copy()
        return self.simulator

    def restart(self) -> None:
        """Replace the current grid with a fresh random one of the same size."""
        grid = self.simulator.grid
        strategy = RandomSeed(self.population_rate, self.rng)
        self.simulator = Simulator(new_grid(grid.width, grid.height, strategy), self.simulator.boundary_policy)

    def save_snapshot(self) -> None:
        """Remember the current grid in memory."""
        self._snapshot = self.simulator.grid.copy()

    def load_snapshot(self) -> bool:
        """Restart from the remembered grid.

        Until something is saved this is the starting grid.

        Returns:
            False if there is no simulator yet
        """
        if self._snapshot is None:
            return False
        self.simulator = Simulator(self._snapshot.copy(), self.simulator.boundary_policy)
        return True

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard command.

        Args:
            key: Lowercased key, or ``"esc"``

        Returns:
            False if the loop should stop
        """
        if key in ("q", ESCAPE):
            return False

        if key == "p":
            self.toggle_pause()
        elif key == "r":
            self.restart()
        elif key == "s":
            self.save_snapshot()
        elif key == "l":
            self.load_snapshot()

        return True

    def status_line(self, max_width: Optional[int] = None) -> str:
        """Generation, population and key help, cut to fit on one terminal row.

        Args:
            max_width: Maximum length (defaults to the terminal width)
        """
        if max_width is None:
            max_width = shutil.get_terminal_size().columns

        status = f"Generation {self.simulator.generation}  Population {self.simulator.population}"
        if self.paused:
            status += "  [paused]"
        return f"{status}  |  {KEY_HELP}"[: max(max_width, 0)]

    def run(
        self,
        fps: float,
        session: TerminalSession,
        keys: KeyReader,
        max_generations: Optional[int] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> int:
        """Render, wait one frame, advance; repeat until stopped.

        Args:
            fps: Frames per second
            session: Terminal to draw frames on
            keys: Source of keyboard commands
            max_generations: Optional generation at which to stop
            sleep: Delay function (defaults to time.sleep)

        Returns:
            Generation reached when the loop stopped
        """
        interval = 1.0 / fps
        sleep = sleep or time.sleep

        while True:
            key = keys.read_key()
            if key is not None and not self.handle_key(key):
                break

            session.draw(render_frame(self.simulator.grid), self.status_line())

            if max_generations is not None and self.simulator.generation >= max_generations:
                break

            sleep(interval)

            if not self.paused:
                self.simulator.advance()

        return self.simulator.generation

    def list_patterns(self) -> None:
        """List available patterns by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                size = pattern.get_size()
                print(f"  {name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def resolve_size(width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    """Fill in missing dimensions from the terminal size.

    One row is kept free for the status line.
    """
    columns, lines = shutil.get_terminal_size()
    if width is None:
        width = max(columns, 1)
    if height is None:
        height = max(lines - 1, 1)
    return width, height


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Keys while running:
  {KEY_HELP} (Esc and Ctrl-C also quit)

Examples:
  # Fill the terminal with a random 50% population
  termlife

  # Glider on a 40x20 toroidal grid
  termlife -W 40 -H 20 --pattern Glider --toroidal

  # Start from a file of 0s and 1s
  termlife --file grid.data

  # Reproducible run that stops after 200 generations
  termlife --seed 42 --max-generations 200
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, help="Grid width (default: terminal width)")

    parser.add_argument("-H", "--height", type=int, help="Grid height (default: terminal height)")

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=DEFAULT_POPULATION,
        help=f"Initial random population rate 0.0-1.0 (default: {DEFAULT_POPULATION})",
    )

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Enable toroidal (wraparound) edges instead of dead edges",
    )

    # Initial configuration
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--pattern",
        type=str,
        help="Load a named pattern instead of random population",
    )
    source.add_argument(
        "-f",
        "--file",
        type=str,
        help="Load the initial grid from a file of 0/1 rows (sets width and height)",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible runs",
    )

    # Simulation configuration
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_FPS,
        help=f"Frames per second (default: {DEFAULT_FPS})",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        help="Stop after this many generations (default: run until quit)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print setup details before starting",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width is not None and args.width <= 0:
        errors.append("Width must be positive")

    if args.height is not None and args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.fps <= 0:
        errors.append("FPS must be positive")

    if args.max_generations is not None and args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the terminal interface.

    Returns:
        Process exit status
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not validate_args(args):
        return 1

    app = TerminalGameOfLife()

    if args.list_patterns:
        app.list_patterns()
        return 0

    try:
        app.create_simulator(
            width=args.width,
            height=args.height,
            population_rate=args.population,
            toroidal=args.toroidal,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            grid_file=args.file,
            seed=args.seed,
            verbose=args.verbose,
        )
    except (PatternFileError, OSError, ValueError, IndexError) as e:
        print(f"Error: {e}")
        return 1

    try:
        with TerminalSession() as session, KeyReader() as keys:
            app.run(args.fps, session, keys, max_generations=args.max_generations)
    except KeyboardInterrupt:
        print("Simulation interrupted by user")

    print(f"Stopped after {app.simulator.generation} generations (population {app.simulator.population})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
