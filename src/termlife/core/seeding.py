"""Initial seeding strategies for new grids."""

from typing import Iterable, FrozenSet, Optional, Tuple, Union
import numpy as np

from .grid import Grid


class AllDead:
    """Every cell starts dead."""

    def populate(self, grid: Grid) -> None:
        pass

    def __repr__(self) -> str:
        return "AllDead()"


class RandomSeed:
    """Each cell is independently alive with probability ``density``.

    The random source is passed in explicitly so runs can be reproduced
    with a seeded generator.
    """

    def __init__(self, density: float, rng: Optional[np.random.Generator] = None) -> None:
        """Initialize the strategy.

        Args:
            density: Chance each cell will be alive (0.0 to 1.0)
            rng: Random generator to draw from (defaults to a fresh unseeded one)

        Raises:
            ValueError: If density is outside [0, 1]
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")

        self.density = density
        self.rng = rng if rng is not None else np.random.default_rng()

    def populate(self, grid: Grid) -> None:
        mask = self.rng.random(grid.shape) < self.density
        for x, y in zip(*np.nonzero(mask)):
            grid.set_cell(int(x), int(y), True)

    def __repr__(self) -> str:
        return f"RandomSeed(density={self.density})"


class ExplicitPattern:
    """A fixed set of live cell coordinates."""

    def __init__(self, cells: Iterable[Tuple[int, int]]) -> None:
        self.cells: FrozenSet[Tuple[int, int]] = frozenset((int(x), int(y)) for x, y in cells)

    def populate(self, grid: Grid) -> None:
        """Mark every listed cell alive.

        Raises:
            IndexError: If a coordinate lies outside the grid
        """
        for x, y in sorted(self.cells):
            grid.set_cell(x, y, True)

    def __repr__(self) -> str:
        return f"ExplicitPattern({len(self.cells)} cells)"


SeedStrategy = Union[AllDead, RandomSeed, ExplicitPattern]


def new_grid(width: int, height: int, strategy: Optional[SeedStrategy] = None) -> Grid:
    """Create a grid and seed it.

    Args:
        width: Number of columns
        height: Number of rows
        strategy: Initial configuration (defaults to all dead)

    Returns:
        Seeded Grid

    Raises:
        ValueError: If width or height is not positive
        IndexError: If an explicit pattern does not fit the grid
    """
    grid = Grid(width, height)
    (strategy or AllDead()).populate(grid)
    return grid
