"""Conway's Game of Life simulation engine."""

from .boundary import BoundaryPolicy
from .grid import Grid
from .rules import Rule, CONWAY


class Simulator:
    """Advances a grid through successive generations.

    Each call to :meth:`advance` reads the whole current generation, writes
    the next one into a separate grid and only then replaces the current
    grid, so every cell is updated simultaneously. The boundary policy and
    rule are fixed at construction.
    """

    def __init__(self, grid: Grid, boundary_policy: BoundaryPolicy, rule: Rule = CONWAY) -> None:
        """Initialize the simulator.

        Args:
            grid: Initial generation
            boundary_policy: Edge handling for neighbor counts
            rule: Transition rule (Conway's B3/S23 by default)

        Raises:
            TypeError: If boundary_policy is not a BoundaryPolicy
        """
        if not isinstance(boundary_policy, BoundaryPolicy):
            raise TypeError(f"boundary_policy must be a BoundaryPolicy, got {boundary_policy!r}")

        self._grid = grid
        self._boundary_policy = boundary_policy
        self._rule = rule
        self._generation = 0

    @property
    def grid(self) -> Grid:
        """The current generation."""
        return self._grid

    @property
    def generation(self) -> int:
        """Number of generations advanced so far."""
        return self._generation

    @property
    def boundary_policy(self) -> BoundaryPolicy:
        return self._boundary_policy

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._grid.population

    def advance(self) -> Grid:
        """Advance the simulation by one generation.

        Returns:
            The new current grid
        """
        neighbor_counts = self._grid.count_all_neighbors(self._boundary_policy)
        next_cells = self._rule.apply(self._grid.cells, neighbor_counts)

        self._grid = Grid.from_cells(next_cells)
        self._generation += 1
        return self._grid

    def run(self, generations: int) -> Grid:
        """Advance a fixed number of generations.

        Args:
            generations: How many times to advance

        Returns:
            The grid after the last generation
        """
        if generations < 0:
            raise ValueError(f"Generations must be non-negative, got {generations}")

        for _ in range(generations):
            self.advance()
        return self._grid


def new_simulator(grid: Grid, boundary_policy: BoundaryPolicy, rule: Rule = CONWAY) -> Simulator:
    """Create a simulator starting at generation 0."""
    return Simulator(grid, boundary_policy, rule)
