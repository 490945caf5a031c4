"""Grid data structure for the Game of Life."""

from typing import Tuple, Iterator
import numpy as np
import torch
import torch.nn.functional as F

from .boundary import BoundaryPolicy


# Moore neighborhood: every cell in the 3x3 block except the center.
_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)

_NEIGHBOR_OFFSETS = tuple((dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0))


class Grid:
    """Represents a dense 2D grid of alive/dead cells.

    Cells are stored in a numpy array indexed ``[x, y]``. The grid itself has
    no notion of rules or rendering; edge handling for neighbor counts is
    chosen per call through a :class:`BoundaryPolicy`.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize an all-dead grid.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells = np.zeros((width, height), dtype=np.int8)

    @classmethod
    def from_cells(cls, cells: np.ndarray) -> "Grid":
        """Build a grid that takes ownership of an existing ``(width, height)`` array.

        Args:
            cells: 2D array of cell states, nonzero meaning alive

        Returns:
            New Grid wrapping the array
        """
        if cells.ndim != 2:
            raise ValueError(f"Expected a 2D cell array, got shape {cells.shape}")

        grid = cls(*cells.shape)
        grid._cells = (cells != 0).astype(np.int8)
        return grid

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return bool(self._cells[x, y])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        self._cells[x, y] = 1 if alive else 0

    get = get_cell
    set = set_cell

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def iter_live_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) coordinates of living cells in column-major order."""
        xs, ys = np.nonzero(self._cells)
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        return Grid.from_cells(self._cells.copy())

    def count_live_neighbors(self, x: int, y: int, policy: BoundaryPolicy) -> int:
        """Count living cells in the Moore neighborhood of (x, y).

        Args:
            x: Column coordinate
            y: Row coordinate
            policy: How to treat neighbors beyond the grid edges

        Returns:
            Number of living neighbors (0-8)

        Raises:
            IndexError: If (x, y) itself is out of bounds
        """
        self._check_bounds(x, y)

        count = 0
        for dx, dy in _NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy

            if policy is BoundaryPolicy.WRAPPED:
                count += self._cells[nx % self.width, ny % self.height]
            elif 0 <= nx < self.width and 0 <= ny < self.height:
                count += self._cells[nx, ny]

        return int(count)

    def count_all_neighbors(self, policy: BoundaryPolicy) -> np.ndarray:
        """Count neighbors for every cell at once with a PyTorch convolution.

        The result is a fresh array; the grid's own cells are only read.

        Args:
            policy: How to treat neighbors beyond the grid edges

        Returns:
            ``(width, height)`` int8 array of neighbor counts
        """
        # PyTorch expects (height, width), so transpose in and out
        state = torch.from_numpy(np.ascontiguousarray(self._cells.T, dtype=np.float32)).unsqueeze(0).unsqueeze(0)

        if policy is BoundaryPolicy.WRAPPED:
            padded = F.pad(state, (1, 1, 1, 1), mode="circular")
            neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)
        else:
            neighbors = F.conv2d(state, _NEIGHBOR_KERNEL, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8).T

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same shape and cell states."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                row.append("*" if self._cells[x, y] else ".")
            result.append("".join(row))
        return "\n".join(result)
