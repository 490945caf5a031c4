"""Transition rules mapping (current state, neighbor count) to the next state."""

from typing import FrozenSet
import numpy as np


class Rule:
    """Birth/survival rule for a two-state Moore-neighborhood automaton.

    A dead cell becomes alive when its neighbor count is in ``birth``; a live
    cell stays alive when its count is in ``survival``. Every other cell is
    dead in the next generation.
    """

    def __init__(self, name: str, birth: FrozenSet[int], survival: FrozenSet[int]) -> None:
        self.name = name
        self.birth = frozenset(birth)
        self.survival = frozenset(survival)

    def next_state(self, alive: bool, neighbors: int) -> bool:
        """Next state of a single cell."""
        if alive:
            return neighbors in self.survival
        return neighbors in self.birth

    def apply(self, cells: np.ndarray, neighbor_counts: np.ndarray) -> np.ndarray:
        """Compute the next generation for a whole array of cells.

        Args:
            cells: Current cell states, nonzero meaning alive
            neighbor_counts: Neighbor count for each cell, same shape as ``cells``

        Returns:
            New int8 array with the next states; the inputs are left untouched
        """
        alive = cells != 0
        born = ~alive & np.isin(neighbor_counts, list(self.birth))
        survives = alive & np.isin(neighbor_counts, list(self.survival))
        return (born | survives).astype(np.int8)

    def __repr__(self) -> str:
        birth = "".join(str(n) for n in sorted(self.birth))
        survival = "".join(str(n) for n in sorted(self.survival))
        return f"Rule({self.name!r}, B{birth}/S{survival})"


# Under-population below 2, survival on 2-3, over-population above 3,
# reproduction on exactly 3.
CONWAY = Rule("Conway", birth=frozenset({3}), survival=frozenset({2, 3}))
