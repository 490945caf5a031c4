"""Terminal-rendered Conway's Game of Life."""

__version__ = "0.1.0"

from .core.boundary import BoundaryPolicy
from .core.grid import Grid
from .core.seeding import AllDead, RandomSeed, ExplicitPattern, new_grid
from .core.simulator import Simulator, new_simulator
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "BoundaryPolicy",
    "Grid",
    "AllDead",
    "RandomSeed",
    "ExplicitPattern",
    "new_grid",
    "Simulator",
    "new_simulator",
    "Pattern",
    "PatternLibrary",
]
