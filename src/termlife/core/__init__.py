"""Core Game of Life engine."""

from .boundary import BoundaryPolicy
from .grid import Grid
from .rules import Rule, CONWAY
from .seeding import AllDead, RandomSeed, ExplicitPattern, new_grid
from .simulator import Simulator, new_simulator
from .patterns import Pattern, PatternLibrary, PatternFileError, load_grid_file, parse_grid_text

__all__ = [
    "BoundaryPolicy",
    "Grid",
    "Rule",
    "CONWAY",
    "AllDead",
    "RandomSeed",
    "ExplicitPattern",
    "new_grid",
    "Simulator",
    "new_simulator",
    "Pattern",
    "PatternLibrary",
    "PatternFileError",
    "load_grid_file",
    "parse_grid_text",
]
