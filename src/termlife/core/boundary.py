"""Boundary policies for neighbor lookups near the grid edges."""

from enum import Enum


class BoundaryPolicy(Enum):
    """How neighbor lookups treat coordinates beyond the grid edges.

    WRAPPED maps out-of-range coordinates modulo the grid size (toroidal
    topology). FIXED treats everything outside the grid as permanently dead.
    """

    WRAPPED = "wrapped"
    FIXED = "fixed"

    @classmethod
    def from_toroidal(cls, toroidal: bool) -> "BoundaryPolicy":
        """Map a ``--toroidal`` style flag onto a policy."""
        return cls.WRAPPED if toroidal else cls.FIXED
