"""Common Conway's Game of Life patterns and grid file loading."""

from typing import Dict, List, Tuple, Optional, Union
from pathlib import Path

from .seeding import ExplicitPattern


class PatternFileError(ValueError):
    """Raised when a grid file is not a rectangle of '0' and '1' characters."""


class Pattern:
    """Represents a named Game of Life pattern."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def to_seed(
        self, offset_x: int = 0, offset_y: int = 0, bounds: Optional[Tuple[int, int]] = None
    ) -> ExplicitPattern:
        """Convert to a seeding strategy placed at an offset.

        Args:
            offset_x: Horizontal offset
            offset_y: Vertical offset
            bounds: Optional (width, height); cells falling outside are dropped

        Returns:
            ExplicitPattern with the shifted cells
        """
        shifted = [(x + offset_x, y + offset_y) for x, y in self.cells]
        if bounds is not None:
            width, height = bounds
            shifted = [(x, y) for x, y in shifted if 0 <= x < width and 0 <= y < height]
        return ExplicitPattern(shifted)


class PatternLibrary:
    """Collection of named patterns, preloaded with well-known ones."""

    CATEGORIES: Dict[str, List[str]] = {
        "Still Life": ["Block", "Beehive", "Loaf"],
        "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
        "Spaceships": ["Glider", "Lightweight Spaceship"],
        "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(Pattern("Beehive", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)], "Beehive still life"))
        self.add_pattern(
            Pattern("Loaf", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (3, 2), (2, 3)], "Loaf still life")
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"))
        self.add_pattern(Pattern("Toad", [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)], "Period-2 oscillator"))
        self.add_pattern(Pattern("Beacon", [(0, 0), (1, 0), (0, 1), (3, 2), (2, 3), (3, 3)], "Period-2 oscillator"))

        # Pulsar is symmetric in both axes: build one quadrant and mirror it
        quadrant = [(2, 0), (3, 0), (4, 0), (0, 2), (0, 3), (0, 4), (5, 2), (5, 3), (5, 4), (2, 5), (3, 5), (4, 5)]
        pulsar = sorted({(cx, cy) for x, y in quadrant for cx in (x, 12 - x) for cy in (y, 12 - y)})
        self.add_pattern(Pattern("Pulsar", pulsar, "Period-3 oscillator"))

        # Spaceships
        self.add_pattern(Pattern("Glider", [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)], "Smallest spaceship, period-4"))
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (3, 0), (4, 1), (0, 2), (4, 2), (1, 3), (2, 3), (3, 3), (4, 3)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(6, 0), (0, 1), (1, 1), (1, 2), (5, 2), (6, 2), (7, 2)],
                "Dies after exactly 130 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Acorn",
                [(1, 0), (3, 1), (0, 2), (1, 2), (4, 2), (5, 2), (6, 2)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if it is unknown.

        Lookup is exact first, then case-insensitive.
        """
        if name in self._patterns:
            return self._patterns[name]

        lowered = name.lower()
        for pattern_name, pattern in self._patterns.items():
            if pattern_name.lower() == lowered:
                return pattern
        return None

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories = {category: list(names) for category, names in self.CATEGORIES.items()}
        builtin = {name for names in self.CATEGORIES.values() for name in names}
        categories["Custom"] = [name for name in self._patterns if name not in builtin]

        # Remove empty categories
        return {cat: patterns for cat, patterns in categories.items() if patterns}


def parse_grid_text(text: str) -> Tuple[int, int, ExplicitPattern]:
    """Parse grid text made of '0' (dead) and '1' (alive) characters.

    Each line is one grid row and every line must have the same length.

    Args:
        text: File contents

    Returns:
        Tuple of (width, height, pattern of live cells)

    Raises:
        PatternFileError: On an invalid character, uneven rows or an empty grid
    """
    rows = text.splitlines()
    if not rows or not rows[0]:
        raise PatternFileError("Grid file is empty")

    width = len(rows[0])
    cells = []
    for y, line in enumerate(rows):
        if len(line) != width:
            raise PatternFileError(f"Inconsistent row widths in file (line {y + 1} has {len(line)}, expected {width})")
        for x, char in enumerate(line):
            if char == "1":
                cells.append((x, y))
            elif char != "0":
                raise PatternFileError(f"Invalid character: {char!r} (expected 0/1)")

    return width, len(rows), ExplicitPattern(cells)


def load_grid_file(path: Union[str, Path]) -> Tuple[int, int, ExplicitPattern]:
    """Load a grid file from disk.

    Raises:
        OSError: If the file cannot be read
        PatternFileError: If the contents are malformed
    """
    return parse_grid_text(Path(path).read_text(encoding="utf-8"))
