#!/usr/bin/env python3
"""
Example usage of the termlife package.
"""

from termlife import BoundaryPolicy, PatternLibrary, new_grid, new_simulator


def main():
    """Demonstrate programmatic usage of the termlife engine."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    # Place the glider in the middle of a wrapped 20x20 grid
    grid = new_grid(20, 20, glider.to_seed(offset_x=8, offset_y=8))
    simulator = new_simulator(grid, BoundaryPolicy.WRAPPED)

    print("Initial state:")
    print(simulator.grid)
    print(f"Population: {simulator.population}")
    print()

    for _ in range(10):
        simulator.advance()
        print(f"Generation {simulator.generation}:")
        print(simulator.grid)
        print(f"Population: {simulator.population}")
        print()


if __name__ == "__main__":
    main()
