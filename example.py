#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import BorderPolicy, GameOfLife, Grid, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    grid = Grid(12, 12, BorderPolicy.WRAP)
    game = GameOfLife(grid)

    glider = PatternLibrary().get_pattern("Glider")
    glider.apply_to_grid(grid, offset_x=1, offset_y=1)

    print("Initial state:")
    print(grid.render(), end="")
    print(f"Population: {game.population}")
    print()

    for _ in range(8):
        game.step()
        print(f"Generation {game.generation}:")
        print(grid.render(), end="")
        print()

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
