"""Conway's Game of Life implementation."""

from typing import Callable, Dict, Optional, Union
import numpy as np

from .grid import Grid


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Only the current generation is kept; the engine has no notion of time.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
        """
        self.grid = grid
        self._generation = 0

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    def seed(self, count: int, rng: Optional[Union[int, np.random.Generator]] = None) -> int:
        """Clear the grid and insert ``count`` random living cells.

        Returns:
            Number of cells actually inserted (capped at the grid capacity)
        """
        self.grid.clear()
        return self.grid.random_insert(count, rng=rng)

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self.grid.step()
        self._generation += 1

    def run(self, iterations: int, on_generation: Optional[Callable[["GameOfLife"], None]] = None) -> int:
        """Advance exactly ``iterations`` generations.

        Args:
            iterations: Number of generations to compute
            on_generation: Called with the game after every step

        Returns:
            The generation number reached

        Raises:
            ValueError: If iterations is negative
        """
        if iterations < 0:
            raise ValueError(f"Iterations must be non-negative, got {iterations}")

        for _ in range(iterations):
            self.step()
            if on_generation is not None:
                on_generation(self)

        return self._generation

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with generation, population and grid details
        """
        return {
            "generation": self._generation,
            "population": self.population,
            "grid_size": self.grid.shape,
            "border": self.grid.border.value,
            "population_density": self.population / self.grid.capacity,
        }
