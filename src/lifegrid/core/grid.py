"""Grid data structure for the Game of Life automaton."""

from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F


class InvalidDimensionError(ValueError):
    """Raised when a grid is requested with a width or height below 1."""


class BorderPolicy(Enum):
    """How neighbour lookups behave at the grid edges."""

    WRAP = "wrap"
    CLIPPED = "clipped"

    @classmethod
    def from_flag(cls, flag: str) -> "BorderPolicy":
        """Map the command-line flag to a policy ("1" wraps, anything else clips)."""
        return cls.WRAP if str(flag).strip() == "1" else cls.CLIPPED


class Direction(IntEnum):
    """The eight Moore-neighbourhood directions, clockwise from north."""

    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) offset of this direction; y grows downward."""
        return _DELTAS[self]


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.NE: (1, -1),
    Direction.E: (1, 0),
    Direction.SE: (1, 1),
    Direction.S: (0, 1),
    Direction.SW: (-1, 1),
    Direction.W: (-1, 0),
    Direction.NW: (-1, -1),
}


class Grid:
    """Represents a 2D grid for the Game of Life.

    Cells live in a numpy array indexed ``[x, y]``. The border policy is fixed
    at construction and decides whether neighbour lookups wrap around the
    edges (toroidal topology) or treat everything beyond them as dead.
    """

    def __init__(self, width: int, height: int, border: BorderPolicy = BorderPolicy.WRAP) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows
            border: Edge behaviour for neighbour lookups

        Raises:
            InvalidDimensionError: If width or height is smaller than 1
        """
        if width < 1 or height < 1:
            raise InvalidDimensionError(f"Grid dimensions must be positive, got {width}x{height}")

        self._width = width
        self._height = height
        self._border = BorderPolicy(border)
        self._cells = np.zeros((width, height), dtype=np.int8)
        # Second buffer, swapped with _cells on every step
        self._next_cells = np.zeros((width, height), dtype=np.int8)

        # PyTorch tensors for convolution (reused for efficiency)
        self._torch_input = torch.zeros(1, 1, height, width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def border(self) -> BorderPolicy:
        """Border policy chosen at construction."""
        return self._border

    @property
    def wrap_edges(self) -> bool:
        """True when the grid is toroidal."""
        return self._border is BorderPolicy.WRAP

    @property
    def cells(self) -> np.ndarray:
        """Get the current cell array."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def capacity(self) -> int:
        """Total number of cells."""
        return self._width * self._height

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def _resolve(self, x: int, y: int) -> Tuple[int, int]:
        if self.wrap_edges:
            return x % self._width, y % self._height
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds")
        return x, y

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds on a clipped grid
        """
        x, y = self._resolve(x, y)
        return bool(self._cells[x, y])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds on a clipped grid
        """
        x, y = self._resolve(x, y)
        self._cells[x, y] = 1 if alive else 0

    def toggle_cell(self, x: int, y: int) -> bool:
        """Toggle the state of a cell and return its new state."""
        new_state = not self.get_cell(x, y)
        self.set_cell(x, y, new_state)
        return new_state

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(0)

    def random_insert(self, count: int, rng: Optional[Union[int, np.random.Generator]] = None) -> int:
        """Bring ``count`` distinct, uniformly chosen cells to life.

        Cells are drawn without replacement, so the call always terminates.
        Requests above the grid's capacity are capped to it. Only sets cells
        alive; callers seed a cleared grid to get an exact population.

        Args:
            count: Number of cells to insert
            rng: numpy Generator or integer seed (fresh entropy when None)

        Returns:
            Number of cells actually inserted

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Seed count must be non-negative, got {count}")

        count = min(count, self.capacity)
        if count == 0:
            return 0

        generator = np.random.default_rng(rng)
        chosen = generator.choice(self.capacity, size=count, replace=False)
        xs, ys = np.unravel_index(chosen, self.shape)
        self._cells[xs, ys] = 1
        return count

    def _check_on_grid(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds")

    def _crosses_edge(self, x: int, y: int, direction: Direction) -> bool:
        """Whether stepping from (x, y) in ``direction`` leaves a clipped grid."""
        top = y == 0
        bottom = y == self._height - 1
        left = x == 0
        right = x == self._width - 1

        if direction is Direction.N:
            return top
        if direction is Direction.NE:
            return top or right
        if direction is Direction.E:
            return right
        if direction is Direction.SE:
            return bottom or right
        if direction is Direction.S:
            return bottom
        if direction is Direction.SW:
            return bottom or left
        if direction is Direction.W:
            return left
        # Direction.NW
        return top or left

    def neighbor_alive(self, x: int, y: int, direction: Direction) -> bool:
        """Check whether the neighbour of (x, y) in ``direction`` is alive.

        Args:
            x: Column coordinate, 0 <= x < width
            y: Row coordinate, 0 <= y < height
            direction: One of the eight Moore directions

        Returns:
            True if that neighbour is alive under the border policy

        Raises:
            IndexError: If (x, y) is not on the grid
        """
        self._check_on_grid(x, y)
        direction = Direction(direction)
        if not self.wrap_edges and self._crosses_edge(x, y, direction):
            return False

        dx, dy = direction.delta
        nx = (x + dx) % self._width
        ny = (y + dy) % self._height
        return bool(self._cells[nx, ny])

    def neighbor_count(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        self._check_on_grid(x, y)

        return sum(1 for direction in Direction if self.neighbor_alive(x, y, direction))

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch-accelerated convolution.

        Returns:
            2D array with neighbor counts for each cell
        """
        # Grid uses (width, height) but PyTorch expects (height, width), so transpose
        self._torch_input[0, 0] = torch.from_numpy((self._cells.T > 0).astype(np.float32))

        if self.wrap_edges:
            padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        else:
            padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="constant", value=0.0)
        neighbors = F.conv2d(padded, self._torch_kernel)

        # Convert back to numpy and transpose back to (width, height)
        return neighbors[0, 0].numpy().astype(np.int8).T

    def step(self) -> "Grid":
        """Replace the cells with the next generation.

        Every count is taken from the current generation before any cell
        changes; the result is written to the spare buffer and swapped in.

        Returns:
            This grid, for chaining
        """
        counts = self.count_all_neighbors()
        alive = self._cells > 0

        survives = alive & ((counts == 2) | (counts == 3))
        born = ~alive & (counts == 3)

        self._next_cells[:] = survives | born
        self._cells, self._next_cells = self._next_cells, self._cells
        return self

    def render(self, alive: str = "#", dead: str = " ") -> str:
        """Render the grid as text, one newline-terminated line per row.

        Args:
            alive: Glyph for living cells
            dead: Glyph for dead cells
        """
        lines = []
        for y in range(self._height):
            lines.append("".join(alive if self._cells[x, y] else dead for x in range(self._width)))
            lines.append("\n")
        return "".join(lines)

    def copy(self) -> "Grid":
        """Return an independent grid with the same shape, policy and cells."""
        duplicate = Grid(self._width, self._height, self._border)
        duplicate._cells[:] = self._cells
        return duplicate

    def copy_from(self, other: "Grid") -> None:
        """Copy cell states from another grid.

        Raises:
            ValueError: If grids have different dimensions
        """
        if other.shape != self.shape:
            raise ValueError(f"Grid dimensions don't match: {other.shape} vs {self.shape}")

        self._cells[:] = other._cells

    def to_list(self) -> list:
        """Convert grid to nested list, indexed ``[x][y]``."""
        return self._cells.tolist()

    def from_list(self, data: list) -> None:
        """Load grid from nested list.

        Raises:
            ValueError: If data dimensions don't match grid
        """
        arr = np.array(data, dtype=np.int8)
        if arr.shape != self.shape:
            raise ValueError(f"Data shape {arr.shape} doesn't match grid {self.shape}")

        self._cells[:] = arr != 0

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return (
            self.shape == other.shape
            and self._border is other._border
            and np.array_equal(self._cells, other._cells)
        )

    def __repr__(self) -> str:
        return f"Grid({self._width}, {self._height}, border={self._border.name})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return self.render(alive="*", dead=".").rstrip("\n")
