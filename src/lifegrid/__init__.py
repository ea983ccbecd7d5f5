"""Conway's Game of Life on a fixed-size grid with wrapped or clipped edges."""

__version__ = "0.1.0"

from .core.grid import BorderPolicy, Direction, Grid, InvalidDimensionError
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["BorderPolicy", "Direction", "Grid", "InvalidDimensionError", "GameOfLife", "Pattern", "PatternLibrary"]
