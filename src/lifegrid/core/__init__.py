"""Core cellular automaton logic."""

from .grid import BorderPolicy, Direction, Grid, InvalidDimensionError
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary

__all__ = ["BorderPolicy", "Direction", "Grid", "InvalidDimensionError", "GameOfLife", "Pattern", "PatternLibrary"]
