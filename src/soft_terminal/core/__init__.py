"""Core data structures for terminal cell representation."""

from soft_terminal.core.cell import Cell, Modifier
from soft_terminal.core.color import Color, ColorMode
from soft_terminal.core.grid import Grid

__all__ = ["Cell", "Modifier", "Color", "ColorMode", "Grid"]
