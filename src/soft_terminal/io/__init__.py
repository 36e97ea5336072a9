"""File I/O: ANSI input and image output."""

from soft_terminal.io.reader import load
from soft_terminal.io.writer import save_image

__all__ = ["load", "save_image"]
