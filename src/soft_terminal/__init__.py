"""
soft-terminal: render terminal cells to pixels

A terminal backend that draws into an in-memory RGB image instead of a
terminal device, for screenshots, video frames and custom display surfaces.

Quick Start:
    >>> import soft_terminal as st
    >>> backend = st.SoftBackend(80, 24, font_size=16)
    >>> grid = st.Grid(80, 24)
    >>> grid.put_text(0, 0, "Hello", st.Cell(fg=st.Color.BRIGHT_GREEN))
    >>> backend.draw(grid.cells())
    >>> backend.to_image().save("hello.png")

Features:
    - Default, 256-color and 24-bit colors; bold, italic, dim, reverse,
      hidden, underline, strikeout and blinking text
    - Frame-counted blinking, deterministic for tests
    - High-DPI rendering with a scale factor
    - Embedded font bytes or fonts discovered on the host
    - Pluggable shaping and rasterization engines
    - Render ANSI art and terminal captures to PNG
"""

__version__ = "0.1.0"

# Core types
from soft_terminal.core.cell import Cell, Modifier
from soft_terminal.core.color import Color
from soft_terminal.core.grid import Grid

# Rendering
from soft_terminal.render.backend import Backend, SoftBackend
from soft_terminal.render.colors import ColorResolver

# Fonts
from soft_terminal.text.fonts import FontError, FontNotFoundError, FontSystem

# Convenience functions
from soft_terminal.io.reader import load
from soft_terminal.io.writer import save_image

__all__ = [
    # Version
    "__version__",
    # Core types
    "Cell",
    "Modifier",
    "Color",
    "Grid",
    # Rendering
    "Backend",
    "SoftBackend",
    "ColorResolver",
    # Fonts
    "FontError",
    "FontNotFoundError",
    "FontSystem",
    # I/O
    "load",
    "save_image",
]
