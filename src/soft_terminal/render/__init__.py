"""Rendering terminal cells into pixels."""

from soft_terminal.render.backend import Backend, Position, Size, SoftBackend, WindowSize
from soft_terminal.render.blink import BlinkClock
from soft_terminal.render.colors import ColorResolver, blend_rgba, dim_rgb
from soft_terminal.render.compositor import CellCompositor
from soft_terminal.render.metrics import CellMetrics, ScaleContext
from soft_terminal.render.pixmap import RgbPixmap

__all__ = [
    "Backend",
    "Position",
    "Size",
    "SoftBackend",
    "WindowSize",
    "BlinkClock",
    "ColorResolver",
    "blend_rgba",
    "dim_rgb",
    "CellCompositor",
    "CellMetrics",
    "ScaleContext",
    "RgbPixmap",
]
