"""Text shaping, rasterization and font sources."""

from soft_terminal.text.fonts import FontError, FontNotFoundError, FontSystem
from soft_terminal.text.raster import PillowRasterizer
from soft_terminal.text.shaper import PillowShaper
from soft_terminal.text.types import (
    Attrs,
    CacheKey,
    CacheKeyFlags,
    GlyphImage,
    LayoutGlyph,
    LayoutRun,
    Rasterizer,
    Shaper,
)

__all__ = [
    "FontError",
    "FontNotFoundError",
    "FontSystem",
    "PillowRasterizer",
    "PillowShaper",
    "Attrs",
    "CacheKey",
    "CacheKeyFlags",
    "GlyphImage",
    "LayoutGlyph",
    "LayoutRun",
    "Rasterizer",
    "Shaper",
]
