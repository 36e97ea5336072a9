"""Interfaces to the shaping and rasterization engines, and the values they exchange."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Flag, auto


class CacheKeyFlags(Flag):
    """Style synthesis the rasterizer must apply on top of the face."""
    NONE = 0
    FAKE_BOLD = auto()
    FAKE_ITALIC = auto()


@dataclass(frozen=True, slots=True)
class Attrs:
    """Text attributes for a shaping request. The family is always monospace."""
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Identifies one rasterized glyph: face, size, codepoint and style flags."""
    face_id: int
    font_size: float
    codepoint: int
    flags: CacheKeyFlags = CacheKeyFlags.NONE


@dataclass(frozen=True, slots=True)
class LayoutGlyph:
    """A positioned glyph, in physical pixels relative to the run origin."""
    x: int
    y: int
    cache_key: CacheKey


@dataclass(slots=True)
class LayoutRun:
    """One shaped line. ``line_y`` is the baseline offset from the top of the cell."""
    line_y: int
    glyphs: list[LayoutGlyph] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class GlyphImage:
    """
    An 8-bit coverage bitmap with its placement.

    ``left`` is the horizontal offset from the glyph origin to the first
    column, ``top`` the distance from the baseline up to the first row.
    ``data`` holds ``width * height`` coverage bytes, row-major.
    """
    left: int
    top: int
    width: int
    height: int
    data: bytes


class Shaper(ABC):
    """Turns attributed text plus a font size into positioned glyphs."""

    @abstractmethod
    def shape(self, text: str, attrs: Attrs, font_size: float) -> list[LayoutRun]:
        """Lay out text as a single line at font_size (physical pixels)."""
        ...


class Rasterizer(ABC):
    """Turns a glyph cache key into a coverage bitmap."""

    @abstractmethod
    def get_image(self, cache_key: CacheKey) -> GlyphImage | None:
        """Return the bitmap for cache_key, or None when nothing is drawn.

        Must be safe to call repeatedly with the same key.
        """
        ...
