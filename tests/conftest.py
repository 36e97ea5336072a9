"""Pytest configuration: deterministic text engines and optional real fonts."""

import os
import unicodedata
from pathlib import Path
from typing import Optional

import pytest

from soft_terminal.core.constants import COMBINING_STRIKEOUT, COMBINING_UNDERLINE, FULL_BLOCK
from soft_terminal.render.backend import SoftBackend
from soft_terminal.text.fonts import FONT_ENV_VAR, find_system_family
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


class BoxShaper(Shaper):
    """
    Monospace layout without a font.

    Every character advances half the font size; combining marks do not
    advance; whitespace produces no glyph. The baseline sits at 3/4 of
    the font size.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Attrs, float]] = []

    def shape(self, text: str, attrs: Attrs, font_size: float) -> list[LayoutRun]:
        self.calls.append((text, attrs, font_size))
        flags = CacheKeyFlags.NONE
        if attrs.bold:
            flags |= CacheKeyFlags.FAKE_BOLD
        if attrs.italic:
            flags |= CacheKeyFlags.FAKE_ITALIC

        run = LayoutRun(line_y=int(font_size * 0.75))
        advance = int(font_size * 0.5)
        pen_x = 0
        for char in text:
            if char.isspace():
                pen_x += advance
                continue
            if unicodedata.combining(char):
                x = pen_x - advance
            else:
                x = pen_x
                pen_x += advance
            run.glyphs.append(LayoutGlyph(x, 0, CacheKey(0, font_size, ord(char), flags)))
        return [run]


def solid(left: int, top: int, width: int, height: int) -> GlyphImage:
    return GlyphImage(left, top, width, height, b"\xff" * (width * height))


class BoxRasterizer(Rasterizer):
    """
    Solid rectangles standing in for glyph bitmaps.

    At font size 16 (baseline 12, cell 9x17):
    - U+2588 is 10x20, giving a 9x17 cell
    - ordinary characters cover x 1..4, y 4..11
    - "W" is 16 px wide and overflows into the next cell (y 4..7)
    - the combining underline is one row at y 13, the strikeout one row at y 8
    - "?" has no bitmap
    """

    def __init__(self) -> None:
        self.keys: list[CacheKey] = []

    def get_image(self, cache_key: CacheKey) -> Optional[GlyphImage]:
        self.keys.append(cache_key)
        size = cache_key.font_size
        char = chr(cache_key.codepoint)
        if char == FULL_BLOCK:
            return solid(0, int(size * 0.75), int(size * 0.625), int(size * 1.25))
        if char == "?":
            return None
        if char == COMBINING_UNDERLINE:
            return solid(0, -1, int(size * 0.5), 1)
        if char == COMBINING_STRIKEOUT:
            return solid(0, int(size * 0.25), int(size * 0.5), 1)
        if char == "W":
            return solid(0, int(size * 0.5), int(size), int(size * 0.25))
        return solid(1, int(size * 0.5), int(size * 0.25), int(size * 0.5))


@pytest.fixture
def shaper() -> BoxShaper:
    return BoxShaper()


@pytest.fixture
def rasterizer() -> BoxRasterizer:
    return BoxRasterizer()


@pytest.fixture
def backend(shaper: BoxShaper, rasterizer: BoxRasterizer) -> SoftBackend:
    """A 10x5 backend at font size 16 with 9x17 pixel cells."""
    return SoftBackend(10, 5, 16, shaper=shaper, rasterizer=rasterizer)


def get_test_font() -> Optional[Path]:
    """
    Locate a real monospace font.

    Set SOFT_TERMINAL_FONT to choose one explicitly; otherwise the
    same discovery the backend uses is tried.
    """
    if env_path := os.environ.get(FONT_ENV_VAR):
        path = Path(env_path).expanduser()
        if path.is_file():
            return path
    styles = find_system_family()
    if styles:
        return styles[(False, False)]
    return None


@pytest.fixture(scope="session")
def system_font() -> Path:
    """Fixture providing a real font file, skips if unavailable."""
    font = get_test_font()
    if font is None:
        pytest.skip(
            "No monospace font found. "
            f"Set {FONT_ENV_VAR} or install DejaVu Sans Mono"
        )
    return font


@pytest.fixture(scope="session")
def font_data(system_font: Path) -> bytes:
    return system_font.read_bytes()
