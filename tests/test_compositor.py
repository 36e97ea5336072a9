"""Tests for cell compositing, using the box shaper and rasterizer from conftest.

Cells are 9x17 pixels at font size 16. An ordinary glyph covers
x 1..4, y 4..11 of its cell; see ``BoxRasterizer``.
"""

from soft_terminal.core.cell import Cell, Modifier
from soft_terminal.core.color import Color
from soft_terminal.core.constants import COMBINING_STRIKEOUT, COMBINING_UNDERLINE
from soft_terminal.render.colors import dim_rgb
from soft_terminal.render.compositor import decorate
from soft_terminal.text.types import CacheKeyFlags

RED = (0xAA, 0, 0)
BLUE = (0, 0, 0xAA)
DEFAULT_FG = (0xAA, 0xAA, 0xAA)
DEFAULT_BG = (0, 0, 0)

GLYPH = (2, 6)      # inside an ordinary glyph
CORNER = (8, 16)    # inside the cell, never covered by a glyph


def pixel(backend, x, y):
    return backend.rgb_pixmap.get_pixel(x, y)


class TestDecorate:
    """Combining marks used for underline and strikeout."""

    def test_no_decoration(self) -> None:
        assert decorate("ab", Modifier.BOLD) == "ab"

    def test_underline(self) -> None:
        assert decorate("ab", Modifier.UNDERLINED) == f"a{COMBINING_UNDERLINE}b{COMBINING_UNDERLINE}"

    def test_both(self) -> None:
        text = decorate("a", Modifier.UNDERLINED | Modifier.CROSSED_OUT)
        assert text == f"a{COMBINING_STRIKEOUT}{COMBINING_UNDERLINE}"


class TestColors:
    """Foreground/background resolution with modifiers."""

    def test_plain_cell(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED, bg=Color.BLUE))])
        assert pixel(backend, *GLYPH) == RED
        assert pixel(backend, *CORNER) == BLUE

    def test_default_colors(self, backend) -> None:
        backend.draw([(0, 0, Cell('A'))])
        assert pixel(backend, *GLYPH) == DEFAULT_FG
        assert pixel(backend, *CORNER) == DEFAULT_BG

    def test_reversed(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED, bg=Color.BLUE, modifier=Modifier.REVERSED))])
        assert pixel(backend, *GLYPH) == BLUE
        assert pixel(backend, *CORNER) == RED

    def test_reversed_defaults_swap_roles(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', modifier=Modifier.REVERSED))])
        assert pixel(backend, *GLYPH) == DEFAULT_BG
        assert pixel(backend, *CORNER) == DEFAULT_FG

    def test_hidden(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED, bg=Color.BLUE, modifier=Modifier.HIDDEN))])
        assert pixel(backend, *GLYPH) == BLUE
        assert pixel(backend, *CORNER) == BLUE

    def test_hidden_and_reversed(self, backend) -> None:
        modifier = Modifier.HIDDEN | Modifier.REVERSED
        backend.draw([(0, 0, Cell('A', fg=Color.RED, bg=Color.BLUE, modifier=modifier))])
        assert pixel(backend, *GLYPH) == RED
        assert pixel(backend, *CORNER) == RED

    def test_dim(self, backend) -> None:
        fg, bg = (200, 180, 160), (90, 60, 30)
        cell = Cell('A', fg=Color.from_rgb(*fg), bg=Color.from_rgb(*bg), modifier=Modifier.DIM)
        backend.draw([(0, 0, cell)])
        assert pixel(backend, *GLYPH) == dim_rgb(fg)
        assert pixel(backend, *CORNER) == dim_rgb(bg)


class TestGlyphs:
    """Glyph placement, decorations and style hints."""

    def test_glyph_extent(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED))])
        assert pixel(backend, 1, 4) == RED
        assert pixel(backend, 4, 11) == RED
        assert pixel(backend, 0, 4) == DEFAULT_BG
        assert pixel(backend, 5, 11) == DEFAULT_BG
        assert pixel(backend, 1, 12) == DEFAULT_BG

    def test_glyph_offset_by_cell(self, backend) -> None:
        backend.draw([(2, 1, Cell('A', fg=Color.RED))])
        assert pixel(backend, 2 * 9 + 2, 17 + 6) == RED
        assert pixel(backend, *GLYPH) == DEFAULT_BG

    def test_blank_is_background_only(self, backend) -> None:
        backend.draw([(0, 0, Cell(' ', bg=Color.BLUE))])
        assert all(pixel(backend, x, y) == BLUE for x in range(9) for y in range(17))

    def test_rasterizer_miss_is_background_only(self, backend) -> None:
        backend.draw([(0, 0, Cell('?', fg=Color.RED, bg=Color.BLUE))])
        assert all(pixel(backend, x, y) == BLUE for x in range(9) for y in range(17))

    def test_underline(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED))])
        assert pixel(backend, 6, 13) == DEFAULT_BG
        backend.draw([(0, 0, Cell('A', fg=Color.RED, modifier=Modifier.UNDERLINED))])
        assert pixel(backend, 6, 13) == RED
        assert pixel(backend, 6, 8) == DEFAULT_BG

    def test_strikeout(self, backend) -> None:
        backend.draw([(0, 0, Cell('A', fg=Color.RED, modifier=Modifier.CROSSED_OUT))])
        assert pixel(backend, 6, 8) == RED
        assert pixel(backend, 6, 13) == DEFAULT_BG

    def test_bold_italic_reach_the_engines(self, backend, shaper, rasterizer) -> None:
        backend.draw([(0, 0, Cell('A', modifier=Modifier.BOLD | Modifier.ITALIC))])
        text, attrs, size = shaper.calls[-1]
        assert text == 'A'
        assert attrs.bold and attrs.italic
        assert size == 16
        assert rasterizer.keys[-1].flags == CacheKeyFlags.FAKE_BOLD | CacheKeyFlags.FAKE_ITALIC

    def test_overflow_survives_neighbor_background(self, backend) -> None:
        # "W" is 16 px wide and spills into column 1 (x 9..15)
        wide = Cell('W', fg=Color.RED)
        neighbor = Cell(' ', bg=Color.BLUE)
        backend.draw([(0, 0, wide), (1, 0, neighbor)])
        assert pixel(backend, 12, 5) == RED
        assert pixel(backend, 12, 12) == BLUE

    def test_overflow_independent_of_order(self, backend) -> None:
        backend.draw([(1, 0, Cell(' ', bg=Color.BLUE)), (0, 0, Cell('W', fg=Color.RED))])
        assert pixel(backend, 12, 5) == RED

    def test_overflow_clipped_to_pixmap(self, backend) -> None:
        # Last column: 7 of the 16 pixels fall outside the 90 px pixmap
        backend.draw([(9, 4, Cell('W', fg=Color.RED))])
        assert pixel(backend, 89, 4 * 17 + 5) == RED
        assert len(backend.get_pixmap_data()) == 90 * 85 * 3
