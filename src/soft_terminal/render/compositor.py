"""Paint grid cells into a pixmap: backgrounds first, then glyphs."""

from typing import Iterable

from soft_terminal.core.cell import Cell, Modifier
from soft_terminal.core.constants import COMBINING_STRIKEOUT, COMBINING_UNDERLINE
from soft_terminal.core.grid import Grid
from soft_terminal.render.blink import BlinkClock
from soft_terminal.render.colors import RGB, ColorResolver
from soft_terminal.render.metrics import CellMetrics
from soft_terminal.render.pixmap import RgbPixmap
from soft_terminal.text.types import Attrs, Rasterizer, Shaper


def decorate(symbol: str, modifier: Modifier) -> str:
    """Append combining strikeout/underline marks after every character."""
    marks = ""
    if modifier & Modifier.CROSSED_OUT:
        marks += COMBINING_STRIKEOUT
    if modifier & Modifier.UNDERLINED:
        marks += COMBINING_UNDERLINE
    if not marks:
        return symbol
    return "".join(char + marks for char in symbol)


class CellCompositor:
    """
    Renders cells of a Grid into an RgbPixmap.

    Glyphs may overflow their cell (wide or connected glyphs); they are
    clipped only to the pixmap. That is why ``paint`` fills every
    background in the repaint set before drawing any glyph: a later
    neighbor's background must not erase an earlier cell's overflow.
    """

    def __init__(
        self,
        shaper: Shaper,
        rasterizer: Rasterizer,
        resolver: ColorResolver | None = None,
    ):
        self.shaper = shaper
        self.rasterizer = rasterizer
        self.resolver = resolver or ColorResolver()

    def paint(
        self,
        pixmap: RgbPixmap,
        grid: Grid,
        positions: Iterable[tuple[int, int]],
        metrics: CellMetrics,
        blink: BlinkClock,
        redraw: set[tuple[int, int]],
    ) -> None:
        """Two-pass repaint of every position."""
        positions = list(positions)
        for x, y in positions:
            self.draw_background(pixmap, grid, x, y, metrics)
        for x, y in positions:
            self.draw_foreground(pixmap, grid, x, y, metrics, blink, redraw)

    def background_color(self, cell: Cell) -> RGB:
        """The fill color of a cell, after reverse and dim."""
        if cell.modifier & Modifier.REVERSED:
            color = self.resolver.resolve(cell.fg, foreground=True)
        else:
            color = self.resolver.resolve(cell.bg, foreground=False)
        if cell.modifier & Modifier.DIM:
            color = self.resolver.dim(color)
        return color

    def glyph_colors(self, cell: Cell) -> tuple[RGB, RGB]:
        """Glyph color and the background it is blended over.

        The blend background is always the cell's fill color, so a hidden
        glyph (foreground replaced by background) leaves no trace.
        """
        bg = self.background_color(cell)
        if cell.modifier & Modifier.HIDDEN:
            return bg, bg
        if cell.modifier & Modifier.REVERSED:
            fg = self.resolver.resolve(cell.bg, foreground=False)
        else:
            fg = self.resolver.resolve(cell.fg, foreground=True)
        if cell.modifier & Modifier.DIM:
            fg = self.resolver.dim(fg)
        return fg, bg

    def draw_background(
        self,
        pixmap: RgbPixmap,
        grid: Grid,
        x: int,
        y: int,
        metrics: CellMetrics,
    ) -> None:
        cell_w, cell_h = metrics.physical_width, metrics.physical_height
        begin_x, begin_y = x * cell_w, y * cell_h
        if begin_x >= pixmap.width or begin_y >= pixmap.height:
            return
        if not grid.contains(x, y):
            return
        pixmap.fill_rect(begin_x, begin_y, cell_w, cell_h, self.background_color(grid.get(x, y)))

    def draw_foreground(
        self,
        pixmap: RgbPixmap,
        grid: Grid,
        x: int,
        y: int,
        metrics: CellMetrics,
        blink: BlinkClock,
        redraw: set[tuple[int, int]],
    ) -> None:
        if not grid.contains(x, y):
            return
        cell = grid.get(x, y)
        begin_x = x * metrics.physical_width
        begin_y = y * metrics.physical_height

        fg, bg = self.glyph_colors(cell)

        if cell.modifier & Modifier.SLOW_BLINK:
            redraw.add((x, y))
            if blink.slow:
                fg = bg
        if cell.modifier & Modifier.RAPID_BLINK:
            redraw.add((x, y))
            if blink.fast:
                fg = bg

        text = decorate(cell.symbol, cell.modifier)
        attrs = Attrs(
            bold=bool(cell.modifier & Modifier.BOLD),
            italic=bool(cell.modifier & Modifier.ITALIC),
        )
        font_size = metrics.physical_font_size

        width, height = pixmap.width, pixmap.height
        data = pixmap.data()
        blend = self.resolver.blend
        bg_rgba = (bg[0], bg[1], bg[2], 255)
        for run in self.shaper.shape(text, attrs, font_size):
            for glyph in run.glyphs:
                image = self.rasterizer.get_image(glyph.cache_key)
                if image is None:
                    continue
                origin_x = glyph.x + image.left
                origin_y = run.line_y + glyph.y - image.top
                i = 0
                for off_y in range(image.height):
                    real_y = origin_y + off_y
                    py = begin_y + real_y
                    if real_y < 0 or py >= height:
                        i += image.width
                        continue
                    row = py * width
                    for off_x in range(image.width):
                        real_x = origin_x + off_x
                        px = begin_x + real_x
                        alpha = image.data[i]
                        i += 1
                        if real_x < 0 or px >= width:
                            continue
                        j = (row + px) * 3
                        data[j:j + 3] = bytes(blend((fg[0], fg[1], fg[2], alpha), bg_rgba))
