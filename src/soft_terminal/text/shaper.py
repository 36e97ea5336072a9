"""Lay out a cell's text with Pillow's FreeType metrics."""

import unicodedata

from soft_terminal.text.fonts import FontSystem
from soft_terminal.text.types import Attrs, CacheKey, LayoutGlyph, LayoutRun, Shaper


class PillowShaper(Shaper):
    """
    One glyph per codepoint, advanced by the font's advance width.

    Combining marks do not advance; their ink is centered over the
    preceding character whatever advance and bearing the font gives
    them. Whitespace advances but produces no glyph.
    """

    def __init__(self, font_system: FontSystem):
        self.font_system = font_system

    def shape(self, text: str, attrs: Attrs, font_size: float) -> list[LayoutRun]:
        face_id, flags = self.font_system.select(attrs)
        font = self.font_system.font(face_id, font_size)
        ascent, descent = font.getmetrics()

        # Center the font's ascent+descent in a line of font_size pixels
        line_y = int((font_size - (ascent + descent)) / 2 + ascent)

        run = LayoutRun(line_y=line_y)
        pen_x = 0.0
        base_x, base_advance = 0.0, 0.0
        for char in text:
            if char.isspace():
                pen_x += font.getlength(char)
                continue
            if unicodedata.combining(char):
                left, _, right, _ = font.getbbox(char, anchor="ls")
                x = base_x + base_advance / 2 - (left + right) / 2
            else:
                x = base_x = pen_x
                base_advance = font.getlength(char)
                pen_x += base_advance
            key = CacheKey(face_id, float(font_size), ord(char), flags)
            run.glyphs.append(LayoutGlyph(x=int(round(x)), y=0, cache_key=key))
        return [run]
