"""Rasterize glyphs to coverage bitmaps with Pillow, with a per-instance cache."""

import math

from PIL import Image, ImageDraw

from soft_terminal.text.fonts import FontSystem
from soft_terminal.text.types import CacheKey, CacheKeyFlags, GlyphImage, Rasterizer

# Horizontal shift per pixel of height for synthesized italics
ITALIC_SLANT = 0.2


class PillowRasterizer(Rasterizer):
    """
    Render glyphs through ``ImageDraw.text`` into 8-bit masks.

    Results, including misses, are memoized per cache key for the
    lifetime of the instance.
    """

    def __init__(self, font_system: FontSystem):
        self.font_system = font_system
        self._cache: dict[CacheKey, GlyphImage | None] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    def get_image(self, cache_key: CacheKey) -> GlyphImage | None:
        if cache_key in self._cache:
            return self._cache[cache_key]
        image = self._render(cache_key)
        self._cache[cache_key] = image
        return image

    def _render(self, key: CacheKey) -> GlyphImage | None:
        font = self.font_system.font(key.face_id, key.font_size)
        char = chr(key.codepoint)
        stroke = 0
        if key.flags & CacheKeyFlags.FAKE_BOLD:
            stroke = max(1, round(key.font_size / 32))

        left, top, right, bottom = font.getbbox(char, anchor="ls", stroke_width=stroke)
        width, height = right - left, bottom - top
        if width <= 0 or height <= 0:
            return None

        mask = Image.new("L", (width, height), 0)
        draw = ImageDraw.Draw(mask)
        draw.text(
            (-left, -top), char, fill=255, font=font, anchor="ls",
            stroke_width=stroke, stroke_fill=255,
        )

        if key.flags & CacheKeyFlags.FAKE_ITALIC:
            mask, pad_left = _shear(mask, -top)
            left -= pad_left
            width = mask.width

        return GlyphImage(left=left, top=-top, width=width, height=height, data=mask.tobytes())


def _shear(mask: Image.Image, baseline: int) -> tuple[Image.Image, int]:
    """Slant a mask to the right around its baseline row.

    Returns the sheared mask and how many columns were added on the left
    for descenders, which lean the other way.
    """
    height = mask.height
    pad_left = math.ceil(ITALIC_SLANT * max(height - baseline, 0))
    pad_right = math.ceil(ITALIC_SLANT * max(baseline, 0))
    width = mask.width + pad_left + pad_right
    # Output (x, y) samples input x + slant * y - (pad_left + slant * baseline)
    offset = -(pad_left + ITALIC_SLANT * baseline)
    sheared = mask.transform(
        (width, height),
        Image.Transform.AFFINE,
        (1, ITALIC_SLANT, offset, 0, 1, 0),
        resample=Image.Resampling.BILINEAR,
    )
    return sheared, pad_left
