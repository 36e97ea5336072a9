"""Resolve abstract cell colors to concrete RGB."""

from soft_terminal.core.color import Color, ColorMode
from soft_terminal.core.constants import (
    DEFAULT_BG_RGB,
    DEFAULT_FG_RGB,
    DIM_FACTOR,
    PALETTE_256,
)

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


def dim_rgb(color: RGB) -> RGB:
    """Attenuate each channel by DIM_FACTOR (truncating)."""
    r, g, b = color
    return (int(r * DIM_FACTOR), int(g * DIM_FACTOR), int(b * DIM_FACTOR))


def blend_rgba(fg: RGBA, bg: RGBA) -> RGB:
    """Alpha-composite fg over bg using fg's alpha (0-255)."""
    alpha = fg[3]
    inverse = 255 - alpha
    return (
        (fg[0] * alpha + bg[0] * inverse) // 255,
        (fg[1] * alpha + bg[1] * inverse) // 255,
        (fg[2] * alpha + bg[2] * inverse) // 255,
    )


class ColorResolver:
    """
    Map a ``Color`` plus its role to an RGB triple.

    The "default" color differs by role, so callers say whether the
    color is used as foreground. Reversed and hidden modifiers are
    handled by the caller choosing which color to pass in.
    """

    def __init__(
        self,
        default_fg: RGB = DEFAULT_FG_RGB,
        default_bg: RGB = DEFAULT_BG_RGB,
        palette: tuple[RGB, ...] = PALETTE_256,
    ):
        if len(palette) != 256:
            raise ValueError(f"Palette must have 256 entries, got {len(palette)}")
        self.default_fg = default_fg
        self.default_bg = default_bg
        self.palette = palette

    def resolve(self, color: Color, foreground: bool) -> RGB:
        if color.mode == ColorMode.DEFAULT:
            return self.default_fg if foreground else self.default_bg
        if color.mode == ColorMode.INDEXED:
            assert isinstance(color.value, int)
            return self.palette[color.value]
        assert isinstance(color.value, tuple)
        return color.value

    @staticmethod
    def dim(color: RGB) -> RGB:
        return dim_rgb(color)

    @staticmethod
    def blend(fg: RGBA, bg: RGBA) -> RGB:
        return blend_rgba(fg, bg)
