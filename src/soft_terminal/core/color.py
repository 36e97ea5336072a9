"""Abstract cell colors: terminal default, indexed palette, or 24-bit RGB."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ColorMode(Enum):
    """How a cell color is specified."""
    DEFAULT = "default"     # Terminal default for the role (fg or bg)
    INDEXED = "256"         # Palette index 0-255 (0-15 are the standard colors)
    RGB = "rgb"             # 24-bit direct color


@dataclass(frozen=True)
class Color:
    """
    Represents an abstract cell color.

    The concrete RGB value is only known once a role (foreground or
    background) and a palette are applied; see ``ColorResolver``.
    """
    mode: ColorMode
    value: int | tuple[int, int, int] = 0

    RESET: ClassVar["Color"]

    # Standard 16 colors (index 0-15)
    BLACK: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    CYAN: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    BRIGHT_BLACK: ClassVar["Color"]
    BRIGHT_RED: ClassVar["Color"]
    BRIGHT_GREEN: ClassVar["Color"]
    BRIGHT_YELLOW: ClassVar["Color"]
    BRIGHT_BLUE: ClassVar["Color"]
    BRIGHT_MAGENTA: ClassVar["Color"]
    BRIGHT_CYAN: ClassVar["Color"]
    BRIGHT_WHITE: ClassVar["Color"]

    @classmethod
    def from_sgr(cls, code: int) -> "Color":
        """Create a Color from an SGR code (30-37, 40-47, 90-97, 100-107)."""
        if 30 <= code <= 37:
            return cls(ColorMode.INDEXED, code - 30)
        elif 40 <= code <= 47:
            return cls(ColorMode.INDEXED, code - 40)
        elif 90 <= code <= 97:
            return cls(ColorMode.INDEXED, code - 90 + 8)
        elif 100 <= code <= 107:
            return cls(ColorMode.INDEXED, code - 100 + 8)
        elif code in (39, 49):
            return cls.RESET
        else:
            raise ValueError(f"Invalid SGR color code: {code}")

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorMode.INDEXED, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from RGB values."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(ColorMode.RGB, (r, g, b))

    @property
    def is_default(self) -> bool:
        return self.mode == ColorMode.DEFAULT


Color.RESET = Color(ColorMode.DEFAULT)
Color.BLACK = Color(ColorMode.INDEXED, 0)
Color.RED = Color(ColorMode.INDEXED, 1)
Color.GREEN = Color(ColorMode.INDEXED, 2)
Color.YELLOW = Color(ColorMode.INDEXED, 3)
Color.BLUE = Color(ColorMode.INDEXED, 4)
Color.MAGENTA = Color(ColorMode.INDEXED, 5)
Color.CYAN = Color(ColorMode.INDEXED, 6)
Color.WHITE = Color(ColorMode.INDEXED, 7)
Color.BRIGHT_BLACK = Color(ColorMode.INDEXED, 8)
Color.BRIGHT_RED = Color(ColorMode.INDEXED, 9)
Color.BRIGHT_GREEN = Color(ColorMode.INDEXED, 10)
Color.BRIGHT_YELLOW = Color(ColorMode.INDEXED, 11)
Color.BRIGHT_BLUE = Color(ColorMode.INDEXED, 12)
Color.BRIGHT_MAGENTA = Color(ColorMode.INDEXED, 13)
Color.BRIGHT_CYAN = Color(ColorMode.INDEXED, 14)
Color.BRIGHT_WHITE = Color(ColorMode.INDEXED, 15)
