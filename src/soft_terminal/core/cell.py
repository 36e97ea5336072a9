"""Cell - atomic unit of the terminal grid."""

from dataclasses import dataclass, replace
from enum import Flag, auto

from soft_terminal.core.color import Color


class Modifier(Flag):
    """Style attributes attached to a cell."""
    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINED = auto()
    SLOW_BLINK = auto()
    RAPID_BLINK = auto()
    REVERSED = auto()
    HIDDEN = auto()
    CROSSED_OUT = auto()


BLINKING = Modifier.SLOW_BLINK | Modifier.RAPID_BLINK


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell with styling attributes.

    Represents one position in the terminal grid with its symbol
    and associated color/style information. Cells are immutable;
    the grid replaces them wholesale on every update.
    """
    symbol: str = ' '
    fg: Color = Color.RESET
    bg: Color = Color.RESET
    modifier: Modifier = Modifier.NONE

    def with_style(
        self,
        fg: Color | None = None,
        bg: Color | None = None,
        add: Modifier = Modifier.NONE,
        remove: Modifier = Modifier.NONE,
    ) -> "Cell":
        """Return a copy with colors replaced and modifiers added/removed."""
        return replace(
            self,
            fg=fg if fg is not None else self.fg,
            bg=bg if bg is not None else self.bg,
            modifier=(self.modifier | add) & ~remove,
        )

    def has(self, modifier: Modifier) -> bool:
        """Check whether any of the given modifier bits are set."""
        return bool(self.modifier & modifier)

    @property
    def blinking(self) -> bool:
        return self.has(BLINKING)

    def is_default(self) -> bool:
        """Check if this cell has default values (blank, default colors, no style)."""
        return (
            self.symbol == ' '
            and self.fg == Color.RESET
            and self.bg == Color.RESET
            and not self.modifier
        )
