"""ANSI escape sequence parser with virtual terminal emulation."""

import re

from soft_terminal.core.cell import Cell, Modifier
from soft_terminal.core.color import Color
from soft_terminal.core.constants import CP437_TO_UNICODE
from soft_terminal.core.grid import Grid

# SGR parameter -> modifier switched on / off
SGR_SET = {
    1: Modifier.BOLD,
    2: Modifier.DIM,
    3: Modifier.ITALIC,
    4: Modifier.UNDERLINED,
    5: Modifier.SLOW_BLINK,
    6: Modifier.RAPID_BLINK,
    7: Modifier.REVERSED,
    8: Modifier.HIDDEN,
    9: Modifier.CROSSED_OUT,
}
SGR_RESET = {
    22: Modifier.BOLD | Modifier.DIM,
    23: Modifier.ITALIC,
    24: Modifier.UNDERLINED,
    25: Modifier.SLOW_BLINK | Modifier.RAPID_BLINK,
    27: Modifier.REVERSED,
    28: Modifier.HIDDEN,
    29: Modifier.CROSSED_OUT,
}

CONTROL_BYTES = frozenset(b'\x00\t\n\r\x1a\x1b')


class AnsiParser:
    """
    Stateful ANSI parser that processes text into a fixed-size Grid.

    Simulates a virtual terminal to correctly interpret cursor movements,
    color codes, and other ANSI escape sequences. Output past the last
    row is dropped.
    """

    # Regex for CSI sequences: ESC [ params command
    CSI_PATTERN = re.compile(r'\x1b\[([0-9;?]*)([A-Za-z])')

    def __init__(self, width: int = 80, height: int = 25):
        self.width = width
        self.height = height
        self.grid = Grid(width, height)

        # Terminal state
        self.cursor_x = 0
        self.cursor_y = 0
        self.style = Cell()

        # Saved cursor position
        self.saved_x = 0
        self.saved_y = 0

    def feed(self, data: bytes) -> None:
        """Process raw bytes (CP437 encoded) into the grid.

        Control bytes the parser acts on (ESC, CR, LF, TAB, SUB) are kept;
        all other bytes map to their CP437 glyphs.
        """
        text = ''.join(chr(b) if b in CONTROL_BYTES else CP437_TO_UNICODE[b] for b in data)
        self._process_text(text)

    def feed_unicode(self, text: str) -> None:
        """Process Unicode text into the grid."""
        self._process_text(text)

    def _process_text(self, text: str) -> None:
        i = 0
        while i < len(text):
            if text[i] == '\x1b' and i + 1 < len(text) and text[i + 1] == '[':
                match = self.CSI_PATTERN.match(text, i)
                if match:
                    self._handle_csi(match.group(1), match.group(2))
                    i = match.end()
                    continue

            char = text[i]
            if char == '\r':
                self.cursor_x = 0
            elif char == '\n':
                self.cursor_x = 0
                self.cursor_y += 1
            elif char == '\t':
                self.cursor_x = min((self.cursor_x // 8 + 1) * 8, self.width)
            elif char == '\x1a':
                # EOF marker - stop processing
                break
            elif char in ('\x1b', '\x00'):
                pass
            else:
                self._put_char(char)

            i += 1

    def _put_char(self, char: str) -> None:
        """Put a character at current cursor position."""
        if self.cursor_x >= self.width:
            self.cursor_x = 0
            self.cursor_y += 1

        if self.grid.contains(self.cursor_x, self.cursor_y):
            style = self.style
            self.grid.set(self.cursor_x, self.cursor_y, Cell(char, style.fg, style.bg, style.modifier))

        self.cursor_x += 1

    def _handle_csi(self, params_str: str, command: str) -> None:
        """Handle a CSI escape sequence."""
        if params_str.startswith('?'):
            # Private modes (cursor visibility, wrap) have no effect on a grid
            return
        params: list[int] = []
        if params_str:
            params = [int(p) if p else 0 for p in params_str.split(';')]

        if command == 'm':
            self._handle_sgr(params)
        elif command == 'H' or command == 'f':
            row = params[0] if params else 1
            col = params[1] if len(params) > 1 else 1
            self.cursor_y = max(0, row - 1)
            self.cursor_x = max(0, min(col - 1, self.width - 1))
        elif command == 'A':
            n = params[0] if params else 1
            self.cursor_y = max(0, self.cursor_y - n)
        elif command == 'B':
            n = params[0] if params else 1
            self.cursor_y += n
        elif command == 'C':
            n = params[0] if params else 1
            if self.cursor_x >= self.width:
                # At right margin: wrap first, then position
                self.cursor_x = 0
                self.cursor_y += 1
            self.cursor_x = min(self.cursor_x + n, self.width)
        elif command == 'D':
            n = params[0] if params else 1
            self.cursor_x = max(0, self.cursor_x - n)
        elif command == 'G':
            col = params[0] if params else 1
            self.cursor_x = max(0, min(col - 1, self.width - 1))
        elif command == 'J':
            self._erase_display(params[0] if params else 0)
        elif command == 'K':
            self._erase_line(params[0] if params else 0)
        elif command == 's':
            self.saved_x = self.cursor_x
            self.saved_y = self.cursor_y
        elif command == 'u':
            self.cursor_x = self.saved_x
            self.cursor_y = self.saved_y

    def _handle_sgr(self, params: list[int]) -> None:
        """Handle SGR (Select Graphic Rendition) parameters."""
        if not params:
            params = [0]

        style = self.style
        i = 0
        while i < len(params):
            p = params[i]

            if p == 0:
                style = Cell()
            elif p in SGR_SET:
                style = style.with_style(add=SGR_SET[p])
            elif p in SGR_RESET:
                style = style.with_style(remove=SGR_RESET[p])
            elif 30 <= p <= 37 or 90 <= p <= 97:
                style = style.with_style(fg=Color.from_sgr(p))
            elif 40 <= p <= 47 or 100 <= p <= 107:
                style = style.with_style(bg=Color.from_sgr(p))
            elif p == 39:
                style = Cell(style.symbol, Color.RESET, style.bg, style.modifier)
            elif p == 49:
                style = Cell(style.symbol, style.fg, Color.RESET, style.modifier)
            elif p in (38, 48):
                color, consumed = self._extended_color(params, i + 1)
                if color is not None:
                    style = style.with_style(fg=color) if p == 38 else style.with_style(bg=color)
                i += consumed

            i += 1

        self.style = style

    @staticmethod
    def _extended_color(params: list[int], i: int) -> tuple[Color | None, int]:
        """Parse the tail of 38/48: ``5;n`` or ``2;r;g;b``. Returns (color, params consumed).

        A truncated tail consumes the rest of the sequence so its numbers
        are not read as SGR codes.
        """
        if i >= len(params):
            return None, 0
        remaining = len(params) - i
        mode = params[i]
        if mode == 5:
            if remaining < 2:
                return None, remaining
            index = params[i + 1]
            return (Color.from_256(index) if 0 <= index <= 255 else None), 2
        if mode == 2:
            if remaining < 4:
                return None, remaining
            r, g, b = params[i + 1:i + 4]
            if all(0 <= c <= 255 for c in (r, g, b)):
                return Color.from_rgb(r, g, b), 4
            return None, 4
        # Unknown color space
        return None, 1

    def _blank(self) -> Cell:
        """Erased cells keep the current background, like a real terminal."""
        return Cell(' ', Color.RESET, self.style.bg)

    def _erase_display(self, mode: int) -> None:
        if mode == 2 or mode == 3:
            self.grid.reset()
            self.cursor_x = 0
            self.cursor_y = 0
        elif mode == 0:
            self._erase_line(0)
            for y in range(self.cursor_y + 1, self.height):
                for x in range(self.width):
                    self.grid.set(x, y, self._blank())
        elif mode == 1:
            self._erase_line(1)
            for y in range(0, min(self.cursor_y, self.height)):
                for x in range(self.width):
                    self.grid.set(x, y, self._blank())

    def _erase_line(self, mode: int) -> None:
        if not 0 <= self.cursor_y < self.height:
            return
        if mode == 0:
            columns = range(self.cursor_x, self.width)
        elif mode == 1:
            columns = range(0, min(self.cursor_x + 1, self.width))
        else:
            columns = range(self.width)
        for x in columns:
            self.grid.set(x, self.cursor_y, self._blank())

    def get_grid(self) -> Grid:
        """Get the resulting grid."""
        return self.grid
