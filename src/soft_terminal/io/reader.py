"""Load ANSI art and terminal captures into a Grid."""

from pathlib import Path

from soft_terminal.codec.ansi_parser import AnsiParser
from soft_terminal.core.grid import Grid

# Extensions decoded as CP437; everything else is read as UTF-8
CP437_SUFFIXES = {".ans", ".asc", ".diz", ".nfo"}

SAUCE_MARKER = b"SAUCE00"


def load(path: str | Path, width: int = 80, height: int = 25) -> Grid:
    """
    Load a text file with ANSI escape sequences into a width x height grid.

    Classic BBS art (.ans, .asc, .diz, .nfo) is decoded as CP437 and any
    trailing SAUCE record is ignored. Other files are read as UTF-8.
    """
    path = Path(path)
    data = path.read_bytes()

    if path.suffix.lower() in CP437_SUFFIXES:
        return load_bytes(data, width, height)

    parser = AnsiParser(width=width, height=height)
    parser.feed_unicode(data.decode("utf-8", errors="replace"))
    return parser.get_grid()


def load_bytes(data: bytes, width: int = 80, height: int = 25) -> Grid:
    """Load CP437 ANSI art from raw bytes."""
    # Drop the SAUCE record and its EOF marker
    if (sauce_pos := data.rfind(SAUCE_MARKER)) != -1:
        eof_pos = data.rfind(b'\x1a', 0, sauce_pos + 1)
        data = data[:eof_pos if eof_pos != -1 else sauce_pos]

    parser = AnsiParser(width=width, height=height)
    parser.feed(data)
    return parser.get_grid()
