"""Shared constants for cell rendering and ANSI input."""

# CP437 to Unicode mapping (characters 0x00-0xFF)
# Source: https://en.wikipedia.org/wiki/Code_page_437
CP437_TO_UNICODE: tuple[str, ...] = (
    # 0x00-0x1F: Control characters mapped to symbols
    '\u0000', '\u263A', '\u263B', '\u2665', '\u2666', '\u2663', '\u2660', '\u2022',
    '\u25D8', '\u25CB', '\u25D9', '\u2642', '\u2640', '\u266A', '\u266B', '\u263C',
    '\u25BA', '\u25C4', '\u2195', '\u203C', '\u00B6', '\u00A7', '\u25AC', '\u21A8',
    '\u2191', '\u2193', '\u2192', '\u2190', '\u221F', '\u2194', '\u25B2', '\u25BC',
    # 0x20-0x7E: Standard ASCII (printable)
    ' ', '!', '"', '#', '$', '%', '&', "'", '(', ')', '*', '+', ',', '-', '.', '/',
    '0', '1', '2', '3', '4', '5', '6', '7', '8', '9', ':', ';', '<', '=', '>', '?',
    '@', 'A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'I', 'J', 'K', 'L', 'M', 'N', 'O',
    'P', 'Q', 'R', 'S', 'T', 'U', 'V', 'W', 'X', 'Y', 'Z', '[', '\\', ']', '^', '_',
    '`', 'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i', 'j', 'k', 'l', 'm', 'n', 'o',
    'p', 'q', 'r', 's', 't', 'u', 'v', 'w', 'x', 'y', 'z', '{', '|', '}', '~', '\u2302',
    # 0x80-0xFF: Extended ASCII
    '\u00C7', '\u00FC', '\u00E9', '\u00E2', '\u00E4', '\u00E0', '\u00E5', '\u00E7',
    '\u00EA', '\u00EB', '\u00E8', '\u00EF', '\u00EE', '\u00EC', '\u00C4', '\u00C5',
    '\u00C9', '\u00E6', '\u00C6', '\u00F4', '\u00F6', '\u00F2', '\u00FB', '\u00F9',
    '\u00FF', '\u00D6', '\u00DC', '\u00A2', '\u00A3', '\u00A5', '\u20A7', '\u0192',
    '\u00E1', '\u00ED', '\u00F3', '\u00FA', '\u00F1', '\u00D1', '\u00AA', '\u00BA',
    '\u00BF', '\u2310', '\u00AC', '\u00BD', '\u00BC', '\u00A1', '\u00AB', '\u00BB',
    '\u2591', '\u2592', '\u2593', '\u2502', '\u2524', '\u2561', '\u2562', '\u2556',
    '\u2555', '\u2563', '\u2551', '\u2557', '\u255D', '\u255C', '\u255B', '\u2510',
    '\u2514', '\u2534', '\u252C', '\u251C', '\u2500', '\u253C', '\u255E', '\u255F',
    '\u255A', '\u2554', '\u2569', '\u2566', '\u2560', '\u2550', '\u256C', '\u2567',
    '\u2568', '\u2564', '\u2565', '\u2559', '\u2558', '\u2552', '\u2553', '\u256B',
    '\u256A', '\u2518', '\u250C', '\u2588', '\u2584', '\u258C', '\u2590', '\u2580',
    '\u03B1', '\u00DF', '\u0393', '\u03C0', '\u03A3', '\u03C3', '\u00B5', '\u03C4',
    '\u03A6', '\u0398', '\u03A9', '\u03B4', '\u221E', '\u03C6', '\u03B5', '\u2229',
    '\u2261', '\u00B1', '\u2265', '\u2264', '\u2320', '\u2321', '\u00F7', '\u2248',
    '\u00B0', '\u2219', '\u00B7', '\u221A', '\u207F', '\u00B2', '\u25A0', '\u00A0',
)

# Reference glyph measured to derive the cell size
FULL_BLOCK = "\u2588"

# Shrink factors applied to the reference glyph's bounding box; font metrics
# overstate the visible extent of a monospace cell.
CELL_WIDTH_SHRINK = 0.9
CELL_HEIGHT_SHRINK = 0.85

# Combining marks appended after each character to synthesize decorations
COMBINING_STRIKEOUT = "\u0336"
COMBINING_UNDERLINE = "\u0332"

# Blink cycle, in draw calls
BLINK_PERIOD = 200
RAPID_BLINK_PERIOD = 100
RAPID_BLINK_ON = range(0, 6)    # counter % 100 in [0, 5]
SLOW_BLINK_ON = range(20, 26)   # counter in [20, 25]

# Each channel is multiplied by this for the DIM modifier
DIM_FACTOR = 0.77

# Standard 16-color palette (VGA)
PALETTE_16: tuple[tuple[int, int, int], ...] = (
    (0x00, 0x00, 0x00),  # 0 - Black
    (0xAA, 0x00, 0x00),  # 1 - Red
    (0x00, 0xAA, 0x00),  # 2 - Green
    (0xAA, 0x55, 0x00),  # 3 - Yellow/Brown
    (0x00, 0x00, 0xAA),  # 4 - Blue
    (0xAA, 0x00, 0xAA),  # 5 - Magenta
    (0x00, 0xAA, 0xAA),  # 6 - Cyan
    (0xAA, 0xAA, 0xAA),  # 7 - White
    (0x55, 0x55, 0x55),  # 8 - Bright Black
    (0xFF, 0x55, 0x55),  # 9 - Bright Red
    (0x55, 0xFF, 0x55),  # 10 - Bright Green
    (0xFF, 0xFF, 0x55),  # 11 - Bright Yellow
    (0x55, 0x55, 0xFF),  # 12 - Bright Blue
    (0xFF, 0x55, 0xFF),  # 13 - Bright Magenta
    (0x55, 0xFF, 0xFF),  # 14 - Bright Cyan
    (0xFF, 0xFF, 0xFF),  # 15 - Bright White
)

DEFAULT_FG_RGB = PALETTE_16[7]
DEFAULT_BG_RGB = PALETTE_16[0]

# xterm 6x6x6 color cube levels (indices 16-231)
CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _build_palette_256() -> tuple[tuple[int, int, int], ...]:
    palette = list(PALETTE_16)
    for r in CUBE_LEVELS:
        for g in CUBE_LEVELS:
            for b in CUBE_LEVELS:
                palette.append((r, g, b))
    # Gray ramp (indices 232-255)
    for i in range(24):
        level = 8 + i * 10
        palette.append((level, level, level))
    return tuple(palette)


PALETTE_256 = _build_palette_256()
