"""Tests for ANSI parsing and file loading."""

from soft_terminal.codec.ansi_parser import AnsiParser
from soft_terminal.core.cell import Modifier
from soft_terminal.core.color import Color
from soft_terminal.io.reader import load, load_bytes


def parse(text: str, width: int = 10, height: int = 3):
    parser = AnsiParser(width=width, height=height)
    parser.feed_unicode(text)
    return parser.get_grid()


class TestSgr:
    """Select Graphic Rendition."""

    def test_plain_text(self) -> None:
        grid = parse("Hi")
        assert grid[0, 0].symbol == 'H'
        assert grid[1, 0].symbol == 'i'
        assert grid[0, 0].is_default() is False
        assert grid[2, 0].is_default()

    def test_colors(self) -> None:
        grid = parse("\x1b[31;44mA\x1b[0mB")
        assert grid[0, 0].fg == Color.RED
        assert grid[0, 0].bg == Color.BLUE
        assert grid[1, 0].fg == Color.RESET
        assert grid[1, 0].bg == Color.RESET

    def test_bright_colors(self) -> None:
        grid = parse("\x1b[93;101mA")
        assert grid[0, 0].fg == Color.BRIGHT_YELLOW
        assert grid[0, 0].bg == Color.BRIGHT_RED

    def test_default_color_reset(self) -> None:
        grid = parse("\x1b[31;44m\x1b[39mA\x1b[49mB")
        assert grid[0, 0].fg == Color.RESET
        assert grid[0, 0].bg == Color.BLUE
        assert grid[1, 0].bg == Color.RESET

    def test_256_and_truecolor(self) -> None:
        grid = parse("\x1b[38;5;196mA\x1b[48;2;1;2;3mB")
        assert grid[0, 0].fg == Color.from_256(196)
        assert grid[1, 0].fg == Color.from_256(196)
        assert grid[1, 0].bg == Color.from_rgb(1, 2, 3)

    def test_invalid_extended_color_ignored(self) -> None:
        grid = parse("\x1b[38;5;300mA")
        assert grid[0, 0].fg == Color.RESET
        assert grid[0, 0].symbol == 'A'

    def test_truncated_extended_color(self) -> None:
        grid = parse("\x1b[38;5mA\x1b[0;48;2;10mB\x1b[0;38;2mC")
        for x in range(3):
            assert grid[x, 0].modifier == Modifier.NONE
            assert grid[x, 0].fg == Color.RESET
            assert grid[x, 0].bg == Color.RESET

    def test_extended_color_followed_by_modifier(self) -> None:
        grid = parse("\x1b[38;5;1;1mA")
        assert grid[0, 0].fg == Color.from_256(1)
        assert grid[0, 0].modifier == Modifier.BOLD

    def test_modifiers(self) -> None:
        grid = parse("\x1b[1;3;4;9mA\x1b[22;24mB\x1b[5;6;7;8mC")
        assert grid[0, 0].modifier == (
            Modifier.BOLD | Modifier.ITALIC | Modifier.UNDERLINED | Modifier.CROSSED_OUT
        )
        assert grid[1, 0].modifier == Modifier.ITALIC | Modifier.CROSSED_OUT
        assert grid[2, 0].modifier == (
            Modifier.ITALIC | Modifier.CROSSED_OUT | Modifier.SLOW_BLINK
            | Modifier.RAPID_BLINK | Modifier.REVERSED | Modifier.HIDDEN
        )

    def test_blink_off(self) -> None:
        grid = parse("\x1b[5;6m\x1b[25mA")
        assert not grid[0, 0].blinking

    def test_empty_sgr_resets(self) -> None:
        grid = parse("\x1b[1;31m\x1b[mA")
        assert grid[0, 0].is_default() is False
        assert grid[0, 0].modifier == Modifier.NONE
        assert grid[0, 0].fg == Color.RESET


class TestCursor:
    """Cursor movement and erasing."""

    def test_newline_and_carriage_return(self) -> None:
        grid = parse("ab\ncd\rX")
        assert grid[0, 1].symbol == 'X'
        assert grid[1, 1].symbol == 'd'

    def test_tab(self) -> None:
        grid = parse("a\tb")
        assert grid[8, 0].symbol == 'b'

    def test_wrap_at_right_margin(self) -> None:
        grid = parse("0123456789AB")
        assert grid[0, 1].symbol == 'A'
        assert grid[1, 1].symbol == 'B'

    def test_absolute_position(self) -> None:
        grid = parse("\x1b[2;5HX\x1b[HY")
        assert grid[4, 1].symbol == 'X'
        assert grid[0, 0].symbol == 'Y'

    def test_relative_moves(self) -> None:
        grid = parse("\x1b[2B\x1b[3CX\x1b[A\x1b[2DY\x1b[8GZ")
        assert grid[3, 2].symbol == 'X'
        assert grid[2, 1].symbol == 'Y'
        assert grid[7, 1].symbol == 'Z'

    def test_save_restore(self) -> None:
        grid = parse("ab\x1b[s\x1b[3;1Hc\x1b[uZ")
        assert grid[2, 0].symbol == 'Z'
        assert grid[0, 2].symbol == 'c'

    def test_private_modes_ignored(self) -> None:
        grid = parse("\x1b[?25lA\x1b[?7h")
        assert grid[0, 0].symbol == 'A'

    def test_erase_line_keeps_background(self) -> None:
        grid = parse("abcdef\x1b[1;3H\x1b[44m\x1b[K")
        assert grid[1, 0].symbol == 'b'
        assert grid[2, 0].symbol == ' '
        assert grid[9, 0].bg == Color.BLUE

    def test_erase_display(self) -> None:
        grid = parse("abc\ndef\x1b[2J")
        assert all(cell.is_default() for _, _, cell in grid.cells())

    def test_erase_below(self) -> None:
        grid = parse("abc\ndef\nghi\x1b[2;2H\x1b[J")
        assert grid[0, 1].symbol == 'd'
        assert grid[1, 1].symbol == ' '
        assert grid[0, 2].symbol == ' '
        assert grid[2, 0].symbol == 'c'

    def test_output_past_last_row_dropped(self) -> None:
        grid = parse("a\nb\nc\nd\ne", height=3)
        assert [grid[0, y].symbol for y in range(3)] == ['a', 'b', 'c']

    def test_eof_marker_stops(self) -> None:
        grid = parse("ab\x1acd")
        assert grid[2, 0].is_default()


class TestCp437:
    """Byte input decoded as CP437."""

    def test_block_characters(self) -> None:
        parser = AnsiParser(4, 1)
        parser.feed(b"\xdb\xb0\xc4")
        grid = parser.get_grid()
        assert [grid[x, 0].symbol for x in range(3)] == ['█', '░', '─']

    def test_escapes_in_bytes(self) -> None:
        parser = AnsiParser(4, 2)
        parser.feed(b"\x1b[32mA\r\nB")
        grid = parser.get_grid()
        assert grid[0, 0].fg == Color.GREEN
        assert grid[0, 1].symbol == 'B'

    def test_control_glyphs(self) -> None:
        parser = AnsiParser(4, 1)
        parser.feed(b"\x01\x03")
        grid = parser.get_grid()
        assert grid[0, 0].symbol == '☺'
        assert grid[1, 0].symbol == '♥'


class TestLoad:
    """Loading files from disk."""

    def test_load_ans(self, tmp_path) -> None:
        path = tmp_path / "art.ans"
        path.write_bytes(b"\x1b[31m\xdb\xdb\x1b[0m")
        grid = load(path, width=4, height=2)
        assert (grid.width, grid.height) == (4, 2)
        assert grid[0, 0].symbol == '█'
        assert grid[1, 0].fg == Color.RED

    def test_load_utf8(self, tmp_path) -> None:
        path = tmp_path / "capture.txt"
        path.write_text("\x1b[1mé█", encoding="utf-8")
        grid = load(path, width=4, height=1)
        assert grid[0, 0].symbol == 'é'
        assert grid[0, 0].has(Modifier.BOLD)
        assert grid[1, 0].symbol == '█'

    def test_sauce_stripped(self) -> None:
        sauce = b"SAUCE00" + b"Title".ljust(121, b" ")
        grid = load_bytes(b"AB\x1a" + sauce, width=10, height=1)
        assert grid[0, 0].symbol == 'A'
        assert grid[1, 0].symbol == 'B'
        assert grid[2, 0].is_default()

    def test_sauce_without_eof_marker(self) -> None:
        grid = load_bytes(b"AB" + b"SAUCE00" + b"x" * 20, width=10, height=1)
        assert grid[2, 0].is_default()
