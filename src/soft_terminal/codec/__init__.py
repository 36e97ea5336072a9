"""Decoding ANSI text and CP437 bytes into grids."""

from soft_terminal.codec.ansi_parser import AnsiParser

__all__ = ["AnsiParser"]
