"""Text-mode VGA terminal and the character streams that write to it."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional, Union

Char = Union[str, int]

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25
DEFAULT_TABSTOP = 2


class VgaColor(IntEnum):
    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GREY = 7
    DARK_GREY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    LIGHT_MAGENTA = 13
    LIGHT_BROWN = 14
    WHITE = 15


def _code(char: Char) -> int:
    return (ord(char) if isinstance(char, str) else int(char)) & 0xFF


def vga_entry_color(fg: int, bg: int) -> int:
    """Attribute byte for a foreground and background colour."""
    return (int(fg) | (int(bg) << 4)) & 0xFF


def vga_entry(char: Char, color: int) -> int:
    """16-bit screen cell holding ``char`` drawn in ``color``."""
    return _code(char) | ((int(color) & 0xFF) << 8)


class Terminal:
    """A character grid with a cursor, tab stops and scrolling."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        tabstop: int = DEFAULT_TABSTOP,
    ) -> None:
        if width < 1 or height < 1 or tabstop < 1:
            raise ValueError("width, height and tabstop must be positive")
        self.width = width
        self.height = height
        self.tabstop = tabstop
        self.row = 0
        self.column = 0
        self.color = vga_entry_color(VgaColor.LIGHT_GREY, VgaColor.BLACK)
        self.buffer: list[int] = [vga_entry(" ", self.color)] * (width * height)

    def set_color(self, color: int) -> None:
        self.color = int(color) & 0xFF

    def put_entry_at(self, char: Char, color: int, x: int, y: int) -> None:
        self.buffer[y * self.width + x] = vga_entry(char, color)

    def newline(self) -> None:
        """Blank the rest of the line and move to the start of the next."""
        for x in range(self.column, self.width):
            self.put_entry_at(" ", self.color, x, self.row)
        self.column = 0
        self.row += 1
        if self.row == self.height:
            self.shift_up()

    def tab(self) -> None:
        self.column += self.tabstop - self.column % self.tabstop
        if self.column >= self.width:
            self.newline()

    def putchar(self, char: Char) -> None:
        code = _code(char)
        if code == ord("\n"):
            self.newline()
        elif code == ord("\t"):
            self.tab()
        else:
            self.put_entry_at(code, self.color, self.column, self.row)
            self.column += 1
            if self.column == self.width:
                self.newline()

    def write(self, text: str) -> None:
        for char in text:
            self.putchar(char)

    def shift_up(self) -> None:
        """Scroll every line up by one and clear the bottom line."""
        width = self.width
        self.buffer[: -width] = self.buffer[width:]
        self.buffer[-width:] = [vga_entry(0, 0)] * width
        self.row -= 1


class Stream:
    """A character sink backed by a put-character function."""

    def __init__(self, putchar: Optional[Callable[[Char], None]] = None) -> None:
        self.putchar = putchar

    def putc(self, char: Char) -> None:
        if self.putchar is None:
            raise OSError("stream has no output")
        self.putchar(char)


def _coloured_stream(terminal: Terminal, color: int) -> Stream:
    def put(char: Char) -> None:
        terminal.set_color(color)
        terminal.putchar(char)

    return Stream(put)


def stdout_stream(terminal: Terminal) -> Stream:
    """Stream that writes light grey text to ``terminal``."""
    return _coloured_stream(terminal, vga_entry_color(VgaColor.LIGHT_GREY, VgaColor.BLACK))


def stderr_stream(terminal: Terminal) -> Stream:
    """Stream that writes light red text to ``terminal``."""
    return _coloured_stream(terminal, vga_entry_color(VgaColor.LIGHT_RED, VgaColor.BLACK))