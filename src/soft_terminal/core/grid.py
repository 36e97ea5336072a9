"""Grid - fixed-size 2D array of cells mirroring the host's terminal buffer."""

from dataclasses import dataclass, field
from typing import Iterator

from soft_terminal.core.cell import Cell


DEFAULT_CELL = Cell()


@dataclass
class Grid:
    """
    A row-major grid of Cells addressed by (column, row).

    The grid always matches the
    backend's logical size exactly. Resizing reallocates and resets
    every cell.
    """
    width: int
    height: int
    _buffer: list[list[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Grid size must be non-negative, got {self.width}x{self.height}")
        if not self._buffer:
            self._buffer = self._allocate(self.width, self.height)

    @staticmethod
    def _allocate(width: int, height: int) -> list[list[Cell]]:
        return [[DEFAULT_CELL] * width for _ in range(height)]

    def contains(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at position (x, y)."""
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) out of bounds ({self.width}x{self.height})")
        return self._buffer[y][x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Set the cell at position (x, y)."""
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) out of bounds ({self.width}x{self.height})")
        self._buffer[y][x] = cell

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: grid[x, y]."""
        x, y = pos
        return self.get(x, y)

    def __setitem__(self, pos: tuple[int, int], cell: Cell) -> None:
        """Set cell using indexing: grid[x, y] = cell."""
        x, y = pos
        self.set(x, y, cell)

    def put_text(self, x: int, y: int, text: str, template: Cell = DEFAULT_CELL) -> None:
        """Write one cell per character starting at (x, y), styled like template."""
        for i, char in enumerate(text):
            if x + i >= self.width:
                break
            self.set(x + i, y, Cell(char, template.fg, template.bg, template.modifier))

    def reset(self) -> None:
        """Restore every cell to the default cell."""
        self._buffer = self._allocate(self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        """Reallocate to a new size. Content is discarded."""
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self._buffer = self._allocate(width, height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def positions(self) -> Iterator[tuple[int, int]]:
        """Iterate over every (x, y) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all cells as (x, y, cell) tuples."""
        for y, row in enumerate(self._buffer):
            for x, cell in enumerate(row):
                yield x, y, cell

    def diff(self, other: "Grid") -> Iterator[tuple[int, int, Cell]]:
        """Yield (x, y, cell) for cells of other that differ from this grid.

        Both grids must have the same size. This is what a host framework
        hands to ``Backend.draw`` after rendering a frame.
        """
        if (self.width, self.height) != (other.width, other.height):
            raise ValueError("Cannot diff grids of different sizes")
        for y, (mine, theirs) in enumerate(zip(self._buffer, other._buffer)):
            for x, (a, b) in enumerate(zip(mine, theirs)):
                if a != b:
                    yield x, y, b
