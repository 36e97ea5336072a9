"""SoftBackend - a terminal backend that renders into an RGB pixmap."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, NamedTuple

from soft_terminal.core.cell import Cell
from soft_terminal.core.color import Color
from soft_terminal.core.constants import FULL_BLOCK
from soft_terminal.core.grid import Grid
from soft_terminal.render.blink import BlinkClock
from soft_terminal.render.colors import ColorResolver
from soft_terminal.render.compositor import CellCompositor
from soft_terminal.render.metrics import CellMetrics, ScaleContext
from soft_terminal.render.pixmap import RgbPixmap
from soft_terminal.text.types import Attrs, Rasterizer, Shaper

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    width: int
    height: int


@dataclass(frozen=True)
class WindowSize:
    """Terminal size in cells and in pixels."""
    columns_rows: Size
    pixels: Size


class Backend(ABC):
    """The contract a terminal UI framework drives to present its frames."""

    @abstractmethod
    def draw(self, content: Iterable[tuple[int, int, Cell]]) -> None:
        """Apply changed cells, given as (x, y, cell)."""
        ...

    @abstractmethod
    def hide_cursor(self) -> None:
        ...

    @abstractmethod
    def show_cursor(self) -> None:
        ...

    @abstractmethod
    def get_cursor_position(self) -> Position:
        ...

    @abstractmethod
    def set_cursor_position(self, position: tuple[int, int]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def size(self) -> Size:
        """Size of the terminal in cells."""
        ...

    @abstractmethod
    def window_size(self) -> WindowSize:
        ...

    @abstractmethod
    def flush(self) -> None:
        ...


class SoftBackend(Backend):
    """
    Software rendering backend. Stores the rendered image internally as an RgbPixmap.

    Every operation completes synchronously, so the pixmap reflects the
    grid as soon as ``draw``, ``redraw``, ``clear`` or ``resize`` return.

    Args:
        width: Width of the terminal in cells
        height: Height of the terminal in cells
        font_size: Font size in pixels, before scaling
        font_data: Font file bytes; when omitted, a system monospace font is used
        scale_factor: Device pixels per logical pixel (2.0 for high-DPI displays)
        shaper: Shaping engine; must be given together with rasterizer
        rasterizer: Rasterization engine; must be given together with shaper
        resolver: Color palette and defaults

    Example:
        >>> backend = SoftBackend(80, 24, 16, font_data=Path("mono.ttf").read_bytes())
        >>> backend.draw(grid.cells())
        >>> backend.to_image().save("screen.png")
    """

    def __init__(
        self,
        width: int,
        height: int,
        font_size: float,
        font_data: bytes | None = None,
        scale_factor: float = 1.0,
        *,
        shaper: Shaper | None = None,
        rasterizer: Rasterizer | None = None,
        resolver: ColorResolver | None = None,
    ):
        if (shaper is None) != (rasterizer is None):
            raise ValueError("shaper and rasterizer must be supplied together")
        if shaper is None or rasterizer is None:
            shaper, rasterizer = _pillow_engines(font_data)

        self.buffer = Grid(width, height)
        self.cursor = False
        self.pos = Position(0, 0)

        self.scale = ScaleContext(font_size, scale_factor)
        self.compositor = CellCompositor(shaper, rasterizer, resolver)
        self.metrics = self._measure(self.scale)

        self.blink = BlinkClock()
        self.always_redraw: set[tuple[int, int]] = set()

        self.rgb_pixmap = RgbPixmap(*self.metrics.pixmap_size(width, height))
        self.clear()

    @classmethod
    def new_with_font(cls, width: int, height: int, font_size: float, font_data: bytes) -> "SoftBackend":
        return cls(width, height, font_size, font_data)

    @classmethod
    def new_with_font_and_scale(
        cls, width: int, height: int, font_size: float, font_data: bytes, scale_factor: float,
    ) -> "SoftBackend":
        return cls(width, height, font_size, font_data, scale_factor)

    @classmethod
    def new_with_system_fonts(cls, width: int, height: int, font_size: float) -> "SoftBackend":
        """Render with a monospace font installed on the host. Not available in every sandbox."""
        return cls(width, height, font_size)

    @classmethod
    def new_with_system_fonts_and_scale(
        cls, width: int, height: int, font_size: float, scale_factor: float,
    ) -> "SoftBackend":
        return cls(width, height, font_size, None, scale_factor)

    # Geometry

    @property
    def char_width(self) -> int:
        return self.metrics.char_width

    @property
    def char_height(self) -> int:
        return self.metrics.char_height

    @property
    def scale_factor(self) -> float:
        return self.scale.scale_factor

    @property
    def font_size(self) -> float:
        return self.scale.font_size

    def set_font_size(self, font_size: float) -> None:
        """
        Change the font size, recreating the pixmap and redrawing everything.

        Expensive; do not call every frame. If the font cannot be used at
        the new size, FontError is raised and the backend is unchanged.
        """
        self._reconfigure(ScaleContext(font_size, self.scale.scale_factor))

    def set_scale_factor(self, scale_factor: float) -> None:
        """Change the device scale factor. Same cost as ``set_font_size``."""
        self._reconfigure(ScaleContext(self.scale.font_size, scale_factor))

    def _reconfigure(self, scale: ScaleContext) -> None:
        self.metrics = self._measure(scale)
        self.scale = scale
        self._reallocate()
        self.redraw()

    def _measure(self, scale: ScaleContext) -> CellMetrics:
        shaper = self.compositor.shaper
        metrics = scale.measure(shaper, self.compositor.rasterizer)
        if scale.physical_font_size != scale.font_size:
            # Glyphs are shaped at the physical size; reject it before anything is committed
            shaper.shape(FULL_BLOCK, Attrs(), scale.physical_font_size)
        return metrics

    def _reallocate(self) -> None:
        width, height = self.metrics.pixmap_size(self.buffer.width, self.buffer.height)
        logger.debug("Reallocating pixmap to %dx%d", width, height)
        self.rgb_pixmap = RgbPixmap(width, height)

    # Rendering

    def draw(self, content: Iterable[tuple[int, int, Cell]]) -> None:
        self.blink.tick()

        cells_to_update: list[tuple[int, int]] = []
        for x, y, cell in content:
            if not self.buffer.contains(x, y):
                logger.debug("Skipping cell outside the %dx%d grid: (%d, %d)",
                             self.buffer.width, self.buffer.height, x, y)
                continue
            self.buffer.set(x, y, cell)
            cells_to_update.append((x, y))

        # Blinking cells repaint every tick even when unchanged
        cells_to_update.extend(sorted(self.always_redraw))
        positions = list(dict.fromkeys(cells_to_update))

        self.compositor.paint(
            self.rgb_pixmap, self.buffer, positions, self.metrics, self.blink, self.always_redraw,
        )

    def redraw(self) -> None:
        """Repaint every cell from the grid."""
        self.always_redraw = set()
        self.compositor.paint(
            self.rgb_pixmap, self.buffer, self.buffer.positions(),
            self.metrics, self.blink, self.always_redraw,
        )

    def resize(self, width: int, height: int) -> None:
        """Resize the grid to width x height cells. Grid content is reset."""
        self.buffer.resize(width, height)
        self._reallocate()
        self.redraw()

    def clear(self) -> None:
        self.buffer.reset()
        self.rgb_pixmap.fill(self.compositor.resolver.resolve(Color.RESET, foreground=False))

    def flush(self) -> None:
        pass

    # Cursor state (never painted)

    def hide_cursor(self) -> None:
        self.cursor = False

    def show_cursor(self) -> None:
        self.cursor = True

    def get_cursor_position(self) -> Position:
        return self.pos

    def set_cursor_position(self, position: tuple[int, int]) -> None:
        self.pos = Position(*position)

    # Queries

    def size(self) -> Size:
        return Size(self.buffer.width, self.buffer.height)

    def window_size(self) -> WindowSize:
        return WindowSize(
            columns_rows=self.size(),
            pixels=Size(self.rgb_pixmap.width, self.rgb_pixmap.height),
        )

    def get_pixmap_data(self) -> bytearray:
        """The raw RGB data of the pixmap as a flat array."""
        return self.rgb_pixmap.data()

    def get_pixmap_data_as_rgba(self) -> bytes:
        """The pixmap in RGBA layout; alpha is always 255."""
        return self.rgb_pixmap.to_rgba()

    def get_pixmap_width(self) -> int:
        return self.rgb_pixmap.width

    def get_pixmap_height(self) -> int:
        return self.rgb_pixmap.height

    def to_image(self) -> "Image.Image":
        return self.rgb_pixmap.to_image()


def _pillow_engines(font_data: bytes | None) -> tuple[Shaper, Rasterizer]:
    """Build the default Pillow shaper and rasterizer over one font system."""
    from soft_terminal.text.fonts import FontSystem
    from soft_terminal.text.raster import PillowRasterizer
    from soft_terminal.text.shaper import PillowShaper

    fonts = FontSystem.from_bytes(font_data) if font_data is not None else FontSystem.from_system()
    return PillowShaper(fonts), PillowRasterizer(fonts)
