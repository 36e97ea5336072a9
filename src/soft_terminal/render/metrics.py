"""Cell geometry derived from font size and device scale factor."""

import logging
from dataclasses import dataclass

from soft_terminal.core.constants import CELL_HEIGHT_SHRINK, CELL_WIDTH_SHRINK, FULL_BLOCK
from soft_terminal.text.fonts import FontError
from soft_terminal.text.types import Attrs, Rasterizer, Shaper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellMetrics:
    """Logical cell size in pixels and the scale that maps it to the device."""
    char_width: int
    char_height: int
    scale_factor: float = 1.0
    font_size: float = 16.0

    @property
    def physical_font_size(self) -> float:
        return self.font_size * self.scale_factor

    @property
    def physical_width(self) -> int:
        return int(self.char_width * self.scale_factor)

    @property
    def physical_height(self) -> int:
        return int(self.char_height * self.scale_factor)

    def pixmap_size(self, cols: int, rows: int) -> tuple[int, int]:
        """Pixel size of a grid of cols x rows cells."""
        return self.physical_width * cols, self.physical_height * rows


class ScaleContext:
    """
    Requested font size and scale factor.

    Measuring is expensive (shapes and rasterizes a reference glyph);
    the backend only calls ``measure`` when either value changes.
    """

    def __init__(self, font_size: float, scale_factor: float = 1.0):
        self.font_size = font_size
        self.scale_factor = scale_factor

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Font size must be positive, got {value}")
        self._font_size = value

    @property
    def scale_factor(self) -> float:
        return self._scale_factor

    @scale_factor.setter
    def scale_factor(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Scale factor must be positive, got {value}")
        self._scale_factor = float(value)

    @property
    def physical_font_size(self) -> float:
        return self._font_size * self._scale_factor

    def measure(self, shaper: Shaper, rasterizer: Rasterizer) -> CellMetrics:
        """
        Derive the cell size from the bounding box of a full block glyph.

        The block is measured at the logical font size, not the physical
        one, so the physical cell is exactly the logical cell times the
        scale factor; measuring the scaled glyph could be a pixel off and
        break exact doubling at scale 2.0.
        """
        glyph = None
        for run in shaper.shape(FULL_BLOCK, Attrs(), self._font_size):
            if run.glyphs:
                glyph = run.glyphs[0]
                break
        if glyph is None:
            raise FontError("Font produced no glyph for the reference block U+2588")

        image = rasterizer.get_image(glyph.cache_key)
        if image is None:
            raise FontError("Font cannot rasterize the reference block U+2588")

        char_width = max(1, int(image.width * CELL_WIDTH_SHRINK))
        char_height = max(1, int(image.height * CELL_HEIGHT_SHRINK))
        metrics = CellMetrics(char_width, char_height, self._scale_factor, self._font_size)
        logger.debug(
            "Cell metrics at font size %s, scale %s: %dx%d logical, %dx%d physical",
            self._font_size, self._scale_factor,
            char_width, char_height, metrics.physical_width, metrics.physical_height,
        )
        return metrics
