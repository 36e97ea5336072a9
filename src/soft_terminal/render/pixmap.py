"""RgbPixmap - flat RGB byte buffer the backend paints into."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image

RGB = tuple[int, int, int]


class RgbPixmap:
    """
    A width x height image stored as packed RGB bytes (3 bytes per pixel).

    Writes are not bounds-checked per pixel; callers clip to
    ``width``/``height`` before writing.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Pixmap size must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._data = bytearray(width * height * 3)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def data(self) -> bytearray:
        """The raw RGB bytes, row-major."""
        return self._data

    def put_pixel(self, x: int, y: int, color: RGB) -> None:
        i = (y * self._width + x) * 3
        self._data[i:i + 3] = bytes(color)

    def get_pixel(self, x: int, y: int) -> RGB:
        i = (y * self._width + x) * 3
        r, g, b = self._data[i:i + 3]
        return (r, g, b)

    def fill(self, color: RGB) -> None:
        """Set every pixel to color."""
        self._data[:] = bytes(color) * (self._width * self._height)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: RGB) -> None:
        """Fill a rectangle, clipped to the pixmap bounds."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self._width), min(y + h, self._height)
        if x0 >= x1 or y0 >= y1:
            return
        span = bytes(color) * (x1 - x0)
        for row in range(y0, y1):
            start = (row * self._width + x0) * 3
            self._data[start:start + len(span)] = span

    def resize(self, width: int, height: int) -> None:
        """Reallocate to a new size; content is zeroed."""
        if width < 0 or height < 0:
            raise ValueError(f"Pixmap size must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._data = bytearray(width * height * 3)

    def to_rgba(self) -> bytes:
        """Return a copy in RGBA layout with alpha always 255."""
        rgba = bytearray(self._width * self._height * 4)
        rgba[0::4] = self._data[0::3]
        rgba[1::4] = self._data[1::3]
        rgba[2::4] = self._data[2::3]
        rgba[3::4] = b"\xff" * (self._width * self._height)
        return bytes(rgba)

    def to_image(self) -> "Image.Image":
        """Convert to a Pillow RGB image (copies the data)."""
        from PIL import Image
        return Image.frombytes("RGB", (self._width, self._height), bytes(self._data))

    def __repr__(self) -> str:
        return f"RgbPixmap({self._width}x{self._height})"
