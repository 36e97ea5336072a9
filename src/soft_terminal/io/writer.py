"""Save rendered frames as images."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from soft_terminal.render.backend import SoftBackend


def save_image(
    backend: "SoftBackend",
    path: str | Path,
    format: str | None = None,
) -> None:
    """
    Save the backend's current pixmap to disk through Pillow.

    The format is taken from the file extension unless given.
    """
    path = Path(path)
    if backend.get_pixmap_width() == 0 or backend.get_pixmap_height() == 0:
        raise ValueError("Cannot save an empty pixmap")
    backend.to_image().save(path, format=format)
