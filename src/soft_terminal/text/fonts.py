"""Font sources: embedded font bytes or fonts discovered on the host OS."""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from PIL import ImageFont

from soft_terminal.text.types import Attrs, CacheKeyFlags

logger = logging.getLogger(__name__)

# Names a font file used in preference to discovery
FONT_ENV_VAR = "SOFT_TERMINAL_FONT"

FONT_SUFFIXES = {".ttf", ".otf", ".ttc"}


class FontError(RuntimeError):
    """A font could not be loaded or cannot render the glyphs needed."""


class FontNotFoundError(FontError):
    """No usable font data was supplied and no system font was found."""


@dataclass(frozen=True)
class FontFamily:
    """File names of a monospace family's styles, as installed by common distributions."""
    regular: str
    bold: str | None = None
    italic: str | None = None
    bold_italic: str | None = None


KNOWN_FAMILIES: tuple[FontFamily, ...] = (
    FontFamily("DejaVuSansMono.ttf", "DejaVuSansMono-Bold.ttf",
               "DejaVuSansMono-Oblique.ttf", "DejaVuSansMono-BoldOblique.ttf"),
    FontFamily("LiberationMono-Regular.ttf", "LiberationMono-Bold.ttf",
               "LiberationMono-Italic.ttf", "LiberationMono-BoldItalic.ttf"),
    FontFamily("NotoSansMono-Regular.ttf", "NotoSansMono-Bold.ttf"),
    FontFamily("UbuntuMono-R.ttf", "UbuntuMono-B.ttf", "UbuntuMono-RI.ttf", "UbuntuMono-BI.ttf"),
    FontFamily("FiraMono-Regular.ttf", "FiraMono-Bold.ttf"),
    FontFamily("SFNSMono.ttf"),
    FontFamily("Menlo.ttc"),
    FontFamily("Monaco.ttf"),
    FontFamily("consola.ttf", "consolab.ttf", "consolai.ttf", "consolaz.ttf"),
    FontFamily("cour.ttf", "courbd.ttf", "couri.ttf", "courbi.ttf"),
)


@dataclass(frozen=True)
class FontFace:
    """One loadable face. ``source`` is raw font bytes or a path on disk."""
    source: bytes | Path
    bold: bool = False
    italic: bool = False

    def load(self, size: float) -> ImageFont.FreeTypeFont:
        """Load the face at size; FreeType failures are raised as FontError."""
        source = io.BytesIO(self.source) if isinstance(self.source, bytes) else str(self.source)
        try:
            return ImageFont.truetype(source, size=size)
        except OSError as e:
            raise FontError(f"Cannot load {self.describe()} at size {size}: {e}") from e

    def describe(self) -> str:
        if isinstance(self.source, bytes):
            return f"<{len(self.source)} bytes>"
        return str(self.source)


def font_directories() -> list[Path]:
    """Directories searched for installed fonts, existing ones only."""
    home = Path.home()
    candidates = [
        home / ".fonts",
        home / ".local" / "share" / "fonts",
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
    ]
    if windir := os.environ.get("WINDIR"):
        candidates.append(Path(windir) / "Fonts")
    return [d for d in candidates if d.is_dir()]


def _index_fonts(directories: list[Path]) -> dict[str, Path]:
    """Map lower-cased file name to the first path found with that name."""
    index: dict[str, Path] = {}
    for directory in directories:
        for path in sorted(directory.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES and path.is_file():
                index.setdefault(path.name.lower(), path)
    return index


def find_system_family(directories: list[Path] | None = None) -> dict[tuple[bool, bool], Path] | None:
    """
    Find the first known monospace family installed on this machine.

    Returns a mapping of (bold, italic) to font path, always containing
    the regular style, or None if no known family is installed.
    """
    index = _index_fonts(font_directories() if directories is None else directories)
    for family in KNOWN_FAMILIES:
        regular = index.get(family.regular.lower())
        if regular is None:
            continue
        styles = {(False, False): regular}
        for key, name in (
            ((True, False), family.bold),
            ((False, True), family.italic),
            ((True, True), family.bold_italic),
        ):
            if name and (path := index.get(name.lower())):
                styles[key] = path
        return styles
    return None


class FontSystem:
    """
    The set of faces available for rendering, with per-size font caching.

    Face 0 is always the regular face. Styles without a dedicated face
    are rendered from the regular face with synthesis flags.
    """

    def __init__(self, faces: list[FontFace]):
        if not faces:
            raise FontNotFoundError("FontSystem needs at least one face")
        self.faces = faces
        self._fonts: dict[tuple[int, float], ImageFont.FreeTypeFont] = {}
        # Parse every face once so broken data fails at construction
        for face_id, face in enumerate(faces):
            try:
                self._fonts[(face_id, 12.0)] = face.load(12.0)
            except (FontError, ValueError) as e:
                raise FontNotFoundError(f"Unusable font data {face.describe()}: {e}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "FontSystem":
        """Use a single embedded font for every style."""
        if not data:
            raise FontNotFoundError("Font data is empty")
        return cls([FontFace(bytes(data))])

    @classmethod
    def from_paths(
        cls,
        regular: str | Path,
        bold: str | Path | None = None,
        italic: str | Path | None = None,
        bold_italic: str | Path | None = None,
    ) -> "FontSystem":
        faces = [FontFace(Path(regular))]
        for path, is_bold, is_italic in (
            (bold, True, False),
            (italic, False, True),
            (bold_italic, True, True),
        ):
            if path is not None:
                faces.append(FontFace(Path(path), bold=is_bold, italic=is_italic))
        return cls(faces)

    @classmethod
    def from_system(cls) -> "FontSystem":
        """
        Load a monospace font installed on the host.

        ``$SOFT_TERMINAL_FONT`` takes precedence over discovery. Raises
        FontNotFoundError when nothing usable is installed, which is
        common in containers and sandboxes.
        """
        if override := os.environ.get(FONT_ENV_VAR):
            path = Path(override).expanduser()
            if not path.is_file():
                raise FontNotFoundError(f"{FONT_ENV_VAR} points to a missing file: {path}")
            logger.info("Using font from %s: %s", FONT_ENV_VAR, path)
            return cls.from_paths(path)

        styles = find_system_family()
        if styles is None:
            raise FontNotFoundError(
                "No monospace system font found. "
                f"Pass font data explicitly or set {FONT_ENV_VAR}."
            )
        logger.info("Using system font %s", styles[(False, False)])
        return cls.from_paths(
            styles[(False, False)],
            bold=styles.get((True, False)),
            italic=styles.get((False, True)),
            bold_italic=styles.get((True, True)),
        )

    def select(self, attrs: Attrs) -> tuple[int, CacheKeyFlags]:
        """Pick the face for attrs and the synthesis still needed on top of it."""
        best_id, best_face = 0, self.faces[0]
        for face_id, face in enumerate(self.faces):
            if (face.bold, face.italic) == (attrs.bold, attrs.italic):
                best_id, best_face = face_id, face
                break
            # Prefer a face that covers part of the request over regular
            if (face.bold and attrs.bold and not face.italic) or (
                face.italic and attrs.italic and not face.bold
            ):
                best_id, best_face = face_id, face

        flags = CacheKeyFlags.NONE
        if attrs.bold and not best_face.bold:
            flags |= CacheKeyFlags.FAKE_BOLD
        if attrs.italic and not best_face.italic:
            flags |= CacheKeyFlags.FAKE_ITALIC
        return best_id, flags

    def font(self, face_id: int, size: float) -> ImageFont.FreeTypeFont:
        """Return the face loaded at size, loading it on first use."""
        key = (face_id, float(size))
        font = self._fonts.get(key)
        if font is None:
            font = self.faces[face_id].load(size)
            self._fonts[key] = font
        return font
