"""The start menu: canvas size, language choice and the default logo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from PIL import Image

from rustique.localization import Language

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
MIN_DIMENSION = 100
MAX_DIMENSION = 4000
LOGO_HEIGHT = 150.0
LOGO_PATH = "rustique.png"
DEFAULT_LOGO_WIDTH = 200
DEFAULT_LOGO_HEIGHT = 100
_LOGO_BLUE = 128


@dataclass(frozen=True)
class NewCanvas:
    """Request to start a blank canvas of the given size."""

    width: int
    height: int


@dataclass(frozen=True)
class OpenFile:
    """Request to open an existing file."""


@dataclass(frozen=True)
class LanguageChanged:
    """The user picked another interface language."""

    language: Language


MenuResult = Union[NewCanvas, OpenFile, LanguageChanged]


def _clamp_dimension(value: int) -> int:
    return max(MIN_DIMENSION, min(MAX_DIMENSION, int(value)))


class MainMenu:
    """State of the start menu and the choices it offers."""

    def __init__(self, language: Language = Language.FRENCH) -> None:
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.logo_size = LOGO_HEIGHT
        self.language = language
        self.logo: Optional[tuple[int, int, bytes]] = None

    def set_width(self, width: int) -> None:
        """Set the new-canvas width, kept within the allowed range."""
        self.width = _clamp_dimension(width)

    def set_height(self, height: int) -> None:
        """Set the new-canvas height, kept within the allowed range."""
        self.height = _clamp_dimension(height)

    def choose_language(self, language: Language) -> LanguageChanged:
        """Switch the menu language and report the change."""
        self.language = language
        return LanguageChanged(language)

    def create_canvas(self) -> NewCanvas:
        """Ask for a new canvas of the chosen size."""
        return NewCanvas(self.width, self.height)

    def open_file(self) -> OpenFile:
        """Ask to open an existing file."""
        return OpenFile()

    def _ensure_logo(self, path: str = LOGO_PATH) -> tuple[int, int, bytes]:
        if self.logo is None:
            self.logo = _load_logo(path)
        return self.logo


def default_logo(
    width: int = DEFAULT_LOGO_WIDTH, height: int = DEFAULT_LOGO_HEIGHT
) -> bytes:
    """RGBA bytes of a red-green gradient over a fixed blue, fully opaque."""
    if width <= 0 or height <= 0:
        raise ValueError(f"logo size must be positive, got {width}x{height}")
    out = bytearray()
    for y in range(height):
        green = y * 255 // height
        for x in range(width):
            out.extend((x * 255 // width, green, _LOGO_BLUE, 255))
    return bytes(out)


def _load_logo(path: str) -> tuple[int, int, bytes]:
    """The logo image at ``path`` as (width, height, RGBA bytes), or the default."""
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except (OSError, ValueError):
        return (
            DEFAULT_LOGO_WIDTH,
            DEFAULT_LOGO_HEIGHT,
            default_logo(DEFAULT_LOGO_WIDTH, DEFAULT_LOGO_HEIGHT),
        )
    width, height = rgba.size
    return width, height, rgba.tobytes()