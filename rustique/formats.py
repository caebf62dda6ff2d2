"""Supported file formats and the native project file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional

from rustique.canvas import Color, Pixel

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class FileFormat(Enum):
    """File formats the editor can open or save; the value is the extension."""

    PNG = "png"
    JPEG = "jpg"
    BMP = "bmp"
    TIFF = "tiff"
    GIF = "gif"
    WEBP = "webp"
    RUSTIQ = "rustiq"
    UNKNOWN = ""

    @classmethod
    def from_extension(cls, ext: str) -> "FileFormat":
        """The format for a file extension given without its dot, any case."""
        return _EXTENSIONS.get(ext.lower(), cls.UNKNOWN)

    def image_format(self) -> Optional[str]:
        """The Pillow format name for raster formats, None otherwise."""
        return _PILLOW_NAMES.get(self)

    def extension(self) -> str:
        """The extension used when writing this format, without the dot."""
        return self.value


_EXTENSIONS: dict[str, FileFormat] = {
    "png": FileFormat.PNG,
    "jpg": FileFormat.JPEG,
    "jpeg": FileFormat.JPEG,
    "bmp": FileFormat.BMP,
    "tiff": FileFormat.TIFF,
    "tif": FileFormat.TIFF,
    "gif": FileFormat.GIF,
    "webp": FileFormat.WEBP,
    "rustiq": FileFormat.RUSTIQ,
}

_PILLOW_NAMES: dict[FileFormat, str] = {
    FileFormat.PNG: "PNG",
    FileFormat.JPEG: "JPEG",
    FileFormat.BMP: "BMP",
    FileFormat.TIFF: "TIFF",
    FileFormat.GIF: "GIF",
    FileFormat.WEBP: "WEBP",
}


def detect_format(path: str) -> FileFormat:
    """The format named by the extension of ``path``."""
    suffix = PurePath(path).suffix
    if not suffix:
        return FileFormat.UNKNOWN
    return FileFormat.from_extension(suffix[1:])


def _color_to_list(color: Color) -> list[int]:
    return list(color.as_tuple())


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _as_int(value: Any, what: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type for `{what}`: expected an integer")
    if not low <= value <= high:
        raise ValueError(f"invalid value for `{what}`: {value} out of range")
    return value


def _as_usize(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type for `{what}`: expected an integer")
    if value < 0:
        raise ValueError(f"invalid value for `{what}`: {value} is negative")
    return value


def _as_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"invalid type for `{what}`: expected a boolean")
    return value


def _as_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{what}`: expected a string")
    return value


def _as_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"invalid type for `{what}`: expected a sequence")
    return value


def _as_color(value: Any, what: str) -> Color:
    channels = _as_list(value, what)
    if len(channels) != 4:
        raise ValueError(
            f"invalid length {len(channels)} for `{what}`: expected an array of length 4"
        )
    r, g, b, a = (_as_int(c, what, 0, 255) for c in channels)
    return Color(r, g, b, a)


def _as_pixel(value: Any, what: str) -> Pixel:
    return None if value is None else _as_color(value, what)


def _as_object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type for `{what}`: expected a map")
    return value


@dataclass
class LayerData:
    """A layer as stored in a project file."""

    name: str
    data: list[Pixel]
    visible: bool = True

    def to_dict(self) -> dict[str, Any]:
        """The layer as plain JSON-ready values."""
        return {
            "name": self.name,
            "data": [None if p is None else _color_to_list(p) for p in self.data],
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "LayerData":
        """Read a layer from decoded JSON, raising ValueError if malformed."""
        obj = _as_object(data, "layer")
        return cls(
            name=_as_str(_require(obj, "name"), "name"),
            data=[_as_pixel(p, "data") for p in _as_list(_require(obj, "data"), "data")],
            visible=_as_bool(_require(obj, "visible"), "visible"),
        )


@dataclass
class RustiqueFile:
    """The contents of a ``.rustiq`` project file."""

    width: int
    height: int
    layers: list[LayerData]
    active_layer_index: int
    primary_color: Color
    secondary_color: Color
    saved_colors: list[Color] = field(default_factory=list)
    brush_size: int = 3
    eraser_size: int = 3

    def to_dict(self) -> dict[str, Any]:
        """The project as plain JSON-ready values, in file field order."""
        return {
            "width": self.width,
            "height": self.height,
            "layers": [layer.to_dict() for layer in self.layers],
            "active_layer_index": self.active_layer_index,
            "primary_color": _color_to_list(self.primary_color),
            "secondary_color": _color_to_list(self.secondary_color),
            "saved_colors": [_color_to_list(c) for c in self.saved_colors],
            "brush_size": self.brush_size,
            "eraser_size": self.eraser_size,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RustiqueFile":
        """Read a project from decoded JSON, raising ValueError if malformed.

        Fields not belonging to the format are ignored.
        """
        obj = _as_object(data, "file")
        return cls(
            width=_as_usize(_require(obj, "width"), "width"),
            height=_as_usize(_require(obj, "height"), "height"),
            layers=[
                LayerData.from_dict(layer)
                for layer in _as_list(_require(obj, "layers"), "layers")
            ],
            active_layer_index=_as_usize(
                _require(obj, "active_layer_index"), "active_layer_index"
            ),
            primary_color=_as_color(_require(obj, "primary_color"), "primary_color"),
            secondary_color=_as_color(
                _require(obj, "secondary_color"), "secondary_color"
            ),
            saved_colors=[
                _as_color(c, "saved_colors")
                for c in _as_list(_require(obj, "saved_colors"), "saved_colors")
            ],
            brush_size=_as_int(
                _require(obj, "brush_size"), "brush_size", _I32_MIN, _I32_MAX
            ),
            eraser_size=_as_int(
                _require(obj, "eraser_size"), "eraser_size", _I32_MIN, _I32_MAX
            ),
        )

    def to_json(self) -> str:
        """The project as compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "RustiqueFile":
        """Parse a project from JSON text, raising ValueError if malformed."""
        return cls.from_dict(json.loads(text))