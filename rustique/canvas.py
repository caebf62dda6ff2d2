"""Colours, layers and the layered canvas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @classmethod
    def from_gray(cls, value: int) -> "Color":
        """An opaque grey with all three colour channels set to ``value``."""
        return cls(value, value, value, 255)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """The channels as an ``(r, g, b, a)`` tuple."""
        return (self.r, self.g, self.b, self.a)


BLACK = Color(0, 0, 0, 255)
WHITE = Color(255, 255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)

Pixel = Optional[Color]


@dataclass
class Layer:
    """A named layer holding one optional colour per pixel, row by row."""

    name: str
    data: list[Pixel]
    visible: bool = True


@dataclass(frozen=True)
class CanvasChange:
    """One pixel change on one layer, kept for undo and redo."""

    x: int
    y: int
    layer_index: int
    old_color: Pixel
    new_color: Pixel


@dataclass
class CanvasState:
    """A stack of layers of equal size, the last one drawn on top."""

    width: int
    height: int
    layers: list[Layer] = field(default_factory=list)
    active_layer_index: int = 0

    @classmethod
    def blank(cls, width: int, height: int) -> "CanvasState":
        """A canvas with a single empty, visible layer named "Background"."""
        background = Layer("Background", [None] * (width * height), True)
        return cls(width, height, [background], 0)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _has_active_layer(self) -> bool:
        return 0 <= self.active_layer_index < len(self.layers)

    def get(self, x: int, y: int) -> Pixel:
        """The topmost colour at a point among visible layers, or None."""
        if not self._in_bounds(x, y):
            return None
        idx = y * self.width + x
        for layer in reversed(self.layers):
            if layer.visible and layer.data[idx] is not None:
                return layer.data[idx]
        return None

    def get_from_active_layer(self, x: int, y: int) -> Pixel:
        """The colour at a point on the active layer, or None."""
        if not (self._in_bounds(x, y) and self._has_active_layer()):
            return None
        return self.layers[self.active_layer_index].data[y * self.width + x]

    def set(self, x: int, y: int, color: Pixel) -> None:
        """Set a point on the active layer; points outside are ignored."""
        if self._in_bounds(x, y) and self._has_active_layer():
            self.layers[self.active_layer_index].data[y * self.width + x] = color

    def is_visible(self, layer_index: int) -> bool:
        """Whether the layer at ``layer_index`` exists and is visible."""
        return 0 <= layer_index < len(self.layers) and self.layers[layer_index].visible