"""The paint document: drawing tools, layers, undo history and file I/O."""

from __future__ import annotations

import time
from collections import deque
from enum import Enum
from typing import Callable, Optional

from PIL import Image

from rustique.canvas import (
    BLACK,
    TRANSPARENT,
    WHITE,
    CanvasChange,
    CanvasState,
    Color,
    Layer,
    Pixel,
)
from rustique.formats import FileFormat, LayerData, RustiqueFile, detect_format
from rustique.localization import Language, get_text

MAX_UNDO_STEPS = 20
MAX_SAVED_COLORS = 16
CHECKERBOARD_SIZE = 8
DEFAULT_BRUSH_SIZE = 3
CHECKER_LIGHT = Color.from_gray(200)
CHECKER_DARK = Color.from_gray(160)

# Encoders that cannot store an alpha channel.
_NO_ALPHA_FORMATS = frozenset({"JPEG"})

Point = tuple[int, int]


class Tool(Enum):
    """Drawing tools."""

    BRUSH = "brush"
    ERASER = "eraser"
    PAINT_BUCKET = "paint_bucket"
    COLOR_PICKER = "color_picker"
    LINE = "line"


class PaintError(Exception):
    """Raised when a document cannot be opened or saved."""


class PaintApp:
    """An open drawing with its tools, colours, layers and history.

    ``save_dialog`` is None while no "save changes?" question is pending;
    otherwise it holds whether answering it returns to the main menu.
    """

    def __init__(
        self, width: int, height: int, language: Language = Language.FRENCH
    ) -> None:
        self.current_state = CanvasState.blank(width, height)
        self.undo_stack: list[list[CanvasChange]] = []
        self.redo_stack: list[list[CanvasChange]] = []
        self.current_changes: list[CanvasChange] = []
        self.current_tool = Tool.BRUSH
        self.primary_color: Color = BLACK
        self.secondary_color: Color = WHITE
        self.saved_colors: list[Color] = []
        self.brush_size = DEFAULT_BRUSH_SIZE
        self.eraser_size = DEFAULT_BRUSH_SIZE
        self.last_position: Optional[Point] = None
        self.is_drawing = False
        self.last_action_time = time.monotonic()
        self.texture_dirty = True
        self.zoom = 1.0
        self.pan: tuple[float, float] = (0.0, 0.0)
        self.line_start: Optional[Point] = None
        self.line_end: Optional[Point] = None
        self.is_drawing_line = False
        self.is_first_click_line = True
        self.has_unsaved_changes = False
        self.last_save_path: Optional[str] = None
        self.save_dialog: Optional[bool] = None
        self.language = language

    # ----------------------------------------------------------- opening

    @classmethod
    def from_rustiq_file(cls, file: RustiqueFile, language: Language) -> "PaintApp":
        """A document restored from a project file."""
        app = cls(0, 0, language)
        app.current_state = CanvasState(
            width=file.width,
            height=file.height,
            layers=[
                Layer(layer.name, list(layer.data), layer.visible)
                for layer in file.layers
            ],
            active_layer_index=file.active_layer_index,
        )
        app.primary_color = file.primary_color
        app.secondary_color = file.secondary_color
        app.saved_colors = list(file.saved_colors)
        app.brush_size = file.brush_size
        app.eraser_size = file.eraser_size
        return app

    @classmethod
    def open_file(cls, path: str, language: Language) -> "PaintApp":
        """Open a project file or a raster image, raising PaintError on failure."""
        fmt = detect_format(path)
        if fmt is FileFormat.RUSTIQ:
            try:
                with open(path, encoding="utf-8") as handle:
                    content = handle.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise PaintError(
                    f"{get_text('error_reading_file', language)}: {exc}"
                ) from exc
            try:
                file = RustiqueFile.from_json(content)
            except ValueError as exc:
                raise PaintError(
                    f"{get_text('error_reading_rustiq', language)}: {exc}"
                ) from exc
            app = cls.from_rustiq_file(file, language)
            app.last_save_path = path
            return app
        if fmt is FileFormat.UNKNOWN:
            raise PaintError(f"{get_text('format_not_supported', language)}: {path}")

        try:
            with Image.open(path) as img:
                rgba = img.convert("RGBA")
        except (OSError, ValueError) as exc:
            raise PaintError(
                f"{get_text('unable_to_open_image', language)}: {exc}"
            ) from exc

        width, height = rgba.size
        app = cls(width, height, language)
        raw = rgba.tobytes()
        app.current_state.layers[0].data = [
            Color(r, g, b, a) if a > 0 else None
            for r, g, b, a in zip(*[iter(raw)] * 4)
        ]
        app.last_save_path = path
        return app

    @classmethod
    def from_png_file(cls, path: str, language: Language) -> Optional["PaintApp"]:
        """Like :meth:`open_file`, but return None instead of raising."""
        try:
            return cls.open_file(path, language)
        except PaintError:
            return None

    # ------------------------------------------------------------ saving

    def to_rustiq_file(self) -> RustiqueFile:
        """The document as a project file."""
        state = self.current_state
        return RustiqueFile(
            width=state.width,
            height=state.height,
            layers=[
                LayerData(layer.name, list(layer.data), layer.visible)
                for layer in state.layers
            ],
            active_layer_index=state.active_layer_index,
            primary_color=self.primary_color,
            secondary_color=self.secondary_color,
            saved_colors=list(self.saved_colors),
            brush_size=self.brush_size,
            eraser_size=self.eraser_size,
        )

    def save_file(self, path: str) -> None:
        """Save in the format named by the extension of ``path``."""
        fmt = detect_format(path)
        if fmt is FileFormat.RUSTIQ:
            self.save_as_rustiq(path)
            return
        image_format = fmt.image_format()
        if image_format is None:
            raise PaintError(
                f"{get_text('format_not_supported', self.language)}: {path}"
            )
        self.save_as_image(path, image_format)

    def save_as_image(self, path: str, image_format: str) -> None:
        """Flatten the visible layers and write them with a Pillow encoder."""
        state = self.current_state
        try:
            img = Image.frombytes(
                "RGBA",
                (state.width, state.height),
                self._composite(lambda x, y: TRANSPARENT),
            )
            if image_format in _NO_ALPHA_FORMATS:
                img = img.convert("RGB")
            img.save(path, format=image_format)
        except (OSError, ValueError, KeyError) as exc:
            raise PaintError(
                f"{get_text('error_saving_image', self.language)}: {exc}"
            ) from exc
        self.has_unsaved_changes = False
        self.last_save_path = path

    def save_as_rustiq(self, path: str) -> None:
        """Write the document as a project file."""
        text = self.to_rustiq_file().to_json()
        try:
            handle = open(path, "w", encoding="utf-8")
        except OSError as exc:
            raise PaintError(f"Erreur de création du fichier: {exc}") from exc
        with handle:
            try:
                handle.write(text)
            except OSError as exc:
                raise PaintError(f"Erreur d'écriture: {exc}") from exc
        self.has_unsaved_changes = False
        self.last_save_path = path

    def save_as_png(self, path: str) -> None:
        """Save as PNG, adding a ``.png`` extension when missing."""
        if not path.lower().endswith(".png"):
            path = f"{path}.png"
        self.save_as_image(path, "PNG")

    def quick_save(self) -> None:
        """Save again to the last path used."""
        if self.last_save_path is None:
            raise PaintError(get_text("no_previous_path", self.language))
        self.save_file(self.last_save_path)

    # ------------------------------------------------------------ layers

    def add_layer(self, name: str) -> None:
        """Append an empty layer on top and make it active."""
        state = self.current_state
        state.layers.append(Layer(name, [None] * (state.width * state.height), True))
        state.active_layer_index = len(state.layers) - 1
        self._touch()

    def remove_layer(self, index: int) -> None:
        """Remove a layer, always keeping at least one."""
        layers = self.current_state.layers
        if len(layers) > 1 and 0 <= index < len(layers):
            del layers[index]
            if self.current_state.active_layer_index >= len(layers):
                self.current_state.active_layer_index = len(layers) - 1
            self._touch()

    def move_layer_up(self, index: int) -> None:
        """Swap a layer with the one below it in the list."""
        layers = self.current_state.layers
        if 0 < index < len(layers):
            self._swap_layers(index, index - 1)

    def move_layer_down(self, index: int) -> None:
        """Swap a layer with the one after it in the list."""
        layers = self.current_state.layers
        if 0 <= index < len(layers) - 1:
            self._swap_layers(index, index + 1)

    def _swap_layers(self, index: int, other: int) -> None:
        state = self.current_state
        state.layers[index], state.layers[other] = state.layers[other], state.layers[index]
        if state.active_layer_index == index:
            state.active_layer_index = other
        elif state.active_layer_index == other:
            state.active_layer_index = index
        self._touch()

    def toggle_layer_visibility(self, index: int) -> None:
        """Show a hidden layer or hide a shown one."""
        layers = self.current_state.layers
        if 0 <= index < len(layers):
            layers[index].visible = not layers[index].visible
            self._touch()

    def set_active_layer(self, index: int) -> None:
        """Make the layer at ``index`` the one drawn on."""
        if 0 <= index < len(self.current_state.layers):
            self.current_state.active_layer_index = index

    def rename_layer(self, index: int, name: str) -> None:
        """Give the layer at ``index`` a new name."""
        layers = self.current_state.layers
        if 0 <= index < len(layers):
            layers[index].name = name
            self.has_unsaved_changes = True

    def _touch(self) -> None:
        self.texture_dirty = True
        self.has_unsaved_changes = True

    # ------------------------------------------------------------ colours

    def add_saved_color(self, color: Color) -> None:
        """Add a colour to the palette, dropping the oldest when full."""
        if color in self.saved_colors:
            return
        if len(self.saved_colors) >= MAX_SAVED_COLORS:
            del self.saved_colors[0]
        self.saved_colors.append(color)

    def remove_saved_color(self, index: int) -> None:
        """Remove a colour from the palette."""
        if 0 <= index < len(self.saved_colors):
            del self.saved_colors[index]

    def set_primary_color_from_saved(self, index: int) -> None:
        """Use a palette colour as the primary colour."""
        if 0 <= index < len(self.saved_colors):
            self.primary_color = self.saved_colors[index]

    def set_secondary_color_from_saved(self, index: int) -> None:
        """Use a palette colour as the secondary colour."""
        if 0 <= index < len(self.saved_colors):
            self.secondary_color = self.saved_colors[index]

    # ------------------------------------------------------------ history

    def record_change(self, x: int, y: int, new_color: Pixel) -> None:
        """Set a pixel of the active layer and remember the change."""
        state = self.current_state
        if not (0 <= x < state.width and 0 <= y < state.height):
            return
        old_color = state.get_from_active_layer(x, y)
        if old_color != new_color:
            self.current_changes.append(
                CanvasChange(x, y, state.active_layer_index, old_color, new_color)
            )
            state.set(x, y, new_color)
            self.has_unsaved_changes = True

    def save_state(self) -> None:
        """Close the current stroke into one undo step."""
        if not self.current_changes:
            return
        self.undo_stack.append(self.current_changes)
        self.current_changes = []
        if len(self.undo_stack) > MAX_UNDO_STEPS:
            del self.undo_stack[0]
        self.redo_stack.clear()
        self.is_drawing = False
        self.has_unsaved_changes = True

    def _layer_pixel(self, layer_index: int, x: int, y: int) -> Pixel:
        state = self.current_state
        if 0 <= x < state.width and 0 <= y < state.height and 0 <= layer_index < len(
            state.layers
        ):
            return state.layers[layer_index].data[y * state.width + x]
        return None

    def _set_layer_pixel(self, layer_index: int, x: int, y: int, color: Pixel) -> None:
        state = self.current_state
        if 0 <= x < state.width and 0 <= y < state.height and 0 <= layer_index < len(
            state.layers
        ):
            state.layers[layer_index].data[y * state.width + x] = color

    def undo(self) -> None:
        """Revert the last undo step."""
        if not self.undo_stack:
            return
        changes = self.undo_stack.pop()
        redo_changes = []
        for change in reversed(changes):
            redo_changes.append(change)
            self._set_layer_pixel(change.layer_index, change.x, change.y, change.old_color)
        self.redo_stack.append(redo_changes)
        self._touch()

    def redo(self) -> None:
        """Apply again the last undone step."""
        if not self.redo_stack:
            return
        changes = self.redo_stack.pop()
        undo_changes = []
        for change in reversed(changes):
            current = self._layer_pixel(change.layer_index, change.x, change.y)
            undo_changes.append(
                CanvasChange(
                    change.x, change.y, change.layer_index, current, change.new_color
                )
            )
            self._set_layer_pixel(change.layer_index, change.x, change.y, change.new_color)
        self.undo_stack.append(undo_changes)
        self._touch()

    # ------------------------------------------------------------ drawing

    def _fill_for(self, color: Color) -> Pixel:
        return None if self.current_tool is Tool.ERASER else color

    def _active_layer_hidden(self) -> bool:
        state = self.current_state
        return 0 <= state.active_layer_index < len(state.layers) and not state.layers[
            state.active_layer_index
        ].visible

    def draw_line(self, start: Point, end: Point, color: Color) -> None:
        """Stamp the brush along a straight line from ``start`` to ``end``."""
        x, y = start
        x1, y1 = end
        dx = abs(x1 - x)
        dy = -abs(y1 - y)
        sx = 1 if x < x1 else -1
        sy = 1 if y < y1 else -1
        err = dx + dy
        points = []
        while True:
            points.append((x, y))
            if x == x1 and y == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x += sx
            if e2 <= dx:
                err += dx
                y += sy

        fill = self._fill_for(color)
        for px, py in points:
            self.draw_point_with_color(px, py, fill)
        self.last_action_time = time.monotonic()
        self.texture_dirty = True

    def draw_point(self, x: int, y: int, use_secondary: bool) -> None:
        """Stamp the brush once with the primary or secondary colour."""
        color = self.secondary_color if use_secondary else self.primary_color
        self.draw_point_with_color(x, y, self._fill_for(color))

    def draw_point_with_color(self, x: int, y: int, fill_color: Pixel) -> None:
        """Stamp a round brush of the current tool's size at a point."""
        state = self.current_state
        size = self.eraser_size if self.current_tool is Tool.ERASER else self.brush_size
        if self._active_layer_hidden():
            return
        radius_squared = size * size
        pixels = [
            (x + dx, y + dy)
            for dy in range(-size, size + 1)
            for dx in range(-size, size + 1)
            if dx * dx + dy * dy <= radius_squared
            and 0 <= x + dx < state.width
            and 0 <= y + dy < state.height
        ]
        for nx, ny in pixels:
            self.record_change(nx, ny, fill_color)
        self.texture_dirty = True

    def paint_bucket(self, x: int, y: int, use_secondary: bool) -> None:
        """Flood-fill the 4-connected area of equal colour on the active layer."""
        state = self.current_state
        if not (0 <= x < state.width and 0 <= y < state.height):
            return
        if self._active_layer_hidden():
            return
        target = state.get_from_active_layer(x, y)
        color = self.secondary_color if use_secondary else self.primary_color
        fill = self._fill_for(color)
        if target == fill:
            return

        queue: deque[Point] = deque([(x, y)])
        visited: set[Point] = set()
        while queue:
            cx, cy = queue.popleft()
            if (cx, cy) in visited or state.get_from_active_layer(cx, cy) != target:
                continue
            visited.add((cx, cy))
            self.record_change(cx, cy, fill)
            if cx > 0:
                queue.append((cx - 1, cy))
            if cx + 1 < state.width:
                queue.append((cx + 1, cy))
            if cy > 0:
                queue.append((cx, cy - 1))
            if cy + 1 < state.height:
                queue.append((cx, cy + 1))

        self.last_action_time = time.monotonic()
        self.texture_dirty = True

    def pick_color(self, x: int, y: int, use_secondary: bool) -> None:
        """Take the visible colour at a point as primary or secondary colour."""
        color = self.current_state.get(x, y)
        if color is None:
            return
        if use_secondary:
            self.secondary_color = color
        else:
            self.primary_color = color

    # ------------------------------------------------------------ display

    def _composite(self, background: Callable[[int, int], Color]) -> bytes:
        state = self.current_state
        out = bytearray()
        for y in range(state.height):
            for x in range(state.width):
                color = state.get(x, y) or background(x, y)
                out.extend(color.as_tuple())
        return bytes(out)

    def render_rgba(self) -> bytes:
        """The visible image as RGBA bytes, empty pixels shown as a checkerboard."""

        def checker(x: int, y: int) -> Color:
            even = (x // CHECKERBOARD_SIZE + y // CHECKERBOARD_SIZE) % 2 == 0
            return CHECKER_LIGHT if even else CHECKER_DARK

        return self._composite(checker)

    def show_save_dialog(self, return_to_menu: bool) -> None:
        """Ask whether to save changes."""
        self.save_dialog = return_to_menu

    def hide_save_dialog(self) -> None:
        """Close the save question."""
        self.save_dialog = None

    def set_language(self, language: Language) -> None:
        """Switch the language of messages."""
        self.language = language