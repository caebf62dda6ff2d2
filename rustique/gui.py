"""Desktop window for the paint editor, built on Tk."""

from __future__ import annotations

import argparse
import tkinter as tk
from tkinter import colorchooser, filedialog, messagebox, simpledialog
from typing import Callable, Optional, Sequence

from PIL import Image, ImageTk

from rustique.canvas import Color
from rustique.localization import Language, get_text
from rustique.menu import MAX_DIMENSION, MIN_DIMENSION, MainMenu, MenuResult, OpenFile
from rustique.painter import PaintApp, Tool
from rustique.session import LayerAction, PendingAction, Session

TITLE = "Rustique Paint"
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
ZOOM_SPEED = 0.001
MIN_TOOL_SIZE = 1
MAX_TOOL_SIZE = 500
SWATCH_SIZE = 24
LAYER_PANEL_WIDTH = 180
_WHEEL_STEP = 120
_BUTTON3_MASK = 0x400
_MENU_BACKGROUND = "#23233c"
_CANVAS_BACKGROUND = "#303030"

Point = tuple[float, float]
Rect = tuple[float, float, float, float]

_FILTERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "All Supported Files",
        ("png", "jpg", "jpeg", "bmp", "tiff", "tif", "gif", "webp", "rustiq"),
    ),
    ("PNG Image", ("png",)),
    ("JPEG Image", ("jpg", "jpeg")),
    ("BMP Image", ("bmp",)),
    ("TIFF Image", ("tiff", "tif")),
    ("GIF Image", ("gif",)),
    ("WebP Image", ("webp",)),
    ("Rustique File", ("rustiq",)),
)

_TOOLS: tuple[tuple[Tool, str], ...] = (
    (Tool.BRUSH, "brush"),
    (Tool.ERASER, "eraser"),
    (Tool.PAINT_BUCKET, "paint_bucket"),
    (Tool.COLOR_PICKER, "color_picker"),
    (Tool.LINE, "line"),
)


def file_types() -> list[tuple[str, str]]:
    """File-chooser filters as ``(label, "*.ext *.ext")`` pairs."""
    return [(label, " ".join(f"*.{ext}" for ext in exts)) for label, exts in _FILTERS]


def fit_scale(
    canvas_width: float, canvas_height: float, avail_width: float, avail_height: float
) -> float:
    """The largest scale at which the canvas fits in the available area."""
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(
            f"canvas size must be positive, got {canvas_width}x{canvas_height}"
        )
    return min(avail_width / canvas_width, avail_height / canvas_height)


def screen_to_canvas(
    point: Point, canvas_rect: Rect, canvas_width: float, canvas_height: float
) -> Point:
    """Map a screen point into canvas pixel coordinates.

    ``canvas_rect`` is ``(left, top, right, bottom)`` of the canvas on screen.
    """
    left, top, right, bottom = canvas_rect
    if right == left or bottom == top:
        raise ValueError(f"degenerate canvas rectangle: {canvas_rect}")
    px, py = point
    return (
        (px - left) * canvas_width / (right - left),
        (py - top) * canvas_height / (bottom - top),
    )


def _canvas_to_screen(
    point: Point, canvas_rect: Rect, canvas_width: float, canvas_height: float
) -> Point:
    left, top, right, bottom = canvas_rect
    return (
        point[0] * (right - left) / canvas_width + left,
        point[1] * (bottom - top) / canvas_height + top,
    )


def zoom_toward(
    zoom: float,
    pan: Point,
    delta: float,
    mouse_offset: Optional[Point] = None,
) -> tuple[float, Point]:
    """Apply a wheel step to ``zoom``, keeping the point under the mouse still.

    ``mouse_offset`` is the mouse position minus the view centre minus ``pan``;
    without it only the zoom changes. Returns the new ``(zoom, pan)``.
    """
    if delta == 0:
        return zoom, pan
    new_zoom = min(MAX_ZOOM, max(MIN_ZOOM, zoom * (1.0 + delta * ZOOM_SPEED)))
    if mouse_offset is None:
        return new_zoom, pan
    factor = new_zoom / zoom
    return new_zoom, (
        pan[0] + mouse_offset[0] * (1.0 - factor),
        pan[1] + mouse_offset[1] * (1.0 - factor),
    )


def _hex(color: Color) -> str:
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def _bind_int(var: tk.IntVar, low: int, high: int, setter: Callable[[int], None]) -> None:
    def on_change(*_: object) -> None:
        try:
            value = int(var.get())
        except (tk.TclError, ValueError):
            return
        setter(max(low, min(high, value)))

    var.trace_add("write", on_change)


class PaintWindow:
    """The main window: start menu or drawing view, driven by a :class:`Session`."""

    def __init__(
        self,
        session: Optional[Session] = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
    ) -> None:
        self.session = session if session is not None else Session()
        self.width = width
        self.height = height
        self._root: Optional[tk.Tk] = None
        self._shown: object = None
        self._canvas: Optional[tk.Canvas] = None
        self._layers_frame: Optional[tk.Frame] = None
        self._palette_frame: Optional[tk.Frame] = None
        self._primary_swatch: Optional[tk.Button] = None
        self._secondary_swatch: Optional[tk.Button] = None
        self._zoom_var: Optional[tk.DoubleVar] = None
        self._source_image: Optional[Image.Image] = None
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._logo_photo: Optional[ImageTk.PhotoImage] = None
        self._rect: Optional[Rect] = None
        self._pan_anchor: Optional[tuple[int, int]] = None
        self._preview_secondary = False

    # ------------------------------------------------------------ lifecycle

    def run(self) -> None:
        """Open the window and run until it is closed."""
        root = tk.Tk()
        root.title(TITLE)
        root.geometry(f"{self.width}x{self.height}")
        self._root = root
        root.bind("<Control-z>", lambda _e: self._shortcut(PendingAction.UNDO))
        root.bind("<Control-Z>", lambda _e: self._shortcut(PendingAction.REDO))
        root.bind("<Control-y>", lambda _e: self._shortcut(PendingAction.REDO))
        root.bind("<Control-s>", self._on_save_shortcut)
        root.bind("<Escape>", self._on_escape)
        self._build()
        try:
            root.mainloop()
        finally:
            self._root = None

    @property
    def _lang(self) -> Language:
        return self.session.language

    def _text(self, key: str) -> str:
        return get_text(key, self._lang)

    def _sync(self) -> None:
        """Run deferred work and dialogs, then bring the widgets up to date."""
        session = self.session
        while True:
            session.process_pending()
            if session.show_error:
                messagebox.showerror(self._text("error"), session.error_text)
                session.dismiss_error()
            if session.rename_layer_index is not None:
                self._ask_rename()
                continue
            canvas = session.canvas
            if canvas is not None and canvas.save_dialog is not None:
                self._ask_save()
                continue
            break
        if session.state is not self._shown:
            self._build()
        else:
            self._refresh_editor()

    def _ask_rename(self) -> None:
        session = self.session
        name = simpledialog.askstring(
            self._text("rename_layer"),
            self._text("rename_layer"),
            initialvalue=session.rename_layer_name,
            parent=self._root,
        )
        if name is None:
            session.cancel_rename()
        else:
            session.confirm_rename(name)

    def _ask_save(self) -> None:
        answer = messagebox.askyesnocancel(
            self._text("save_changes"), self._text("want_to_save_changes")
        )
        if answer is None:
            self.session.answer_save_dialog("cancel")
        elif answer:
            path = filedialog.asksaveasfilename(filetypes=file_types(), initialdir="/")
            self.session.answer_save_dialog("yes", path or None)
        else:
            self.session.answer_save_dialog("no")

    def _build(self) -> None:
        root = self._root
        if root is None:
            return
        for child in root.winfo_children():
            child.destroy()
        self._shown = self.session.state
        self._canvas = None
        self._layers_frame = None
        self._palette_frame = None
        self._primary_swatch = None
        self._secondary_swatch = None
        self._zoom_var = None
        self._source_image = None
        self._photo = None
        self._rect = None
        menu = self.session.menu
        if menu is not None:
            self._build_menu(root, menu)
        else:
            canvas = self.session.canvas
            if canvas is not None:
                self._build_editor(root, canvas)
                self._refresh_editor()

    # ------------------------------------------------------------ menu view

    def _build_menu(self, root: tk.Tk, menu: MainMenu) -> None:
        frame = tk.Frame(root, bg=_MENU_BACKGROUND)
        frame.pack(fill="both", expand=True)

        logo_w, logo_h, logo_data = menu._ensure_logo()
        logo = Image.frombytes("RGBA", (logo_w, logo_h), logo_data)
        target_h = max(1, int(menu.logo_size))
        target_w = max(1, int(menu.logo_size * logo_w / logo_h))
        logo = logo.resize((target_w, target_h), Image.Resampling.BILINEAR)
        self._logo_photo = ImageTk.PhotoImage(logo, master=root)
        tk.Label(frame, image=self._logo_photo, bg=_MENU_BACKGROUND).pack(pady=(30, 40))

        lang_row = tk.Frame(frame, bg=_MENU_BACKGROUND)
        lang_row.pack()
        tk.Label(
            lang_row, text=self._text("language"), fg="white", bg=_MENU_BACKGROUND
        ).pack(side="left", padx=4)
        tk.Button(
            lang_row,
            text="Français",
            command=lambda: self._menu_result(menu.choose_language(Language.FRENCH)),
        ).pack(side="left", padx=4)
        tk.Button(
            lang_row,
            text="English",
            command=lambda: self._menu_result(menu.choose_language(Language.ENGLISH)),
        ).pack(side="left", padx=4)

        group = tk.LabelFrame(
            frame, text=self._text("canvas_dimensions"), padx=20, pady=20
        )
        group.pack(pady=20)
        width_var = tk.IntVar(value=menu.width)
        height_var = tk.IntVar(value=menu.height)
        for row, (key, var) in enumerate((("width", width_var), ("height", height_var))):
            tk.Label(group, text=self._text(key)).grid(row=row, column=0, sticky="e")
            tk.Spinbox(
                group, from_=MIN_DIMENSION, to=MAX_DIMENSION, textvariable=var, width=8
            ).grid(row=row, column=1, sticky="w", padx=6, pady=3)
        _bind_int(width_var, MIN_DIMENSION, MAX_DIMENSION, menu.set_width)
        _bind_int(height_var, MIN_DIMENSION, MAX_DIMENSION, menu.set_height)

        tk.Button(
            group,
            text=self._text("create_new_canvas"),
            command=lambda: self._menu_result(menu.create_canvas()),
        ).grid(row=2, column=0, columnspan=2, pady=(20, 8), sticky="ew")
        tk.Button(
            group,
            text=self._text("open_file"),
            command=lambda: self._menu_result(menu.open_file()),
        ).grid(row=3, column=0, columnspan=2, sticky="ew")

    def _menu_result(self, result: MenuResult) -> None:
        path = None
        if isinstance(result, OpenFile):
            path = filedialog.askopenfilename(filetypes=file_types(), initialdir="/") or None
        self.session.handle_menu_result(result, path)
        self._sync()

    # ------------------------------------------------------------ editor view

    def _build_editor(self, root: tk.Tk, app: PaintApp) -> None:
        top = tk.Frame(root)
        top.pack(side="top", fill="x")
        tk.Button(
            top, text=self._text("return_to_menu"), command=self._on_return_to_menu
        ).pack(side="left", padx=2, pady=2)
        tk.Button(
            top, text=self._text("undo"), command=lambda: self._request(PendingAction.UNDO)
        ).pack(side="left", padx=2)
        tk.Button(
            top, text=self._text("redo"), command=lambda: self._request(PendingAction.REDO)
        ).pack(side="left", padx=2)
        tk.Label(top, text=self._text("shortcuts_info")).pack(side="right", padx=6)

        left = tk.Frame(root, width=LAYER_PANEL_WIDTH)
        left.pack(side="left", fill="y", padx=4)
        tk.Label(left, text=self._text("layers"), font=("TkDefaultFont", 12, "bold")).pack(
            anchor="w"
        )
        controls = tk.Frame(left)
        controls.pack(fill="x", pady=4)
        tk.Button(controls, text="+", command=lambda: self._layer_edit(self._add_layer)).pack(
            side="left"
        )
        tk.Button(
            controls, text="-", command=lambda: self._layer_edit(self._remove_layer)
        ).pack(side="left")
        tk.Button(
            controls,
            text=self._text("up"),
            command=lambda: self._layer_edit(
                lambda a: a.move_layer_up(a.current_state.active_layer_index)
            ),
        ).pack(side="left", padx=(5, 0))
        tk.Button(
            controls,
            text=self._text("down"),
            command=lambda: self._layer_edit(
                lambda a: a.move_layer_down(a.current_state.active_layer_index)
            ),
        ).pack(side="left")
        self._layers_frame = tk.Frame(left)
        self._layers_frame.pack(fill="both", expand=True)

        right = tk.Frame(root)
        right.pack(side="right", fill="y", padx=4)
        self._build_tools(right, app)

        canvas = tk.Canvas(root, bg=_CANVAS_BACKGROUND, highlightthickness=0)
        canvas.pack(side="left", fill="both", expand=True)
        canvas.bind("<Configure>", lambda _e: self._redraw())
        canvas.bind("<ButtonPress-1>", lambda e: self._on_press(e, False))
        canvas.bind("<ButtonPress-3>", lambda e: self._on_press(e, True))
        canvas.bind("<B1-Motion>", lambda e: self._on_drag(e, False))
        canvas.bind("<B3-Motion>", lambda e: self._on_drag(e, True))
        canvas.bind("<ButtonRelease-1>", self._on_release)
        canvas.bind("<ButtonRelease-3>", self._on_release)
        canvas.bind("<ButtonPress-2>", self._on_middle_press)
        canvas.bind("<B2-Motion>", self._on_middle_drag)
        canvas.bind("<Motion>", self._on_motion)
        canvas.bind("<MouseWheel>", lambda e: self._on_wheel(e, e.delta))
        canvas.bind("<Button-4>", lambda e: self._on_wheel(e, _WHEEL_STEP))
        canvas.bind("<Button-5>", lambda e: self._on_wheel(e, -_WHEEL_STEP))
        self._canvas = canvas

    def _build_tools(self, panel: tk.Frame, app: PaintApp) -> None:
        tk.Label(panel, text=self._text("tools"), font=("TkDefaultFont", 12, "bold")).pack(
            anchor="w"
        )
        for tool, key in _TOOLS:
            tk.Button(
                panel,
                text=self._text(key),
                command=lambda t=tool: setattr(app, "current_tool", t),
            ).pack(fill="x")

        tk.Label(panel, text=self._text("save_options")).pack(anchor="w", pady=(10, 0))
        tk.Button(panel, text=self._text("save_file"), command=self._on_save_button).pack(
            fill="x"
        )

        for key, attr in (("brush_size", "brush_size"), ("eraser_size", "eraser_size")):
            tk.Label(panel, text=self._text(key)).pack(anchor="w", pady=(10, 0))
            var = tk.IntVar(value=getattr(app, attr))
            tk.Spinbox(
                panel, from_=MIN_TOOL_SIZE, to=MAX_TOOL_SIZE, textvariable=var, width=6
            ).pack(anchor="w")
            _bind_int(
                var,
                MIN_TOOL_SIZE,
                MAX_TOOL_SIZE,
                lambda value, a=attr: setattr(app, a, value),
            )

        tk.Label(panel, text=self._text("colors")).pack(anchor="w", pady=(10, 0))
        swatches = []
        for key, attr in (("primary", "primary_color"), ("secondary", "secondary_color")):
            row = tk.Frame(panel)
            row.pack(fill="x")
            tk.Label(row, text=self._text(key)).pack(side="left")
            swatch = tk.Button(
                row, width=3, command=lambda a=attr: self._choose_color(a)
            )
            swatch.pack(side="left", padx=4)
            tk.Button(
                row,
                text="+",
                command=lambda a=attr: self._palette_edit(
                    lambda p: p.add_saved_color(getattr(p, a))
                ),
            ).pack(side="left")
            swatches.append(swatch)
        self._primary_swatch, self._secondary_swatch = swatches

        tk.Label(panel, text=self._text("zoom")).pack(anchor="w", pady=(10, 0))
        self._zoom_var = tk.DoubleVar(value=app.zoom)
        tk.Scale(
            panel,
            from_=MIN_ZOOM,
            to=MAX_ZOOM,
            resolution=0.1,
            orient="horizontal",
            variable=self._zoom_var,
            command=self._on_zoom_slider,
        ).pack(fill="x")

        self._palette_frame = tk.Frame(panel)
        self._palette_frame.pack(fill="x", pady=(10, 0))

    def _refresh_editor(self) -> None:
        app = self.session.canvas
        if app is None or self._canvas is None:
            return
        self._refresh_layers(app)
        self._refresh_colors(app)
        if self._zoom_var is not None:
            self._zoom_var.set(app.zoom)
        self._redraw()

    def _refresh_layers(self, app: PaintApp) -> None:
        frame = self._layers_frame
        if frame is None:
            return
        for child in frame.winfo_children():
            child.destroy()
        state = app.current_state
        for index, layer in reversed(list(enumerate(state.layers))):
            row = tk.Frame(frame)
            row.pack(fill="x")
            tk.Button(
                row,
                text="👁" if layer.visible else "⊘",
                command=lambda i=index: self._layer_request(LayerAction.TOGGLE_VISIBILITY, i),
            ).pack(side="left")
            active = index == state.active_layer_index
            tk.Button(
                row,
                text=layer.name,
                relief="sunken" if active else "flat",
                anchor="w",
                command=lambda i=index: self._layer_request(LayerAction.SET_ACTIVE, i),
            ).pack(side="left", fill="x", expand=True)
            tk.Button(
                row,
                text="✏",
                command=lambda i=index: self._layer_request(LayerAction.EDIT, i),
            ).pack(side="right")

    def _refresh_colors(self, app: PaintApp) -> None:
        if self._primary_swatch is not None:
            self._primary_swatch.configure(bg=_hex(app.primary_color))
        if self._secondary_swatch is not None:
            self._secondary_swatch.configure(bg=_hex(app.secondary_color))
        frame = self._palette_frame
        if frame is None:
            return
        for child in frame.winfo_children():
            child.destroy()
        if not app.saved_colors:
            return
        tk.Label(frame, text=self._text("saved_colors")).grid(
            row=0, column=0, columnspan=8, sticky="w"
        )
        per_row = max(1, frame.winfo_width() // SWATCH_SIZE) if frame.winfo_width() > 1 else 6
        for index, color in enumerate(app.saved_colors):
            swatch = tk.Frame(
                frame, bg=_hex(color), width=SWATCH_SIZE, height=SWATCH_SIZE,
                relief="raised", borderwidth=1,
            )
            swatch.grid(row=1 + index // per_row, column=index % per_row, padx=1, pady=1)
            swatch.bind(
                "<Button-1>",
                lambda _e, i=index: self._palette_edit(
                    lambda p: p.set_primary_color_from_saved(i)
                ),
            )
            swatch.bind(
                "<Button-3>",
                lambda _e, i=index: self._palette_edit(
                    lambda p: p.set_secondary_color_from_saved(i)
                ),
            )
            swatch.bind(
                "<Button-2>",
                lambda _e, i=index: self._palette_edit(lambda p: p.remove_saved_color(i)),
            )
        hints = "\n".join(
            self._text(key)
            for key in ("left_click_primary", "right_click_secondary", "middle_click_delete")
        )
        rows = 1 + (len(app.saved_colors) + per_row - 1) // per_row
        tk.Label(frame, text=hints, justify="left").grid(
            row=rows, column=0, columnspan=8, sticky="w"
        )

    # ------------------------------------------------------------ actions

    def _request(self, action: PendingAction) -> None:
        self.session.request(action)
        self._sync()

    def _shortcut(self, action: PendingAction) -> None:
        if self.session.canvas is not None:
            self._request(action)

    def _layer_request(self, action: LayerAction, index: int) -> None:
        self.session.request(action, index)
        self._sync()

    def _layer_edit(self, edit: Callable[[PaintApp], None]) -> None:
        app = self.session.canvas
        if app is not None:
            edit(app)
        self._sync()

    def _palette_edit(self, edit: Callable[[PaintApp], None]) -> None:
        self._layer_edit(edit)

    def _add_layer(self, app: PaintApp) -> None:
        app.add_layer(f"{self._text('layer')} {len(app.current_state.layers) + 1}")

    def _remove_layer(self, app: PaintApp) -> None:
        if len(app.current_state.layers) > 1:
            app.remove_layer(app.current_state.active_layer_index)

    def _choose_color(self, attr: str) -> None:
        app = self.session.canvas
        if app is None:
            return
        current: Color = getattr(app, attr)
        rgb, _ = colorchooser.askcolor(initialcolor=_hex(current), parent=self._root)
        if rgb is not None:
            r, g, b = (int(c) for c in rgb)
            setattr(app, attr, Color(r, g, b, current.a))
        self._sync()

    def _on_return_to_menu(self) -> None:
        self.session.request_return_to_menu()
        self._sync()

    def _on_save_button(self) -> None:
        if self.session.canvas is None:
            return
        path = filedialog.asksaveasfilename(filetypes=file_types(), initialdir="/")
        if path:
            self.session.save_to(path)
        self._sync()

    def _on_save_shortcut(self, _event: tk.Event) -> None:
        app = self.session.canvas
        if app is None:
            return
        if app.last_save_path is not None:
            self.session.quick_save()
        else:
            path = filedialog.asksaveasfilename(filetypes=file_types(), initialdir="/")
            if path:
                self.session.save_to(path)
        self._sync()

    def _on_escape(self, _event: tk.Event) -> None:
        app = self.session.canvas
        if app is not None and app.current_tool is Tool.LINE:
            self._cancel_line(app)
            self._redraw()

    @staticmethod
    def _cancel_line(app: PaintApp) -> None:
        app.is_drawing_line = False
        app.line_start = None
        app.line_end = None
        app.is_first_click_line = True

    def _on_zoom_slider(self, value: str) -> None:
        app = self.session.canvas
        if app is not None:
            app.zoom = float(value)
            self._redraw()

    # ------------------------------------------------------------ canvas input

    def _to_canvas(self, app: PaintApp, event: tk.Event) -> Optional[Point]:
        if self._rect is None:
            return None
        state = app.current_state
        return screen_to_canvas((event.x, event.y), self._rect, state.width, state.height)

    def _on_press(self, event: tk.Event, secondary: bool) -> None:
        app = self.session.canvas
        if app is None:
            return
        if app.current_tool is Tool.LINE:
            self._line_click(app, event, secondary)
        else:
            app.is_drawing = True
            app.save_state()
            self._apply_tool(app, event, secondary)
        self._after_paint(app)

    def _on_drag(self, event: tk.Event, secondary: bool) -> None:
        app = self.session.canvas
        if app is None or app.current_tool is Tool.LINE:
            return
        self._apply_tool(app, event, secondary)
        self._after_paint(app)

    def _on_release(self, _event: tk.Event) -> None:
        app = self.session.canvas
        if app is None or app.current_tool is Tool.LINE:
            return
        app.save_state()
        app.last_position = None

    def _after_paint(self, app: PaintApp) -> None:
        self._refresh_colors(app)
        self._redraw()

    def _apply_tool(self, app: PaintApp, event: tk.Event, secondary: bool) -> None:
        pos = self._to_canvas(app, event)
        if pos is None:
            return
        cx, cy = pos
        ux, uy = max(0, int(cx)), max(0, int(cy))
        state = app.current_state
        if ux >= state.width or uy >= state.height:
            return
        if app.current_tool is Tool.PAINT_BUCKET:
            app.paint_bucket(ux, uy, secondary)
        elif app.current_tool is Tool.COLOR_PICKER:
            app.pick_color(ux, uy, secondary)
        else:
            point = (int(cx), int(cy))
            if app.last_position is not None:
                color = app.secondary_color if secondary else app.primary_color
                app.draw_line(app.last_position, point, color)
            else:
                app.draw_point(point[0], point[1], secondary)
            app.last_position = point
        app.is_drawing = True

    def _line_click(self, app: PaintApp, event: tk.Event, secondary: bool) -> None:
        pos = self._to_canvas(app, event)
        if pos is None:
            return
        point = (int(pos[0]), int(pos[1]))
        if app.is_first_click_line:
            app.line_start = point
            app.line_end = point
            app.is_drawing_line = True
            app.is_first_click_line = False
        elif app.line_start is not None and app.line_end is not None:
            color = app.secondary_color if secondary else app.primary_color
            app.draw_line(app.line_start, point, color)
            self._cancel_line(app)
            app.save_state()

    def _on_motion(self, event: tk.Event) -> None:
        app = self.session.canvas
        if app is None or app.current_tool is not Tool.LINE:
            return
        if not app.is_drawing_line or app.is_first_click_line:
            return
        pos = self._to_canvas(app, event)
        if pos is None:
            return
        app.line_end = (int(pos[0]), int(pos[1]))
        self._preview_secondary = bool(event.state & _BUTTON3_MASK)
        self._redraw()

    def _on_middle_press(self, event: tk.Event) -> None:
        app = self.session.canvas
        if app is None:
            return
        if app.current_tool is Tool.LINE:
            self._cancel_line(app)
        self._pan_anchor = (event.x, event.y)
        self._redraw()

    def _on_middle_drag(self, event: tk.Event) -> None:
        app = self.session.canvas
        if app is None or self._pan_anchor is None:
            return
        ax, ay = self._pan_anchor
        app.pan = (app.pan[0] + event.x - ax, app.pan[1] + event.y - ay)
        self._pan_anchor = (event.x, event.y)
        self._redraw()

    def _on_wheel(self, event: tk.Event, delta: float) -> None:
        app = self.session.canvas
        canvas = self._canvas
        if app is None or canvas is None:
            return
        center_x = canvas.winfo_width() / 2
        center_y = canvas.winfo_height() / 2
        offset = (event.x - center_x - app.pan[0], event.y - center_y - app.pan[1])
        app.zoom, app.pan = zoom_toward(app.zoom, app.pan, delta, offset)
        if self._zoom_var is not None:
            self._zoom_var.set(app.zoom)
        self._redraw()

    # ------------------------------------------------------------ rendering

    def _redraw(self) -> None:
        app = self.session.canvas
        canvas = self._canvas
        if app is None or canvas is None:
            return
        canvas.delete("all")
        view_w, view_h = canvas.winfo_width(), canvas.winfo_height()
        state = app.current_state
        if view_w <= 1 or view_h <= 1 or state.width <= 0 or state.height <= 0:
            self._rect = None
            return
        if app.texture_dirty or self._source_image is None:
            self._source_image = Image.frombytes(
                "RGBA", (state.width, state.height), app.render_rgba()
            )
            app.texture_dirty = False

        scale = fit_scale(state.width, state.height, view_w, view_h)
        scaled_w = state.width * scale * app.zoom
        scaled_h = state.height * scale * app.zoom
        left = view_w / 2 + app.pan[0] - scaled_w / 2
        top = view_h / 2 + app.pan[1] - scaled_h / 2
        rect = (left, top, left + scaled_w, top + scaled_h)
        self._rect = rect

        vis_left, vis_top = max(rect[0], 0.0), max(rect[1], 0.0)
        vis_right, vis_bottom = min(rect[2], float(view_w)), min(rect[3], float(view_h))
        if vis_right > vis_left and vis_bottom > vis_top:
            src_left, src_top = screen_to_canvas((vis_left, vis_top), rect, state.width, state.height)
            src_right, src_bottom = screen_to_canvas(
                (vis_right, vis_bottom), rect, state.width, state.height
            )
            size = (
                max(1, round(vis_right - vis_left)),
                max(1, round(vis_bottom - vis_top)),
            )
            shown = self._source_image.resize(
                size,
                Image.Resampling.NEAREST,
                box=(src_left, src_top, src_right, src_bottom),
            )
            self._photo = ImageTk.PhotoImage(shown, master=self._root)
            canvas.create_image(vis_left, vis_top, image=self._photo, anchor="nw")

        if (
            app.current_tool is Tool.LINE
            and app.is_drawing_line
            and not app.is_first_click_line
            and app.line_start is not None
            and app.line_end is not None
        ):
            start = _canvas_to_screen(app.line_start, rect, state.width, state.height)
            end = _canvas_to_screen(app.line_end, rect, state.width, state.height)
            color = app.secondary_color if self._preview_secondary else app.primary_color
            canvas.create_line(
                *start,
                *end,
                fill=_hex(color),
                width=max(1, round(app.brush_size * app.zoom)),
            )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the paint editor window."""
    parser = argparse.ArgumentParser(prog="rustique", description="A layered raster paint editor.")
    parser.parse_args(argv)
    PaintWindow().run()
    return 0