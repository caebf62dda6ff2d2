# rustique

A small raster paint program with layers, a brush, an eraser, a paint
bucket, a colour picker and a line tool. Drawings can be exported to
common image formats or kept as `.rustiq` project files, which preserve
every layer, the active layer, both current colours, the saved colour
palette and the brush and eraser sizes.

The interface is available in French (the default) and English.

## Installing

```
pip install .
```

The window is built on Tk, so the Python installation needs `tkinter`.

## Starting the editor

```
rustique
```

The command takes no options besides `--help`. The start screen lets you
pick the language, choose the width and height of a new canvas (100 to
4000 pixels, 800 × 600 by default), or open an existing file.

## Using the editor

- Left click draws with the primary colour (black at first), right click
  with the secondary colour (white at first).
- Brush and eraser are round stamps; their sizes can be set from 1 to 500
  (3 by default).
- The paint bucket fills the 4-connected area of equal colour on the
  active layer; the colour picker takes the visible colour under the
  cursor.
- The middle mouse button pans the canvas; the mouse wheel zooms towards
  the cursor (between 0.1× and 10×), and the zoom slider sets it directly.
- The line tool takes two clicks: the first sets the start, the second
  draws the line. A middle click or Escape cancels it.
- Hidden layers cannot be drawn on.
- `Ctrl+Z` undoes a stroke, `Ctrl+Y` or `Ctrl+Shift+Z` redoes it; up to
  20 steps are kept. Layer operations are not part of the undo history.
- `Ctrl+S` saves to the last path used, or asks for one.
- Up to 16 colours can be kept in the saved palette; adding a 17th drops
  the oldest. In the palette, left click sets the primary colour, right
  click the secondary colour, and middle click removes the colour.

When you return to the start screen with unsaved changes, the editor asks
whether to save them first.

## File formats

Opening and saving are chosen by file extension (in any case):

| Extension          | Format              |
|--------------------|---------------------|
| `.png`             | PNG                 |
| `.jpg`, `.jpeg`    | JPEG                |
| `.bmp`             | BMP                 |
| `.tiff`, `.tif`    | TIFF                |
| `.gif`             | GIF                 |
| `.webp`            | WebP                |
| `.rustiq`          | project file (JSON) |

Images are flattened when exported: each pixel takes the colour of the
topmost visible layer that has one, and empty pixels become transparent.
JPEG has no alpha channel, so the alpha is dropped when saving JPEG.
Opening an image gives a single "Background" layer in which fully
transparent pixels are left empty.

## Using it from Python

The drawing model works without the window:

```python
from rustique.canvas import Color
from rustique.localization import Language
from rustique.painter import PaintApp

app = PaintApp.open_file("sketch.rustiq", Language.ENGLISH)
app.add_layer("Ink")
app.draw_line((0, 0), (50, 50), Color(255, 0, 0, 255))
app.save_state()
app.save_file("sketch.png")
```

The modules are:

- `rustique.canvas` — `Color`, `Layer`, `CanvasChange` and `CanvasState`.
- `rustique.formats` — `FileFormat`, `detect_format` and the project file
  types `LayerData` and `RustiqueFile` (`to_json` / `from_json`).
- `rustique.painter` — `PaintApp`, the open drawing with its tools,
  layers, palette, undo history and file I/O, and `Tool`.
- `rustique.localization` — `Language` and `get_text(key, language)`,
  which returns the key itself for unknown keys.
- `rustique.menu` — `MainMenu` and the choices it returns: `NewCanvas`,
  `OpenFile` and `LanguageChanged`.
- `rustique.session` — `Session`, which switches between the menu and a
  drawing and handles deferred undo/redo, layer actions, the rename and
  "save changes?" dialogs and error reporting.
- `rustique.gui` — `PaintWindow` and `main`, the Tk window.

Failures to open or save raise `rustique.painter.PaintError`. Its message
is in the chosen language, except when a `.rustiq` file cannot be created
or written, which is reported in French.

## What it does not do

There is no batch or command-line conversion: the `rustique` command only
opens the window. There is no selection, text, shape or filter tool, and
layer blending is limited to the topmost visible colour winning.

## Running the tests

```
pip install .[test]
pytest
```