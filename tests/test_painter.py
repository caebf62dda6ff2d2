import pytest

from rustique.canvas import BLACK, WHITE, Color
from rustique.localization import Language, get_text
from rustique.painter import (
    CHECKERBOARD_SIZE,
    MAX_SAVED_COLORS,
    MAX_UNDO_STEPS,
    PaintApp,
    PaintError,
    Tool,
)

RED = Color(255, 0, 0, 255)
BLUE = Color(0, 0, 255, 255)


def painted(app):
    state = app.current_state
    return {
        (x, y)
        for y in range(state.height)
        for x in range(state.width)
        if state.get_from_active_layer(x, y) is not None
    }


def test_new_app_defaults():
    app = PaintApp(4, 3, Language.ENGLISH)
    assert app.current_state.width == 4
    assert app.current_state.height == 3
    assert [layer.name for layer in app.current_state.layers] == ["Background"]
    assert app.primary_color == BLACK
    assert app.secondary_color == WHITE
    assert app.current_tool is Tool.BRUSH
    assert app.has_unsaved_changes is False


def test_draw_point_is_round_and_symmetric():
    app = PaintApp(11, 11, Language.ENGLISH)
    app.brush_size = 2
    app.draw_point(5, 5, False)
    points = painted(app)
    assert (5, 5) in points
    assert (7, 5) in points
    assert (7, 6) not in points
    assert all((10 - x, y) in points and (y, x) in points for x, y in points)
    assert app.current_state.get(5, 5) == BLACK
    assert app.has_unsaved_changes


def test_draw_point_secondary_and_clipped():
    app = PaintApp(3, 3, Language.ENGLISH)
    app.secondary_color = RED
    app.draw_point(0, 0, True)
    assert app.current_state.get(0, 0) == RED
    assert all(0 <= x < 3 and 0 <= y < 3 for x, y in painted(app))


def test_eraser_clears_pixels():
    app = PaintApp(5, 5, Language.ENGLISH)
    app.draw_point(2, 2, False)
    app.current_tool = Tool.ERASER
    app.draw_point(2, 2, False)
    assert painted(app) == set()


def test_hidden_layer_is_not_drawn_on():
    app = PaintApp(5, 5, Language.ENGLISH)
    app.toggle_layer_visibility(0)
    app.draw_point(2, 2, False)
    app.paint_bucket(0, 0, False)
    assert painted(app) == set()


def test_draw_line_covers_endpoints_and_diagonal():
    app = PaintApp(6, 6, Language.ENGLISH)
    app.brush_size = 0
    app.draw_line((0, 0), (4, 4), RED)
    assert painted(app) == {(i, i) for i in range(5)}
    assert app.current_state.get(4, 4) == RED


def test_undo_and_redo_restore_pixels():
    app = PaintApp(6, 6, Language.ENGLISH)
    app.draw_point(3, 3, False)
    before = painted(app)
    app.save_state()
    assert len(app.undo_stack) == 1
    app.undo()
    assert painted(app) == set()
    assert len(app.redo_stack) == 1
    app.redo()
    assert painted(app) == before
    app.undo()
    assert painted(app) == set()


def test_new_stroke_clears_redo():
    app = PaintApp(6, 6, Language.ENGLISH)
    app.draw_point(1, 1, False)
    app.save_state()
    app.undo()
    app.draw_point(4, 4, False)
    app.save_state()
    assert app.redo_stack == []


def test_undo_history_is_capped():
    app = PaintApp(40, 1, Language.ENGLISH)
    app.brush_size = 0
    steps = MAX_UNDO_STEPS + 5
    for x in range(steps):
        app.draw_point(x, 0, False)
        app.save_state()
    assert len(app.undo_stack) == MAX_UNDO_STEPS
    for _ in range(steps):
        app.undo()
    assert painted(app) == {(x, 0) for x in range(steps - MAX_UNDO_STEPS)}


def test_paint_bucket_stops_at_walls():
    app = PaintApp(5, 5, Language.ENGLISH)
    for y in range(5):
        app.record_change(2, y, BLUE)
    app.paint_bucket(0, 0, False)
    state = app.current_state
    assert all(state.get(x, y) == BLACK for x in range(2) for y in range(5))
    assert all(state.get(x, y) is None for x in range(3, 5) for y in range(5))
    assert all(state.get(2, y) == BLUE for y in range(5))


def test_paint_bucket_same_color_does_nothing():
    app = PaintApp(3, 3, Language.ENGLISH)
    app.paint_bucket(0, 0, False)
    app.save_state()
    app.paint_bucket(1, 1, False)
    assert app.current_changes == []


def test_pick_color():
    app = PaintApp(3, 3, Language.ENGLISH)
    app.record_change(1, 1, RED)
    app.pick_color(1, 1, True)
    assert app.secondary_color == RED
    app.pick_color(0, 0, False)
    assert app.primary_color == BLACK


def test_layers_add_move_remove():
    app = PaintApp(2, 2, Language.ENGLISH)
    app.add_layer("Top")
    assert app.current_state.active_layer_index == 1
    app.move_layer_up(1)
    assert [l.name for l in app.current_state.layers] == ["Top", "Background"]
    assert app.current_state.active_layer_index == 0
    app.move_layer_down(0)
    assert app.current_state.active_layer_index == 1
    app.remove_layer(1)
    assert [l.name for l in app.current_state.layers] == ["Background"]
    assert app.current_state.active_layer_index == 0
    app.remove_layer(0)
    assert len(app.current_state.layers) == 1


def test_upper_layer_covers_lower():
    app = PaintApp(2, 2, Language.ENGLISH)
    app.record_change(0, 0, RED)
    app.add_layer("Top")
    app.record_change(0, 0, BLUE)
    assert app.current_state.get(0, 0) == BLUE
    app.toggle_layer_visibility(1)
    assert app.current_state.get(0, 0) == RED


def test_rename_and_set_active():
    app = PaintApp(2, 2, Language.ENGLISH)
    app.add_layer("A")
    app.set_active_layer(0)
    app.set_active_layer(7)
    app.rename_layer(1, "Renamed")
    assert app.current_state.active_layer_index == 0
    assert app.current_state.layers[1].name == "Renamed"


def test_saved_colors_palette():
    app = PaintApp(1, 1, Language.ENGLISH)
    colors = [Color(i, 0, 0) for i in range(MAX_SAVED_COLORS + 1)]
    for color in colors:
        app.add_saved_color(color)
    app.add_saved_color(colors[-1])
    assert app.saved_colors == colors[1:]
    app.set_primary_color_from_saved(0)
    app.set_secondary_color_from_saved(1)
    assert app.primary_color == colors[1]
    assert app.secondary_color == colors[2]
    app.remove_saved_color(0)
    assert app.saved_colors == colors[2:]


def test_render_rgba_checkerboard_and_pixels():
    app = PaintApp(CHECKERBOARD_SIZE * 2, 1, Language.ENGLISH)
    app.record_change(1, 0, RED)
    data = app.render_rgba()
    assert len(data) == CHECKERBOARD_SIZE * 2 * 4
    assert tuple(data[0:4]) == (200, 200, 200, 255)
    assert tuple(data[4:8]) == RED.as_tuple()
    start = CHECKERBOARD_SIZE * 4
    assert tuple(data[start:start + 4]) == (160, 160, 160, 255)


def test_rustiq_round_trip(tmp_path):
    app = PaintApp(3, 2, Language.ENGLISH)
    app.record_change(1, 1, RED)
    app.add_layer("Top")
    app.record_change(0, 0, Color(1, 2, 3, 128))
    app.add_saved_color(BLUE)
    app.brush_size = 7
    path = str(tmp_path / "drawing.rustiq")
    app.save_file(path)
    assert app.has_unsaved_changes is False
    assert app.last_save_path == path

    loaded = PaintApp.open_file(path, Language.ENGLISH)
    assert loaded.current_state == app.current_state
    assert loaded.saved_colors == [BLUE]
    assert loaded.brush_size == 7
    assert loaded.last_save_path == path


def test_png_round_trip(tmp_path):
    app = PaintApp(3, 2, Language.ENGLISH)
    app.record_change(2, 1, RED)
    path = str(tmp_path / "picture.png")
    app.save_file(path)
    loaded = PaintApp.open_file(path, Language.ENGLISH)
    assert loaded.current_state.get(2, 1) == RED
    assert loaded.current_state.get(0, 0) is None
    assert loaded.current_state.width == 3


def test_save_as_png_adds_extension(tmp_path):
    app = PaintApp(2, 2, Language.ENGLISH)
    base = str(tmp_path / "noext")
    app.save_as_png(base)
    assert app.last_save_path == base + ".png"
    assert (tmp_path / "noext.png").exists()


def test_unknown_format_errors(tmp_path):
    app = PaintApp(2, 2, Language.ENGLISH)
    path = str(tmp_path / "x.xyz")
    with pytest.raises(PaintError) as info:
        app.save_file(path)
    assert str(info.value) == f"{get_text('format_not_supported', Language.ENGLISH)}: {path}"
    with pytest.raises(PaintError):
        PaintApp.open_file(path, Language.ENGLISH)


def test_quick_save_without_path():
    app = PaintApp(2, 2, Language.FRENCH)
    with pytest.raises(PaintError) as info:
        app.quick_save()
    assert str(info.value) == get_text("no_previous_path", Language.FRENCH)


def test_quick_save_reuses_path(tmp_path):
    app = PaintApp(2, 2, Language.ENGLISH)
    path = str(tmp_path / "q.rustiq")
    app.save_file(path)
    app.record_change(0, 0, RED)
    app.quick_save()
    assert PaintApp.open_file(path, Language.ENGLISH).current_state.get(0, 0) == RED


def test_open_errors(tmp_path):
    bad = tmp_path / "bad.rustiq"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(PaintError) as info:
        PaintApp.open_file(str(bad), Language.ENGLISH)
    assert str(info.value).startswith(get_text("error_reading_rustiq", Language.ENGLISH))
    with pytest.raises(PaintError) as info:
        PaintApp.open_file(str(tmp_path / "missing.rustiq"), Language.ENGLISH)
    assert str(info.value).startswith(get_text("error_reading_file", Language.ENGLISH))
    assert PaintApp.from_png_file(str(tmp_path / "missing.png"), Language.ENGLISH) is None


def test_save_dialog_and_language():
    app = PaintApp(1, 1, Language.FRENCH)
    app.show_save_dialog(True)
    assert app.save_dialog is True
    app.hide_save_dialog()
    assert app.save_dialog is None
    app.set_language(Language.ENGLISH)
    assert app.language is Language.ENGLISH