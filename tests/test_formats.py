import json

import pytest

from rustique.canvas import BLACK, WHITE, Color
from rustique.formats import (
    FileFormat,
    LayerData,
    RustiqueFile,
    detect_format,
)


def _small_file() -> RustiqueFile:
    return RustiqueFile(
        width=1,
        height=1,
        layers=[LayerData("Background", [None], True)],
        active_layer_index=0,
        primary_color=BLACK,
        secondary_color=WHITE,
        saved_colors=[],
        brush_size=3,
        eraser_size=3,
    )


def _rich_file() -> RustiqueFile:
    return RustiqueFile(
        width=2,
        height=2,
        layers=[
            LayerData("Background", [Color(1, 2, 3, 4), None, None, WHITE], True),
            LayerData("Calque 2", [None, BLACK, None, None], False),
        ],
        active_layer_index=1,
        primary_color=Color(10, 20, 30, 40),
        secondary_color=Color(50, 60, 70, 80),
        saved_colors=[Color(9, 8, 7, 6), BLACK],
        brush_size=12,
        eraser_size=-5,
    )


@pytest.mark.parametrize(
    "ext, expected",
    [
        ("png", FileFormat.PNG),
        ("jpg", FileFormat.JPEG),
        ("jpeg", FileFormat.JPEG),
        ("bmp", FileFormat.BMP),
        ("tiff", FileFormat.TIFF),
        ("tif", FileFormat.TIFF),
        ("gif", FileFormat.GIF),
        ("webp", FileFormat.WEBP),
        ("rustiq", FileFormat.RUSTIQ),
        ("PNG", FileFormat.PNG),
        ("JpEg", FileFormat.JPEG),
        ("txt", FileFormat.UNKNOWN),
        ("", FileFormat.UNKNOWN),
    ],
)
def test_from_extension(ext, expected):
    assert FileFormat.from_extension(ext) is expected


@pytest.mark.parametrize(
    "fmt, ext",
    [
        (FileFormat.PNG, "png"),
        (FileFormat.JPEG, "jpg"),
        (FileFormat.BMP, "bmp"),
        (FileFormat.TIFF, "tiff"),
        (FileFormat.GIF, "gif"),
        (FileFormat.WEBP, "webp"),
        (FileFormat.RUSTIQ, "rustiq"),
        (FileFormat.UNKNOWN, ""),
    ],
)
def test_extension(fmt, ext):
    assert fmt.extension() == ext


def test_extension_round_trips_through_from_extension():
    for fmt in FileFormat:
        if fmt is not FileFormat.UNKNOWN:
            assert FileFormat.from_extension(fmt.extension()) is fmt


def test_image_format_only_for_raster_formats():
    assert FileFormat.RUSTIQ.image_format() is None
    assert FileFormat.UNKNOWN.image_format() is None
    raster = [f for f in FileFormat if f not in (FileFormat.RUSTIQ, FileFormat.UNKNOWN)]
    names = [f.image_format() for f in raster]
    assert all(isinstance(n, str) and n for n in names)
    assert len(set(names)) == len(raster)


def test_image_format_png_name():
    assert FileFormat.PNG.image_format() == "PNG"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("picture.png", FileFormat.PNG),
        ("dir/sub/photo.JPG", FileFormat.JPEG),
        ("archive.tar.rustiq", FileFormat.RUSTIQ),
        ("scan.tif", FileFormat.TIFF),
        ("noextension", FileFormat.UNKNOWN),
        ("notes.txt", FileFormat.UNKNOWN),
        (".png", FileFormat.UNKNOWN),
    ],
)
def test_detect_format(path, expected):
    assert detect_format(path) is expected


def test_to_json_is_compact_in_field_order():
    text = _small_file().to_json()
    assert text == (
        '{"width":1,"height":1,"layers":[{"name":"Background","data":[null],'
        '"visible":true}],"active_layer_index":0,"primary_color":[0,0,0,255],'
        '"secondary_color":[255,255,255,255],"saved_colors":[],'
        '"brush_size":3,"eraser_size":3}'
    )


def test_json_round_trip():
    original = _rich_file()
    assert RustiqueFile.from_json(original.to_json()) == original


def test_dict_round_trip():
    original = _rich_file()
    assert RustiqueFile.from_dict(original.to_dict()) == original


def test_layer_data_round_trip():
    layer = LayerData("Layer 3", [None, Color(5, 6, 7, 8)], False)
    assert LayerData.from_dict(layer.to_dict()) == layer


def test_unknown_fields_are_ignored():
    data = _small_file().to_dict()
    data["extra"] = {"anything": [1, 2]}
    assert RustiqueFile.from_dict(data) == _small_file()


def test_non_ascii_names_survive():
    file = _small_file()
    file.layers[0].name = "Calque é"
    assert RustiqueFile.from_json(file.to_json()).layers[0].name == "Calque é"


@pytest.mark.parametrize(
    "field",
    [
        "width",
        "height",
        "layers",
        "active_layer_index",
        "primary_color",
        "secondary_color",
        "saved_colors",
        "brush_size",
        "eraser_size",
    ],
)
def test_missing_field_raises(field):
    data = _small_file().to_dict()
    del data[field]
    with pytest.raises(ValueError):
        RustiqueFile.from_dict(data)


@pytest.mark.parametrize(
    "field, value",
    [
        ("width", -1),
        ("width", True),
        ("height", "1"),
        ("active_layer_index", 1.5),
        ("primary_color", [0, 0, 0]),
        ("primary_color", [0, 0, 0, 256]),
        ("secondary_color", [0, 0, -1, 0]),
        ("saved_colors", [[1, 2, 3]]),
        ("brush_size", 2**31),
        ("eraser_size", None),
        ("layers", {}),
    ],
)
def test_invalid_values_raise(field, value):
    data = _small_file().to_dict()
    data[field] = value
    with pytest.raises(ValueError):
        RustiqueFile.from_dict(data)


def test_invalid_layer_raises():
    data = _small_file().to_dict()
    data["layers"][0]["visible"] = 1
    with pytest.raises(ValueError):
        RustiqueFile.from_dict(data)
    data = _small_file().to_dict()
    data["layers"][0]["data"] = [[1, 2, 3, 4, 5]]
    with pytest.raises(ValueError):
        RustiqueFile.from_dict(data)


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        RustiqueFile.from_json("{not json")


def test_non_object_root_raises():
    with pytest.raises(ValueError):
        RustiqueFile.from_json(json.dumps([1, 2, 3]))
    with pytest.raises(ValueError):
        LayerData.from_dict("layer")