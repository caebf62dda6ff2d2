import pytest

from rustique.localization import Language, get_text


@pytest.mark.parametrize(
    "key, french, english",
    [
        ("language", "Langue", "Language"),
        ("brush", "Pinceau", "Brush"),
        ("color_picker", "Pipette", "Color Picker"),
        ("save_changes", "Sauvegarder les modifications?", "Save Changes?"),
        ("format_not_supported", "Format de fichier non pris en charge", "File format not supported"),
        ("no_previous_path", "Aucun chemin de sauvegarde précédent", "No previous save path"),
    ],
)
def test_known_keys(key, french, english):
    assert get_text(key, Language.FRENCH) == french
    assert get_text(key, Language.ENGLISH) == english


def test_undo_and_cancel_share_french_word():
    assert get_text("undo", Language.FRENCH) == get_text("cancel", Language.FRENCH)
    assert get_text("undo", Language.ENGLISH) != get_text("cancel", Language.ENGLISH)


@pytest.mark.parametrize("language", list(Language))
def test_unknown_key_falls_back_to_key(language):
    assert get_text("no_such_key", language) == "no_such_key"


def test_both_languages_cover_same_keys():
    keys = [
        "width", "height", "create_new_canvas", "open_file", "layers", "tools",
        "layer", "up", "down", "eraser", "paint_bucket", "line", "zoom",
        "error_saving_image", "error_reading_rustiq", "rename_layer",
    ]
    for key in keys:
        assert get_text(key, Language.FRENCH) != key
        assert get_text(key, Language.ENGLISH) != key


def test_shortcuts_info_mentions_shortcuts():
    for language in Language:
        text = get_text("shortcuts_info", language)
        assert "Ctrl+Z" in text and "Ctrl+Y" in text and "Ctrl+S" in text