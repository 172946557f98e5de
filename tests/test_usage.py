import pytest

from x16periph.usage import KEYMAPS, keymap_index, keymap_usage_text, usage_text


def test_usage_lists_options():
    text = usage_text(8, 1.0)
    assert "-rom <rom.bin>\n" in text
    assert "-sdcard <sdcard.img>\n" in text
    assert "-midi-in\n" in text
    assert text.index("-rom") < text.index("-ram") < text.index("-version")


def test_usage_shows_hostfs_unit():
    text = usage_text(11, 1.0)
    assert "Range 8-31. Default: 11.\n" in text


def test_usage_shows_opacity_with_one_decimal():
    text = usage_text(8, 0.25)
    assert "(default: 0.2)" in text or "(default: 0.3)" in text
    assert "(default: 1.0)" in usage_text(8, 1.0)


def test_usage_ends_with_blank_line():
    assert usage_text(8, 1.0).endswith("ROM.\n\n")


def test_keymap_index_first_and_named():
    assert keymap_index("en-us") == 0
    assert keymap_index("de") == 4
    assert keymap_index("lt") == len(KEYMAPS) - 1


@pytest.mark.parametrize("name", list(KEYMAPS))
def test_keymap_index_round_trip(name):
    assert KEYMAPS[keymap_index(name)] == name


def test_keymap_index_unknown_raises():
    with pytest.raises(ValueError) as info:
        keymap_index("xx-none")
    assert "The following keymaps are supported:" in str(info.value)


def test_keymap_usage_text_lists_all_in_order():
    lines = keymap_usage_text().splitlines()
    assert lines[0] == "The following keymaps are supported:"
    assert [line.strip() for line in lines[1:]] == list(KEYMAPS)
    assert all(line.startswith("\t") for line in lines[1:])