import pytest

from x16periph.keyboard import Scancode, key_event_bytes, keynum_from_scancode


def test_letter_a_keynum():
    assert keynum_from_scancode(Scancode.A) == 31


def test_escape_keynum():
    assert keynum_from_scancode(Scancode.ESCAPE) == 110


def test_unknown_scancode_is_zero():
    assert keynum_from_scancode(9999) == 0
    assert keynum_from_scancode(Scancode.PRINTSCREEN) == 0


def test_press_sends_keynum():
    assert key_event_bytes(True, Scancode.A) == bytes([keynum_from_scancode(Scancode.A)])


def test_release_sets_high_bit():
    assert key_event_bytes(False, Scancode.A) == bytes(
        [keynum_from_scancode(Scancode.A) | 0x80]
    )


@pytest.mark.parametrize("scancode", [Scancode.CLEAR, Scancode.NONUSHASH, 9999])
def test_unmapped_keys_send_nothing(scancode):
    assert key_event_bytes(True, scancode) == b""
    assert key_event_bytes(False, scancode) == b""


def test_mapped_keynums_are_unique_and_in_range():
    keynums = [keynum_from_scancode(s) for s in Scancode]
    mapped = [k for k in keynums if k]
    assert len(mapped) == len(set(mapped))
    assert all(1 <= k < 0x80 for k in mapped)


@pytest.mark.parametrize("scancode", list(Scancode))
def test_release_is_press_with_high_bit(scancode):
    down = key_event_bytes(True, scancode)
    up = key_event_bytes(False, scancode)
    assert len(down) == len(up)
    assert bytes(b | 0x80 for b in down) == up