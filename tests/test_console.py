import pytest

from x16periph.console import EchoMode, echo_char, paste_bytes


def test_cooked_return_becomes_newline():
    assert echo_char(0x0D, EchoMode.COOKED) == b"\n"


def test_cooked_linefeed_is_skipped():
    assert echo_char(0x0A, EchoMode.COOKED) == b""


def test_cooked_printable_ascii_passes():
    assert echo_char(ord("A"), EchoMode.COOKED) == b"A"


@pytest.mark.parametrize("c", [0x01, 0x1F, 0x80, 0xA4, 0xFF])
def test_cooked_escapes_non_printable(c):
    assert echo_char(c, EchoMode.COOKED) == b"\\X%02X" % c


def test_iso_converts_to_utf8():
    assert echo_char(0xA4, EchoMode.ISO) == "€".encode("utf-8")


@pytest.mark.parametrize("c", [0x05, 0x80, 0x9F])
def test_iso_escapes_control_ranges(c):
    assert echo_char(c, EchoMode.ISO) == b"\\X%02X" % c


def test_iso_return_becomes_newline():
    assert echo_char(0x0D, "iso") == b"\n"


@pytest.mark.parametrize("c", [0x00, 0x0A, 0x0D, 0x90, 0xFF])
def test_raw_passes_byte_through(c):
    assert echo_char(c, EchoMode.RAW) == bytes((c,))


def test_none_outputs_nothing():
    assert echo_char(ord("A"), EchoMode.NONE) == b""


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        echo_char(0x41, "fancy")


def test_paste_plain_ascii():
    assert list(paste_bytes("RUN\r")) == list(b"RUN\r")


def test_paste_hex_escape():
    assert list(paste_bytes("\\X41B")) == [0x41, ord("B")]


def test_paste_non_hex_escape_digits_count_as_zero():
    assert list(paste_bytes("\\XZ1")) == [0x01]


def test_paste_short_escape_is_literal():
    assert list(paste_bytes("\\X4")) == list(b"\\X4")


def test_paste_iso_character():
    assert list(paste_bytes("€")) == [0xA4]


def test_paste_stops_at_nul():
    assert list(paste_bytes("AB\0CD")) == list(b"AB")


def test_paste_stops_at_escaped_nul():
    assert list(paste_bytes("A\\X00B")) == [ord("A")]


def test_paste_bytes_input_stops_at_invalid_utf8():
    assert list(paste_bytes(b"AB\xffCD")) == list(b"AB")


def test_paste_round_trips_echo_in_raw_mode():
    text = "10 PRINT 1\r"
    echoed = b"".join(echo_char(c, EchoMode.RAW) for c in paste_bytes(text))
    assert echoed == text.encode("ascii")