"""KERNAL console echo and BASIC paste encoding.

:func:`echo_char` turns a character the KERNAL prints (CHROUT) into the
bytes the emulator writes to the host's standard output.
:func:`paste_bytes` turns pasted host text into the PETSCII/ISO bytes
that are fed into the keyboard buffer.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Union

_ISO_CODEC = "iso8859_15"
_HEX_DIGITS = "0123456789abcdefABCDEF"


class EchoMode(Enum):
    """How KERNAL output is echoed; values match the ``-echo`` option."""

    NONE = "none"
    COOKED = "cooked"
    ISO = "iso"
    RAW = "raw"


def _escape(c: int) -> bytes:
    return b"\\X%02X" % c


def echo_char(c: int, mode: Union[EchoMode, str] = EchoMode.COOKED) -> bytes:
    """Bytes to write to stdout for character ``c`` printed by the KERNAL."""
    mode = EchoMode(mode)
    c &= 0xFF
    if mode is EchoMode.NONE:
        return b""
    if mode is EchoMode.RAW:
        return bytes((c,))
    if c == 0x0D:
        return b"\n"
    if c == 0x0A:
        return b""
    if mode is EchoMode.COOKED:
        if c < 0x20 or c >= 0x80:
            return _escape(c)
        return bytes((c,))
    if c < 0x20 or 0x80 <= c < 0xA0:
        return _escape(c)
    return bytes((c,)).decode(_ISO_CODEC).encode("utf-8")


def _hex_digit(ch: str) -> int:
    """Value of one hex digit, 0 for anything else."""
    return int(ch, 16) if ch in _HEX_DIGITS else 0


def _decode_text(text: Union[str, bytes]) -> str:
    """Decode UTF-8 input up to the first invalid sequence."""
    if isinstance(text, str):
        return text
    try:
        return text.decode("utf-8")
    except UnicodeDecodeError as exc:
        return text[: exc.start].decode("utf-8")


def paste_bytes(text: Union[str, bytes]) -> Iterator[int]:
    """Yield the keyboard bytes for pasted text.

    ``\\Xhh`` inserts the byte ``hh`` directly. Other characters are
    converted to ISO-8859-15; characters it cannot hold become ``?``.
    The stream ends at the end of the text, at a NUL character or at an
    invalid UTF-8 sequence.
    """
    chars = _decode_text(text)
    pos = 0
    while pos < len(chars):
        rest = chars[pos : pos + 4]
        if (
            len(rest) == 4
            and rest[0] == "\\"
            and rest[1] == "X"
            and rest[2] != "\0"
            and rest[3] != "\0"
        ):
            c = (_hex_digit(rest[2]) << 4 | _hex_digit(rest[3])) & 0xFF
            pos += 4
        else:
            c = chars[pos].encode(_ISO_CODEC, errors="replace")[0]
            pos += 1
        if c == 0:
            return
        yield c