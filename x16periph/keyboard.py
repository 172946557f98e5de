"""Host key scancodes to PS/2 key numbers for the keyboard buffer."""

from __future__ import annotations

import logging
from enum import IntEnum

EXTENDED_FLAG = 0x100
_RELEASE_FLAG = 0x80

_log = logging.getLogger(__name__)


class Scancode(IntEnum):
    """Host key scancodes (USB HID usage numbers)."""

    A = 4
    B = 5
    C = 6
    D = 7
    E = 8
    F = 9
    G = 10
    H = 11
    I = 12  # noqa: E741
    J = 13
    K = 14
    L = 15
    M = 16
    N = 17
    O = 18  # noqa: E741
    P = 19
    Q = 20
    R = 21
    S = 22
    T = 23
    U = 24
    V = 25
    W = 26
    X = 27
    Y = 28
    Z = 29
    N1 = 30
    N2 = 31
    N3 = 32
    N4 = 33
    N5 = 34
    N6 = 35
    N7 = 36
    N8 = 37
    N9 = 38
    N0 = 39
    RETURN = 40
    ESCAPE = 41
    BACKSPACE = 42
    TAB = 43
    SPACE = 44
    MINUS = 45
    EQUALS = 46
    LEFTBRACKET = 47
    RIGHTBRACKET = 48
    BACKSLASH = 49
    NONUSHASH = 50
    SEMICOLON = 51
    APOSTROPHE = 52
    GRAVE = 53
    COMMA = 54
    PERIOD = 55
    SLASH = 56
    CAPSLOCK = 57
    F1 = 58
    F2 = 59
    F3 = 60
    F4 = 61
    F5 = 62
    F6 = 63
    F7 = 64
    F8 = 65
    F9 = 66
    F10 = 67
    F11 = 68
    F12 = 69
    PRINTSCREEN = 70
    SCROLLLOCK = 71
    PAUSE = 72
    INSERT = 73
    HOME = 74
    PAGEUP = 75
    DELETE = 76
    END = 77
    PAGEDOWN = 78
    RIGHT = 79
    LEFT = 80
    DOWN = 81
    UP = 82
    NUMLOCKCLEAR = 83
    KP_DIVIDE = 84
    KP_MULTIPLY = 85
    KP_MINUS = 86
    KP_PLUS = 87
    KP_ENTER = 88
    KP_1 = 89
    KP_2 = 90
    KP_3 = 91
    KP_4 = 92
    KP_5 = 93
    KP_6 = 94
    KP_7 = 95
    KP_8 = 96
    KP_9 = 97
    KP_0 = 98
    KP_PERIOD = 99
    NONUSBACKSLASH = 100
    APPLICATION = 101
    INTERNATIONAL1 = 135
    CLEAR = 156
    LCTRL = 224
    LSHIFT = 225
    LALT = 226
    LGUI = 227
    RCTRL = 228
    RSHIFT = 229
    RALT = 230
    RGUI = 231


_KEYNUMS = {
    Scancode.GRAVE: 1,
    Scancode.BACKSPACE: 15,
    Scancode.TAB: 16,
    Scancode.CLEAR: 0,
    Scancode.RETURN: 43,
    Scancode.PAUSE: 126,
    Scancode.ESCAPE: 110,
    Scancode.SPACE: 61,
    Scancode.APOSTROPHE: 41,
    Scancode.COMMA: 53,
    Scancode.MINUS: 12,
    Scancode.PERIOD: 54,
    Scancode.SLASH: 55,
    Scancode.N0: 11,
    Scancode.N1: 2,
    Scancode.N2: 3,
    Scancode.N3: 4,
    Scancode.N4: 5,
    Scancode.N5: 6,
    Scancode.N6: 7,
    Scancode.N7: 8,
    Scancode.N8: 9,
    Scancode.N9: 10,
    Scancode.SEMICOLON: 40,
    Scancode.EQUALS: 13,
    Scancode.LEFTBRACKET: 27,
    Scancode.BACKSLASH: 29,
    Scancode.RIGHTBRACKET: 28,
    Scancode.A: 31,
    Scancode.B: 50,
    Scancode.C: 48,
    Scancode.D: 33,
    Scancode.E: 19,
    Scancode.F: 34,
    Scancode.G: 35,
    Scancode.H: 36,
    Scancode.I: 24,
    Scancode.J: 37,
    Scancode.K: 38,
    Scancode.L: 39,
    Scancode.M: 52,
    Scancode.N: 51,
    Scancode.O: 25,
    Scancode.P: 26,
    Scancode.Q: 17,
    Scancode.R: 20,
    Scancode.S: 32,
    Scancode.T: 21,
    Scancode.U: 23,
    Scancode.V: 49,
    Scancode.W: 18,
    Scancode.X: 47,
    Scancode.Y: 22,
    Scancode.Z: 46,
    Scancode.DELETE: 76,
    Scancode.UP: 83,
    Scancode.DOWN: 84,
    Scancode.RIGHT: 89,
    Scancode.LEFT: 79,
    Scancode.INSERT: 75,
    Scancode.HOME: 80,
    Scancode.END: 81,
    Scancode.PAGEUP: 85,
    Scancode.PAGEDOWN: 86,
    Scancode.F1: 112,
    Scancode.F2: 113,
    Scancode.F3: 114,
    Scancode.F4: 115,
    Scancode.F5: 116,
    Scancode.F6: 117,
    Scancode.F7: 118,
    Scancode.F8: 119,
    Scancode.F9: 120,
    Scancode.F10: 121,
    Scancode.F11: 122,
    Scancode.F12: 123,
    Scancode.SCROLLLOCK: 125,
    Scancode.RSHIFT: 57,
    Scancode.LSHIFT: 44,
    Scancode.CAPSLOCK: 30,
    Scancode.LCTRL: 58,
    Scancode.RCTRL: 64,
    Scancode.LALT: 60,
    Scancode.RALT: 62,
    Scancode.LGUI: 59,
    Scancode.RGUI: 63,
    Scancode.APPLICATION: 65,  # Menu
    Scancode.NONUSBACKSLASH: 45,
    Scancode.KP_ENTER: 108,
    Scancode.KP_0: 99,
    Scancode.KP_1: 93,
    Scancode.KP_2: 98,
    Scancode.KP_3: 103,
    Scancode.KP_4: 92,
    Scancode.KP_5: 97,
    Scancode.KP_6: 102,
    Scancode.KP_7: 91,
    Scancode.KP_8: 96,
    Scancode.KP_9: 101,
    Scancode.KP_PERIOD: 104,
    Scancode.KP_PLUS: 106,
    Scancode.KP_MINUS: 105,
    Scancode.KP_MULTIPLY: 100,
    Scancode.KP_DIVIDE: 95,
    Scancode.NUMLOCKCLEAR: 90,
    Scancode.INTERNATIONAL1: 56,
}


def keynum_from_scancode(scancode: int) -> int:
    """PS/2 key number for a scancode, 0 for keys the machine lacks."""
    return _KEYNUMS.get(scancode, 0)


def key_event_bytes(down: bool, scancode: int) -> bytes:
    """Bytes to add to the keyboard buffer for a key press or release."""
    keynum = keynum_from_scancode(scancode)
    if keynum == 0:
        return b""
    _log.debug("%s 0x%02X", "DOWN" if down else "UP  ", scancode)
    out = bytearray()
    if down:
        if keynum & EXTENDED_FLAG:
            out.append(0x7F)
    else:
        keynum |= _RELEASE_FLAG
        if keynum & EXTENDED_FLAG:
            out.append(0xFF)
    out.append(keynum & 0xFF)
    return bytes(out)