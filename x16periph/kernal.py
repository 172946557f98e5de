"""Helpers for recognising and driving the KERNAL ROM.

Functions that inspect memory take ``read``, a callable that returns
the byte at a CPU address as the CPU currently sees it.
"""

from __future__ import annotations

from itertools import count
from typing import Callable, Optional

ReadFn = Callable[[int], int]

_SIGNATURE = b"MIST"
_SIGNATURE_ADDRESSES = (0xFFF6, 0xC008)

_READST_VECTOR = 0xFFB7
_OP_JMP = 0x4C
_OP_LDA_ABS = 0xAD
_OP_ORA_ABS = 0x0D
_OP_STA_ABS = 0x8D
_ROM_START = 0xC000

DUMP_FILENAME = "dump.bin"


def _has_signature(read: ReadFn, address: int) -> bool:
    return all(read(address + i) == ch for i, ch in enumerate(_SIGNATURE))


def is_kernal(read: ReadFn) -> bool:
    """True if the visible ROM carries the KERNAL signature."""
    return any(_has_signature(read, address) for address in _SIGNATURE_ADDRESSES)


def _word(read: ReadFn, address: int) -> int:
    return read(address & 0xFFFF) | read((address + 1) & 0xFFFF) << 8


def kernal_status_address(read: ReadFn) -> Optional[int]:
    """Address of the KERNAL STATUS variable, or None if it cannot be found.

    The KERNAL has no call to write STATUS, but READST always reads it
    with ``lda status / ora status / sta status``; the address is taken
    from those three instructions.
    """
    if read(_READST_VECTOR) != _OP_JMP:
        return None
    readst = _word(read, _READST_VECTOR + 1)
    if readst < _ROM_START:
        return None
    opcodes = (_OP_LDA_ABS, _OP_ORA_ABS, _OP_STA_ABS)
    if any(read((readst + 3 * i) & 0xFFFF) != op for i, op in enumerate(opcodes)):
        return None
    operands = {_word(read, readst + 3 * i + 1) for i in range(len(opcodes))}
    if len(operands) != 1:
        return None
    return operands.pop()


def load_command(unit: int, override_start: Optional[int] = None, run: bool = False) -> str:
    """BASIC text that loads the host PRG, and optionally starts it."""
    if override_start is not None:
        text = 'LOAD":*",%d,1,$%04X\r' % (unit, override_start)
    else:
        text = 'LOAD":*",%d,1\r' % unit
    if run:
        if override_start is not None:
            text += "SYS$%04X\r" % override_start
        else:
            text += "RUN\r"
    return text


def next_dump_filename(exists: Callable[[str], bool]) -> str:
    """First of ``dump.bin``, ``dump-1.bin``, ... for which ``exists`` is false."""
    for index in count():
        name = DUMP_FILENAME if index == 0 else f"dump-{index}.bin"
        if not exists(name):
            return name
    raise AssertionError("unreachable")