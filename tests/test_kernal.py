import pytest

from x16periph.kernal import (
    is_kernal,
    kernal_status_address,
    load_command,
    next_dump_filename,
)


def reader(mem):
    return lambda address: mem.get(address, 0)


def with_signature(base):
    return {base + i: ch for i, ch in enumerate(b"MIST")}


@pytest.mark.parametrize("base", [0xFFF6, 0xC008])
def test_is_kernal_finds_signature(base):
    assert is_kernal(reader(with_signature(base))) is True


def test_is_kernal_rejects_other_rom():
    assert is_kernal(reader(with_signature(0xFFF0))) is False


def test_is_kernal_rejects_partial_signature():
    mem = with_signature(0xFFF6)
    mem[0xFFF9] = ord("X")
    assert is_kernal(reader(mem)) is False


def readst_memory(target=0xD6A0, operands=(0x0289, 0x0289, 0x0289)):
    mem = {0xFFB7: 0x4C, 0xFFB8: target & 0xFF, 0xFFB9: target >> 8}
    for i, (op, addr) in enumerate(zip((0xAD, 0x0D, 0x8D), operands)):
        mem[target + 3 * i] = op
        mem[target + 3 * i + 1] = addr & 0xFF
        mem[target + 3 * i + 2] = addr >> 8
    return mem


def test_status_address_found():
    assert kernal_status_address(reader(readst_memory())) == 0x0289


def test_status_address_needs_jmp():
    mem = readst_memory()
    mem[0xFFB7] = 0x20
    assert kernal_status_address(reader(mem)) is None


def test_status_address_needs_rom_target():
    assert kernal_status_address(reader(readst_memory(target=0x8000))) is None


def test_status_address_operands_must_agree():
    mem = readst_memory(operands=(0x0289, 0x0289, 0x028A))
    assert kernal_status_address(reader(mem)) is None


def test_load_command_plain():
    assert load_command(8) == 'LOAD":*",8,1\r'


def test_load_command_with_start_and_run():
    assert load_command(8, 0x0801, True) == 'LOAD":*",8,1,$0801\rSYS$0801\r'


def test_load_command_run_without_start():
    assert load_command(9, None, True) == 'LOAD":*",9,1\rRUN\r'


def test_next_dump_filename_first():
    assert next_dump_filename(lambda name: False) == "dump.bin"


def test_next_dump_filename_skips_existing():
    taken = {"dump.bin", "dump-1.bin"}
    result = next_dump_filename(taken.__contains__)
    assert result not in taken
    assert result.startswith("dump-") and result.endswith(".bin")