import pytest

from x16periph.sdcard import BLOCK_SIZE, SdCard

IMAGE_BLOCKS = 2048  # 1 MiB


def _pattern(block: int) -> bytes:
    return bytes((block + i) & 0xFF for i in range(BLOCK_SIZE))


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "card.img"
    path.write_bytes(b"".join(_pattern(b) for b in range(IMAGE_BLOCKS)))
    return path


@pytest.fixture
def card(image):
    sd = SdCard()
    sd.set_path(image)
    sd.select(True)
    yield sd
    sd.detach()


def _command(sd, cmd, arg=0, crc=0x95):
    frame = [0x40 | cmd, *arg.to_bytes(4, "big"), crc]
    return [sd.handle(b) for b in frame]


def _read(sd, count):
    return bytes(sd.handle(0xFF) for _ in range(count))


def test_unselected_card_returns_ff(card):
    card.select(False)
    assert card.handle(0x40) == 0xFF
    assert card.handle(0xFF) == 0xFF


def test_command_bytes_answer_ff(card):
    assert _command(card, 0) == [0xFF] * 6


def test_go_idle_reports_idle_then_nothing(card):
    _command(card, 0)
    assert _read(card, 1) == b"\x01"
    assert _read(card, 3) == b"\xff\xff\xff"


def test_send_if_cond(card):
    _command(card, 8, 0x1AA, 0x87)
    assert _read(card, 5) == bytes((1, 0x00, 0x00, 0x01, 0xAA))


def test_initialisation_sequence(card):
    _command(card, 13)
    assert _read(card, 2) == bytes((0x1F, 0xFF))
    _command(card, 55)
    assert _read(card, 1) == b"\x01"
    _command(card, 41, 0x40000000)
    assert _read(card, 1) == b"\x00"
    _command(card, 13)
    assert _read(card, 2) == b"\x00\x00"
    _command(card, 0)
    assert _read(card, 1) == b"\x01"


def test_read_ocr(card):
    _command(card, 58)
    assert _read(card, 4) == bytes((0xC0, 0xFF, 0x80, 0x00))


def test_csd_encodes_capacity(card):
    _command(card, 9)
    csd = _read(card, 21)
    assert csd[4] == 0xFE
    c_size = ((csd[12] & 0x3F) << 16) | (csd[13] << 8) | csd[14]
    assert (c_size + 1) << 19 == IMAGE_BLOCKS * BLOCK_SIZE


@pytest.mark.parametrize("lba", [0, 5, IMAGE_BLOCKS - 1])
def test_read_single_block(card, lba):
    _command(card, 17, lba)
    response = _read(card, 2 + BLOCK_SIZE + 2)
    assert response[0] == 0
    assert response[1] == 0xFE
    assert response[2 : 2 + BLOCK_SIZE] == _pattern(lba)
    assert _read(card, 1) == b"\xff"


def test_read_out_of_range(card):
    _command(card, 17, IMAGE_BLOCKS)
    assert _read(card, 2) == bytes((0, 0x08))
    assert _read(card, 1) == b"\xff"


def test_read_multiple_blocks_then_stop(card):
    _command(card, 18, 3)
    first = _read(card, 2 + BLOCK_SIZE + 2)
    second = _read(card, 1 + BLOCK_SIZE + 2)
    assert first[2 : 2 + BLOCK_SIZE] == _pattern(3)
    assert second[0] == 0xFE
    assert second[1 : 1 + BLOCK_SIZE] == _pattern(4)
    _command(card, 12)
    assert _read(card, 1) in (b"\x00", b"\x01")
    assert _read(card, 1) == b"\xff"


def test_multiblock_stops_at_end_of_image(card):
    _command(card, 18, IMAGE_BLOCKS - 1)
    _read(card, 2 + BLOCK_SIZE + 2)
    assert _read(card, 1) == b"\x08"
    assert _read(card, 1) == b"\xff"


def test_write_block_round_trip(card, image):
    data = bytes(range(256)) * 2
    _command(card, 24, 7)
    assert len(_read(card, 1)) == 1
    for b in bytes((0xFE,)) + data + b"\x00\x00":
        card.handle(b)
    _command(card, 17, 7)
    response = _read(card, 2 + BLOCK_SIZE + 2)
    assert response[2 : 2 + BLOCK_SIZE] == data
    card.detach()
    stored = image.read_bytes()
    assert stored[7 * BLOCK_SIZE : 8 * BLOCK_SIZE] == data
    assert stored[6 * BLOCK_SIZE : 7 * BLOCK_SIZE] == _pattern(6)


def test_missing_image_stays_detached(tmp_path):
    sd = SdCard()
    sd.set_path(tmp_path / "absent.img")
    assert sd.path_is_set()
    assert not sd.attached
    sd.select(True)
    assert sd.handle(0x40) == 0xFF


def test_path_not_set_initially():
    sd = SdCard()
    assert not sd.path_is_set()
    sd.attach()
    assert not sd.attached


def test_detach_and_reattach(card):
    card.detach()
    assert not card.attached
    assert card.handle(0xFF) == 0xFF
    card.attach()
    assert card.attached
    _command(card, 8)
    assert _read(card, 5)[-1] == 0xAA


def test_context_manager_detaches(image):
    with SdCard() as sd:
        sd.set_path(image)
        assert sd.attached
    assert not sd.attached