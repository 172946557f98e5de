"""SD card in SPI mode, backed by a disk image file."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional

BLOCK_SIZE = 512

CMD0 = 0  # GO_IDLE_STATE
CMD1 = 1  # SEND_OP_COND
ACMD41 = 0x80 | 41  # SEND_OP_COND (SDC)
CMD8 = 8  # SEND_IF_COND
CMD9 = 9  # SEND_CSD
CMD10 = 10  # SEND_CID
CMD12 = 12  # STOP_TRANSMISSION
CMD13 = 13  # SEND_STATUS
ACMD13 = 0x80 | 13  # SD_STATUS (SDC)
CMD16 = 16  # SET_BLOCKLEN
CMD17 = 17  # READ_SINGLE_BLOCK
CMD18 = 18  # READ_MULTIPLE_BLOCK
CMD23 = 23  # SET_BLOCK_COUNT
ACMD23 = 0x80 | 23  # SET_WR_BLK_ERASE_COUNT (SDC)
CMD24 = 24  # WRITE_BLOCK
CMD25 = 25  # WRITE_MULTIPLE_BLOCK
CMD32 = 32  # ERASE_WR_BLK_START
CMD33 = 33  # ERASE_WR_BLK_END
CMD38 = 38  # ERASE
CMD55 = 55  # APP_CMD
CMD58 = 58  # READ_OCR

_DATA_TOKEN = 0xFE
_ERROR_OUT_OF_RANGE = 0x08
_COMMAND_LENGTH = 6
_WRITE_FRAME_LENGTH = 1 + BLOCK_SIZE + 2

_CSD_TEMPLATE = bytes(
    (
        0xFF, 0xFF, 0x00, 0xFF, 0xFE,  # dummy, dummy, R1, dummy, begin block
        0x40, 0x0E, 0x00, 0x32, 0x5B, 0x59, 0x00,
        0x00, 0x00, 0x00,  # C_SIZE
        0x7F, 0x80, 0x0A, 0x40, 0x00, 0x01,
    )
)
_R2_READY = bytes((0x00, 0x00))
_R2_NOT_READY = bytes((0x1F, 0xFF))
_R3 = bytes((0xC0, 0xFF, 0x80, 0x00))
_R7 = bytes((0x01, 0x00, 0x00, 0x01, 0xAA))

_log = logging.getLogger(__name__)


class SdCard:
    """An SDHC card answering SPI-mode commands byte by byte."""

    def __init__(self) -> None:
        self.path = ""
        self.attached = False
        self._file: Optional[BinaryIO] = None
        self._rx = bytearray()
        self._lba = 0
        self._last_cmd = 0
        self._is_acmd = False
        self._is_idle = True
        self._is_initialized = False
        self._multiblock = False
        self._response: Optional[bytes] = None
        self._response_pos = 0
        self.selected = False

    def __enter__(self) -> "SdCard":
        return self

    def __exit__(self, *exc: object) -> None:
        self.detach()

    def set_path(self, path: str | os.PathLike[str]) -> None:
        """Use a new image file and attach it."""
        self.detach()
        self.path = os.fspath(path)
        self.attach()

    def path_is_set(self) -> bool:
        return len(self.path) > 0

    def attach(self) -> None:
        """Open the image; a missing or unreadable image leaves the card detached."""
        if self.attached or not self.path_is_set():
            return
        try:
            self._file = open(self.path, "r+b")
        except OSError:
            _log.warning("Cannot open SDCard file %s!", self.path)
            return
        _log.info("SD card attached.")
        self.attached = True
        self._is_initialized = False

    def detach(self) -> None:
        if self.attached:
            if self._file is not None:
                self._file.close()
            self._file = None
            _log.info("SD card detached.")
            self.attached = False

    def select(self, selected: bool) -> None:
        self.selected = selected
        self._rx.clear()

    def _image_size(self) -> int:
        assert self._file is not None
        return os.fstat(self._file.fileno()).st_size

    def _load_block(self) -> bytes:
        """Data token, block and CRC for the current LBA, or an error token."""
        assert self._file is not None
        offset = self._lba * BLOCK_SIZE
        if offset >= self._image_size():
            return bytes((_ERROR_OUT_OF_RANGE,))
        self._file.seek(offset)
        data = self._file.read(BLOCK_SIZE)
        if len(data) != BLOCK_SIZE:
            _log.warning("Warning: short read!")
            data = data.ljust(BLOCK_SIZE, b"\0")
        return bytes((_DATA_TOKEN,)) + data + b"\0\0"

    def _r1(self) -> bytes:
        return bytes((1 if self._is_idle else 0,))

    def _csd(self) -> bytes:
        c_size = (self._image_size() >> 19) - 1
        csd = bytearray(_CSD_TEMPLATE)
        csd[12] |= (c_size >> 16) & 0x3F
        csd[13] = (c_size >> 8) & 0xFF
        csd[14] = c_size & 0xFF
        return bytes(csd)

    def handle(self, inbyte: int) -> int:
        """Exchange one byte on the SPI bus and return the card's byte."""
        if not self.selected or self._file is None:
            return 0xFF
        inbyte &= 0xFF

        if not self._rx and inbyte == 0xFF:
            return self._send_response_byte()

        self._rx.append(inbyte)
        if (self._rx[0] & 0xC0) == 0x40 and len(self._rx) == _COMMAND_LENGTH:
            frame = bytes(self._rx)
            self._rx.clear()
            self._command(frame)
        elif len(self._rx) == _WRITE_FRAME_LENGTH:
            frame = bytes(self._rx)
            self._rx.clear()
            if self._last_cmd == CMD24 and frame[0] == _DATA_TOKEN:
                self._write_block(frame[1 : 1 + BLOCK_SIZE])
        return 0xFF

    def _send_response_byte(self) -> int:
        if self._response is None:
            return 0xFF
        outbyte = self._response[self._response_pos]
        self._response_pos += 1
        if self._response_pos == len(self._response):
            if self._multiblock:
                self._lba += 1
                self._response = self._load_block()
                if len(self._response) == 1:
                    self._multiblock = False
                self._response_pos = 0
            else:
                self._response = None
                self._multiblock = False
        return outbyte

    def _command(self, frame: bytes) -> None:
        cmd = frame[0] & 0x3F
        if self._is_acmd:
            cmd |= 0x80
            self._is_acmd = False
        self._last_cmd = cmd
        argument = int.from_bytes(frame[1:5], "big")

        if cmd == CMD0:
            self._is_idle = True
            response = self._r1()
        elif cmd == CMD8:
            response = _R7
        elif cmd == CMD9:
            response = self._csd()
        elif cmd == ACMD41:
            self._is_idle = False
            self._is_initialized = True
            response = self._r1()
        elif cmd == CMD12:
            self._multiblock = False
            response = self._r1()
        elif cmd == CMD13:
            response = _R2_READY if self._is_initialized else _R2_NOT_READY
        elif cmd in (CMD17, CMD18):
            if cmd == CMD18:
                self._multiblock = True
            self._lba = argument
            response = b"\0" + self._load_block()
            if len(response) == 2:
                self._multiblock = False
        elif cmd == CMD24:
            self._lba = argument
            response = self._r1()
        elif cmd == CMD55:
            self._is_acmd = True
            response = self._r1()
        elif cmd == CMD58:
            response = _R3
        else:
            response = self._r1()

        self._response = response
        self._response_pos = 0

    def _write_block(self, data: bytes) -> None:
        assert self._file is not None
        offset = self._lba * BLOCK_SIZE
        if offset >= self._image_size():
            return
        self._file.seek(offset)
        written = self._file.write(data)
        self._file.flush()
        if written != BLOCK_SIZE:
            _log.warning("Warning: short write!")