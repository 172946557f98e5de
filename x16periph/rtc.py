"""MCP7940N real-time clock with battery-backed SRAM.

Supports 24-hour and AM/PM modes and a stoppable oscillator; alarms are
not emulated. Registers are accessed over I2C: bytes written are
collected with :meth:`Rtc.i2c_data`, the first one selecting the
register, then :meth:`Rtc.read` or :meth:`Rtc.write` completes the
transfer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

NVRAM_SIZE = 0x40
I2C_DATA_LEN = 16
_NVRAM_START = 0x20
_NVRAM_END = 0x60

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _bcd(value: int) -> int:
    return ((value // 10) << 4 | (value % 10)) & 0xFF


def _unbcd(value: int) -> int:
    return (value >> 4) * 10 + (value & 0xF)


class Rtc:
    """The clock, its registers and its 64 bytes of SRAM."""

    def __init__(self, mhz: int = 8) -> None:
        self.mhz = mhz
        self.nvram = bytearray(NVRAM_SIZE)
        self.nvram_dirty = False
        self._i2c = bytearray(I2C_DATA_LEN)
        self._i2c_pos = 0
        self.reset(False)

    def reset(self, set_system_time: bool = False, now: Optional[datetime] = None) -> None:
        """Power up, stopped at 2000-01-01, or running at ``now`` (default: host time)."""
        self.vbaten = True
        self.h24 = True
        self._clocks = 0
        if set_system_time:
            t = now if now is not None else datetime.now()
            self.running = True
            self.seconds = t.second
            self.minutes = t.minute
            self.hours = t.hour
            self.day_of_week = t.isoweekday()
            self.day = t.day
            self.month = t.month
            self.year = t.year - 2000
        else:
            self.running = False  # the chip really starts out stopped
            self.seconds = 0
            self.minutes = 0
            self.hours = 0
            self.day_of_week = 1
            self.day = 1
            self.month = 1
            self.year = 0

    def is_leap_year(self) -> bool:
        # The clock covers 2000-2099, where every fourth year is a leap year.
        return not (self.year & 3)

    def i2c_data(self, value: int) -> None:
        """Accept one byte of an I2C transfer; bytes past the buffer are dropped."""
        if self._i2c_pos < I2C_DATA_LEN:
            self._i2c[self._i2c_pos] = value & 0xFF
            self._i2c_pos += 1

    def step(self, clocks: int) -> None:
        """Advance by ``clocks`` CPU cycles."""
        if not self.running:
            return
        self._clocks += clocks
        ticks_per_second = self.mhz * 1_000_000
        if self._clocks < ticks_per_second:
            return
        self._clocks -= ticks_per_second
        self._advance_second()

    def _advance_second(self) -> None:
        self.seconds += 1
        if self.seconds < 60:
            return
        self.seconds = 0
        self.minutes += 1
        if self.minutes < 60:
            return
        self.minutes = 0
        self.hours += 1
        if self.hours < 24:
            return
        self.hours = 0
        self.day_of_week += 1
        if self.day_of_week > 7:
            self.day_of_week = 1
        self.day += 1
        days = _DAYS_PER_MONTH[self.month - 1]
        if self.month == 2 and self.is_leap_year():
            days += 1
        if self.day <= days:
            return
        self.day = 1
        self.month += 1
        if self.month <= 12:
            return
        self.month = 1
        self.year += 1
        if self.year == 100:
            self.year = 0

    def read(self) -> int:
        """Value of the selected register; ends the transfer."""
        reg = self._i2c[0]
        if reg == 0:
            value = _bcd(self.seconds) | self.running << 7
        elif reg == 1:
            value = _bcd(self.minutes)
        elif reg == 2:
            hour = self.hours
            pm = False
            if not self.h24:
                if hour >= 12:
                    pm = True
                    hour -= 12
                if hour == 0:
                    hour = 12
            value = _bcd(hour) | pm << 5 | (not self.h24) << 6
        elif reg == 3:
            value = self.day_of_week | self.vbaten << 3 | self.running << 5
        elif reg == 4:
            value = _bcd(self.day)
        elif reg == 5:
            value = _bcd(self.month) | self.is_leap_year() << 5
        elif reg == 6:
            value = _bcd(self.year)
        elif _NVRAM_START <= reg < _NVRAM_END:
            value = self.nvram[reg - _NVRAM_START]
        elif reg >= _NVRAM_END:
            value = 0xFF
        else:
            value = 0
        self._i2c_pos = 0
        return value & 0xFF

    def write(self) -> None:
        """Store the second transfer byte in the selected register; ends the transfer."""
        reg, value = self._i2c[0], self._i2c[1]
        if reg == 0:
            self.running = bool(value & 0x80)
            self.seconds = _unbcd(value & 0x7F)
        elif reg == 1:
            self.minutes = _unbcd(value)
        elif reg == 2:
            self.h24 = not (value & 0x40)
            hour = value & 0x3F
            pm = False
            if not self.h24:
                pm = bool(value & 0x20)
                hour &= 0x1F
            hour = _unbcd(hour)
            if not self.h24 and hour == 12:
                hour = 0
            if pm:
                hour += 12
            self.hours = hour & 0xFF
        elif reg == 3:
            self.day_of_week = value & 7
            self.vbaten = bool(value & 0x20)
        elif reg == 4:
            self.day = _unbcd(value)
        elif reg == 5:
            self.month = _unbcd(value)
        elif reg == 6:
            self.year = _unbcd(value)
        elif _NVRAM_START <= reg < _NVRAM_END:
            self.nvram[reg - _NVRAM_START] = value
            self.nvram_dirty = True
        self._i2c_pos = 0