"""Commander X16 style peripherals and helpers: RTC, SD card, keyboard, console, KERNAL and options."""

__version__ = "0.1.0"

__all__ = [
    "console",
    "kernal",
    "keyboard",
    "options",
    "rtc",
    "sdcard",
    "usage",
]