"""Command-line options of the emulator.

:func:`parse_args` reads the option list the way the emulator does,
from left to right. Later options override earlier ones. Anything it
cannot accept raises :class:`UsageError`, which carries the help text
to show.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from x16periph.usage import keymap_index, keymap_usage_text, usage_text

DEFAULT_MIDI_CARD_ADDRESS = 0x9F60
DEFAULT_AUDIO_BUFFERS = 8
HOSTFS_AUDIO_BUFFERS = 32
NUM_JOYSTICKS = 4

_SCALE_QUALITIES = ("nearest", "linear", "best")

_DEC_RE = re.compile(r"\s*([+-]?)(\d+)")
_HEX_PREFIX_RE = re.compile(r"\s*([+-]?)0[xX]([0-9a-fA-F]+)")
_HEX_RE = re.compile(r"\s*([+-]?)([0-9a-fA-F]+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_log = logging.getLogger(__name__)


class UsageError(Exception):
    """The command line could not be accepted; the message is the help to show."""

    exit_code = 1


@dataclass(frozen=True)
class Breakpoint:
    """A debugger breakpoint; ``x16_bank`` is -1 for addresses below $A000."""

    pc: int
    bank: int = 0
    x16_bank: int = -1


@dataclass
class EmulatorOptions:
    """Everything the command line can set, with the emulator's defaults.

    ``rom_path`` of ``None`` means ``rom.bin`` next to the executable.
    ``echo_mode`` is one of ``"none"``, ``"cooked"``, ``"iso"`` and ``"raw"``.
    """

    rom_path: Optional[str] = None
    num_ram_banks: int = 64
    nvram_path: Optional[str] = None
    keymap: int = 0
    sdcard_path: Optional[str] = None
    cartridge_path: Optional[str] = None
    cartbin_path: Optional[str] = None
    has_serial: bool = False
    no_ieee_intercept: bool = False
    using_hostfs: bool = True
    hostfs_set: bool = False
    ieee_unit: int = 8
    fsroot_path: Optional[str] = None
    startin_path: Optional[str] = None
    disable_emu_cmd_keys: bool = False
    grab_mouse: bool = False
    no_keyboard_capture: bool = False
    prg_path: Optional[str] = None
    bas_path: Optional[str] = None
    run_after_load: bool = False
    warp_mode: bool = False
    warp_pastes: bool = False
    echo_mode: str = "none"
    log_keyboard: bool = False
    log_speed: bool = False
    log_video: bool = False
    record_gif: bool = False
    gif_path: Optional[str] = None
    wav_path: Optional[str] = None
    window_scale: int = 1
    scale_quality: str = "best"
    screen_x_scale: float = 1.0
    fullscreen: bool = False
    window_opacity: float = 1.0
    debugger_enabled: bool = False
    breakpoints: list[Breakpoint] = field(default_factory=list)
    randomize_ram: bool = True
    zeroram: bool = False
    report_uninitialized: bool = False
    memory_stats_path: Optional[str] = None
    dump_cpu: bool = False
    dump_ram: bool = True
    dump_bank: bool = True
    dump_vram: bool = False
    joystick_slots: list[bool] = field(default_factory=lambda: [False] * NUM_JOYSTICKS)
    audio_device: Optional[str] = None
    audio_buffers: int = DEFAULT_AUDIO_BUFFERS
    audio_buffers_set: bool = False
    set_system_time: bool = False
    has_via2: bool = False
    testbench: bool = False
    headless: bool = False
    mhz: int = 8
    enable_midline: bool = False
    ym2151_irq_support: bool = False
    is_65c816: bool = False
    is_gen2: bool = False
    warn_rockwell: bool = True
    pwr_long_press: bool = False
    has_midi_card: bool = False
    midi_card_addr: int = 0
    sf2_path: Optional[str] = None
    midi_in_connect: bool = False
    midi_synth_enabled: bool = False
    run_test: bool = False
    test_number: int = 0
    show_version: bool = False


def _strtol(text: str, base: int) -> int:
    """Leading integer of ``text`` like C ``strtol``; 0 when there is none."""
    if base == 16:
        match = _HEX_PREFIX_RE.match(text) or _HEX_RE.match(text)
    else:
        match = _DEC_RE.match(text)
    if match is None:
        return 0
    value = int(match.group(2), base)
    return -value if match.group(1) == "-" else value


def _strtof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def parse_prg_spec(spec: str) -> tuple[str, Optional[int]]:
    """Split ``file[,hexaddr]`` into a path and an optional load address."""
    path, comma, address = spec.partition(",")
    if not comma:
        return spec, None
    return path, _strtol(address, 16) & 0xFFFF


class _Args:
    def __init__(self, argv: Sequence[str], options: EmulatorOptions) -> None:
        self._argv = list(argv)
        self._pos = 0
        self._options = options

    def __bool__(self) -> bool:
        return self._pos < len(self._argv)

    def next(self) -> str:
        arg = self._argv[self._pos]
        self._pos += 1
        return arg

    def optional(self) -> Optional[str]:
        """The next argument if it is a value rather than an option."""
        if self and not self._argv[self._pos].startswith("-"):
            return self.next()
        return None

    def required(self) -> str:
        value = self.optional()
        if value is None:
            raise self.usage()
        return value

    def usage(self) -> UsageError:
        opts = self._options
        return UsageError(usage_text(opts.ieee_unit, opts.window_opacity))


def _parse_log(opts: EmulatorOptions, args: _Args, value: str) -> None:
    for ch in value.lower():
        if ch == "k":
            opts.log_keyboard = True
        elif ch == "s":
            opts.log_speed = True
        elif ch == "v":
            opts.log_video = True
        else:
            raise args.usage()


def _parse_dump(opts: EmulatorOptions, args: _Args, value: str) -> None:
    opts.dump_cpu = opts.dump_ram = opts.dump_bank = opts.dump_vram = False
    for ch in value.lower():
        if ch == "c":
            opts.dump_cpu = True
        elif ch == "r":
            opts.dump_ram = True
        elif ch == "b":
            opts.dump_bank = True
        elif ch == "v":
            opts.dump_vram = True
        else:
            raise args.usage()


def _breakpoint(value: str) -> Breakpoint:
    address = _strtol(value, 16) & 0xFFFFFFFF
    if address < 0xA000:
        return Breakpoint(pc=address, bank=0, x16_bank=-1)
    return Breakpoint(pc=address & 0xFFFF, bank=0, x16_bank=address >> 16)


_FLAGS = {
    "-run": ("run_after_load", True),
    "-warp": ("warp_mode", True),
    "-pastewarp": ("warp_pastes", True),
    "-widescreen": ("screen_x_scale", 4.0 / 3),
    "-fullscreen": ("fullscreen", True),
    "-rtc": ("set_system_time", True),
    "-serial": ("has_serial", True),
    "-noemucmdkeys": ("disable_emu_cmd_keys", True),
    "-capture": ("grab_mouse", True),
    "-longpwron": ("pwr_long_press", True),
    "-nokeyboardcapture": ("no_keyboard_capture", True),
    "-via2": ("has_via2", True),
    "-midline-effects": ("enable_midline", True),
    "-enable-ym2151-irq": ("ym2151_irq_support", True),
    "-rockwell": ("warn_rockwell", False),
    "-wuninit": ("report_uninitialized", True),
    "-midi-in": ("midi_in_connect", True),
}

_PATHS = {
    "-rom": "rom_path",
    "-prg": "prg_path",
    "-sf2": "sf2_path",
    "-bas": "bas_path",
    "-nvram": "nvram_path",
    "-sdcard": "sdcard_path",
    "-cart": "cartridge_path",
    "-cartbin": "cartbin_path",
    "-wav": "wav_path",
    "-memorystats": "memory_stats_path",
    "-fsroot": "fsroot_path",
    "-startin": "startin_path",
}

_CPUS = {
    "-c816": (True, False),
    "-c02": (False, False),
    "-gs": (True, True),
}


def _parse_option(opts: EmulatorOptions, args: _Args, option: str) -> bool:
    """Apply one option; return False when parsing must stop."""
    if option in _FLAGS:
        name, value = _FLAGS[option]
        setattr(opts, name, value)
    elif option in _PATHS:
        setattr(opts, _PATHS[option], args.required())
    elif option in _CPUS:
        opts.is_65c816, opts.is_gen2 = _CPUS[option]
    elif option == "-ram":
        kb = _strtol(args.required(), 10)
        if kb & 7 or kb < 8 or kb > 2048:
            raise UsageError("-ram value must be a multiple of 8 in the range of 8-2048.\n")
        opts.num_ram_banks = kb // 8
    elif option == "-keymap":
        name = args.optional()
        if name is None:
            raise UsageError(keymap_usage_text())
        try:
            opts.keymap = keymap_index(name)
        except ValueError as exc:
            raise UsageError(str(exc)) from None
    elif option == "-midicard":
        opts.has_midi_card = True
        value = args.optional()
        if value is None:
            opts.midi_card_addr = DEFAULT_MIDI_CARD_ADDRESS
        else:
            opts.midi_card_addr = (0x9F00 | (_strtol(value, 16) & 0xFF)) & 0xFFF0
    elif option == "-test":
        opts.test_number = _strtol(args.required(), 10)
        opts.run_test = True
    elif option == "-echo":
        value = args.optional()
        if value is None:
            opts.echo_mode = "cooked"
        elif value in ("raw", "iso"):
            opts.echo_mode = value
        else:
            raise args.usage()
    elif option == "-log":
        _parse_log(opts, args, args.required())
    elif option == "-dump":
        _parse_dump(opts, args, args.required())
    elif option == "-gif":
        opts.record_gif = True
        opts.gif_path = args.required()
    elif option == "-debug":
        opts.debugger_enabled = True
        value = args.optional()
        if value is not None:
            opts.breakpoints.append(_breakpoint(value))
    elif option == "-randram":
        pass  # randomized RAM is the default; kept for compatibility
    elif option == "-zeroram":
        opts.randomize_ram = False
        opts.zeroram = True
    elif option in ("-joy1", "-joy2", "-joy3", "-joy4"):
        opts.joystick_slots[int(option[-1]) - 1] = True
    elif option == "-scale":
        for ch in args.required():
            if ch not in "1234":
                raise args.usage()
            opts.window_scale = int(ch)
    elif option == "-quality":
        value = args.required()
        if value not in _SCALE_QUALITIES:
            raise args.usage()
        opts.scale_quality = value
    elif option == "-opacity":
        opts.window_opacity = _strtof(args.required())
    elif option == "-sound":
        opts.audio_device = args.required()
    elif option == "-abufs":
        opts.audio_buffers = _strtol(args.required(), 10)
        opts.audio_buffers_set = True
    elif option in ("-nohostieee", "-nohostfs"):
        opts.no_ieee_intercept = True
        opts.hostfs_set = False
        opts.using_hostfs = False
    elif option == "-hostfsdev":
        unit = _strtol(args.required(), 10) & 0xFF
        opts.ieee_unit = unit
        if unit < 8 or unit > 31:
            raise args.usage()
        opts.hostfs_set = True
        opts.using_hostfs = True
    elif option == "-version":
        opts.show_version = True
        return False
    elif option == "-testbench":
        opts.testbench = True
        opts.headless = True
    elif option == "-mhz":
        mhz = _strtol(args.required(), 10) & 0xFF
        if mhz < 1 or mhz > 40:
            raise args.usage()
        opts.mhz = mhz
    else:
        raise args.usage()
    return True


def _resolve(opts: EmulatorOptions) -> None:
    if opts.sdcard_path and not opts.hostfs_set:
        opts.using_hostfs = False

    if opts.using_hostfs and not opts.audio_buffers_set:
        opts.audio_buffers = HOSTFS_AUDIO_BUFFERS

    if opts.sf2_path and opts.has_midi_card:
        if opts.midi_card_addr < DEFAULT_MIDI_CARD_ADDRESS:
            _log.warning("Serial MIDI card address must be in the range of 9F60-9FF0")
        else:
            opts.midi_synth_enabled = True
    elif opts.sf2_path or opts.has_midi_card:
        _log.warning(
            "-sf2 and -midicard must be specified together in order to enable the MIDI synth."
        )
        opts.has_midi_card = False


def parse_args(argv: Optional[Sequence[str]] = None) -> EmulatorOptions:
    """Parse the option list (without the program name) into options."""
    opts = EmulatorOptions()
    args = _Args(argv or (), opts)
    while args:
        if not _parse_option(opts, args, args.next()):
            return opts
    _resolve(opts)
    return opts