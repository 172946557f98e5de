"""Command-line help and keyboard layout names of the emulator."""

from __future__ import annotations

# Must match the order of the layouts built into the KERNAL.
KEYMAPS: tuple[str, ...] = (
    "en-us",
    "en-us-int",
    "en-gb",
    "sv",
    "de",
    "da",
    "it",
    "pl",
    "nb",
    "hu",
    "es",
    "fi",
    "pt-br",
    "cz",
    "jp",
    "fr",
    "de-ch",
    "en-us-dvo",
    "et",
    "fr-be",
    "fr-ca",
    "is",
    "pt",
    "hr",
    "sk",
    "sl",
    "lv",
    "lt",
)

_OPTIONS_BEFORE_HOSTFSDEV = """\
-rom <rom.bin>
\tOverride KERNAL/BASIC/* ROM file.
-ram <ramsize>
\tSpecify banked RAM size in KB (8, 16, 32, ..., 2048).
\tThe default is 512.
-nvram <nvram.bin>
\tSpecify NVRAM image. By default, the machine starts with
\tempty NVRAM and does not save it to disk.
-keymap <keymap>
\tEnable a specific keyboard layout decode table.
-sdcard <sdcard.img>
\tSpecify SD card image (partition map + FAT32)
-cart <crtfile.crt>
\tLoads a specially-formatted cartridge file.
-cartbin <romfile.bin>
\tLoads a raw cartridge file starting at ROM bank 32. After
\tloading, all of the affected banks will function as RAM.
-serial
\tConnect host fs through Serial Bus [experimental]
-nohostieee / -nohostfs
\tDisable HostFS through IEEE API interception.
\tIEEE API HostFS is normally enabled unless -sdcard or
\t-serial is specified.
-hostfsdev <unit>
"""

_OPTIONS_BEFORE_OPACITY = """\
-fsroot <directory>
\tSpecify the host filesystem directory path which is to
\tact as the emulated root directory of the Commander X16.
\tDefault is the current working directory.
-startin <directory>
\tSpecify the host filesystem directory path that the
\temulated filesystem starts in. Default is the current
\tworking directory if it lies within the hierarchy of fsroot,
\totherwise it defaults to fsroot itself.
-noemucmdkeys
\tDisable emulator command keys.
-capture
\tStart emulator with mouse/keyboard captured.
-nokeyboardcapture
\tWhile in capture mode, causes the emulator not to intercept
\tkeyboard combinations which are used by the operating system,
\tsuch as Alt+Tab.
-prg <app.prg>[,<load_addr>]
\tLoad application from the *host filesystem* into RAM,
\teven if an SD card is attached.
\tThe override load address is hex without a prefix.
-bas <app.txt>
\tInject a BASIC program in ASCII encoding through the
\tkeyboard.
-run
\tStart the -prg/-bas program using RUN
-warp
\tEnable warp mode, run emulator as fast as possible.
-pastewarp
\tEnable warp mode during pastes and during loading via -bas.
-echo [{iso|raw}]
\tPrint all KERNAL output to the host's stdout.
\tBy default, everything but printable ASCII characters get
\tescaped. "iso" will escape everything but non-printable
\tISO-8859-15 characters and convert the output to UTF-8.
\t"raw" will not do any substitutions.
\tWith the BASIC statement "LIST", this can be used
\tto detokenize a BASIC program.
-log {K|S|V}...
\tEnable logging of (K)eyboard, (S)peed, (V)ideo.
\tMultiple characters are possible, e.g. -log KS
-gif <file.gif>[,wait]
\tRecord a gif for the video output.
\tUse ,wait to start paused.
\tPOKE $9FB5,2 to start recording.
\tPOKE $9FB5,1 to capture a single frame.
\tPOKE $9FB5,0 to pause.
-wav <file.wav>[{,wait|,auto}]
\tRecord a wav for the audio output.
\tUse ,wait to start paused, or ,auto to start paused and automatically begin recording on the first non-zero audio signal.
\tPOKE $9FB6,2 to automatically begin recording on the first non-zero audio signal.
\tPOKE $9FB6,1 to begin recording immediately.
\tPOKE $9FB6,0 to pause.
-scale {1|2|3|4}
\tScale output to an integer multiple of 640x480
-quality {nearest|linear|best}
\tScaling algorithm quality
-widescreen
\tStretch output to 16:9 resolution to mimic display of a widescreen monitor.
-fullscreen
\tStart up in fullscreen mode instead of in a window.
-opacity (0.0,...,1.0)
"""

_OPTIONS_AFTER_OPACITY = """\
-debug [<address>]
\tEnable debugger. Optionally, set a breakpoint
-randram
\t(deprecated, no effect)
-zeroram
\tSet all RAM to zero instead of uninitialized random values
-wuninit
\tPrints warning to stdout if uninitialized RAM is accessed
-memorystats <file.txt>
\tSaves memory access statistics to the given file when emulator exits
-dump {C|R|B|V}...
\tConfigure system dump: (C)PU, (R)AM, (B)anked-RAM, (V)RAM
\tMultiple characters are possible, e.g. -dump CV ; Default: RB
-joy1
\tEnable binding a gamepad to SNES controller port 1
-joy2
\tEnable binding a gamepad to SNES controller port 2
-joy3
\tEnable binding a gamepad to SNES controller port 3
-joy4
\tEnable binding a gamepad to SNES controller port 4
-sound <output device>
\tSet the output device used for audio emulation
\tIf output device is 'none', no audio is generated
-abufs <number of audio buffers>
\tSet the number of audio buffers used for playback.
\tIf using HostFS, the default is 32, otherwise 8.
\tIncreasing this will reduce stutter on slower computers,
\tbut will increase audio latency.
-rtc
\tSet the real-time-clock to the current system time and date.
-via2
\tInstall the second VIA chip expansion at $9F10
-testbench
\tHeadless mode for unit testing with an external test runner
-mhz <integer>
\tRun the emulator with a system clock speed other than the default of
\t8 MHz. Valid values are in the range of 1-40, inclusive. This option
\tis meant mainly for benchmarking, and may not reflect accurate
\thardware behavior.
-midline-effects
\tApproximate mid-line raster effects when changing tile, sprite,
\tand palette data. Requires a fast host CPU.
-enable-ym2151-irq
\tConnect the YM2151 IRQ source to the emulated CPU. This option increases
\tCPU usage as audio render is triggered for every CPU instruction.
-c02
\tRun the emulator under an emulated 65C02 (default)
-c816
\tRun the emulator under an emulated 65C816
\tThis option is experimental.
-rockwell
\tSuppress warning emitted when encountering a Rockwell extension on the 65C02
-longpwron
\tSimulate a long press of the power button at system power-on.
-midicard [<address>]
\tInstall a serial MIDI card at the specified address, or at $9F60 by default.
\tThe -sf2 option must be specified along with this option.
-sf2 <SoundFont filename>
\tInitialize MIDI synth with the specified SoundFont.
\tThe -midicard option must be specified along with this option.
-midi-in
\tConnect the system MIDI input devices to the input of the first UART
\tof the emulated MIDI card. The -midicard option is required for this
\toption to have any effect.
-version
\tPrint additional version information of the emulator and ROM.

"""


def usage_text(ieee_unit: int = 8, opacity: float = 1.0) -> str:
    """Return the full command-line help, showing the given defaults."""
    return "".join(
        (
            "\nCommander X16 Emulator\n\n",
            "Usage: x16emu [option] ...\n\n",
            _OPTIONS_BEFORE_HOSTFSDEV,
            "\tSet the HostFS IEEE device number. Range 8-31. Default: %d.\n" % ieee_unit,
            _OPTIONS_BEFORE_OPACITY,
            "\tSet the opacity value (0.0 for transparent, 1.0 for opaque) "
            "of the window. (default: %.1f)\n" % opacity,
            _OPTIONS_AFTER_OPACITY,
        )
    )


def keymap_usage_text() -> str:
    """Return the list of supported keyboard layouts."""
    lines = ["The following keymaps are supported:\n"]
    lines.extend(f"\t{name}\n" for name in KEYMAPS)
    return "".join(lines)


def keymap_index(name: str) -> int:
    """Return the KERNAL index of a keyboard layout.

    Raises ValueError, carrying the list of layouts, for an unknown name.
    """
    try:
        return KEYMAPS.index(name)
    except ValueError:
        raise ValueError(keymap_usage_text()) from None