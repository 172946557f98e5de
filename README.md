# x16periph

Pure-Python models of some peripherals of a Commander X16 style
machine, plus helpers an emulator front end needs: command-line
parsing, KERNAL detection, console echo and paste encoding. Each piece
is small and self-contained, so an emulator core can drive it one
clock step or one register access at a time.

## What is included

- `x16periph.rtc` – `Rtc`, an MCP7940N-style real-time clock. It keeps
  BCD time registers (seconds to year, 2000–2099), supports 12- and
  24-hour modes and a stoppable oscillator, and has 64 bytes of SRAM at
  registers `$20`–`$5F` (`nvram`, with `nvram_dirty` set on writes).
  Bytes of an I2C transfer go in with `i2c_data`; `read` or `write`
  completes it. `step(clocks)` advances the clock by CPU cycles at the
  configured `mhz`. Alarms are not emulated.
- `x16periph.sdcard` – `SdCard`, an SPI-mode SDHC card backed by an
  image file. `set_path` opens the image, `select` asserts chip select
  and `handle(byte)` exchanges one byte on the bus. It answers CMD0,
  CMD8, CMD9 (CSD with the capacity of the image), CMD12, CMD13, CMD17,
  CMD18 (multi-block reads), CMD24 (block writes), CMD55, CMD58 and
  ACMD41; other commands get an R1 response. It can be used as a
  context manager, which detaches the image on exit.
- `x16periph.keyboard` – `Scancode` (host USB HID scancodes),
  `keynum_from_scancode` and `key_event_bytes`, which give the PS/2 key
  number bytes for a key press or release (0 / empty for keys the
  machine does not have).
- `x16periph.console` – `EchoMode` (`none`, `cooked`, `iso`, `raw`),
  `echo_char` to turn a character printed by the KERNAL into bytes for
  the host's standard output, and `paste_bytes` to turn host text into
  keyboard-buffer bytes (ISO-8859-15, with `\Xhh` for raw bytes).
- `x16periph.kernal` – helpers that inspect memory through a `read`
  callable: `is_kernal` (ROM signature check) and
  `kernal_status_address` (locates the STATUS variable through READST);
  plus `load_command`, the BASIC text that loads and optionally runs a
  host PRG, and `next_dump_filename`, which picks `dump.bin`,
  `dump-1.bin`, … .
- `x16periph.options` – `parse_args` reads an emulator command line into
  an `EmulatorOptions` dataclass, raising `UsageError` (whose message is
  the help text to show) on bad input. `Breakpoint` holds a `-debug`
  address; `parse_prg_spec` splits `file.prg,addr`.
- `x16periph.usage` – `usage_text`, `keymap_usage_text`, `keymap_index`
  and the `KEYMAPS` tuple of keyboard layout names.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Example

    from x16periph.rtc import Rtc

    rtc = Rtc(mhz=8)
    rtc.i2c_data(0x00)   # register: seconds
    rtc.i2c_data(0x80)   # start oscillator, 0 seconds
    rtc.write()

    rtc.step(8_000_000)  # one second at 8 MHz
    rtc.i2c_data(0x00)
    print(hex(rtc.read()))   # 0x81

    from x16periph.options import parse_args, UsageError

    try:
        opts = parse_args(["-ram", "1024", "-warp"])
        print(opts.num_ram_banks, opts.warp_mode)   # 128 True
    except UsageError as err:
        print(err)

## What this package does not do

It is a set of building blocks, not an emulator. There is no CPU, memory
map, video, audio, MIDI card, game controller or debug-font rendering,
and no command that starts a machine: `parse_args` only produces the
options such a program would act on, and nothing in the package opens a
window or plays sound.

## Requirements

Python 3.10 or newer. No third-party packages are needed at run time.