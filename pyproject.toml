[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "x16periph"
version = "0.1.0"
description = "Peripheral models and helpers for a Commander X16 style machine: RTC, SD card, keyboard, KERNAL helpers and command-line options"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "commander-x16", "6502", "sdcard", "rtc", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["x16periph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
