#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Chip8VM"
APP_VERSION = "0.1.0"
APP_COPYRIGHT = "Copyright (C) 2024 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Emulated system architectures
ARCH_CHIP8 = 0
ARCH_SUPERCHIP = 10  # Same instruction set as CHIP-8 here, only the quirks and stack depth differ

# Memory layout
MEM_SIZE = 0x1000
PROGRAM_START = 0x200
PROGRAM_CAPACITY = MEM_SIZE - PROGRAM_START
FONT_LOC = 0x000
FONT_GLYPH_SIZE = 5

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Execution modes
MODE_RUNNING = 0
MODE_PAUSED = 1
MODE_HALTED = 2

# Default mappings for keys 0-F, later populated into a dictionary.  These are PyGame keyscans laid out on the
# left-hand block of a QWERTY keyboard (1234 / QWER / ASDF / ZXCV)
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Startup
SUPPORTED_CPUS = {
    "chip8": ARCH_CHIP8,     # Base CPU architecture
    "schip": ARCH_SUPERCHIP  # Super-CHIP quirks, deeper stack
}

# CPU quirks, each with a matching --<name>_quirks command line override
CPU_QUIRKS = ["logic", "shift", "jump", "load"]

# Built-in hexadecimal font, 5 bytes per glyph (0-F), stored from FONT_LOC
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
