#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, plus
zeroing of memory blocks.

Any address worked out by the running program (from the index register, the
program counter, or an instruction) should be passed through wrap() first, so
it always lands inside the bank.  Direct reads and writes are still checked,
so a bad location raises RAMError instead of touching anything else.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self):
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def wrap(self, location):
        return location % self.mem_size

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_bounds(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_bounds(block_top - 1)
        self.mem[location:block_top] = block

    def check_bounds(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow at 0x{:04x}".format(location))

        if location < 0:
            raise RAMError("Memory underflow at {}".format(location))

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_bounds(block_top - 1)

        for i in range(offset, block_top):
            self.mem[i] = 0x00

    def clear(self):
        # We could reallocate the entire array instead
        self.zero_block(0, self.mem_size)
