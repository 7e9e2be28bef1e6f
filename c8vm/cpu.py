#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8 and Super-CHIP quirks)

Like a real computer, this is where most of the processing happens.  One call
to cycle() fetches, decodes and executes exactly one instruction, then hands
control back to whoever is driving the machine.  Nothing in here blocks: the
'wait for key' instruction simply rewinds the program counter until a key has
been captured.

Instructions are looked up by their first nibble, then (for the families that
share a nibble) by a second mask over the whole opcode.  The four instructions
that differ between CHIP-8 and Super-CHIP check the CPU's quirks, and nothing
else does.

Instructions that aren't emulated are skipped, with a diagnostic.  A broken
stack (calling too deep, or returning with nothing to return to) is a fault:
the instruction fails with CPUError, and the machine will halt.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import random
from .constants import APP_INTRO, ARCH_SUPERCHIP, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_START
from .decoder import decode, mnemonic
from .keypad import KeyCapture
from .quirks import build_quirks
from .ram import RAMError
from .stack import StackError


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, arch, ram, stack, framebuffer, keypad, timers, debugger, quirks=None, rng=None):
        self.arch = arch
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.quirks = build_quirks(arch) if quirks is None else quirks
        self.rng = random if rng is None else rng
        self.key_capture = KeyCapture()

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Exact match
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Bitmask 0xF0FF
            0xF: self._Ennn_Fnnn   # Bitmask 0xF0FF
        }

        # Instructions beginning with nibble 0x0, exact match
        self.instructions_0nnn = {
            0x00E0: self._00E0,
            0x00EE: self._00EE
        }

        # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
        self.instructions_f00f = {
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0
        }

        # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
        self.instructions_f0ff = {
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        self.reset()

    def reset(self, start_location=PROGRAM_START):
        # Registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register

        # Program counter, current opcode, and its decoded fields
        self.pc = start_location
        self.debug_pc = start_location
        self.opcode = 0
        self.inst = decode(0)

        self.stack.clear()
        self.timers.reset()
        self.key_capture.reset()

    @property
    def awaiting_keypress(self):
        return self.key_capture.pending

    def cycle(self):
        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc

        try:
            self.opcode = self.fetch()
            self.inc_pc()  # Program counter updates after fetch, but before execute
            self.inst = decode(self.opcode)

            if self.live_debug:
                self.debug(mnemonic(self.inst, self.quirks))

            self.decode_exec()
        except (StackError, RAMError) as err:
            raise CPUError(
                (
                    "Emulation halted.\n\n" +
                    "{}Debug info (arch {}):\n" +
                    "{}\n\n{} at address 0x{:03x}."
                ).format(
                    APP_INTRO, self.arch, self.debugger.debug(self, mnemonic(self.inst, self.quirks), verbose=True),
                    err, self.debug_pc
                )
            ) from err

    def fetch(self):
        # CHIP-8 is big-endian.  The second byte wraps to the start of RAM if PC is at the very top.
        pc = self.pc
        return (self.ram.read(pc) << 8) | self.ram.read(self.ram.wrap(pc + 1))

    def decode_exec(self):
        self.instructions[self.inst.group]()

    def _call_masked_instruction(self, table, masked_opcode):
        instruction = table.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()
        else:
            instruction()

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFF

    def dec_pc(self):
        # Only used to re-run instructions (e.g. keypress wait).
        self.pc = (self.pc - 2) & 0xFFF

    def _opcode_unsupported(self):
        # Not fatal.  The instruction becomes a no-op.
        self.debugger.diagnostic(
            "Opcode 0x{:04x} at address 0x{:03x} is not emulated, skipping.".format(self.opcode, self.debug_pc),
            key=(self.opcode, self.debug_pc)
        )

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _addr(self, offset):
        # Any memory location worked out from I always stays inside RAM
        return self.ram.wrap(self.i + offset)

    def _0nnn(self):
        self._call_masked_instruction(self.instructions_0nnn, self.opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.instructions_f00f, self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.instructions_f0ff, self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.inst.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.inst.addr

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.inst.x] == self.inst.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.inst.x] != self.inst.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.inst.x] == self.v[self.inst.y]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.inst.x] = self.inst.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.inst.x
        self.v[vx] = (self.v[vx] + self.inst.byte) & 0xFF  # Vf is never touched here

    def _post_8xy1_8xy2_8xy3(self):
        if self.quirks.logic:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.inst.x] = self.v[self.inst.y]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.inst.x] |= self.v[self.inst.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.inst.x] &= self.v[self.inst.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.inst.x] ^= self.v[self.inst.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.inst.x
        val = self.v[vx] + self.v[self.inst.y]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.inst.x] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.inst.x] - self.v[self.inst.y])

    def _shift_source(self):
        # On Super-CHIP, Vx is shifted in place.  On CHIP-8, Vy is shifted into Vx.
        return self.v[self.inst.x if self.quirks.shift else self.inst.y]

    def _8xy6(self):  # SHR Vx {, Vy}
        val = self._shift_source()
        self.v[self.inst.x] = val >> 1
        self.v[0xF] = val & 1  # Bit shifted out, taken before the shift

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.inst.y] - self.v[self.inst.x])

    def _8xyE(self):  # SHL Vx {, Vy}
        val = self._shift_source()
        self.v[self.inst.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.inst.x] != self.v[self.inst.y]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        self.i = self.inst.addr

    def _Bnnn(self):  # JP V0, addr
        # Super-CHIP reads the register named by the top nibble of the address, rather than V0
        vr = self.inst.x if self.quirks.jump else 0
        self.pc = (self.v[vr] + self.inst.addr) & 0xFFF

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.inst.x] = self.rng.randint(0, 0xFF) & self.inst.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        inst = self.inst
        rows = [self.ram.read(self._addr(y)) for y in range(inst.nibble)]
        x_pos = self.v[inst.x]
        y_pos = self.v[inst.y]

        # Vf is cleared first, so a sprite drawn with Vf as a coordinate still uses the old value above
        self.v[0xF] = 0
        self.v[0xF] = int(self.framebuffer.draw_sprite(x_pos, y_pos, rows))

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.v[self.inst.x]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[self.inst.x]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.inst.x] = self.timers.dt

    def _Fx0A(self):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to count down and the framebuffer still
        # needs updating, we'll return control to the driver and simply decrement the incremented program counter.
        key = self.key_capture.observe(self.keypad)

        if key is None:
            # We need to come back here on the next instruction, because no key has been pressed and released.
            self.dec_pc()
        else:
            self.v[self.inst.x] = key

    def _Fx15(self):  # LD DT, Vx
        self.timers.set_delay(self.v[self.inst.x])

    def _Fx18(self):  # LD ST, Vx
        # The buzzer itself is switched on the next timer tick
        self.timers.set_sound(self.v[self.inst.x])

    def _Fx1E(self):  # ADD I, Vx
        self.i = (self.i + self.v[self.inst.x]) & 0xFFFF

    def _Fx29(self):  # LD F, Vx
        self.i = (FONT_LOC + FONT_GLYPH_SIZE * self.v[self.inst.x]) & 0xFFFF

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.inst.x]
        self.ram.write(self._addr(0), val // 100)        # Most-significant digit
        self.ram.write(self._addr(1), (val // 10) % 10)  # Middle digit
        self.ram.write(self._addr(2), val % 10)          # Least-significant digit

    def _post_Fx55_Fx65(self):
        if self.quirks.load:
            self.i = (self.i + self.inst.x + 1) & 0xFFFF

    def _Fx55(self):  # LD [I], Vx
        for reg in range(self.inst.x + 1):
            self.ram.write(self._addr(reg), self.v[reg])

        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        for reg in range(self.inst.x + 1):
            self.v[reg] = self.ram.read(self._addr(reg))

        self._post_Fx55_Fx65()


def default_stack_size(arch):
    # 12 levels for CHIP-8, 16 for Super-CHIP
    return 16 if arch >= ARCH_SUPERCHIP else 12
