#!/usr/bin/env python3

"""
Instruction Decoder

Splits a fetched 16-bit instruction word into the fields the CPU needs.  The
fields always sit in the same place, whatever the instruction:

    group  = top nibble (selects the instruction family)
    x / y  = register numbers (0-15) in the second and third nibbles
    addr   = low 12 bits (nnn)
    byte   = low 8 bits (kk)
    nibble = low 4 bits (n)

Every one of the 65536 words decodes.  Whether it means anything is up to the
CPU's dispatch table.

The mnemonic() helper turns a decoded instruction back into assembly-like
text, for the debugger.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ["opcode", "group", "addr", "byte", "nibble", "x", "y"])


def decode(word):
    word &= 0xFFFF
    return Instruction(
        opcode=word,
        group=word >> 12,
        addr=word & 0xFFF,
        byte=word & 0xFF,
        nibble=word & 0xF,
        x=(word & 0xF00) >> 8,
        y=(word & 0xF0) >> 4
    )


# Mnemonic templates, looked up with the same masks the CPU uses
_EXACT = {
    0x00E0: "CLS",
    0x00EE: "RET"
}

_BY_GROUP = {
    0x1: "JP 0x{addr:03x}",
    0x2: "CALL 0x{addr:03x}",
    0x3: "SE V{x:01x}, 0x{byte:02x}",
    0x4: "SNE V{x:01x}, 0x{byte:02x}",
    0x6: "LD V{x:01x}, 0x{byte:02x}",
    0x7: "ADD V{x:01x}, 0x{byte:02x}",
    0xA: "LD I, 0x{addr:03x}",
    0xC: "RND V{x:01x}, 0x{byte:02x}",
    0xD: "DRW V{x:01x}, V{y:01x}, 0x{nibble:01x}"
}

_BY_F00F = {
    0x5000: "SE V{x:01x}, V{y:01x}",
    0x8000: "LD V{x:01x}, V{y:01x}",
    0x8001: "OR V{x:01x}, V{y:01x}",
    0x8002: "AND V{x:01x}, V{y:01x}",
    0x8003: "XOR V{x:01x}, V{y:01x}",
    0x8004: "ADD V{x:01x}, V{y:01x}",
    0x8005: "SUB V{x:01x}, V{y:01x}",
    0x8007: "SUBN V{x:01x}, V{y:01x}",
    0x9000: "SNE V{x:01x}, V{y:01x}"
}

_BY_F0FF = {
    0xE09E: "SKP V{x:01x}",
    0xE0A1: "SKNP V{x:01x}",
    0xF007: "LD V{x:01x}, DT",
    0xF00A: "LD V{x:01x}, K",
    0xF015: "LD DT, V{x:01x}",
    0xF018: "LD ST, V{x:01x}",
    0xF01E: "ADD I, V{x:01x}",
    0xF029: "LD F, V{x:01x}",
    0xF033: "LD B, V{x:01x}",
    0xF055: "LD [I], V{x:01x}",
    0xF065: "LD V{x:01x}, [I]"
}


def mnemonic(instruction, quirks=None):
    """
    Return the assembly text for a decoded instruction, or '???' if the word
    does not match any known instruction.  Passing the CPU quirks lets the
    shift and offset-jump instructions show which register they really use.
    """

    fields = instruction._asdict()
    opcode = instruction.opcode

    if opcode in _EXACT:
        return _EXACT[opcode]

    template = _BY_GROUP.get(instruction.group)

    if template is None:
        template = _BY_F00F.get(opcode & 0xF00F) or _BY_F0FF.get(opcode & 0xF0FF)

    if template is not None:
        return template.format(**fields)

    shift_quirks = quirks is not None and quirks.shift

    if opcode & 0xF00F in (0x8006, 0x800E):
        direction = "SHR" if opcode & 0xF == 0x6 else "SHL"

        if shift_quirks:
            return "{} V{:01x}".format(direction, instruction.x)

        return "{} V{:01x}, V{:01x}".format(direction, instruction.x, instruction.y)

    if instruction.group == 0xB:
        jump_reg = instruction.x if quirks is not None and quirks.jump else 0
        return "JP V{:01x}, 0x{:03x}".format(jump_reg, instruction.addr)

    return "???"
