#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit opcode into an Instruction: a tag naming which of the known
instruction patterns it matched, plus every operand field sliced out of it.
Decoding never fails.  Opcodes matching no known pattern get a tag of None and
it is up to the CPU to decide what to do with them.

Fields:
    x   = bits 8-11, register
    y   = bits 4-7, register
    n   = bits 0-3, nibble
    nn  = bits 0-7, byte
    nnn = bits 0-11, address
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ["tag", "opcode", "x", "y", "n", "nn", "nnn"])

# Families which are fully identified by their first nibble
FAMILY_TAGS = {
    0x1: "1NNN",
    0x2: "2NNN",
    0x3: "3XNN",
    0x4: "4XNN",
    0x6: "6XNN",
    0x7: "7XNN",
    0xA: "ANNN",
    0xB: "BNNN",
    0xC: "CXNN",
    0xD: "DXYN"
}

# Families that need a second look, keyed by the bitmask to apply first
MASKED_FAMILIES = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

MASKED_TAGS = {
    0x00E0: "00E0",
    0x00EE: "00EE",
    0x5000: "5XY0",
    0x8000: "8XY0",
    0x8001: "8XY1",
    0x8002: "8XY2",
    0x8003: "8XY3",
    0x8004: "8XY4",
    0x8005: "8XY5",
    0x8006: "8XY6",
    0x8007: "8XY7",
    0x800E: "8XYE",
    0x9000: "9XY0",
    0xE09E: "EX9E",
    0xE0A1: "EXA1",
    0xF007: "FX07",
    0xF00A: "FX0A",
    0xF015: "FX15",
    0xF018: "FX18",
    0xF01E: "FX1E",
    0xF029: "FX29",
    0xF033: "FX33",
    0xF055: "FX55",
    0xF065: "FX65"
}

# Every tag decode() can produce, apart from None
INSTRUCTION_TAGS = frozenset(FAMILY_TAGS.values()) | frozenset(MASKED_TAGS.values())

# Assembly-style listing for each tag.  Fields are filled in from the Instruction.
MNEMONICS = {
    "00E0": "CLS",
    "00EE": "RET",
    "1NNN": "JP 0x{nnn:03x}",
    "2NNN": "CALL 0x{nnn:03x}",
    "3XNN": "SE V{x:01x}, 0x{nn:02x}",
    "4XNN": "SNE V{x:01x}, 0x{nn:02x}",
    "5XY0": "SE V{x:01x}, V{y:01x}",
    "6XNN": "LD V{x:01x}, 0x{nn:02x}",
    "7XNN": "ADD V{x:01x}, 0x{nn:02x}",
    "8XY0": "LD V{x:01x}, V{y:01x}",
    "8XY1": "OR V{x:01x}, V{y:01x}",
    "8XY2": "AND V{x:01x}, V{y:01x}",
    "8XY3": "XOR V{x:01x}, V{y:01x}",
    "8XY4": "ADD V{x:01x}, V{y:01x}",
    "8XY5": "SUB V{x:01x}, V{y:01x}",
    "8XY6": "SHR V{x:01x}",
    "8XY7": "SUBN V{x:01x}, V{y:01x}",
    "8XYE": "SHL V{x:01x}",
    "9XY0": "SNE V{x:01x}, V{y:01x}",
    "ANNN": "LD I, 0x{nnn:03x}",
    "BNNN": "JP V0, 0x{nnn:03x}",
    "CXNN": "RND V{x:01x}, 0x{nn:02x}",
    "DXYN": "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    "EX9E": "SKP V{x:01x}",
    "EXA1": "SKNP V{x:01x}",
    "FX07": "LD V{x:01x}, DT",
    "FX0A": "LD V{x:01x}, K",
    "FX15": "LD DT, V{x:01x}",
    "FX18": "LD ST, V{x:01x}",
    "FX1E": "ADD I, V{x:01x}",
    "FX29": "LD F, V{x:01x}",
    "FX33": "LD B, V{x:01x}",
    "FX55": "LD [I], V{x:01x}",
    "FX65": "LD V{x:01x}, [I]"
}


def decode(opcode):
    opcode &= 0xFFFF
    family = opcode >> 12
    x = (opcode >> 8) & 0xF
    y = (opcode >> 4) & 0xF
    n = opcode & 0xF
    nn = (y << 4) | n
    nnn = (x << 8) | nn

    tag = FAMILY_TAGS.get(family)

    if tag is None:
        # Every family is either in FAMILY_TAGS or MASKED_FAMILIES
        tag = MASKED_TAGS.get(opcode & MASKED_FAMILIES[family])

    return Instruction(tag, opcode, x, y, n, nn, nnn)


def disassemble(instruction):
    if instruction.tag is None:
        return "??? 0x{:04x}".format(instruction.opcode)

    return MNEMONICS[instruction.tag].format(**instruction._asdict())
