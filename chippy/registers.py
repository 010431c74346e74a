#!/usr/bin/env python3

"""
Register File

Sixteen 8-bit general purpose registers (V0 to VF), the 16-bit index register
(I), and the 16-bit program counter (PC).

VF doubles as the flag register.  Arithmetic, shift and draw instructions
overwrite it, so programs can't rely on it surviving those.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .ram import OutOfBoundsAccess

NUM_REGISTERS = 0x10
VF = 0xF


class Registers:
    def __init__(self):
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so this should be fast when updated
        self.i = 0
        self.pc = 0

    def read(self, reg):
        self._check_reg(reg)
        return self.v[reg]

    def write(self, reg, value):
        self._check_reg(reg)
        self.v[reg] = value & 0xFF

    def read_range(self, last_reg):
        # V0 to Vx inclusive
        self._check_reg(last_reg)
        return self.v[:last_reg + 1]

    def write_range(self, block):
        self._check_reg(len(block) - 1)
        self.v[:len(block)] = block

    def set_flag(self, value):
        self.v[VF] = value & 0xFF

    def set_i(self, value):
        self.i = value & 0xFFFF

    def set_pc(self, value):
        self.pc = value & 0xFFFF

    def _check_reg(self, reg):
        if reg < 0 or reg >= NUM_REGISTERS:
            raise OutOfBoundsAccess("Register V{} does not exist".format(reg))
