#!/usr/bin/env python3

"""
Machine State

Everything the CPU works on lives here: system RAM, the register file, the
call stack, the delay/sound timers, and the framebuffer.  One Machine is one
emulated computer, so nothing is held in module globals.

Memory map:
    0x000 - 0x04F  Unused (historically the interpreter itself)
    0x050 - 0x09F  System font, 16 glyphs of 5 bytes
    0x200 - 0xFFF  Program
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, FONT_LOC, PROGRAM_LOC, MAX_PROGRAM_SIZE, STACK_SIZE, SYSTEM_FONT
from .framebuffer import Framebuffer
from .hostio import ProgramLoadError
from .ram import RAM
from .registers import Registers
from .stack import Stack
from .timers import Timers


class Machine:
    def __init__(self, renderer, stack_size=STACK_SIZE):
        self.ram = RAM(MEM_SIZE)
        self.registers = Registers()
        self.stack = Stack(stack_size)
        self.timers = Timers()
        self.framebuffer = Framebuffer(renderer)
        self.program_size = 0

    def load_font(self):
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)

    def load_program(self, data):
        if data is None:
            raise ProgramLoadError("No program data supplied")

        program_size = len(data)

        if program_size > MAX_PROGRAM_SIZE:
            raise ProgramLoadError(
                "Program is {} bytes, but only {} bytes are available".format(program_size, MAX_PROGRAM_SIZE)
            )

        self.ram.write_block(PROGRAM_LOC, data)
        self.program_size = program_size
        self.registers.set_pc(PROGRAM_LOC)

    def remaining_program_bytes(self):
        # Negative once the PC has gone past the end of the program
        return self.program_size - (self.registers.pc - PROGRAM_LOC)

    def is_running(self):
        # Nothing in the instruction set halts the machine, so stop when the PC leaves the loaded program
        return 0 <= self.registers.pc - PROGRAM_LOC < self.program_size
