#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each
step() fetches one big-endian instruction at the program counter, moves the
program counter on, decodes the instruction, then executes it against the
machine state.

Timing is not handled here.  The scheduler decides how often step() is called,
and counts the timers down separately.

Unknown opcodes are reported and skipped.  Everything else that goes wrong
(stack overflow/underflow, memory accesses out of range) is left to propagate,
as the program can't sensibly continue.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import randint
from .constants import FONT_LOC, FONT_GLYPH_SIZE
from .decoder import decode, disassemble

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

logger = logging.getLogger(__name__)


class CPUError(Exception):
    pass


class UnknownOpcode(CPUError):
    pass


class CPU:
    def __init__(self, machine, inputs, debugger):
        self.machine = machine
        self.ram = machine.ram
        self.registers = machine.registers
        self.stack = machine.stack
        self.timers = machine.timers
        self.framebuffer = machine.framebuffer
        self.inputs = inputs
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()

        # Current opcode, and where it came from (kept for crash reports)
        self.opcode = 0
        self.debug_pc = 0

        # Input-related vars
        self.awaiting_keypress = False

        self.instructions = {
            "00E0": self._00E0,
            "00EE": self._00EE,
            "1NNN": self._1nnn,
            "2NNN": self._2nnn,
            "3XNN": self._3xnn,
            "4XNN": self._4xnn,
            "5XY0": self._5xy0,
            "6XNN": self._6xnn,
            "7XNN": self._7xnn,
            "8XY0": self._8xy0,
            "8XY1": self._8xy1,
            "8XY2": self._8xy2,
            "8XY3": self._8xy3,
            "8XY4": self._8xy4,
            "8XY5": self._8xy5,
            "8XY6": self._8xy6,
            "8XY7": self._8xy7,
            "8XYE": self._8xyE,
            "9XY0": self._9xy0,
            "ANNN": self._Annn,
            "BNNN": self._Bnnn,
            "CXNN": self._Cxnn,
            "DXYN": self._Dxyn,
            "EX9E": self._Ex9E,
            "EXA1": self._ExA1,
            "FX07": self._Fx07,
            "FX0A": self._Fx0A,
            "FX15": self._Fx15,
            "FX18": self._Fx18,
            "FX1E": self._Fx1E,
            "FX29": self._Fx29,
            "FX33": self._Fx33,
            "FX55": self._Fx55,
            "FX65": self._Fx65
        }

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.registers.pc, 2), CPU_ENDIAN, signed=False)

    def step(self):
        # Keep track of the program counter before altering it in any way, in case there is a crash
        self.debug_pc = self.registers.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        instruction = decode(self.opcode)

        if self.live_debug:
            self.debugger.output(self, disassemble(instruction))

        try:
            self.execute(instruction)
        except UnknownOpcode as err:
            logger.warning("%s", err)

        return instruction

    def execute(self, instruction):
        handler = self.instructions.get(instruction.tag)

        if handler is None:
            raise UnknownOpcode(
                "Unknown opcode 0x{:04x} at address 0x{:03x}, skipped".format(instruction.opcode, self.debug_pc)
            )

        handler(instruction)

    def inc_pc(self):
        self.registers.set_pc(self.registers.pc + 2)

    def dec_pc(self):
        # Only used to re-run instructions (e.g. keypress wait)
        self.registers.set_pc(self.registers.pc - 2)

    def _skip(self):
        self.inc_pc()

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins):  # RET
        self.registers.set_pc(self.stack.pop())

    def _1nnn(self, ins):  # JP addr
        self.registers.set_pc(ins.nnn)

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.registers.pc)
        self.registers.set_pc(ins.nnn)

    def _3xnn(self, ins):  # SE Vx, byte
        if self.registers.read(ins.x) == ins.nn:
            self._skip()

    def _4xnn(self, ins):  # SNE Vx, byte
        if self.registers.read(ins.x) != ins.nn:
            self._skip()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.registers.read(ins.x) == self.registers.read(ins.y):
            self._skip()

    def _6xnn(self, ins):  # LD Vx, byte
        self.registers.write(ins.x, ins.nn)

    def _7xnn(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.registers.write(ins.x, self.registers.read(ins.x) + ins.nn)

    def _8xy0(self, ins):  # LD Vx, Vy
        self.registers.write(ins.x, self.registers.read(ins.y))

    def _8xy1(self, ins):  # OR Vx, Vy
        self.registers.write(ins.x, self.registers.read(ins.x) | self.registers.read(ins.y))

    def _8xy2(self, ins):  # AND Vx, Vy
        self.registers.write(ins.x, self.registers.read(ins.x) & self.registers.read(ins.y))

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.registers.write(ins.x, self.registers.read(ins.x) ^ self.registers.read(ins.y))

    # Operands are read before anything is written.  The flag is written before Vx, so if Vx is VF, the result wins.

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.registers.read(ins.x) + self.registers.read(ins.y)
        self.registers.set_flag(int(val > 0xFF))  # Vf is set when carrying
        self.registers.write(ins.x, val)

    def _8xy5(self, ins):  # SUB Vx, Vy
        vx = self.registers.read(ins.x)
        vy = self.registers.read(ins.y)
        self.registers.set_flag(int(vx >= vy))  # Vf is set when NOT borrowing
        self.registers.write(ins.x, vx - vy)

    def _8xy6(self, ins):  # SHR Vx
        val = self.registers.read(ins.x)
        self.registers.set_flag(val & 1)
        self.registers.write(ins.x, val >> 1)

    def _8xy7(self, ins):  # SUBN Vx, Vy
        vx = self.registers.read(ins.x)
        vy = self.registers.read(ins.y)
        self.registers.set_flag(int(vy >= vx))
        self.registers.write(ins.x, vy - vx)

    def _8xyE(self, ins):  # SHL Vx
        val = self.registers.read(ins.x)
        self.registers.set_flag(val & 0x80)  # Not normalised to 1
        self.registers.write(ins.x, val << 1)

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.registers.read(ins.x) != self.registers.read(ins.y):
            self._skip()

    def _Annn(self, ins):  # LD I, addr
        self.registers.set_i(ins.nnn)

    def _Bnnn(self, ins):  # JP V0, addr
        self.registers.set_pc(self.registers.read(0) + ins.nnn)

    def _Cxnn(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.registers.write(ins.x, randint(0, 0xFF) & ins.nn)

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # The coordinates must be read before VF is overwritten, as either may be VF
        vx = self.registers.read(ins.x)
        vy = self.registers.read(ins.y)
        sprite = self.ram.read_block(self.registers.i, ins.n)
        collided = self.framebuffer.draw_sprite(vx, vy, sprite)
        self.registers.set_flag(int(collided))

    def _Ex9E(self, ins):  # SKP Vx
        if self.inputs.is_key_down(self.registers.read(ins.x) & 0xF):
            self._skip()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.inputs.is_key_down(self.registers.read(ins.x) & 0xF):
            self._skip()

    def _Fx07(self, ins):  # LD Vx, DT
        self.registers.write(ins.x, self.timers.dt)

    def _Fx0A(self, ins):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to expire and the framebuffer still needs
        # updating, we'll return control to the scheduler and simply decrement the incremented program counter.
        if self.awaiting_keypress:
            key = self.inputs.get_keypress()
        else:
            self.inputs.setup_keypress()  # Clear any currently/previously pressed/held keys.
            self.awaiting_keypress = True
            key = None

        if key is None:
            # We need to come back here on the next instruction, because no key is pressed.
            self.dec_pc()
        else:
            self.registers.write(ins.x, key)
            self.awaiting_keypress = False

    def _Fx15(self, ins):  # LD DT, Vx
        self.timers.set_delay(self.registers.read(ins.x))

    def _Fx18(self, ins):  # LD ST, Vx
        self.timers.set_sound(self.registers.read(ins.x))

    def _Fx1E(self, ins):  # ADD I, Vx
        self.registers.set_i(self.registers.i + self.registers.read(ins.x))

    def _Fx29(self, ins):  # LD F, Vx
        self.registers.set_i(FONT_LOC + FONT_GLYPH_SIZE * (self.registers.read(ins.x) & 0xF))

    def _Fx33(self, ins):  # LD B, Vx
        val = self.registers.read(ins.x)
        i = self.registers.i
        self.ram.write(i, val // 100)            # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)  # Middle digit
        self.ram.write(i + 2, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        i = self.registers.i
        self.ram.write_block(i, self.registers.read_range(ins.x))
        self.registers.set_i(i + ins.x + 1)

    def _Fx65(self, ins):  # LD Vx, [I]
        i = self.registers.i
        self.registers.write_range(self.ram.read_block(i, ins.x + 1))
        self.registers.set_i(i + ins.x + 1)
