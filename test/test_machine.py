#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chippy.constants import SYSTEM_FONT
from chippy.hostio import ProgramLoadError
from chippy.machine import Machine
from chippy.renderers.r_null import Renderer


class TestMachine(unittest.TestCase):
    def setUp(self):
        self.machine = Machine(Renderer())

    def test_machine_init(self):
        self.assertEqual(4096, self.machine.ram.mem_size)
        self.assertEqual(16, self.machine.stack.size)
        self.assertEqual(0, len(self.machine.stack))
        self.assertEqual((64, 32), self.machine.framebuffer.get_vid_size())
        self.assertEqual((0, 0), (self.machine.timers.dt, self.machine.timers.st))
        self.assertEqual(0, self.machine.program_size)

    def test_machine_load_font(self):
        self.machine.load_font()
        self.assertEqual(SYSTEM_FONT, bytes(self.machine.ram.read_block(0x50, 80)))
        self.assertEqual(0, self.machine.ram.read(0x4F))
        self.assertEqual(0, self.machine.ram.read(0xA0))

        # Loading again changes nothing
        self.machine.load_font()
        self.assertEqual(SYSTEM_FONT, bytes(self.machine.ram.read_block(0x50, 80)))

    def test_machine_load_program(self):
        program = bytes(range(0x100)) * 2
        self.machine.load_program(program)
        self.assertEqual(program, bytes(self.machine.ram.read_block(0x200, len(program))))
        self.assertEqual(len(program), self.machine.program_size)
        self.assertEqual(0x200, self.machine.registers.pc)

    def test_machine_load_largest_program(self):
        program = b"\xAA" * 3584
        self.machine.load_program(program)
        self.assertEqual(0xAA, self.machine.ram.read(0xFFF))

    def test_machine_load_program_too_large(self):
        self.assertRaises(ProgramLoadError, self.machine.load_program, bytes(3585))
        self.assertEqual(0, self.machine.program_size)

    def test_machine_load_program_missing(self):
        self.assertRaises(ProgramLoadError, self.machine.load_program, None)

    def test_machine_running(self):
        self.assertFalse(self.machine.is_running())
        self.machine.load_program(b"\x60\x01\x60\x02")
        self.assertTrue(self.machine.is_running())
        self.assertEqual(4, self.machine.remaining_program_bytes())
        self.machine.registers.set_pc(0x202)
        self.assertEqual(2, self.machine.remaining_program_bytes())
        self.assertTrue(self.machine.is_running())
        self.machine.registers.set_pc(0x204)
        self.assertEqual(0, self.machine.remaining_program_bytes())
        self.assertFalse(self.machine.is_running())

        # Jumping below the program also counts as leaving it
        self.machine.registers.set_pc(0x100)
        self.assertFalse(self.machine.is_running())
