#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chippy.stack import Stack, StackError, StackOverflow, StackUnderflow


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack(3)

    def _populate_stack(self):
        self.stack.push(0x0)
        self.stack.push(0x1)
        self.stack.push(0xFFF)

    def test_stack_push_pop(self):
        self._populate_stack()
        self.assertEqual(3, len(self.stack))
        self.assertEqual(0xFFF, self.stack.pop())
        self.assertEqual(0x1, self.stack.pop())
        self.assertEqual(0x0, self.stack.pop())
        self.assertEqual(0, len(self.stack))

    def test_stack_overflow(self):
        self._populate_stack()
        self.assertRaises(StackOverflow, self.stack.push, 0x1)
        # Nothing should have been lost or added
        self.assertEqual([0x0, 0x1, 0xFFF], self.stack.get_items())

    def test_stack_overflow_capacity_2(self):
        stack = Stack(2)
        stack.push(0x300)
        stack.push(0x302)
        self.assertRaises(StackOverflow, stack.push, 0x304)

    def test_stack_underflow(self):
        self.assertRaises(StackUnderflow, self.stack.pop)

    def test_stack_errors_share_base(self):
        self.assertTrue(issubclass(StackOverflow, StackError))
        self.assertTrue(issubclass(StackUnderflow, StackError))
