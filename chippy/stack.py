#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location in RAM for the CPU call stack, and no stack
pointer (SP) register exposed to the running program, so the stack lives in
host memory and simply wraps a list.

Return addresses are pushed by CALL and popped by RET.  Running off either end
of the stack means the program is broken, so both are fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflow(StackError):
    pass


class StackUnderflow(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow pushing 0x{:03x} ({} levels)".format(item, self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow") from None

    def __len__(self):
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items
