#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Holds the state of the 16-key hex keypad, which the CPU reads for the
key-conditional skips and the key wait instruction:

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

The keymap is a comma-separated list of 16 host key codes, for keypad keys 0
to F in order.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

NUM_KEYS = 0x10


class InputsError(Exception):
    pass


def parse_keymap(keymap, force_lowercase=False):
    # Returns a dictionary of host key code -> keypad key
    keymap_dict = {}
    keymap_split = keymap.split(",")

    if len(keymap_split) != NUM_KEYS:
        raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

    for key_num, key_defined in enumerate(keymap_split):
        try:
            key_defined_ord = int(key_defined)
        except ValueError:
            raise InputsError("Defined keys are not all integer values") from None

        if force_lowercase:
            # If we are working with characters rather than keyscan codes, we should convert to lowercase
            key_defined_ord = ord(chr(key_defined_ord).lower())

        if key_defined_ord in keymap_dict:
            raise InputsError("Duplicate keys defined")

        keymap_dict[key_defined_ord] = key_num

    return keymap_dict


class Inputs:
    def __init__(self, keymap, renderer, force_lowercase=False):
        self.keymap_dict = parse_keymap(keymap, force_lowercase)
        self.renderer = renderer
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def process_messages(self):
        return False  # Don't exit the program

    def press_key(self, key):
        self.key_down[key] = True

    def release_key(self, key):
        # A key counts as 'pressed' for the key wait instruction once it is let go
        if self.key_down[key]:
            self.key_down[key] = False
            self.last_keypress = key

    def is_key_down(self, key):
        return self.key_down[key]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def shutdown(self):
        pass
