#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap Terminal inputs and redirects them to the emulator.  Note
that standard TTY Terminals only understand characters, they do not know when
an actual key is 'pressed' or 'released'.

What we can do is assume a key is held for a very short time, and then take
advantage of keyboard repeats to fake a 'press' and 'release'.  The last time
each key was 'seen' is stored, and if that was a while ago when checked, it has
almost certainly been released.

We will also quit if ESC (char 27) or CTRL+C (char 3) is detected.

The reader thread only ever talks to the emulator through queues, so it never
touches any emulated machine state.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import time
from .i_null import Inputs as InputsBase, NUM_KEYS

# Terminals don't have separate key press/release, so we have to pause after a character is seen.
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2
QUIT_CHARS = (27, 3)  # ESC, CTRL+C


def input_thread(thread_quitter_queue, input_queue, keymap_dict, curses_screen):
    while thread_quitter_queue.empty():
        # This blocks until a key is pressed.  As a daemon thread, it is terminated when the main thread shuts down.
        char = curses_screen.getch()

        if char < 0:
            continue

        if char in QUIT_CHARS:
            input_queue.put(None, block=True)
            break

        if char < 0x110000:
            char = ord(chr(char).lower())

        keymap_char = keymap_dict.get(char)

        if keymap_char is not None:
            try:
                input_queue.put(keymap_char, block=False)
            except queue.Full:
                pass


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.key_timers = [0.0] * NUM_KEYS
        super().__init__(keymap, renderer, force_lowercase=True)

        self.thread_quitter_queue = queue.Queue(1)  # Used to inform the thread it should quit
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(
                self.thread_quitter_queue,
                self.input_queue,
                self.keymap_dict,
                renderer.get_curses_screen()
            ),
            daemon=True
        )
        self.thread.start()

    def process_messages(self):
        # Deal with any keys pressed
        target_time = None

        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                key_pressed = self.input_queue.get(block=False)
            except queue.Empty:
                break

            if key_pressed is None:
                return True

            if target_time is None:
                target_time = time() + KEYBOARD_FAKE_KEYDOWN_TIME

            self.key_timers[key_pressed] = target_time
            self.last_keypress = key_pressed

        return False

    def is_key_down(self, key):
        return self.key_timers[key] > time()

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already requested the thread quits
            pass

        # Don't wait for the thread to quit, as it is likely to be blocked waiting for a keypress
        super().shutdown()
