#!/usr/bin/env python3

"""
Timer Unit

The delay and sound timers are 8-bit counters which count down to zero at
60Hz, no matter how quickly instructions are being executed.  Only the
scheduler calls tick(), so the instruction clock can never speed them up.

While the sound timer is above zero, the buzzer should sound.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

    def tick(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.st = value & 0xFF

    def is_buzzing(self):
        return self.st > 0
