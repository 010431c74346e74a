#!/usr/bin/env python3

"""
Scheduler

Drives the whole machine from one thread.  There are two independent clocks:

    * The instruction clock calls CPU.step() at the configured clock speed
      (or as fast as possible if uncapped).
    * The timer clock calls Timers.tick() at a fixed 60Hz, based on real time
      rather than on how many instructions have run.

Between instructions, inputs are polled and the display refreshed at 60Hz.  A
step is never interrupted, so nothing else ever sees a half-finished
instruction.

There is no halt instruction, so once the program counter leaves the loaded
program, stepping stops.  The display and inputs are still serviced until the
user quits, unless asked to exit straight away.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ, DISPLAY_FREQ

TIMER_INTERVAL = 1.0 / TIMER_FREQ
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
MAX_TIMER_CATCHUP = int(TIMER_FREQ)  # If the host stalls for over a second, don't bother replaying every tick


class Scheduler:
    def __init__(self, cpu, inputs, audio, clock_speed=None, exit_on_halt=False):
        self.cpu = cpu
        self.machine = cpu.machine
        self.timers = cpu.timers
        self.framebuffer = cpu.framebuffer
        self.inputs = inputs
        self.audio = audio
        self.exit_on_halt = exit_on_halt

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # User can specify 0 for uncapped
        self.clock_speed = clock_speed
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed

        self.next_timer_tick_time = None

        # Audio-related vars
        self.audio_null = audio.is_null()
        self.buzzing = False

        # Performance-related vars
        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def tick_timers(self, this_time):
        # Tick once for each whole timer period that has passed.  Returns the number of ticks.
        if self.next_timer_tick_time is None:
            self.next_timer_tick_time = this_time + TIMER_INTERVAL
            return 0

        ticks = 0

        while this_time >= self.next_timer_tick_time:
            self.timers.tick()
            ticks += 1
            self.next_timer_tick_time += TIMER_INTERVAL

            if ticks >= MAX_TIMER_CATCHUP:
                self.next_timer_tick_time = this_time + TIMER_INTERVAL
                break

        return ticks

    def update_buzzer(self):
        if self.audio_null:
            # Return without doing anything if we don't have a proper audio driver
            return

        buzzing = self.timers.is_buzzing()

        if buzzing != self.buzzing:
            self.audio.enable_buzzer(buzzing)
            self.buzzing = buzzing

    def service_host(self, this_time):
        # Returns True if the user has asked to quit
        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            # Reporting the performance should be done before a refresh, as refreshing will likely show the report
            self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
            self.perf_counter_ops = 0
            self.perf_counter_fps = 0

        # Prevent unnecessary display rendering in excess of host frame rate
        if this_time >= self.next_display_update_time:
            if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                return True

            self.next_display_update_time = this_time + DISPLAY_INTERVAL
            self.framebuffer.refresh_display()
            self.perf_counter_fps += 1

        return False

    def run(self):
        while True:
            this_time = perf_counter()  # Do this first for maximum precision

            if self.service_host(this_time):
                break

            self.tick_timers(this_time)
            self.update_buzzer()

            if not self.machine.is_running():
                if self.exit_on_halt:
                    break

                # Nothing left to execute, so just wait around for the next display refresh or a quit request
                sleep(max(0.0, self.next_display_update_time - perf_counter()))
                continue

            self.cpu.step()
            self.perf_counter_ops += 1

            if self.core_interval is not None:
                # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent on
                # this instruction)
                next_time = this_time + self.core_interval

                while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

        # Make sure the final state of the display is shown
        self.framebuffer.refresh_display()
        self.audio.enable_buzzer(False)
