#!/usr/bin/env python3

"""
System Timers

Two 8-bit countdown timers, delay and sound, both ticked down at 60Hz no
matter how many instructions run in between.  Neither ever goes below zero.

The buzzer should be sounding for as long as the sound timer was non-zero
when the last tick happened.  That is worked out on every tick and kept in
'sound_active' for the audio plugin to pick up.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

TIMER_FREQ = 60.0  # 60Hz emulated system timer refresh


class Timers:
    def __init__(self):
        self.reset()

    def reset(self):
        self.dt = 0  # Delay timer
        self.ds = 0  # Sound timer
        self.sound_active = False

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.ds = value & 0xFF

    def tick(self):
        # Sample the sound timer before counting down, so a value of N beeps for N ticks
        self.sound_active = self.ds > 0

        if self.dt > 0:
            self.dt -= 1

        if self.ds > 0:
            self.ds -= 1

        return self.sound_active
