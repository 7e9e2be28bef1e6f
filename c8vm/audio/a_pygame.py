#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a square-wave beep within PyGame / SDL for as long as the buzzer is
enabled.

The emulated buzzer only has an 'on' or 'off' status, so one short looping
sample is enough.  It is built from a whole number of square wave periods at
the chosen frequency, in an unsigned 8-bit mono buffer.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100.0
DEFAULT_VOLUME = 0.1
SAMPLE_PERIODS = 16  # Square wave periods held in the looping sample


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        self.frequency = None
        pygame.mixer.pre_init(int(PLAYBACK_FREQUENCY), size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def set_frequency(self, frequency):
        # Rebuild the sample if the pitch changes.  If it is already playing, the new one takes over straight away.
        if frequency == self.frequency:
            return

        self.frequency = frequency
        half_period = max(1, int(PLAYBACK_FREQUENCY / frequency / 2))
        wave = (b"\xFF" * half_period + b"\x00" * half_period) * SAMPLE_PERIODS

        if self.sound is not None and self.buzzer_enabled:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=wave)
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            self.sound.play(-1)

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer, i.e. play or stop sample playback.  If the sample is already playing, it won't
        # be restarted.
        if self.sound is None or enabled == self.buzzer_enabled:
            return

        if enabled:
            self.sound.play(-1)
        else:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()

    def is_null(self):
        # Only the null audio device should return True
        return False
