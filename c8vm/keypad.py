#!/usr/bin/env python3

"""
Keypad

The CPU never asks the input plugin directly whether a key is down.  Instead,
a copy of all 16 key states is taken before each instruction runs, so the
keys can't change half way through one.

KeyCapture handles the 'wait for a key' instruction (Fx0A).  A key only counts
once it has been seen held and then seen let go again, so a key that is held
down doesn't get read over and over.  The capture state survives between
steps, because the instruction is re-run until the capture is complete.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

NUM_KEYS = 0x10


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def load(self, key_states):
        # Take a copy, rather than keeping a reference to the plugin's own list
        key_states = [bool(down) for down in key_states]

        if len(key_states) != NUM_KEYS:
            raise KeypadError("Keypad snapshots must hold exactly 16 key states")

        self.keys[:] = key_states

    def is_key_down(self, key):
        return self.keys[key & 0xF]

    def clear(self):
        self.keys[:] = [False] * NUM_KEYS


class KeyCapture:
    def __init__(self):
        self.reset()

    def reset(self):
        self.pending = False
        self.held_key = None

    def observe(self, keypad):
        # Returns the captured key number, or None if still waiting
        self.pending = True

        if self.held_key is None:
            for key_num in range(NUM_KEYS):
                if keypad.is_key_down(key_num):
                    self.held_key = key_num
                    break

            return None

        if keypad.is_key_down(self.held_key):
            return None

        key = self.held_key
        self.reset()
        return key
