#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required, or to feed scripted key presses to the
machine with set_key().

Besides the 16 key states, plugins can ask the machine to pause (toggle) or
reset.  Requests are collected here and handed over once by take_requests().
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

REQUEST_PAUSE = "pause"
REQUEST_RESET = "reset"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer):
        self.keymap_dict = {}
        self.renderer = renderer
        self.key_down = [False] * 0x10
        self.requests = []
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def set_key(self, key, down):
        self.key_down[key & 0xF] = bool(down)

    def is_key_down(self, key):
        return self.key_down[key & 0xF]

    def get_keys(self):
        return tuple(self.key_down)

    def request(self, request):
        self.requests.append(request)

    def take_requests(self):
        requests = self.requests
        self.requests = []
        return requests

    def shutdown(self):
        pass
