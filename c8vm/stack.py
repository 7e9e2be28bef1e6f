#!/usr/bin/env python3

"""
Stack Emulator

The call stack is kept out of system RAM.  There is no stack pointer exposed
to the running program, so a capped list emulates it fully.

Going past the capacity, or returning with nothing on the stack, raises
StackError.  The CPU treats either as a fault and halts, rather than guessing
at what the original hardware would have done.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow (capacity {})".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def depth(self):
        return len(self.items)

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items
