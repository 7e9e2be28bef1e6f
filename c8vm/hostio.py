#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host, for later writing into RAM.  Any
failure to read the file is reported as a LoadError, so the caller only has to
deal with one kind of problem.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PROGRAM_CAPACITY


class LoadError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as err:
            raise LoadError("Unable to read '{}': {}".format(filename, err.strerror or err)) from err

    def load_program(self, filename, capacity=PROGRAM_CAPACITY):
        data = self.load_binary(filename)
        check_program_size(data, capacity)
        return data


def check_program_size(data, capacity=PROGRAM_CAPACITY):
    if len(data) > capacity:
        raise LoadError(
            "Program is {} bytes, but only {} bytes are available".format(len(data), capacity)
        )
