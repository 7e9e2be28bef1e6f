#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from c8vm.constants import PROGRAM_CAPACITY
from c8vm.hostio import Loader, LoadError, check_program_size


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write_rom(self, data):
        filename = os.path.join(self.temp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def test_loader_load_file_present(self):
        filename = self._write_rom(b"\x00\xE0\x12\x00")
        self.assertEqual(b"\x00\xE0\x12\x00", self.loader.load_binary(filename))
        self.assertEqual(b"\x00\xE0\x12\x00", self.loader.load_program(filename))

    def test_loader_load_file_missing(self):
        self.assertRaises(LoadError, self.loader.load_binary, "NoFile.ch8")

    def test_loader_program_too_large(self):
        filename = self._write_rom(b"\x00" * (PROGRAM_CAPACITY + 1))
        self.assertRaises(LoadError, self.loader.load_program, filename)

    def test_check_program_size(self):
        check_program_size(b"\x00" * PROGRAM_CAPACITY)
        self.assertRaises(LoadError, check_program_size, b"\x00" * (PROGRAM_CAPACITY + 1))
        self.assertRaises(LoadError, check_program_size, b"\x00\x00\x00", capacity=2)
