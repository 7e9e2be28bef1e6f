#!/usr/bin/env python3

"""
CPU Quirks

Different historical interpreters disagree on what a handful of instructions
do.  Each disagreement is a named flag, fixed when the CPU is built:

    - Logic quirks: 8xy1/8xy2/8xy3 reset Vf afterwards.  CHIP-8 only.
    - Shift quirks: 8xy6/8xyE shift Vx in place instead of reading Vy.
      Super-CHIP only.
    - Jump quirks : Bnnn adds Vx (x being the top nibble of nnn) instead of V0.
      Super-CHIP only.
    - Load quirks : Fx55/Fx65 leave I pointing past the block they copied.
      CHIP-8 only.  Super-CHIP leaves I untouched.

No other instruction behaves differently between architectures.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from .constants import ARCH_CHIP8, ARCH_SUPERCHIP

Quirks = namedtuple("Quirks", ["logic", "shift", "jump", "load"])

QUIRK_PRESETS = {
    ARCH_CHIP8:     Quirks(logic=True, shift=False, jump=False, load=True),
    ARCH_SUPERCHIP: Quirks(logic=False, shift=True, jump=True, load=False)
}


class QuirksError(Exception):
    pass


def build_quirks(arch, logic=None, shift=None, jump=None, load=None):
    # Start from the architecture's defaults, then apply any manual overrides that aren't None
    preset = QUIRK_PRESETS.get(arch)

    if preset is None:
        raise QuirksError("No quirk defaults for architecture {}".format(arch))

    overrides = {"logic": logic, "shift": shift, "jump": jump, "load": load}
    return preset._replace(**{name: bool(value) for name, value in overrides.items() if value is not None})
