#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, SUPPORTED_CPUS, CPU_QUIRKS
from .cpu import CPU, default_stack_size
from .debugger import Debugger
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .machine import Machine
from .quirks import build_quirks
from .ram import RAM
from .stack import Stack
from .timers import Timers


class StartupError(Exception):
    pass


def build_machine(arch, renderer, inputs, audio, debugger=None, clock_speed=None, rng=None, **quirk_settings):
    # Assemble a machine from its parts.  Quirk settings use the same names as CPU_QUIRKS, None meaning default.
    debugger = Debugger() if debugger is None else debugger
    framebuffer = Framebuffer(renderer)
    cpu = CPU(
        arch, RAM(), Stack(default_stack_size(arch)), framebuffer, Keypad(), Timers(), debugger,
        quirks=build_quirks(arch, **quirk_settings), rng=rng
    )
    return Machine(cpu, framebuffer, inputs, audio, clock_speed=clock_speed)


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_setting = args["{}_quirks".format(cpu_quirk)]
        quirk_settings[cpu_quirk] = None if quirk_setting is None else bool(quirk_setting)

    # Read the ROM before opening any windows, so a bad filename fails quickly
    program = Loader().load_program(args["filename"])
    opt_renderer = args["renderer"] or "pygame"

    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame  # noqa: F401
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Try the 'null' renderer instead.")

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer

        if args["mute"]:
            from .audio.a_null import Audio
        else:
            from .audio.a_pygame import Audio
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio
    else:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    arch = SUPPORTED_CPUS[args["arch"]]

    # Set up a new rendering system, inputs linked to it, and a default beep
    renderer = Renderer(scale=args["scale"], fg_colour=args["fg_colour"], bg_colour=args["bg_colour"])
    inputs = Inputs(args["keymap"], renderer)
    audio = Audio()
    audio.set_frequency(440.0)

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    machine = build_machine(
        arch, renderer, inputs, audio, debugger=debugger, clock_speed=args["clock_speed"], **quirk_settings
    )
    machine.load(program)

    try:
        machine.run()
    finally:
        # The machine has stopped, so shut down the host systems.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
