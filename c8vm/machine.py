#!/usr/bin/env python3

"""
Machine (Execution Driver)

Ties the CPU to the outside world and decides when things happen.  For every
60Hz tick:

    1. A batch of instructions runs (clock speed / 60 of them), each with a
       fresh copy of the keypad taken from the input plugin first
    2. The delay and sound timers count down once, and the buzzer follows the
       sound timer
    3. If anything was drawn, the framebuffer is pushed to the renderer

The machine is always in one of three modes.  Only a running machine executes
instructions or counts down its timers.  A paused machine is completely frozen.
A halted machine has hit a fault, and won't run again unless it is reset.

Resetting reloads the original program image over freshly cleared memory, and
zeros everything else.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import (
    MEM_SIZE, PROGRAM_START, FONT_LOC, SYSTEM_FONT, MODE_RUNNING, MODE_PAUSED, MODE_HALTED
)
from .cpu import CPUError
from .hostio import check_program_size
from .inputs.i_null import REQUEST_PAUSE, REQUEST_RESET
from .timers import TIMER_FREQ

DEFAULT_CLOCK_SPEED = 1000  # Operations per second
TICK_INTERVAL = 1.0 / TIMER_FREQ


class MachineError(Exception):
    pass


class Machine:
    def __init__(self, cpu, framebuffer, inputs, audio, clock_speed=None):
        self.cpu = cpu
        self.ram = cpu.ram
        self.keypad = cpu.keypad
        self.timers = cpu.timers
        self.debugger = cpu.debugger
        self.framebuffer = framebuffer
        self.inputs = inputs
        self.audio = audio
        self.program = None
        self.fault = None
        self.mode = MODE_PAUSED

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        if clock_speed <= 0:
            raise MachineError("The clock speed must be at least 1 operation per second")

        self.clock_speed = clock_speed
        self.steps_per_tick = max(1, round(clock_speed / TIMER_FREQ))

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def load(self, program):
        # Nothing is touched if the program doesn't fit
        program = bytes(program)
        check_program_size(program)
        self.program = program
        self._boot()
        self.mode = MODE_PAUSED

    def _boot(self):
        # Fresh memory, with the font and program written back in
        self.ram.resize(MEM_SIZE)
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)
        self.ram.write_block(PROGRAM_START, self.program)

        self.cpu.reset(PROGRAM_START)
        self.keypad.clear()
        self.framebuffer.clear()
        self.audio.enable_buzzer(False)
        self.debugger.reset()
        self.fault = None

    def _require_program(self):
        if self.program is None:
            raise MachineError("No program has been loaded")

    def start(self):
        self._require_program()

        if self.mode == MODE_HALTED:
            raise MachineError("The machine has halted and must be reset first")

        self.mode = MODE_RUNNING

    def pause(self):
        if self.mode == MODE_RUNNING:
            self.mode = MODE_PAUSED
            self.audio.enable_buzzer(False)

    def resume(self):
        if self.mode == MODE_PAUSED:
            self.mode = MODE_RUNNING
            self.audio.enable_buzzer(self.timers.sound_active)

    def toggle_pause(self):
        if self.mode == MODE_RUNNING:
            self.pause()
        else:
            self.resume()

    def reset(self):
        self._require_program()
        self._boot()
        self.mode = MODE_RUNNING

    def is_running(self):
        return self.mode == MODE_RUNNING

    def step(self, count=1):
        # Returns the number of instructions actually executed
        executed = 0

        for _ in range(count):
            if self.mode != MODE_RUNNING:
                break

            self.keypad.load(self.inputs.get_keys())

            try:
                self.cpu.cycle()
            except CPUError as err:
                self.mode = MODE_HALTED
                self.fault = err
                self.audio.enable_buzzer(False)
                raise

            executed += 1

        self.perf_counter_ops += executed
        return executed

    def tick(self):
        if self.mode != MODE_RUNNING:
            return False

        sound_active = self.timers.tick()
        self.audio.enable_buzzer(sound_active)
        return sound_active

    def flush(self):
        # Render pending screen updates.  Returns whether the display was refreshed.
        if self.framebuffer.flush():
            self.perf_counter_fps += 1
            return True

        return False

    def run_frame(self):
        self.step(self.steps_per_tick)
        self.tick()
        return self.flush()

    def handle_requests(self):
        for request in self.inputs.take_requests():
            if request == REQUEST_PAUSE:
                self.toggle_pause()
            elif request == REQUEST_RESET:
                self.reset()

    def run(self, max_frames=None):
        self.start()
        next_tick_time = perf_counter()
        frames = 0

        while max_frames is None or frames < max_frames:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.inputs.process_messages():
                return

            self.handle_requests()
            self.run_frame()
            frames += 1

            # If we've fallen behind by more than a tick, don't try to catch up
            next_tick_time = max(next_tick_time + TICK_INTERVAL, this_time)

            while perf_counter() < next_tick_time:  # Unfortunately we have to do this to get the timing right
                pass
