#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and only drawn to the actual display (the host
rendering system) when the machine flushes, normally once per 60Hz tick.

Programs for this system cannot write directly into video RAM.  Sprites are
drawn with XOR against a single monochrome plane, so drawing the same sprite
twice in the same place puts the screen back as it was.  A collision is when
a lit pixel is switched off by the XOR.

Sprite positions wrap around the screen, but anything that then runs off the
right or bottom edge is clipped.

The 'dirty' flag is raised by any change, and lowered again by flush().
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.renderer = renderer
        self.plane = RAM()
        self.dirty = False
        self.resize_vid(vid_width, vid_height)
        self.report_perf()

    def resize_vid(self, vid_width, vid_height):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display size must be positive, not {}x{}".format(vid_width, vid_height))

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)  # Update screen resolution
        self.dirty = True

    def clear(self):
        self.plane.clear()

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, False)

        self.dirty = True

    def xor_pixel(self, x, y):
        # Returns True on collision, False if not, or None if the pixel is off-screen (clipped)
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.plane.read(vram_loc)
        collision = (pixel != 0)
        new_pixel = pixel ^ 0xFF
        self.plane.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, new_pixel != 0)
        self.dirty = True

        return collision

    def draw_sprite(self, x_pos, y_pos, rows):
        # Draw 8-pixel wide rows of sprite data.  The start position wraps, the rest is clipped.
        x_pos %= self.vid_width
        y_pos %= self.vid_height
        collided = False

        for y, spr_data in enumerate(rows):
            scr_y = y_pos + y

            if scr_y >= self.vid_height:
                break

            for x in range(8):
                if spr_data & (0x80 >> x):
                    if self.xor_pixel(x_pos + x, scr_y):
                        # Don't stop drawing.  Just remember a pixel was erased.
                        collided = True

        self.dirty = True
        return collided

    def get_pixel(self, x, y):
        return self.plane.read(y * self.vid_width + x) != 0

    def get_grid(self):
        # Row-major copy of the screen as booleans, for the presentation side and for tests
        mem = self.plane.mem
        width = self.vid_width
        return [[mem[row * width + x] != 0 for x in range(width)] for row in range(self.vid_height)]

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def flush(self):
        # Push pending changes to the display.  Returns whether anything was drawn.
        if not self.dirty:
            return False

        self.renderer.refresh_display(True)
        self.dirty = False
        return True

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
