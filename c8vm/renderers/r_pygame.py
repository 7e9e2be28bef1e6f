#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Used by a Framebuffer object to draw the screen.  This draws graphics onto an
SDL window surface via PyGame.  The surface is allocated at the emulated
screen size, and then the contents are stretched ('Nearest Neighbour') by the
scale factor to fit the window itself.  This means we don't have to draw the
same pixel multiple times.

Lit pixels are drawn in the foreground colour, and unlit pixels in the
background colour.  Both are given as 6-digit RGB hex, or 8-digit RGBA hex
(the alpha is ignored).
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME, VID_WIDTH, VID_HEIGHT

DEFAULT_SCALE = 20
DEFAULT_FG_COLOUR = "FFFFFF"
DEFAULT_BG_COLOUR = "000000"


def parse_colour(colour):
    if len(colour) not in (6, 8):
        raise RendererError("Colours must be 6 (RGB) or 8 (RGBA) hex digits long, not '{}'.".format(colour))

    try:
        value = int(colour, 16)
    except ValueError:
        raise RendererError("Invalid colour '{}' defined.".format(colour)) from None

    if len(colour) == 8:
        value >>= 8  # Drop the alpha channel

    # Split compound RGB values for faster byte-based lookup later
    return memoryview(bytearray([value >> 16, (value >> 8) & 0xFF, value & 0xFF]))


class Renderer(RendererBase):
    def __init__(self, scale=None, fg_colour=None, bg_colour=None, **kwargs):
        if scale is None:
            scale = DEFAULT_SCALE  # Default window scale factor if not supplied, or set to default

        if scale <= 0:
            raise RendererError("The scale factor must be at least 1.")

        self.rgb_lit = parse_colour(DEFAULT_FG_COLOUR if fg_colour is None else fg_colour)
        self.rgb_unlit = parse_colour(DEFAULT_BG_COLOUR if bg_colour is None else bg_colour)
        self.rgb_buffer = None

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (VID_WIDTH * scale, VID_HEIGHT * scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        super().__init__(scale)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit

        # Call superclass method so display size is known when setting pixels and on the next refresh
        super().set_resolution(width, height)

        # Fill the offscreen RGB buffer with the background colour
        for y in range(height):
            for x in range(width):
                self.set_pixel(x, y, False)

        # Force a refresh now, in case nothing else is drawn afterwards
        self.refresh_display(True)

    def set_pixel(self, x, y, lit):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_lit if lit else self.rgb_unlit

    def refresh_display(self, content_changed=False):
        if content_changed and self.width and self.height:
            # Blit the bytearray straight to a surface, then stretch it over the window
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display(content_changed)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
