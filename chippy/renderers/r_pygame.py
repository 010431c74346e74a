#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Used by a Framebuffer object to draw the screen.  This draws graphics onto an
SDL window surface via PyGame.  The pixels are kept in an offscreen RGB buffer
at the emulated resolution, and then stretched (in the correct aspect ratio
using 'Nearest Neighbour' translation) to fit the window itself.  This means we
don't have to draw the same pixel multiple times.

Lit pixels are drawn in the foreground colour, and unlit pixels in the
background colour.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = "222222,DDDDDD"  # Background, foreground


def parse_palette(palette):
    # Turns "RRGGBB,RRGGBB" into two 3-byte colours
    palette_split = palette.split(",")

    if len(palette_split) != 2:
        raise RendererError("Palette must define exactly 2 colours (background and foreground).")

    colours = []

    for colour in palette_split:
        if len(colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colours.append(bytes.fromhex(colour))
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return colours


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied, or set to default

        self.rgb_map = parse_palette(DEFAULT_PALETTE if pygame_palette is None else pygame_palette)
        self.rgb_buffer = None
        pygame.display.init()
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        super().__init__(scale)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(self.rgb_map[0] * total_pixels))  # 24-bit, background filled

        # Call superclass method so display size is known on the next refresh
        super().set_resolution(width, height)

        # Force a refresh now, in case nothing else is drawn afterwards
        self.refresh_display(True)

    def set_pixel(self, x, y, lit):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[1 if lit else 0]
        super().set_pixel(x, y, lit)

    def refresh_display(self, content_changed=False):
        if content_changed and self.width and self.height:
            # Blit the bytearray straight to the surface, rather than very frequent PixelArray updates
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display(content_changed)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
