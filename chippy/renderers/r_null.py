#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or want to run ROMs headless.  It keeps its own copy of the lit
pixels, so the last frame can still be inspected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = ""
        self.frames_presented = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height
        self.pixels = [[False] * width for _ in range(height)]

    def set_pixel(self, x, y, lit):
        self.pixels[y][x] = lit

    def refresh_display(self, content_changed=False):
        if content_changed:
            self.frames_presented += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
