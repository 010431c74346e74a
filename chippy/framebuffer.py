#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) when the scheduler refreshes it at 60Hz.  This avoids relying
on rendering frameworks being fast enough to be called for every sprite.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and clearing is the only
other operation.

The sprite's starting corner wraps around the screen edges, but any part of
the sprite that then runs off the right or bottom edge is trimmed.

Collisions (where any pixel was set, but was unset by an XOR) are reported to
the caller.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.renderer = renderer
        self.vid_width = 0
        self.vid_height = 0
        self.vid_size = 0
        self.vram = RAM()
        self.dirty = False
        self.report_perf()
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = self.vid_width * self.vid_height
        self.vram.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)
        self.dirty = True

    def clear(self):
        self.vram.clear()

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, False)

        self.dirty = True

    def get_pixel(self, x, y):
        return bool(self.vram.read(y * self.vid_width + x))

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel was trimmed
        if x < 0 or y < 0 or x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        new_pixel = pixel ^ 1
        self.vram.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, bool(new_pixel))

        return pixel != 0

    def draw_sprite(self, x, y, sprite):
        # Only the origin wraps.  Everything past the edges is trimmed by xor_pixel.
        vx_pos = x % self.vid_width
        vy_pos = y % self.vid_height
        collided = False

        for row, spr_data in enumerate(sprite):
            scr_y = vy_pos + row

            if scr_y >= self.vid_height:
                break

            for col in range(8):
                if spr_data & (0x80 >> col):
                    if self.xor_pixel(vx_pos + col, scr_y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.dirty = True

        return collided

    def snapshot(self):
        # Rows of booleans, for renderers or tests that want the whole screen at once
        width = self.vid_width
        mem = self.vram.mem
        return [[bool(mem[y * width + x]) for x in range(width)] for y in range(self.vid_height)]

    def is_dirty(self):
        return self.dirty

    def refresh_display(self):
        # Tells the renderer whether anything has been drawn since the last refresh
        self.renderer.refresh_display(self.dirty)
        self.dirty = False

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
