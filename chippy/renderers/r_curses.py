#!/usr/bin/env python3

"""
Curses Renderer Plugin

Used by a Framebuffer object to draw the screen.  This draws graphics in a
standard Linux-style TTY Terminal, the Windows Command Prompt, or PowerShell.

Each lit pixel is drawn as inverted spaces, 'scale' characters wide.  The top
line of the terminal is used for the title bar.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.refresh_needed = True
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()

        try:
            curses.curs_set(self.cursor_mode)
        except curses.error:
            # Not every terminal can hide the cursor
            pass

        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  One more row is needed for the title.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        self.refresh_needed = True
        super().set_resolution(width, height)

    def set_pixel(self, x, y, lit):
        self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if lit else curses.A_NORMAL)
        super().set_pixel(x, y, lit)

    def refresh_display(self, content_changed=False):
        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if content_changed or self.refresh_needed:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
                self.refresh_needed = False
        else:
            # Screen resolution changed, redraw everything on the next refresh
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

        super().refresh_display(content_changed)

    def set_title(self, title):
        if self.pad:
            line_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:line_width].ljust(line_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        try:
            curses.curs_set(1)
        except curses.error:
            pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
