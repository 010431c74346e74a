#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import logging
import sys
from argparse import ArgumentParser
from chippy import main, StartupError
from chippy.constants import DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from chippy.inputs.i_null import InputsError
from chippy.renderers.r_null import RendererError


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the terminal bell used as the buzzer in Curses mode.  0 = unmuted, 1 = muted (default)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-x", "--exit_on_halt", action="store_true", default=False,
        help="quit as soon as the program counter runs past the end of the ROM, rather than waiting for ESC"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 000000,33FF66"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False,
        help="show diagnostic messages as well as warnings and errors"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run(argv=None):
    args = vars(parse_args(argv))
    logging.basicConfig(
        level=logging.DEBUG if args["verbose"] else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    # It is possible to start the interpreter from a GUI by calling main with a dictionary
    try:
        return main(args)
    except (StartupError, InputsError, RendererError) as err:
        logging.getLogger("chippy").error("%s: %s", type(err).__name__, err)
        return 1


if __name__ == "__main__":
    sys.exit(run())
