#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Returns the process exit status: 0 if the run ended normally, or 1 if the ROM
couldn't be loaded or the program crashed the emulated machine.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .debugger import Debugger
from .hostio import Loader, ProgramLoadError
from .machine import Machine
from .ram import RAMError
from .scheduler import Scheduler
from .stack import StackError

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def select_plugins(opt_renderer, mute_audio):
    # Returns the (Inputs, Renderer, Audio) classes.  If necessary, try PyGame first, then Curses.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError("PyGame does not appear to be installed.")
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer
            from .audio.a_null import Audio
            return Inputs, Renderer, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")

            raise StartupError("Curses (or Windows-Curses) does not appear to be installed.")

        from .inputs.i_curses import Inputs
        from .renderers.r_curses import Renderer

        # Terminals can handle fixed-length beeps, but only if asked for
        if mute_audio or mute_audio is None:
            from .audio.a_null import Audio
        else:
            from .audio.a_curses import Audio

        return Inputs, Renderer, Audio

    # pylint: disable=import-outside-toplevel
    from .inputs.i_null import Inputs
    from .renderers.r_null import Renderer
    from .audio.a_null import Audio
    return Inputs, Renderer, Audio


def main(args):
    logger.info("".join((APP_INTRO, APP_COPYRIGHT)))

    # Read the ROM before anything else, so a bad file never opens a window or starts the CPU
    try:
        program = Loader().load_binary(args["filename"])
    except ProgramLoadError as err:
        logger.error("ProgramLoadError: %s", err)
        return 1

    logger.info("Program loaded: %s (%d bytes)", args["filename"], len(program))
    Inputs, Renderer, Audio = select_plugins(args["renderer"], args["mute"])

    # Set up a new rendering system, then the machine that draws to it
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"]
    )
    audio = None
    inputs = None

    try:
        machine = Machine(renderer)
        machine.load_font()
        machine.load_program(program)

        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = Inputs(args["keymap"], renderer)
        audio = Audio()

        debugger = Debugger()
        debugger.set_live(args["debug"])
        cpu = CPU(machine, inputs, debugger)
        scheduler = Scheduler(
            cpu, inputs, audio, clock_speed=args["clock_speed"], exit_on_halt=args["exit_on_halt"]
        )

        try:
            scheduler.run()
        except (StackError, RAMError) as err:
            logger.error(
                "Emulation halted.  %s: %s\n%s", type(err).__name__, err,
                debugger.debug(cpu, "(crashed)", verbose=True)
            )
            return 1
    finally:
        # Shut down the host framework.  __del__ cannot be relied upon when using PyPy
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()

    return 0
