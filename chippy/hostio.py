#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host for later writing into RAM.  ROMs
are flat binaries with no header, so they are handed over verbatim.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MAX_PROGRAM_SIZE


class ProgramLoadError(Exception):
    pass


class Loader:
    def load_binary(self, filename, max_size=MAX_PROGRAM_SIZE):
        try:
            with open(filename, "rb") as f:
                # Read one byte past the limit so oversized files can be spotted without loading all of them
                data = f.read(max_size + 1)
        except OSError as err:
            raise ProgramLoadError("Unable to read ROM '{}': {}".format(filename, err.strerror or err)) from None

        if len(data) > max_size:
            raise ProgramLoadError("ROM '{}' is too large (limit is {} bytes)".format(filename, max_size))

        return data
