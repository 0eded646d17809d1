#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to load a ROM image, replacing args with a dictionary
of options.  This can be done via the Terminal or from another program.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from os import path
from .constants import APP_INTRO, APP_COPYRIGHT, DUMP_WIDTH, PERSIST_SKIPPED, ROM_FILE_DIR
from .hostio import Loader
from .reporter import Reporter
from .rom import ROM


class StartupError(Exception):
    pass


def hex_dump(rom, size):
    # Addresses are shown as the bus sees them, not as offsets
    size = min(size, rom.length)
    lines = []

    for offset in range(0, size, DUMP_WIDTH):
        line_bytes = [rom.read_byte(i) for i in range(offset, min(offset + DUMP_WIDTH, size))]
        lines.append("{:05X}: {}".format(rom.base_address + offset, " ".join("{:02X}".format(b) for b in line_bytes)))

    return lines


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    rom_dir = args["rom_dir"] or ROM_FILE_DIR
    loader = Loader(rom_dir=rom_dir)

    if args["hash"]:
        # Useful for finding the value to pass in with --md5
        print(loader.hash_file(path.join(rom_dir, args["name"])))
        return None

    if args["length"] is None:
        raise StartupError("A ROM length is required")

    dump_size = args["dump"] or 0

    if dump_size < 0:
        raise StartupError("Dump size must not be negative")

    reporter = Reporter(live=not args["quiet"])

    rom = ROM(
        args["name"],
        args["md5"],
        args["base"] or 0,
        args["length"],
        optional=bool(args["optional"]),
        loader=loader,
        reporter=reporter
    )

    for line in hex_dump(rom, dump_size):
        print(line)

    if args["persist"]:
        if loader.persist(rom.get_data(), args["persist"]) == PERSIST_SKIPPED:
            reporter.output("Not overwriting write-protected file: {}".format(args["persist"]))
        else:
            reporter.output("Written to file: {}".format(args["persist"]))

    return rom
