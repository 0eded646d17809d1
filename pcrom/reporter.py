#!/usr/bin/env python3

"""
Load Reporter

Prints a line whenever a ROM image is loaded, saying which source it came from.
Live output can be switched off (the launcher's quiet mode), but warnings about
optional images that could not be found are always written to stderr, as they
usually mean a misplaced file.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys


class Reporter:
    def __init__(self, live=True, tag="ROM"):
        self.live = live
        self.tag = tag

    def format(self, message):
        return "[{}] {}".format(self.tag, message)

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, message):
        if self.live:
            print(self.format(message))

    def warn(self, error):
        print(self.format(error), file=sys.stderr)
