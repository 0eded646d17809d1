#!/usr/bin/env python3

"""
ROM Emulator

Holds one chip's worth of read-only memory, such as the system BIOS or a video
BIOS, at a fixed base address.

The image is loaded once, when the ROM is created, and can never be written to
afterwards.  Bundled images are tried first, then the ROM directory.  If the
image cannot be found anywhere, the ROM is either fatal (BIOS) or simply left
blank (option ROMs), in which case every byte reads as 0xFF like an empty
socket.

Reads take an offset relative to the base address.  Offsets are NOT checked
against the ROM size -- the memory map only routes addresses inside the ranges
returned by get_mapped_ranges(), so out-of-range reads are the caller's bug.
Multi-byte reads are little-endian.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FILL_BYTE
from .hostio import Loader, SourceNotFound
from .reporter import Reporter


class ROMError(Exception):
    pass


class MissingMandatoryImage(ROMError):
    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class MissingOptionalImage(ROMError):
    # Reported as a warning, never raised
    pass


class ROM:
    def __init__(self, resource_name, expected_hash, base_address, length, optional=False, loader=None,
                 reporter=None):

        if base_address < 0:
            raise ROMError("Base address must not be negative")

        if length <= 0:
            raise ROMError("ROM length must be positive")

        self.name = resource_name
        self.expected_hash = expected_hash
        self.base_address = base_address
        self.length = length
        self.optional = optional
        self.loader = Loader() if loader is None else loader
        self.reporter = Reporter() if reporter is None else reporter
        self.source = None

        buffer = bytearray((FILL_BYTE,)) * length

        try:
            source = self.loader.fill(buffer, resource_name, expected_hash)
        except SourceNotFound as err:
            if not self.optional:
                raise MissingMandatoryImage(
                    "Error while reading the ROM image {}.  {}".format(resource_name, err), err
                ) from err

            self.reporter.warn(MissingOptionalImage("Optional ROM not found: {}".format(resource_name)))
        else:
            self.source = source.label
            self.reporter.output("Loaded from {}: {}".format(source.label, resource_name))

        # Frozen from here on
        self.data = bytes(buffer)

    def get_mapped_ranges(self):
        return [(self.base_address, self.length, 0x0000)]

    def get_data(self):
        return self.data

    def read_byte(self, offset):
        return self.data[offset]

    def read_word(self, offset):
        data = self.data
        return data[offset] | (data[offset + 1] << 8)

    def read_dword(self, offset):
        data = self.data
        return data[offset] | (data[offset + 1] << 8) | (data[offset + 2] << 16) | (data[offset + 3] << 24)
