#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from pcrom import main
from pcrom.constants import ROM_FILE_DIR


def parse_int(value):
    # Accepts decimal, or hex with a 0x prefix, as used for addresses
    return int(value, 0)


def parse_args():
    parser = ArgumentParser()
    parser.add_argument("name", help="ROM image to load, e.g. bios.bin")
    parser.add_argument(
        "-b", "--base", type=parse_int, default=0xF0000,
        help="set the base address the ROM is mapped at (default 0xF0000)"
    )
    parser.add_argument(
        "-l", "--length", type=parse_int, default=0x10000,
        help="set the ROM size in bytes.  Unused space reads as 0xFF (default 0x10000)"
    )
    parser.add_argument(
        "-m", "--md5",
        help="expected MD5 hash of the image file, in uppercase hex.  Bundled images are never checked"
    )
    parser.add_argument(
        "-o", "--optional", action="store_true", default=False,
        help="leave the ROM blank instead of failing if the image cannot be found"
    )
    parser.add_argument(
        "-r", "--rom_dir", default=ROM_FILE_DIR,
        help="set the directory searched for images not bundled with the package (default {})".format(ROM_FILE_DIR)
    )
    parser.add_argument(
        "-d", "--dump", type=parse_int, default=0,
        help="print a hex listing of the first DUMP bytes of the ROM"
    )
    parser.add_argument(
        "-p", "--persist",
        help="write the loaded ROM out to a file.  Existing write-protected files are left alone"
    )
    parser.add_argument(
        "--hash", action="store_true", default=False,
        help="print the MD5 hash of the image file in the ROM directory, then exit"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=False,
        help="don't report where the image was loaded from"
    )
    return parser.parse_args()  # Can call sys.exit(2) if args are incorrect


if __name__ == "__main__":
    args = vars(parse_args())
    main(args)
