#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PCROM Image Loader"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Erased EPROM state.  Also what an unmapped data bus floats to
FILL_BYTE = 0xFF

# Where images are looked for, in priority order.  The bundled store is trusted, so hashes are only checked on files
ROM_RESOURCE_PACKAGE = "pcrom"
ROM_RESOURCE_PREFIX = "roms"
ROM_FILE_DIR = "data/roms"

# Chunk size used when hashing and copying files
BUFFER_SIZE = 32767

# Outcomes of writing an image back out
PERSIST_WRITTEN = "written"
PERSIST_SKIPPED = "skipped"  # Destination exists and is write-protected, so it is left alone

# Pointer device buttons
BUTTON_LEFT = 0
BUTTON_MIDDLE = 1
BUTTON_RIGHT = 2
NUM_BUTTONS = 3

# Bytes shown per line in hex dumps
DUMP_WIDTH = 16
