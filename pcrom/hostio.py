#!/usr/bin/env python3

"""
Host I/O Functionality

Fills fixed-size buffers with ROM images, and writes them back out again.

Images can come from two places, tried in a fixed order:
    * Resources - Images bundled inside the package itself.  These ship with
      the emulator, so they are trusted and never hash-checked
    * Files     - Images the user has dropped into the ROM directory.  If an
      MD5 hash is known for the image, the file must match it exactly

Either way, the buffer is filled from the start of the image, and anything
past the end of the image is set to 0xFF, as on an erased EPROM.  A missing
image is not really an error here -- it just means trying the next source --
so it has its own exception to make it easy to tell apart from a bad one.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import stat
from hashlib import md5
from importlib import resources
from os import path
from .constants import (
    BUFFER_SIZE, FILL_BYTE, PERSIST_SKIPPED, PERSIST_WRITTEN, ROM_FILE_DIR, ROM_RESOURCE_PACKAGE, ROM_RESOURCE_PREFIX
)


class LoaderError(Exception):
    pass


class SourceNotFound(LoaderError):
    pass


class HashMismatch(LoaderError):
    pass


class BufferTooSmall(LoaderError):
    pass


class IOFailure(LoaderError):
    pass


def fill_buffer(buffer, data):
    # Copy as much as fits, then pad the rest out with the fill byte.  The buffer itself is never resized
    buffer_size = len(buffer)
    data_size = min(len(data), buffer_size)
    buffer[:data_size] = data[:data_size]
    buffer[data_size:] = bytes((FILL_BYTE,)) * (buffer_size - data_size)


def md5_hash(filename):
    # Uppercase to match the hashes published alongside BIOS dumps
    digest = md5()

    with open(filename, "rb") as f:
        for chunk in iter(lambda: f.read(BUFFER_SIZE), b""):
            digest.update(chunk)

    return digest.hexdigest().upper()


def read_resource_into(buffer, package, resource_path):
    resource = resources.files(package)

    for part in resource_path.split("/"):
        resource = resource.joinpath(part)

    if not resource.is_file():
        raise SourceNotFound("Resource not found: {}".format(resource_path))

    try:
        data = resource.read_bytes()
    except OSError as err:
        raise IOFailure("Unable to read resource {}".format(resource_path)) from err

    fill_buffer(buffer, data)


def read_file_into(buffer, filename, expected_hash=None):
    try:
        if expected_hash is not None:
            file_hash = md5_hash(filename)

            if file_hash != expected_hash:
                raise HashMismatch(
                    "The MD5 hash for the file {} ({}) doesn't match the expected value of {}".format(
                        filename, file_hash, expected_hash
                    )
                )

        if path.isdir(filename):
            raise IsADirectoryError("Is a directory: {}".format(filename))

        if path.getsize(filename) > len(buffer):
            raise BufferTooSmall("The destination buffer is too small to fit the file {}".format(filename))

        with open(filename, "rb") as f:
            data = f.read(len(buffer))
    except (FileNotFoundError, NotADirectoryError):
        raise SourceNotFound("File not found: {}".format(filename)) from None
    except OSError as err:
        raise IOFailure("Unable to read file {}".format(filename)) from err

    fill_buffer(buffer, data)


class ByteSource:
    # Base source.  Finds nothing, so a Loader with only this will always fall through
    label = "nowhere"

    def locate(self, name):
        return name

    def fill(self, buffer, name, expected_hash=None):  # pylint: disable=unused-argument
        raise SourceNotFound("No source for {}".format(name))


class ResourceSource(ByteSource):
    label = "resources"

    def __init__(self, package=ROM_RESOURCE_PACKAGE, prefix=ROM_RESOURCE_PREFIX):
        self.package = package
        self.prefix = prefix

    def locate(self, name):
        return "{}/{}".format(self.prefix, name) if self.prefix else name

    def fill(self, buffer, name, expected_hash=None):
        # Bundled images are trusted, so the hash is ignored
        read_resource_into(buffer, self.package, self.locate(name))


class FileSource(ByteSource):
    label = "file"

    def __init__(self, directory=ROM_FILE_DIR):
        self.directory = directory

    def locate(self, name):
        return path.join(self.directory, name)

    def fill(self, buffer, name, expected_hash=None):
        read_file_into(buffer, self.locate(name), expected_hash)


class Loader:
    def __init__(self, resource_package=ROM_RESOURCE_PACKAGE, resource_prefix=ROM_RESOURCE_PREFIX,
                 rom_dir=ROM_FILE_DIR, sources=None):

        self.resource_package = resource_package

        if sources is None:
            sources = [ResourceSource(resource_package, resource_prefix), FileSource(rom_dir)]

        self.sources = sources

    def fill_from_bundled_resource(self, buffer, resource_name):
        read_resource_into(buffer, self.resource_package, resource_name)

    def fill_from_file(self, buffer, filename, expected_hash=None):
        read_file_into(buffer, filename, expected_hash)

    def fill(self, buffer, name, expected_hash=None):
        # Only absence moves on to the next source.  A bad image must never be hidden behind a later one
        for source in self.sources:
            try:
                source.fill(buffer, name, expected_hash)
            except SourceNotFound:
                continue

            return source

        raise SourceNotFound(
            "{} not found in any of: {}".format(name, ", ".join(source.locate(name) for source in self.sources))
        )

    def persist(self, buffer, filename):
        # The mode bit is checked as well, so root still honours a read-only file
        if path.exists(filename) and (
            not os.stat(filename).st_mode & stat.S_IWRITE or not os.access(filename, os.W_OK)
        ):
            return PERSIST_SKIPPED

        try:
            with open(filename, "wb") as f:
                f.write(bytes(buffer))
        except OSError as err:
            raise IOFailure("Unable to write file {}".format(filename)) from err

        return PERSIST_WRITTEN

    def hash_file(self, filename):
        try:
            return md5_hash(filename)
        except (FileNotFoundError, NotADirectoryError):
            raise SourceNotFound("File not found: {}".format(filename)) from None
        except OSError as err:
            raise IOFailure("Unable to read file {}".format(filename)) from err
