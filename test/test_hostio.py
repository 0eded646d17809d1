#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import unittest
from os import path
from unittest import mock
from tempfile import TemporaryDirectory
from pcrom.constants import PERSIST_SKIPPED, PERSIST_WRITTEN
from pcrom.hostio import (
    BufferTooSmall, ByteSource, FileSource, HashMismatch, IOFailure, Loader, ResourceSource, SourceNotFound,
    fill_buffer
)

STUB_BYTES = b"\xEA\x5B\xE0\x00\xF0" b"01/01/17" b"\x00\xFC\x00"
ABC_MD5 = "900150983CD24FB0D6963F7D28E17F72"


class TestLoader(unittest.TestCase):
    def setUp(self):
        temp_dir = TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.rom_dir = temp_dir.name
        self.loader = Loader(rom_dir=self.rom_dir)

    def _write_file(self, filename, data):
        filename = path.join(self.rom_dir, filename)

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def test_loader_fill_buffer_pads(self):
        buffer = bytearray(5)
        fill_buffer(buffer, b"\x01\x02")
        self.assertEqual("0102ffffff", buffer.hex())

    def test_loader_fill_buffer_truncates(self):
        buffer = bytearray(2)
        fill_buffer(buffer, b"\x01\x02\x03")
        self.assertEqual("0102", buffer.hex())

    def test_loader_file_exact_size(self):
        filename = self._write_file("exact.bin", b"\x00\x11\x22\x33")
        buffer = bytearray(4)
        self.loader.fill_from_file(buffer, filename)
        self.assertEqual("00112233", buffer.hex())

    def test_loader_file_short_source(self):
        filename = self._write_file("short.bin", b"\xAA\xBB")
        buffer = bytearray(6)
        self.loader.fill_from_file(buffer, filename)
        self.assertEqual("aabbffffffff", buffer.hex())

    def test_loader_file_hash_match(self):
        filename = self._write_file("abc.bin", b"abc")
        buffer = bytearray(4)
        self.loader.fill_from_file(buffer, filename, ABC_MD5)
        self.assertEqual(b"abc\xFF", bytes(buffer))

    def test_loader_file_hash_mismatch(self):
        filename = self._write_file("abc.bin", b"abc")
        buffer = bytearray(b"\x01\x02\x03\x04")
        self.assertRaises(HashMismatch, self.loader.fill_from_file, buffer, filename, "0" * 32)
        self.assertEqual("01020304", buffer.hex())  # Untouched

    def test_loader_file_hash_case_sensitive(self):
        filename = self._write_file("abc.bin", b"abc")
        self.assertRaises(HashMismatch, self.loader.fill_from_file, bytearray(4), filename, ABC_MD5.lower())

    def test_loader_file_too_large(self):
        filename = self._write_file("large.bin", b"\x00" * 5)
        buffer = bytearray(b"\x01\x02\x03\x04")
        self.assertRaises(BufferTooSmall, self.loader.fill_from_file, buffer, filename)
        self.assertEqual("01020304", buffer.hex())

    def test_loader_file_missing(self):
        self.assertRaises(SourceNotFound, self.loader.fill_from_file, bytearray(4), path.join(self.rom_dir, "NoFile"))

    def test_loader_file_unreadable(self):
        # Hashing a directory fails with something other than a missing file
        self.assertRaises(IOFailure, self.loader.fill_from_file, bytearray(4), self.rom_dir, ABC_MD5)

    def test_loader_file_directory(self):
        # Without a hash, the directory must not be mistaken for an oversized image
        self.assertRaises(IOFailure, self.loader.fill_from_file, bytearray(1), self.rom_dir)
        self.assertRaises(IOFailure, self.loader.fill_from_file, bytearray(0x100000), self.rom_dir)

    def test_loader_file_parent_not_directory(self):
        filename = path.join(self._write_file("abc.bin", b"abc"), "vga.bin")
        self.assertRaises(SourceNotFound, self.loader.fill_from_file, bytearray(4), filename)
        self.assertRaises(SourceNotFound, self.loader.hash_file, filename)

    def test_loader_resource_present(self):
        buffer = bytearray(20)
        self.loader.fill_from_bundled_resource(buffer, "roms/reset_stub.bin")
        self.assertEqual(STUB_BYTES + b"\xFF" * 4, bytes(buffer))

    def test_loader_resource_truncated(self):
        # Bundled images are trusted, so a small buffer just takes what fits
        buffer = bytearray(5)
        self.loader.fill_from_bundled_resource(buffer, "roms/reset_stub.bin")
        self.assertEqual("ea5be000f0", buffer.hex())

    def test_loader_resource_missing(self):
        buffer = bytearray(b"\x01")
        self.assertRaises(SourceNotFound, self.loader.fill_from_bundled_resource, buffer, "roms/NoFile.bin")
        self.assertEqual("01", buffer.hex())

    def test_loader_fill_prefers_resource(self):
        # Same name in both places.  The file's hash would fail, but it is never looked at
        self._write_file("reset_stub.bin", b"\x00" * 16)
        buffer = bytearray(16)
        source = self.loader.fill(buffer, "reset_stub.bin", "0" * 32)
        self.assertIsInstance(source, ResourceSource)
        self.assertEqual(STUB_BYTES, bytes(buffer))

    def test_loader_fill_falls_back_to_file(self):
        self._write_file("option.bin", b"\x55\xAA")
        buffer = bytearray(3)
        source = self.loader.fill(buffer, "option.bin")
        self.assertIsInstance(source, FileSource)
        self.assertEqual("file", source.label)
        self.assertEqual("55aaff", buffer.hex())

    def test_loader_fill_missing_everywhere(self):
        self.assertRaises(SourceNotFound, self.loader.fill, bytearray(4), "NoFile.bin")

    def test_loader_fill_bad_file_not_masked(self):
        self._write_file("abc.bin", b"abc")
        self.assertRaises(HashMismatch, self.loader.fill, bytearray(4), "abc.bin", "0" * 32)

    def test_loader_custom_sources(self):
        loader = Loader(sources=[ByteSource(), FileSource(self.rom_dir)])
        self._write_file("abc.bin", b"abc")
        buffer = bytearray(3)
        self.assertIsInstance(loader.fill(buffer, "abc.bin"), FileSource)
        self.assertRaises(SourceNotFound, Loader(sources=[ByteSource()]).fill, buffer, "abc.bin")

    def test_loader_persist_round_trip(self):
        original = bytearray(STUB_BYTES + b"\xFF" * 16)
        filename = path.join(self.rom_dir, "copy.bin")
        self.assertEqual(PERSIST_WRITTEN, self.loader.persist(original, filename))
        reloaded = bytearray(len(original))
        self.loader.fill_from_file(reloaded, filename)
        self.assertEqual(original, reloaded)

    def test_loader_persist_overwrites_writable(self):
        filename = self._write_file("copy.bin", b"\x00\x00")
        self.assertEqual(PERSIST_WRITTEN, self.loader.persist(b"\x01\x02\x03", filename))

        with open(filename, "rb") as f:
            self.assertEqual(b"\x01\x02\x03", f.read())

    def test_loader_persist_skips_protected(self):
        filename = self._write_file("protected.bin", b"\x00\x00")
        os.chmod(filename, 0o444)
        self.addCleanup(os.chmod, filename, 0o644)
        self.assertEqual(PERSIST_SKIPPED, self.loader.persist(b"\x01\x02", filename))

        with open(filename, "rb") as f:
            self.assertEqual(b"\x00\x00", f.read())

    def test_loader_persist_skips_inaccessible(self):
        # Writable by its owner, but not by this process
        filename = self._write_file("shared.bin", b"\x00\x00")

        with mock.patch("pcrom.hostio.os.access", return_value=False):
            self.assertEqual(PERSIST_SKIPPED, self.loader.persist(b"\x01\x02", filename))

        with open(filename, "rb") as f:
            self.assertEqual(b"\x00\x00", f.read())

    def test_loader_persist_bad_path(self):
        filename = path.join(self.rom_dir, "NoDir", "copy.bin")
        self.assertRaises(IOFailure, self.loader.persist, b"\x00", filename)

    def test_loader_hash_file(self):
        filename = self._write_file("abc.bin", b"abc")
        self.assertEqual(ABC_MD5, self.loader.hash_file(filename))
        self.assertRaises(SourceNotFound, self.loader.hash_file, path.join(self.rom_dir, "NoFile"))
