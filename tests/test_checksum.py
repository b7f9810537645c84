# tests/test_checksum.py
# CRC-32 / Adler-32 against published vectors and zlib
# Exists to pin chunk and zlib checksums to the reference algorithms
# RELEVANT FILES: python/pixeluri/checksum.py

import threading
import zlib

import numpy as np
import pytest

import pixeluri.checksum as checksum
from pixeluri.checksum import adler32, crc32, crc_table
from pixeluri.errors import InvalidInputError


def test_crc32_known_vectors():
    assert crc32(b"") == 0
    assert crc32(b"123456789") == 0xCBF43926
    assert crc32(b"IEND") == 0xAE426082


def test_crc32_matches_zlib_on_random_data():
    rng = np.random.default_rng(7)
    data = rng.integers(0, 256, size=4099, dtype=np.uint8).tobytes()
    assert crc32(data) == zlib.crc32(data) & 0xFFFFFFFF


def test_crc32_start_and_length_select_a_slice():
    data = b"xxIHDRpayloadyy"
    assert crc32(data, 2, 11) == zlib.crc32(b"IHDRpayload")
    assert crc32(data, 13) == zlib.crc32(b"yy")


def test_crc32_accepts_numpy_and_bytearray():
    raw = b"scanline"
    assert crc32(bytearray(raw)) == crc32(raw)
    assert crc32(np.frombuffer(raw, dtype=np.uint8)) == crc32(raw)


def test_adler32_known_vectors():
    assert adler32(b"") == 1
    assert adler32(bytes([0x61, 0x62, 0x63, 0x64, 0x65])) == 0x05C801F0
    assert adler32(b"Wikipedia") == 0x11E60398


def test_adler32_matches_zlib_across_block_boundaries():
    rng = np.random.default_rng(11)
    # Longer than one numpy block and full of 0xFF so both sums wrap many times.
    for size in (1, 5552, 65535, 65536, 65537, 200_003):
        data = rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()
        assert adler32(data) == zlib.adler32(data), size
    ones = b"\xff" * 150_000
    assert adler32(ones) == zlib.adler32(ones)


def test_adler32_slice():
    data = b"--abcde--"
    assert adler32(data, 2, 5) == 0x05C801F0
    assert adler32(data, 9, 0) == 1


@pytest.mark.parametrize("start, length", [(-1, None), (10, None), (0, 10), (3, -1)])
def test_out_of_range_slice_is_rejected(start, length):
    with pytest.raises(InvalidInputError):
        crc32(b"abcdefgh", start, length)
    with pytest.raises(InvalidInputError):
        adler32(b"abcdefgh", start, length)


def test_crc_table_shape_and_reuse():
    table = crc_table()
    assert len(table) == 256
    assert table[0] == 0
    assert table[1] == 0x77073096
    assert table[255] == 0x2D02EF8D
    assert crc_table() is table


def test_crc_table_built_once_under_concurrency(monkeypatch):
    monkeypatch.setattr(checksum, "_crc_table", None)
    calls = []
    real_build = checksum._build_crc_table

    def counting_build():
        calls.append(1)
        return real_build()

    monkeypatch.setattr(checksum, "_build_crc_table", counting_build)

    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(crc_table())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(t is seen[0] for t in seen)


def test_checksums_accept_int_sequences():
    assert crc32([]) == 0
    assert adler32([]) == 1
    assert adler32([0x61, 0x62, 0x63, 0x64, 0x65]) == 0x05C801F0
    assert crc32(list(b"IEND")) == 0xAE426082
    assert crc32((0x49, 0x45, 0x4E, 0x44), 1, 2) == zlib.crc32(b"EN")
