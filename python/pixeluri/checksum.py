# python/pixeluri/checksum.py
# Adler-32 and table-driven CRC-32 used for zlib trailers and chunk integrity
# Exists to own the process-wide CRC table and its one-time construction
# RELEVANT FILES: python/pixeluri/chunk.py, python/pixeluri/deflate.py, tests/test_checksum.py

from __future__ import annotations

import threading
from typing import Optional, Tuple

import numpy as np

from ._validate import byte_view
from .errors import InvalidInputError
from .numeric import UINT32_MASK, to_uint32

ADLER_MOD = 65521
CRC32_POLYNOMIAL = 0xEDB88320

# Bytes summed per numpy pass; keeps the weighted sum well inside int64.
_ADLER_BLOCK = 1 << 16

_crc_table: Optional[Tuple[int, ...]] = None
_crc_table_lock = threading.Lock()


def _slice(data, start: int, length: Optional[int]) -> memoryview:
    view = byte_view(data)
    start = int(start)
    if start < 0 or start > len(view):
        raise InvalidInputError(f"start {start} outside buffer of {len(view)} bytes")
    if length is None:
        length = len(view) - start
    length = int(length)
    if length < 0 or start + length > len(view):
        raise InvalidInputError(
            f"range [{start}, {start + length}) outside buffer of {len(view)} bytes"
        )
    return view[start:start + length]


def _build_crc_table() -> Tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = CRC32_POLYNOMIAL ^ (c >> 1) if c & 1 else c >> 1
        table.append(to_uint32(c))
    return tuple(table)


def crc_table() -> Tuple[int, ...]:
    """Return the shared 256-entry CRC-32 table, building it on first use."""
    global _crc_table
    table = _crc_table
    if table is None:
        with _crc_table_lock:
            if _crc_table is None:
                _crc_table = _build_crc_table()
            table = _crc_table
    return table


def crc32(data, start: int = 0, length: Optional[int] = None) -> int:
    """Reflected CRC-32 (polynomial 0xEDB88320) of ``data[start:start+length]``.

    Matches ``zlib.crc32`` and the PNG chunk CRC. ``crc32(b"") == 0``.
    """
    table = crc_table()
    c = UINT32_MASK
    for byte in _slice(data, start, length):
        c = table[(c ^ byte) & 0xFF] ^ (c >> 8)
    return to_uint32(c ^ UINT32_MASK)


def adler32(data, start: int = 0, length: Optional[int] = None) -> int:
    """Adler-32 of ``data[start:start+length]``; ``adler32(b"") == 1``.

    Sums are taken one block at a time with numpy. Within a block the running
    sum-of-sums is ``k*a + sum((k - i) * x[i])``, which equals the byte-at-a-time
    recurrence modulo 65521.
    """
    arr = np.frombuffer(_slice(data, start, length), dtype=np.uint8)
    a, b = 1, 0
    for offset in range(0, arr.size, _ADLER_BLOCK):
        block = arr[offset:offset + _ADLER_BLOCK].astype(np.int64)
        k = block.size
        weights = np.arange(k, 0, -1, dtype=np.int64)
        b = (b + k * a + int(np.dot(weights, block))) % ADLER_MOD
        a = (a + int(block.sum())) % ADLER_MOD
    return to_uint32((b << 16) | a)


__all__ = ["ADLER_MOD", "CRC32_POLYNOMIAL", "crc_table", "crc32", "adler32"]
