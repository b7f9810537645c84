# python/pixeluri/deflate.py
# IDAT payload wrappers: raw passthrough, zlib stored blocks, or zlib deflate
# Exists so a strict PNG stream can be produced without changing the default layout
# RELEVANT FILES: python/pixeluri/checksum.py, python/pixeluri/config.py, python/pixeluri/encoder.py, tests/test_deflate.py

from __future__ import annotations

import logging
import zlib

from ._validate import byte_view
from .checksum import adler32
from .numeric import be_bytes32, le_bytes16

logger = logging.getLogger(__name__)

ZLIB_HEADER_STORED = b"\x78\x01"  # CM=8, 32K window, FLEVEL=0, FCHECK so header % 31 == 0
DEFAULT_BLOCK_SIZE = 0x8000  # 32 KiB
MAX_STORED_BLOCK = 0xFFFF

COMPRESSION_NONE = "none"
COMPRESSION_STORED = "stored"
COMPRESSION_ZLIB = "zlib"
COMPRESSION_MODES = (COMPRESSION_NONE, COMPRESSION_STORED, COMPRESSION_ZLIB)


def zlib_stored(data, block_size: int = DEFAULT_BLOCK_SIZE) -> bytes:
    """Wrap ``data`` in a zlib stream made only of stored (type 00) deflate blocks.

    Every block is ``BFINAL | LEN (LE16) | NLEN (LE16) | bytes``; the stream
    ends with the big-endian Adler-32 of ``data``.
    """
    block_size = int(block_size)
    if not 1 <= block_size <= MAX_STORED_BLOCK:
        raise ValueError(f"block_size must be within [1, {MAX_STORED_BLOCK}], got {block_size}")

    view = byte_view(data)
    total = len(view)
    parts = [ZLIB_HEADER_STORED]
    offset = 0
    while True:
        size = min(block_size, total - offset)
        final = offset + size >= total
        parts.append(b"\x01" if final else b"\x00")
        parts.append(le_bytes16(size))
        parts.append(le_bytes16(~size))
        parts.append(view[offset:offset + size])
        offset += size
        if final:
            break
    parts.append(be_bytes32(adler32(view)))
    out = b"".join(parts)
    logger.debug(f"Stored {total} bytes in {len(parts) // 4} deflate block(s), {len(out)} bytes total")
    return out


def zlib_deflate(data, level: int = 6) -> bytes:
    level = int(level)
    if not 0 <= level <= 9:
        raise ValueError(f"compression level must be within [0, 9], got {level}")
    return zlib.compress(byte_view(data), level)


def wrap_idat(data, compression: str = COMPRESSION_NONE, *, block_size: int = DEFAULT_BLOCK_SIZE, level: int = 6) -> bytes:
    """Turn filtered scanlines into the IDAT payload for ``compression``.

    ``"none"`` stores the scanlines as they are, which is not a zlib stream.
    """
    if compression == COMPRESSION_NONE:
        return bytes(byte_view(data))
    if compression == COMPRESSION_STORED:
        return zlib_stored(data, block_size)
    if compression == COMPRESSION_ZLIB:
        return zlib_deflate(data, level)
    raise ValueError(f"Unknown compression mode: {compression!r}")


__all__ = [
    "COMPRESSION_MODES",
    "COMPRESSION_NONE",
    "COMPRESSION_STORED",
    "COMPRESSION_ZLIB",
    "DEFAULT_BLOCK_SIZE",
    "zlib_stored",
    "zlib_deflate",
    "wrap_idat",
]
