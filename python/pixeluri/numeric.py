# python/pixeluri/numeric.py
# Unsigned 32-bit normalization and fixed-width byte decomposition
# Exists to keep every header, length and CRC field encoded the same way
# RELEVANT FILES: python/pixeluri/chunk.py, python/pixeluri/deflate.py, tests/test_numeric.py

from __future__ import annotations

import struct

UINT32_MASK = 0xFFFFFFFF
UINT16_MASK = 0xFFFF

_BE32 = struct.Struct(">I")
_LE16 = struct.Struct("<H")


def to_uint32(n: int) -> int:
    """Reinterpret ``n`` as the unsigned 32-bit value with the same low bits.

    ``to_uint32(-1) == 0xFFFFFFFF``; values wider than 32 bits are truncated.
    """
    return int(n) & UINT32_MASK


def be_bytes32(n: int) -> bytes:
    """Four bytes of ``n`` truncated to 32 bits, most significant first."""
    return _BE32.pack(to_uint32(n))


def le_bytes16(n: int) -> bytes:
    """Two least significant bytes of ``n``, least significant first."""
    return _LE16.pack(int(n) & UINT16_MASK)


def read_be32(buf, offset: int = 0) -> int:
    return _BE32.unpack_from(buf, offset)[0]


__all__ = ["UINT32_MASK", "to_uint32", "be_bytes32", "le_bytes16", "read_be32"]
