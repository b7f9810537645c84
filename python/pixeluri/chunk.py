# python/pixeluri/chunk.py
# Length-prefixed, CRC-trailed chunk framing plus a verifying reader
# Exists to build IHDR/IDAT/IEND records and parse streams back for inspection
# RELEVANT FILES: python/pixeluri/checksum.py, python/pixeluri/numeric.py, python/pixeluri/encoder.py, tests/test_chunk.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

from ._validate import byte_view, check_chunk_length, size_wh
from .checksum import crc32
from .errors import InvalidInputError
from .numeric import be_bytes32, read_be32

PNG_SIGNATURE = bytes((0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A))

BIT_DEPTH = 8
COLOR_TYPE_RGBA = 6  # truecolor with alpha
COMPRESSION_METHOD = 0
FILTER_METHOD = 0
INTERLACE_NONE = 0

IHDR = b"IHDR"
IDAT = b"IDAT"
IEND = b"IEND"

ChunkType = Union[str, bytes]


@dataclass(frozen=True)
class Chunk:
    """One chunk read back from an image stream."""

    type: bytes
    data: bytes
    crc: int

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def name(self) -> str:
        return self.type.decode("ascii")


def _chunk_type(chunk_type: ChunkType) -> bytes:
    if isinstance(chunk_type, str):
        try:
            chunk_type = chunk_type.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidInputError(f"chunk type must be ASCII, got {chunk_type!r}") from e
    tag = bytes(chunk_type)
    if len(tag) != 4 or not tag.isalpha():
        raise InvalidInputError(f"chunk type must be 4 ASCII letters, got {tag!r}")
    return tag


def build_chunk(chunk_type: ChunkType, data=b"") -> bytes:
    """Frame ``data`` as ``length ++ type ++ data ++ crc32(type ++ data)``."""
    tag = _chunk_type(chunk_type)
    payload = bytes(byte_view(data))
    check_chunk_length(len(payload), f"{tag.decode('ascii')} payload")
    body = tag + payload
    return be_bytes32(len(payload)) + body + be_bytes32(crc32(body))


def ihdr_payload(width: int, height: int) -> bytes:
    """13-byte header: width, height, 8-bit depth, RGBA, deflate, adaptive, no interlace."""
    w, h = size_wh(width, height)
    return be_bytes32(w) + be_bytes32(h) + bytes(
        (BIT_DEPTH, COLOR_TYPE_RGBA, COMPRESSION_METHOD, FILTER_METHOD, INTERLACE_NONE)
    )


def iter_chunks(stream, offset: int = len(PNG_SIGNATURE), verify_crc: bool = True) -> Iterator[Chunk]:
    """Yield chunks from ``stream`` starting at ``offset`` (just past the signature).

    Raises InvalidInputError on truncated records or, when ``verify_crc`` is
    set, on a CRC that does not match ``type ++ data``.
    """
    view = byte_view(stream, "stream")
    pos = int(offset)
    end = len(view)
    while pos < end:
        if end - pos < 12:
            raise InvalidInputError(f"truncated chunk header at offset {pos}")
        length = read_be32(view, pos)
        tag = bytes(view[pos + 4:pos + 8])
        data_end = pos + 8 + length
        if data_end + 4 > end:
            raise InvalidInputError(
                f"chunk {tag!r} at offset {pos} declares {length} bytes past end of stream"
            )
        data = bytes(view[pos + 8:data_end])
        crc = read_be32(view, data_end)
        if verify_crc:
            expected = crc32(tag + data)
            if crc != expected:
                raise InvalidInputError(
                    f"CRC mismatch in {tag!r} chunk: stored {crc:#010x}, computed {expected:#010x}"
                )
        yield Chunk(tag, data, crc)
        pos = data_end + 4


def parse_chunks(stream, verify_crc: bool = True) -> List[Chunk]:
    """Check the signature and return every chunk of an image stream."""
    view = byte_view(stream, "stream")
    if bytes(view[:len(PNG_SIGNATURE)]) != PNG_SIGNATURE:
        raise InvalidInputError("stream does not start with the PNG signature")
    return list(iter_chunks(view, verify_crc=verify_crc))


__all__ = [
    "PNG_SIGNATURE",
    "IHDR",
    "IDAT",
    "IEND",
    "Chunk",
    "build_chunk",
    "ihdr_payload",
    "iter_chunks",
    "parse_chunks",
]
