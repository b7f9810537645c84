# tests/test_encoder.py
# End-to-end encode: stream layout, data URI envelope, determinism
# Exists to ensure whole streams have the fixed layout and encode the same way every time
# RELEVANT FILES: python/pixeluri/encoder.py, python/pixeluri/chunk.py, python/pixeluri/scanline.py

import base64
import hashlib
import zlib

import numpy as np
import pytest

from pixeluri import (
    DATA_URI_PREFIX,
    EncoderConfig,
    encode,
    encode_stream,
    parse_chunks,
)
from pixeluri.chunk import PNG_SIGNATURE

RED = bytes([0xFF, 0x00, 0x00, 0xFF])


def _decode_uri(uri: str) -> bytes:
    assert uri.startswith(DATA_URI_PREFIX)
    return base64.b64decode(uri[len(DATA_URI_PREFIX):], validate=True)


def test_single_red_pixel_end_to_end():
    uri = encode(RED, 1, 1)
    assert uri.startswith("data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJ")

    stream = _decode_uri(uri)
    assert stream[:8] == bytes.fromhex("89504E470D0A1A0A")

    chunks = parse_chunks(stream)
    assert [c.name for c in chunks] == ["IHDR", "IDAT"]
    ihdr, idat = chunks
    assert ihdr.data == b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
    assert idat.data == b"\x00" + RED
    for c in chunks:
        assert c.crc == zlib.crc32(c.type + c.data) & 0xFFFFFFFF


def test_default_binary_layout(gradient_rgba):
    h, w, _ = gradient_rgba.shape
    stream = encode_stream(gradient_rgba, w, h)
    idat_len = h * (1 + w * 4)

    assert stream[:8] == PNG_SIGNATURE
    assert stream[8:12] == b"\x00\x00\x00\x0d"
    assert stream[12:16] == b"IHDR"
    assert stream[33:37] == idat_len.to_bytes(4, "big")
    assert stream[37:41] == b"IDAT"
    assert len(stream) == 8 + 25 + 12 + idat_len


def test_uri_is_canonical_padded_base64(gradient_rgba):
    h, w, _ = gradient_rgba.shape
    uri = encode(gradient_rgba, w, h)
    body = uri[len(DATA_URI_PREFIX):]
    assert len(body) % 4 == 0
    assert body == base64.b64encode(encode_stream(gradient_rgba, w, h)).decode("ascii")


def test_encoding_is_deterministic(gradient_rgba):
    h, w, _ = gradient_rgba.shape
    first = hashlib.sha256(encode(gradient_rgba, w, h).encode()).hexdigest()
    second = hashlib.sha256(encode(gradient_rgba.tobytes(), w, h).encode()).hexdigest()
    assert first == second


def test_end_chunk_override():
    chunks = parse_chunks(encode_stream(RED, 1, 1, include_end_chunk=True))
    assert [c.name for c in chunks] == ["IHDR", "IDAT", "IEND"]
    assert chunks[-1].length == 0


@pytest.mark.parametrize("compression", ["stored", "zlib"])
def test_compressed_idat_inflates_to_scanlines(gradient_rgba, compression):
    h, w, _ = gradient_rgba.shape
    chunks = parse_chunks(encode_stream(gradient_rgba, w, h, compression=compression))
    raw = zlib.decompress(chunks[1].data)
    rows = np.frombuffer(raw, dtype=np.uint8).reshape(h, 1 + w * 4)
    assert (rows[:, 0] == 0).all()
    assert np.array_equal(rows[:, 1:].reshape(h, w, 4), gradient_rgba)


def test_strict_preset_with_small_blocks(gradient_rgba):
    h, w, _ = gradient_rgba.shape
    cfg = EncoderConfig.strict()
    cfg.block_size = 16
    chunks = parse_chunks(encode_stream(gradient_rgba, w, h, cfg))
    assert [c.name for c in chunks] == ["IHDR", "IDAT", "IEND"]
    assert len(zlib.decompress(chunks[1].data)) == h * (1 + w * 4)


def test_strict_stream_decodes_with_pillow(gradient_rgba):
    Image = pytest.importorskip("PIL.Image")
    import io

    h, w, _ = gradient_rgba.shape
    stream = encode_stream(gradient_rgba, w, h, EncoderConfig.strict())
    img = Image.open(io.BytesIO(stream))
    img.load()
    assert img.size == (w, h)
    assert img.mode == "RGBA"
    assert np.array_equal(np.asarray(img), gradient_rgba)
