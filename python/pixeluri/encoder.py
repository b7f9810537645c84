# python/pixeluri/encoder.py
# RGBA pixel buffer to PNG-shaped image stream and base64 data URI
# Exists to run the signature/IHDR/IDAT pipeline as one deterministic call
# RELEVANT FILES: python/pixeluri/chunk.py, python/pixeluri/scanline.py, python/pixeluri/deflate.py, python/pixeluri/config.py, tests/test_encoder.py

from __future__ import annotations

import base64
import logging
from typing import Any, Mapping, Optional

from ._validate import check_chunk_length, filtered_length, pixel_buffer, size_wh
from .chunk import IDAT, IEND, IHDR, PNG_SIGNATURE, build_chunk, ihdr_payload
from .config import ConfigSource, load_encoder_config
from .deflate import wrap_idat
from .scanline import apply_none_filter

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/png;base64,"


def encode_stream(
    pixels,
    width: int,
    height: int,
    config: ConfigSource = None,
    **overrides: Any,
) -> bytes:
    """Build the image stream for an RGBA buffer.

    The default layout is signature, IHDR and an IDAT holding the filtered
    scanlines as they are, with no IEND. ``compression`` and
    ``include_end_chunk`` (via ``config`` or keyword overrides) switch to a
    standard zlib-wrapped IDAT and a terminating IEND.

    Raises:
        InvalidInputError: bad dimensions or a buffer of the wrong length
        ArithmeticOverflowError: dimensions or IDAT size beyond PNG limits
    """
    cfg = load_encoder_config(config, overrides)
    w, h = size_wh(width, height, cfg.max_dimension)
    # Holds for every compression mode.
    check_chunk_length(filtered_length(w, h), "IDAT payload")
    src = pixel_buffer(pixels, w, h)
    del pixels

    header = build_chunk(IHDR, ihdr_payload(w, h))

    filtered = apply_none_filter(src, w, h)
    del src

    payload = wrap_idat(
        filtered,
        cfg.compression,
        block_size=cfg.block_size,
        level=cfg.compression_level,
    )
    del filtered

    chunks = [header, build_chunk(IDAT, payload)]
    if cfg.include_end_chunk:
        chunks.append(build_chunk(IEND, b""))

    stream = PNG_SIGNATURE + b"".join(chunks)
    logger.debug(
        f"Encoded {w}x{h} RGBA: compression={cfg.compression}, idat={len(payload)} bytes, "
        f"chunks={len(chunks)}, stream={len(stream)} bytes"
    )
    return stream


def to_data_uri(stream: bytes) -> str:
    return DATA_URI_PREFIX + base64.b64encode(stream).decode("ascii")


def encode(
    pixels,
    width: int,
    height: int,
    config: ConfigSource = None,
    **overrides: Any,
) -> str:
    """Encode an RGBA buffer as ``data:image/png;base64,...``.

    Example:
        >>> encode(b"\\xff\\x00\\x00\\xff", 1, 1)[:22]
        'data:image/png;base64,'
    """
    return to_data_uri(encode_stream(pixels, width, height, config, **overrides))


def to_data_url(
    pixels,
    width: int,
    height: int,
    *,
    config: ConfigSource = None,
    prefer_native: bool = False,
    overrides: Optional[Mapping[str, Any]] = None,
) -> str:
    """Encode with a native PNG writer when asked and available, else with ``encode``."""
    if prefer_native:
        from ._native import encode_native, native_encoder_available

        if native_encoder_available():
            return encode_native(pixels, width, height)
        logger.warning("Native PNG encoder unavailable, using built-in encoder")
    return encode(pixels, width, height, config, **dict(overrides or {}))


__all__ = ["DATA_URI_PREFIX", "encode_stream", "encode", "to_data_uri", "to_data_url"]
