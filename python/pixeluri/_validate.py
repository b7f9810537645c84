# python/pixeluri/_validate.py
# Input coercion and guardrails run before any output byte is produced
# Exists to turn caller mistakes into InvalidInputError/ArithmeticOverflowError early
# RELEVANT FILES: python/pixeluri/errors.py, python/pixeluri/encoder.py, tests/test_validate.py

from __future__ import annotations

import operator
from typing import Tuple

import numpy as np

from .errors import ArithmeticOverflowError, InvalidInputError

RGBA_CHANNELS = 4
PNG_MAX_UINT31 = 2**31 - 1  # PNG caps dimensions and chunk lengths at 2^31-1


def _as_int(name: str, v) -> int:
    if isinstance(v, (bool, np.bool_)):
        raise InvalidInputError(f"{name} must be an integer, got {type(v).__name__}")
    try:
        i = operator.index(v)
    except TypeError as e:
        raise InvalidInputError(f"{name} must be an integer, got {type(v).__name__}") from e
    return i


def size_wh(width, height, max_dim: int = PNG_MAX_UINT31) -> Tuple[int, int]:
    w = _as_int("width", width)
    h = _as_int("height", height)
    if w <= 0 or h <= 0:
        raise InvalidInputError(f"width and height must be > 0, got {w}x{h}")
    limit = min(int(max_dim), PNG_MAX_UINT31)
    if w > limit or h > limit:
        raise ArithmeticOverflowError(f"width/height must be <= {limit}, got {w}x{h}")
    return w, h


def filtered_length(width: int, height: int) -> int:
    """Byte count of the filtered scanlines: ``height * (1 + width*4)``."""
    return height * (1 + width * RGBA_CHANNELS)


def check_chunk_length(n: int, what: str = "chunk data") -> int:
    if n > PNG_MAX_UINT31:
        raise ArithmeticOverflowError(
            f"{what} is {n} bytes; a PNG chunk holds at most {PNG_MAX_UINT31}"
        )
    return n


def _int_sequence(data, name: str) -> np.ndarray:
    """Coerce a sequence of ints in ``[0, 255]`` to a flat uint8 array."""
    try:
        raw = np.asarray(data)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a byte sequence, got {type(data).__name__}") from e
    if raw.ndim == 1 and raw.size == 0:
        return np.empty(0, dtype=np.uint8)
    if raw.ndim != 1 or not np.issubdtype(raw.dtype, np.integer):
        raise InvalidInputError(f"{name} must be a flat sequence of integers")
    if raw.min() < 0 or raw.max() > 255:
        raise InvalidInputError(f"{name} values must be within [0, 255]")
    return raw.astype(np.uint8)


def byte_view(data, name: str = "data") -> memoryview:
    """Return a flat unsigned-byte view over bytes-like data, a uint8 array or an int sequence."""
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise InvalidInputError(f"{name} must have dtype uint8, got {data.dtype}")
        return memoryview(np.ascontiguousarray(data).reshape(-1))
    try:
        view = memoryview(data)
    except TypeError:
        return memoryview(_int_sequence(data, name))
    if not view.c_contiguous:
        raise InvalidInputError(f"{name} must be C-contiguous")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def pixel_buffer(pixels, width: int, height: int) -> np.ndarray:
    """Coerce ``pixels`` to a flat read-only uint8 array of exactly ``width*height*4`` bytes.

    Accepts bytes-like objects, flat uint8 arrays, ``(height, width, 4)`` uint8
    arrays, and sequences of ints in ``[0, 255]``. Nothing is truncated or padded.
    """
    expected = width * height * RGBA_CHANNELS

    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise InvalidInputError(f"pixels must have dtype uint8, got {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape != (height, width, RGBA_CHANNELS):
            raise InvalidInputError(
                f"pixels shape {pixels.shape} does not match ({height}, {width}, {RGBA_CHANNELS})"
            )
        if pixels.ndim not in (1, 3):
            raise InvalidInputError(f"pixels must be flat or (H, W, 4), got shape {pixels.shape}")
        arr = np.ascontiguousarray(pixels).reshape(-1)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(byte_view(pixels, "pixels"), dtype=np.uint8)
    else:
        arr = _int_sequence(pixels, "pixels")

    if arr.size != expected:
        raise InvalidInputError(
            f"pixel buffer holds {arr.size} bytes, expected {expected} for {width}x{height} RGBA"
        )
    return arr
