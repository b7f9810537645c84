# python/pixeluri/scanline.py
# Per-row "None" filter that prefixes every RGBA scanline with a type byte
# Exists to produce the filtered image data carried by the IDAT chunk
# RELEVANT FILES: python/pixeluri/encoder.py, python/pixeluri/_validate.py, tests/test_scanline.py

from __future__ import annotations

import numpy as np

from ._validate import RGBA_CHANNELS, pixel_buffer, size_wh

FILTER_NONE = 0


def apply_none_filter(pixels, width: int, height: int) -> np.ndarray:
    """Return ``height`` scanlines of ``[0, R, G, B, A, ...]`` as one flat uint8 array.

    Each row of ``width*4`` bytes is copied unchanged after its filter byte, so
    the result holds ``height * (1 + width*4)`` bytes.
    """
    w, h = size_wh(width, height)
    src = pixel_buffer(pixels, w, h)

    stride = w * RGBA_CHANNELS
    out = np.empty((h, 1 + stride), dtype=np.uint8)
    out[:, 0] = FILTER_NONE
    out[:, 1:] = src.reshape(h, stride)

    return out.reshape(-1)


__all__ = ["FILTER_NONE", "apply_none_filter"]
