# python/pixeluri/_native.py
# Detect a native PNG encoder (Pillow) and encode through it when present.
# Lets callers skip the built-in encoder on platforms that already have one.
# RELEVANT FILES:python/pixeluri/encoder.py,python/pixeluri/__init__.py,tests/test_native.py

from __future__ import annotations

import base64
import importlib
import io
from types import ModuleType
from typing import Optional

from ._validate import pixel_buffer, size_wh
from .encoder import DATA_URI_PREFIX


def _load_native() -> Optional[ModuleType]:
    try:
        return importlib.import_module("PIL.Image")
    except Exception:
        return None


NATIVE_MODULE: Optional[ModuleType] = _load_native()
NATIVE_AVAILABLE: bool = NATIVE_MODULE is not None


def get_native_module() -> Optional[ModuleType]:
    """Expose the cached ``PIL.Image`` module (if available)."""
    return NATIVE_MODULE


def refresh_native_module() -> Optional[ModuleType]:
    """Re-probe for Pillow and update global availability flags."""
    global NATIVE_MODULE, NATIVE_AVAILABLE
    NATIVE_MODULE = _load_native()
    NATIVE_AVAILABLE = NATIVE_MODULE is not None
    return NATIVE_MODULE


def native_encoder_available() -> bool:
    return NATIVE_AVAILABLE


def encode_native(pixels, width: int, height: int) -> str:
    """Encode through Pillow; output is a valid PNG but not byte-identical to ``encode``."""
    image_mod = get_native_module()
    if image_mod is None:
        raise RuntimeError("Pillow is required for encode_native(); install pixeluri[native]")

    w, h = size_wh(width, height)
    arr = pixel_buffer(pixels, w, h).reshape(h, w, 4)
    img = image_mod.fromarray(arr)  # (H, W, 4) uint8 maps to RGBA
    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=False, compress_level=6)
    return DATA_URI_PREFIX + base64.b64encode(buf.getvalue()).decode("ascii")
