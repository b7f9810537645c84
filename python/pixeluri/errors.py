# python/pixeluri/errors.py
# Exception taxonomy shared by the encoder pipeline
# Exists so callers can catch encoder failures without matching message text
# RELEVANT FILES: python/pixeluri/_validate.py, python/pixeluri/encoder.py, tests/test_validate.py

from __future__ import annotations


class PixelUriError(Exception):
    """Base class for every error raised by pixeluri."""


class InvalidInputError(PixelUriError, ValueError):
    """Pixel buffer, dimensions, chunk type or stream do not satisfy the contract."""


class ArithmeticOverflowError(PixelUriError, OverflowError):
    """A length or dimension does not fit the fields of the PNG container."""


__all__ = ["PixelUriError", "InvalidInputError", "ArithmeticOverflowError"]
