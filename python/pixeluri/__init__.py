# python/pixeluri/__init__.py
# Public API for encoding raw RGBA buffers as PNG data URIs
# Exists to re-export the encoder, checksum and chunk helpers from one place
# RELEVANT FILES: python/pixeluri/encoder.py, python/pixeluri/checksum.py, python/pixeluri/chunk.py, tests/test_api.py

__version__ = "0.1.0"

from .errors import ArithmeticOverflowError, InvalidInputError, PixelUriError
from .numeric import be_bytes32, le_bytes16, to_uint32
from .checksum import adler32, crc32, crc_table
from .scanline import FILTER_NONE, apply_none_filter
from .chunk import PNG_SIGNATURE, Chunk, build_chunk, ihdr_payload, iter_chunks, parse_chunks
from .deflate import zlib_stored, wrap_idat
from .config import EncoderConfig, load_encoder_config
from .encoder import DATA_URI_PREFIX, encode, encode_stream, to_data_uri, to_data_url
from ._native import native_encoder_available

__all__ = [
    "__version__",
    "PixelUriError",
    "InvalidInputError",
    "ArithmeticOverflowError",
    "to_uint32",
    "be_bytes32",
    "le_bytes16",
    "adler32",
    "crc32",
    "crc_table",
    "FILTER_NONE",
    "apply_none_filter",
    "PNG_SIGNATURE",
    "Chunk",
    "build_chunk",
    "ihdr_payload",
    "iter_chunks",
    "parse_chunks",
    "zlib_stored",
    "wrap_idat",
    "EncoderConfig",
    "load_encoder_config",
    "DATA_URI_PREFIX",
    "encode",
    "encode_stream",
    "to_data_uri",
    "to_data_url",
    "native_encoder_available",
]
