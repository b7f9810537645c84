#!/usr/bin/env python3
"""
Raw RGBA dump to PNG data URI.

Reads a tightly packed RGBA frame (width x height x 4 bytes) and prints the
``data:image/png;base64,...`` URI, or writes it to ``--out``.

Usage:
    python -m pixeluri --in frame.rgba --width 640 --height 480
    python -m pixeluri --in frame.rgba --width 640 --height 480 --strict --out frame.uri
    python -m pixeluri --in frame.rgba --width 640 --height 480 --inspect

RELEVANT FILES: python/pixeluri/encoder.py, python/pixeluri/config.py
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .chunk import parse_chunks
from .config import load_encoder_config
from .encoder import encode_stream, to_data_uri
from .errors import ArithmeticOverflowError, InvalidInputError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INVALID_INPUT = 2
EXIT_OVERFLOW = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixeluri",
        description="Encode a raw RGBA frame as a PNG data URI.",
    )
    parser.add_argument("--in", dest="inp", required=True, help="Input raw RGBA file path")
    parser.add_argument("--width", type=int, required=True, help="Frame width in pixels")
    parser.add_argument("--height", type=int, required=True, help="Frame height in pixels")
    parser.add_argument("--out", type=str, default=None, help="Write the URI here instead of stdout")
    parser.add_argument("--config", type=str, default=None, help="JSON encoder config")
    parser.add_argument("--compression", type=str, default=None,
                        choices=["none", "stored", "zlib"],
                        help="IDAT payload wrapping (default: none)")
    parser.add_argument("--end-chunk", action="store_true", default=None,
                        help="Append an IEND chunk")
    parser.add_argument("--strict", action="store_true",
                        help="Standard PNG: stored zlib blocks plus IEND")
    parser.add_argument("--inspect", action="store_true",
                        help="Print the chunk table instead of the URI")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def _format_chunks(stream: bytes) -> str:
    lines = [f"{'type':<6}{'length':>12}  crc"]
    for chunk in parse_chunks(stream):
        lines.append(f"{chunk.name:<6}{chunk.length:>12}  {chunk.crc:#010x}")
    lines.append(f"total {len(stream)} bytes")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(levelname)s: %(message)s')

    overrides = {
        "compression": args.compression,
        "include_end_chunk": args.end_chunk,
        "strict": args.strict or None,
    }

    try:
        cfg = load_encoder_config(args.config, overrides)
        data = Path(args.inp).read_bytes()
        logger.debug(f"Read {len(data)} bytes from {args.inp}")
        stream = encode_stream(data, args.width, args.height, cfg)
    except InvalidInputError as e:
        print(f"invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ArithmeticOverflowError as e:
        print(f"overflow: {e}", file=sys.stderr)
        return EXIT_OVERFLOW
    except (TypeError, ValueError) as e:
        print(f"invalid config: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        print(f"cannot read input: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    text = _format_chunks(stream) if args.inspect else to_data_uri(stream)

    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {args.out}")
    else:
        print(text)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
