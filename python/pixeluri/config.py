# python/pixeluri/config.py
# Encoder configuration parsing from mappings, JSON files and keyword overrides
# Exists to keep the container layout switches in one validated structure
# RELEVANT FILES: python/pixeluri/encoder.py, python/pixeluri/deflate.py, python/pixeluri/cli.py, tests/test_config.py
from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ._validate import PNG_MAX_UINT31
from .deflate import DEFAULT_BLOCK_SIZE, MAX_STORED_BLOCK

ConfigSource = Union["EncoderConfig", Mapping[str, Any], str, Path, None]

_COMPRESSION_MODES: Dict[str, str] = {
    "none": "none",
    "raw": "none",
    "uncompressed": "none",
    "off": "none",
    "stored": "stored",
    "store": "stored",
    "zlib": "zlib",
    "deflate": "zlib",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


def _to_bool(value: Any, label: str) -> bool:
    if isinstance(value, bool):
        return value
    key = _normalize_key(value)
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"{label} must be a boolean, got {value!r}")


@dataclass
class EncoderConfig:
    compression: str = "none"
    block_size: int = DEFAULT_BLOCK_SIZE
    compression_level: int = 6
    include_end_chunk: bool = False
    max_dimension: int = PNG_MAX_UINT31

    @classmethod
    def strict(cls) -> "EncoderConfig":
        """Preset whose output is a standard PNG: zlib stored blocks plus IEND."""
        return cls(compression="stored", include_end_chunk=True)

    def to_dict(self) -> dict:
        return {
            "compression": self.compression,
            "block_size": self.block_size,
            "compression_level": self.compression_level,
            "include_end_chunk": self.include_end_chunk,
            "max_dimension": self.max_dimension,
        }

    def copy(self) -> "EncoderConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if self.compression not in set(_COMPRESSION_MODES.values()):
            raise ValueError(f"compression must be one of none, stored, zlib; got {self.compression!r}")
        if not 1 <= self.block_size <= MAX_STORED_BLOCK:
            raise ValueError(f"block_size must be within [1, {MAX_STORED_BLOCK}]")
        if not 0 <= self.compression_level <= 9:
            raise ValueError("compression_level must be within [0, 9]")
        if not 1 <= self.max_dimension <= PNG_MAX_UINT31:
            raise ValueError(f"max_dimension must be within [1, {PNG_MAX_UINT31}]")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["EncoderConfig"] = None) -> "EncoderConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "compression" in data:
            base.compression = _normalize_choice(data["compression"], _COMPRESSION_MODES, "compression mode")
        if "block_size" in data:
            base.block_size = int(data["block_size"])
        if "compression_level" in data:
            base.compression_level = int(data["compression_level"])
        elif "level" in data:
            base.compression_level = int(data["level"])
        if "include_end_chunk" in data:
            base.include_end_chunk = _to_bool(data["include_end_chunk"], "include_end_chunk")
        elif "end_chunk" in data:
            base.include_end_chunk = _to_bool(data["end_chunk"], "end_chunk")
        if "max_dimension" in data:
            base.max_dimension = int(data["max_dimension"])
        if "strict" in data and _to_bool(data["strict"], "strict"):
            base.compression = "stored" if base.compression == "none" else base.compression
            base.include_end_chunk = True
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise TypeError(f"encoder config file must hold a JSON object: {path}")
        return data
    raise ValueError(f"Unsupported encoder config file format: {path}")


def load_encoder_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> EncoderConfig:
    if isinstance(config, EncoderConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = EncoderConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = EncoderConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = EncoderConfig()
    else:
        raise TypeError("config must be EncoderConfig, mapping, path, or None")

    if overrides:
        merged = {k: v for k, v in overrides.items() if v is not None}
        if merged:
            cfg = EncoderConfig.from_mapping(merged, cfg)
    cfg.validate()
    return cfg


__all__ = ["EncoderConfig", "ConfigSource", "load_encoder_config"]
