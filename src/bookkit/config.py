from __future__ import annotations
import json
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict
import tomli
from .errors import ConfigError
from .schema import BOOK_CONFIG_SCHEMA, validate

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "book-config.json"

@dataclass(frozen=True)
class BookConfig:
    output_directory: pathlib.Path
    settings: Dict[str, Any] = field(default_factory=dict)
    source: pathlib.Path | None = None

def parse_config_text(text: str, fmt: str = "json") -> Dict[str, Any]:
    # JSON is the native format; TOML is accepted for hand-written configs.
    try:
        if fmt == "toml":
            return tomli.loads(text)
        data = json.loads(text)
    except (json.JSONDecodeError, tomli.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot parse {fmt} configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be an object at $", "$")
    return data

def config_from_dict(data: Dict[str, Any], root: pathlib.Path, source: pathlib.Path | None = None) -> BookConfig:
    validate(BOOK_CONFIG_SCHEMA, data)
    out = pathlib.Path(data["output"]["directory"])
    if not out.is_absolute():
        out = root / out
    return BookConfig(output_directory=out, settings=data, source=source)

def load_config(path: str | pathlib.Path | None = None, root: str | pathlib.Path = ".") -> BookConfig:
    root = pathlib.Path(root)
    cfg_path = pathlib.Path(path) if path else root / DEFAULT_CONFIG_NAME
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {cfg_path}: {exc.strerror or exc}", str(cfg_path)) from exc
    fmt = "toml" if cfg_path.suffix == ".toml" else "json"
    config = config_from_dict(parse_config_text(text, fmt), root, source=cfg_path)
    logger.debug("Loaded %s (output: %s)", cfg_path, config.output_directory)
    return config
