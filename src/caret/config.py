"""TOML config loading for caret.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "caret.toml"


@dataclass
class RenderConfig:
    color: bool = False
    highlight: bool = True
    debug: bool = False


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class CaretConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    log: LogConfig = field(default_factory=LogConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find caret.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> CaretConfig:
    """Parse a caret.toml file into a CaretConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = CaretConfig()

    if "render" in data:
        rnd = data["render"]
        config.render = RenderConfig(
            color=rnd.get("color", False),
            highlight=rnd.get("highlight", True),
            debug=rnd.get("debug", False),
        )

    if "log" in data:
        level = str(data["log"].get("level", "WARNING")).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"{path}: unknown log level {level!r}")
        config.log = LogConfig(level=level)

    return config


_CARET_TOML_TEMPLATE = """\
[render]
color = false
highlight = true
debug = false

[log]
level = "WARNING"
"""


def scaffold(directory: Path | None = None) -> Path:
    """Write a default caret.toml. Returns its path."""
    path = (directory or Path.cwd()) / CONFIG_NAME
    if path.exists():
        raise FileExistsError(f"{CONFIG_NAME} already exists in {path.parent}")
    path.write_text(_CARET_TOML_TEMPLATE)
    return path
