"""Configuration for text-itemizer.

Settings are read from a YAML file. The lookup order is:

1. an explicit path passed to ``Config.load``
2. the ``TEXT_ITEMIZER_CONFIG`` environment variable
3. ``~/.config/text-itemizer/config.yaml``

A missing file yields the defaults. Example file::

    log_level: INFO
    language: ar
    visual_order: true
    jobs: 8
    font_size: 24
    font_path: /usr/share/fonts/truetype/noto/NotoNaskhArabic-Regular.ttf
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from text_itemizer.exceptions import ConfigError
from text_itemizer.shaping.language import language_index

CONFIG_ENV_VAR = "TEXT_ITEMIZER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/text-itemizer/config.yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Runtime settings shared by the CLI commands."""

    log_level: str = "WARNING"
    language: str = "default"
    visual_order: bool = True
    jobs: int = 4
    font_size: float = 16.0
    font_path: Path | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check field values, raising ConfigError on the first bad one."""
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"log_level: must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        self.log_level = self.log_level.upper()
        if language_index(self.language) < 0:
            raise ConfigError(f"language: unknown language code {self.language!r}")
        if not isinstance(self.jobs, int) or isinstance(self.jobs, bool) or self.jobs < 1:
            raise ConfigError("jobs: must be at least 1")
        if not isinstance(self.font_size, (int, float)) or self.font_size <= 0:
            raise ConfigError("font_size: must be greater than 0")
        self.font_size = float(self.font_size)
        if self.font_path is not None:
            self.font_path = Path(self.font_path).expanduser()

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{unknown[0]}: unknown setting")
        return cls(**data)

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration, falling back to defaults when no file exists."""
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
            else:
                path = DEFAULT_CONFIG_PATH.expanduser()
                if not path.exists():
                    return cls()
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")
        return cls.from_dict(data)
