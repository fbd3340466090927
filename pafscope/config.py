"""Application settings and their persistence in the user's config directory."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import platformdirs

from pafscope.draw import AnnotationDrawConfig

CONFIG_FILE_NAME = "config.json"
APP_NAME = "PafView"


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing config field `{key}`")
    return data[key]


def _float_field(data: Mapping[str, Any], key: str) -> float:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"config field `{key}` must be a number")
    return float(value)


def _bool_field(data: Mapping[str, Any], key: str) -> bool:
    value = _require(data, key)
    if not isinstance(value, bool):
        raise ValueError(f"config field `{key}` must be a boolean")
    return value


@dataclass
class AppConfig:
    """User-adjustable drawing settings."""

    alignment_line_width: float = 8.0
    grid_line_width: float = 1.0
    annotation_draw_config: AnnotationDrawConfig = field(default_factory=AnnotationDrawConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "alignment_line_width": self.alignment_line_width,
            "grid_line_width": self.grid_line_width,
            "annotation_draw_config": {
                "color_region_opacity": self.annotation_draw_config.color_region_opacity,
                "color_region_border": self.annotation_draw_config.color_region_border,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Build a config from a mapping; every field must be present."""
        if not isinstance(data, Mapping):
            raise ValueError("config must be a mapping")
        draw = _require(data, "annotation_draw_config")
        if not isinstance(draw, Mapping):
            raise ValueError("config field `annotation_draw_config` must be a mapping")
        return cls(
            alignment_line_width=_float_field(data, "alignment_line_width"),
            grid_line_width=_float_field(data, "grid_line_width"),
            annotation_draw_config=AnnotationDrawConfig(
                color_region_opacity=_float_field(draw, "color_region_opacity"),
                color_region_border=_bool_field(draw, "color_region_border"),
            ),
        )


def app_dir() -> Path:
    """The user's configuration directory for the application."""
    return Path(platformdirs.user_config_dir(APP_NAME, appauthor=False))


def load_app_config(config_dir: Optional[Path] = None) -> AppConfig:
    """Read the config file; raises FileNotFoundError if there is none."""
    directory = Path(config_dir) if config_dir is not None else app_dir()
    text = (directory / CONFIG_FILE_NAME).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ValueError(f"invalid config file: {err}") from err
    return AppConfig.from_dict(data)


def save_app_config(config: AppConfig, config_dir: Optional[Path] = None) -> Path:
    """Write the config file, creating its directory if needed; returns its path."""
    directory = Path(config_dir) if config_dir is not None else app_dir()
    if not directory.exists():
        directory.mkdir()
    if not directory.is_dir():
        raise NotADirectoryError(
            f"A file exists at the config directory path `{directory}` but it is not a directory"
        )
    path = directory / CONFIG_FILE_NAME
    path.write_text(json.dumps(config.to_dict(), indent=4) + "\n", encoding="utf-8")
    return path