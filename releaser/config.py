"""Static configuration for a release run, loaded from a JSON file.

Example::

    {
      "mp3_release_dir": "out/mp3",
      "flac_release_dir": "out/flac",
      "mp3_encoder_command": "lame -V0 --tt \"$title$\" \"$input$\" \"$output$\"",
      "flac_encoder_command": "flac -8 -o \"$output$\" \"$input$\"",
      "worker_count": 4,
      "group_initials": "GRP",
      "mp3_encoder_name": "LAME 3.100 -V0",
      "nfo_template_path": "templates/release.nfo",
      "check_exit_status": true
    }

Relative paths are resolved against the directory holding the config file.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from typing import Optional

from releaser.errors import ConfigError

REQUIRED_KEYS = (
    "mp3_release_dir",
    "flac_release_dir",
    "mp3_encoder_command",
    "flac_encoder_command",
    "group_initials",
    "mp3_encoder_name",
    "nfo_template_path",
)
PATH_KEYS = ("mp3_release_dir", "flac_release_dir", "nfo_template_path")


@dataclass(frozen=True)
class ReleaserConfig:
    mp3_release_dir: str
    flac_release_dir: str
    mp3_encoder_command: str
    flac_encoder_command: str
    group_initials: str
    mp3_encoder_name: str
    nfo_template_path: str
    worker_count: int = 4
    check_exit_status: bool = True

    def __post_init__(self) -> None:
        if self.worker_count < 1:
            raise ConfigError(f"worker_count must be at least 1, got {self.worker_count}")

    def with_overrides(self, worker_count: Optional[int] = None) -> "ReleaserConfig":
        if worker_count is None:
            return self
        return replace(self, worker_count=worker_count)


def load_config(path: str) -> ReleaserConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Unable to read config {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a JSON object")

    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise ConfigError(f"Config {path} is missing keys: {', '.join(missing)}")

    base_dir = os.path.dirname(os.path.abspath(path))
    values = {k: str(data[k]) for k in REQUIRED_KEYS}
    for key in PATH_KEYS:
        values[key] = os.path.join(base_dir, values[key])

    try:
        worker_count = int(data.get("worker_count", 4))
    except (TypeError, ValueError):
        raise ConfigError(f"worker_count must be an integer, got {data.get('worker_count')!r}")

    check_exit_status = data.get("check_exit_status", True)
    if not isinstance(check_exit_status, bool):
        raise ConfigError(f"check_exit_status must be true or false, got {check_exit_status!r}")

    return ReleaserConfig(
        worker_count=worker_count,
        check_exit_status=check_exit_status,
        **values,
    )
