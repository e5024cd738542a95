from __future__ import annotations

import json
import os
from datetime import date
from typing import Dict, List

from releaser.errors import ConfigError
from releaser.types import Release, Track


def _parse_date(value: str, key: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ConfigError(f"{key} must be an ISO date (YYYY-MM-DD), got {value!r}")


def _resolve(base_dir: str, path: str) -> str:
    return os.path.join(base_dir, os.path.expanduser(path))


def release_from_dict(data: Dict, base_dir: str = ".") -> Release:
    """Build a Release; track paths and the cover resolve against base_dir.

    Each entry of ``tracks`` needs ``path`` and ``title``; ``artist``
    defaults to the release artist.
    """
    if not isinstance(data, dict):
        raise ConfigError("Release description must be a JSON object")
    if not all(isinstance(t, dict) for t in data.get("tracks") or []):
        raise ConfigError("Each entry of tracks must be an object with path and title")
    try:
        artist = str(data["artist"])
        tracks: List[Track] = [
            Track(
                path=_resolve(base_dir, t["path"]),
                artist=str(t.get("artist") or artist),
                title=str(t["title"]),
            )
            for t in data["tracks"]
        ]
        return Release(
            artist=artist,
            title=str(data["title"]),
            year=int(data["year"]),
            genre=str(data.get("genre", "")),
            label=str(data.get("label", "")),
            notes=str(data.get("notes", "")),
            retail_date=_parse_date(data["retail_date"], "retail_date"),
            release_date=_parse_date(data["release_date"], "release_date"),
            cover_path=_resolve(base_dir, data["cover_path"]),
            tracks=tuple(tracks),
        )
    except KeyError as e:
        raise ConfigError(f"Release description is missing {e}")
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid release description: {e}")


def load_release(path: str) -> Release:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Unable to read release description {path}: {e}")
    return release_from_dict(data, base_dir=os.path.dirname(os.path.abspath(path)))
