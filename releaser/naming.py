"""Deterministic filenames and display strings for a release."""

from __future__ import annotations

from datetime import date

from releaser.types import Release, Track

SCENE_JOINER = "_"


def scenify(text: str, lower: bool = False) -> str:
    """Turn free text into a filename token: spaces become the joiner."""
    output = text.replace(" ", SCENE_JOINER)
    if lower:
        output = output.lower()
    return output


def track_number_string(number: int) -> str:
    return f"{number:02d}"


def mp3_filename(number: int, track: Track, group_initials: str) -> str:
    name = f"{track_number_string(number)}-{track.artist}-{track.title}-{group_initials}.mp3"
    return scenify(name, lower=True)


def flac_filename(number: int, track: Track) -> str:
    return f"{track_number_string(number)} - {track.artist} - {track.title}.flac"


def base_identifier(release: Release, group_initials: str) -> str:
    """Seed for the MP3 directory and every 00- artifact name."""
    return scenify(f"{release.artist}-{release.title}-{release.year}-{group_initials}")


def zero_base_filename(base: str, extension: str) -> str:
    return f"00-{base.lower()}.{extension}"


def flac_directory_name(release: Release) -> str:
    return f"{release.artist} - {release.title} ({release.year})"


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_date(value: date) -> str:
    return f"{value.year:d}-{value.month:02d}-{value.day:02d}"
