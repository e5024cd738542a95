from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple


@dataclass(frozen=True)
class Track:
    path: str
    artist: str
    title: str


@dataclass(frozen=True)
class Release:
    artist: str
    title: str
    year: int
    genre: str
    label: str
    notes: str
    retail_date: date
    release_date: date
    cover_path: str
    tracks: Tuple[Track, ...] = ()


@dataclass(frozen=True)
class Job:
    """A track queued for encoding, with its 1-based position in the release."""
    number: int
    track: Track


@dataclass(frozen=True)
class CommandResult:
    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class TrackRow:
    number: str
    title: str
    duration: str


@dataclass
class ReportFields:
    """Everything the report template can reference."""
    artist: str
    release: str
    genre: str
    label: str
    retail_date: str
    release_date: str
    encoder: str
    notes: str
    total_duration: str
    tracks: List[TrackRow] = field(default_factory=list)

    def scalars(self) -> dict:
        return {
            "artist": self.artist,
            "release": self.release,
            "genre": self.genre,
            "label": self.label,
            "retail_date": self.retail_date,
            "release_date": self.release_date,
            "encoder": self.encoder,
            "notes": self.notes,
            "total_duration": self.total_duration,
            "track_count": str(len(self.tracks)),
        }


def number_tracks(tracks) -> List[Job]:
    """Assign dense 1..N numbers in release order."""
    return [Job(number=i, track=t) for i, t in enumerate(tracks, start=1)]
