"""NFO report rendering.

The template is plain text with ``$name$`` placeholders. Scalar fields are
``$artist$``, ``$release$``, ``$genre$``, ``$label$``, ``$retail_date$``,
``$release_date$``, ``$encoder$``, ``$notes$``, ``$total_duration$`` and
``$track_count$``. A line mentioning ``$number$``, ``$title$`` or
``$duration$`` is a track row and is emitted once per track, in order.
"""

from __future__ import annotations

import os
from typing import Callable, List, Sequence

from mutagen.mp3 import MP3

from releaser.commands import substitute_template
from releaser.errors import ReportTemplateError
from releaser.logging_utils import get_logger
from releaser.naming import format_date, format_duration, mp3_filename, track_number_string
from releaser.types import Job, Release, ReportFields, TrackRow

log = get_logger(__name__)

ROW_PLACEHOLDERS = ("$number$", "$title$", "$duration$")


def mp3_duration(path: str) -> int:
    """Length of an MP3 file in whole seconds, halves rounded up."""
    return int(MP3(path).info.length + 0.5)


def build_report_fields(
    release: Release,
    jobs: Sequence[Job],
    mp3_dir: str,
    group_initials: str,
    encoder_name: str,
    duration_reader: Callable[[str], int] = mp3_duration,
) -> ReportFields:
    rows: List[TrackRow] = []
    total = 0
    for job in jobs:
        path = os.path.join(mp3_dir, mp3_filename(job.number, job.track, group_initials))
        seconds = duration_reader(path)
        total += seconds
        rows.append(TrackRow(
            number=track_number_string(job.number),
            title=job.track.title,
            duration=format_duration(seconds),
        ))
    return ReportFields(
        artist=release.artist,
        release=release.title,
        genre=release.genre,
        label=release.label,
        retail_date=format_date(release.retail_date),
        release_date=format_date(release.release_date),
        encoder=encoder_name,
        notes=release.notes,
        total_duration=format_duration(total),
        tracks=rows,
    )


class ReportTemplate:
    def __init__(self, template_path: str) -> None:
        self.template_path = template_path
        try:
            with open(template_path, "r", encoding="utf-8", newline="") as f:
                self.text = f.read()
        except OSError as e:
            raise ReportTemplateError(f"Unable to read report template {template_path}: {e}")

    def render(self, fields: ReportFields) -> str:
        scalars = fields.scalars()
        out: List[str] = []
        for line in self.text.splitlines(keepends=True):
            if any(p in line for p in ROW_PLACEHOLDERS):
                for row in fields.tracks:
                    out.append(substitute_template(line, {
                        "number": row.number, "title": row.title, "duration": row.duration,
                        **scalars,
                    }))
            else:
                out.append(substitute_template(line, scalars))
        return "".join(out)

    def write(self, output_path: str, fields: ReportFields) -> None:
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(self.render(fields))
        log.info("wrote report %s", output_path)
