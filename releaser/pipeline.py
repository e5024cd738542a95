"""Release pipeline orchestration.

``ReleasePipeline.process_release`` runs the steps of one release in a fixed
order:

1. create the MP3 and FLAC output directories
2. copy the cover to ``00-<base>.jpg``
3. check every source file and number the tracks 1..N
4. write the ``.m3u`` playlist
5. encode all tracks on the worker pool and wait for every worker
6. write the ``.sfv`` checksum manifest in release order
7. render the ``.nfo`` report with durations read back from the MP3 files

Any error aborts the run; files already written are left in place.
"""

from __future__ import annotations

import os
import shutil
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from releaser.artifacts import manifest_text, playlist_text, write_text
from releaser.commands import run_command
from releaser.config import ReleaserConfig
from releaser.errors import MissingInputError
from releaser.hashing import HashStore
from releaser.logging_utils import get_logger
from releaser.naming import base_identifier, flac_directory_name, zero_base_filename
from releaser.report import ReportTemplate, build_report_fields, mp3_duration
from releaser.types import CommandResult, Job, Release, number_tracks
from releaser.workers import EncoderPool, JobQueue, TrackEncoder

log = get_logger(__name__)


@dataclass
class ReleaseResult:
    base: str
    mp3_dir: str
    flac_dir: str
    cover_path: str
    playlist_path: str
    manifest_path: str
    report_path: str
    hashes: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0


class ReleasePipeline:
    """Processes exactly one release per call with a fresh queue and hash store."""

    def __init__(
        self,
        config: ReleaserConfig,
        runner: Callable[[str], CommandResult] = run_command,
        duration_reader: Callable[[str], int] = mp3_duration,
    ) -> None:
        self.config = config
        self.runner = runner
        self.duration_reader = duration_reader

    def process_release(self, release: Release) -> ReleaseResult:
        beginning = time.perf_counter()
        cfg = self.config
        log.info("start release", extra={"artist": release.artist, "title": release.title,
                                         "tracks": len(release.tracks), "workers": cfg.worker_count})

        base = base_identifier(release, cfg.group_initials)
        mp3_dir = os.path.join(cfg.mp3_release_dir, base)
        flac_dir = os.path.join(cfg.flac_release_dir, flac_directory_name(release))
        self._create_directories(mp3_dir, flac_dir)

        def zero_base_path(extension: str) -> str:
            return os.path.join(mp3_dir, zero_base_filename(base, extension))

        cover_path = zero_base_path("jpg")
        self._copy_cover(release, cover_path)

        jobs = self._create_jobs(release)

        playlist_path = zero_base_path("m3u")
        write_text(playlist_path, playlist_text(base, jobs, cfg.group_initials))

        hashes = HashStore()
        encoder = TrackEncoder(
            release=release,
            mp3_dir=mp3_dir,
            flac_dir=flac_dir,
            mp3_command=cfg.mp3_encoder_command,
            flac_command=cfg.flac_encoder_command,
            group_initials=cfg.group_initials,
            hashes=hashes,
            check_exit_status=cfg.check_exit_status,
            runner=self.runner,
        )
        EncoderPool(cfg.worker_count, encoder.encode).run(JobQueue(jobs))
        log.info("encoding done", extra={"hashed": len(hashes)})

        # the queue was consumed; the manifest follows release order
        manifest_path = zero_base_path("sfv")
        ordered = number_tracks(release.tracks)
        write_text(manifest_path, manifest_text(base, ordered, hashes, cfg.group_initials))

        report_path = zero_base_path("nfo")
        self._create_report(release, mp3_dir, report_path)

        elapsed = time.perf_counter() - beginning
        log.info("Duration: %.2f s", elapsed)
        return ReleaseResult(
            base=base,
            mp3_dir=mp3_dir,
            flac_dir=flac_dir,
            cover_path=cover_path,
            playlist_path=playlist_path,
            manifest_path=manifest_path,
            report_path=report_path,
            hashes=hashes.snapshot(),
            elapsed=elapsed,
        )

    def _create_directories(self, *directories: str) -> None:
        for directory in directories:
            if not os.path.isdir(directory):
                log.info("Creating %s", directory)
            os.makedirs(directory, exist_ok=True)

    def _copy_cover(self, release: Release, destination: str) -> None:
        if not os.path.isfile(release.cover_path):
            raise MissingInputError(f"Unable to find cover: {release.cover_path}")
        shutil.copyfile(release.cover_path, destination)

    def _create_jobs(self, release: Release) -> List[Job]:
        for track in release.tracks:
            if not os.path.isfile(track.path):
                raise MissingInputError(f"Unable to find source file: {track.path}")
        return number_tracks(release.tracks)

    def _create_report(self, release: Release, mp3_dir: str, report_path: str) -> None:
        template = ReportTemplate(self.config.nfo_template_path)
        fields = build_report_fields(
            release,
            number_tracks(release.tracks),
            mp3_dir,
            self.config.group_initials,
            self.config.mp3_encoder_name,
            duration_reader=self.duration_reader,
        )
        template.write(report_path, fields)
