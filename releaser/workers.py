"""Job queue and encoder thread pool for the parallel encode phase.

Each worker loops: take the next job under the queue lock, encode it with no
lock held, repeat. A worker finishes when it sees the queue empty. The pool
joins every worker before returning, so callers can rely on all encodes
having finished (or the run having failed) once ``EncoderPool.run`` returns.
"""

from __future__ import annotations

import os
import threading
from collections import deque
from typing import Callable, Iterable, Optional

from releaser.commands import encoder_replacements, run_command, substitute_template
from releaser.errors import EncodeFailureError
from releaser.hashing import HashStore, crc32_file
from releaser.logging_utils import get_logger
from releaser.naming import flac_filename, mp3_filename
from releaser.types import CommandResult, Job, Release

log = get_logger(__name__)


class JobQueue:
    """Ordered pending jobs; each one is handed out exactly once."""

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self._lock = threading.Lock()
        self._jobs = deque(jobs)

    def take(self) -> Optional[Job]:
        with self._lock:
            if not self._jobs:
                return None
            return self._jobs.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


class TrackEncoder:
    """Encodes one job to MP3 then FLAC and records the MP3 checksum."""

    def __init__(
        self,
        release: Release,
        mp3_dir: str,
        flac_dir: str,
        mp3_command: str,
        flac_command: str,
        group_initials: str,
        hashes: HashStore,
        check_exit_status: bool = True,
        runner: Callable[[str], CommandResult] = run_command,
    ) -> None:
        self.release = release
        self.mp3_dir = mp3_dir
        self.flac_dir = flac_dir
        self.mp3_command = mp3_command
        self.flac_command = flac_command
        self.group_initials = group_initials
        self.hashes = hashes
        self.check_exit_status = check_exit_status
        self.runner = runner

    def encode(self, job: Job) -> None:
        log.info("Processing %s", job.track.path)
        mp3_name = mp3_filename(job.number, job.track, self.group_initials)
        mp3_path = os.path.join(self.mp3_dir, mp3_name)
        flac_path = os.path.join(self.flac_dir, flac_filename(job.number, job.track))

        self._run(self.mp3_command, job, mp3_path, "MP3")
        self._run(self.flac_command, job, flac_path, "FLAC")

        if not os.path.exists(mp3_path):
            # only reachable with exit-status checks disabled
            log.error("MP3 output missing after encode: %s", mp3_path)
            return
        self.hashes.record(mp3_name, crc32_file(mp3_path))

    def _run(self, template: str, job: Job, output_path: str, kind: str) -> CommandResult:
        replacements = encoder_replacements(
            self.release, job, job.track.path, output_path, self.group_initials
        )
        result = self.runner(substitute_template(template, replacements))
        if not result.ok and self.check_exit_status:
            raise EncodeFailureError(
                f"{kind} encoder failed for track {job.number} ({job.track.path}) "
                f"with exit status {result.returncode}: {result.stderr.strip()}",
                result,
            )
        return result


class EncoderPool:
    """Fixed number of encoder threads draining a JobQueue."""

    def __init__(self, worker_count: int, encode: Callable[[Job], None]) -> None:
        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        self.worker_count = worker_count
        self._encode = encode
        self._lock = threading.Lock()
        self._abort = threading.Event()
        self._failure: Optional[BaseException] = None

    def run(self, jobs: JobQueue) -> None:
        """Start the workers, wait for all of them, re-raise the first failure."""
        self._abort.clear()
        self._failure = None
        threads = [
            threading.Thread(target=self._drain, args=(jobs,), name=f"encoder-{i}")
            for i in range(1, self.worker_count + 1)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if self._failure is not None:
            raise self._failure

    def _drain(self, jobs: JobQueue) -> None:
        while not self._abort.is_set():
            job = jobs.take()
            if job is None:
                return
            try:
                self._encode(job)
            except Exception as e:
                log.error("encoding track %d failed: %s", job.number, e)
                with self._lock:
                    if self._failure is None:
                        self._failure = e
                self._abort.set()
                return
