from __future__ import annotations

from typing import Iterable, List

from releaser.errors import MissingHashError
from releaser.hashing import HashStore
from releaser.logging_utils import get_logger
from releaser.naming import mp3_filename
from releaser.types import Job

log = get_logger(__name__)

CRLF = "\r\n"


def _with_header(base: str, lines: List[str]) -> str:
    return "".join(f"{line}{CRLF}" for line in [f";{base}", *lines])


def playlist_text(base: str, jobs: Iterable[Job], group_initials: str) -> str:
    """M3U body: header comment then one MP3 filename per job."""
    return _with_header(base, [mp3_filename(j.number, j.track, group_initials) for j in jobs])


def manifest_text(base: str, jobs: Iterable[Job], hashes: HashStore, group_initials: str) -> str:
    """SFV body: header comment then ``filename crc32`` per job.

    Raises MissingHashError if any job has no recorded checksum.
    """
    lines: List[str] = []
    for job in jobs:
        filename = mp3_filename(job.number, job.track, group_initials)
        checksum = hashes.get(filename)
        if checksum is None:
            raise MissingHashError(f"Unable to retrieve the CRC32 hash for {filename}")
        lines.append(f"{filename} {checksum}")
    return _with_header(base, lines)


def write_text(path: str, text: str) -> None:
    # newline="" keeps the CRLF endings as written
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    log.info("wrote %s", path)
