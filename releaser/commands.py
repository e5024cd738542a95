from __future__ import annotations

import os
import re
import subprocess
from typing import Dict, Mapping

from releaser.logging_utils import get_logger
from releaser.types import CommandResult, Job, Release

log = get_logger(__name__)

PLACEHOLDER = re.compile(r"\$(\w+)\$")


def substitute_template(template: str, replacements: Mapping[str, str]) -> str:
    """Replace each ``$name$`` placeholder with its value, verbatim.

    One pass over the template: substituted values are never rescanned.
    Placeholders without a mapping entry are left untouched.
    """
    return PLACEHOLDER.sub(lambda m: replacements.get(m.group(1), m.group(0)), template)


def encoder_replacements(release: Release, job: Job, input_path: str, output_path: str,
                         group_initials: str) -> Dict[str, str]:
    return {
        "input": os.path.abspath(input_path),
        "output": os.path.abspath(output_path),
        "title": job.track.title,
        "artist": job.track.artist,
        "album": release.title,
        "year": str(release.year),
        "comment": group_initials,
        "trackNumber": str(job.number),
        "genre": release.genre,
    }


def run_command(command_line: str) -> CommandResult:
    """Run an encoder command line through the shell and wait for it.

    A nonzero exit is reported in the result, never raised; callers decide.
    """
    log.debug("run command", extra={"command": command_line})
    proc = subprocess.run(command_line, shell=True, capture_output=True, text=True)
    result = CommandResult(
        command=command_line,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
    if not result.ok:
        log.warning("command exited with status %d: %s", result.returncode, command_line)
    return result
