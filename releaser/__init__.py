"""Release packaging pipeline: transcoding, checksums, playlist and report.

This package provides typed, testable modules that the release_packager CLI
imports.
"""

from __future__ import annotations
