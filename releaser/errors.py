from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from releaser.types import CommandResult


class ReleaserError(Exception):
    """Base error for the release pipeline."""


class MissingInputError(ReleaserError, FileNotFoundError):
    """Raised when a source lossless file or the cover image is absent."""


class MissingHashError(ReleaserError):
    """Raised when no CRC32 was recorded for a track's MP3 file."""


class EncodeFailureError(ReleaserError):
    """Raised when an external encoder exits with a nonzero status."""

    def __init__(self, message: str, result: "CommandResult") -> None:
        super().__init__(message)
        self.result = result


class ConfigError(ReleaserError):
    """Raised when the configuration or release description is invalid."""


class ReportTemplateError(ReleaserError):
    """Raised when the report template cannot be read."""
