"""Exception hierarchy for provider packaging runs.

Fatal errors propagate to the CLI and terminate the run. ``RemoteFetchFailed``
and ``UnrecognizedFilename`` are recovered by their callers.
"""

from __future__ import annotations


class PackagingError(Exception):
    """Base exception for packaging operations."""


class ManifestUnreadable(PackagingError):
    """Raised when the checksum manifest cannot be opened or read."""


class MalformedManifestLine(PackagingError):
    """Raised when a manifest line is not ``<checksum>  <filename>``."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Malformed checksum manifest line {line_number}: {line!r} "
            "(expected '<checksum>  <filename>')"
        )


class RemoteFetchFailed(PackagingError):
    """Raised when a registry document cannot be fetched or decoded."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to fetch {url}: {reason}")


class UnrecognizedFilename(PackagingError):
    """Raised when a filename does not follow ``<repo>_<version>_<os>_<arch>.zip``."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Filename {filename!r} is not in the expected format")


class FileWriteFailed(PackagingError):
    """Raised when a file or directory in the release tree cannot be written."""


class ArtifactCopyFailed(PackagingError):
    """Raised when a build artifact cannot be copied into the release tree."""


class GpgKeyFileUnreadable(PackagingError):
    """Raised when the ASCII-armored GPG public key file cannot be read."""
