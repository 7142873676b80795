"""Checksum manifest parsing.

GoReleaser writes one manifest per release, named
``<repo>_<version>_SHA256SUMS``::

    sha256  filename
    3b1f...  terraform-provider-acme_1.2.0_linux_amd64.zip
    9c0e...  terraform-provider-acme_1.2.0_darwin_arm64.zip

Hash and filename are separated by exactly two spaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from providerdist import fs
from providerdist.errors import MalformedManifestLine, ManifestUnreadable

if TYPE_CHECKING:
    from pathlib import Path

FIELD_SEPARATOR = "  "


@dataclass(frozen=True)
class ManifestEntry:
    """Single line of a checksum manifest.

    Attributes:
        checksum: Hex-encoded SHA256 of the file.
        filename: File name as listed in the manifest.
    """

    checksum: str
    filename: str


def manifest_filename(repo_name: str, version: str) -> str:
    """Name of the checksum manifest GoReleaser produces for a build."""
    return f"{repo_name}_{version}_SHA256SUMS"


def parse_checksum_manifest(content: str) -> list[ManifestEntry]:
    """Parse manifest text into entries, preserving line order.

    Blank lines are skipped. Every other line is split on the first
    occurrence of two consecutive spaces.

    Args:
        content: Manifest file content.

    Returns:
        One ManifestEntry per non-empty line.

    Raises:
        MalformedManifestLine: If a line lacks the separator or a field is empty.
    """
    entries: list[ManifestEntry] = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        checksum, sep, filename = line.partition(FIELD_SEPARATOR)
        if not sep or not checksum or not filename:
            raise MalformedManifestLine(line_number, line)
        entries.append(ManifestEntry(checksum=checksum, filename=filename))
    return entries


def load_checksum_manifest(dist_path: Path, repo_name: str, version: str) -> list[ManifestEntry]:
    """Load and parse the manifest for ``repo_name`` at ``version``.

    Raises:
        ManifestUnreadable: If the manifest file cannot be read.
        MalformedManifestLine: If a line is not in the expected format.
    """
    path = dist_path / manifest_filename(repo_name, version)
    try:
        lines = fs.read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read checksum manifest {path}: {e}"
        raise ManifestUnreadable(msg) from e
    return parse_checksum_manifest("\n".join(lines))
