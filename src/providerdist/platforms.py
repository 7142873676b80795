"""Platform identification from GoReleaser archive names.

Archives follow ``<repo>_<version>_<os>_<arch>.zip``. The naming convention is
isolated here so it can be validated independently of any I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from providerdist.contracts import Platform
from providerdist.errors import UnrecognizedFilename

if TYPE_CHECKING:
    from collections.abc import Iterable

    from providerdist.manifest import ManifestEntry

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".zip"

# Positions within the underscore-split stem
_OS_INDEX = 2
_ARCH_INDEX = 3

# Created under download/ for every release, whatever the manifest lists
TARGET_OS_DIRS: tuple[str, ...] = ("darwin", "freebsd", "linux", "windows")


def parse_platform(filename: str) -> Platform:
    """Derive the build target from an archive filename.

    The text before the first ``.zip`` is split on ``_``; tokens 2 and 3
    are the operating system and architecture.

    Raises:
        UnrecognizedFilename: If the name has no ``.zip`` or fewer than 4 tokens.
    """
    stem, sep, _ = filename.partition(ARCHIVE_SUFFIX)
    if not sep:
        raise UnrecognizedFilename(filename)
    tokens = stem.split("_")
    if len(tokens) <= _ARCH_INDEX:
        raise UnrecognizedFilename(filename)
    os_name, arch = tokens[_OS_INDEX], tokens[_ARCH_INDEX]
    if not os_name or not arch:
        raise UnrecognizedFilename(filename)
    return Platform(os=os_name, arch=arch)


def is_deployable_archive(filename: str) -> bool:
    """Whether a manifest entry is an archive to publish under ``download/``."""
    return filename.endswith(ARCHIVE_SUFFIX)


def extract_platforms(
    entries: Iterable[ManifestEntry],
) -> list[tuple[ManifestEntry, Platform]]:
    """Pair each recognized manifest entry with its platform.

    Unrecognized names are logged and skipped. Duplicate platforms are kept.
    """
    recognized: list[tuple[ManifestEntry, Platform]] = []
    for entry in entries:
        try:
            platform = parse_platform(entry.filename)
        except UnrecognizedFilename:
            logger.warning(
                "Filename is not in the expected format, skipping",
                extra={"archive": entry.filename},
            )
            continue
        recognized.append((entry, platform))
    return recognized
