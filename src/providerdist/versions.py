"""
Version history reconciliation.

The published ``versions`` document is rebuilt on every run: the remote
history (if the registry is reachable) is deduplicated by version string,
first occurrence wins, and the newly built version is added according to
the configured MergePolicy.

ALWAYS_APPEND adds the new record unconditionally, so re-publishing a
version that is already listed lists it twice. STRICT_DEDUP runs the new
record through the same first-occurrence rule, leaving the existing entry
in place.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from providerdist import fs
from providerdist.contracts import PROVIDER_PROTOCOLS, VersionHistory, VersionRecord
from providerdist.errors import FileWriteFailed, RemoteFetchFailed

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from providerdist.contracts import Platform
    from providerdist.registry_client import DocumentFetcher

logger = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    """How the newly built version joins the remote history."""

    ALWAYS_APPEND = "always-append"
    STRICT_DEDUP = "strict-dedup"


def build_version_record(
    version: str,
    platforms: Iterable[Platform],
    protocols: Iterable[str] = PROVIDER_PROTOCOLS,
) -> VersionRecord:
    """Create the record for the version being published."""
    return VersionRecord(
        version=version,
        protocols=tuple(protocols),
        platforms=tuple(platforms),
    )


def merge_version_history(
    remote: VersionHistory | None,
    new_record: VersionRecord,
    policy: MergePolicy = MergePolicy.ALWAYS_APPEND,
) -> VersionHistory:
    """
    Combine the remote history with the new record.

    Args:
        remote: Previously published history, or None if unavailable.
        new_record: Record for the version being published.
        policy: How to treat a new version that is already listed.

    Returns:
        Remote records in remote order (duplicates collapsed to the first
        occurrence) followed by the new record, unless STRICT_DEDUP drops it.
    """
    merged: list[VersionRecord] = []
    seen: set[str] = set()
    for record in remote.versions if remote is not None else ():
        if record.version in seen:
            logger.debug("Dropping duplicate remote version", extra={"version": record.version})
            continue
        seen.add(record.version)
        merged.append(record)

    if new_record.version in seen:
        if policy == MergePolicy.STRICT_DEDUP:
            logger.warning(
                "Version already published, keeping existing entry",
                extra={"version": new_record.version, "policy": policy.value},
            )
            return VersionHistory(versions=tuple(merged))
        logger.warning(
            "Version already published, appending duplicate entry",
            extra={"version": new_record.version, "policy": policy.value},
        )

    merged.append(new_record)
    return VersionHistory(versions=tuple(merged))


async def fetch_remote_history(fetcher: DocumentFetcher, url: str) -> VersionHistory | None:
    """Fetch the published history. Returns None if it cannot be fetched."""
    logger.info("Downloading versions file", extra={"url": url})
    try:
        history = await fetcher.fetch_document(url, VersionHistory)
    except RemoteFetchFailed as e:
        logger.warning(
            "Versions file unavailable, starting from empty history",
            extra={"reason": e.reason},
        )
        return None
    logger.info("Remote versions loaded", extra={"count": len(history.versions)})
    return history


def write_version_history(history: VersionHistory, path: Path) -> None:
    """Write the merged history, creating parent directories.

    Raises:
        FileWriteFailed: If the directory or file cannot be written.
    """
    try:
        fs.create_dir_recursive(path.parent)
        fs.write_bytes(path, history.to_json())
    except OSError as e:
        msg = f"Cannot write versions file {path}: {e}"
        raise FileWriteFailed(msg) from e
    logger.info(
        "Wrote versions file",
        extra={"path": str(path), "versions": history.version_strings},
    )
