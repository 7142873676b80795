"""
Service discovery resolution.

The registry host advertises its protocol base paths at
``https://<domain>/.well-known/<protocol>.json``. When that document cannot
be fetched, the default paths are used and a copy of the default document
is written into the release tree so the host can serve it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from providerdist import fs
from providerdist.contracts import DiscoveryDocument
from providerdist.errors import FileWriteFailed, RemoteFetchFailed
from providerdist.layout import discovery_url, well_known_file

if TYPE_CHECKING:
    from pathlib import Path

    from providerdist.registry_client import DocumentFetcher

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "terraform"

DEFAULT_DISCOVERY = DiscoveryDocument(
    providers_path="/v1/providers/",
    modules_path="/v1/modules/",
)


class DiscoverySource(str, Enum):
    """Where the active discovery document came from."""

    REMOTE = "remote"
    DEFAULT = "default"


@dataclass(frozen=True)
class ResolvedDiscovery:
    """
    Outcome of discovery resolution.

    Attributes:
        document: Active discovery document.
        source: Whether it was fetched or fell back to the default.
        fallback_path: Where the default was written, if it was.
    """

    document: DiscoveryDocument
    source: DiscoverySource
    fallback_path: Path | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source == DiscoverySource.DEFAULT


def write_discovery_document(
    document: DiscoveryDocument, release_dir: Path, protocol: str = DEFAULT_PROTOCOL
) -> Path:
    """Write ``document`` to ``<release_dir>/.well-known/<protocol>.json``.

    Raises:
        FileWriteFailed: If the directory or file cannot be written.
    """
    path = well_known_file(release_dir, protocol)
    try:
        fs.create_dir_recursive(path.parent)
        fs.write_bytes(path, document.to_json())
    except OSError as e:
        msg = f"Cannot write discovery document {path}: {e}"
        raise FileWriteFailed(msg) from e
    return path


async def resolve_discovery(
    fetcher: DocumentFetcher,
    *,
    domain: str,
    release_dir: Path,
    protocol: str = DEFAULT_PROTOCOL,
    default: DiscoveryDocument = DEFAULT_DISCOVERY,
) -> ResolvedDiscovery:
    """
    Fetch the remote discovery document, falling back to ``default``.

    Any fetch failure (status, network, malformed body) selects the default
    and persists it under the release tree.

    Raises:
        FileWriteFailed: If the fallback document cannot be written.
    """
    url = discovery_url(domain, protocol)
    logger.info("Resolving service discovery", extra={"url": url})
    try:
        document = await fetcher.fetch_document(url, DiscoveryDocument)
    except RemoteFetchFailed as e:
        logger.warning(
            "Discovery document unavailable, using defaults",
            extra={"reason": e.reason, "providers_path": default.providers_path},
        )
        path = write_discovery_document(default, release_dir, protocol)
        return ResolvedDiscovery(
            document=default, source=DiscoverySource.DEFAULT, fallback_path=path
        )

    logger.info(
        "Discovery document resolved",
        extra={"providers_path": document.providers_path, "modules_path": document.modules_path},
    )
    return ResolvedDiscovery(document=document, source=DiscoverySource.REMOTE)
