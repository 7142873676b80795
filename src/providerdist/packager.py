"""
End-to-end packaging of one provider version.

Steps run sequentially; a fatal error stops the run and leaves whatever
was already written on disk:

1. Reset the release directory.
2. Resolve service discovery (writes the default document on fallback).
3. Fetch the published version history (skipped on discovery fallback).
4. Parse the checksum manifest, merge and write ``versions``.
5. Create the version directory, copy the manifest and its signature.
6. Create ``download/`` with target OS directories, copy archives.
7. Write one architecture document per platform archive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from providerdist.artifacts import (
    copy_archives,
    copy_manifest_files,
    create_download_tree,
    create_version_dirs,
    reset_release_dir,
)
from providerdist.discovery import resolve_discovery
from providerdist.emitter import emit_architecture_files
from providerdist.layout import ReleaseLayout
from providerdist.manifest import load_checksum_manifest
from providerdist.platforms import extract_platforms
from providerdist.versions import (
    build_version_record,
    fetch_remote_history,
    merge_version_history,
    write_version_history,
)

if TYPE_CHECKING:
    from pathlib import Path

    from providerdist.config import PackagerConfig
    from providerdist.contracts import VersionHistory
    from providerdist.discovery import ResolvedDiscovery
    from providerdist.registry_client import DocumentFetcher

logger = logging.getLogger(__name__)


@dataclass
class PackageResult:
    """
    Summary of a completed run.

    Attributes:
        discovery: Active discovery document and its source.
        history: Version history as written.
        layout: Paths and URLs used for the run.
        architecture_files: Written architecture documents.
        copied_files: Manifest, signature and archives copied from dist.
        skipped: Manifest filenames that produced no platform document.
    """

    discovery: ResolvedDiscovery
    history: VersionHistory
    layout: ReleaseLayout
    architecture_files: list[Path] = field(default_factory=list)
    copied_files: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


async def package_provider(config: PackagerConfig, fetcher: DocumentFetcher) -> PackageResult:
    """
    Build the release tree for ``config.version``.

    Args:
        config: Run configuration.
        fetcher: Client used to read the published registry documents.

    Returns:
        PackageResult describing what was written.

    Raises:
        PackagingError: On any local filesystem or manifest failure.
    """
    logger.info(
        "Packaging provider for private registry",
        extra={
            "namespace": config.namespace,
            "provider": config.provider_name,
            "version": config.version,
        },
    )

    reset_release_dir(config.release_dir)

    discovery = await resolve_discovery(
        fetcher,
        domain=config.domain,
        release_dir=config.release_dir,
        protocol=config.protocol,
    )
    layout = ReleaseLayout.from_discovery(
        discovery.document,
        release_dir=config.release_dir,
        domain=config.domain,
        namespace=config.namespace,
        provider_name=config.provider_name,
        repo_name=config.repo_name,
        version=config.version,
    )
    remote_history = (
        None if discovery.is_fallback else await fetch_remote_history(fetcher, layout.versions_url)
    )

    entries = load_checksum_manifest(config.dist_path, config.repo_name, config.version)
    platform_archives = extract_platforms(entries)
    recognized = {entry.filename for entry, _ in platform_archives}

    record = build_version_record(config.version, [platform for _, platform in platform_archives])
    history = merge_version_history(remote_history, record, config.merge_policy)
    write_version_history(history, layout.versions_file)

    create_version_dirs(layout)
    copied = copy_manifest_files(config.dist_path, layout)
    create_download_tree(layout)
    archives, _ = copy_archives(entries, config.dist_path, layout)
    copied.extend(archives)

    architecture_files = emit_architecture_files(
        platform_archives,
        layout,
        gpg_fingerprint=config.gpg_fingerprint,
        gpg_pubkey_file=config.gpg_pubkey_file,
    )

    result = PackageResult(
        discovery=discovery,
        history=history,
        layout=layout,
        architecture_files=architecture_files,
        copied_files=copied,
        skipped=[entry.filename for entry in entries if entry.filename not in recognized],
    )
    logger.info(
        "Packaged provider for private registry",
        extra={
            "discovery": discovery.source.value,
            "versions": history.version_strings,
            "architecture_files": len(result.architecture_files),
            "skipped": len(result.skipped),
        },
    )
    return result
