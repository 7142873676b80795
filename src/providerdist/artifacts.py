"""
Release tree construction and build artifact copies.

Creates the version directory, copies the checksum manifest with its
detached signature next to it, and copies every deployable archive into
``download/`` so that the URLs in architecture documents resolve.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from providerdist import fs
from providerdist.errors import ArtifactCopyFailed, FileWriteFailed
from providerdist.layout import SIGNATURE_SUFFIX
from providerdist.platforms import TARGET_OS_DIRS, is_deployable_archive

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from providerdist.layout import ReleaseLayout
    from providerdist.manifest import ManifestEntry

logger = logging.getLogger(__name__)


def _create_dir(path: Path) -> None:
    try:
        fs.create_dir(path)
    except OSError as e:
        msg = f"Cannot create directory {path}: {e}"
        raise FileWriteFailed(msg) from e


def _copy(src: Path, dst: Path) -> None:
    try:
        fs.copy_file(src, dst)
    except OSError as e:
        msg = f"Cannot copy {src} to {dst}: {e}"
        raise ArtifactCopyFailed(msg) from e


def reset_release_dir(release_dir: Path) -> None:
    """Delete and recreate the release root.

    Raises:
        FileWriteFailed: If the directory cannot be removed or created.
    """
    try:
        fs.delete_dir(release_dir)
        fs.create_dir_recursive(release_dir)
    except OSError as e:
        msg = f"Cannot reset release directory {release_dir}: {e}"
        raise FileWriteFailed(msg) from e


def create_version_dirs(layout: ReleaseLayout) -> Path:
    """Create ``<providers.v1>/<namespace>/<name>/<version>/`` level by level."""
    logger.info("Creating provider version directories", extra={"path": str(layout.version_dir)})
    for directory in layout.version_dir_chain:
        _create_dir(directory)
    return layout.version_dir


def create_download_tree(layout: ReleaseLayout) -> Path:
    """Create ``download/`` and one directory per supported target OS."""
    logger.info("Creating download directories", extra={"path": str(layout.download_dir)})
    _create_dir(layout.download_dir)
    for os_name in TARGET_OS_DIRS:
        _create_dir(layout.target_dir(os_name))
    return layout.download_dir


def copy_manifest_files(dist_path: Path, layout: ReleaseLayout) -> list[Path]:
    """Copy the checksum manifest and its signature into the version directory.

    Raises:
        ArtifactCopyFailed: If either file is missing or cannot be copied.
    """
    logger.info("Copying SHA files", extra={"src": str(dist_path)})
    copied: list[Path] = []
    for name in (layout.manifest_name, layout.manifest_name + SIGNATURE_SUFFIX):
        dst = layout.version_dir / name
        _copy(dist_path / name, dst)
        copied.append(dst)
    return copied


def copy_archives(
    entries: Iterable[ManifestEntry], dist_path: Path, layout: ReleaseLayout
) -> tuple[list[Path], list[str]]:
    """
    Copy every deployable archive listed in the manifest into ``download/``.

    Returns:
        (copied destination paths, skipped filenames).

    Raises:
        ArtifactCopyFailed: If a listed archive cannot be copied.
    """
    logger.info("Copying build zips")
    copied: list[Path] = []
    skipped: list[str] = []
    for entry in entries:
        if not is_deployable_archive(entry.filename):
            logger.warning("Not a zip file, skipping", extra={"archive": entry.filename})
            skipped.append(entry.filename)
            continue
        src = dist_path / entry.filename
        dst = layout.download_dir / entry.filename
        _copy(src, dst)
        logger.info("Copied archive", extra={"src": str(src), "dst": str(dst)})
        copied.append(dst)
    return copied, skipped
