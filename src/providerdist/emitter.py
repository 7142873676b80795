"""
Architecture document emission.

One document per recognized platform archive, written to
``download/<os>/<arch>`` under the version directory. Documents are
independent: each is built, serialized and written before the next one,
and a failure leaves earlier documents in place.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from providerdist import fs
from providerdist.contracts import (
    PROVIDER_PROTOCOLS,
    ArchitectureMetadata,
    GpgPublicKey,
    SigningKeys,
)
from providerdist.errors import FileWriteFailed, GpgKeyFileUnreadable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from providerdist.contracts import Platform
    from providerdist.layout import ReleaseLayout
    from providerdist.manifest import ManifestEntry

logger = logging.getLogger(__name__)


def read_ascii_armor(path: Path) -> str:
    """Read an ASCII-armored public key, each line terminated by ``\\n``.

    Raises:
        GpgKeyFileUnreadable: If the key file cannot be read.
    """
    try:
        lines = fs.read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read GPG public key file {path}: {e}"
        raise GpgKeyFileUnreadable(msg) from e
    return "".join(f"{line}\n" for line in lines)


def build_signing_key(fingerprint: str, ascii_armor: str) -> GpgPublicKey:
    return GpgPublicKey(key_id=fingerprint, ascii_armor=ascii_armor)


def build_architecture_metadata(
    entry: ManifestEntry,
    platform: Platform,
    layout: ReleaseLayout,
    signing_key: GpgPublicKey,
    protocols: Iterable[str] = PROVIDER_PROTOCOLS,
) -> ArchitectureMetadata:
    """Assemble the download descriptor for one archive."""
    return ArchitectureMetadata(
        protocols=tuple(protocols),
        os=platform.os,
        arch=platform.arch,
        filename=entry.filename,
        download_url=layout.download_url(entry.filename),
        shasums_url=layout.shasums_url,
        shasums_signature_url=layout.shasums_signature_url,
        shasum=entry.checksum,
        signing_keys=SigningKeys(gpg_public_keys=(signing_key,)),
    )


def write_architecture_file(metadata: ArchitectureMetadata, path: Path) -> None:
    """Write one architecture document, creating its directory if needed.

    Raises:
        FileWriteFailed: If the directory or file cannot be written.
    """
    try:
        fs.create_dir_recursive(path.parent)
        fs.write_bytes(path, metadata.to_json())
    except OSError as e:
        msg = f"Cannot write architecture file {path}: {e}"
        raise FileWriteFailed(msg) from e


def emit_architecture_files(
    archives: Iterable[tuple[ManifestEntry, Platform]],
    layout: ReleaseLayout,
    *,
    gpg_fingerprint: str,
    gpg_pubkey_file: Path,
) -> list[Path]:
    """
    Write an architecture document for every platform archive.

    Args:
        archives: Manifest entries paired with their recognized platform.
        layout: Paths and URLs for the version being published.
        gpg_fingerprint: Fingerprint of the key that signed the manifest.
        gpg_pubkey_file: ASCII-armored public key file.

    Returns:
        Paths of the written documents, in manifest order.

    Raises:
        GpgKeyFileUnreadable: If the key file cannot be read (nothing written).
        FileWriteFailed: If a document cannot be written.
    """
    logger.info("Creating architecture files in target directories")

    signing_key = build_signing_key(gpg_fingerprint, read_ascii_armor(gpg_pubkey_file))

    written: list[Path] = []
    for entry, platform in archives:
        metadata = build_architecture_metadata(entry, platform, layout, signing_key)
        path = layout.architecture_file(platform)
        write_architecture_file(metadata, path)
        logger.info(
            "Wrote architecture file",
            extra={"path": str(path), "os": platform.os, "arch": platform.arch},
        )
        written.append(path)
    return written
