"""Private Terraform provider registry packaging.

Turns a GoReleaser ``dist/`` directory into the static file tree a provider
registry host serves: discovery document, version list, per-platform
download descriptors and the signed artifacts they point to.
"""

from providerdist.config import PackagerConfig
from providerdist.errors import (
    ArtifactCopyFailed,
    FileWriteFailed,
    GpgKeyFileUnreadable,
    MalformedManifestLine,
    ManifestUnreadable,
    PackagingError,
    RemoteFetchFailed,
    UnrecognizedFilename,
)
from providerdist.packager import PackageResult, package_provider
from providerdist.versions import MergePolicy

__version__ = "0.1.0"

__all__ = [
    "ArtifactCopyFailed",
    "FileWriteFailed",
    "GpgKeyFileUnreadable",
    "MalformedManifestLine",
    "ManifestUnreadable",
    "MergePolicy",
    "PackageResult",
    "PackagerConfig",
    "PackagingError",
    "RemoteFetchFailed",
    "UnrecognizedFilename",
    "package_provider",
]
