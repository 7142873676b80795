"""
Release tree layout and registry URLs.

Every local path and remote URL for a run is derived here from the
discovery document's ``providers.v1`` prefix, so the on-disk tree and the
URLs written into documents cannot drift apart.

    release/
        .well-known/terraform.json                 (discovery fallback only)
        v1/providers/<ns>/<name>/versions
        v1/providers/<ns>/<name>/<version>/
            <repo>_<version>_SHA256SUMS
            <repo>_<version>_SHA256SUMS.sig
            download/<archive>.zip
            download/<os>/<arch>
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from providerdist.manifest import manifest_filename

if TYPE_CHECKING:
    from collections.abc import Iterable

    from providerdist.contracts import DiscoveryDocument, Platform

WELL_KNOWN_DIR = ".well-known"
DOWNLOAD_DIR = "download"
VERSIONS_FILE = "versions"
SIGNATURE_SUFFIX = ".sig"


def join_segments(segments: Iterable[str]) -> str:
    """Join path or URL segments with exactly one ``/`` between them.

    Slashes at segment boundaries are collapsed and empty segments are
    dropped. A leading ``/`` on the first segment is kept, so absolute
    paths stay absolute; scheme separators inside a segment are untouched.

    Examples:
        >>> join_segments(["release", "/v1/providers/", "acme", "widget"])
        'release/v1/providers/acme/widget'
        >>> join_segments(["https://registry.example.com", "/v1/providers/", "acme"])
        'https://registry.example.com/v1/providers/acme'
    """
    parts: list[str] = []
    leading_slash = False
    for index, segment in enumerate(segments):
        if index == 0 and segment.startswith("/"):
            leading_slash = True
        stripped = segment.strip("/")
        if stripped:
            parts.append(stripped)
    joined = "/".join(parts)
    return f"/{joined}" if leading_slash else joined


def discovery_url(domain: str, protocol: str) -> str:
    """URL of the remote service discovery document."""
    return join_segments([f"https://{domain}", WELL_KNOWN_DIR, f"{protocol}.json"])


def well_known_file(release_dir: Path, protocol: str) -> Path:
    """Local path of the discovery fallback document."""
    return release_dir / WELL_KNOWN_DIR / f"{protocol}.json"


@dataclass(frozen=True)
class ReleaseLayout:
    """
    Paths and URLs for one provider version.

    Attributes:
        release_dir: Root of the local release tree.
        domain: Registry host name (no scheme).
        namespace: Registry namespace.
        provider_name: Provider type name.
        repo_name: Repository name used in GoReleaser artifact names.
        version: Version being published.
        providers_path: ``providers.v1`` prefix from the discovery document.
    """

    release_dir: Path
    domain: str
    namespace: str
    provider_name: str
    repo_name: str
    version: str
    providers_path: str

    @classmethod
    def from_discovery(
        cls,
        discovery: DiscoveryDocument,
        *,
        release_dir: Path,
        domain: str,
        namespace: str,
        provider_name: str,
        repo_name: str,
        version: str,
    ) -> ReleaseLayout:
        return cls(
            release_dir=release_dir,
            domain=domain,
            namespace=namespace,
            provider_name=provider_name,
            repo_name=repo_name,
            version=version,
            providers_path=discovery.providers_path,
        )

    @property
    def _provider_segments(self) -> list[str]:
        return [self.providers_path, self.namespace, self.provider_name]

    @property
    def _base_url(self) -> str:
        return f"https://{self.domain}"

    # -- local paths -------------------------------------------------------

    def _local(self, segments: list[str]) -> Path:
        return Path(join_segments([str(self.release_dir), *segments]))

    @property
    def versions_file(self) -> Path:
        return self._local([*self._provider_segments, VERSIONS_FILE])

    @property
    def version_dir_chain(self) -> list[Path]:
        """Directories from the release root down to the version directory.

        Used to create the tree one level at a time.
        """
        components = [
            component
            for segment in [*self._provider_segments, self.version]
            for component in segment.split("/")
            if component
        ]
        return [self._local(components[: depth + 1]) for depth in range(len(components))]

    @property
    def version_dir(self) -> Path:
        return self._local([*self._provider_segments, self.version])

    @property
    def download_dir(self) -> Path:
        return self.version_dir / DOWNLOAD_DIR

    @property
    def manifest_name(self) -> str:
        return manifest_filename(self.repo_name, self.version)

    def target_dir(self, os_name: str) -> Path:
        return self.download_dir / os_name

    def architecture_file(self, platform: Platform) -> Path:
        """Path of the architecture document for ``platform`` (no extension)."""
        return self.target_dir(platform.os) / platform.arch

    # -- remote URLs -------------------------------------------------------

    @property
    def versions_url(self) -> str:
        return join_segments([self._base_url, *self._provider_segments, VERSIONS_FILE])

    @property
    def version_url(self) -> str:
        return join_segments([self._base_url, *self._provider_segments, self.version])

    def download_url(self, filename: str) -> str:
        return join_segments([self.version_url, DOWNLOAD_DIR, filename])

    @property
    def shasums_url(self) -> str:
        return join_segments([self.version_url, self.manifest_name])

    @property
    def shasums_signature_url(self) -> str:
        return self.shasums_url + SIGNATURE_SUFFIX
