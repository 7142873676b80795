"""
Packaging run configuration.

One PackagerConfig describes one provider version to publish.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from providerdist.discovery import DEFAULT_PROTOCOL
from providerdist.registry_client import DEFAULT_TIMEOUT_S
from providerdist.versions import MergePolicy

# Read when no fingerprint is passed explicitly (GoReleaser convention)
GPG_FINGERPRINT_ENV_VAR = "GPG_FINGERPRINT"

_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("namespace", "Namespace"),
    ("domain", "Domain"),
    ("provider_name", "Provider name"),
    ("repo_name", "Repository name"),
    ("version", "Version"),
    ("gpg_fingerprint", "GPG Fingerprint"),
)


@dataclass
class PackagerConfig:
    """
    Settings for a single packaging run.

    Attributes:
        namespace: Registry namespace (e.g. "acme").
        domain: Registry host name, without scheme.
        provider_name: Provider type name (e.g. "widget").
        repo_name: Repository name used in GoReleaser artifact names.
        version: Semantic version of the build.
        gpg_fingerprint: Fingerprint of the key GoReleaser signed with.
        dist_path: GoReleaser output directory.
        gpg_pubkey_file: ASCII-armored public key file.
        release_dir: Root of the generated release tree (wiped each run).
        protocol: Name of the discovery document under /.well-known/.
        merge_policy: How the new version joins the remote history.
        request_timeout_s: Total timeout per registry request.
    """

    namespace: str
    domain: str
    provider_name: str
    repo_name: str
    version: str
    gpg_fingerprint: str = ""
    dist_path: Path = field(default_factory=lambda: Path("dist"))
    gpg_pubkey_file: Path = field(default_factory=lambda: Path("pubkey.txt"))
    release_dir: Path = field(default_factory=lambda: Path("release"))
    protocol: str = DEFAULT_PROTOCOL
    merge_policy: MergePolicy = MergePolicy.ALWAYS_APPEND
    request_timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if not self.gpg_fingerprint:
            self.gpg_fingerprint = os.environ.get(GPG_FINGERPRINT_ENV_VAR, "")
        for name, label in _REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ValueError(f"{label} is required.")
        if "/" in self.domain:
            raise ValueError(
                f"domain must be a host name without scheme or path, got {self.domain!r}"
            )
        if not self.protocol:
            raise ValueError("protocol must not be empty")
        if self.request_timeout_s <= 0:
            raise ValueError(f"request_timeout_s must be > 0, got {self.request_timeout_s}")
        self.dist_path = Path(self.dist_path)
        self.gpg_pubkey_file = Path(self.gpg_pubkey_file)
        self.release_dir = Path(self.release_dir)
        self.merge_policy = MergePolicy(self.merge_policy)
