"""Test doubles and dist-directory builders for packaging tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from providerdist.errors import RemoteFetchFailed

if TYPE_CHECKING:
    from pathlib import Path

    from providerdist.contracts import RegistryDocument

DocumentT = TypeVar("DocumentT", bound="RegistryDocument")

DOMAIN = "registry.example.com"
NAMESPACE = "acme"
PROVIDER = "widget"
REPO = "acme-provider"
FINGERPRINT = "0123456789ABCDEF0123456789ABCDEF01234567"

PUBLIC_KEY = (
    "-----BEGIN PGP PUBLIC KEY BLOCK-----\n"
    "\n"
    "mQENBGTestKeyMaterialOnlyForUnitTests\n"
    "=abcd\n"
    "-----END PGP PUBLIC KEY BLOCK-----\n"
)

WELL_KNOWN_URL = f"https://{DOMAIN}/.well-known/terraform.json"
VERSIONS_URL = f"https://{DOMAIN}/v1/providers/{NAMESPACE}/{PROVIDER}/versions"


class FakeFetcher:
    """In-memory registry host.

    URLs missing from ``responses`` behave like a 404.
    """

    def __init__(self, responses: dict[str, bytes | Exception] | None = None) -> None:
        self.responses = responses or {}
        self.requested: list[str] = []

    async def fetch_document(self, url: str, document_type: type[DocumentT]) -> DocumentT:
        self.requested.append(url)
        response = self.responses.get(url)
        if response is None:
            raise RemoteFetchFailed(url, "status code 404, expected 200", status=404)
        if isinstance(response, Exception):
            raise response
        try:
            return document_type.from_json(response)
        except ValueError as e:
            raise RemoteFetchFailed(url, f"malformed {document_type.__name__}: {e}") from e


def write_dist(
    dist: Path,
    lines: list[str],
    *,
    repo: str = REPO,
    version: str = "1.2.0",
    with_signature: bool = True,
) -> Path:
    """Create a GoReleaser-like dist directory.

    Every ``.zip`` named in ``lines`` is created with placeholder content.
    """
    dist.mkdir(parents=True, exist_ok=True)
    manifest = dist / f"{repo}_{version}_SHA256SUMS"
    manifest.write_text("\n".join(lines) + "\n")
    if with_signature:
        (dist / f"{manifest.name}.sig").write_bytes(b"signature")
    for line in lines:
        _, _, filename = line.partition("  ")
        if filename.endswith(".zip"):
            (dist / filename).write_bytes(f"archive {filename}".encode())
    return dist


def write_public_key(path: Path, content: str = PUBLIC_KEY) -> Path:
    path.write_text(content)
    return path
