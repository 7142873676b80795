"""Tests for service discovery resolution and its fallback document."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from providerdist.contracts import DiscoveryDocument
from providerdist.discovery import (
    DEFAULT_DISCOVERY,
    DiscoverySource,
    resolve_discovery,
    write_discovery_document,
)
from providerdist.errors import FileWriteFailed, RemoteFetchFailed
from tests.fixtures.registry import DOMAIN, WELL_KNOWN_URL, FakeFetcher

if TYPE_CHECKING:
    from pathlib import Path


class TestResolveDiscovery:
    """Tests for resolve_discovery function."""

    @pytest.mark.asyncio
    async def test_remote_document_used_and_nothing_written(self, tmp_path: Path) -> None:
        """A reachable registry decides the paths; no fallback file appears."""
        body = b'{"providers.v1": "/terraform/providers/v1/", "modules.v1": "/m/"}'
        fetcher = FakeFetcher({WELL_KNOWN_URL: body})

        resolved = await resolve_discovery(fetcher, domain=DOMAIN, release_dir=tmp_path)

        assert resolved.source == DiscoverySource.REMOTE
        assert not resolved.is_fallback
        assert resolved.fallback_path is None
        assert resolved.document.providers_path == "/terraform/providers/v1/"
        assert fetcher.requested == [WELL_KNOWN_URL]
        assert not (tmp_path / ".well-known").exists()

    @pytest.mark.asyncio
    async def test_unreachable_registry_writes_default(self, tmp_path: Path) -> None:
        """Fallback uses default paths and persists them for the host to serve."""
        resolved = await resolve_discovery(FakeFetcher(), domain=DOMAIN, release_dir=tmp_path)

        assert resolved.is_fallback
        assert resolved.document == DEFAULT_DISCOVERY
        assert resolved.fallback_path == tmp_path / ".well-known" / "terraform.json"
        assert json.loads(resolved.fallback_path.read_text()) == {
            "providers.v1": "/v1/providers/",
            "modules.v1": "/v1/modules/",
        }

    @pytest.mark.asyncio
    async def test_network_error_falls_back(self, tmp_path: Path) -> None:
        fetcher = FakeFetcher({WELL_KNOWN_URL: RemoteFetchFailed(WELL_KNOWN_URL, "timeout")})

        resolved = await resolve_discovery(fetcher, domain=DOMAIN, release_dir=tmp_path)

        assert resolved.is_fallback

    @pytest.mark.asyncio
    async def test_malformed_body_falls_back(self, tmp_path: Path) -> None:
        """An HTML error page served with 200 is treated like an unreachable host."""
        fetcher = FakeFetcher({WELL_KNOWN_URL: b"<html>maintenance</html>"})

        resolved = await resolve_discovery(fetcher, domain=DOMAIN, release_dir=tmp_path)

        assert resolved.is_fallback
        assert (tmp_path / ".well-known" / "terraform.json").is_file()

    @pytest.mark.asyncio
    async def test_protocol_selects_document_name(self, tmp_path: Path) -> None:
        fetcher = FakeFetcher()

        resolved = await resolve_discovery(
            fetcher, domain=DOMAIN, release_dir=tmp_path, protocol="opentofu"
        )

        assert fetcher.requested == [f"https://{DOMAIN}/.well-known/opentofu.json"]
        assert resolved.fallback_path == tmp_path / ".well-known" / "opentofu.json"

    @pytest.mark.asyncio
    async def test_custom_default(self, tmp_path: Path) -> None:
        default = DiscoveryDocument(providers_path="/providers/", modules_path="")

        resolved = await resolve_discovery(
            FakeFetcher(), domain=DOMAIN, release_dir=tmp_path, default=default
        )

        assert resolved.document == default


class TestWriteDiscoveryDocument:
    def test_creates_well_known_dir(self, tmp_path: Path) -> None:
        path = write_discovery_document(DEFAULT_DISCOVERY, tmp_path / "release")

        assert path == tmp_path / "release" / ".well-known" / "terraform.json"
        assert DiscoveryDocument.from_json(path.read_bytes()) == DEFAULT_DISCOVERY

    def test_unwritable_release_dir_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "release"
        blocker.write_text("not a directory")

        with pytest.raises(FileWriteFailed):
            write_discovery_document(DEFAULT_DISCOVERY, blocker)
