"""Tests for checksum manifest parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from providerdist.errors import MalformedManifestLine, ManifestUnreadable
from providerdist.manifest import (
    ManifestEntry,
    load_checksum_manifest,
    manifest_filename,
    parse_checksum_manifest,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestManifestFilename:
    """Tests for manifest_filename function."""

    def test_goreleaser_name(self) -> None:
        """Follows GoReleaser's <repo>_<version>_SHA256SUMS convention."""
        assert manifest_filename("acme-provider", "1.2.0") == "acme-provider_1.2.0_SHA256SUMS"


class TestParseChecksumManifest:
    """Tests for parse_checksum_manifest function."""

    def test_parses_standard_format(self) -> None:
        """Parses checksum and filename from each line."""
        content = """aaa  acme-provider_1.2.0_linux_amd64.zip
bbb  acme-provider_1.2.0_darwin_arm64.zip
"""
        result = parse_checksum_manifest(content)

        assert result == [
            ManifestEntry(checksum="aaa", filename="acme-provider_1.2.0_linux_amd64.zip"),
            ManifestEntry(checksum="bbb", filename="acme-provider_1.2.0_darwin_arm64.zip"),
        ]

    def test_preserves_manifest_order(self) -> None:
        """Entries come back in file order, not sorted."""
        content = "3  c.zip\n1  a.zip\n2  b.zip\n"
        result = parse_checksum_manifest(content)

        assert [e.filename for e in result] == ["c.zip", "a.zip", "b.zip"]

    def test_entry_count_matches_non_empty_lines(self) -> None:
        """One entry per non-empty line; blank lines are ignored."""
        content = "\naaa  one.zip\n\n\nbbb  two.zip\n   \nccc  README.txt\n"
        result = parse_checksum_manifest(content)

        non_empty = [line for line in content.splitlines() if line.strip()]
        assert len(result) == len(non_empty) == 3

    def test_splits_on_first_double_space(self) -> None:
        """Only the first two-space separator splits; the rest is the filename."""
        result = parse_checksum_manifest("abc123  odd  name.zip")

        assert result[0].checksum == "abc123"
        assert result[0].filename == "odd  name.zip"

    def test_keeps_checksum_case(self) -> None:
        """Checksums are copied verbatim into documents."""
        result = parse_checksum_manifest("ABCDEF  file.zip")

        assert result[0].checksum == "ABCDEF"

    def test_handles_crlf_line_endings(self) -> None:
        """Windows line endings do not leak into filenames."""
        result = parse_checksum_manifest("aaa  one.zip\r\nbbb  two.zip\r\n")

        assert [e.filename for e in result] == ["one.zip", "two.zip"]

    def test_empty_content(self) -> None:
        """Empty manifest yields no entries."""
        assert parse_checksum_manifest("") == []

    def test_single_space_separator_rejected(self) -> None:
        """A single space is not the manifest separator."""
        with pytest.raises(MalformedManifestLine) as exc_info:
            parse_checksum_manifest("aaa  ok.zip\nbbb broken.zip\n")

        assert exc_info.value.line_number == 2
        assert exc_info.value.line == "bbb broken.zip"

    def test_missing_filename_rejected(self) -> None:
        """A checksum with an empty filename field is malformed."""
        with pytest.raises(MalformedManifestLine):
            parse_checksum_manifest("aaa  ")

    def test_missing_checksum_rejected(self) -> None:
        """A line starting with the separator has no checksum."""
        with pytest.raises(MalformedManifestLine):
            parse_checksum_manifest("  file.zip")


class TestLoadChecksumManifest:
    """Tests for load_checksum_manifest function."""

    def test_loads_from_dist(self, tmp_path: Path) -> None:
        """Reads <repo>_<version>_SHA256SUMS from the dist directory."""
        (tmp_path / "acme-provider_1.2.0_SHA256SUMS").write_text(
            "aaa  acme-provider_1.2.0_linux_amd64.zip\n"
        )

        result = load_checksum_manifest(tmp_path, "acme-provider", "1.2.0")

        assert result == [
            ManifestEntry(checksum="aaa", filename="acme-provider_1.2.0_linux_amd64.zip")
        ]

    def test_missing_manifest_raises(self, tmp_path: Path) -> None:
        """A missing manifest is fatal."""
        with pytest.raises(ManifestUnreadable) as exc_info:
            load_checksum_manifest(tmp_path, "acme-provider", "1.2.0")

        assert "acme-provider_1.2.0_SHA256SUMS" in str(exc_info.value)

    def test_directory_instead_of_file_raises(self, tmp_path: Path) -> None:
        """A directory at the manifest path cannot be read."""
        (tmp_path / "acme-provider_1.2.0_SHA256SUMS").mkdir()

        with pytest.raises(ManifestUnreadable):
            load_checksum_manifest(tmp_path, "acme-provider", "1.2.0")
