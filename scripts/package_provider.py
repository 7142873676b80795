#!/usr/bin/env python3
"""
Package a GoReleaser build for a private Terraform provider registry.

Reads the checksum manifest, archives and signature from the dist directory
and writes a static registry tree under ./release, merging the version list
already published on the registry host.

Usage:
    python scripts/package_provider.py -ns acme -d registry.example.com \\
        -p widget -r terraform-provider-widget -v 1.2.0 -gf 0123ABCD...

    # Refuse to list an already-published version twice:
    python scripts/package_provider.py ... --merge-policy strict-dedup

Exit code 0 = release tree written; 1 = configuration or packaging error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from providerdist.config import PackagerConfig
from providerdist.discovery import DEFAULT_PROTOCOL
from providerdist.errors import PackagingError
from providerdist.logging_config import get_logger, setup_logging
from providerdist.packager import PackageResult, package_provider
from providerdist.registry_client import DEFAULT_TIMEOUT_S, RegistryClient
from providerdist.versions import MergePolicy

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Package a Terraform provider build for a private registry.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Registry coordinates
    parser.add_argument(
        "-ns", "--namespace", default="", help="Namespace for the Terraform registry."
    )
    parser.add_argument("-d", "--domain", default="", help="Private Terraform registry domain.")
    parser.add_argument("-p", "--provider", default="", help="Name of the Terraform provider.")

    # Build inputs
    parser.add_argument(
        "-dp",
        "--dist-path",
        type=Path,
        default=Path("dist"),
        help="Path to Go Releaser build files (default: dist)",
    )
    parser.add_argument(
        "-r",
        "--repo",
        default="",
        help="Name of the provider repository used in Go Releaser build name.",
    )
    parser.add_argument("-v", "--version", default="", help="Semantic version of build.")
    parser.add_argument(
        "-gf",
        "--gpg-fingerprint",
        default="",
        help="GPG Fingerprint of key used by Go Releaser (default: $GPG_FINGERPRINT)",
    )
    parser.add_argument(
        "-gk",
        "--gpg-key-file",
        type=Path,
        default=Path("pubkey.txt"),
        help="Path to GPG Public Key in ASCII Armor format (default: pubkey.txt)",
    )

    # Output and behavior
    parser.add_argument(
        "--release-dir",
        type=Path,
        default=Path("release"),
        help="Output directory, deleted and recreated on each run (default: release)",
    )
    parser.add_argument(
        "--protocol",
        default=DEFAULT_PROTOCOL,
        help=f"Discovery document name under /.well-known/ (default: {DEFAULT_PROTOCOL})",
    )
    parser.add_argument(
        "--merge-policy",
        choices=[policy.value for policy in MergePolicy],
        default=MergePolicy.ALWAYS_APPEND.value,
        help="How to treat a version already in the published list (default: always-append)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_S,
        help=f"Registry request timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        default="text",
        choices=["json", "text"],
        help="Log output format (default: text)",
    )
    return parser


async def run(config: PackagerConfig) -> PackageResult:
    """Package with a registry client scoped to the run."""
    async with RegistryClient(timeout_s=config.request_timeout_s) as client:
        return await package_provider(config, client)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, json_format=args.log_format == "json")

    try:
        config = PackagerConfig(
            namespace=args.namespace,
            domain=args.domain,
            provider_name=args.provider,
            repo_name=args.repo,
            version=args.version,
            gpg_fingerprint=args.gpg_fingerprint,
            dist_path=args.dist_path,
            gpg_pubkey_file=args.gpg_key_file,
            release_dir=args.release_dir,
            protocol=args.protocol,
            merge_policy=MergePolicy(args.merge_policy),
            request_timeout_s=args.timeout,
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        result = asyncio.run(run(config))
    except PackagingError as e:
        logger.error("Packaging failed: %s", e)
        return 1

    if result.skipped:
        logger.info("Skipped manifest entries: %s", ", ".join(result.skipped))
    logger.info("Release tree written to %s", config.release_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
