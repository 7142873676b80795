"""Registry host fixtures."""

from tests.fixtures.registry.fake_registry import (
    DOMAIN,
    FINGERPRINT,
    NAMESPACE,
    PROVIDER,
    PUBLIC_KEY,
    REPO,
    VERSIONS_URL,
    WELL_KNOWN_URL,
    FakeFetcher,
    write_dist,
    write_public_key,
)

__all__ = [
    "DOMAIN",
    "FINGERPRINT",
    "NAMESPACE",
    "PROVIDER",
    "PUBLIC_KEY",
    "REPO",
    "VERSIONS_URL",
    "WELL_KNOWN_URL",
    "FakeFetcher",
    "write_dist",
    "write_public_key",
]
