"""Registry protocol document contracts."""

from providerdist.contracts.documents import (
    PROVIDER_PROTOCOLS,
    ArchitectureMetadata,
    DiscoveryDocument,
    GpgPublicKey,
    Platform,
    RegistryDocument,
    SigningKeys,
    VersionHistory,
    VersionRecord,
)

__all__ = [
    "PROVIDER_PROTOCOLS",
    "ArchitectureMetadata",
    "DiscoveryDocument",
    "GpgPublicKey",
    "Platform",
    "RegistryDocument",
    "SigningKeys",
    "VersionHistory",
    "VersionRecord",
]
