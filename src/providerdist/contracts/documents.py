"""
Registry protocol documents.

Field names are the provider registry wire format and must not change:
remote registries and Terraform clients read these documents verbatim.
All documents serialize as orjson with 2-space indentation, fields in
declaration order.
"""

from __future__ import annotations

from typing import Any, TypeVar

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Plugin protocol versions advertised for every published build
PROVIDER_PROTOCOLS: tuple[str, ...] = ("4.0", "5.1")

_DocumentT = TypeVar("_DocumentT", bound="RegistryDocument")


class RegistryDocument(BaseModel):
    """Base for documents written to (or read from) a registry host.

    Unknown fields are ignored on input; registries are free to add
    keys such as ``warnings`` or ``login.v1``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict keyed by wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> bytes:
        """Serialize to indented JSON bytes using orjson."""
        return orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2)

    @classmethod
    def from_json(cls: type[_DocumentT], data: bytes | str) -> _DocumentT:
        """Deserialize from JSON.

        Raises:
            ValueError: If ``data`` is not JSON or does not match the schema.
        """
        if isinstance(data, str):
            data = data.encode()
        return cls.model_validate(orjson.loads(data))


class Platform(RegistryDocument):
    """One build target (operating system, CPU architecture).

    Fields read from a published ``versions`` document may be empty or
    missing; such a platform is kept as-is rather than failing the
    whole document.
    """

    os: str = Field(default="", description="Target operating system")
    arch: str = Field(default="", description="Target CPU architecture")

    @field_validator("os", "arch", mode="before")
    @classmethod
    def null_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v


class VersionRecord(RegistryDocument):
    """
    A published provider version.

    Attributes:
        version: Version string, unique within a VersionHistory.
        protocols: Plugin protocol versions the build speaks.
        platforms: Build targets available for this version.
    """

    version: str = Field(default="", description="Provider version")
    protocols: tuple[str, ...] = Field(default=(), description="Plugin protocol versions")
    platforms: tuple[Platform, ...] = Field(default=(), description="Available build targets")

    @field_validator("version", mode="before")
    @classmethod
    def null_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("protocols", "platforms", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Go-based registries serialize empty slices as null."""
        return () if v is None else v


class VersionHistory(RegistryDocument):
    """Contents of ``<providers.v1><namespace>/<type>/versions``."""

    versions: tuple[VersionRecord, ...] = Field(default=(), description="Published versions")

    @field_validator("versions", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Go-based registries serialize empty slices as null."""
        return () if v is None else v

    @property
    def version_strings(self) -> list[str]:
        """Version strings in document order."""
        return [record.version for record in self.versions]


class DiscoveryDocument(RegistryDocument):
    """
    Service discovery document served at ``/.well-known/terraform.json``.

    Attributes:
        providers_path: Base path of the provider registry protocol.
        modules_path: Base path of the module registry protocol.
    """

    providers_path: str = Field(..., min_length=1, alias="providers.v1")
    modules_path: str = Field(default="", alias="modules.v1")


class GpgPublicKey(RegistryDocument):
    """Signing key listed in an architecture document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_id: str = Field(..., min_length=1, description="GPG key fingerprint")
    ascii_armor: str = Field(..., description="ASCII-armored public key")
    trust_signature: str = ""
    source: str = ""
    source_url: str = ""


class SigningKeys(RegistryDocument):
    model_config = ConfigDict(frozen=True, extra="forbid")

    gpg_public_keys: tuple[GpgPublicKey, ...] = Field(default=())


class ArchitectureMetadata(RegistryDocument):
    """
    Download descriptor for one platform of one provider version.

    Served at ``<providers.v1><namespace>/<type>/<version>/download/<os>/<arch>``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    protocols: tuple[str, ...] = Field(..., description="Plugin protocol versions")
    os: str = Field(..., min_length=1)
    arch: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, description="Archive filename")
    download_url: str = Field(..., min_length=1)
    shasums_url: str = Field(..., min_length=1)
    shasums_signature_url: str = Field(..., min_length=1)
    shasum: str = Field(..., min_length=1, description="SHA256 of the archive")
    signing_keys: SigningKeys = Field(default_factory=SigningKeys)
