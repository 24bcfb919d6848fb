"""
Parameters for credentials the service generates itself.

Each class maps to the credential type it produces. Like the value types,
nothing is checked until ``validate()`` runs from a builder's ``build()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from credhub.errors import InvalidArgumentError
from credhub.models import CredentialType, KeyLength


def _check_key_length(key_length: int | None) -> None:
    if key_length is None:
        return
    try:
        KeyLength(key_length)
    except ValueError:
        allowed = ", ".join(str(k.value) for k in KeyLength)
        raise InvalidArgumentError(
            f"key_length must be one of {allowed}, got {key_length}"
        ) from None


@dataclass(frozen=True)
class PasswordParameters:
    """Character-set and length rules for a generated password."""

    credential_type: ClassVar[CredentialType] = CredentialType.PASSWORD

    length: int | None = None
    exclude_upper: bool | None = None
    exclude_lower: bool | None = None
    exclude_number: bool | None = None
    include_special: bool | None = None

    def validate(self) -> None:
        if self.length is not None and self.length <= 0:
            raise InvalidArgumentError(f"password length must be positive, got {self.length}")


@dataclass(frozen=True)
class UserParameters(PasswordParameters):
    """Password rules for a generated user; the username is set on the request."""

    credential_type: ClassVar[CredentialType] = CredentialType.USER


@dataclass(frozen=True)
class SshParameters:
    credential_type: ClassVar[CredentialType] = CredentialType.SSH

    key_length: int | None = None
    ssh_comment: str | None = None

    def validate(self) -> None:
        _check_key_length(self.key_length)


@dataclass(frozen=True)
class RsaParameters:
    credential_type: ClassVar[CredentialType] = CredentialType.RSA

    key_length: int | None = None

    def validate(self) -> None:
        _check_key_length(self.key_length)


@dataclass(frozen=True)
class CertificateParameters:
    """Subject, signing and usage options for a generated certificate.

    The service needs at least one subject field and a way to sign: the name
    of a CA credential, ``self_sign`` or ``is_ca``.
    """

    credential_type: ClassVar[CredentialType] = CredentialType.CERTIFICATE

    key_length: int | None = None
    common_name: str | None = None
    alternative_names: tuple[str, ...] = field(default_factory=tuple)
    organization: str | None = None
    organization_unit: str | None = None
    locality: str | None = None
    state: str | None = None
    country: str | None = None
    duration: int | None = None
    certificate_authority: str | None = None
    self_sign: bool | None = None
    is_ca: bool | None = None
    key_usage: tuple[str, ...] = field(default_factory=tuple)
    extended_key_usage: tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        _check_key_length(self.key_length)
        subject = (
            self.common_name,
            self.organization,
            self.organization_unit,
            self.locality,
            self.state,
            self.country,
        )
        if not any(subject):
            raise InvalidArgumentError(
                "certificate parameters require at least one of common_name, organization, "
                "organization_unit, locality, state or country"
            )
        if not (self.certificate_authority or self.self_sign or self.is_ca):
            raise InvalidArgumentError(
                "certificate parameters require certificate_authority, self_sign or is_ca"
            )
        if self.duration is not None and self.duration <= 0:
            raise InvalidArgumentError(f"duration must be positive, got {self.duration}")


CredentialParameters = (
    PasswordParameters | UserParameters | SshParameters | RsaParameters | CertificateParameters
)
