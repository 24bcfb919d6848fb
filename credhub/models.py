"""
Credential value types.

One frozen dataclass per credential kind, each tagged with the CredentialType
it serializes under. Constructors accept anything; presence rules are checked
by ``validate()``, which runs when a request is constructed from the value.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any, ClassVar

from credhub.errors import InvalidArgumentError


class CredentialType(StrEnum):
    VALUE = "value"
    JSON = "json"
    PASSWORD = "password"
    USER = "user"
    SSH = "ssh"
    RSA = "rsa"
    CERTIFICATE = "certificate"


class Operation(StrEnum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    READ_ACL = "read_acl"
    WRITE_ACL = "write_acl"


class ActorType(StrEnum):
    APP = "mtls-app"
    USER = "uaa-user"
    OAUTH_CLIENT = "uaa-client"


class KeyLength(IntEnum):
    LENGTH_2048 = 2048
    LENGTH_3072 = 3072
    LENGTH_4096 = 4096


def _blank(value: Any) -> bool:
    return value is None or value == ""


# ─── Values ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ValueCredential:
    """An arbitrary string value."""

    credential_type: ClassVar[CredentialType] = CredentialType.VALUE

    value: str | None

    def validate(self) -> None:
        if _blank(self.value):
            raise InvalidArgumentError("value credential requires a non-empty value")


@dataclass(frozen=True)
class PasswordCredential:
    credential_type: ClassVar[CredentialType] = CredentialType.PASSWORD

    password: str | None

    def validate(self) -> None:
        if _blank(self.password):
            raise InvalidArgumentError("password credential requires a non-empty password")


@dataclass(frozen=True)
class JsonCredential:
    """A JSON object stored as-is."""

    credential_type: ClassVar[CredentialType] = CredentialType.JSON

    value: dict[str, Any] | None

    def __post_init__(self) -> None:
        if self.value is not None:
            object.__setattr__(self, "value", copy.deepcopy(self.value))

    def validate(self) -> None:
        if not self.value:
            raise InvalidArgumentError("json credential requires a non-empty object")


@dataclass(frozen=True)
class UserCredential:
    """Username/password pair. ``password_hash`` is only ever set by the service."""

    credential_type: ClassVar[CredentialType] = CredentialType.USER

    username: str | None = None
    password: str | None = None
    password_hash: str | None = None

    def validate(self) -> None:
        pass


@dataclass(frozen=True)
class _KeyPair:
    public_key: str | None = None
    private_key: str | None = None

    def validate(self) -> None:
        if _blank(self.public_key) and _blank(self.private_key):
            raise InvalidArgumentError(
                f"{self.credential_type} credential requires at least one of "  # type: ignore[attr-defined]
                "public_key/private_key"
            )


@dataclass(frozen=True)
class SshCredential(_KeyPair):
    """SSH keypair. ``public_key_fingerprint`` is only ever set by the service."""

    credential_type: ClassVar[CredentialType] = CredentialType.SSH

    public_key_fingerprint: str | None = None


@dataclass(frozen=True)
class RsaCredential(_KeyPair):
    credential_type: ClassVar[CredentialType] = CredentialType.RSA


@dataclass(frozen=True)
class CertificateCredential:
    """X.509 certificate, its CA and private key, plus service-side flags.

    Flags stay None unless set; None and False are different on the wire.
    """

    credential_type: ClassVar[CredentialType] = CredentialType.CERTIFICATE

    certificate: str | None = None
    certificate_authority: str | None = None
    private_key: str | None = None
    certificate_authority_name: str | None = None
    self_signed: bool | None = None
    generated: bool | None = None
    transitional: bool | None = None
    expiry_date: datetime | None = None

    def validate(self) -> None:
        pass


CredentialValue = (
    ValueCredential
    | JsonCredential
    | PasswordCredential
    | UserCredential
    | SshCredential
    | RsaCredential
    | CertificateCredential
)


# ─── Permissions ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Actor:
    """An identity that can be granted operations on a credential."""

    actor_type: ActorType
    identity: str

    @classmethod
    def app(cls, app_guid: str) -> Actor:
        return cls(ActorType.APP, app_guid)

    @classmethod
    def user(cls, user_id: str) -> Actor:
        return cls(ActorType.USER, user_id)

    @classmethod
    def client(cls, client_id: str) -> Actor:
        return cls(ActorType.OAUTH_CLIENT, client_id)

    @classmethod
    def parse(cls, raw: str) -> Actor:
        """Parse the wire form "<type>:<identity>"."""
        prefix, sep, identity = raw.partition(":")
        if not sep or not identity:
            raise InvalidArgumentError(f"actor {raw!r} is not of the form <type>:<identity>")
        try:
            actor_type = ActorType(prefix)
        except ValueError:
            raise InvalidArgumentError(f"unknown actor type {prefix!r}") from None
        return cls(actor_type, identity)

    def __str__(self) -> str:
        return f"{self.actor_type}:{self.identity}"


@dataclass(frozen=True)
class Permission:
    actor: Actor
    operations: tuple[Operation, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, actor: Actor, *operations: Operation | str) -> Permission:
        try:
            ops = tuple(Operation(op) for op in operations)
        except ValueError as e:
            raise InvalidArgumentError(f"unknown operation for {actor}: {e}") from None
        return cls(actor, ops)

    def validate(self) -> None:
        if not self.operations:
            raise InvalidArgumentError(f"permission for {self.actor} grants no operations")
