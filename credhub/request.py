"""
Request envelopes for writing and generating credentials.

Requests are immutable. Every check runs when a request is constructed, so
a request that exists is a valid one. The builders collect the fields and
construct a fresh request on each ``build()``, which runs the checks again:

    request = (
        CredentialRequestBuilder()
        .name("/example/credential")
        .overwrite(True)
        .value(SshCredential("public-key", "private-key"))
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Self

from credhub.errors import InvalidArgumentError
from credhub.models import CredentialType, CredentialValue, Permission
from credhub.name import CredentialName, normalize
from credhub.parameters import CredentialParameters, UserParameters


def _check_envelope(request: CredentialRequest | ParametersRequest) -> None:
    object.__setattr__(request, "name", normalize(request.name))
    object.__setattr__(request, "overwrite", bool(request.overwrite))
    permissions = tuple(request.additional_permissions)
    for permission in permissions:
        permission.validate()
    object.__setattr__(request, "additional_permissions", permissions)


@dataclass(frozen=True)
class CredentialRequest:
    """A validated request to write a credential value."""

    name: CredentialName
    value: CredentialValue
    overwrite: bool = False
    additional_permissions: tuple[Permission, ...] = ()

    def __post_init__(self) -> None:
        _check_envelope(self)
        if self.value is None:
            raise InvalidArgumentError("credential value is required")
        self.value.validate()

    @property
    def credential_type(self) -> CredentialType:
        return self.value.credential_type

    @staticmethod
    def builder() -> CredentialRequestBuilder:
        return CredentialRequestBuilder()


@dataclass(frozen=True)
class ParametersRequest:
    """A validated request asking the service to generate a credential.

    ``username`` is only set for user credentials, where it is sent as the
    fixed part of the generated value.
    """

    name: CredentialName
    parameters: CredentialParameters
    overwrite: bool = False
    username: str | None = None
    additional_permissions: tuple[Permission, ...] = ()

    def __post_init__(self) -> None:
        _check_envelope(self)
        if self.parameters is None:
            raise InvalidArgumentError("generation parameters are required")
        self.parameters.validate()
        if self.username is not None and not isinstance(self.parameters, UserParameters):
            raise InvalidArgumentError(
                f"username only applies to user credentials, not {self.parameters.credential_type}"
            )
        if self.username == "":
            raise InvalidArgumentError("username must not be empty")

    @property
    def credential_type(self) -> CredentialType:
        return self.parameters.credential_type

    @staticmethod
    def builder() -> ParametersRequestBuilder:
        return ParametersRequestBuilder()


class _EnvelopeBuilder:
    """Shared name/overwrite/permission state for both builders."""

    def __init__(self) -> None:
        self._name: CredentialName | None = None
        self._overwrite = False
        self._permissions: list[Permission] = []

    def name(self, name: str | CredentialName) -> Self:
        self._name = normalize(name)
        return self

    def overwrite(self, overwrite: bool = True) -> Self:
        self._overwrite = bool(overwrite)
        return self

    def permission(self, permission: Permission) -> Self:
        self._permissions.append(permission)
        return self

    def permissions(self, permissions: Iterable[Permission]) -> Self:
        self._permissions.extend(permissions)
        return self

    def _require_name(self) -> CredentialName:
        if self._name is None:
            raise InvalidArgumentError("credential name is required")
        return self._name


class CredentialRequestBuilder(_EnvelopeBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._value: CredentialValue | None = None

    def value(self, value: CredentialValue) -> Self:
        self._value = value
        return self

    def build(self) -> CredentialRequest:
        name = self._require_name()
        if self._value is None:
            raise InvalidArgumentError("credential value is required")
        return CredentialRequest(
            name=name,
            value=self._value,
            overwrite=self._overwrite,
            additional_permissions=tuple(self._permissions),
        )


class ParametersRequestBuilder(_EnvelopeBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._parameters: CredentialParameters | None = None
        self._username: str | None = None

    def parameters(self, parameters: CredentialParameters) -> Self:
        self._parameters = parameters
        return self

    def username(self, username: str) -> Self:
        """Fix the username of a generated user credential."""
        self._username = username
        return self

    def build(self) -> ParametersRequest:
        name = self._require_name()
        parameters = self._parameters
        if parameters is None and self._username is not None:
            parameters = UserParameters()
        return ParametersRequest(
            name=name,
            parameters=parameters,
            overwrite=self._overwrite,
            username=self._username,
            additional_permissions=tuple(self._permissions),
        )
